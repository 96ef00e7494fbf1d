"""Instructions that offer interactions to players and wait for their choices."""

from __future__ import annotations

from dataclasses import dataclass

from boardkit.instruction import DataInstruction, ExecutionContext, Instruction
from boardkit.interaction import DataAvailableInteraction


@dataclass
class AddAvailableInteraction(Instruction):
    """Offers an interaction that runs an instruction when a player picks it."""

    available_interaction: DataAvailableInteraction
    data_instruction: DataInstruction

    def execute(self, context: ExecutionContext) -> None:
        context.performer.interaction.add_available_interaction(
            context.execution_variables,
            self.available_interaction,
            self.data_instruction,
        )


@dataclass
class DataAddAvailableInteraction(DataInstruction):
    """Describes offering an interaction to a player."""

    available_interaction: DataAvailableInteraction
    data_instruction: DataInstruction

    def build(self) -> AddAvailableInteraction:
        return AddAvailableInteraction(self.available_interaction, self.data_instruction)


class ClearAvailableInteraction(Instruction):
    """Withdraws every available interaction."""

    def execute(self, context: ExecutionContext) -> None:
        context.performer.interaction.clear_available_interactions()


class DataClearAvailableInteraction(DataInstruction):
    """Describes withdrawing every available interaction."""

    def build(self) -> ClearAvailableInteraction:
        return ClearAvailableInteraction()


class WaitForInteraction(Instruction):
    """Makes the game wait for a player's choice."""

    def execute(self, context: ExecutionContext) -> None:
        context.performer.interaction.wait_for_interaction()


class DataWaitForInteraction(DataInstruction):
    """Describes waiting for a player's choice."""

    def build(self) -> WaitForInteraction:
        return WaitForInteraction()