"""Instruction that sends a snapshot of the game."""

from __future__ import annotations

from boardkit.instruction import DataInstruction, ExecutionContext, Instruction


class InstructionSendOutput(Instruction):
    """Sends a snapshot of the game to the output callback."""

    def execute(self, context: ExecutionContext) -> None:
        context.performer.output.send_output()


class DataInstructionSendOutput(DataInstruction):
    """Describes sending a snapshot of the game."""

    def build(self) -> InstructionSendOutput:
        return InstructionSendOutput()