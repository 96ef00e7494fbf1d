"""Control-flow instructions: sequences and conditionals."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from boardkit.entities import Entity
from boardkit.instruction import DataInstruction, ExecutionContext, Instruction
from boardkit.properties import PropertyIds


class _Resolver(Protocol):
    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> Any: ...


@dataclass
class InstructionArray(Instruction):
    """Runs its instructions in order, stopping at the first failure."""

    instructions: Sequence[Instruction]

    def execute(self, context: ExecutionContext) -> None:
        for instruction in self.instructions:
            instruction.execute(context)


class DataInstructionArray(DataInstruction):
    """Describes a sequence of instructions."""

    def __init__(self, *data_instructions: DataInstruction) -> None:
        self.data_instructions = data_instructions

    def build(self) -> InstructionArray:
        return InstructionArray([data.build() for data in self.data_instructions])

    def __repr__(self) -> str:
        return f"DataInstructionArray{self.data_instructions!r}"


@dataclass
class InstructionIf(Instruction):
    """Resolves a condition and runs one of two instructions."""

    condition: _Resolver
    when_true: DataInstruction
    when_false: DataInstruction

    def execute(self, context: ExecutionContext) -> None:
        result = context.performer.value_resolver.resolve(
            context.execution_variables, self.condition
        )
        chosen = self.when_true if result else self.when_false
        chosen.build().execute(context)


@dataclass
class DataInstructionIf(DataInstruction):
    """Describes a conditional instruction."""

    condition: _Resolver
    when_true: DataInstruction
    when_false: DataInstruction

    def build(self) -> InstructionIf:
        return InstructionIf(self.condition, self.when_true, self.when_false)