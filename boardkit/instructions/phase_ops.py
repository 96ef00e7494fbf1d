"""Instruction that chooses the next phase."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from boardkit.entities import Entity
from boardkit.instruction import DataInstruction, ExecutionContext, Instruction
from boardkit.properties import PropertyIds


class _Resolver(Protocol):
    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> Any: ...


@dataclass
class InstructionSetNextPhase(Instruction):
    """Resolves a phase name and makes it the next phase."""

    phase_name: _Resolver

    def execute(self, context: ExecutionContext) -> None:
        name = context.performer.value_resolver.resolve(
            context.execution_variables, self.phase_name
        )
        context.performer.phase.set_next_phase(name)


@dataclass
class DataInstructionSetNextPhase(DataInstruction):
    """Describes choosing the next phase."""

    phase_name: _Resolver

    def build(self) -> InstructionSetNextPhase:
        return InstructionSetNextPhase(self.phase_name)