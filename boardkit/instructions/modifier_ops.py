"""Instructions that add modifiers to entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from boardkit.entities import DataId, DataModifier, Entity
from boardkit.instruction import DataInstruction, ExecutionContext, Instruction
from boardkit.properties import PropertyIds


class _Resolver(Protocol):
    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> Any: ...


@dataclass
class InstructionAddEntityModifier(Instruction):
    """Adds a modifier to the entity an id description refers to."""

    target: DataId
    data_entity_modifier: DataModifier

    def execute(self, context: ExecutionContext) -> None:
        entity = context.performer.entity
        variables = context.execution_variables
        entity_id = entity.get_id(variables, self.target)
        entity.add_modifier(variables, [entity_id], self.data_entity_modifier)


@dataclass
class DataInstructionAddEntityModifier(DataInstruction):
    """Describes adding a modifier to one entity."""

    target: DataId
    data_entity_modifier: DataModifier

    def build(self) -> InstructionAddEntityModifier:
        return InstructionAddEntityModifier(self.target, self.data_entity_modifier)


@dataclass
class InstructionAddEntityModifierWithResolvedTarget(Instruction):
    """Adds a modifier to every entity whose id a resolver yields."""

    target: _Resolver
    data_entity_modifier: DataModifier

    def execute(self, context: ExecutionContext) -> None:
        variables = context.execution_variables
        targets = context.performer.value_resolver.resolve(variables, self.target)
        context.performer.entity.add_modifier(variables, targets, self.data_entity_modifier)


@dataclass
class DataInstructionAddEntityModifierWithResolvedTarget(DataInstruction):
    """Describes adding a modifier to resolved target entities."""

    target: _Resolver
    data_entity_modifier: DataModifier

    def build(self) -> InstructionAddEntityModifierWithResolvedTarget:
        return InstructionAddEntityModifierWithResolvedTarget(
            self.target, self.data_entity_modifier
        )