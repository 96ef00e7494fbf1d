"""Instructions that create entities and select them into variables."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from boardkit.entities import DataModifier, Predicate
from boardkit.instruction import DataInstruction, ExecutionContext, Instruction
from boardkit.modifiers import DataModifierSetValue
from boardkit.properties import DataPropertiesModifier
from boardkit.resolvers import ResolveConstant

logger = logging.getLogger(__name__)


@dataclass
class InstructionCreateEntity(Instruction):
    """Creates an entity from a named entity description."""

    name_data_entity: str

    def execute(self, context: ExecutionContext) -> None:
        entity = context.performer.entity
        data = entity.get_data(self.name_data_entity)
        entity_id = entity.create(context.execution_variables, data)
        logger.debug("created entity id=%d", entity_id)


@dataclass
class DataInstructionCreateEntity(DataInstruction):
    """Describes the creation of an entity."""

    name_data_entity: str

    def build(self) -> InstructionCreateEntity:
        return InstructionCreateEntity(self.name_data_entity)


@dataclass
class InstructionCreateEntityIntoVariable(Instruction):
    """Creates an entity and stores its id in an execution variable."""

    name_data_entity: str
    variable_property_name: str

    def execute(self, context: ExecutionContext) -> None:
        entity = context.performer.entity
        variables = context.execution_variables
        data = entity.get_data(self.name_data_entity)
        entity_id = entity.create(variables, data)
        logger.debug("created entity id=%d", entity_id)
        modifier = DataModifier(
            DataPropertiesModifier(
                entity_id_modifiers={
                    self.variable_property_name: DataModifierSetValue(ResolveConstant(entity_id))
                }
            )
        )
        entity.add_modifier(variables, [variables.id], modifier)


@dataclass
class DataInstructionCreateEntityIntoVariable(DataInstruction):
    """Describes the creation of an entity whose id goes into a variable."""

    name_data_entity: str
    variable_property_name: str

    def build(self) -> InstructionCreateEntityIntoVariable:
        return InstructionCreateEntityIntoVariable(
            self.name_data_entity, self.variable_property_name
        )


@dataclass
class InstructionFilterEntities(Instruction):
    """Stores the ids of the entities matching a predicate in a variable."""

    predicate: Predicate
    name: str

    def execute(self, context: ExecutionContext) -> None:
        context.performer.entity.filter_entities_into_variable(
            context.execution_variables, self.predicate, self.name
        )


@dataclass
class DataInstructionFilterEntities(DataInstruction):
    """Describes a filter of entities into a variable."""

    predicate: Predicate
    name: str

    def build(self) -> InstructionFilterEntities:
        return InstructionFilterEntities(self.predicate, self.name)