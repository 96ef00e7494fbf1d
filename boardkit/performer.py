"""The operations instructions perform on the game, grouped by concern."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional, Protocol

from boardkit.entities import (
    DataEntity,
    DataId,
    DataModifier,
    Entity,
    EntityDataLibrary,
    EntityIds,
    EntityManager,
    Predicate,
    build_entity_modifier,
    get_value,
)
from boardkit.instruction import DataInstruction, TriggerManager
from boardkit.interaction import DataAvailableInteraction, InteractionManager
from boardkit.modifiers import DataModifierSetValue
from boardkit.output import OutputManager
from boardkit.phase import PhaseManager
from boardkit.properties import DataPropertiesModifier, PropertyIds, PropertyKind
from boardkit.resolvers import ResolveConstant


class _Resolver(Protocol):
    def resolve(self, execution_variables: Any, property_ids: Optional[PropertyIds]) -> Any: ...


class _InitializationContext(Protocol):
    entity_manager: EntityManager
    entity_ids: EntityIds
    property_ids: PropertyIds
    entity_data: EntityDataLibrary
    interaction_manager: InteractionManager
    trigger_manager: TriggerManager
    output_manager: OutputManager
    phase_manager: PhaseManager


class EntityPerformer:
    """Creates, finds and modifies entities."""

    def __init__(self) -> None:
        self.entity_manager: Optional[EntityManager] = None
        self.entity_ids: Optional[EntityIds] = None
        self.property_ids: Optional[PropertyIds] = None
        self.entity_data: Optional[EntityDataLibrary] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the entity managers and registries from the engine."""
        self.entity_manager = context.entity_manager
        self.entity_ids = context.entity_ids
        self.property_ids = context.property_ids
        self.entity_data = context.entity_data

    def _manager(self) -> EntityManager:
        if self.entity_manager is None:
            raise RuntimeError("manager entity is nil")
        return self.entity_manager

    def _ids(self) -> EntityIds:
        if self.entity_ids is None:
            raise RuntimeError("in Entity managerEntityId is nil")
        return self.entity_ids

    def get_id(self, execution_variables: Entity, data_id: DataId) -> int:
        """Resolve the id an entity description refers to."""
        return self._ids().get_id(execution_variables, self.property_ids, data_id)

    def filter_entities_into_variable(
        self,
        execution_variables: Entity,
        predicate: Predicate,
        name: str,
    ) -> None:
        """Store the ids of matching entities in an execution variable."""
        ids = self._manager().filtered(execution_variables, predicate)
        modifier = DataModifier(
            DataPropertiesModifier(
                array_entity_id_modifiers={name: DataModifierSetValue(ResolveConstant(ids))}
            )
        )
        self.add_modifier(execution_variables, [execution_variables.id], modifier)

    def get_data(self, name: str) -> DataEntity:
        """Return the entity description registered under ``name``."""
        if self.entity_data is None:
            raise RuntimeError("in Entity managerEntityData is nil")
        return self.entity_data.get(name)

    def create(self, execution_variables: Entity, data: DataEntity) -> int:
        """Create an entity and return its id."""
        return self._manager().new(execution_variables, self.property_ids, data).id

    def get(self, execution_variables: Entity, data_id: DataId) -> Entity:
        """Return the entity an id description refers to."""
        entity_id = self._ids().get_id(execution_variables, self.property_ids, data_id)
        return self._manager().find_by_id(entity_id)

    def get_by_id(self, entity_id: int) -> Entity:
        """Return the entity with this id."""
        return self._manager().find_by_id(entity_id)

    def add_modifier(
        self,
        execution_variables: Entity,
        targets: Sequence[int],
        data: DataModifier,
    ) -> None:
        """Build a modifier once and apply it to every target entity."""
        manager = self._manager()
        modifier = build_entity_modifier(execution_variables, self.property_ids, data)
        for entity_id in targets:
            manager.find_by_id(entity_id).add_modifier(modifier)

    def get_value(self, entity: Entity, kind: PropertyKind, name: str) -> Any:
        """Return the value of the named property of an entity."""
        if self.property_ids is None:
            raise RuntimeError("in Entity managerPropertyId is nil")
        property_id = self.property_ids.typed(kind).get_id(name)
        return get_value(entity, kind, property_id)


class InteractionPerformer:
    """Offers interactions to players and waits for their choices."""

    def __init__(self) -> None:
        self.interaction_manager: Optional[InteractionManager] = None
        self.trigger_manager: Optional[TriggerManager] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the interaction and trigger managers from the engine."""
        self.interaction_manager = context.interaction_manager
        self.trigger_manager = context.trigger_manager

    def _interactions(self) -> InteractionManager:
        if self.interaction_manager is None:
            raise RuntimeError("interaction manager is nil")
        return self.interaction_manager

    def wait_for_interaction(self) -> None:
        """Make the game wait for a player's choice."""
        self._interactions().wait_for_interaction()

    def add_available_interaction(
        self,
        execution_variables: Entity,
        available_interaction: DataAvailableInteraction,
        data_instruction: DataInstruction,
    ) -> None:
        """Offer an interaction that runs ``data_instruction`` when picked."""
        interactions = self._interactions()
        if self.trigger_manager is None:
            raise RuntimeError("trigger manager is nil")
        trigger_id = self.trigger_manager.add_instruction_to_trigger(data_instruction)
        interactions.add_available_interaction(execution_variables, available_interaction, trigger_id)

    def clear_available_interactions(self) -> None:
        """Withdraw every available interaction."""
        self._interactions().clear_available_interactions()


class OutputPerformer:
    """Sends snapshots of the game."""

    def __init__(self) -> None:
        self.output_manager: Optional[OutputManager] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the output manager from the engine."""
        self.output_manager = context.output_manager

    def send_output(self) -> None:
        """Send a snapshot of the game to the output callback."""
        if self.output_manager is None:
            raise RuntimeError("output does not have a managerOutput")
        self.output_manager.send_output()


class PhasePerformer:
    """Controls which phase comes next."""

    def __init__(self) -> None:
        self.phase_manager: Optional[PhaseManager] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the phase manager from the engine."""
        self.phase_manager = context.phase_manager

    def set_next_phase(self, name: str) -> None:
        """Choose the phase that follows the current one."""
        if self.phase_manager is None:
            raise RuntimeError("phase manager is nil")
        self.phase_manager.set_next_phase(name)


class ValueResolverPerformer:
    """Resolves values against the current execution variables."""

    def __init__(self) -> None:
        self.property_ids: Optional[PropertyIds] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the property ids from the engine."""
        self.property_ids = context.property_ids

    def resolve(self, execution_variables: Entity, resolver: _Resolver) -> Any:
        """Return the value the resolver produces."""
        return resolver.resolve(execution_variables, self.property_ids)


class Performer:
    """Everything an instruction can do to the game."""

    def __init__(self) -> None:
        self.entity = EntityPerformer()
        self.output = OutputPerformer()
        self.interaction = InteractionPerformer()
        self.value_resolver = ValueResolverPerformer()
        self.phase = PhasePerformer()

    def initialize(self, context: _InitializationContext) -> None:
        """Initialize every part with the engine context."""
        self.entity.initialize(context)
        self.output.initialize(context)
        self.interaction.initialize(context)
        self.value_resolver.initialize(context)
        self.phase.initialize(context)