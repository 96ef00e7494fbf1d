"""Entities, their ids, their data descriptions and the entity manager."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from boardkit.properties import (
    DataProperties,
    DataPropertiesModifier,
    OutputProperties,
    Properties,
    PropertiesModifier,
    PropertyIds,
    PropertyKind,
    build_properties,
    build_properties_modifier,
)


class _Resolver(Protocol):
    def resolve(self, execution_variables: Any, property_ids: Optional[PropertyIds]) -> Any: ...


class _InitializationContext(Protocol):
    entity_ids: EntityIds
    property_ids: PropertyIds


@dataclass
class DataId:
    """Describes how the name, and so the id, of an entity is resolved."""

    resolver_name: _Resolver


@dataclass
class DataEntity:
    """Everything needed to create an entity."""

    id: DataId
    data_properties: DataProperties = field(default_factory=DataProperties)


@dataclass
class DataModifier:
    """Description of a modifier applied to a whole entity."""

    data_properties_modifier: DataPropertiesModifier = field(default_factory=DataPropertiesModifier)


@dataclass
class EntityModifier:
    """Live modifiers ready to be applied to an entity."""

    properties_modifier: PropertiesModifier


def build_entity_modifier(
    execution_variables: Entity,
    property_ids: PropertyIds,
    data: DataModifier,
) -> EntityModifier:
    """Build a live entity modifier from its description."""
    return EntityModifier(
        build_properties_modifier(execution_variables, property_ids, data.data_properties_modifier)
    )


@dataclass
class OutputEntity:
    """Snapshot of an entity sent to the outside world."""

    id: int
    name: str
    properties: OutputProperties


@dataclass(eq=False)
class Entity:
    """A game object carrying typed properties."""

    id: int
    name: str = ""
    properties: Properties = field(default_factory=Properties)
    is_execution_variable: bool = False

    def add_modifier(self, modifier: EntityModifier) -> None:
        """Apply a modifier to this entity's properties."""
        self.properties.add_modifier(modifier.properties_modifier)

    def output(self) -> OutputEntity:
        """Return a snapshot of this entity."""
        return OutputEntity(self.id, self.name, self.properties.output())


Predicate = Callable[[Entity, Optional[PropertyIds], Entity], bool]


def get_value(entity: Entity, kind: PropertyKind, property_id: int) -> Any:
    """Return the current value of a property, raising PropertyNotFoundError if absent."""
    return entity.properties.typed(kind).get_property(property_id).value


def filter_entities(
    execution_variables: Entity,
    property_ids: Optional[PropertyIds],
    entities: Iterable[Entity],
    predicate: Predicate,
) -> list[Entity]:
    """Return the entities for which the predicate holds, in order."""
    return [
        entity
        for entity in entities
        if predicate(execution_variables, property_ids, entity)
    ]


class EntityDataLibrary:
    """Named entity descriptions available to the engine."""

    def __init__(self, data: Optional[Mapping[str, DataEntity]] = None) -> None:
        self._data = dict(data or {})

    def get(self, name: str) -> DataEntity:
        """Return the description registered under ``name``."""
        try:
            return self._data[name]
        except KeyError:
            raise LookupError(f"dataEntity not found name={name}") from None


@dataclass
class EntityIds:
    """Hands out entity ids, stable for each non-empty name."""

    counter: int = 0
    id_by_name: dict[str, int] = field(default_factory=dict)

    def get_id(
        self,
        execution_variables: Entity,
        property_ids: Optional[PropertyIds],
        data_id: DataId,
    ) -> int:
        """Resolve the entity name and return its id; an empty name gets a fresh id."""
        name = data_id.resolver_name.resolve(execution_variables, property_ids)
        if name == "":
            return self.next_id()
        existing = self.id_by_name.get(name)
        if existing is not None:
            return existing
        new_id = self.next_id()
        self.id_by_name[name] = new_id
        return new_id

    def next_id(self) -> int:
        """Return a fresh id."""
        self.counter += 1
        return self.counter


class EntityManager:
    """Owns every entity created during a game."""

    def __init__(self) -> None:
        self._by_id: dict[int, Entity] = {}
        self._all: list[Entity] = []
        self.entity_ids: Optional[EntityIds] = None
        self.property_ids: Optional[PropertyIds] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the id registries from the engine context."""
        self.entity_ids = context.entity_ids
        self.property_ids = context.property_ids

    def _register(self, entity: Entity) -> Entity:
        if entity.id in self._by_id:
            raise ValueError(f"Entity with id={entity.id} already exists")
        self._by_id[entity.id] = entity
        self._all.append(entity)
        return entity

    def new(
        self,
        execution_variables: Entity,
        property_ids: PropertyIds,
        data: DataEntity,
    ) -> Entity:
        """Create and register an entity from its description."""
        if self.entity_ids is None:
            raise RuntimeError("entity ids not initialized")
        name = data.id.resolver_name.resolve(execution_variables, property_ids)
        entity_id = self.entity_ids.get_id(execution_variables, property_ids, data.id)
        properties = build_properties(property_ids, data.data_properties)
        return self._register(Entity(entity_id, name, properties))

    def new_execution_variable(self, data: DataEntity) -> Entity:
        """Create and register an entity that holds execution variables."""
        if self.entity_ids is None:
            raise RuntimeError("entity ids not initialized")
        entity_id = self.entity_ids.next_id()
        properties = build_properties(self.property_ids, data.data_properties)
        return self._register(Entity(entity_id, properties=properties, is_execution_variable=True))

    def find_by_id(self, entity_id: int) -> Entity:
        """Return the entity with this id."""
        try:
            return self._by_id[entity_id]
        except KeyError:
            raise LookupError(f"Entity with id={entity_id} not found") from None

    def output(self) -> list[OutputEntity]:
        """Return snapshots of every entity except execution variables, in creation order."""
        return [entity.output() for entity in self._all if not entity.is_execution_variable]

    def output_amount(self) -> int:
        """Return how many entities appear in the output."""
        variables = sum(1 for entity in self._all if entity.is_execution_variable)
        return len(self._by_id) - variables

    def filtered(self, execution_variables: Entity, predicate: Predicate) -> list[int]:
        """Return the ids of the entities for which the predicate holds."""
        return [
            entity.id
            for entity in filter_entities(execution_variables, self.property_ids, self._all, predicate)
        ]