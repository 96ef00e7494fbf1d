"""Typed entity properties, their modifiers and the registry of property ids."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


class PropertyKind(enum.Enum):
    """The value types a property can hold."""

    INT = "int"
    STRING = "string"
    BOOL = "bool"
    ENTITY_ID = "entity_id"
    ARRAY_ENTITY_ID = "array_entity_id"

    def zero(self) -> Any:
        """Return the value a property of this kind starts with."""
        if self is PropertyKind.INT or self is PropertyKind.ENTITY_ID:
            return 0
        if self is PropertyKind.STRING:
            return ""
        if self is PropertyKind.BOOL:
            return False
        return []


# Attribute suffix used by the data and output containers for each kind.
_FIELD = {
    PropertyKind.INT: "int",
    PropertyKind.STRING: "string",
    PropertyKind.BOOL: "bool",
    PropertyKind.ENTITY_ID: "entity_id",
    PropertyKind.ARRAY_ENTITY_ID: "array_entity_id",
}

# Order in which modifiers are applied to the typed property sets.
_MODIFIER_ORDER = (
    PropertyKind.INT,
    PropertyKind.BOOL,
    PropertyKind.STRING,
    PropertyKind.ENTITY_ID,
    PropertyKind.ARRAY_ENTITY_ID,
)


def _check_kind(kind: PropertyKind) -> PropertyKind:
    if not isinstance(kind, PropertyKind):
        raise TypeError(f"unexpected property kind {kind!r}")
    return kind


class PropertyNotFoundError(LookupError):
    """Raised when an entity does not carry the requested property."""

    def __init__(self, property_id: int) -> None:
        super().__init__(f"error property not found in entity propertyId:{property_id}")
        self.property_id = property_id


class PropertyModifier(ABC):
    """Transforms the value of a property."""

    @abstractmethod
    def modify(self, previous: Any) -> Any:
        """Return the new value computed from the previous one."""


class DataPropertyModifier(ABC):
    """Description of a modifier, turned into a live one at execution time."""

    @abstractmethod
    def build(self, execution_variables: Any, property_ids: PropertyIds) -> PropertyModifier:
        """Create the modifier for the given execution variables."""


@dataclass
class Property:
    """A single property whose value is its initial value run through its modifiers."""

    id: int
    kind: PropertyKind
    initial_value: Any = field(init=False)
    value: Any = field(init=False)
    modifiers: list[PropertyModifier] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.initial_value = self.kind.zero()
        self.value = self.initial_value

    def add_modifier(self, modifier: PropertyModifier) -> None:
        """Append a modifier and recompute the cached value."""
        self.modifiers.append(modifier)
        self._recalculate()

    def _recalculate(self) -> None:
        self.value = self.initial_value
        for modifier in self.modifiers:
            self.value = modifier.modify(self.value)


@dataclass
class TypedProperties:
    """All properties of one kind held by an entity, keyed by property id."""

    kind: PropertyKind
    properties: dict[int, Property] = field(default_factory=dict)

    def add_property(self, property_id: int) -> Property:
        """Create a property with its zero value under the given id."""
        prop = Property(property_id, self.kind)
        self.properties[property_id] = prop
        return prop

    def add_modifiers(self, modifiers: Mapping[int, PropertyModifier]) -> None:
        """Attach modifiers, creating any property that does not exist yet."""
        for property_id, modifier in modifiers.items():
            prop = self.properties.get(property_id)
            if prop is None:
                prop = self.add_property(property_id)
            prop.add_modifier(modifier)

    def get_property(self, property_id: int) -> Property:
        """Return the property with this id or raise PropertyNotFoundError."""
        try:
            return self.properties[property_id]
        except KeyError:
            raise PropertyNotFoundError(property_id) from None

    def output(self) -> dict[int, Any]:
        """Return the current value of every property."""
        return {property_id: prop.value for property_id, prop in self.properties.items()}


@dataclass
class DataProperties:
    """Names of the properties an entity is created with, grouped by kind."""

    bool_properties: Sequence[str] = ()
    string_properties: Sequence[str] = ()
    entity_id_properties: Sequence[str] = ()
    int_properties: Sequence[str] = ()
    array_entity_id_properties: Sequence[str] = ()


@dataclass
class OutputProperties:
    """Snapshot of an entity's property values, grouped by kind."""

    int_properties: dict[int, Any] = field(default_factory=dict)
    string_properties: dict[int, Any] = field(default_factory=dict)
    bool_properties: dict[int, Any] = field(default_factory=dict)
    entity_id_properties: dict[int, Any] = field(default_factory=dict)
    array_entity_id_properties: dict[int, Any] = field(default_factory=dict)


@dataclass
class DataPropertiesModifier:
    """Modifier descriptions keyed by property name, grouped by kind."""

    int_modifiers: Mapping[str, DataPropertyModifier] = field(default_factory=dict)
    string_modifiers: Mapping[str, DataPropertyModifier] = field(default_factory=dict)
    bool_modifiers: Mapping[str, DataPropertyModifier] = field(default_factory=dict)
    entity_id_modifiers: Mapping[str, DataPropertyModifier] = field(default_factory=dict)
    array_entity_id_modifiers: Mapping[str, DataPropertyModifier] = field(default_factory=dict)


@dataclass
class PropertiesModifier:
    """Live modifiers keyed by property id, grouped by kind."""

    modifiers: dict[PropertyKind, dict[int, PropertyModifier]] = field(
        default_factory=lambda: {kind: {} for kind in PropertyKind}
    )


class Properties:
    """Every typed property set held by an entity."""

    def __init__(self) -> None:
        self._typed = {kind: TypedProperties(kind) for kind in PropertyKind}

    def typed(self, kind: PropertyKind) -> TypedProperties:
        """Return the property set of the given kind."""
        return self._typed[_check_kind(kind)]

    def add_modifier(self, modifier: PropertiesModifier) -> None:
        """Apply a set of modifiers to the matching typed properties."""
        for kind in _MODIFIER_ORDER:
            self._typed[kind].add_modifiers(modifier.modifiers.get(kind, {}))

    def output(self) -> OutputProperties:
        """Return a snapshot of all property values."""
        return OutputProperties(
            **{f"{_FIELD[kind]}_properties": self._typed[kind].output() for kind in PropertyKind}
        )


def build_properties(property_ids: PropertyIds, data: DataProperties) -> Properties:
    """Create the properties named in ``data``, resolving their ids."""
    props = Properties()
    for kind in (
        PropertyKind.INT,
        PropertyKind.STRING,
        PropertyKind.BOOL,
        PropertyKind.ENTITY_ID,
        PropertyKind.ARRAY_ENTITY_ID,
    ):
        ids = property_ids.typed(kind)
        typed = props.typed(kind)
        for name in getattr(data, f"{_FIELD[kind]}_properties"):
            typed.add_property(ids.get_id(name))
    return props


def build_properties_modifier(
    execution_variables: Any,
    property_ids: PropertyIds,
    data: DataPropertiesModifier,
) -> PropertiesModifier:
    """Build live modifiers from their descriptions, resolving property ids."""
    result = PropertiesModifier()
    for kind in (
        PropertyKind.INT,
        PropertyKind.STRING,
        PropertyKind.BOOL,
        PropertyKind.ENTITY_ID,
        PropertyKind.ARRAY_ENTITY_ID,
    ):
        built = result.modifiers[kind]
        ids = property_ids.typed(kind)
        for name, data_modifier in getattr(data, f"{_FIELD[kind]}_modifiers").items():
            modifier = data_modifier.build(execution_variables, property_ids)
            built[ids.get_id(name)] = modifier
    return result


@dataclass
class TypedPropertyIds:
    """Hands out property ids for one kind, stable for each non-empty name."""

    kind: PropertyKind
    counter: int = 0
    id_by_name: dict[str, int] = field(default_factory=dict)

    def get_id(self, name: str) -> int:
        """Return the id for ``name``; an empty name always gets a fresh id."""
        if name == "":
            self.counter += 1
            return self.counter
        existing = self.id_by_name.get(name)
        if existing is not None:
            return existing
        self.counter += 1
        self.id_by_name[name] = self.counter
        return self.counter


@dataclass
class OutputPropertyIds:
    """Snapshot of the name to id mapping of every kind."""

    string_ids: dict[str, int] = field(default_factory=dict)
    int_ids: dict[str, int] = field(default_factory=dict)
    bool_ids: dict[str, int] = field(default_factory=dict)
    entity_id_ids: dict[str, int] = field(default_factory=dict)
    array_entity_id_ids: dict[str, int] = field(default_factory=dict)


class PropertyIds:
    """Registry of property ids for all kinds."""

    def __init__(self) -> None:
        self._typed = {kind: TypedPropertyIds(kind) for kind in PropertyKind}

    def typed(self, kind: PropertyKind) -> TypedPropertyIds:
        """Return the id registry of the given kind."""
        return self._typed[_check_kind(kind)]

    def output(self) -> OutputPropertyIds:
        """Return a snapshot of the name to id mappings."""
        return OutputPropertyIds(
            **{f"{_FIELD[kind]}_ids": dict(self._typed[kind].id_by_name) for kind in PropertyKind}
        )