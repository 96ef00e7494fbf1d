"""Value resolvers: values computed from execution variables when needed."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from boardkit.entities import Entity, get_value
from boardkit.properties import PropertyIds, PropertyKind


class ValueResolver(ABC):
    """Produces a value from the current execution variables."""

    @abstractmethod
    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> Any:
        """Return the resolved value."""


class ResolveConstant(ValueResolver):
    """Always resolves to the same value."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"ResolveConstant({self.value!r})"


class ResolveFromVariable(ValueResolver):
    """Reads a named property from the execution variables."""

    def __init__(self, kind: PropertyKind, name: str) -> None:
        self.kind = kind
        self.name = name

    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> Any:
        if property_ids is None:
            raise RuntimeError("property ids not available")
        property_id = property_ids.typed(self.kind).get_id(self.name)
        return get_value(execution_variables, self.kind, property_id)

    def __repr__(self) -> str:
        return f"ResolveFromVariable({self.kind!r}, {self.name!r})"


class ResolveScalarToSlice(ValueResolver):
    """Wraps the value of another resolver in a one-element list."""

    def __init__(self, value: ValueResolver) -> None:
        self.value = value

    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> list[Any]:
        return [self.value.resolve(execution_variables, property_ids)]


class ResolveAnd(ValueResolver):
    """True when every resolver is true; stops at the first false one."""

    def __init__(self, *resolvers: ValueResolver) -> None:
        self.resolvers = resolvers

    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> bool:
        return all(r.resolve(execution_variables, property_ids) for r in self.resolvers)


class ResolveOr(ValueResolver):
    """True when any resolver is true; stops at the first true one."""

    def __init__(self, *resolvers: ValueResolver) -> None:
        self.resolvers = resolvers

    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> bool:
        return any(r.resolve(execution_variables, property_ids) for r in self.resolvers)


class ResolveEquals(ValueResolver):
    """True when every resolver yields a value equal to the first one."""

    def __init__(self, *resolvers: ValueResolver) -> None:
        self.resolvers = resolvers

    def resolve(self, execution_variables: Entity, property_ids: Optional[PropertyIds]) -> bool:
        values = (r.resolve(execution_variables, property_ids) for r in self.resolvers)
        first = next(values, None)
        return all(value == first for value in values)