"""Common property modifiers."""

from __future__ import annotations

from typing import Any, Protocol

from boardkit.properties import DataPropertyModifier, PropertyIds, PropertyModifier


class _Resolver(Protocol):
    def resolve(self, execution_variables: Any, property_ids: PropertyIds) -> Any: ...


class ModifierSetValue(PropertyModifier):
    """Replaces the previous value with a fixed one."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def modify(self, previous: Any) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"ModifierSetValue({self.value!r})"


class DataModifierSetValue(DataPropertyModifier):
    """Describes a set-value modifier whose value is resolved when built."""

    def __init__(self, value: _Resolver) -> None:
        self.value = value

    def build(self, execution_variables: Any, property_ids: PropertyIds) -> ModifierSetValue:
        return ModifierSetValue(self.value.resolve(execution_variables, property_ids))