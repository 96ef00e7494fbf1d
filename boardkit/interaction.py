"""Interactions offered to players and the manager that validates their choices."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from boardkit.entities import Entity
from boardkit.properties import PropertyIds


class _Resolver(Protocol):
    def resolve(self, execution_variables: Any, property_ids: Optional[PropertyIds]) -> Any: ...


class InstructionTrigger(ABC):
    """Runs a registered instruction when a player picks an interaction."""

    @abstractmethod
    def trigger(self, id_to_trigger: int, selected_entities: Sequence[int]) -> None:
        """Run the instruction registered under ``id_to_trigger``."""


class _InitializationContext(Protocol):
    instruction_trigger: InstructionTrigger
    property_ids: PropertyIds


@dataclass
class DataAvailableInteraction:
    """Description of an interaction; min_amount is inclusive, max_amount exclusive."""

    player_id: str
    available_entities: _Resolver
    min_amount: int
    max_amount: int


@dataclass
class AvailableInteraction:
    """An interaction currently offered to a player."""

    id: int
    player_id: str
    available_entities: list[int]
    min_amount: int
    max_amount: int
    instruction_id_to_trigger: int


def build_available_interaction(
    execution_variables: Entity,
    property_ids: Optional[PropertyIds],
    interaction_id: int,
    instruction_id_to_trigger: int,
    data: DataAvailableInteraction,
) -> AvailableInteraction:
    """Resolve the selectable entities and create the available interaction."""
    entities = data.available_entities.resolve(execution_variables, property_ids)
    return AvailableInteraction(
        id=interaction_id,
        player_id=data.player_id,
        available_entities=list(entities),
        min_amount=data.min_amount,
        max_amount=data.max_amount,
        instruction_id_to_trigger=instruction_id_to_trigger,
    )


@dataclass
class OutputInteraction:
    """An available interaction as shown to the outside world."""

    id: int
    player_id: str
    available_entities: list[int]
    min_amount: int
    max_amount: int


@dataclass
class SelectedInteraction:
    """The interaction a player chose and the entities they picked."""

    id: int
    player_id: str
    selected_entities: list[int] = field(default_factory=list)


Callback = Callable[[list[OutputInteraction]], None]


def validate_interaction(selected: SelectedInteraction, available: AvailableInteraction) -> None:
    """Raise ValueError unless the selection satisfies the available interaction."""
    if selected.id != available.id:
        raise ValueError(
            f"interaction id {selected.id} is diferent from avaialable {available.id}"
        )
    count = len(selected.selected_entities)
    if count < available.min_amount:
        raise ValueError(f"minimum amount of selectedEntities is {available.min_amount}")
    if count >= available.max_amount:
        raise ValueError(f"maximum amount of selectedEntities is {available.max_amount}")
    allowed = set(available.available_entities)
    for entity_id in selected.selected_entities:
        if entity_id not in allowed:
            raise ValueError(f"entity.Id {entity_id} was not found in available entities")


class InteractionManager:
    """Keeps the available interactions and handles the players' choices."""

    def __init__(self, callback: Callback) -> None:
        self.callback = callback
        self.available_interactions: list[AvailableInteraction] = []
        self.waiting_for_interaction = False
        self._counter = 0
        self._trigger: Optional[InstructionTrigger] = None
        self._property_ids: Optional[PropertyIds] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the instruction trigger and property ids from the engine."""
        self._trigger = context.instruction_trigger
        self._property_ids = context.property_ids

    def add_available_interaction(
        self,
        execution_variables: Entity,
        data: DataAvailableInteraction,
        id_to_trigger: int,
    ) -> AvailableInteraction:
        """Offer a new interaction, resolving its selectable entities now."""
        self._counter += 1
        interaction = build_available_interaction(
            execution_variables, self._property_ids, self._counter, id_to_trigger, data
        )
        self.available_interactions.append(interaction)
        return interaction

    def clear_available_interactions(self) -> None:
        """Withdraw every available interaction."""
        self.available_interactions = []

    def send_output_interactions(self) -> bool:
        """Send the available interactions if waiting; return whether the game now waits."""
        if not self.waiting_for_interaction or not self.available_interactions:
            return False
        self.callback(
            [
                OutputInteraction(a.id, a.player_id, a.available_entities, a.min_amount, a.max_amount)
                for a in self.available_interactions
            ]
        )
        return True

    def receive_selected_interactions(self, interactions: Sequence[SelectedInteraction]) -> None:
        """Validate the players' choices and trigger their instructions."""
        if not self.waiting_for_interaction:
            raise RuntimeError("manager_interaction not waiting for interaction")
        self.waiting_for_interaction = False
        targets = [
            self._find_valid(selected).instruction_id_to_trigger for selected in interactions
        ]
        if targets and self._trigger is None:
            raise RuntimeError("interaction manager not initialized")
        for instruction_id, selected in zip(targets, interactions):
            self._trigger.trigger(instruction_id, selected.selected_entities)

    def wait_for_interaction(self) -> None:
        """Mark the game as waiting for a player's choice."""
        if self.waiting_for_interaction:
            raise RuntimeError("manager_interaction was already waiting for interaction")
        self.waiting_for_interaction = True

    def _find_valid(self, selected: SelectedInteraction) -> AvailableInteraction:
        for available in self.available_interactions:
            if available.id == selected.id:
                validate_interaction(selected, available)
                return available
        raise LookupError(f"available interaction id {selected.id} not found")