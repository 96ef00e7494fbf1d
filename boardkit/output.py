"""Builds snapshots of the game state and hands them to a callback."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional, Protocol

from boardkit.entities import EntityManager, OutputEntity
from boardkit.properties import OutputPropertyIds, PropertyIds


class _ActivePlayerProvider(Protocol):
    def active_players(self) -> list[str]: ...


class _InitializationContext(Protocol):
    entity_manager: EntityManager
    property_ids: PropertyIds
    active_player_provider: _ActivePlayerProvider


@dataclass
class GameOutput:
    """Snapshot of the game sent to the outside world."""

    entities: list[OutputEntity]
    property_ids: OutputPropertyIds
    current_active_players: list[str]


Callback = Callable[[GameOutput], None]


class OutputManager:
    """Collects the game state and sends it to the output callback."""

    def __init__(self, callback: Callback) -> None:
        self.callback = callback
        self.entity_manager: Optional[EntityManager] = None
        self.property_ids: Optional[PropertyIds] = None
        self.active_player_provider: Optional[_ActivePlayerProvider] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the entity manager, property ids and active players from the engine."""
        self.entity_manager = context.entity_manager
        self.property_ids = context.property_ids
        if self.entity_manager is None:
            raise ValueError("managerEntity is nil")
        self.active_player_provider = context.active_player_provider

    def send_output(self) -> None:
        """Build a snapshot of the game and pass it to the callback."""
        if (
            self.entity_manager is None
            or self.property_ids is None
            or self.active_player_provider is None
        ):
            raise RuntimeError("output manager not initialized")
        snapshot = GameOutput(
            entities=self.entity_manager.output(),
            property_ids=self.property_ids.output(),
            current_active_players=self.active_player_provider.active_players(),
        )
        self.callback(snapshot)