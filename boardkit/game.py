"""A game: the engine driven until it needs a player's choice."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from boardkit.engine import DataPhase, EngineContext
from boardkit.entities import DataEntity
from boardkit.interaction import OutputInteraction, SelectedInteraction
from boardkit.output import GameOutput


@dataclass
class DataGame:
    """Everything needed to set up a game."""

    entities: Mapping[str, DataEntity]
    phases: Sequence[DataPhase]
    first_phase: str
    players: Sequence[str] = field(default_factory=list)


class Game:
    """Runs a game, pausing whenever players must choose an interaction."""

    def __init__(
        self,
        data: DataGame,
        output_callback: Callable[[GameOutput], None],
        interaction_callback: Callable[[list[OutputInteraction]], None],
    ) -> None:
        self._context = EngineContext(
            data.entities,
            output_callback,
            data.phases,
            data.first_phase,
            interaction_callback,
            data.players,
        )
        self.started = False

    def start(self) -> None:
        """Run the game until it waits for an interaction."""
        if self.started:
            raise RuntimeError("engine already started")
        self.started = True
        self._game_loop()

    def select_interaction(self, selected_interactions: Sequence[SelectedInteraction]) -> None:
        """Hand the players' choices to the game and continue running it."""
        interactions = self._context.interaction_manager
        interactions.receive_selected_interactions(selected_interactions)
        if not interactions.send_output_interactions():
            self._game_loop()

    def _game_loop(self) -> None:
        while True:
            self._context.next()
            if self._context.interaction_manager.send_output_interactions():
                return