"""Phases, turns and stages, and the manager that steps through them."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

PlayerId = str


class NoNextPhaseError(Exception):
    """Raised when the current phase is over and no next phase was set."""

    def __init__(self, message: str = "no next phase was set") -> None:
        super().__init__(message)


@dataclass
class Stage:
    """A step of a turn; running it calls its callback."""

    callback: Callable[[], None]


@dataclass
class Turn:
    """A sequence of stages played by the active players."""

    name: str = ""
    active_players: list[PlayerId] = field(default_factory=list)
    stages: list[Stage] = field(default_factory=list)


@dataclass
class Phase:
    """A named sequence of turns."""

    name: str
    turns: list[Turn] = field(default_factory=list)


class PhaseManager:
    """Steps through the stages, turns and phases of a game."""

    def __init__(self) -> None:
        self.phases: dict[str, Phase] = {}
        self.current_phase = ""
        self.turn_index = 0
        self.stage_index = 0
        self._next_phase = ""
        self._next_phase_set = False

    def load_phases(self, phases: Mapping[str, Phase], first_phase: str) -> None:
        """Load the phase library and select the phase the game starts in."""
        self.phases = dict(phases)
        self.current_phase = first_phase
        self._next_phase = first_phase

    def next(self) -> None:
        """Run the next stage, moving on to the next turn or phase when needed."""
        if not self._advance_stage():
            return
        if not self._advance_turn():
            return
        self._advance_phase()

    def set_next_phase(self, name: str) -> None:
        """Choose the phase that follows the current one."""
        self._next_phase_set = True
        if name not in self.phases:
            raise LookupError(f"invalid phase Name: {name}")
        self._next_phase = name

    def active_players(self) -> list[PlayerId]:
        """Return the players active in the current turn."""
        return self._current_turn().active_players

    def _current(self) -> Phase:
        try:
            return self.phases[self.current_phase]
        except KeyError:
            raise LookupError(
                f"current phase not on the phases library phaseName={self.current_phase}"
            ) from None

    def _current_turn(self) -> Turn:
        turns = self._current().turns
        if self.turn_index >= len(turns):
            raise IndexError(
                f"invalid turn index= {self.turn_index} for phase with turn length of={len(turns)}"
            )
        return turns[self.turn_index]

    def _advance_phase(self) -> None:
        if not self._next_phase_set:
            raise NoNextPhaseError()
        self._next_phase_set = False
        self.current_phase = self._next_phase
        self.turn_index = 0
        self.stage_index = 0
        try:
            self._run_current_stage()
        finally:
            self.stage_index += 1

    def _advance_turn(self) -> bool:
        """Return True when the phase has no turns left."""
        self.turn_index += 1
        if self.turn_index >= len(self._current().turns):
            return True
        self.stage_index = 0
        try:
            self._run_current_stage()
        finally:
            self.stage_index += 1
        return False

    def _advance_stage(self) -> bool:
        """Return True when the turn has no stages left."""
        if self.stage_index >= len(self._current_turn().stages):
            return True
        self._run_current_stage()
        self.stage_index += 1
        return False

    def _run_current_stage(self) -> None:
        stages = self._current_turn().stages
        if self.stage_index >= len(stages):
            raise IndexError(
                f"invalid stage index= {self.stage_index} for turn with stage length of={len(stages)}"
            )
        stages[self.stage_index].callback()