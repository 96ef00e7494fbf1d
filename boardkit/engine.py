"""The engine context that wires every manager together."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Union

from boardkit.entities import DataEntity, EntityDataLibrary, EntityIds, EntityManager
from boardkit.instruction import DataInstruction, InstructionManager, TriggerManager
from boardkit.interaction import InteractionManager, OutputInteraction
from boardkit.output import GameOutput, OutputManager
from boardkit.performer import Performer
from boardkit.phase import Phase, PhaseManager, Stage, Turn
from boardkit.properties import PropertyIds


@dataclass
class DataStage:
    """Description of a stage: the instruction it runs."""

    instructions: DataInstruction


@dataclass
class DataTurn:
    """Description of a turn."""

    name: str = ""
    active_players: list[str] = field(default_factory=list)
    stages: list[DataStage] = field(default_factory=list)


@dataclass
class DataPhase:
    """Description of a phase."""

    name: str
    turns: list[DataTurn] = field(default_factory=list)


@dataclass
class PlayerManager:
    """The players taking part in the game."""

    players: list[str] = field(default_factory=list)


class EngineContext:
    """Creates and connects every manager of a running game."""

    def __init__(
        self,
        entity_data: Union[EntityDataLibrary, Mapping[str, DataEntity]],
        output_callback: Callable[[GameOutput], None],
        phases: Iterable[DataPhase],
        first_phase: str,
        interaction_callback: Callable[[list[OutputInteraction]], None],
        players: Sequence[str],
    ) -> None:
        self.performer = Performer()
        self.instruction_manager = InstructionManager()
        self.trigger_manager = TriggerManager()
        self.entity_manager = EntityManager()
        self.entity_data = (
            entity_data
            if isinstance(entity_data, EntityDataLibrary)
            else EntityDataLibrary(entity_data)
        )
        self.entity_ids = EntityIds()
        self.property_ids = PropertyIds()
        self.output_manager = OutputManager(output_callback)
        self.phase_manager = PhaseManager()
        self.interaction_manager = InteractionManager(interaction_callback)
        self.player_manager = PlayerManager(list(players))

        self._initialize()
        self._load_phases(phases, first_phase)

    @property
    def instruction_trigger(self) -> TriggerManager:
        """The object that runs instructions when interactions are picked."""
        return self.trigger_manager

    @property
    def active_player_provider(self) -> PhaseManager:
        """The object that knows which players are active."""
        return self.phase_manager

    def _initialize(self) -> None:
        self.instruction_manager.initialize(self)
        self.trigger_manager.initialize(self)
        self.performer.initialize(self)
        self.entity_manager.initialize(self)
        self.output_manager.initialize(self)
        self.interaction_manager.initialize(self)

    def _load_phases(self, phases: Iterable[DataPhase], first_phase: str) -> None:
        library = {
            data_phase.name: Phase(
                data_phase.name,
                [
                    Turn(
                        turn.name,
                        turn.active_players,
                        [Stage(self._stage_callback(stage.instructions)) for stage in turn.stages],
                    )
                    for turn in data_phase.turns
                ],
            )
            for data_phase in phases
        }
        self.phase_manager.load_phases(library, first_phase)

    def _stage_callback(self, data_instruction: DataInstruction) -> Callable[[], None]:
        def run() -> None:
            self.instruction_manager.add_instruction(data_instruction.build(), None)

        return run

    def next(self) -> None:
        """Advance the game by one stage."""
        self.phase_manager.next()