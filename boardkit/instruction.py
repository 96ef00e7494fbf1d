"""Instructions, their execution context and the managers that run them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Protocol

from boardkit.entities import DataEntity, DataId, DataModifier, Entity, EntityManager
from boardkit.interaction import InstructionTrigger
from boardkit.modifiers import DataModifierSetValue
from boardkit.properties import DataProperties, DataPropertiesModifier
from boardkit.resolvers import ResolveConstant

if TYPE_CHECKING:
    from boardkit.performer import Performer

SELECTED_ENTITIES = "__SELECTED_ENTITIES"
"""Name of the execution variable holding the entities a player selected."""


@dataclass
class ExecutionContext:
    """What an instruction sees while it executes."""

    performer: Performer
    execution_variables: Entity

    def __post_init__(self) -> None:
        if self.performer is None:
            raise ValueError("performer must not be nil")


class Instruction(ABC):
    """A unit of game logic."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> None:
        """Run the instruction."""


class DataInstruction(ABC):
    """Description of an instruction, built into a fresh one each time it runs."""

    @abstractmethod
    def build(self) -> Instruction:
        """Create the instruction described by this data."""


def execution_variables_data() -> DataEntity:
    """Return the description of the entity that holds execution variables."""
    return DataEntity(DataId(ResolveConstant("")), DataProperties())


class _InitializationContext(Protocol):
    performer: Performer
    entity_manager: EntityManager
    instruction_manager: InstructionManager


@dataclass
class _Pending:
    instruction: Instruction
    selected_entities: list[int] = field(default_factory=list)


class InstructionManager:
    """Runs instructions from a stack, each with its own execution variables."""

    def __init__(self) -> None:
        self._stack: list[_Pending] = []
        self.executing = False
        self.performer: Optional[Performer] = None
        self.entity_manager: Optional[EntityManager] = None

    def initialize(self, context: _InitializationContext) -> None:
        """Take the performer and the entity manager from the engine."""
        self.performer = context.performer
        self.entity_manager = context.entity_manager

    def add_instruction(
        self,
        instruction: Instruction,
        selected_entities: Optional[Sequence[int]] = None,
    ) -> None:
        """Push an instruction and run the stack until it is empty."""
        selected = list(selected_entities) if selected_entities is not None else []
        self._stack.append(_Pending(instruction, selected))
        self._execute_loop()

    def _execute_loop(self) -> None:
        if self.executing:
            raise RuntimeError("already executing")
        self.executing = True
        try:
            while self._stack:
                pending = self._stack.pop()
                context = self._build_execution_context(pending.selected_entities)
                pending.instruction.execute(context)
        finally:
            self.executing = False

    def _build_execution_context(self, selected_entities: list[int]) -> ExecutionContext:
        if self.entity_manager is None:
            raise RuntimeError("manager instruction does not have manager entity")
        variables = self.entity_manager.new_execution_variable(execution_variables_data())
        context = ExecutionContext(self.performer, variables)
        modifier = DataModifier(
            DataPropertiesModifier(
                array_entity_id_modifiers={
                    SELECTED_ENTITIES: DataModifierSetValue(ResolveConstant(selected_entities))
                }
            )
        )
        self.performer.entity.add_modifier(variables, [variables.id], modifier)
        return context


class _TriggerInitializationContext(Protocol):
    instruction_manager: InstructionManager


class TriggerManager(InstructionTrigger):
    """Keeps instructions to run later, when a player picks an interaction."""

    def __init__(self) -> None:
        self._to_trigger: dict[int, DataInstruction] = {}
        self._counter = 0
        self.instruction_manager: Optional[InstructionManager] = None

    def initialize(self, context: _TriggerInitializationContext) -> None:
        """Take the instruction manager from the engine."""
        self.instruction_manager = context.instruction_manager

    def trigger(self, id_to_trigger: int, selected_entities: Sequence[int]) -> None:
        """Build and run the instruction registered under ``id_to_trigger``."""
        if self.instruction_manager is None:
            raise RuntimeError("managerInstruction is nil on ManagerTriggerInstruction")
        try:
            data = self._to_trigger[id_to_trigger]
        except KeyError:
            raise LookupError(
                f"no instruction to trigger with idToTrigger={id_to_trigger}"
            ) from None
        self.instruction_manager.add_instruction(data.build(), selected_entities)

    def add_instruction_to_trigger(self, data_instruction: DataInstruction) -> int:
        """Register an instruction and return the id that triggers it."""
        self._counter += 1
        self._to_trigger[self._counter] = data_instruction
        return self._counter

    def remove_instruction_to_trigger(self, trigger_id: int) -> None:
        """Forget a registered instruction; unknown ids are ignored."""
        self._to_trigger.pop(trigger_id, None)