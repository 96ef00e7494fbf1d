from types import SimpleNamespace

import pytest

from boardkit.entities import EntityDataLibrary, EntityIds, EntityManager
from boardkit.instruction import (
    DataInstruction,
    ExecutionContext,
    Instruction,
    TriggerManager,
    execution_variables_data,
)
from boardkit.instructions.control import (
    DataInstructionArray,
    DataInstructionIf,
    InstructionArray,
    InstructionIf,
)
from boardkit.interaction import InteractionManager
from boardkit.output import OutputManager
from boardkit.performer import Performer
from boardkit.phase import PhaseManager
from boardkit.properties import PropertyIds, PropertyKind, PropertyNotFoundError
from boardkit.resolvers import ResolveConstant, ResolveFromVariable


def make_context():
    entity_manager = EntityManager()
    engine = SimpleNamespace(
        entity_manager=entity_manager,
        entity_ids=EntityIds(),
        property_ids=PropertyIds(),
        entity_data=EntityDataLibrary({}),
        interaction_manager=InteractionManager(lambda interactions: None),
        trigger_manager=TriggerManager(),
        output_manager=OutputManager(lambda output: None),
        phase_manager=PhaseManager(),
    )
    entity_manager.initialize(engine)
    performer = Performer()
    performer.initialize(engine)
    variables = entity_manager.new_execution_variable(execution_variables_data())
    return ExecutionContext(performer, variables)


class Record(Instruction):
    def __init__(self, log, label, fail=False):
        self.log = log
        self.label = label
        self.fail = fail

    def execute(self, context):
        self.log.append(self.label)
        if self.fail:
            raise RuntimeError(self.label)


class DataRecord(DataInstruction):
    def __init__(self, log, label):
        self.log = log
        self.label = label
        self.builds = 0

    def build(self):
        self.builds += 1
        return Record(self.log, self.label)


def test_array_runs_in_order():
    log = []
    InstructionArray([Record(log, "a"), Record(log, "b"), Record(log, "c")]).execute(make_context())
    assert log == ["a", "b", "c"]


def test_array_stops_at_first_failure():
    log = []
    array = InstructionArray([Record(log, "a", fail=True), Record(log, "b")])
    with pytest.raises(RuntimeError):
        array.execute(make_context())
    assert log == ["a"]


def test_data_array_builds_each_instruction():
    log = []
    first, second = DataRecord(log, "x"), DataRecord(log, "y")
    built = DataInstructionArray(first, second).build()
    assert len(built.instructions) == 2
    assert (first.builds, second.builds) == (1, 1)
    built.execute(make_context())
    assert log == ["x", "y"]


def test_empty_array_does_nothing():
    built = DataInstructionArray().build()
    assert list(built.instructions) == []


@pytest.mark.parametrize("condition, expected", [(True, ["yes"]), (False, ["no"])])
def test_if_chooses_branch(condition, expected):
    log = []
    data = DataInstructionIf(ResolveConstant(condition), DataRecord(log, "yes"), DataRecord(log, "no"))
    data.build().execute(make_context())
    assert log == expected


def test_if_builds_branch_on_every_execution():
    log = []
    when_true = DataRecord(log, "yes")
    instruction = InstructionIf(ResolveConstant(True), when_true, DataRecord(log, "no"))
    context = make_context()
    instruction.execute(context)
    instruction.execute(context)
    assert when_true.builds == 2
    assert log == ["yes", "yes"]


def test_if_with_missing_variable_raises():
    log = []
    instruction = InstructionIf(
        ResolveFromVariable(PropertyKind.BOOL, "flag"),
        DataRecord(log, "yes"),
        DataRecord(log, "no"),
    )
    with pytest.raises(PropertyNotFoundError):
        instruction.execute(make_context())
    assert log == []