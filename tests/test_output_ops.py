from types import SimpleNamespace

import pytest

from boardkit.entities import DataEntity, DataId, Entity, EntityIds, EntityManager
from boardkit.instruction import ExecutionContext
from boardkit.instructions.output_ops import DataInstructionSendOutput, InstructionSendOutput
from boardkit.output import OutputManager
from boardkit.performer import Performer
from boardkit.properties import PropertyIds
from boardkit.resolvers import ResolveConstant


class _Players:
    def __init__(self, players):
        self.players = players

    def active_players(self):
        return self.players


def _setup(received):
    property_ids = PropertyIds()
    manager = EntityManager()
    manager.initialize(SimpleNamespace(entity_ids=EntityIds(), property_ids=property_ids))
    output_manager = OutputManager(received.append)
    output_manager.initialize(
        SimpleNamespace(
            entity_manager=manager,
            property_ids=property_ids,
            active_player_provider=_Players(["alice"]),
        )
    )
    performer = Performer()
    performer.output.initialize(SimpleNamespace(output_manager=output_manager))
    return manager, property_ids, performer


def test_build_creates_send_output():
    received = []
    _, _, performer = _setup(received)
    instruction = DataInstructionSendOutput().build()
    assert isinstance(instruction, InstructionSendOutput)
    instruction.execute(ExecutionContext(performer, Entity(1)))
    assert len(received) == 1
    assert received[0].current_active_players == ["alice"]


def test_send_output_reaches_callback():
    received = []
    manager, property_ids, performer = _setup(received)
    created = manager.new(Entity(0), property_ids, DataEntity(DataId(ResolveConstant("board"))))
    context = ExecutionContext(performer, Entity(99))

    DataInstructionSendOutput().build().execute(context)

    assert len(received) == 1
    snapshot = received[0]
    assert [e.id for e in snapshot.entities] == [created.id]
    assert snapshot.entities[0].name == "board"
    assert snapshot.current_active_players == ["alice"]


def test_each_execution_sends_again():
    received = []
    _, _, performer = _setup(received)
    instruction = DataInstructionSendOutput().build()
    context = ExecutionContext(performer, Entity(1))
    instruction.execute(context)
    instruction.execute(context)
    assert len(received) == 2
    assert received[0].entities == received[1].entities == []


def test_uninitialized_performer_fails():
    context = ExecutionContext(Performer(), Entity(1))
    with pytest.raises(RuntimeError):
        InstructionSendOutput().execute(context)