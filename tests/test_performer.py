from types import SimpleNamespace

import pytest

from boardkit.entities import (
    DataEntity,
    DataId,
    DataModifier,
    EntityDataLibrary,
    EntityIds,
    EntityManager,
)
from boardkit.instruction import (
    DataInstruction,
    Instruction,
    InstructionManager,
    TriggerManager,
    execution_variables_data,
)
from boardkit.interaction import DataAvailableInteraction, InteractionManager
from boardkit.modifiers import DataModifierSetValue
from boardkit.output import OutputManager
from boardkit.performer import (
    EntityPerformer,
    OutputPerformer,
    Performer,
    PhasePerformer,
)
from boardkit.phase import Phase, PhaseManager, Turn
from boardkit.properties import (
    DataProperties,
    DataPropertiesModifier,
    PropertyIds,
    PropertyKind,
    PropertyNotFoundError,
)
from boardkit.resolvers import ResolveConstant, ResolveFromVariable


class Noop(Instruction):
    def execute(self, context):
        pass


class NoopData(DataInstruction):
    def build(self):
        return Noop()


CARD_ID = DataId(ResolveConstant("card_1"))


def make_context():
    ctx = SimpleNamespace()
    ctx.outputs = []
    ctx.interactions = []
    ctx.property_ids = PropertyIds()
    ctx.entity_ids = EntityIds()
    ctx.entity_manager = EntityManager()
    ctx.entity_data = EntityDataLibrary(
        {"card": DataEntity(CARD_ID, DataProperties(bool_properties=["visible"]))}
    )
    ctx.performer = Performer()
    ctx.instruction_manager = InstructionManager()
    ctx.trigger_manager = TriggerManager()
    ctx.instruction_trigger = ctx.trigger_manager
    ctx.interaction_manager = InteractionManager(ctx.interactions.append)
    ctx.output_manager = OutputManager(ctx.outputs.append)
    ctx.phase_manager = PhaseManager()
    ctx.phase_manager.load_phases(
        {"main": Phase("main", [Turn(active_players=["p1"])])}, "main"
    )
    ctx.active_player_provider = ctx.phase_manager
    ctx.entity_manager.initialize(ctx)
    ctx.output_manager.initialize(ctx)
    ctx.interaction_manager.initialize(ctx)
    ctx.instruction_manager.initialize(ctx)
    ctx.trigger_manager.initialize(ctx)
    ctx.performer.initialize(ctx)
    ctx.variables = ctx.entity_manager.new_execution_variable(execution_variables_data())
    return ctx


def set_visible():
    return DataModifier(
        DataPropertiesModifier(bool_modifiers={"visible": DataModifierSetValue(ResolveConstant(True))})
    )


def test_create_and_find_entity():
    ctx = make_context()
    entity_perf = ctx.performer.entity
    new_id = entity_perf.create(ctx.variables, entity_perf.get_data("card"))
    assert entity_perf.get_by_id(new_id).name == "card_1"
    assert entity_perf.get(ctx.variables, CARD_ID).id == new_id
    assert entity_perf.get_id(ctx.variables, CARD_ID) == new_id


def test_get_data_unknown_raises():
    ctx = make_context()
    with pytest.raises(LookupError, match="dataEntity not found"):
        ctx.performer.entity.get_data("missing")


def test_add_modifier_changes_value():
    ctx = make_context()
    entity_perf = ctx.performer.entity
    new_id = entity_perf.create(ctx.variables, entity_perf.get_data("card"))
    entity = entity_perf.get_by_id(new_id)
    assert entity_perf.get_value(entity, PropertyKind.BOOL, "visible") is False
    entity_perf.add_modifier(ctx.variables, [new_id], set_visible())
    assert entity_perf.get_value(entity, PropertyKind.BOOL, "visible") is True


def test_add_modifier_unknown_target_raises():
    ctx = make_context()
    with pytest.raises(LookupError):
        ctx.performer.entity.add_modifier(ctx.variables, [12345], set_visible())


def test_get_value_missing_property_raises():
    ctx = make_context()
    with pytest.raises(PropertyNotFoundError):
        ctx.performer.entity.get_value(ctx.variables, PropertyKind.INT, "score")


def test_filter_entities_into_variable():
    ctx = make_context()
    entity_perf = ctx.performer.entity
    new_id = entity_perf.create(ctx.variables, entity_perf.get_data("card"))
    entity_perf.filter_entities_into_variable(
        ctx.variables, lambda ev, ids, e: e.name == "card_1", "found"
    )
    found = entity_perf.get_value(ctx.variables, PropertyKind.ARRAY_ENTITY_ID, "found")
    assert found == [new_id]


def test_uninitialized_entity_performer_raises():
    perf = EntityPerformer()
    with pytest.raises(RuntimeError):
        perf.get_data("card")
    with pytest.raises(RuntimeError):
        perf.get_by_id(1)


def test_value_resolver_reads_variable():
    ctx = make_context()
    ctx.performer.entity.filter_entities_into_variable(ctx.variables, lambda ev, ids, e: False, "none")
    resolved = ctx.performer.value_resolver.resolve(
        ctx.variables, ResolveFromVariable(PropertyKind.ARRAY_ENTITY_ID, "none")
    )
    assert resolved == []


def test_add_available_interaction_registers_trigger():
    ctx = make_context()
    data = DataAvailableInteraction("p1", ResolveConstant([7, 8]), 1, 2)
    ctx.performer.interaction.add_available_interaction(ctx.variables, data, NoopData())
    available = ctx.interaction_manager.available_interactions
    assert len(available) == 1
    assert available[0].available_entities == [7, 8]
    ctx.trigger_manager.trigger(available[0].instruction_id_to_trigger, [7])
    ctx.performer.interaction.clear_available_interactions()
    assert ctx.interaction_manager.available_interactions == []


def test_wait_for_interaction_twice_raises():
    ctx = make_context()
    ctx.performer.interaction.wait_for_interaction()
    assert ctx.interaction_manager.waiting_for_interaction is True
    with pytest.raises(RuntimeError, match="already waiting"):
        ctx.performer.interaction.wait_for_interaction()


def test_send_output_reaches_callback():
    ctx = make_context()
    entity_perf = ctx.performer.entity
    entity_perf.create(ctx.variables, entity_perf.get_data("card"))
    ctx.performer.output.send_output()
    assert len(ctx.outputs) == 1
    assert [e.name for e in ctx.outputs[0].entities] == ["card_1"]
    assert ctx.outputs[0].current_active_players == ["p1"]


def test_uninitialized_output_performer_raises():
    with pytest.raises(RuntimeError, match="managerOutput"):
        OutputPerformer().send_output()


def test_set_next_phase():
    ctx = make_context()
    with pytest.raises(LookupError, match="invalid phase Name"):
        ctx.performer.phase.set_next_phase("nowhere")
    with pytest.raises(RuntimeError):
        PhasePerformer().set_next_phase("main")