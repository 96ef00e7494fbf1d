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
from boardkit.instruction import ExecutionContext, TriggerManager, execution_variables_data
from boardkit.instructions.modifier_ops import (
    DataInstructionAddEntityModifier,
    DataInstructionAddEntityModifierWithResolvedTarget,
    InstructionAddEntityModifier,
    InstructionAddEntityModifierWithResolvedTarget,
)
from boardkit.interaction import InteractionManager
from boardkit.modifiers import DataModifierSetValue
from boardkit.output import OutputManager
from boardkit.performer import Performer
from boardkit.phase import PhaseManager
from boardkit.properties import DataProperties, DataPropertiesModifier, PropertyIds, PropertyKind
from boardkit.resolvers import ResolveConstant, ResolveFromVariable


def data_id(name):
    return DataId(ResolveConstant(name))


def make_world():
    props = DataProperties(bool_properties=["property_1"])
    library = {
        "data_entity_1": DataEntity(data_id("entity_1"), props),
        "data_entity_2": DataEntity(data_id("entity_2"), props),
    }
    entity_manager = EntityManager()
    engine = SimpleNamespace(
        entity_manager=entity_manager,
        entity_ids=EntityIds(),
        property_ids=PropertyIds(),
        entity_data=EntityDataLibrary(library),
        interaction_manager=InteractionManager(lambda interactions: None),
        trigger_manager=TriggerManager(),
        output_manager=OutputManager(lambda output: None),
        phase_manager=PhaseManager(),
    )
    entity_manager.initialize(engine)
    performer = Performer()
    performer.initialize(engine)
    variables = entity_manager.new_execution_variable(execution_variables_data())
    context = ExecutionContext(performer, variables)
    ids = [
        performer.entity.create(variables, library[name])
        for name in ("data_entity_1", "data_entity_2")
    ]
    return context, ids


def set_true():
    return DataModifier(
        DataPropertiesModifier(bool_modifiers={"property_1": DataModifierSetValue(ResolveConstant(True))})
    )


def flag(context, entity_id):
    entity = context.performer.entity.get_by_id(entity_id)
    return context.performer.entity.get_value(entity, PropertyKind.BOOL, "property_1")


def test_add_modifier_changes_value():
    context, (first, second) = make_world()
    assert flag(context, first) is False
    DataInstructionAddEntityModifier(data_id("entity_1"), set_true()).build().execute(context)
    assert flag(context, first) is True
    assert flag(context, second) is False


def test_add_modifier_to_unknown_entity_raises():
    context, _ = make_world()
    with pytest.raises(LookupError):
        InstructionAddEntityModifier(data_id("nobody"), set_true()).execute(context)


def test_add_modifier_creates_missing_property():
    context, (first, _) = make_world()
    modifier = DataModifier(
        DataPropertiesModifier(int_modifiers={"score": DataModifierSetValue(ResolveConstant(7))})
    )
    InstructionAddEntityModifier(data_id("entity_1"), modifier).execute(context)
    entity = context.performer.entity.get_by_id(first)
    assert context.performer.entity.get_value(entity, PropertyKind.INT, "score") == 7


def test_resolved_target_modifies_every_entity():
    context, ids = make_world()
    data = DataInstructionAddEntityModifierWithResolvedTarget(ResolveConstant(ids), set_true())
    data.build().execute(context)
    assert [flag(context, entity_id) for entity_id in ids] == [True, True]


def test_resolved_target_from_variable():
    context, (first, second) = make_world()
    context.performer.entity.filter_entities_into_variable(
        context.execution_variables, lambda v, ids, e: e.id == second, "targets"
    )
    InstructionAddEntityModifierWithResolvedTarget(
        ResolveFromVariable(PropertyKind.ARRAY_ENTITY_ID, "targets"), set_true()
    ).execute(context)
    assert (flag(context, first), flag(context, second)) == (False, True)


def test_resolved_empty_target_changes_nothing():
    context, ids = make_world()
    InstructionAddEntityModifierWithResolvedTarget(ResolveConstant([]), set_true()).execute(context)
    assert [flag(context, entity_id) for entity_id in ids] == [False, False]


def test_resolved_missing_variable_raises():
    context, _ = make_world()
    instruction = InstructionAddEntityModifierWithResolvedTarget(
        ResolveFromVariable(PropertyKind.ARRAY_ENTITY_ID, "absent"), set_true()
    )
    with pytest.raises(LookupError):
        instruction.execute(context)