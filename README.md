# boardkit

A small engine for turn-based board games. A game is described as data:
entity templates, phases made of turns made of stages, and the instructions
each stage runs. The engine drives it and reports the game state and the
choices open to players through callbacks you supply.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Concepts

- **Entities** (`boardkit.entities`). An `Entity` is created from a
  `DataEntity`, which pairs a `DataId` (a resolver giving the entity's name)
  with `DataProperties` (the property names it starts with, grouped by kind).
  Descriptions are looked up by name in an `EntityDataLibrary`; an unknown
  name raises `LookupError`. `EntityIds` gives each non-empty name a stable id
  and every empty name a fresh one. `EntityManager` keeps every entity and
  builds the output snapshots (`OutputEntity`), leaving out the entities that
  only hold execution variables.
- **Properties** (`boardkit.properties`). Each entity has typed properties of
  the kinds in `PropertyKind` (`INT`, `STRING`, `BOOL`, `ENTITY_ID`,
  `ARRAY_ENTITY_ID`). A property starts at the kind's zero value
  (`PropertyKind.zero()`) and its value is recomputed through its chain of
  modifiers each time one is added. `PropertyIds` maps property names to
  numeric ids, with one counter per kind. Asking for a property an entity
  does not have raises `PropertyNotFoundError`.
- **Modifiers** (`boardkit.modifiers`). `ModifierSetValue` replaces a value;
  `DataModifierSetValue` describes one whose value comes from a resolver when
  it is built. A `DataModifier` (in `boardkit.entities`) groups modifier
  descriptions by property name and kind through `DataPropertiesModifier`.
- **Resolvers** (`boardkit.resolvers`) compute values at run time against the
  current execution variables: `ResolveConstant`, `ResolveFromVariable`,
  `ResolveScalarToSlice`, `ResolveAnd`, `ResolveOr` and `ResolveEquals`.
- **Phases** (`boardkit.phase`). A `PhaseManager` steps through the stages of
  each turn, then the turns of the phase, and moves to the next phase once
  one has been chosen with `set_next_phase`. If the phase is over and none was
  chosen, `next()` raises `NoNextPhaseError`. `active_players()` gives the
  players of the current turn.
- **Instructions** (`boardkit.instruction` and `boardkit.instructions`).
  Stages run `DataInstruction` objects, each built into a fresh `Instruction`
  every time it runs. Every instruction gets its own execution-variable
  entity; the entities a player selected are stored in it under the name
  `boardkit.instruction.SELECTED_ENTITIES`. The available instructions are:
  - `boardkit.instructions.control`: `DataInstructionArray` (run in order)
    and `DataInstructionIf` (choose by a boolean resolver);
  - `boardkit.instructions.entity_ops`: `DataInstructionCreateEntity`,
    `DataInstructionCreateEntityIntoVariable` and
    `DataInstructionFilterEntities`;
  - `boardkit.instructions.modifier_ops`: `DataInstructionAddEntityModifier`
    and `DataInstructionAddEntityModifierWithResolvedTarget`;
  - `boardkit.instructions.output_ops`: `DataInstructionSendOutput`, which
    passes a `GameOutput` (entities, property ids, active players) to the
    output callback;
  - `boardkit.instructions.interaction_ops`: `DataAddAvailableInteraction`,
    `DataClearAvailableInteraction` and `DataWaitForInteraction`;
  - `boardkit.instructions.phase_ops`: `DataInstructionSetNextPhase`.
- **Interactions** (`boardkit.interaction`). A `DataAvailableInteraction`
  names a player, a resolver for the selectable entity ids, and a minimum
  (inclusive) and maximum (exclusive) number of entities to pick. Choices
  that break these limits, name an unknown interaction or pick an entity that
  was not offered raise an error.
- **Game** (`boardkit.game`). `Game` wraps an `EngineContext`
  (`boardkit.engine`), which connects all the managers. `start()` runs the
  game until it waits for an interaction; calling it twice raises
  `RuntimeError`.

## Example

```python
from boardkit.engine import DataPhase, DataStage, DataTurn
from boardkit.entities import DataEntity, DataId
from boardkit.game import DataGame, Game
from boardkit.instructions.control import DataInstructionArray
from boardkit.instructions.entity_ops import DataInstructionCreateEntity
from boardkit.instructions.output_ops import DataInstructionSendOutput
from boardkit.phase import NoNextPhaseError
from boardkit.properties import DataProperties
from boardkit.resolvers import ResolveConstant

entities = {
    "pawn": DataEntity(DataId(ResolveConstant("pawn_1")), DataProperties()),
}

phases = [
    DataPhase(
        name="setup",
        turns=[
            DataTurn(
                name="first",
                active_players=["alice"],
                stages=[
                    DataStage(
                        DataInstructionArray(
                            DataInstructionCreateEntity("pawn"),
                            DataInstructionSendOutput(),
                        )
                    )
                ],
            )
        ],
    )
]

def on_output(state):
    for entity in state.entities:
        print(entity.id, entity.name, entity.properties)

def on_interactions(interactions):
    for interaction in interactions:
        print("choice for", interaction.player_id, interaction.available_entities)

game = Game(DataGame(entities, phases, "setup", ["alice"]), on_output, on_interactions)
try:
    game.start()
except NoNextPhaseError:
    pass  # the only phase is over and no next phase was chosen
```

When a stage offers interactions and waits for one, `start()` returns after
the interaction callback has been called. Answer with
`game.select_interaction([...])`, passing `SelectedInteraction` objects from
`boardkit.interaction` (interaction id, player id, selected entity ids); the
chosen instructions run and the game carries on from where it stopped.

## What it does not do

boardkit is a library only. It has no command-line program, no user
interface, no network server and no way to save or load a game: the state
lives in memory and reaches the outside world only through the two
callbacks. It ships no ready-made games; the rules are whatever data and
instructions you give it.