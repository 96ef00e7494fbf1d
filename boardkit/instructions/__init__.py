"""Instructions that game stages run: control flow, entities, modifiers, interactions, output and phases."""