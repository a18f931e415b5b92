"""
Effect propagation.

There is no effect service: every generator that recurses concatenates its
children's effects, in traversal order, into its own result. The helpers here
build, flatten and finally resolve those lists.
"""
from typing import Iterable, Optional

from ..exceptions import ComponentModeConflict
from ..models.common import CreationType, EffectType
from ..models.fragments import Effect, ResolvedEffect
from ..models.nodes import DefaultNode, OptionalNode, SchemaNode
from .components import ComponentRegistry
from .state import SchemaState


def flatten_effects(*groups: Optional[Iterable[Effect]]) -> list[Effect]:
    effects: list[Effect] = []
    for group in groups:
        if group:
            effects.extend(group)
    return effects


def create_schema_effect(node: SchemaNode, state: SchemaState) -> Effect:
    return Effect(type=EffectType.SCHEMA, creation_type=state.creation_type, node=node, path=state.path)


def create_component_effect(node: SchemaNode, state: SchemaState) -> Effect:
    return Effect(type=EffectType.COMPONENT, node=node, path=state.path)


def is_optional_schema(node: SchemaNode, state: SchemaState) -> tuple[bool, list[Effect]]:
    """
    Whether an object field may be absent, plus the effects that decision causes.

    A default is optional for input but always present in output, so it is
    recorded as an effect in both modes.
    """
    if isinstance(node, OptionalNode):
        return True, []
    if isinstance(node, DefaultNode):
        return state.creation_type == CreationType.INPUT, [create_schema_effect(node, state)]
    return False, []


def _collect_schema_effects(
    effects: Iterable[Effect],
    registry: ComponentRegistry,
    visited: set[int],
) -> list[ResolvedEffect]:
    resolved: list[ResolvedEffect] = []
    for effect in effects:
        if effect.type == EffectType.SCHEMA:
            resolved.append(ResolvedEffect(creation_type=effect.creation_type, node=effect.node, path=effect.path))
            continue

        if effect.node.node_id in visited:
            continue
        visited.add(effect.node.node_id)
        entry = registry.get(effect.node)
        if entry is None or not entry.is_complete:
            continue
        resolved.extend(_collect_schema_effects(entry.effects, registry, visited))
    return resolved


def resolve_effect(effects: Iterable[Effect], registry: ComponentRegistry) -> Optional[ResolvedEffect]:
    """
    The creation type a fragment depends on, or ``None`` when input and output
    shapes are identical. Component effects are followed into their registry
    entries; a fragment that depends on both shapes raises ComponentModeConflict.
    """
    resolved = _collect_schema_effects(effects, registry, set())
    inputs = [effect for effect in resolved if effect.creation_type == CreationType.INPUT]
    outputs = [effect for effect in resolved if effect.creation_type == CreationType.OUTPUT]

    if inputs and outputs:
        raise ComponentModeConflict(
            f"Schema depends on input-shaped {inputs[0].node} and output-shaped {outputs[0].node}",
            path=outputs[0].path,
        )
    if inputs:
        return inputs[0]
    if outputs:
        return outputs[0]
    return None
