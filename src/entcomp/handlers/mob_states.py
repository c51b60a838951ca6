"""Generic pose and behaviour states consumed by entity animations."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..assets.state import get_select, get_toggle
from ..schema.models import EntityFeatureStateView
from .base import HandlerContext, HandlerResult, select, toggle

AGGRESSIVE_ENTITIES = frozenset(
    {
        "bee",
        "wolf",
        "polar_bear",
        "iron_golem",
        "zombie_pigman",
        "zombified_piglin",
        "panda",
        "dolphin",
        "goat",
        "warden",
        "spider",
        "cave_spider",
    }
)
CHILD_ENTITIES = frozenset(
    {
        "zombie",
        "husk",
        "drowned",
        "zombie_villager",
        "pig",
        "cow",
        "chicken",
        "mooshroom",
        "wolf",
        "cat",
        "ocelot",
        "rabbit",
        "polar_bear",
        "turtle",
        "panda",
        "fox",
        "bee",
        "hoglin",
        "zoglin",
        "strider",
        "goat",
        "axolotl",
        "frog",
        "tadpole",
        "camel",
        "sniffer",
        "armadillo",
    }
)
SITTING_ENTITIES = frozenset({"wolf", "cat", "parrot", "fox"})
WATER_ENTITIES = frozenset(
    {"axolotl", "dolphin", "turtle", "guardian", "elder_guardian", "squid", "glow_squid"}
)
SNEAKING_ENTITIES = frozenset({"cat", "fox"})
SLEEPING_ENTITIES = frozenset({"fox", "villager", "cat"})

# (family set, control suffix, label, description, entity state key)
_STATE_TOGGLES = (
    (AGGRESSIVE_ENTITIES, "aggressive", "Aggressive", "Shows the entity in an aggressive/angry state", "is_aggressive"),
    (CHILD_ENTITIES, "baby", "Baby", "Shows the baby/child variant of the entity", "is_child"),
    (SITTING_ENTITIES, "sitting", "Sitting", "Shows the entity in a sitting pose", "is_sitting"),
    (WATER_ENTITIES, "in_water", "In Water", "Shows the entity as if swimming in water", "is_in_water"),
    (SNEAKING_ENTITIES, "sneaking", "Sneaking", "Shows the entity in a sneaking/crouching pose", "is_sneaking"),
    (SLEEPING_ENTITIES, "sleeping", "Sleeping", "Shows the entity in a sleeping pose", "is_sleeping"),
)

MOVEMENT_LIMB_SPEED = {"idle": 0.0, "walking": 0.5, "running": 1.0}
ANGER_TIME = 100


def mob_states_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    entity_type = ctx.folder_root if ctx.dir else ctx.leaf
    applicable = [t for t in _STATE_TOGGLES if entity_type in t[0]]
    if not applicable:
        return None

    controls = [
        toggle(f"{entity_type}.{suffix}", label, False, description)
        for _, suffix, label, description, _ in applicable
    ]
    movement_id = f"{entity_type}.movement"
    controls.append(
        select(
            movement_id,
            "Movement",
            "idle",
            [("idle", "Idle"), ("walking", "Walking"), ("running", "Running")],
            "Controls the movement animation state",
        )
    )

    def entity_state(state: EntityFeatureStateView) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for _, suffix, _, _, key in applicable:
            on = get_toggle(state, f"{entity_type}.{suffix}", False)
            if suffix == "sleeping":
                # only asserted, never forced off
                if on:
                    overrides[key] = True
                continue
            overrides[key] = on
            if suffix == "aggressive" and on:
                overrides["anger_time"] = ANGER_TIME
                overrides["anger_time_start"] = ANGER_TIME
        movement = get_select(state, movement_id, "idle")
        overrides["limb_speed"] = MOVEMENT_LIMB_SPEED.get(movement, 0.0)
        if movement == "running":
            overrides["is_sprinting"] = True
        return overrides

    return HandlerResult(controls=controls, get_entity_state_overrides=entity_state)
