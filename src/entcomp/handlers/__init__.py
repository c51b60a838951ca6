"""Entity family handlers and the order the resolver runs them in."""

from typing import FrozenSet, Tuple

from .allay import allay_handler
from .armadillo import armadillo_handler
from .banner import banner_handler
from .base import EntityHandler, HandlerContext, HandlerResult
from .base_variant import base_variant_handler
from .bee import bee_handler
from .breeze import breeze_handler
from .camel import camel_handler
from .decorated_pot import decorated_pot_handler
from .donkey import donkey_handler
from .equipment import equipment_handler
from .fox import fox_handler
from .happy_ghast import happy_ghast_handler
from .horse import horse_handler
from .llama import llama_handler
from .mob_states import mob_states_handler
from .piglin import piglin_handler
from .sheep import sheep_handler
from .universal import UNIVERSAL_FEATURES
from .villager import villager_handler, zombie_villager_handler

# Specific families first; the generic variant select is the catch-all.
ENTITY_HANDLERS: Tuple[EntityHandler, ...] = (
    bee_handler,
    fox_handler,
    llama_handler,
    horse_handler,
    sheep_handler,
    decorated_pot_handler,
    armadillo_handler,
    allay_handler,
    camel_handler,
    donkey_handler,
    happy_ghast_handler,
    piglin_handler,
    villager_handler,
    zombie_villager_handler,
    breeze_handler,
    banner_handler,
    equipment_handler,
    mob_states_handler,
    base_variant_handler,
)

# Add to whichever family claimed the entity.
SHARED_HANDLERS: FrozenSet[EntityHandler] = frozenset({mob_states_handler})
# Skipped once a family handler has claimed the entity.
FALLBACK_HANDLERS: FrozenSet[EntityHandler] = frozenset({base_variant_handler})

__all__ = [
    "ENTITY_HANDLERS",
    "SHARED_HANDLERS",
    "FALLBACK_HANDLERS",
    "UNIVERSAL_FEATURES",
    "EntityHandler",
    "HandlerContext",
    "HandlerResult",
]
