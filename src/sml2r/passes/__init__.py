"""Randomization passes, in the order they run.

Every pass draws from the same generator, so this order is part of the
output: reordering passes changes every seed's result.
"""

import logging

from sml2r.flags import Flag
from sml2r.passes import audio, levels, objects, physics
from sml2r.passes.base import Pass, PassContext

logger = logging.getLogger(__name__)

PIPELINE: list[Pass] = [
    Pass(Flag.GAMBLING_COSTS, "gambling costs", levels.randomize_gambling),
    Pass(Flag.LOCATIONS, "level locations", levels.randomize_levels),
    Pass(Flag.BOSS_LOCATIONS, "boss locations", levels.randomize_bosses),
    Pass(Flag.BOSS_HEALTH, "boss health", levels.randomize_boss_health),
    Pass(Flag.RANDOM_EXIT_SWAP, "random dual exits", levels.swap_dual_exits_random),
    Pass(Flag.SWAP_ALL_EXITS, "swap all dual exits", levels.swap_dual_exits_all),
    Pass(Flag.BONUS_GAMES, "bonus games", levels.randomize_bonus_games),
    Pass(Flag.ENEMIES, "enemies", objects.randomize_enemies),
    Pass(Flag.POWERUPS, "powerups", objects.randomize_powerups),
    Pass(Flag.PLATFORMS, "platforms", objects.randomize_platforms),
    Pass(Flag.GRAVITY, "gravity", physics.randomize_gravity),
    Pass(Flag.SCROLLING, "scrolling", physics.randomize_scrolling),
    Pass(Flag.FAST_SCROLL, "random fast scrolling", physics.fast_scroll_random),
    Pass(Flag.ALL_FAST_SCROLL, "all fast scrolling", physics.fast_scroll_all),
    Pass(Flag.ICE_PHYSICS, "ice physics", physics.randomize_ice_physics),
    Pass(Flag.LUIGI_PHYSICS, "random Luigi physics", physics.luigi_physics_random),
    Pass(Flag.ALL_LUIGI, "all Luigi physics", physics.luigi_physics_all),
    Pass(Flag.MUSIC, "music", audio.randomize_music),
    Pass(Flag.FAST_MUSIC, "fast music", audio.randomize_fast_music),
    Pass(Flag.DISABLE_MUSIC, "disable music", audio.disable_music),
    Pass(Flag.DISABLE_SFX, "disable sound effects", audio.disable_sfx),
]


def run_pipeline(ctx: PassContext) -> list[str]:
    """Run every enabled pass in declared order. Returns the names run."""
    ran: list[str] = []
    for step in PIPELINE:
        if step.flag not in ctx.mask:
            continue
        logger.info("Running pass: %s", step.name)
        step.run(ctx)
        ran.append(step.name)
    return ran


__all__ = ["PIPELINE", "Pass", "PassContext", "run_pipeline"]
