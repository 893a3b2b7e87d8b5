"""Gravity, auto-scrolling and movement physics passes.

Per-level property tables sit at 0x1F71 (scrolling) and 0x1F91 (gravity) in
v1.0, and three bytes further on in later revisions. Physics parameter
tables (jump height, move speed, scroll speed) have one byte per level and
live in the bank that the DX patch relocates.
"""

import logging

from sml2r.passes.base import PassContext
from sml2r.rom import sprites

logger = logging.getLogger(__name__)

# --- Gravity ---

GRAVITY_NONE = 0x00
GRAVITY_LIGHT = 0x01
GRAVITY_HEAVY = 0x08

GRAVITY_START = 0x1F91
GRAVITY_LAST = 0x1FB0
GRAVITY_FIXED = (0x1F98, 0x1FA6)
# Never gains heavy gravity from a normal start
GRAVITY_NO_HEAVY = 0x1F99

# state -> ((first target, chance), (second target, chance)); the second
# roll only happens when the first one fails
GRAVITY_TRANSITIONS = {
    GRAVITY_NONE: ((GRAVITY_LIGHT, 0.05), (GRAVITY_HEAVY, 0.1)),
    GRAVITY_LIGHT: ((GRAVITY_NONE, 0.1), (GRAVITY_HEAVY, 0.3)),
    GRAVITY_HEAVY: ((GRAVITY_NONE, 0.3), (GRAVITY_LIGHT, 0.05)),
}

# --- Scrolling ---

SCROLLING_TABLE = 0x1F71
SCROLL_OFF = 0x00
SCROLL_ON = 0x01
SCROLL_FAST = 0x02
SCROLLING_LEVELS = [
    0x1F71, 0x1F72, 0x1F73, 0x1F74, 0x1F76, 0x1F79, 0x1F7A, 0x1F7B, 0x1F7C, 0x1F7D,
    0x1F7E, 0x1F7F, 0x1F81, 0x1F82, 0x1F83, 0x1F84, 0x1F85, 0x1F88, 0x1F8A, 0x1F8F,
    0x1F90,
]
SCROLL_ON_CHANCE = 0.08
SCROLL_OFF_CHANCE = 0.25

# Level 0x12: scrolling clashes with heavy gravity; otherwise its midway
# bell becomes a money bag
LEVEL_12_SCROLLING = 0x1F83
LEVEL_12_GRAVITY = 0x1FA3
LEVEL_12_BELL = 0xE7A6
MONEY_BAG = 0x1F
# The money bag record is written with fixed position bits, not the bell's
MONEY_BAG_POSITION = (0x06, 0x07)

# --- Fast scrolling ---

FAST_SCROLL_LEVELS = [0x00, 0x05, 0x09, 0x0B, 0x0D, 0x10, 0x13, 0x17, 0x19, 0x1F]
FAST_SCROLL_CHANCE = 0.4
LEVEL_11 = 0x11
LEVEL_11_GRAVITY = 0x1FA2
LEVEL_0C = 0x0C
FIRST_LEVEL_SLOT = 0x3C218

# --- Physics tables (normal image, DX image) ---

JUMP_TABLE = (0x33000, 0x93D00)
SPEED_TABLE = (0x33020, 0x93D20)
SCROLL_SPEED_TABLE = (0x33040, 0x93D40)
PHYSICS_LEVELS = 0x20

ICE_CHANCE = 0.1
ICE_SPEED = 0x00

LUIGI_CHANCE = 0.15
LUIGI_JUMP = 0x04
LUIGI_SPEED = 0x03
# DX only: levels flagged 0xFF in the jump table can be given Mario physics
DX_UNSET = 0xFF
MARIO_JUMP = 0x00
MARIO_SPEED = 0x04


def _table(ctx: PassContext, table: tuple[int, int]) -> int:
    return table[1] if ctx.dx else table[0]


def randomize_gravity(ctx: PassContext) -> None:
    """Random walk each level between no, light and heavy gravity."""
    rom, rng = ctx.rom, ctx.rng
    v = ctx.level_shift
    fixed = {offset + v for offset in GRAVITY_FIXED}

    for offset in range(GRAVITY_START + v, GRAVITY_LAST + v + 1):
        if offset in fixed:
            continue
        state = rom[offset]
        if state not in GRAVITY_TRANSITIONS:
            continue
        (first, first_chance), (second, second_chance) = GRAVITY_TRANSITIONS[state]
        blocked = state == GRAVITY_NONE and offset == GRAVITY_NO_HEAVY + v
        if rng.random() < first_chance:
            rom[offset] = first
        elif rng.random() < second_chance and not blocked:
            rom[offset] = second


def randomize_scrolling(ctx: PassContext) -> None:
    rom, rng = ctx.rom, ctx.rng
    v = ctx.level_shift

    for level in SCROLLING_LEVELS:
        offset = level + v
        if rom[offset] == SCROLL_OFF and rng.random() < SCROLL_ON_CHANCE:
            rom[offset] = SCROLL_ON
        elif rom[offset] == SCROLL_ON and rng.random() < SCROLL_OFF_CHANCE:
            rom[offset] = SCROLL_OFF

    if rom[LEVEL_12_SCROLLING + v] == SCROLL_ON:
        if rom[LEVEL_12_GRAVITY + v] == GRAVITY_HEAVY:
            rom[LEVEL_12_SCROLLING + v] = SCROLL_OFF
        else:
            rom[LEVEL_12_BELL], rom[LEVEL_12_BELL + 1] = sprites.insert(
                *MONEY_BAG_POSITION, MONEY_BAG
            )


def _fast_scroll(ctx: PassContext, all_levels: bool) -> None:
    rom, rng = ctx.rom, ctx.rng
    v = ctx.level_shift
    speed_table = _table(ctx, SCROLL_SPEED_TABLE)

    levels = list(FAST_SCROLL_LEVELS)
    if rom[LEVEL_11_GRAVITY + v] != GRAVITY_HEAVY:
        levels.append(LEVEL_11)
    if rom[FIRST_LEVEL_SLOT] != LEVEL_0C:
        levels.append(LEVEL_0C)

    for level in levels:
        if rom[SCROLLING_TABLE + v + level] == SCROLL_ON and (
            all_levels or rng.random() < FAST_SCROLL_CHANCE
        ):
            rom[speed_table + level] = SCROLL_FAST


def fast_scroll_random(ctx: PassContext) -> None:
    _fast_scroll(ctx, all_levels=False)


def fast_scroll_all(ctx: PassContext) -> None:
    _fast_scroll(ctx, all_levels=True)


def randomize_ice_physics(ctx: PassContext) -> None:
    speed_table = _table(ctx, SPEED_TABLE)
    for level in range(PHYSICS_LEVELS):
        if ctx.rng.random() < ICE_CHANCE:
            ctx.rom[speed_table + level] = ICE_SPEED


def _luigi_physics(ctx: PassContext, all_levels: bool) -> None:
    rom, rng = ctx.rom, ctx.rng
    jump_table = _table(ctx, JUMP_TABLE)
    speed_table = _table(ctx, SPEED_TABLE)

    for level in range(PHYSICS_LEVELS):
        if all_levels or rng.random() < LUIGI_CHANCE:
            rom[jump_table + level] = LUIGI_JUMP
            rom[speed_table + level] = LUIGI_SPEED
        if (
            not all_levels
            and ctx.dx
            and rom[JUMP_TABLE[1] + level] == DX_UNSET
            and rng.random() < LUIGI_CHANCE
        ):
            rom[JUMP_TABLE[1] + level] = MARIO_JUMP
            rom[SPEED_TABLE[1] + level] = MARIO_SPEED


def luigi_physics_random(ctx: PassContext) -> None:
    _luigi_physics(ctx, all_levels=False)


def luigi_physics_all(ctx: PassContext) -> None:
    _luigi_physics(ctx, all_levels=True)
