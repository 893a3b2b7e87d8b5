"""Enemy, powerup and platform passes.

Each level's objects live in a 0xFF-terminated list of 3-byte records inside
0xE077..0xEBB5. A pass walks a level's range, decodes each sprite id and, if
the id belongs to that range's substitution pool, redraws it from the pool.
"""

import logging
from collections.abc import Sequence

from sml2r.passes.base import PassContext
from sml2r.rom import sprites

logger = logging.getLogger(__name__)

OBJECT_TABLE_START = 0xE077
OBJECT_TABLE_END = 0xEBB5

# --- Enemies ---

# (pool, start, end) - any sprite in the pool is redrawn from the same pool
ENEMY_RANGES: list[tuple[list[int], int, int]] = [
    ([0x01, 0x08, 0x09, 0x3A], 0xE077, 0xE0BC),  # 00
    ([0x01, 0x08, 0x09, 0x3A], 0xE955, 0xE99D),  # 17
    ([0x08, 0x09, 0x3A], 0xEA2F, 0xEA7D),  # 19
    ([0x08, 0x09, 0x3A], 0xEAA3, 0xEACD),  # 1B
    ([0x1F, 0x20, 0x21, 0x22], 0xE0BD, 0xE123),  # 01
    ([0x44, 0x58], 0xE124, 0xE181),  # 02
    ([0x35, 0x3E, 0x40, 0x41, 0x42], 0xE182, 0xE1EE),  # 03
    ([0x33, 0x34, 0x5D], 0xE1EF, 0xE249),  # 04
    ([0x08, 0x39, 0x3A], 0xE24A, 0xE2A1),  # 05
    ([0x4D, 0x54, 0x55, 0x56, 0x5E, 0x5F], 0xE30C, 0xE384),  # 07
    ([0x4D, 0x57], 0xE385, 0xE3D3),  # 08
    ([0x01, 0x40, 0x4B], 0xE432, 0xE49B),  # 0A
    ([0x08, 0x09, 0x3A, 0x44, 0x4D], 0xE49C, 0xE4F9),  # 0B
    ([0x05, 0x06, 0x07, 0x08, 0x09, 0x0B, 0x3A, 0x3D], 0xE5C2, 0xE62B),  # 0E
    ([0x05, 0x39, 0x57, 0x5B], 0xE706, 0xE77B),  # 11
    ([0x5C, 0x5E, 0x5F], 0xE7C8, 0xE822),  # 13
    ([0x22, 0x23, 0x25, 0x27], 0xE823, 0xE88F),  # 14
    ([0x07, 0x33, 0x34, 0x3D, 0x5D], 0xE890, 0xE8F6),  # 15
    ([0x01, 0x08, 0x09, 0x34, 0x3A, 0x55], 0xE8F7, 0xE954),  # 16
    ([0x68, 0x69], 0xE99E, 0xEA2E),  # 18, first half
    ([0x6E, 0x6F], 0xE99E, 0xEA2E),  # 18, second half
    ([0x01, 0x09], 0xEB55, 0xEBB5),  # 1F
]


def _pools(*groups: tuple[Sequence[int], list[int]]) -> dict[int, list[int]]:
    """Build a current-sprite -> replacement-pool lookup."""
    table: dict[int, list[int]] = {}
    for current, pool in groups:
        for sprite in current:
            table[sprite] = pool
    return table


# (start, end, pools) - the pool depends on the sprite currently there.
# Scanned in plain 3-byte strides: each range stops before its terminator.
CONDITIONAL_ENEMY_RANGES: list[tuple[int, int, dict[int, list[int]]]] = [
    (0xE2A2, 0xE30B, _pools(  # 06
        ([0x4E], [0x4D, 0x4E, 0x51, 0x53]),
        ([0x4F], [0x4D, 0x4F, 0x51, 0x53]),
        ([0x4D, 0x51, 0x53], [0x4D, 0x51, 0x53]),
    )),
    (0xE3D4, 0xE431, _pools(  # 09
        ([0x4F], [0x4D, 0x4F, 0x53, 0x5A, 0x5C]),
        ([0x4D, 0x53, 0x5A, 0x5C], [0x4D, 0x53, 0x5A, 0x5C]),
    )),
    (0xE4FA, 0xE560, _pools(  # 0C
        ([0x49], [0x01, 0x47, 0x48, 0x49, 0x53]),
        ([0x01, 0x47, 0x48], [0x01, 0x47, 0x48, 0x53]),
    )),
    (0xE561, 0xE5C1, _pools(  # 0D
        ([0x43], [0x09, 0x43, 0x4D, 0x53]),
        ([0x4C], [0x09, 0x4C, 0x4D, 0x53]),
        ([0x09, 0x4D], [0x09, 0x4D, 0x53]),
    )),
    (0xE62C, 0xE6BF, _pools(  # 0F
        ([0x01], [0x01, 0x06, 0x53, 0x55, 0x56]),
        ([0x21], [0x06, 0x21, 0x53, 0x55, 0x56]),
        ([0x06, 0x55, 0x56], [0x06, 0x53, 0x55, 0x56]),
    )),
    (0xE6C0, 0xE705, _pools(  # 10
        ([0x21], [0x01, 0x08, 0x20, 0x21, 0x3A, 0x55]),
        ([0x01, 0x08, 0x20, 0x3A, 0x55], [0x01, 0x08, 0x20, 0x3A, 0x55]),
    )),
    (0xE77C, 0xE7C7, _pools(  # 12
        ([0x4D], [0x4D, 0x58]),
        ([0x58, 0x5A], [0x4D, 0x58, 0x5A]),
    )),
]

# Thwomps in Wario's castle: raw bytes, rarely the faster variant
THWOMP_SLOTS = [0xE9D6, 0xE9D9, 0xE9DF, 0xE9E2, 0xE9E5]
THWOMP_NORMAL = 0x34
THWOMP_FAST = 0x35
THWOMP_FAST_CHANCE = 0.1

PIRANHA_PLANTS = (0x0C, 0x0D)
# Levels 07, 09 and 16 are left out of the piranha plant scan
PIRANHA_SKIP = [(0xE30C, 0xE384), (0xE3D4, 0xE431), (0xE8F7, 0xE954)]

# --- Powerups ---

FREE_POWERUPS = [0x0F, 0x1B, 0x1C, 0x1D, 0x1E, 0x1F]
BLOCK_POWERUPS = [0x11, 0x12, 0x13, 0x14, 0x15, 0x19]
# Only a free-standing 0x1F may be redrawn as 0x1F
RARE_FREE_POWERUP = 0x1F
# Level 01 keeps its 0x1F and never gains one
NO_RARE_RANGE = (0xE0BD, 0xE123)
FIXED_POWERUP_SLOTS = [0xA9A9, 0xACA7]
FIXED_POWERUP_CHOICES = [0x1B, 0x1C, 0x1D, 0x1F]

# --- Platforms ---

PLATFORM_RANGES: list[tuple[list[int], int, int]] = [
    ([0x28, 0x29, 0x2A, 0x2B, 0x2D, 0x2E], 0xE1EF, 0xE249),
    ([0x38, 0x3D], 0xE24A, 0xE2A1),
    ([0x60, 0x61, 0x67], 0xE99E, 0xEA2E),
]
# Moving platforms in Wario's castle: raw type byte is base + draw
CASTLE_PLATFORMS = range(0xE9A3, 0xE9CE, 3)
CASTLE_PLATFORM_MARKER = 0x5E
CASTLE_PLATFORM_BASE_MARKED = 0x57
CASTLE_PLATFORM_BASE = 0x38
CASTLE_PLATFORM_VARIANTS = 8


def _in_piranha_scan(offset: int) -> bool:
    return not any(start <= offset <= end for start, end in PIRANHA_SKIP)


def _substitute(ctx: PassContext, pool: list[int], start: int, end: int) -> None:
    for offset, sprite in sprites.iter_entities(ctx.rom, start, end):
        if sprite in pool:
            sprites.randomize_at(ctx.rom, offset, pool, ctx.rng)


def randomize_enemies(ctx: PassContext) -> None:
    rom, rng = ctx.rom, ctx.rng

    for pool, start, end in ENEMY_RANGES:
        _substitute(ctx, pool, start, end)

    for start, end, pools in CONDITIONAL_ENEMY_RANGES:
        for offset, sprite in sprites.iter_records(rom, start, end):
            pool = pools.get(sprite)
            if pool is not None:
                sprites.randomize_at(rom, offset, pool, rng)

    for offset in THWOMP_SLOTS:
        rom[offset] = THWOMP_FAST if rng.random() < THWOMP_FAST_CHANCE else THWOMP_NORMAL

    for offset, sprite in sprites.iter_entities(
        rom, OBJECT_TABLE_START, OBJECT_TABLE_END, include=_in_piranha_scan
    ):
        if sprite in PIRANHA_PLANTS:
            plant = PIRANHA_PLANTS[0] if rng.randbool() else PIRANHA_PLANTS[1]
            sprites.write_at(rom, offset, plant)


def randomize_powerups(ctx: PassContext) -> None:
    rom, rng = ctx.rom, ctx.rng
    common_free = FREE_POWERUPS[:-1]
    no_rare_start, no_rare_end = NO_RARE_RANGE

    for offset, sprite in sprites.iter_entities(rom, OBJECT_TABLE_START, OBJECT_TABLE_END):
        if sprite in FREE_POWERUPS:
            if no_rare_start <= offset < no_rare_end:
                if sprite != RARE_FREE_POWERUP:
                    sprites.randomize_at(rom, offset, common_free, rng)
            else:
                pool = FREE_POWERUPS if sprite == RARE_FREE_POWERUP else common_free
                sprites.randomize_at(rom, offset, pool, rng)
        elif sprite in BLOCK_POWERUPS:
            sprites.randomize_at(rom, offset, BLOCK_POWERUPS, rng)

    for offset in FIXED_POWERUP_SLOTS:
        rom[offset] = rng.choice(FIXED_POWERUP_CHOICES)


def randomize_platforms(ctx: PassContext) -> None:
    rom, rng = ctx.rom, ctx.rng
    for pool, start, end in PLATFORM_RANGES:
        _substitute(ctx, pool, start, end)

    for offset in CASTLE_PLATFORMS:
        base = (
            CASTLE_PLATFORM_BASE_MARKED
            if rom[offset] == CASTLE_PLATFORM_MARKER
            else CASTLE_PLATFORM_BASE
        )
        rom[offset] = base + rng.randrange(CASTLE_PLATFORM_VARIANTS)
