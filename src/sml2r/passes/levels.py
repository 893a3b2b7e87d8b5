"""Overworld, boss and shop table passes.

These passes shuffle or redraw single-byte table slots. Offsets are absolute
image offsets; level ids are the game's internal level numbers.
"""

import logging

from sml2r.flags import Flag
from sml2r.passes.base import PassContext

logger = logging.getLogger(__name__)

# --- Level locations ---

MAIN_LEVELS = [
    0x00, 0x01, 0x03, 0x04, 0x06, 0x0A, 0x0B, 0x0C, 0x0E,
    0x15, 0x16, 0x19, 0x1A, 0x1B, 0x1C, 0x1D, 0x1E, 0x1F,
]
MAIN_LEVEL_SLOTS = [
    0x3C218, 0x3C23B, 0x3C239, 0x3C23C, 0x3C240, 0x3C268, 0x3C269, 0x3C26A, 0x3C25E,
    0x3C24B, 0x3C24C, 0x3C21C, 0x3C27E, 0x3C290, 0x3C25C, 0x3C23E, 0x3C282, 0x3C292,
]
SECRET_LEVELS = [0x02, 0x07, 0x08, 0x0F, 0x11, 0x12, 0x14]
SECRET_LEVEL_SLOTS = [0x3C23A, 0x3C241, 0x3C242, 0x3C260, 0x3C21D, 0x3C254, 0x3C24A]

# Level 0x1A cannot be the first level (it would sit in the Mushroom House)
FIRST_LEVEL_FORBIDDEN = 0x1A

# The second overworld entry for level 11 must match its primary slot
MIRROR_SLOT = 0x3C232
MIRROR_SOURCE = 0x3C21D

# (level slot, zone-clear value) paired with (boss level, zone-clear slot)
BOSS_ARENA_SLOTS = [
    (0x3C238, 0x05), (0x3C243, 0x09), (0x3C24D, 0x0E),
    (0x3C255, 0x11), (0x3C261, 0x17), (0x3C26B, 0x1D),
]
BOSS_ARENA_LEVELS = [
    (0x05, 0x304F6), (0x09, 0x304FA), (0x17, 0x30508),
    (0x13, 0x30504), (0x10, 0x30501), (0x0D, 0x304FE),
]

# --- Boss locations ---

# (boss slot, gfx byte) paired with (boss level, gfx slot)
BOSS_SLOTS = [
    (0x8E03, 0x84), (0x8E08, 0x8C), (0x8E0D, 0xAC),
    (0x8E12, 0x9C), (0x8E17, 0x94), (0x8E1C, 0xA4),
]
BOSS_GFX = [
    (0x05, 0x1413B), (0x09, 0x1413D), (0x0D, 0x14145),
    (0x10, 0x14141), (0x13, 0x1413F), (0x17, 0x14143),
]
# v1.2 moved the boss gfx table (and the gfx ids) back by this much
BOSS_GFX_SHIFT_V2 = 7

# --- Boss health: offsets -> (draw range, minimum), stored doubled ---

BOSS_HP_GROUPS = [
    ([0x8FBB, 0x8FA9, 0x8E58], 3, 2),  # pigs
    ([0x8E52, 0x8E5B, 0x8E61], 4, 3),  # bird, octopus, rat
    ([0x8E5E, 0x8E55, 0x8E64, 0x8E67, 0x8E6A], 3, 3),  # tatanga, witch, wario
]

# --- Dual exits: secret level -> the two exit bytes to swap ---

DUAL_EXITS = [
    (0x02, (0x2A385, 0x29947)),
    (0x11, (0x4C8EB, 0x4CA7F)),
    (0x12, (0x4DA53, 0x4D27B)),
    (0x14, (0x54ACE, 0x5475A)),
    (0x07, (0x49215, 0x4949E)),
    (0x08, (0x49F61, 0x499A7)),
    (0x0F, (0x51D99, 0x51D29)),
]
# Slot whose current level decides which dual exits stay put
DUAL_EXIT_ANCHOR = 0x3C24A
DUAL_EXIT_ANCHOR_LEVEL = 0x11

# --- Gambling ---

GAMBLING_COST_SLOTS = [0x3F45F, 0x3F428, 0x3F3F1, 0x3F3BA]

# --- Bonus games ---

CONVEYOR_RANGES = [(0x60A58, 0x60A7F), (0x60A2F, 0x60A56), (0x60A1A, 0x60A2D)]
CONVEYOR_PRIZES = 5
WIRE_SLOTS = range(0x3E766, 0x3E770, 3)
WIRE_BASE = 0x2D
WIRE_CHOICES = 4


def randomize_gambling(ctx: PassContext) -> None:
    """Open up the slot machine table, then draw new costs.

    Tier ``i`` costs between ``20 + 140i`` and ``120 + 280i`` coins, written
    as ``cost % 100`` followed by ``cost // 100``.
    """
    ctx.rom = ctx.patches.slots(ctx.dx).apply(ctx.rom)
    rom = ctx.rom
    for index, offset in enumerate(GAMBLING_COST_SLOTS):
        cost_min = 20 + 140 * index
        cost_max = 120 + 280 * index
        cost = ctx.rng.randrange(cost_max - cost_min + 1) + cost_min
        rom[offset] = cost % 100
        rom[offset + 1] = cost // 100
        logger.debug("Gambling tier %d costs %d", index, cost)


def randomize_levels(ctx: PassContext) -> None:
    """Shuffle which level sits on each overworld node."""
    rom, rng = ctx.rom, ctx.rng
    levels = list(MAIN_LEVELS)
    slots = list(MAIN_LEVEL_SLOTS)

    if Flag.INCLUDE_SECRETS in ctx.mask:
        levels += SECRET_LEVELS
        slots += SECRET_LEVEL_SLOTS
    else:
        secrets = list(SECRET_LEVELS)
        rng.shuffle(secrets)
        for offset, level in zip(SECRET_LEVEL_SLOTS, secrets):
            rom[offset] = level

    rng.shuffle_avoiding(levels, FIRST_LEVEL_FORBIDDEN)
    for offset, level in zip(slots, levels):
        rom[offset] = level
    rom[MIRROR_SLOT] = rom[MIRROR_SOURCE]

    arenas = list(BOSS_ARENA_LEVELS)
    rng.shuffle(arenas)
    for (slot, clear_value), (level, clear_slot) in zip(BOSS_ARENA_SLOTS, arenas):
        rom[slot] = level
        rom[clear_slot] = clear_value


def randomize_bosses(ctx: PassContext) -> None:
    rom = ctx.rom
    gfx = list(BOSS_GFX)
    ctx.rng.shuffle(gfx)
    shift = BOSS_GFX_SHIFT_V2 if ctx.version == 2 else 0
    for (slot, gfx_byte), (level, gfx_slot) in zip(BOSS_SLOTS, gfx):
        rom[slot] = level
        rom[gfx_slot - shift] = gfx_byte - shift


def randomize_boss_health(ctx: PassContext) -> None:
    for offsets, spread, minimum in BOSS_HP_GROUPS:
        for offset in offsets:
            ctx.rom[offset] = 2 * (ctx.rng.randrange(spread) + minimum)


def _swap(rom: bytearray, first: int, second: int) -> None:
    rom[first], rom[second] = rom[second], rom[first]


def swap_dual_exits_random(ctx: PassContext) -> None:
    """Swap the two exits of each secret level with 50% probability."""
    for _level, (first, second) in DUAL_EXITS:
        if ctx.rng.randbool():
            _swap(ctx.rom, first, second)


def swap_dual_exits_all(ctx: PassContext) -> None:
    """Swap every dual exit.

    The level sitting on the anchor slot keeps its exits, and so does level
    0x11, unless 0x11 itself is the one on the anchor (then all swap).
    """
    rom = ctx.rom
    anchor = rom[DUAL_EXIT_ANCHOR]
    for level, (first, second) in DUAL_EXITS:
        if anchor == DUAL_EXIT_ANCHOR_LEVEL or (
            level != DUAL_EXIT_ANCHOR_LEVEL and anchor != level
        ):
            _swap(rom, first, second)


def randomize_bonus_games(ctx: PassContext) -> None:
    rom, rng = ctx.rom, ctx.rng
    for start, last in CONVEYOR_RANGES:
        for offset in range(start, last + 1):
            rom[offset] = rng.randrange(CONVEYOR_PRIZES)
    for offset in WIRE_SLOTS:
        rom[offset] = rng.randrange(WIRE_CHOICES) + WIRE_BASE
