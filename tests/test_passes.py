"""Tests for the individual randomization passes."""

import pytest
from conftest import ConstantRng, make_rom

from sml2r.flags import Flag
from sml2r.passes import PIPELINE, audio, levels, objects, physics, run_pipeline
from sml2r.rng import LCG
from sml2r.rom import header, sprites


class ScriptedRng(LCG):
    """Generator that replays a fixed list of ``random()`` values."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


def _place(rom: bytearray, offset: int, sprite: int, a: int = 0x03, b: int = 0x05) -> None:
    rom[offset], rom[offset + 1] = sprites.insert(a, b, sprite)


# ============================================================
# Pipeline
# ============================================================


class TestPipeline:
    def test_every_flag_but_dx_has_one_pass(self):
        flags = [step.flag for step in PIPELINE]
        assert len(flags) == len(set(flags))
        assert set(flags) == set(Flag) - {Flag.DX, Flag.INCLUDE_SECRETS}

    def test_gambling_runs_first(self):
        assert PIPELINE[0].flag == Flag.GAMBLING_COSTS
        assert PIPELINE[1].flag == Flag.LOCATIONS

    def test_disabled_passes_do_not_draw(self, make_ctx):
        rng = ConstantRng(0.5)
        ctx = make_ctx(rng=rng, mask=0)
        assert run_pipeline(ctx) == []
        assert rng.draws == 0


# ============================================================
# Levels, bosses and tables
# ============================================================


class TestLevels:
    def test_with_secrets_every_slot_is_shuffled_together(self, make_ctx):
        ctx = make_ctx(mask=Flag.LOCATIONS | Flag.INCLUDE_SECRETS)
        levels.randomize_levels(ctx)
        slots = levels.MAIN_LEVEL_SLOTS + levels.SECRET_LEVEL_SLOTS
        placed = [ctx.rom[offset] for offset in slots]
        assert sorted(placed) == sorted(levels.MAIN_LEVELS + levels.SECRET_LEVELS)
        assert ctx.rom[levels.MAIN_LEVEL_SLOTS[0]] != levels.FIRST_LEVEL_FORBIDDEN
        assert ctx.rom[levels.MIRROR_SLOT] == ctx.rom[levels.MIRROR_SOURCE]

    @pytest.mark.parametrize("seed", [0x10000000, 0x2468ACE0, 0xDEADBEEF, 0xFFFFFFFF])
    def test_first_slot_never_forbidden(self, make_ctx, seed):
        ctx = make_ctx(rng=LCG(seed), mask=Flag.LOCATIONS)
        levels.randomize_levels(ctx)
        assert ctx.rom[levels.MAIN_LEVEL_SLOTS[0]] != levels.FIRST_LEVEL_FORBIDDEN

    def test_boss_arenas_keep_their_clear_values(self, make_ctx):
        ctx = make_ctx(mask=Flag.LOCATIONS)
        levels.randomize_levels(ctx)
        clear_by_level = {level: clear for level, clear in levels.BOSS_ARENA_LEVELS}
        for slot, clear_value in levels.BOSS_ARENA_SLOTS:
            level = ctx.rom[slot]
            assert level in clear_by_level
            assert ctx.rom[clear_by_level[level]] == clear_value

    @pytest.mark.parametrize("version,shift", [(0, 0), (1, 0), (2, levels.BOSS_GFX_SHIFT_V2)])
    def test_bosses(self, make_ctx, version, shift):
        ctx = make_ctx(version=version)
        levels.randomize_bosses(ctx)
        gfx_by_level = {level: gfx_slot for level, gfx_slot in levels.BOSS_GFX}
        placed = []
        for slot, gfx_byte in levels.BOSS_SLOTS:
            level = ctx.rom[slot]
            placed.append(level)
            assert ctx.rom[gfx_by_level[level] - shift] == gfx_byte - shift
        assert sorted(placed) == sorted(level for level, _ in levels.BOSS_GFX)

    def test_boss_health_ranges(self, make_ctx):
        allowed = [{4, 6, 8}, {6, 8, 10, 12}, {6, 8, 10}]
        for seed in (0x10000000, 0x33333333, 0xCAFEBABE):
            ctx = make_ctx(rng=LCG(seed))
            levels.randomize_boss_health(ctx)
            for (offsets, _, _), values in zip(levels.BOSS_HP_GROUPS, allowed):
                for offset in offsets:
                    assert ctx.rom[offset] in values

    def test_boss_health_extremes(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        levels.randomize_boss_health(ctx)
        assert ctx.rom[0x8FBB] == 4
        assert ctx.rom[0x8E52] == 6
        ctx = make_ctx(rng=ConstantRng(0.999))
        levels.randomize_boss_health(ctx)
        assert ctx.rom[0x8FBB] == 8
        assert ctx.rom[0x8E52] == 12
        assert ctx.rom[0x8E6A] == 10

    def test_gambling_applies_table_patch_then_costs(self, make_ctx):
        ctx = make_ctx(mask=Flag.GAMBLING_COSTS)
        before = ctx.rom
        levels.randomize_gambling(ctx)
        assert ctx.rom is not before
        assert ctx.rom[0x3F3B0:0x3F3B3] == b"\x01\x02\x03"
        for index, offset in enumerate(levels.GAMBLING_COST_SLOTS):
            cost = ctx.rom[offset] + 100 * ctx.rom[offset + 1]
            assert 20 + 140 * index <= cost <= 120 + 280 * index
            assert ctx.rom[offset] < 100

    def test_gambling_top_cost(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.9999))
        levels.randomize_gambling(ctx)
        offset = levels.GAMBLING_COST_SLOTS[3]
        assert (ctx.rom[offset], ctx.rom[offset + 1]) == (60, 9)  # 960 coins

    def test_bonus_games(self, make_ctx):
        ctx = make_ctx()
        levels.randomize_bonus_games(ctx)
        for start, last in levels.CONVEYOR_RANGES:
            assert all(0 <= ctx.rom[o] < 5 for o in range(start, last + 1))
        assert all(0x2D <= ctx.rom[o] <= 0x30 for o in levels.WIRE_SLOTS)

    def test_reference_levels(self, make_ctx):
        ctx = make_ctx(rng=LCG(0x10000000), mask=Flag.LOCATIONS)
        levels.randomize_levels(ctx)
        secrets = [0x07, 0x0F, 0x11, 0x08, 0x14, 0x12, 0x02]
        main = [
            0x1C, 0x0E, 0x00, 0x1B, 0x15, 0x0C, 0x0B, 0x1A, 0x1E,
            0x04, 0x06, 0x1D, 0x16, 0x01, 0x03, 0x0A, 0x1F, 0x19,
        ]
        assert [ctx.rom[o] for o in levels.SECRET_LEVEL_SLOTS] == secrets
        assert [ctx.rom[o] for o in levels.MAIN_LEVEL_SLOTS] == main
        arenas = [levels.BOSS_ARENA_LEVELS[i] for i in (2, 5, 0, 3, 4, 1)]
        for (slot, clear_value), (level, clear_slot) in zip(levels.BOSS_ARENA_SLOTS, arenas):
            assert ctx.rom[slot] == level
            assert ctx.rom[clear_slot] == clear_value
        # 6 + 17 secret/main swaps, no reshuffle, then 5 arena swaps
        reference = LCG(0x10000000)
        for _ in range(28):
            reference.next()
        assert ctx.rng.state == reference.state

    def test_reference_boss_health(self, make_ctx):
        ctx = make_ctx(rng=LCG(0x10000000))
        levels.randomize_boss_health(ctx)
        offsets = [offset for group, _, _ in levels.BOSS_HP_GROUPS for offset in group]
        assert [ctx.rom[o] for o in offsets] == [4, 8, 4, 10, 6, 6, 8, 10, 6, 6, 6]

    def test_reference_gambling(self, make_ctx):
        ctx = make_ctx(rng=LCG(0x10000000))
        levels.randomize_gambling(ctx)
        costs = [(ctx.rom[o], ctx.rom[o + 1]) for o in levels.GAMBLING_COST_SLOTS]
        assert costs == [(24, 0), (62, 3), (50, 3), (20, 8)]


def _mark_exits(rom: bytearray) -> None:
    for _, (first, second) in levels.DUAL_EXITS:
        rom[first] = 0xA0
        rom[second] = 0xB0


def _swapped(rom: bytearray) -> dict[int, bool]:
    return {level: rom[first] == 0xB0 for level, (first, _) in levels.DUAL_EXITS}


class TestDualExits:
    def test_all_swap_keeps_anchor_and_level_11(self, make_ctx):
        ctx = make_ctx()
        _mark_exits(ctx.rom)
        ctx.rom[levels.DUAL_EXIT_ANCHOR] = 0x07
        levels.swap_dual_exits_all(ctx)
        swapped = _swapped(ctx.rom)
        assert not swapped[0x07]
        assert not swapped[0x11]
        assert all(swapped[level] for level in (0x02, 0x08, 0x0F, 0x12, 0x14))

    def test_all_swap_when_anchor_holds_level_11(self, make_ctx):
        ctx = make_ctx()
        _mark_exits(ctx.rom)
        ctx.rom[levels.DUAL_EXIT_ANCHOR] = 0x11
        levels.swap_dual_exits_all(ctx)
        assert all(_swapped(ctx.rom).values())

    def test_random_swap(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.1))
        _mark_exits(ctx.rom)
        levels.swap_dual_exits_random(ctx)
        assert all(_swapped(ctx.rom).values())

        ctx = make_ctx(rng=ConstantRng(0.6))
        _mark_exits(ctx.rom)
        levels.swap_dual_exits_random(ctx)
        assert not any(_swapped(ctx.rom).values())
        assert ctx.rng.draws == len(levels.DUAL_EXITS)


# ============================================================
# Objects
# ============================================================


class TestEnemies:
    def test_pool_substitution_keeps_position_bits(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        _place(ctx.rom, 0xE077, 0x08, a=0x0A, b=0x1B)
        _place(ctx.rom, 0xE07A, 0x30)
        objects.randomize_enemies(ctx)
        assert sprites.read_at(ctx.rom, 0xE077) == 0x3A
        assert ctx.rom[0xE077] & 0x0F == 0x0A
        assert ctx.rom[0xE078] & 0x1F == 0x1B
        assert sprites.read_at(ctx.rom, 0xE07A) == 0x30

    def test_pool_draws_stay_in_pool(self, make_ctx):
        rom = make_rom()
        for k in range(10):
            _place(rom, 0xE5C2 + 3 * k, 0x3D)
        ctx = make_ctx(rom=rom, rng=LCG(0x7654321F))
        objects.randomize_enemies(ctx)
        pool = objects.ENEMY_RANGES[13][0]
        assert all(sprites.read_at(rom, 0xE5C2 + 3 * k) in pool for k in range(10))

    def test_conditional_pool_depends_on_current_sprite(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        _place(ctx.rom, 0xE2A2, 0x4F)
        _place(ctx.rom, 0xE4FA, 0x49)
        objects.randomize_enemies(ctx)
        # first entry of each pool
        assert sprites.read_at(ctx.rom, 0xE2A2) == 0x4D
        assert sprites.read_at(ctx.rom, 0xE4FA) == 0x01

    def test_conditional_keeps_unlisted_sprites(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        _place(ctx.rom, 0xE2A2, 0x50)
        objects.randomize_enemies(ctx)
        assert sprites.read_at(ctx.rom, 0xE2A2) == 0x50

    def test_conditional_ranges_step_over_0xff(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        _place(ctx.rom, 0xE2A3, 0x4F)
        _place(ctx.rom, 0xE2A5, 0x4F)
        ctx.rom[0xE2A2] = 0xFF
        objects.randomize_enemies(ctx)
        # 0xE2A3 sits off the 3-byte grid and is never read
        assert sprites.read_at(ctx.rom, 0xE2A3) == 0x4F
        assert sprites.read_at(ctx.rom, 0xE2A5) == 0x4D

    def test_thwomps(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.05))
        objects.randomize_enemies(ctx)
        assert all(ctx.rom[o] == objects.THWOMP_FAST for o in objects.THWOMP_SLOTS)
        ctx = make_ctx(rng=ConstantRng(0.5))
        objects.randomize_enemies(ctx)
        assert all(ctx.rom[o] == objects.THWOMP_NORMAL for o in objects.THWOMP_SLOTS)

    def test_piranha_plants_outside_skipped_levels(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        _place(ctx.rom, 0xEAD0, 0x0C)
        _place(ctx.rom, 0xE30C, 0x0C)
        objects.randomize_enemies(ctx)
        assert sprites.read_at(ctx.rom, 0xEAD0) == 0x0D
        assert sprites.read_at(ctx.rom, 0xE30C) == 0x0C


class TestPowerups:
    def test_level_01_keeps_its_rare_powerup(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        _place(ctx.rom, 0xE0BF, 0x1F)
        _place(ctx.rom, 0xE0C2, 0x0F)
        objects.randomize_powerups(ctx)
        assert sprites.read_at(ctx.rom, 0xE0BF) == 0x1F
        assert sprites.read_at(ctx.rom, 0xE0C2) == 0x1E

    def test_rare_powerup_elsewhere(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        _place(ctx.rom, 0xE12B, 0x1F)
        _place(ctx.rom, 0xE12E, 0x0F)
        _place(ctx.rom, 0xE131, 0x11)
        objects.randomize_powerups(ctx)
        assert sprites.read_at(ctx.rom, 0xE12B) == 0x1F
        assert sprites.read_at(ctx.rom, 0xE12E) == 0x1E
        assert sprites.read_at(ctx.rom, 0xE131) == 0x19

    def test_common_powerups_never_become_rare(self, make_ctx):
        rom = make_rom()
        offsets = [0xE12B + 3 * k for k in range(40)]
        for offset in offsets:
            _place(rom, offset, 0x1B)
        for seed in (0x10000000, 0x89ABCDEF):
            ctx = make_ctx(rom=rom, rng=LCG(seed))
            objects.randomize_powerups(ctx)
            assert all(sprites.read_at(rom, o) in objects.FREE_POWERUPS[:-1] for o in offsets)

    def test_fixed_slots(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        objects.randomize_powerups(ctx)
        assert all(ctx.rom[o] == 0x1B for o in objects.FIXED_POWERUP_SLOTS)


class TestPlatforms:
    def test_castle_platforms(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        ctx.rom[0xE9A3] = objects.CASTLE_PLATFORM_MARKER
        objects.randomize_platforms(ctx)
        assert ctx.rom[0xE9A3] == 0x57 + 7
        assert ctx.rom[0xE9A6] == 0x38 + 7

    def test_platform_pool(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        _place(ctx.rom, 0xE24A, 0x3D)
        objects.randomize_platforms(ctx)
        assert sprites.read_at(ctx.rom, 0xE24A) == 0x38


# ============================================================
# Physics
# ============================================================


class TestGravity:
    @pytest.mark.parametrize("version", [0, 1])
    def test_every_draw_succeeds(self, make_ctx, version):
        ctx = make_ctx(rng=ConstantRng(0.0), version=version)
        v = ctx.level_shift
        rom = ctx.rom
        rom[0x1F91 + v] = physics.GRAVITY_NONE
        rom[0x1F92 + v] = physics.GRAVITY_LIGHT
        rom[0x1F93 + v] = physics.GRAVITY_HEAVY
        rom[0x1F94 + v] = 0x05
        rom[0x1F98 + v] = physics.GRAVITY_HEAVY
        physics.randomize_gravity(ctx)
        assert rom[0x1F91 + v] == physics.GRAVITY_LIGHT
        assert rom[0x1F92 + v] == physics.GRAVITY_NONE
        assert rom[0x1F93 + v] == physics.GRAVITY_NONE
        assert rom[0x1F94 + v] == 0x05
        assert rom[0x1F98 + v] == physics.GRAVITY_HEAVY

    def test_second_roll_and_blocked_level(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.07))
        physics.randomize_gravity(ctx)
        assert ctx.rom[0x1F91] == physics.GRAVITY_HEAVY
        assert ctx.rom[physics.GRAVITY_NO_HEAVY] == physics.GRAVITY_NONE
        assert ctx.rom[physics.GRAVITY_LAST] == physics.GRAVITY_HEAVY
        assert ctx.rom[physics.GRAVITY_LAST + 1] == 0x00
        # 30 levels, each rolling twice; the blocked level still draws
        assert ctx.rng.draws == 60

    def test_reference_walk(self, make_ctx):
        ctx = make_ctx(rng=LCG(0x10000000))
        physics.randomize_gravity(ctx)
        expected = bytearray(0x20)
        expected[0x00] = physics.GRAVITY_LIGHT
        expected[0x16] = physics.GRAVITY_HEAVY
        expected[0x1D] = physics.GRAVITY_LIGHT
        expected[0x1F] = physics.GRAVITY_HEAVY
        assert ctx.rom[physics.GRAVITY_START : physics.GRAVITY_LAST + 1] == expected
        # two draws per level except where the first roll succeeded
        reference = LCG(0x10000000)
        for _ in range(58):
            reference.next()
        assert ctx.rng.state == reference.state

    def test_nothing_changes_on_high_draws(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        ctx.rom[0x1F95] = physics.GRAVITY_LIGHT
        before = bytes(ctx.rom)
        physics.randomize_gravity(ctx)
        assert bytes(ctx.rom) == before


class TestScrolling:
    def test_off_levels_turn_on(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        physics.randomize_scrolling(ctx)
        assert all(ctx.rom[level] == physics.SCROLL_ON for level in physics.SCROLLING_LEVELS)
        assert ctx.rom[0x1F75] == physics.SCROLL_OFF

    def test_level_12_bell_becomes_money_bag(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        ctx.rom[physics.LEVEL_12_SCROLLING] = physics.SCROLL_ON
        _place(ctx.rom, physics.LEVEL_12_BELL, 0x45, a=0x0A, b=0x11)
        physics.randomize_scrolling(ctx)
        assert ctx.rom[physics.LEVEL_12_SCROLLING] == physics.SCROLL_ON
        assert sprites.read_at(ctx.rom, physics.LEVEL_12_BELL) == physics.MONEY_BAG
        assert ctx.rom[physics.LEVEL_12_BELL : physics.LEVEL_12_BELL + 2] == b"\x66\xE7"

    def test_level_12_heavy_gravity_forces_scrolling_off(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99), version=1)
        ctx.rom[physics.LEVEL_12_SCROLLING + 3] = physics.SCROLL_ON
        ctx.rom[physics.LEVEL_12_GRAVITY + 3] = physics.GRAVITY_HEAVY
        _place(ctx.rom, physics.LEVEL_12_BELL, 0x45)
        physics.randomize_scrolling(ctx)
        assert ctx.rom[physics.LEVEL_12_SCROLLING + 3] == physics.SCROLL_OFF
        assert sprites.read_at(ctx.rom, physics.LEVEL_12_BELL) == 0x45


class TestFastScroll:
    def _scrolling(self, ctx, *levels_on):
        for level in levels_on:
            ctx.rom[physics.SCROLLING_TABLE + ctx.level_shift + level] = physics.SCROLL_ON

    def test_all_levels(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        self._scrolling(ctx, 0x00, 0x01, 0x0C, 0x11)
        physics.fast_scroll_all(ctx)
        table = physics.SCROLL_SPEED_TABLE[0]
        assert ctx.rom[table + 0x00] == physics.SCROLL_FAST
        assert ctx.rom[table + 0x0C] == physics.SCROLL_FAST
        assert ctx.rom[table + 0x11] == physics.SCROLL_FAST
        assert ctx.rom[table + 0x01] == 0x00
        assert ctx.rng.draws == 0

    def test_conditional_levels_excluded(self, make_ctx):
        ctx = make_ctx()
        self._scrolling(ctx, 0x0C, 0x11)
        ctx.rom[physics.FIRST_LEVEL_SLOT] = physics.LEVEL_0C
        ctx.rom[physics.LEVEL_11_GRAVITY] = physics.GRAVITY_HEAVY
        physics.fast_scroll_all(ctx)
        table = physics.SCROLL_SPEED_TABLE[0]
        assert ctx.rom[table + 0x0C] == 0x00
        assert ctx.rom[table + 0x11] == 0x00

    def test_random_draws_only_for_scrolling_levels(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.3))
        self._scrolling(ctx, 0x05, 0x09)
        physics.fast_scroll_random(ctx)
        table = physics.SCROLL_SPEED_TABLE[0]
        assert ctx.rom[table + 0x05] == physics.SCROLL_FAST
        assert ctx.rom[table + 0x09] == physics.SCROLL_FAST
        assert ctx.rng.draws == 2


class TestPhysicsTables:
    def test_ice(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.05))
        table = physics.SPEED_TABLE[0]
        ctx.rom[table : table + 0x20] = bytes([0x03]) * 0x20
        physics.randomize_ice_physics(ctx)
        assert ctx.rom[table : table + 0x20] == bytes(0x20)

    def test_ice_rarely(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.5))
        table = physics.SPEED_TABLE[0]
        ctx.rom[table : table + 0x20] = bytes([0x03]) * 0x20
        physics.randomize_ice_physics(ctx)
        assert ctx.rom[table : table + 0x20] == bytes([0x03]) * 0x20

    def test_all_luigi(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.99))
        physics.luigi_physics_all(ctx)
        jump, speed = physics.JUMP_TABLE[0], physics.SPEED_TABLE[0]
        assert ctx.rom[jump : jump + 0x20] == bytes([physics.LUIGI_JUMP]) * 0x20
        assert ctx.rom[speed : speed + 0x20] == bytes([physics.LUIGI_SPEED]) * 0x20
        assert ctx.rng.draws == 0

    def test_dx_unset_levels_may_get_mario_physics(self, make_ctx):
        rom = make_rom(size=header.IMAGE_SIZE_DX, size_class=header.SIZE_CLASS_DX)
        jump, speed = physics.JUMP_TABLE[1], physics.SPEED_TABLE[1]
        rom[jump : jump + 0x20] = bytes([physics.DX_UNSET]) * 0x20
        # level 0: no Luigi, Mario; every other level: neither
        values = [0.5, 0.1] + [0.5, 0.5] * 0x1F
        ctx = make_ctx(rom=rom, rng=ScriptedRng(values))
        physics.luigi_physics_random(ctx)
        assert rom[jump] == physics.MARIO_JUMP
        assert rom[speed] == physics.MARIO_SPEED
        assert rom[jump + 1 : jump + 0x20] == bytes([physics.DX_UNSET]) * 0x1F
        assert ctx.rng.values == []

    def test_luigi_random_normal_image(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.1))
        physics.luigi_physics_random(ctx)
        jump = physics.JUMP_TABLE[0]
        assert ctx.rom[jump : jump + 0x20] == bytes([physics.LUIGI_JUMP]) * 0x20
        assert ctx.rng.draws == 0x20


# ============================================================
# Audio
# ============================================================


class TestAudio:
    def test_music_pools(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.5))
        audio.randomize_music(ctx)
        assert all(ctx.rom[o] == 0x12 for o in audio.OVERWORLD_MUSIC_SLOTS)
        assert all(ctx.rom[o] == 0x14 for o in audio.LEVEL_MUSIC_SLOTS)

    def test_music_seeded_draws_stay_in_pools(self, make_ctx):
        ctx = make_ctx(rng=LCG(0x13572468))
        audio.randomize_music(ctx)
        assert all(ctx.rom[o] in audio.OVERWORLD_TRACKS + [audio.STAR_TRACK] for o in audio.OVERWORLD_MUSIC_SLOTS)
        assert all(ctx.rom[o] in audio.LEVEL_TRACKS for o in audio.LEVEL_MUSIC_SLOTS)

    def test_all_star(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        audio.randomize_music(ctx)
        assert ctx.rom[audio.ALL_STAR_OVERWORLD_SLOT] == audio.STAR_TRACK
        assert all(ctx.rom[o] == audio.STAR_TRACK for o in audio.LEVEL_MUSIC_SLOTS)

    def test_fast_music(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.0))
        for offset in audio.FAST_MUSIC_SLOTS:
            ctx.rom[offset] = 0xFE
            ctx.rom[offset + 3] = 0x42
        audio.randomize_fast_music(ctx)
        for offset in audio.FAST_MUSIC_SLOTS:
            assert ctx.rom[offset] == 0x02
            assert ctx.rom[offset + 1] == 0x42

    def test_fast_music_skipped(self, make_ctx):
        ctx = make_ctx(rng=ConstantRng(0.3))
        audio.randomize_fast_music(ctx)
        assert all(ctx.rom[o] == 0 for o in audio.FAST_MUSIC_SLOTS)

    def test_disable_switches(self, make_ctx):
        ctx = make_ctx()
        audio.disable_music(ctx)
        audio.disable_sfx(ctx)
        assert ctx.rom[0x10047] == 0xAF
        assert ctx.rom[0x100E1] == 0xAF
