"""Music and sound passes."""

from sml2r.passes.base import PassContext

OVERWORLD_MUSIC_SLOTS = [
    0x3004F, 0x3EA9B, 0x3D186, 0x3D52B, 0x3D401, 0x3D297, 0x3D840, 0x3D694, 0x3D758,
]
OVERWORLD_TRACKS = [0x05, 0x06, 0x0E, 0x10, 0x12, 0x1B, 0x1C, 0x1E]

LEVEL_MUSIC_SLOTS = range(0x5619, 0x5886, 0x14)
LEVEL_TRACKS = [0x01, 0x0B, 0x11, 0x13, 0x14, 0x17, 0x1D, 0x1F, 0x28]

# Rarely every level (and the first overworld) plays the star theme
ALL_STAR_CHANCE = 0.02
STAR_TRACK = 0x1D
ALL_STAR_OVERWORLD_SLOT = 0x3004F

FAST_MUSIC_SLOTS = [
    0x1205C, 0x1251F, 0x12B45, 0x12CF2, 0x12E9B, 0x131A6, 0x13879, 0x13A38, 0x13EC6,
]
FAST_MUSIC_CHANCE = 0.3
FAST_MUSIC_TEMPO_STEP = 0x04

MUSIC_SWITCH = 0x10047
SFX_SWITCH = 0x100E1
# xor a: the sound routine always sees zero
DISABLED = 0xAF


def randomize_music(ctx: PassContext) -> None:
    rom, rng = ctx.rom, ctx.rng
    for offset in OVERWORLD_MUSIC_SLOTS:
        rom[offset] = rng.choice(OVERWORLD_TRACKS)

    if rng.random() < ALL_STAR_CHANCE:
        rom[ALL_STAR_OVERWORLD_SLOT] = STAR_TRACK
        for offset in LEVEL_MUSIC_SLOTS:
            rom[offset] = STAR_TRACK
    else:
        for offset in LEVEL_MUSIC_SLOTS:
            rom[offset] = rng.choice(LEVEL_TRACKS)


def randomize_fast_music(ctx: PassContext) -> None:
    rom = ctx.rom
    for offset in FAST_MUSIC_SLOTS:
        if ctx.rng.random() < FAST_MUSIC_CHANCE:
            rom[offset] = (rom[offset] + FAST_MUSIC_TEMPO_STEP) & 0xFF
            rom[offset + 1] = rom[offset + 3]


def disable_music(ctx: PassContext) -> None:
    ctx.rom[MUSIC_SWITCH] = DISABLED


def disable_sfx(ctx: PassContext) -> None:
    ctx.rom[SFX_SWITCH] = DISABLED
