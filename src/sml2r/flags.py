"""Feature mask: which randomization passes run.

``Flag`` is the single source of truth for bit meanings. A mask can be built
from a raw 24-bit int or from named booleans (``RandomizerOptions``); both
routes go through the same normalization.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntFlag

from pydantic import BaseModel, Field

MASK_MAX = 0xFFFFFF


class Flag(IntFlag):
    LOCATIONS = 1 << 0
    INCLUDE_SECRETS = 1 << 1
    BOSS_LOCATIONS = 1 << 2
    BOSS_HEALTH = 1 << 3
    RANDOM_EXIT_SWAP = 1 << 4
    SWAP_ALL_EXITS = 1 << 5
    GAMBLING_COSTS = 1 << 6
    BONUS_GAMES = 1 << 7
    ENEMIES = 1 << 8
    POWERUPS = 1 << 9
    PLATFORMS = 1 << 10
    GRAVITY = 1 << 11
    SCROLLING = 1 << 12
    FAST_SCROLL = 1 << 13
    ALL_FAST_SCROLL = 1 << 14
    ICE_PHYSICS = 1 << 15
    LUIGI_PHYSICS = 1 << 16
    ALL_LUIGI = 1 << 17
    MUSIC = 1 << 18
    FAST_MUSIC = 1 << 19
    DISABLE_MUSIC = 1 << 20
    DISABLE_SFX = 1 << 21
    DX = 1 << 22


class RandomizerOptions(BaseModel):
    """Named feature toggles. Accepts snake_case names or camelCase aliases."""

    random_level_locations: bool = Field(default=False, alias="randomLevelLocations")
    include_dual_locations: bool = Field(default=False, alias="includeDualLocations")
    random_boss_locations: bool = Field(default=False, alias="randomBossLocations")
    random_boss_health: bool = Field(default=False, alias="randomBossHealth")
    random_swap_dual_exits: bool = Field(default=False, alias="randomSwapDualExits")
    swap_all_dual_exits: bool = Field(default=False, alias="swapAllDualExits")
    random_gambling_costs: bool = Field(default=False, alias="randomGamblingCosts")
    random_bonus_games: bool = Field(default=False, alias="randomBonusGames")
    random_enemies: bool = Field(default=False, alias="randomEnemies")
    random_powerups: bool = Field(default=False, alias="randomPowerups")
    random_platforms: bool = Field(default=False, alias="randomPlatforms")
    random_gravity: bool = Field(default=False, alias="randomGravity")
    random_scrolling_levels: bool = Field(default=False, alias="randomScrollingLevels")
    random_fast_scrolling: bool = Field(default=False, alias="randomFastScrolling")
    all_fast_scrolling: bool = Field(default=False, alias="allFastScrolling")
    include_ice_physics: bool = Field(default=False, alias="includeIcePhysics")
    random_luigi_physics: bool = Field(default=False, alias="randomLuigiPhysics")
    all_luigi_physics: bool = Field(default=False, alias="allLuigiPhysics")
    random_music: bool = Field(default=False, alias="randomMusic")
    random_fast_music: bool = Field(default=False, alias="randomFastMusic")
    disable_music: bool = Field(default=False, alias="disableMusic")
    disable_sound_fx: bool = Field(default=False, alias="disableSoundFX")
    patch_dx: bool = Field(default=False, alias="patchDX")

    model_config = {"populate_by_name": True, "extra": "ignore"}


OPTION_FLAGS: dict[str, Flag] = {
    "random_level_locations": Flag.LOCATIONS,
    "include_dual_locations": Flag.INCLUDE_SECRETS,
    "random_boss_locations": Flag.BOSS_LOCATIONS,
    "random_boss_health": Flag.BOSS_HEALTH,
    "random_swap_dual_exits": Flag.RANDOM_EXIT_SWAP,
    "swap_all_dual_exits": Flag.SWAP_ALL_EXITS,
    "random_gambling_costs": Flag.GAMBLING_COSTS,
    "random_bonus_games": Flag.BONUS_GAMES,
    "random_enemies": Flag.ENEMIES,
    "random_powerups": Flag.POWERUPS,
    "random_platforms": Flag.PLATFORMS,
    "random_gravity": Flag.GRAVITY,
    "random_scrolling_levels": Flag.SCROLLING,
    "random_fast_scrolling": Flag.FAST_SCROLL,
    "all_fast_scrolling": Flag.ALL_FAST_SCROLL,
    "include_ice_physics": Flag.ICE_PHYSICS,
    "random_luigi_physics": Flag.LUIGI_PHYSICS,
    "all_luigi_physics": Flag.ALL_LUIGI,
    "random_music": Flag.MUSIC,
    "random_fast_music": Flag.FAST_MUSIC,
    "disable_music": Flag.DISABLE_MUSIC,
    "disable_sound_fx": Flag.DISABLE_SFX,
    "patch_dx": Flag.DX,
}

# (if all of these are set, clear this one)
_EXCLUSIVE = [
    (Flag.RANDOM_EXIT_SWAP | Flag.SWAP_ALL_EXITS, Flag.RANDOM_EXIT_SWAP),
    (Flag.FAST_SCROLL | Flag.ALL_FAST_SCROLL, Flag.FAST_SCROLL),
    (Flag.LUIGI_PHYSICS | Flag.ALL_LUIGI, Flag.LUIGI_PHYSICS),
]


def sanitize(value: int) -> int:
    """Resolve implied and mutually exclusive flags."""
    clean = int(value)
    if clean & Flag.INCLUDE_SECRETS:
        clean |= int(Flag.LOCATIONS)
    for both, loser in _EXCLUSIVE:
        if (clean & both) == both:
            clean &= ~int(loser)
    return clean


@dataclass(frozen=True)
class FeatureMask:
    """A normalized 24-bit feature mask."""

    value: int = 0

    def __post_init__(self):
        if not 0 <= self.value <= MASK_MAX:
            raise ValueError(f"Feature mask must fit in 24 bits, got 0x{self.value:x}")
        object.__setattr__(self, "value", sanitize(self.value))

    @classmethod
    def from_int(cls, value: int) -> FeatureMask:
        return cls(value)

    @classmethod
    def from_options(
        cls, options: RandomizerOptions | Mapping[str, bool]
    ) -> FeatureMask:
        if not isinstance(options, RandomizerOptions):
            options = RandomizerOptions.model_validate(dict(options))
        value = 0
        for name, flag in OPTION_FLAGS.items():
            if getattr(options, name):
                value |= flag
        return cls(value)

    @classmethod
    def from_hex(cls, text: str) -> FeatureMask:
        return cls(int(text, 16))

    def __contains__(self, flag: Flag) -> bool:
        return bool(self.value & flag)

    @property
    def flags(self) -> list[Flag]:
        return [flag for flag in Flag if self.value & flag]

    def to_hex(self) -> str:
        return f"{self.value:06X}"

    def to_options(self) -> RandomizerOptions:
        return RandomizerOptions(
            **{name: bool(self.value & flag) for name, flag in OPTION_FLAGS.items()}
        )
