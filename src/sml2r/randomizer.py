"""Randomizer entry point.

Builds a randomized image from a clean Super Mario Land 2 image, a feature
mask and a seed. The same image, mask and seed always produce the same bytes.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping

from sml2r.config import get_settings
from sml2r.errors import RomError
from sml2r.flags import MASK_MAX, FeatureMask, Flag, RandomizerOptions
from sml2r.passes import PassContext, run_pipeline
from sml2r.resources import PatchLibrary
from sml2r.rng import LCG, SEED_MAX, SEED_MIN, seed_in_range
from sml2r.rom import header

logger = logging.getLogger(__name__)

# Cleared on every randomized image so easy mode cannot be selected
EASY_MODE_SWITCH = 0x30388

Options = int | RandomizerOptions | Mapping[str, bool]


def random_seed() -> int:
    """Pick a fresh seed in the accepted range."""
    return random.randint(SEED_MIN, SEED_MAX)


def _mask_from(options: Options) -> FeatureMask | None:
    """Build a mask, or None for an out-of-range integer."""
    if isinstance(options, int):
        if not 0 <= options <= MASK_MAX:
            return None
        return FeatureMask.from_int(options)
    return FeatureMask.from_options(options)


class Randomizer:
    """Randomizes one image.

    Usage:
        randomizer = Randomizer(rom_bytes, 0x000001, seed=0x12345678)
        if randomizer.valid:
            out = randomizer.randomize()

    ``valid`` reports whether the input looks like a clean, non-DX image.
    It is the caller's job to check it before calling ``randomize``.
    """

    def __init__(
        self,
        rom: bytes | bytearray,
        options: Options = 0,
        seed: int | None = None,
        patches: PatchLibrary | None = None,
    ):
        self._rom = bytes(rom)
        self._version = header.version(self._rom) if len(self._rom) > header.VERSION_OFFSET else 0
        self.mask = _mask_from(options) or FeatureMask()
        self._seed = seed if seed_in_range(seed) else random_seed()
        if patches is None:
            patches = PatchLibrary(get_settings().patches_dir)
        self.patches = patches
        self.valid = header.is_valid(self._rom)
        self.passes_run: list[str] = []

    @property
    def seed(self) -> int:
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Change the seed. Out-of-range values are ignored."""
        if seed_in_range(seed):
            self._seed = seed

    def get_seed(self) -> str:
        return f"{self._seed:X}"

    def set_flags(self, options: Options) -> None:
        """Change the feature mask. An out-of-range integer is ignored."""
        mask = _mask_from(options)
        if mask is not None:
            self.mask = mask

    def get_flags(self) -> str:
        return self.mask.to_hex()

    def get_version(self) -> str:
        return f"v1.{self._version}"

    def randomize(self) -> bytearray:
        """Build the randomized image.

        Raises ResourceError if a patch is missing, PatchError if one is
        malformed and RomError if the patched image has the wrong size. The
        input image is never modified.
        """
        rng = LCG(self._seed)
        dx = Flag.DX in self.mask
        rom = self.patches.base(dx, self._version).apply(self._rom)

        expected = header.expected_size(rom)
        if len(rom) != expected:
            raise RomError(
                f"Patched image is 0x{len(rom):x} bytes, expected 0x{expected:x}"
            )

        logger.info(
            "Randomizing %s with seed %s, flags %s",
            self.get_version(),
            self.get_seed(),
            self.get_flags(),
        )
        ctx = PassContext(
            rom=rom, rng=rng, mask=self.mask, version=self._version, patches=self.patches
        )
        self.passes_run = run_pipeline(ctx)

        ctx.rom[EASY_MODE_SWITCH] = 0x00
        header.write_checksums(ctx.rom)
        return ctx.rom
