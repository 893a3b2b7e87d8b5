"""Shared state handed to every randomization pass."""

from collections.abc import Callable
from dataclasses import dataclass

from sml2r.flags import FeatureMask, Flag
from sml2r.rng import LCG
from sml2r.rom import header
from sml2r.resources import PatchLibrary


@dataclass
class PassContext:
    """Working image plus the single generator all passes draw from.

    ``rom`` may be replaced by a pass that applies a patch; passes must
    always go through ``ctx.rom`` rather than holding on to the buffer.
    """

    rom: bytearray
    rng: LCG
    mask: FeatureMask
    version: int
    patches: PatchLibrary

    @property
    def dx(self) -> bool:
        return header.is_dx(self.rom)

    @property
    def level_shift(self) -> int:
        """Offset of the per-level property tables for this revision."""
        return 0 if self.version == 0 else 3


@dataclass(frozen=True)
class Pass:
    flag: Flag
    name: str
    run: Callable[[PassContext], None]
