"""Seeded randomizer for Super Mario Land 2 images."""

__version__ = "0.1.0"

from sml2r.errors import PatchError, RandomizerError, ResourceError, RomError
from sml2r.flags import FeatureMask, Flag, RandomizerOptions
from sml2r.randomizer import Randomizer

__all__ = [
    "FeatureMask",
    "Flag",
    "PatchError",
    "Randomizer",
    "RandomizerError",
    "RandomizerOptions",
    "ResourceError",
    "RomError",
    "__version__",
]
