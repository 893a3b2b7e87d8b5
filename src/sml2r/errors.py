"""Exceptions raised while building a randomized image."""


class RandomizerError(Exception):
    """Base class for fatal randomization errors."""


class PatchError(RandomizerError):
    """An IPS resource is malformed."""


class RomError(RandomizerError):
    """The image does not have the layout the passes expect."""


class ResourceError(RandomizerError, FileNotFoundError):
    """A required patch resource could not be found."""
