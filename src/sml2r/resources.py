"""Loading of IPS patch resources shipped alongside the randomizer."""

import logging
from pathlib import Path

from sml2r.errors import ResourceError
from sml2r.rom.patcher import IpsPatch

logger = logging.getLogger(__name__)

DEFAULT_PATCHES_DIR = Path(__file__).parent / "patches"


def base_patch_name(dx: bool, version: int) -> str:
    """Name of the patch that sets up the randomizer layout."""
    return f"base{'_dx' if dx else ''}{'_v2' if version == 2 else ''}.ips"


def slots_patch_name(dx: bool) -> str:
    """Name of the patch that opens up the gambling cost table."""
    return f"slots{'_dx' if dx else ''}.ips"


class PatchLibrary:
    """Reads IPS patches from a directory, caching parsed results."""

    def __init__(self, directory: Path | None = None):
        self.directory = Path(directory) if directory else DEFAULT_PATCHES_DIR
        self._cache: dict[str, IpsPatch] = {}

    def path_for(self, name: str) -> Path:
        return self.directory / name

    def load(self, name: str) -> IpsPatch:
        """Return the parsed patch ``name``. Raises ResourceError if absent."""
        if name in self._cache:
            return self._cache[name]

        path = self.path_for(name)
        if not path.is_file():
            raise ResourceError(f"Patch not found: {path}")

        logger.info("Loading patch %s", path)
        patch = IpsPatch.load(path)
        self._cache[name] = patch
        return patch

    def base(self, dx: bool, version: int) -> IpsPatch:
        return self.load(base_patch_name(dx, version))

    def slots(self, dx: bool) -> IpsPatch:
        return self.load(slots_patch_name(dx))

