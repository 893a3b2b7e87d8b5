"""Shared fixtures: synthetic images and in-memory patch libraries."""

from pathlib import Path

import pytest

from sml2r.errors import ResourceError
from sml2r.passes import PassContext
from sml2r.resources import PatchLibrary
from sml2r.rng import LCG
from sml2r.rom import header
from sml2r.rom.patcher import IpsPatch, LiteralRecord, RunRecord

EMPTY_IPS = b"PATCH" + b"EOF"


def make_rom(version: int = 0, size: int = header.IMAGE_SIZE, size_class: int = 0x04) -> bytearray:
    """A zero-filled image with a valid title, revision and size class."""
    rom = bytearray(size)
    rom[header.TITLE_OFFSET : header.TITLE_OFFSET + len(header.TITLE)] = header.TITLE
    rom[header.SIZE_CLASS_OFFSET] = size_class
    rom[header.VERSION_OFFSET] = version
    return rom


def dx_patch() -> bytes:
    """Grow the image to 1 MiB and mark it as DX."""
    return IpsPatch(
        records=[
            LiteralRecord(offset=header.SIZE_CLASS_OFFSET, data=bytes([header.SIZE_CLASS_DX])),
            # The image is zero-extended up to the last record
            RunRecord(offset=header.IMAGE_SIZE_DX - 0x10, count=0x10, value=0x00),
        ]
    ).to_bytes()


def slots_patch() -> bytes:
    """Stand-in for the gambling table patch."""
    return IpsPatch(records=[LiteralRecord(offset=0x3F3B0, data=b"\x01\x02\x03")]).to_bytes()


class MemoryPatchLibrary(PatchLibrary):
    """Patch library backed by in-memory IPS blobs, keyed by file name."""

    def __init__(self, blobs: dict[str, bytes]):
        super().__init__(Path("<memory>"))
        self.blobs = dict(blobs)

    def load(self, name: str) -> IpsPatch:
        if name not in self.blobs:
            raise ResourceError(f"Patch not found: {name}")
        return IpsPatch.from_bytes(self.blobs[name], name=name)


class ConstantRng(LCG):
    """Generator whose ``random()`` always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return self.value


@pytest.fixture
def clean_rom():
    return make_rom()


@pytest.fixture
def patches():
    return MemoryPatchLibrary({
        "base.ips": EMPTY_IPS,
        "base_v2.ips": EMPTY_IPS,
        "base_dx.ips": dx_patch(),
        "base_dx_v2.ips": dx_patch(),
        "slots.ips": slots_patch(),
        "slots_dx.ips": slots_patch(),
    })


@pytest.fixture
def make_ctx(patches):
    """Build a PassContext around an image, a generator and a mask."""
    from sml2r.flags import FeatureMask

    def _make(rom=None, rng=None, mask=0, version=0):
        return PassContext(
            rom=rom if rom is not None else make_rom(version=version),
            rng=rng if rng is not None else LCG(0x10000000),
            mask=FeatureMask(mask),
            version=version,
            patches=patches,
        )

    return _make
