"""Cartridge header: identification, layout variant and checksums."""

import logging
from collections.abc import MutableSequence, Sequence

logger = logging.getLogger(__name__)

TITLE_OFFSET = 0x134
TITLE = b"MARIOLAND2\x00"
SIZE_CLASS_OFFSET = 0x148
VERSION_OFFSET = 0x14C
HEADER_CHECKSUM_OFFSET = 0x14D
GLOBAL_CHECKSUM_OFFSET = 0x14E

# Size class written by the DX patch (1 MiB image)
SIZE_CLASS_DX = 0x05

IMAGE_SIZE = 0x80000
IMAGE_SIZE_DX = 0x100000

# The header checksum sums 0x134..0x14C and then adds this constant
HEADER_CHECKSUM_BIAS = 25


def is_dx(rom: Sequence[int]) -> bool:
    return rom[SIZE_CLASS_OFFSET] == SIZE_CLASS_DX


def version(rom: Sequence[int]) -> int:
    """Return the minor revision (the N of v1.N)."""
    return rom[VERSION_OFFSET]


def expected_size(rom: Sequence[int]) -> int:
    return IMAGE_SIZE_DX if is_dx(rom) else IMAGE_SIZE


def is_valid(rom: Sequence[int]) -> bool:
    """Check the title string and that this is not an already-DX image."""
    if len(rom) <= VERSION_OFFSET:
        return False
    title = bytes(rom[TITLE_OFFSET : TITLE_OFFSET + len(TITLE)])
    return title == TITLE and not is_dx(rom)


def global_checksum(rom: Sequence[int]) -> int:
    """16-bit sum of the image, skipping the two global checksum bytes."""
    last = IMAGE_SIZE_DX - 1 if is_dx(rom) else IMAGE_SIZE - 1
    total = sum(rom[:GLOBAL_CHECKSUM_OFFSET])
    total += sum(rom[GLOBAL_CHECKSUM_OFFSET + 2 : last + 1])
    return total & 0xFFFF


def header_checksum(rom: Sequence[int]) -> int:
    total = sum(rom[TITLE_OFFSET : VERSION_OFFSET + 1]) + HEADER_CHECKSUM_BIAS
    return (0 - (total & 0xFF)) & 0xFF


def write_checksums(rom: MutableSequence[int]) -> tuple[int, int]:
    """Recompute both checksums in place. Must run after every other write.

    The global sum is taken before the header byte is refreshed.
    """
    csum = global_checksum(rom)
    rom[GLOBAL_CHECKSUM_OFFSET] = (csum >> 8) & 0xFF
    rom[GLOBAL_CHECKSUM_OFFSET + 1] = csum & 0xFF
    comp = header_checksum(rom)
    rom[HEADER_CHECKSUM_OFFSET] = comp
    logger.debug("Checksums written: global=0x%04x header=0x%02x", csum, comp)
    return csum, comp
