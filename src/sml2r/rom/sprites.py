"""Bit-packed entity descriptor codec.

Each object placed in a level is described by a 3-byte record. Its 7-bit
sprite id is scattered over the first two bytes:

    byte a:  i5 i4 i3 i6 p p p p
    byte b:  i2 i1 i0 p p p p p

where ``iN`` are bits of the id and ``p`` are positional bits that must be
preserved. Object lists are terminated by a single 0xFF byte.
"""

from collections.abc import Callable, Iterator, MutableSequence, Sequence

from sml2r.rng import LCG

SENTINEL = 0xFF
RECORD_SIZE = 3

A_KEEP_MASK = 0b00001111
B_KEEP_MASK = 0b00011111


def extract(a: int, b: int) -> int:
    """Decode the sprite id held in bytes ``a`` and ``b``."""
    x = (a & 0b00010000) << 2
    y = (a & 0b11100000) >> 2
    z = (b & 0b11100000) >> 5
    return x | y | z


def insert(a: int, b: int, sprite: int) -> tuple[int, int]:
    """Encode ``sprite`` into ``a`` and ``b``, keeping their positional bits."""
    x = (sprite & 0b01000000) >> 2
    y = (sprite & 0b00111000) << 2
    z = (sprite & 0b00000111) << 5
    return (a & A_KEEP_MASK) | x | y, (b & B_KEEP_MASK) | z


def read_at(rom: Sequence[int], offset: int) -> int:
    return extract(rom[offset], rom[offset + 1])


def write_at(rom: MutableSequence[int], offset: int, sprite: int) -> None:
    rom[offset], rom[offset + 1] = insert(rom[offset], rom[offset + 1], sprite)


def randomize_at(
    rom: MutableSequence[int], offset: int, pool: Sequence[int], rng: LCG
) -> int:
    """Replace the sprite at ``offset`` with a uniform pick from ``pool``."""
    sprite = rng.choice(pool)
    write_at(rom, offset, sprite)
    return sprite


def iter_records(
    rom: Sequence[int], start: int, end: int
) -> Iterator[tuple[int, int]]:
    """Yield ``(offset, sprite)`` at every 3-byte stride in ``[start, end)``.

    Unlike ``iter_entities`` a 0xFF byte is decoded like any other record.
    """
    for offset in range(start, end, RECORD_SIZE):
        yield offset, read_at(rom, offset)


def iter_entities(
    rom: Sequence[int],
    start: int,
    end: int,
    include: Callable[[int], bool] | None = None,
) -> Iterator[tuple[int, int]]:
    """Yield ``(offset, sprite)`` for every record in ``[start, end)``.

    The region is a run of 0xFF-terminated lists. A sentinel ends the current
    list and is never decoded; the next list starts on the byte after it.
    Offsets rejected by ``include`` are stepped over without looking for a
    sentinel.

    Bytes are read lazily, so the consumer may rewrite the record it was
    just handed before asking for the next one.
    """
    offset = start
    while offset < end:
        if include is not None and not include(offset):
            offset += RECORD_SIZE
            continue
        if rom[offset] == SENTINEL:
            offset += 1
            continue
        yield offset, read_at(rom, offset)
        offset += RECORD_SIZE
