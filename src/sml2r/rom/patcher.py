"""IPS patch application.

Builds the working image from a base image plus an IPS diff.

Design principles:
- All-or-nothing: parse and check ALL records before writing ANY
- The base image is never modified; apply() returns a fresh buffer
- The output grows (zero-filled) to fit the furthest record
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sml2r.errors import PatchError

logger = logging.getLogger(__name__)

MAGIC = b"PATCH"
EOF_MARKER = b"EOF"
MAX_ADDRESS = 0xFFFFFF + 1  # 24-bit offsets


@dataclass
class LiteralRecord:
    """Copy ``data`` verbatim to ``offset``."""

    offset: int
    data: bytes

    @property
    def end(self) -> int:
        return self.offset + len(self.data)

    def write_into(self, buf: bytearray) -> None:
        buf[self.offset : self.end] = self.data

    def to_bytes(self) -> bytes:
        return (
            self.offset.to_bytes(3, "big")
            + len(self.data).to_bytes(2, "big")
            + self.data
        )


@dataclass
class RunRecord:
    """Write ``value`` ``count`` times starting at ``offset``."""

    offset: int
    count: int
    value: int

    @property
    def end(self) -> int:
        return self.offset + self.count

    def write_into(self, buf: bytearray) -> None:
        buf[self.offset : self.end] = bytes([self.value]) * self.count

    def to_bytes(self) -> bytes:
        return (
            self.offset.to_bytes(3, "big")
            + b"\x00\x00"
            + self.count.to_bytes(2, "big")
            + bytes([self.value])
        )


PatchRecord = LiteralRecord | RunRecord


@dataclass
class IpsPatch:
    """An ordered list of IPS records.

    Usage:
        patch = IpsPatch.load(Path("patches/base.ips"))
        rom = patch.apply(original)
    """

    records: list[PatchRecord] = field(default_factory=list)
    name: str = "<memory>"

    @property
    def required_size(self) -> int:
        """Smallest buffer size that holds every record."""
        return max((r.end for r in self.records), default=0)

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<memory>") -> IpsPatch:
        """Parse an IPS resource. Raises PatchError on any malformation."""
        if data[: len(MAGIC)] != MAGIC:
            raise PatchError(f"{name}: missing {MAGIC!r} header")

        records: list[PatchRecord] = []
        pos = len(MAGIC)
        size = len(data)

        while pos < size:
            if data[pos : pos + 3] == EOF_MARKER:
                break
            if pos + 5 > size:
                raise PatchError(
                    f"{name}: truncated record header at 0x{pos:x}"
                )
            offset = int.from_bytes(data[pos : pos + 3], "big")
            length = int.from_bytes(data[pos + 3 : pos + 5], "big")
            pos += 5

            record: PatchRecord
            if length == 0:
                if pos + 3 > size:
                    raise PatchError(f"{name}: truncated RLE record at 0x{pos:x}")
                count = int.from_bytes(data[pos : pos + 2], "big")
                if count == 0:
                    raise PatchError(
                        f"{name}: RLE record at 0x{offset:x} has zero length"
                    )
                record = RunRecord(offset=offset, count=count, value=data[pos + 2])
                pos += 3
            else:
                if pos + length > size:
                    raise PatchError(
                        f"{name}: record at 0x{offset:x} wants {length} bytes, "
                        f"only {size - pos} remain"
                    )
                record = LiteralRecord(offset=offset, data=bytes(data[pos : pos + length]))
                pos += length

            if record.end > MAX_ADDRESS:
                raise PatchError(
                    f"{name}: record at 0x{offset:x} runs past the 24-bit address space"
                )
            records.append(record)

        return cls(records=records, name=name)

    def to_bytes(self) -> bytes:
        return MAGIC + b"".join(r.to_bytes() for r in self.records) + EOF_MARKER

    def apply(self, base: bytes | bytearray) -> bytearray:
        """Return a patched copy of ``base``."""
        out = bytearray(base)
        needed = self.required_size
        if needed > len(out):
            logger.debug(
                "Growing image from 0x%x to 0x%x for %s", len(out), needed, self.name
            )
            out.extend(bytes(needed - len(out)))

        for record in self.records:
            record.write_into(out)

        logger.info("Applied %s (%d records)", self.name, len(self.records))
        return out

    @staticmethod
    def load(path: Path) -> IpsPatch:
        """Load an IPS patch from disk."""
        return IpsPatch.from_bytes(path.read_bytes(), name=path.name)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())


def apply_patch(base: bytes | bytearray, data: bytes, name: str = "<memory>") -> bytearray:
    """Parse ``data`` as IPS and apply it to a copy of ``base``."""
    return IpsPatch.from_bytes(data, name=name).apply(base)
