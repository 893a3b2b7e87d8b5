"""Image-level primitives: header, IPS patching and the sprite codec."""

from sml2r.rom.patcher import IpsPatch, LiteralRecord, RunRecord, apply_patch

__all__ = ["IpsPatch", "LiteralRecord", "RunRecord", "apply_patch"]
