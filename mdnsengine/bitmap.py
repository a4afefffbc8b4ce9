"""Type bitmap carried by NSEC records."""

from __future__ import annotations

from dataclasses import dataclass

MAX_LENGTH = 255


@dataclass(frozen=True)
class Bitmap:
    """Block 0 of an NSEC type bitmap.

    mDNS uses only the first window block, so the bitmap is at most
    255 bytes long.  The bytes are copied on construction.
    """

    data: bytes = b""

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) > MAX_LENGTH:
            raise ValueError(
                f"bitmap holds at most {MAX_LENGTH} bytes, got {len(data)}"
            )
        object.__setattr__(self, "data", data)

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data