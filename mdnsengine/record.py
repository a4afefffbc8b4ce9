"""DNS resource record."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Optional, Union

from mdnsengine.bitmap import Bitmap

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _check_range(field_name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{field_name} out of range: {value}")


@dataclass
class Record:
    """A single DNS record.

    Not every record type uses every field: ``address`` belongs to A and
    AAAA records, ``target`` to PTR and SRV, ``priority``, ``weight`` and
    ``port`` to SRV, ``attributes`` to TXT and ``next_domain_name`` and
    ``bitmap`` to NSEC.  TXT attributes without a value map to ``None``.
    """

    name: bytes = b""
    type: int = 0
    flush_cache: bool = False
    ttl: int = 3600
    address: Optional[Address] = None
    target: bytes = b""
    next_domain_name: bytes = b""
    priority: int = 0
    weight: int = 0
    port: int = 0
    attributes: dict[bytes, Optional[bytes]] = field(default_factory=dict)
    bitmap: Bitmap = field(default_factory=Bitmap)

    def __post_init__(self) -> None:
        self.name = bytes(self.name)
        self.target = bytes(self.target)
        self.next_domain_name = bytes(self.next_domain_name)
        if self.address is not None and not isinstance(
            self.address, (ipaddress.IPv4Address, ipaddress.IPv6Address)
        ):
            self.address = ipaddress.ip_address(self.address)
        if not isinstance(self.bitmap, Bitmap):
            self.bitmap = Bitmap(self.bitmap)
        self.attributes = dict(self.attributes)
        _check_range("type", self.type, 16)
        _check_range("ttl", self.ttl, 32)
        _check_range("priority", self.priority, 16)
        _check_range("weight", self.weight, 16)
        _check_range("port", self.port, 16)

    def add_attribute(self, key: bytes, value: Optional[bytes]) -> None:
        """Set a TXT attribute, replacing any existing value for the key."""
        self.attributes[bytes(key)] = None if value is None else bytes(value)