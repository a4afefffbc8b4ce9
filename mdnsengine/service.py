"""Description of a service offered on the local network."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Service:
    """A service available on the local network.

    ``name`` is combined with ``type`` (for example ``_http._tcp.local.``)
    to form the fully qualified name of the service.  Boolean TXT
    attributes map to ``None``.
    """

    type: bytes = b""
    name: bytes = b""
    hostname: bytes = b""
    port: int = 0
    attributes: dict[bytes, Optional[bytes]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.type = bytes(self.type)
        self.name = bytes(self.name)
        self.hostname = bytes(self.hostname)
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")
        self.attributes = {
            bytes(key): None if value is None else bytes(value)
            for key, value in self.attributes.items()
        }

    def add_attribute(self, key: bytes, value: Optional[bytes]) -> None:
        """Set an attribute, replacing any existing value for the key."""
        self.attributes[bytes(key)] = None if value is None else bytes(value)