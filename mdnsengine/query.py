"""DNS query."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Query:
    """A query for a DNS record of a given name and type."""

    name: bytes = b""
    type: int = 0
    unicast_response: bool = False

    def __post_init__(self) -> None:
        self.name = bytes(self.name)
        if not 0 <= self.type <= 0xFFFF:
            raise ValueError(f"query type out of range: {self.type}")