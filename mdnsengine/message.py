"""DNS message: header fields plus queries and records."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Optional

from mdnsengine.query import Query
from mdnsengine.record import Address, Record


@dataclass
class Message:
    """A DNS message.

    When received, ``address`` and ``port`` are where the message came
    from; when sending, they are its destination.
    """

    address: Optional[Address] = None
    port: int = 0
    transaction_id: int = 0
    is_response: bool = False
    is_truncated: bool = False
    queries: list[Query] = field(default_factory=list)
    records: list[Record] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.address is not None and not isinstance(
            self.address, (ipaddress.IPv4Address, ipaddress.IPv6Address)
        ):
            self.address = ipaddress.ip_address(self.address)
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")
        if not 0 <= self.transaction_id <= 0xFFFF:
            raise ValueError(f"transaction id out of range: {self.transaction_id}")
        self.queries = list(self.queries)
        self.records = list(self.records)

    def add_query(self, query: Query) -> None:
        """Append a query to the message."""
        self.queries.append(query)

    def add_record(self, record: Record) -> None:
        """Append a record to the message."""
        self.records.append(record)

    def reply(self, other: "Message") -> None:
        """Prepare this message as a response to ``other``.

        The destination address, port and transaction ID are taken from
        ``other`` and the message is marked as a response.
        """
        self.address = other.address
        self.port = other.port
        self.transaction_id = other.transaction_id
        self.is_response = True