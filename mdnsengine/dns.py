"""DNS record types and standard mDNS constants."""

from __future__ import annotations

import ipaddress
from enum import IntEnum


class RecordType(IntEnum):
    """DNS record types used by mDNS."""

    A = 1
    """IPv4 address record."""
    PTR = 12
    """Pointer to a hostname."""
    TXT = 16
    """Arbitrary metadata."""
    AAAA = 28
    """IPv6 address record."""
    SRV = 33
    """Service information."""
    NSEC = 47
    """List of available records."""
    ANY = 255
    """Wildcard for cache lookups."""


MDNS_PORT = 5353
"""Standard port for mDNS."""

MDNS_IPV4_ADDRESS = ipaddress.IPv4Address("224.0.0.251")
"""Standard IPv4 multicast address for mDNS."""

MDNS_IPV6_ADDRESS = ipaddress.IPv6Address("ff02::fb")
"""Standard IPv6 multicast address for mDNS."""

MDNS_BROWSE_TYPE = b"_services._dns-sd._udp.local."
"""Service type used when browsing for service types."""