"""Multicast DNS records, messages, record cache and service browsing."""

__version__ = "0.2.1"