"""Base class for anything that sends and receives DNS messages."""

from __future__ import annotations

from abc import ABC, abstractmethod

from mdnsengine.events import Signal
from mdnsengine.message import Message


class AbstractServer(ABC):
    """Sends DNS messages and reports the ones it receives.

    ``message_received`` is emitted with each incoming
    :class:`~mdnsengine.message.Message`; ``error`` is emitted with a
    short description when something goes wrong.
    """

    def __init__(self) -> None:
        self.message_received = Signal()
        self.error = Signal()

    @abstractmethod
    def send_message(self, message: Message) -> None:
        """Send ``message`` to the address and port it names."""

    @abstractmethod
    def send_message_to_all(self, message: Message) -> None:
        """Send ``message`` to the mDNS multicast address on every interface."""