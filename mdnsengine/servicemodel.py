"""Ordered list of the services a browser has discovered."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional, Union

from mdnsengine.abstractserver import AbstractServer
from mdnsengine.browser import Browser
from mdnsengine.cache import Cache
from mdnsengine.events import Signal
from mdnsengine.service import Service


class Role(Enum):
    """Kind of data requested from a row of the model."""

    DISPLAY = "display"
    USER = "user"


class ServiceModel:
    """A list of discovered services, kept in the order they appeared.

    ``rows_inserted``, ``data_changed`` and ``rows_removed`` are emitted
    with the row index affected.
    """

    def __init__(
        self,
        server: AbstractServer,
        type: bytes,
        cache: Optional[Cache] = None,
        timer_factory: Optional[Callable[[Callable[[], Any]], Any]] = None,
    ) -> None:
        self.rows_inserted = Signal()
        self.data_changed = Signal()
        self.rows_removed = Signal()
        self._services: list[Service] = []
        self.cache = cache if cache is not None else Cache(timer_factory=timer_factory)
        self.browser = Browser(server, type, self.cache, timer_factory)
        self.browser.service_added.connect(self._on_service_added)
        self.browser.service_updated.connect(self._on_service_updated)
        self.browser.service_removed.connect(self._on_service_removed)

    def __len__(self) -> int:
        return len(self._services)

    def row_count(self) -> int:
        """Number of services in the model."""
        return len(self._services)

    def data(self, row: int, role: Role) -> Union[str, Service, None]:
        """Return the display text or the service at ``row``.

        Returns None for a row out of range or an unknown role.
        """
        if not 0 <= row < len(self._services):
            return None
        service = self._services[row]
        if role is Role.DISPLAY:
            name = service.name.decode("utf-8", errors="replace")
            kind = service.type.decode("utf-8", errors="replace")
            return f"{name} ({kind})"
        if role is Role.USER:
            return service
        return None

    def close(self) -> None:
        """Stop the underlying browser."""
        self.browser.close()

    def _find_service(self, name: bytes) -> Optional[int]:
        return next(
            (row for row, service in enumerate(self._services) if service.name == name),
            None,
        )

    def _on_service_added(self, service: Service) -> None:
        self._services.append(service)
        self.rows_inserted.emit(len(self._services) - 1)

    def _on_service_updated(self, service: Service) -> None:
        row = self._find_service(service.name)
        if row is not None:
            self._services[row] = service
            self.data_changed.emit(row)

    def _on_service_removed(self, service: Service) -> None:
        row = self._find_service(service.name)
        if row is not None:
            del self._services[row]
            self.rows_removed.emit(row)