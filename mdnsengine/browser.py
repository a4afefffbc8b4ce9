"""Discovery of services on the local network."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from mdnsengine.abstractserver import AbstractServer
from mdnsengine.cache import Cache
from mdnsengine.dns import MDNS_BROWSE_TYPE, RecordType
from mdnsengine.events import Signal, Timer
from mdnsengine.message import Message
from mdnsengine.query import Query
from mdnsengine.record import Record
from mdnsengine.service import Service

TimerFactory = Callable[[Callable[[], Any]], Any]


class Browser:
    """Browser for services of one type, or of any type.

    Pass ``MDNS_BROWSE_TYPE`` as ``type`` to browse for services of every
    type.  ``service_added`` is emitted once the PTR and SRV records of a
    service are known; ``service_updated`` when its SRV or TXT data
    changes; ``service_removed`` when its SRV record expires.

    A cache may be shared with other users; without one, the browser
    creates its own.  ``timer_factory`` builds a single-shot timer from a
    callback.
    """

    QUERY_INTERVAL_MS = 60 * 1000
    SERVICE_INTERVAL_MS = 100

    def __init__(
        self,
        server: AbstractServer,
        type: bytes,
        cache: Optional[Cache] = None,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        factory = timer_factory if timer_factory is not None else Timer
        self.service_added = Signal()
        self.service_updated = Signal()
        self.service_removed = Signal()

        self._server = server
        self._type = bytes(type)
        self._cache = cache if cache is not None else Cache(timer_factory=timer_factory)
        self._services: dict[bytes, Service] = {}
        self._hostnames: set[bytes] = set()
        self._ptr_targets: dict[bytes, None] = {}
        self._lock = threading.RLock()
        self._closed = False

        self._query_timer = factory(self.on_query_timeout)
        self._service_timer = factory(self.on_service_timeout)

        server.message_received.connect(self._on_message_received)
        self._cache.should_query.connect(self._on_should_query)
        self._cache.record_expired.connect(self._on_record_expired)

        self.on_query_timeout()

    @property
    def type(self) -> bytes:
        """The service type being browsed for."""
        return self._type

    @property
    def cache(self) -> Cache:
        """The cache holding the records the browser has seen."""
        return self._cache

    @property
    def services(self) -> dict[bytes, Service]:
        """Known services keyed by fully qualified name."""
        with self._lock:
            return dict(self._services)

    def close(self) -> None:
        """Stop browsing: detach from the server and cache and stop timers."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._server.message_received.disconnect(self._on_message_received)
            self._cache.should_query.disconnect(self._on_should_query)
            self._cache.record_expired.disconnect(self._on_record_expired)
            self._query_timer.stop()
            self._service_timer.stop()

    def _update_service(self, fq_name: bytes) -> bool:
        """Refresh the service named ``fq_name`` from the cache.

        Returns True when the PTR record is known but the SRV record is
        missing, meaning SRV and TXT records should be queried.
        """
        index = fq_name.find(b".")
        if index == -1:
            service_name = fq_name
            service_type = fq_name
        else:
            service_name = fq_name[:index]
            service_type = fq_name[index + 1:]

        if self._cache.lookup_record(service_type, RecordType.PTR) is None:
            return False

        srv_record = self._cache.lookup_record(fq_name, RecordType.SRV)
        if srv_record is None:
            return True

        service = Service(
            type=service_type,
            name=service_name,
            hostname=srv_record.target,
            port=srv_record.port,
        )

        txt_records = self._cache.lookup_records(fq_name, RecordType.TXT)
        if txt_records:
            attributes: dict[bytes, Optional[bytes]] = {}
            for record in txt_records:
                attributes.update(record.attributes)
            service.attributes = attributes

        previous = self._services.get(fq_name)
        if previous is None:
            self.service_added.emit(service)
        elif previous != service:
            self.service_updated.emit(service)

        self._services[fq_name] = service
        self._hostnames.add(service.hostname)
        return False

    def _on_message_received(self, message: Message) -> None:
        if not message.is_response:
            return
        with self._lock:
            if self._closed:
                return
            browse_any = self._type == MDNS_BROWSE_TYPE

            update_names: dict[bytes, None] = {}
            for record in message.records:
                cache_record = False
                if record.type == RecordType.PTR:
                    if browse_any and record.name == MDNS_BROWSE_TYPE:
                        self._ptr_targets[record.target] = None
                        self._service_timer.start(self.SERVICE_INTERVAL_MS)
                        cache_record = True
                    elif browse_any or record.name == self._type:
                        update_names[record.target] = None
                        cache_record = True
                elif record.type in (RecordType.SRV, RecordType.TXT):
                    if browse_any or record.name.endswith(b"." + self._type):
                        update_names[record.name] = None
                        cache_record = True
                if cache_record:
                    self._cache.add_record(record)

            query_names = [name for name in update_names if self._update_service(name)]

            # Addresses are cached only once the hostnames they belong to are known.
            for record in message.records:
                if (
                    record.type in (RecordType.A, RecordType.AAAA)
                    and record.name in self._hostnames
                ):
                    self._cache.add_record(record)

            if query_names:
                query_message = Message()
                for name in query_names:
                    query_message.add_query(Query(name=name, type=RecordType.SRV))
                    query_message.add_query(Query(name=name, type=RecordType.TXT))
                self._server.send_message_to_all(query_message)

    def _on_should_query(self, record: Record) -> None:
        # Every cached record is assumed to be in use, so renew it.
        with self._lock:
            if self._closed:
                return
        message = Message()
        message.add_query(Query(name=record.name, type=record.type))
        self._server.send_message_to_all(message)

    def _on_record_expired(self, record: Record) -> None:
        with self._lock:
            if self._closed:
                return
            if record.type == RecordType.TXT:
                self._update_service(record.name)
                return
            if record.type != RecordType.SRV:
                return
            service = self._services.pop(record.name, None)
            if service is None:
                return
            self._hostnames = {s.hostname for s in self._services.values()}
        self.service_removed.emit(service)

    def on_query_timeout(self) -> None:
        """Send a PTR query for the browsed type, listing known answers."""
        with self._lock:
            if self._closed:
                return
            message = Message()
            message.add_query(Query(name=self._type, type=RecordType.PTR))
            for record in self._cache.lookup_records(self._type, RecordType.PTR):
                message.add_record(record)
            self._server.send_message_to_all(message)
            self._query_timer.start(self.QUERY_INTERVAL_MS)

    def on_service_timeout(self) -> None:
        """Query for services of each newly discovered service type."""
        with self._lock:
            if self._closed or not self._ptr_targets:
                return
            message = Message()
            for target in self._ptr_targets:
                message.add_query(Query(name=target, type=RecordType.PTR))
                for record in self._cache.lookup_records(target, RecordType.PTR):
                    message.add_record(record)
            self._server.send_message_to_all(message)
            self._ptr_targets.clear()