"""Time-limited store of DNS records."""

from __future__ import annotations

import random
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from mdnsengine.dns import RecordType
from mdnsengine.events import Signal, Timer
from mdnsengine.record import Record

# Fractions of the TTL (in per mille) at which a renewal query is due.
_QUERY_POINTS = (500, 850, 900, 950)
_RANDOM_OFFSET_MS = 20


def _same_record(a: Record, b: Record) -> bool:
    """Compare two records on their content, ignoring TTL and cache flush."""
    return (
        a.name == b.name
        and a.type == b.type
        and a.address == b.address
        and a.target == b.target
        and a.next_domain_name == b.next_domain_name
        and a.priority == b.priority
        and a.weight == b.weight
        and a.port == b.port
        and a.attributes == b.attributes
        and a.bitmap == b.bitmap
    )


@dataclass
class _Entry:
    record: Record
    triggers: list[float] = field(default_factory=list)


class Cache:
    """Cache for DNS records.

    Records stay in the cache until their TTL runs out.  ``should_query``
    is emitted with a record at roughly 50%, 85%, 90% and 95% of its
    lifetime; ``record_expired`` is emitted when it is removed.

    ``timer_factory`` builds a single-shot timer from a callback and
    ``clock`` returns the current time in seconds; both exist so that the
    cache can be driven by hand.
    """

    def __init__(
        self,
        timer_factory: Optional[Callable[[Callable[[], Any]], Any]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.should_query = Signal()
        self.record_expired = Signal()
        self._clock = clock if clock is not None else time.monotonic
        factory = timer_factory if timer_factory is not None else Timer
        self._timer = factory(self.on_timeout)
        self._entries: list[_Entry] = []
        self._next_trigger: Optional[float] = None
        self._lock = threading.RLock()

    @staticmethod
    def _msecs_between(start: float, end: float) -> int:
        return max(0, round((end - start) * 1000))

    def add_record(self, record: Record) -> None:
        """Add ``record``, replacing matching records and resetting expiry.

        A record with the cache-flush bit replaces every record of the same
        name and type.  A TTL of zero removes the matching record and
        reports it as expired.
        """
        expired: list[Record] = []
        with self._lock:
            kept: list[_Entry] = []
            removed_goodbye = False
            for index, entry in enumerate(self._entries):
                matches = (
                    record.flush_cache
                    and entry.record.name == record.name
                    and entry.record.type == record.type
                ) or _same_record(entry.record, record)
                if not matches:
                    kept.append(entry)
                    continue
                if record.ttl == 0:
                    expired.append(entry.record)
                    kept.extend(self._entries[index + 1:])
                    removed_goodbye = True
                    break
            self._entries = kept

            if not removed_goodbye:
                now = self._clock()
                offset = random.randrange(_RANDOM_OFFSET_MS)
                triggers = [
                    now + (record.ttl * point + offset) / 1000.0
                    for point in _QUERY_POINTS
                ]
                triggers.append(now + float(record.ttl))
                self._entries.append(_Entry(record, triggers))

                if self._next_trigger is None or triggers[0] < self._next_trigger:
                    self._next_trigger = triggers[0]
                    self._timer.start(self._msecs_between(now, self._next_trigger))

        for old in expired:
            self.record_expired.emit(old)

    def lookup_records(self, name: Optional[bytes], type: int) -> list[Record]:
        """Return all records matching ``name`` and ``type``.

        ``name`` of None matches any name and ``RecordType.ANY`` any type.
        """
        with self._lock:
            return [
                entry.record
                for entry in self._entries
                if (name is None or entry.record.name == name)
                and (type == RecordType.ANY or entry.record.type == type)
            ]

    def lookup_record(self, name: Optional[bytes], type: int) -> Optional[Record]:
        """Return the first matching record, or None if there is none."""
        records = self.lookup_records(name, type)
        return records[0] if records else None

    def on_timeout(self) -> None:
        """Process passed triggers: request renewals and drop expired records."""
        events: list[tuple[Signal, Record]] = []
        with self._lock:
            now = self._clock()
            new_next: Optional[float] = None
            kept: list[_Entry] = []
            for entry in self._entries:
                passed = False
                while entry.triggers and entry.triggers[0] <= now:
                    entry.triggers.pop(0)
                    passed = True
                if entry.triggers:
                    if new_next is None or entry.triggers[0] < new_next:
                        new_next = entry.triggers[0]
                    if passed:
                        events.append((self.should_query, entry.record))
                    kept.append(entry)
                else:
                    events.append((self.record_expired, entry.record))
            self._entries = kept
            self._next_trigger = new_next
            if new_next is not None:
                self._timer.start(self._msecs_between(now, new_next))

        for signal, record in events:
            signal.emit(record)