"""Minimal signal and single-shot timer primitives."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional


class Signal:
    """A list of callables invoked together when the signal is emitted."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        """Register ``slot`` to be called on every emission."""
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove a previously connected slot.

        Raises ValueError if the slot is not connected.
        """
        try:
            self._slots.remove(slot)
        except ValueError:
            raise ValueError("slot is not connected") from None

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``, in connection order."""
        for slot in list(self._slots):
            slot(*args)

    def __len__(self) -> int:
        return len(self._slots)


class Timer:
    """A single-shot timer that calls ``callback`` once it expires.

    Starting an active timer restarts it.  The callback runs on a
    background thread.
    """

    def __init__(self, callback: Callable[[], Any]) -> None:
        self._callback = callback
        self._lock = threading.Lock()
        self._thread: Optional[threading.Timer] = None
        self._generation = 0
        self._interval: Optional[int] = None

    @property
    def interval(self) -> Optional[int]:
        """The interval in milliseconds last passed to start()."""
        return self._interval

    def start(self, msec: Optional[int] = None) -> None:
        """Start or restart the timer; without ``msec`` the last interval is reused."""
        if msec is None:
            if self._interval is None:
                raise ValueError("no interval given and none set before")
            msec = self._interval
        self._interval = msec
        delay = max(0, msec) / 1000.0
        with self._lock:
            if self._thread is not None:
                self._thread.cancel()
            self._generation += 1
            generation = self._generation
            thread = threading.Timer(delay, self._fire, args=(generation,))
            thread.daemon = True
            self._thread = thread
        thread.start()

    def stop(self) -> None:
        """Stop the timer; a pending expiry will not call the callback."""
        with self._lock:
            if self._thread is not None:
                self._thread.cancel()
                self._thread = None
            self._generation += 1

    def is_active(self) -> bool:
        """Whether the timer is running and has not yet expired."""
        with self._lock:
            return self._thread is not None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._thread = None
        self._callback()