"""In-process event bus with per-event subscriber lists.

Usage:
    bus = EventBus()

    def on_price(data):
        print(f"Price changed: {data['price']}")

    unsubscribe = bus.subscribe("iphone13", on_price)
    bus.publish("iphone13", {"name": "iphone13", "price": 1000})
    unsubscribe()

Dispatch is synchronous. ``publish`` takes a snapshot of the subscriber list
before invoking anyone, so subscribers added while a dispatch is running are
first called on the next ``publish``, and subscribers removed mid-dispatch
still receive the payload already in flight.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from enum import Enum
import itertools
import logging
import threading
from typing import Any

from .exceptions import SubscriberDispatchError

LOGGER = logging.getLogger(__name__)

Subscriber = Callable[[Any], Any]


class ErrorPolicy(str, Enum):
    """How ``publish`` reacts when a subscriber raises."""

    RAISE = "raise"
    COLLECT = "collect"


@dataclass(frozen=True)
class _Entry:
    token: int
    callback: Subscriber


@dataclass(frozen=True)
class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`.

    Calling the handle is the same as ``bus.unsubscribe(event, callback)``:
    every entry for that callback object under ``event`` is removed, including
    entries created by other ``subscribe`` calls with the same callback.
    Use :meth:`cancel` to remove only the entry this handle was created for.
    """

    bus: EventBus = field(repr=False, compare=False)
    event: Hashable
    callback: Subscriber
    token: int

    def __call__(self) -> None:
        self.bus.unsubscribe(self.event, self.callback)

    def cancel(self) -> None:
        """Remove only the registry entry created together with this handle."""
        self.bus._discard(self.event, self.token)

    @property
    def active(self) -> bool:
        """True while the entry created with this handle is still registered."""
        return self.bus._is_registered(self.event, self.token)


class EventBus:
    """Publish/subscribe registry keyed by event name.

    Each instance owns its registry. Event keys are created on first
    subscription and kept for the lifetime of the bus, even once their
    subscriber list is empty.
    """

    def __init__(self, error_policy: ErrorPolicy | str = ErrorPolicy.RAISE) -> None:
        self._subscribers: dict[Hashable, list[_Entry]] = {}
        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self.error_policy = ErrorPolicy(error_policy)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> EventBus:
        """Build a bus from the ``[bus]`` section of a loaded config."""
        bus_config = config.get("bus", {})
        return cls(error_policy=bus_config.get("error_policy", ErrorPolicy.RAISE))

    def subscribe(self, event: Hashable, callback: Subscriber) -> Subscription:
        """Register ``callback`` for ``event`` and return its handle.

        Args:
            event: Event to listen for (e.g., "iphone13")
            callback: Called with the payload each time the event is published

        The same callback may be registered several times; each call adds a
        separate entry.
        """
        if not callable(callback):
            raise TypeError(f"Subscriber for {event!r} must be callable.")
        with self._lock:
            token = next(self._tokens)
            self._subscribers.setdefault(event, []).append(_Entry(token, callback))
        LOGGER.debug(
            "bus.subscribe",
            extra={"event": "bus.subscribe", "event_name": event, "token": token},
        )
        return Subscription(bus=self, event=event, callback=callback, token=token)

    def unsubscribe(self, event: Hashable, callback: Subscriber) -> None:
        """Remove every entry for ``callback`` under ``event``.

        Args:
            event: Event to stop listening to
            callback: Subscriber to remove, matched by identity

        Unknown events and absent callbacks are ignored.
        """
        with self._lock:
            entries = self._subscribers.get(event)
            if entries is None:
                return
            remaining = [entry for entry in entries if entry.callback is not callback]
            self._subscribers[event] = remaining
        removed = len(entries) - len(remaining)
        if removed:
            LOGGER.debug(
                "bus.unsubscribe",
                extra={"event": "bus.unsubscribe", "event_name": event, "removed": removed},
            )

    def publish(self, event: Hashable, data: Any = None) -> None:
        """Deliver ``data`` to every subscriber of ``event`` in subscription order.

        Args:
            event: Event name
            data: Payload handed unchanged to each subscriber

        With ``ErrorPolicy.RAISE`` the first subscriber exception propagates
        and the remaining subscribers are skipped. With
        ``ErrorPolicy.COLLECT`` all subscribers run and a
        :class:`SubscriberDispatchError` is raised afterwards if any failed.
        """
        with self._lock:
            snapshot = tuple(self._subscribers.get(event, ()))

        if not snapshot:
            LOGGER.debug(
                "bus.publish.no_subscribers",
                extra={"event": "bus.publish.no_subscribers", "event_name": event},
            )
            return

        if self.error_policy is ErrorPolicy.RAISE:
            for entry in snapshot:
                entry.callback(data)
            return

        failures: list[tuple[Subscriber, Exception]] = []
        for entry in snapshot:
            try:
                entry.callback(data)
            except Exception as exc:
                LOGGER.warning(
                    "bus.subscriber.failed",
                    extra={
                        "event": "bus.subscriber.failed",
                        "event_name": event,
                        "token": entry.token,
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )
                failures.append((entry.callback, exc))
        if failures:
            raise SubscriberDispatchError(event, failures) from failures[0][1]

    def subscribers(self, event: Hashable) -> tuple[Subscriber, ...]:
        """Return the callbacks registered for ``event`` in dispatch order."""
        with self._lock:
            return tuple(entry.callback for entry in self._subscribers.get(event, ()))

    def events(self) -> tuple[Hashable, ...]:
        """Return every event name seen by ``subscribe``, oldest first."""
        with self._lock:
            return tuple(self._subscribers)

    def __contains__(self, event: object) -> bool:
        with self._lock:
            return event in self._subscribers

    def _discard(self, event: Hashable, token: int) -> None:
        with self._lock:
            entries = self._subscribers.get(event)
            if entries is None:
                return
            self._subscribers[event] = [entry for entry in entries if entry.token != token]

    def _is_registered(self, event: Hashable, token: int) -> bool:
        with self._lock:
            return any(entry.token == token for entry in self._subscribers.get(event, ()))
