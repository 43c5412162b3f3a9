"""Domain exception hierarchy for the notification bus."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class NotifyBusError(RuntimeError):
    """Base class for all domain-level bus errors."""


class SubscriberDispatchError(NotifyBusError):
    """Raised after a collecting dispatch when one or more subscribers failed."""

    def __init__(
        self,
        event: Any,
        failures: list[tuple[Callable[[Any], Any], Exception]],
    ) -> None:
        self.event = event
        self.failures = list(failures)
        super().__init__(
            f"{len(self.failures)} subscriber(s) failed while publishing {event!r}"
        )


class ConfigValidationError(NotifyBusError):
    """Raised when configuration cannot be validated safely."""
