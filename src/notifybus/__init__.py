"""Top-level package for notifybus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .bus import ErrorPolicy, EventBus, Subscription
    from .config import load_config
    from .exceptions import (
        ConfigValidationError,
        NotifyBusError,
        SubscriberDispatchError,
    )

__all__ = [
    "ConfigValidationError",
    "ErrorPolicy",
    "EventBus",
    "NotifyBusError",
    "SubscriberDispatchError",
    "Subscription",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols so config and logging stacks load only when used."""
    if name in {"ErrorPolicy", "EventBus", "Subscription"}:
        from .bus import ErrorPolicy, EventBus, Subscription

        return {
            "ErrorPolicy": ErrorPolicy,
            "EventBus": EventBus,
            "Subscription": Subscription,
        }[name]
    if name == "load_config":
        from .config import load_config

        return load_config
    if name in {"ConfigValidationError", "NotifyBusError", "SubscriberDispatchError"}:
        from .exceptions import (
            ConfigValidationError,
            NotifyBusError,
            SubscriberDispatchError,
        )

        return {
            "ConfigValidationError": ConfigValidationError,
            "NotifyBusError": NotifyBusError,
            "SubscriberDispatchError": SubscriberDispatchError,
        }[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
