"""Store-launch walkthrough used by the ``notifybus`` command."""

from __future__ import annotations

from collections.abc import Callable
import sys
from typing import Any, TextIO

from .bus import EventBus

IPHONE13 = {"name": "iphone13", "price": 1000}
IPHONE15 = {"name": "iphone15", "price": 1500}


def _interested(subscriber: str, product: str, out: TextIO) -> Callable[[Any], None]:
    def callback(data: Any) -> None:
        print(f"Subscriber {subscriber}: I am interested in {product} {data}", file=out)

    return callback


def run_store_demo(bus: EventBus, out: TextIO | None = None) -> None:
    """Two shoppers follow product launches; shopper A later drops iphone13."""
    out = out or sys.stdout
    unsubscribe_a13 = bus.subscribe("iphone13", _interested("A", "iphone13", out))
    bus.subscribe("iphone13", _interested("B", "iphone13", out))
    bus.subscribe("iphone15", _interested("A", "iphone15", out))

    print("Before Unsubscribed by A", file=out)
    bus.publish("iphone13", IPHONE13)
    bus.publish("iphone15", IPHONE15)

    unsubscribe_a13()
    print("After Unsubscribed by A", file=out)
    bus.publish("iphone13", IPHONE13)
