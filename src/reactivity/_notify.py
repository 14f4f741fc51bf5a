"""Delivery engine — every holder notifies its subscribers through here.

Delivery is synchronous and depth-first: a subscriber that sets another
holder starts a nested delivery on the same call stack. The nesting depth is
tracked in a contextvar so a cycle between holders fails fast with
NotificationDepthError instead of overflowing the interpreter stack.
"""

from __future__ import annotations

import contextvars
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from reactivity.state import Subscription

T = TypeVar("T")

DEFAULT_MAX_DEPTH = 100

# Number of deliveries currently on the stack.
_depth: contextvars.ContextVar[int] = contextvars.ContextVar("notify_depth", default=0)

_max_depth: int = DEFAULT_MAX_DEPTH


class NotificationDepthError(RecursionError):
    """Raised when nested deliveries exceed the configured maximum depth.

    Almost always means two holders update each other in a cycle.
    """


def set_max_depth(depth: int) -> None:
    """Set the maximum nesting of deliveries, process-wide.

    Usage:
        reactivity.set_max_depth(20)
    """
    global _max_depth
    if depth < 1:
        raise ValueError(f"max depth must be at least 1, got {depth}")
    _max_depth = depth


def get_max_depth() -> int:
    return _max_depth


def deliver(subscriptions: list[Subscription[T]], value: T) -> None:
    """Call every subscription in order with value.

    Iterates a snapshot, so subscriptions added or disposed by a callback do
    not change who receives this pass. Exceptions propagate and stop the pass.
    """
    depth = _depth.get()
    if depth >= _max_depth:
        raise NotificationDepthError(
            f"notification nested deeper than {_max_depth} levels; "
            "holders are probably updating each other in a cycle"
        )
    token = _depth.set(depth + 1)
    try:
        for subscription in list(subscriptions):
            subscription.callback(value)
    finally:
        _depth.reset(token)
