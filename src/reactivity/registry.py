"""Listener registry — optional bookkeeping of live subscriptions.

A registry never takes part in delivery. It collects the Subscription handles
created while it is active so an application can audit how many are still
open and cancel them all at once, e.g. when a screen is torn down.

The active registry is context-scoped rather than global, so independent
tests or app sections each see only their own subscriptions.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from reactivity.state import Subscription

logger = logging.getLogger("reactivity.registry")

_current: contextvars.ContextVar[ListenerRegistry | None] = contextvars.ContextVar(
    "listener_registry", default=None
)


class ListenerRegistry:
    """Tracks Subscription handles for diagnostics and bulk disposal."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._dispose_rounds = 0

    def register(self, subscription: Subscription) -> None:
        self._subscriptions.append(subscription)

    def unregister(self, subscription: Subscription) -> bool:
        """Forget a subscription. Returns False if it was not tracked."""
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            return False
        return True

    @property
    def count(self) -> int:
        return len(self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def dispose_all(self) -> int:
        """Dispose every tracked subscription. Returns how many were open."""
        self._dispose_rounds += 1
        pending = list(self._subscriptions)
        logger.info(
            "[%d] disposing %d open listeners", self._dispose_rounds, len(pending)
        )
        self._subscriptions.clear()
        for subscription in pending:
            subscription.dispose()
        logger.info(
            "[%d] %d listeners open after dispose", self._dispose_rounds, self.count
        )
        return len(pending)

    def __repr__(self) -> str:
        return f"ListenerRegistry(count={self.count})"


def current_registry() -> ListenerRegistry | None:
    """The registry active in this context, if any."""
    return _current.get()


@contextmanager
def use_registry(registry: ListenerRegistry) -> Iterator[ListenerRegistry]:
    """Track every subscription created inside the block in registry.

    Usage:
        registry = ListenerRegistry()
        with use_registry(registry):
            name.subscribe(label.update)
        ...
        registry.dispose_all()
    """
    token = _current.set(registry)
    try:
        yield registry
    finally:
        _current.reset(token)
