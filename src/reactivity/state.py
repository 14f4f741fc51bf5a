"""Value holders — state that notifies its subscribers on change.

A State owns one value and an ordered list of subscriptions. set() is a no-op
when the new value equals the current one; otherwise every subscriber is
called, in the order it subscribed, with the new value. subscribe() replays
the current value to the new subscriber before returning.

ReadableState is the read-only contract shared by every holder (State,
ComputedState, ReadOnlyState): get, subscribe, map.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from reactivity._notify import deliver
from reactivity.registry import ListenerRegistry, current_registry

if TYPE_CHECKING:
    from reactivity.computed import ComputedState

T = TypeVar("T")
R = TypeVar("R")

Callback = Callable[[T], None]


def changed(old: object, new: object) -> bool:
    """Value inequality, short-circuited on identity."""
    return old is not new and old != new


class Subscription(Generic[T]):
    """Handle for one subscribe() call. dispose() cancels that registration."""

    __slots__ = ("callback", "_subscribers", "_registry", "_on_detach", "_disposed")

    def __init__(
        self,
        subscribers: list[Subscription[T]],
        callback: Callback[T],
        registry: ListenerRegistry | None = None,
        on_detach: Callable[[], None] | None = None,
    ) -> None:
        self.callback = callback
        self._subscribers = subscribers
        self._registry = registry
        self._on_detach = on_detach
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Stop delivering to this callback. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        try:
            self._subscribers.remove(self)
        except ValueError:
            pass  # already detached
        if self._registry is not None:
            self._registry.unregister(self)
        if self._on_detach is not None:
            self._on_detach()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        name = getattr(self.callback, "__name__", repr(self.callback))
        return f"Subscription({name}, {state})"


def attach(
    subscribers: list[Subscription[T]],
    callback: Callback[T],
    value: T,
    on_detach: Callable[[], None] | None = None,
) -> Subscription[T]:
    """Append a subscription, register it with the active registry, replay value.

    on_detach runs after the subscription is disposed.
    """
    subscription = Subscription(subscribers, callback, current_registry(), on_detach)
    subscribers.append(subscription)
    if subscription._registry is not None:
        subscription._registry.register(subscription)
    callback(value)
    return subscription


class ReadableState(ABC, Generic[T]):
    """Read-only side of a holder: observe it without being able to set it."""

    __slots__ = ()

    @abstractmethod
    def get(self) -> T: ...

    @abstractmethod
    def subscribe(self, callback: Callback[T]) -> Subscription[T]:
        """Call callback with the current value now and with every later change."""

    def is_null(self) -> bool:
        return self.get() is None

    def map(self, fn: Callable[[T], R]) -> ComputedState[R]:
        """Derive a read-only holder whose value is fn(self.get()).

        Usage:
            price = State(10)
            label = price.map(lambda p: f"${p}")
            label.get()  # "$10"
            price.set(12)
            label.get()  # "$12"
        """
        from reactivity.computed import ComputedState

        return ComputedState(lambda: fn(self.get()), self)


class State(ReadableState[T]):
    """A mutable value holder with ordered, change-only notification."""

    __slots__ = ("_value", "_subscribers", "__weakref__")

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Subscription[T]] = []

    @classmethod
    def of(cls, initial: T) -> State[T]:
        return cls(initial)

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Adopt value and notify subscribers, unless it equals the current value."""
        if not changed(self._value, value):
            return
        self._value = value
        deliver(self._subscribers, value)

    def subscribe(self, callback: Callback[T]) -> Subscription[T]:
        return attach(self._subscribers, callback, self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class ReadOnlyState(ReadableState[T]):
    """View over another holder exposing only get, subscribe and map."""

    __slots__ = ("_source",)

    def __init__(self, source: ReadableState[T]) -> None:
        self._source = source

    def get(self) -> T:
        return self._source.get()

    def subscribe(self, callback: Callback[T]) -> Subscription[T]:
        return self._source.subscribe(callback)

    def __repr__(self) -> str:
        return f"ReadOnlyState({self._source!r})"
