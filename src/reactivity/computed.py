"""Computed values — derived state over an explicit list of dependencies.

A ComputedState wraps a zero-argument function and the holders it reads.
It computes once at construction, then recomputes eagerly whenever any
dependency notifies, and notifies its own subscribers only when the result
actually changed. get() never recomputes.

While a ComputedState has subscribers its dependencies keep it alive, so
`state.map(fn).subscribe(cb)` works without holding on to the mapped value.
Once it has none, dependencies reference it only weakly: dropping the last
reference to it releases its dependency subscriptions, and dispose() does
the same explicitly.
"""

from __future__ import annotations

import weakref
from typing import Any, Callable, TypeVar

from reactivity._notify import deliver
from reactivity.state import Callback, ReadableState, Subscription, attach, changed

T = TypeVar("T")

_UNSET = object()


def _dispose_all(subscriptions: list[Subscription]) -> None:
    for subscription in subscriptions:
        subscription.dispose()
    subscriptions.clear()


class ComputedState(ReadableState[T]):
    """A read-only holder whose value is a function of other holders."""

    __slots__ = (
        "_compute",
        "_value",
        "_subscribers",
        "_pinned",
        "_release",
        "_finalizer",
        "__weakref__",
    )

    def __init__(self, compute: Callable[[], T], *dependencies: ReadableState[Any]) -> None:
        self._compute = compute
        self._value: Any = _UNSET
        subscribers: list[Subscription[T]] = []
        self._subscribers = subscribers

        # Holds self while it has subscribers, so dependencies keep it alive
        # only as long as someone is listening.
        pinned: list[ComputedState[T]] = []
        self._pinned = pinned
        ref = weakref.ref(self)
        attached = False

        def _on_dependency(_value: object) -> None:
            # Replays during construction are covered by the initial compute below.
            target = pinned[0] if pinned else ref()
            if attached and target is not None and not target.disposed:
                target._recompute()

        def _release() -> None:
            if not subscribers:
                pinned.clear()

        self._release = _release

        upstream: list[Subscription] = []
        self._finalizer = weakref.finalize(self, _dispose_all, upstream)
        for dependency in dependencies:
            upstream.append(dependency.subscribe(_on_dependency))
        attached = True

        try:
            self._recompute()
        except BaseException:
            self._finalizer()
            raise

    @classmethod
    def of(cls, compute: Callable[[], T], *dependencies: ReadableState[Any]) -> ComputedState[T]:
        return cls(compute, *dependencies)

    def get(self) -> T:
        return self._value

    def subscribe(self, callback: Callback[T]) -> Subscription[T]:
        if not self._pinned:
            self._pinned.append(self)
        return attach(self._subscribers, callback, self._value, self._release)

    def _recompute(self) -> None:
        value = self._compute()
        if self._value is _UNSET or changed(self._value, value):
            self._value = value
            deliver(self._subscribers, value)

    @property
    def disposed(self) -> bool:
        return not self._finalizer.alive

    def dispose(self) -> None:
        """Detach from all dependencies. The last value stays readable."""
        self._finalizer()
        self._pinned.clear()

    def __repr__(self) -> str:
        name = getattr(self._compute, "__name__", "compute")
        return f"ComputedState({name}, {self._value!r})"


def computed(*dependencies: ReadableState[Any]) -> Callable[[Callable[[], T]], ComputedState[T]]:
    """Decorator form of ComputedState.

    Usage:
        first = State("John")
        last = State("Doe")

        @computed(first, last)
        def full_name():
            return f"{first.get()} {last.get()}"

        full_name.get()  # "John Doe"
        first.set("Jane")
        full_name.get()  # "Jane Doe"
    """

    def decorator(fn: Callable[[], T]) -> ComputedState[T]:
        return ComputedState(fn, *dependencies)

    return decorator
