"""ForEachState — project a list holder onto a list of components.

Reconciliation is positional: on every change of the source list, the item at
each index is compared with the item last seen at that index. Equal items
keep their component; different or new items get a fresh one from the
factory; surplus components are dropped from the end. Components never move
between indices, so inserting at the front rebuilds everything after it.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Sequence, TypeVar

from reactivity.state import ReadableState, ReadOnlyState, Subscription, changed

T = TypeVar("T")
C = TypeVar("C")

logger = logging.getLogger("reactivity.for_each")


class ForEachState(Generic[T, C]):
    """Keeps one component per source item, rebuilt only when its item changes.

    Usage:
        products = ListState([Product("Coffee", 15.0), Product("Bread", 8.0)])
        rows = ForEachState.of(products, lambda p: Label(f"{p.name} - ${p.price}"))
        rows.get_components()  # [Label(...), Label(...)]
        products.add(Product("Milk", 5.0))  # one new Label, the others untouched
    """

    def __init__(
        self,
        source: ReadableState[Sequence[T] | None],
        factory: Callable[[T], C],
    ) -> None:
        self._source = source
        self._factory = factory
        self._items: list[T] = []
        self._components: list[C] = []
        self._subscription: Subscription = source.subscribe(self._reconcile)

    @classmethod
    def of(
        cls,
        source: ReadableState[Sequence[T] | None],
        factory: Callable[[T], C],
    ) -> ForEachState[T, C]:
        return cls(source, factory)

    def get_components(self) -> list[C]:
        """Snapshot of the current components. Mutating it has no effect here."""
        return list(self._components)

    def get_state(self) -> ReadableState[Sequence[T] | None]:
        """Read-only view of the source list, for consumers of the raw items."""
        return ReadOnlyState(self._source)

    def dispose(self) -> None:
        """Stop following the source. Current components are kept."""
        self._subscription.dispose()

    def _reconcile(self, new_items: Sequence[T] | None) -> None:
        if new_items is None:
            new_items = []

        removed = 0
        while len(self._items) > len(new_items):
            self._components.pop()
            self._items.pop()
            removed += 1

        built = 0
        for index, item in enumerate(new_items):
            if index < len(self._items):
                if changed(self._items[index], item):
                    self._components[index] = self._factory(item)
                    self._items[index] = item
                    built += 1
            else:
                self._components.append(self._factory(item))
                self._items.append(item)
                built += 1

        logger.debug(
            "Reconciled %d items: %d built, %d removed", len(new_items), built, removed
        )

    def __len__(self) -> int:
        return len(self._components)

    def __repr__(self) -> str:
        return f"ForEachState(items={self._items!r})"
