"""ListState — a State whose value is always a list.

List operations live on this type instead of on State, so there is no way to
call them on a holder that does not carry a list. Every mutation is
copy-on-write: it builds a new list and goes through set(), which keeps the
equality suppression and leaves lists already handed to subscribers intact.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, TypeVar

from reactivity.state import State

E = TypeVar("E")


def _require(value: object, name: str) -> None:
    if value is None:
        raise TypeError(f"{name} cannot be None")


class ListState(State[list[E]]):
    """Reactive list with copy-on-write mutation helpers.

    Usage:
        names = ListState(["Alice", "Bob"])
        names.add("Charlie")
        names.remove_if(lambda name: name.startswith("A"))
        names.get()  # ["Bob", "Charlie"]
    """

    __slots__ = ()

    def __init__(self, initial: Iterable[E] | None = None) -> None:
        super().__init__(list(initial) if initial is not None else [])

    @classmethod
    def of(cls, initial: Iterable[E] | None = None) -> ListState[E]:
        return cls(initial)

    def set(self, items: Iterable[E] | None) -> None:
        """Replace the whole list. None is stored as an empty list."""
        super().set(list(items) if items is not None else [])

    # --- Read operations ---

    def __getitem__(self, index: int) -> E:
        return self._value[index]

    def __len__(self) -> int:
        return len(self._value)

    def __iter__(self) -> Iterator[E]:
        return iter(self._value)

    def __contains__(self, item: object) -> bool:
        return item in self._value

    def index(self, item: E) -> int:
        """Position of the first occurrence. Raises ValueError if absent."""
        return self._value.index(item)

    def contains_all(self, items: Iterable[E]) -> bool:
        _require(items, "items")
        return all(item in self._value for item in items)

    # --- Write operations (copy, then set) ---

    def add(self, item: E) -> None:
        self.set([*self._value, item])

    def add_all(self, items: Iterable[E]) -> None:
        _require(items, "items")
        self.set([*self._value, *items])

    def remove_last(self) -> None:
        """Drop the last item. Does nothing on an empty list."""
        if self._value:
            self.set(self._value[:-1])

    def clear(self) -> None:
        self.set([])

    def remove_if(self, predicate: Callable[[E], bool]) -> None:
        _require(predicate, "predicate")
        self.set([item for item in self._value if not predicate(item)])

    def remove(self, item: E) -> bool:
        """Remove the first occurrence of item. Returns whether it was found."""
        items = list(self._value)
        try:
            items.remove(item)
        except ValueError:
            return False
        self.set(items)
        return True

    def remove_all(self, items: Iterable[E]) -> bool:
        """Remove every occurrence of every item in items. Returns whether anything changed."""
        _require(items, "items")
        doomed = list(items)
        kept = [item for item in self._value if item not in doomed]
        if len(kept) == len(self._value):
            return False
        self.set(kept)
        return True

    def retain_all(self, items: Iterable[E]) -> bool:
        """Keep only items that appear in items. Returns whether anything changed."""
        _require(items, "items")
        allowed = list(items)
        kept = [item for item in self._value if item in allowed]
        if len(kept) == len(self._value):
            return False
        self.set(kept)
        return True

    def set_at(self, index: int, item: E) -> None:
        """Replace the item at index. Negative indices are rejected."""
        if not 0 <= index < len(self._value):
            raise IndexError(f"index out of range: {index}")
        items = list(self._value)
        items[index] = item
        self.set(items)

    def replace(self, old: E, new: E) -> bool:
        """Replace the first occurrence of old with new. Returns whether old was found."""
        try:
            index = self._value.index(old)
        except ValueError:
            return False
        self.set_at(index, new)
        return True

    def update_if(self, predicate: Callable[[E], bool], updater: Callable[[E], E]) -> bool:
        """Apply updater to every item matching predicate, in one notification.

        Returns whether any item matched.
        """
        _require(predicate, "predicate")
        _require(updater, "updater")
        matched = False
        items = []
        for item in self._value:
            if predicate(item):
                matched = True
                items.append(updater(item))
            else:
                items.append(item)
        if matched:
            self.set(items)
        return matched
