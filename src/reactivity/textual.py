"""Textual integration for reactivity. Opt-in — requires textual.

Binds holders to a widget tree: show() mounts a child while a boolean holder
is truthy, mount_each() keeps a container's children in step with a
ForEachState. Textual coupling lives only in this module; the core stays
toolkit-agnostic.

Pause state is owned here, keyed by id(app) so several apps can coexist in
tests.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable

from textual.css.query import NoMatches

from reactivity.for_each import ForEachState
from reactivity.state import ReadableState, Subscription

_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend bindings during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a mountable state?"""
    return app.is_running and id(app) not in _paused_apps


def show(
    app,
    container,
    condition: ReadableState[bool],
    child_factory: Callable[[], Any],
    else_factory: Callable[[], Any] | None = None,
) -> Subscription:
    """Mount child_factory() into container while condition is truthy.

    When the condition turns falsy the child is removed and discarded; the
    next truthy value builds a fresh one. With else_factory, its widget takes
    the child's place while the condition is falsy.

    Usage:
        logged_in = State(False)
        stx.show(app, sidebar, logged_in, lambda: Label("Welcome back"))
    """
    mounted: list[Any] = []

    def _update(visible: bool) -> None:
        if not is_safe(app):
            return
        factory = child_factory if visible else else_factory
        while mounted:
            try:
                mounted.pop().remove()
            except NoMatches:
                pass
        if factory is None:
            return
        try:
            widget = factory()
            container.mount(widget)
        except NoMatches:
            return
        mounted.append(widget)

    return condition.subscribe(_update)


def mount_each(app, container, items: ForEachState) -> Subscription:
    """Keep container's children in step with items.get_components().

    Widgets whose item went away are removed, new widgets are mounted at their
    position, and widgets the reconciler kept stay mounted untouched.

    Subscribe after creating the ForEachState: delivery order guarantees the
    reconciler has already run when this binding sees a change.
    """
    mounted: list[Any] = []

    def _sync(_items: object) -> None:
        if is_safe(app):
            _apply(items.get_components())

    def _apply(components: list[Any]) -> None:
        # mounted only ever lists widgets that really are in the container;
        # a widget whose mount hit NoMatches is retried on the next pass.
        keep = {id(widget) for widget in components}
        for widget in [w for w in mounted if id(w) not in keep]:
            try:
                widget.remove()
            except NoMatches:
                pass
            mounted.remove(widget)

        # Kept widgets are in component order already, so walk and fill gaps.
        position = 0
        for widget in components:
            if position < len(mounted) and mounted[position] is widget:
                position += 1
                continue
            try:
                if position < len(mounted):
                    container.mount(widget, before=mounted[position])
                else:
                    container.mount(widget)
            except NoMatches:
                continue
            mounted.insert(position, widget)
            position += 1

    return items.get_state().subscribe(_sync)
