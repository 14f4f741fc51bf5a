"""reactivity: minimal reactive state holders and positional list reconciliation."""

from importlib.metadata import version as _version

__version__ = _version("reactivity")

from reactivity._notify import NotificationDepthError, get_max_depth, set_max_depth
from reactivity.registry import ListenerRegistry, current_registry, use_registry
from reactivity.state import ReadableState, ReadOnlyState, State, Subscription
from reactivity.list_state import ListState
from reactivity.computed import ComputedState, computed
from reactivity.for_each import ForEachState
# textual NOT auto-imported, opt-in only

__all__ = [
    "State",
    "ReadableState",
    "ReadOnlyState",
    "Subscription",
    "ListState",
    "ComputedState",
    "computed",
    "ForEachState",
    "ListenerRegistry",
    "use_registry",
    "current_registry",
    "NotificationDepthError",
    "set_max_depth",
    "get_max_depth",
]
