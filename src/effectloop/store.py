"""A minimal synchronous store.

`install` works with any object offering `dispatch`, `get_state` and
`replace_reducer`; this one is provided so the library can be used on its own.
"""

from collections.abc import Callable
from typing import Any, Protocol

Reducer = Callable[[Any, Any], Any]
Listener = Callable[[], None]


class StoreLike(Protocol):
    """What the effect loop needs from the store it wraps."""

    def dispatch(self, action: Any) -> Any: ...

    def get_state(self) -> Any: ...

    def replace_reducer(self, reducer: Reducer) -> None: ...


StoreFactory = Callable[[Reducer, Any], Any]
StoreEnhancer = Callable[[StoreFactory], StoreFactory]


class Store:
    """Holds a state, reduces actions into it and notifies subscribers."""

    def __init__(self, reducer: Reducer, state: Any) -> None:
        self._reducer = reducer
        self._state = state
        self._listeners: list[Listener] = []

    def dispatch(self, action: Any) -> Any:
        """Reduce `action` into the state, then notify every subscriber."""
        self._state = self._reducer(self._state, action)
        for listener in list(self._listeners):
            listener()
        return action

    def get_state(self) -> Any:
        return self._state

    def replace_reducer(self, reducer: Reducer) -> None:
        self._reducer = reducer

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener` and return a function that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __repr__(self) -> str:
        return f"Store(state={self._state!r}, listeners={len(self._listeners)})"


def create_store(
    reducer: Reducer, initial_state: Any, enhancer: StoreEnhancer | None = None
) -> Any:
    """Create a store, optionally passing construction through `enhancer`.

    Example:
        >>> store = create_store(reducer, 0, install())
    """
    if enhancer is not None:
        return enhancer(create_store)(reducer, initial_state)
    return Store(reducer, initial_state)
