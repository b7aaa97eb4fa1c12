"""Store — addressable snapshot-readable data source.

A Store registers with a Dispatcher on construction. Dependency declarations
reference stores directly; the engine only ever uses three things from them:
get(), get_dispatch_token() and get_action_types().

ReduceStore folds dispatched actions into its value through per-action-type
reducers, so its action types are exactly the keys of its handler table.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Callable, Generic, TypeVar

from fluxdeps.dispatcher import Action, Dispatcher

T = TypeVar("T")

Disposer = Callable[[], None]


class Store:
    """Base class for stores. Subclasses implement get()."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher
        self._subscribers: list[Callable[[], None]] = []
        self._dispatch_token = dispatcher.register(self._on_dispatch)
        self._disposed = False

    def get(self) -> object:
        """Current snapshot value."""
        raise NotImplementedError(f"{type(self).__name__}.get()")

    def get_dispatch_token(self) -> str:
        return self._dispatch_token

    def get_action_types(self) -> tuple[str, ...]:
        """Action types this store reacts to."""
        return ()

    def subscribe(self, callback: Callable[[], None]) -> Disposer:
        """Register a change callback. Returns a function that removes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    def _emit_change(self) -> None:
        for cb in list(self._subscribers):
            cb()

    def _on_dispatch(self, action: Action) -> None:
        pass

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._subscribers.clear()
        self._dispatcher.unregister(self._dispatch_token)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._dispatch_token})"


class ReduceStore(Store, Generic[T]):
    """Store whose value is folded from dispatched actions.

    Usage:
        dispatcher = Dispatcher()
        counter = ReduceStore(dispatcher, 0, {
            "INCREMENT": lambda state, action: state + action.payload,
        })
        dispatcher.dispatch(Action("INCREMENT", 2))
        counter.get()  # 2
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        initial: T,
        handlers: Mapping[str, Callable[[T, Action], T]],
    ) -> None:
        self._state = initial
        self._handlers = dict(handlers)
        super().__init__(dispatcher)

    def get(self) -> T:
        return self._state

    def get_action_types(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def _on_dispatch(self, action: Action) -> None:
        reducer = self._handlers.get(action.type)
        if reducer is None:
            return
        old = self._state
        new = reducer(old, action)
        if old is not new and old != new:
            self._state = new
            self._emit_change()

    def __repr__(self) -> str:
        return f"ReduceStore({self._dispatch_token}, {self._state!r})"
