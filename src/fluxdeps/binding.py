"""DependencyBinding — headless wiring of a DependencyMap to a Dispatcher.

Validates, indexes and classifies the map once, computes every field at
construction, then keeps ``values`` current:

- dispatched actions recompute only the fields indexed under the action
  type, after the stores behind them have handled the action;
- set_props() / set_state() recompute the fields whose convention reads them.

With strict=False a derivation failure during an action-triggered recompute
is logged and the previous values are kept. Setup failures always raise.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from fluxdeps.calculate import (
    calculate_for_dispatch,
    calculate_for_props_change,
    calculate_for_state_change,
    calculate_initial,
)
from fluxdeps.dependency import DependencyMap
from fluxdeps.dispatcher import Action, Dispatcher
from fluxdeps.index import dependencies_use_state, make_dependency_index

logger = logging.getLogger("fluxdeps.binding")

Disposer = Callable[[], None]


class DependencyBinding:
    """Field values derived from a DependencyMap, kept in sync with actions."""

    def __init__(
        self,
        dependencies: DependencyMap,
        dispatcher: Dispatcher,
        props: Any = None,
        state: Any = None,
        *,
        strict: bool = True,
    ) -> None:
        self._dependencies = dependencies
        self._index = make_dependency_index(dependencies)
        self._uses_state = dependencies_use_state(dependencies)
        self._dispatcher = dispatcher
        self._props = props
        self._state = state
        self._strict = strict
        self._subscribers: list[Callable[[dict[str, Any]], None]] = []
        self._values = calculate_initial(dependencies, props, state)
        self._dispatch_token: str | None = dispatcher.register(self._on_dispatch)

    @property
    def values(self) -> dict[str, Any]:
        """A copy of the current field values."""
        return dict(self._values)

    @property
    def uses_state(self) -> bool:
        return self._uses_state

    def __getitem__(self, field: str) -> Any:
        return self._values[field]

    def set_props(self, props: Any) -> None:
        self._props = props
        self._apply(calculate_for_props_change(self._dependencies, props, self._state))

    def set_state(self, state: Any) -> None:
        self._state = state
        if not self._uses_state:
            return
        self._apply(calculate_for_state_change(self._dependencies, self._props, state))

    def subscribe(self, callback: Callable[[dict[str, Any]], None]) -> Disposer:
        """Register a callback receiving each batch of recomputed fields."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    def dispose(self) -> None:
        """Stop listening for actions. Values stay readable."""
        if self._dispatch_token is None:
            return
        self._dispatcher.unregister(self._dispatch_token)
        self._dispatch_token = None
        self._subscribers.clear()

    def _on_dispatch(self, action: Action) -> None:
        entry = self._index.get(action.type)
        if entry is None:
            return
        self._dispatcher.wait_for(entry.dispatch_tokens)
        try:
            changed = calculate_for_dispatch(self._dependencies, entry, self._props, self._state)
        except Exception:
            if self._strict:
                raise
            logger.exception("Failed to recompute %s for %s", sorted(entry.fields), action.type)
            return
        self._apply(changed)

    def _apply(self, changed: dict[str, Any]) -> None:
        if not changed:
            return
        self._values.update(changed)
        for cb in list(self._subscribers):
            cb(changed)

    def __repr__(self) -> str:
        state = "disposed" if self._dispatch_token is None else "active"
        return f"DependencyBinding({sorted(self._values)}, {state})"
