"""Dispatcher — delivers actions to every registered callback.

Each callback is registered under a dispatch token. During a dispatch a
callback may call wait_for(tokens) to have other callbacks run first, which
is how a binding reads stores only after they have handled the action.

Dispatch is synchronous and non-reentrant: dispatching from inside a
callback raises DispatchError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable

from fluxdeps import _anchor
from fluxdeps.errors import DispatchError

logger = logging.getLogger("fluxdeps.dispatcher")


@dataclass(frozen=True)
class Action:
    """A dispatched change event. ``type`` is the key into a DependencyIndex."""

    type: str
    payload: object = None


Callback = Callable[[Action], None]


class Dispatcher:
    """Synchronous action dispatcher with wait_for ordering."""

    def __init__(self) -> None:
        self._callbacks: dict[str, Callback] = {}
        self._pending: set[str] = set()
        self._handled: set[str] = set()
        self._dispatching = False
        self._current: Action | None = None

    @property
    def is_dispatching(self) -> bool:
        return self._dispatching

    def register(self, callback: Callback) -> str:
        """Register a callback. Returns its dispatch token."""
        token = _anchor.new_token()
        self._callbacks[token] = callback
        return token

    def unregister(self, token: str) -> None:
        if token not in self._callbacks:
            raise DispatchError(f"unregister(...): `{token}` does not map to a registered callback")
        del self._callbacks[token]

    def wait_for(self, tokens: Iterable[str]) -> None:
        """Run the callbacks for ``tokens`` now, unless they already ran.

        Only valid while dispatching. A token whose callback is currently
        running (and has not finished) indicates a cycle.
        """
        if not self._dispatching:
            raise DispatchError("wait_for(...): must be invoked while dispatching")
        for token in tokens:
            if token in self._pending:
                if token in self._handled:
                    continue
                raise DispatchError(f"wait_for(...): circular dependency detected while waiting for `{token}`")
            if token not in self._callbacks:
                raise DispatchError(f"wait_for(...): `{token}` does not map to a registered callback")
            self._invoke(token)

    def dispatch(self, action: Action) -> None:
        """Deliver ``action`` to every registered callback, in registration order."""
        if self._dispatching:
            raise DispatchError(
                f"dispatch(...): cannot dispatch `{action.type}` in the middle of dispatching `{self._current.type}`"
            )
        self._start(action)
        try:
            # Snapshot: callbacks may unregister during the dispatch.
            for token in list(self._callbacks):
                if token in self._pending or token not in self._callbacks:
                    continue
                self._invoke(token)
        finally:
            self._stop()

    def _invoke(self, token: str) -> None:
        self._pending.add(token)
        self._callbacks[token](self._current)
        self._handled.add(token)

    def _start(self, action: Action) -> None:
        logger.debug("Dispatching %s to %d callbacks", action.type, len(self._callbacks))
        self._pending.clear()
        self._handled.clear()
        self._current = action
        self._dispatching = True

    def _stop(self) -> None:
        self._current = None
        self._dispatching = False
