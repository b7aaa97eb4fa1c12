"""Dependency declarations and the index they produce.

A field depends either on a Store directly or on a Compound: a derivation
function plus the stores it may read. Every Compound carries an explicit
Convention saying which inputs its derivation takes. The same tag decides
which recompute triggers refresh the field.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Callable

from fluxdeps.store import Store


class Convention(enum.Enum):
    """Calling convention of a derivation function."""

    CONSTANT = "constant"  # deref()
    PROPS = "props"  # deref(props)
    FULL = "full"  # deref(props, state, stores)

    @property
    def reads_props(self) -> bool:
        return self is not Convention.CONSTANT

    @property
    def reads_state(self) -> bool:
        return self is Convention.FULL


@dataclass(frozen=True)
class Compound:
    """A derivation function and the stores it reads.

    Construction does not check anything; enforce_valid_dependencies()
    reports malformed declarations together with their field name.
    """

    deref: Callable[..., object]
    stores: Sequence[Store]
    convention: Convention


Dependency = Store | Compound
DependencyMap = Mapping[str, Dependency]


@dataclass
class IndexEntry:
    """Fields and store tokens affected by one action type."""

    fields: set[str] = field(default_factory=set)
    dispatch_tokens: set[str] = field(default_factory=set)


DependencyIndex = dict[str, IndexEntry]


def compound(convention: Convention, stores: Sequence[Store] = ()) -> Callable[[Callable[..., object]], Compound]:
    """Decorator factory building a Compound from a derivation function.

    Usage:
        @compound(Convention.FULL, stores=[cart, prices])
        def total(props, state, stores):
            cart, prices = stores
            return sum(prices.get()[sku] for sku in cart.get())
    """

    def wrap(fn: Callable[..., object]) -> Compound:
        return Compound(fn, list(stores), convention)

    return wrap
