"""Dependency index — which fields an action type can affect.

make_dependency_index() inverts a DependencyMap: for each action type any
referenced store reacts to, it collects the fields reading that store and the
stores' dispatch tokens. A binding looks the index up by action type and
recomputes only the entry's fields, after waiting for the entry's stores.
"""

from __future__ import annotations

import logging

from fluxdeps.dependency import Compound, DependencyIndex, DependencyMap, IndexEntry
from fluxdeps.store import Store
from fluxdeps.validate import enforce_valid_dependencies

logger = logging.getLogger("fluxdeps.index")


def make_dependency_index(dependencies: DependencyMap) -> DependencyIndex:
    """Build a new index from a DependencyMap. Validates it first."""
    enforce_valid_dependencies(dependencies)
    index: DependencyIndex = {}
    for field, dep in dependencies.items():
        stores = [dep] if isinstance(dep, Store) else dep.stores
        for store in stores:
            token = store.get_dispatch_token()
            for action_type in store.get_action_types():
                entry = index.get(action_type)
                if entry is None:
                    entry = index[action_type] = IndexEntry()
                entry.dispatch_tokens.add(token)
                entry.fields.add(field)
    logger.debug("Indexed %d fields across %d action types", len(dependencies), len(index))
    return index


def dependencies_use_state(dependencies: DependencyMap) -> bool:
    """True if any Compound reads state, i.e. state changes need tracking."""
    return any(
        isinstance(dep, Compound) and dep.convention.reads_state
        for dep in dependencies.values()
    )
