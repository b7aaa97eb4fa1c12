"""Calculator — computes field values from their dependencies.

calculate() resolves one dependency. The four entry points resolve a subset
of a DependencyMap for each recompute trigger:

- calculate_initial: every field, once at construction.
- calculate_for_dispatch: the fields of one IndexEntry.
- calculate_for_props_change: Compounds whose convention reads props.
- calculate_for_state_change: Compounds whose convention reads state.

Bare-Store fields refresh only through dispatched actions, and CONSTANT
compounds only at construction.

Derivation failures propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Callable

from fluxdeps.dependency import Compound, Convention, Dependency, DependencyMap, IndexEntry
from fluxdeps.errors import MalformedDeclarationError
from fluxdeps.store import Store


def calculate(dependency: Dependency, props: Any = None, state: Any = None) -> Any:
    """Current value of a single dependency."""
    if isinstance(dependency, Store):
        return dependency.get()
    if isinstance(dependency, Compound):
        convention = dependency.convention
        if convention is Convention.CONSTANT:
            return dependency.deref()
        if convention is Convention.PROPS:
            return dependency.deref(props)
        if convention is Convention.FULL:
            return dependency.deref(props, state, dependency.stores)
        raise MalformedDeclarationError(
            f"unknown convention `{convention!r}`", expected="a Convention", value=convention
        )
    raise MalformedDeclarationError(
        f"expected a Store or a Compound but got `{dependency!r}`",
        expected="a Store or a Compound",
        value=dependency,
    )


def _calculate_where(
    dependencies: DependencyMap,
    predicate: Callable[[Dependency], bool],
    props: Any,
    state: Any,
) -> dict[str, Any]:
    return {
        field: calculate(dep, props, state)
        for field, dep in dependencies.items()
        if predicate(dep)
    }


def calculate_initial(dependencies: DependencyMap, props: Any, state: Any = None) -> dict[str, Any]:
    return {field: calculate(dep, props, state) for field, dep in dependencies.items()}


def calculate_for_dispatch(
    dependencies: DependencyMap,
    entry: IndexEntry,
    props: Any,
    state: Any = None,
) -> dict[str, Any]:
    """Recompute only the fields named by ``entry``."""
    return {field: calculate(dependencies[field], props, state) for field in entry.fields}


def calculate_for_props_change(dependencies: DependencyMap, props: Any, state: Any = None) -> dict[str, Any]:
    return _calculate_where(
        dependencies,
        lambda dep: isinstance(dep, Compound) and dep.convention.reads_props,
        props,
        state,
    )


def calculate_for_state_change(dependencies: DependencyMap, props: Any, state: Any = None) -> dict[str, Any]:
    return _calculate_where(
        dependencies,
        lambda dep: isinstance(dep, Compound) and dep.convention.reads_state,
        props,
        state,
    )
