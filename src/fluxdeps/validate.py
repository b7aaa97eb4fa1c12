"""Structural validation of dependency declarations.

Runs once at setup, before the map is indexed or calculated, so a bad
declaration fails loudly at definition time instead of on the first action.
"""

from __future__ import annotations

from collections.abc import Mapping

from fluxdeps.dependency import Compound, Convention, DependencyMap
from fluxdeps.errors import InvalidStoreReferenceError, MalformedDeclarationError
from fluxdeps.store import Store


def _malformed(subject: str, field: object, expected: str, value: object) -> MalformedDeclarationError:
    return MalformedDeclarationError(
        f"expected `{subject}` to be {expected} but got `{value!r}`",
        field=field,
        expected=expected,
        value=value,
    )


def enforce_valid_dependencies(dependencies: DependencyMap) -> DependencyMap:
    """Check every declaration and return ``dependencies`` unchanged.

    Raises MalformedDeclarationError or InvalidStoreReferenceError naming the
    first offending field.
    """
    if not isinstance(dependencies, Mapping):
        raise _malformed("dependencies", None, "a mapping", dependencies)

    for field, dependency in dependencies.items():
        if isinstance(dependency, Store):
            continue
        if not isinstance(dependency, Compound):
            raise _malformed(field, field, "a Store or a Compound", dependency)

        deref, stores = dependency.deref, dependency.stores
        if not callable(deref):
            raise _malformed(f"{field}.deref", field, "a function", deref)
        if not isinstance(dependency.convention, Convention):
            raise _malformed(f"{field}.convention", field, "a Convention", dependency.convention)
        if not isinstance(stores, (list, tuple)):
            raise _malformed(f"{field}.stores", field, "a list or tuple", stores)

        for index, store in enumerate(stores):
            if not isinstance(store, Store):
                raise InvalidStoreReferenceError(
                    f"expected `{field}.stores.{index}` to be a `Store` but got `{store!r}`",
                    field=field,
                    index=index,
                    value=store,
                )
    return dependencies
