"""fluxdeps: minimal-recompute field derivation over flux-style stores."""

from importlib.metadata import version as _version

__version__ = _version("fluxdeps")

from fluxdeps.errors import (
    FluxdepsError,
    DependencyError,
    MalformedDeclarationError,
    InvalidStoreReferenceError,
    DispatchError,
)
from fluxdeps.dispatcher import Action, Dispatcher
from fluxdeps.store import Store, ReduceStore
from fluxdeps.dependency import (
    Convention,
    Compound,
    Dependency,
    DependencyMap,
    IndexEntry,
    DependencyIndex,
    compound,
)
from fluxdeps.validate import enforce_valid_dependencies
from fluxdeps.calculate import (
    calculate,
    calculate_initial,
    calculate_for_dispatch,
    calculate_for_props_change,
    calculate_for_state_change,
)
from fluxdeps.index import make_dependency_index, dependencies_use_state
from fluxdeps.binding import DependencyBinding

__all__ = [
    "FluxdepsError",
    "DependencyError",
    "MalformedDeclarationError",
    "InvalidStoreReferenceError",
    "DispatchError",
    "Action",
    "Dispatcher",
    "Store",
    "ReduceStore",
    "Convention",
    "Compound",
    "Dependency",
    "DependencyMap",
    "IndexEntry",
    "DependencyIndex",
    "compound",
    "enforce_valid_dependencies",
    "calculate",
    "calculate_initial",
    "calculate_for_dispatch",
    "calculate_for_props_change",
    "calculate_for_state_change",
    "make_dependency_index",
    "dependencies_use_state",
    "DependencyBinding",
]
