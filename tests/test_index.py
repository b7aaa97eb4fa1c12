"""Tests for make_dependency_index and dependencies_use_state."""

import logging

import pytest

from fluxdeps import (
    Compound,
    Convention,
    Dispatcher,
    InvalidStoreReferenceError,
    ReduceStore,
    dependencies_use_state,
    make_dependency_index,
)


def _store(dispatcher, *action_types, value=0):
    return ReduceStore(dispatcher, value, {t: lambda s, a: a.payload for t in action_types})


class TestMakeDependencyIndex:
    def test_compound_entry(self):
        d = Dispatcher()
        a = _store(d, "A_CHANGED", value=2)
        b = _store(d, "B_CHANGED", value=3)
        deps = {"sum": Compound(lambda p, s, st: 0, [a, b], Convention.FULL)}
        index = make_dependency_index(deps)
        assert index["A_CHANGED"].fields == {"sum"}
        assert index["A_CHANGED"].dispatch_tokens == {a.get_dispatch_token()}
        assert index["B_CHANGED"].dispatch_tokens == {b.get_dispatch_token()}

    def test_bare_store_entry(self):
        d = Dispatcher()
        a = _store(d, "A_CHANGED", "RESET")
        index = make_dependency_index({"total": a})
        assert set(index) == {"A_CHANGED", "RESET"}
        assert index["RESET"].fields == {"total"}

    def test_entries_accumulate(self):
        d = Dispatcher()
        a = _store(d, "RESET")
        b = _store(d, "RESET")
        deps = {
            "x": a,
            "y": Compound(lambda p, s, st: 0, [a, b], Convention.FULL),
            "z": Compound(lambda p: p, [b], Convention.PROPS),
        }
        entry = make_dependency_index(deps)["RESET"]
        assert entry.fields == {"x", "y", "z"}
        assert entry.dispatch_tokens == {a.get_dispatch_token(), b.get_dispatch_token()}
        assert isinstance(entry.fields, set)
        assert isinstance(entry.dispatch_tokens, set)

    def test_every_reachable_action_type_indexed(self):
        d = Dispatcher()
        stores = [_store(d, "T1", "T2"), _store(d, "T2", "T3")]
        deps = {"f": Compound(lambda p, s, st: 0, stores, Convention.FULL)}
        index = make_dependency_index(deps)
        for store in stores:
            for action_type in store.get_action_types():
                assert "f" in index[action_type].fields
                assert store.get_dispatch_token() in index[action_type].dispatch_tokens

    def test_order_independent(self):
        d = Dispatcher()
        a = _store(d, "A", "B")
        b = _store(d, "B")
        first = {"x": a, "y": Compound(lambda p, s, st: 0, [b, a], Convention.FULL)}
        second = {"y": Compound(lambda p, s, st: 0, [a, b], Convention.FULL), "x": a}
        assert make_dependency_index(first) == make_dependency_index(second)

    def test_unindexed_fields(self):
        deps = {"label": Compound(lambda: "fixed", [], Convention.CONSTANT)}
        assert make_dependency_index(deps) == {}

    def test_validates_first(self):
        deps = {"bad": Compound(lambda: 0, [object()], Convention.FULL)}
        with pytest.raises(InvalidStoreReferenceError):
            make_dependency_index(deps)

    def test_input_untouched(self):
        d = Dispatcher()
        a = _store(d, "A")
        deps = {"x": a}
        make_dependency_index(deps)
        assert deps == {"x": a}

    def test_logs_summary(self, caplog):
        d = Dispatcher()
        with caplog.at_level(logging.DEBUG, logger="fluxdeps.index"):
            make_dependency_index({"x": _store(d, "A", "B")})
        assert "1 fields across 2 action types" in caplog.text


class TestDependenciesUseState:
    def test_full_uses_state(self):
        d = Dispatcher()
        deps = {"sum": Compound(lambda p, s, st: 0, [_store(d)], Convention.FULL)}
        assert dependencies_use_state(deps) is True

    def test_no_full(self):
        d = Dispatcher()
        deps = {
            "bare": _store(d),
            "label": Compound(lambda: 1, [], Convention.CONSTANT),
            "name": Compound(lambda p: p, [], Convention.PROPS),
        }
        assert dependencies_use_state(deps) is False

    def test_empty(self):
        assert dependencies_use_state({}) is False
