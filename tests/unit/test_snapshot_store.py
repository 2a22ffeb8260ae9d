"""Unit tests for SnapshotCollection and SnapshotStore."""

import pytest

from viewport_layout.core.context_registry import ContextRegistry
from viewport_layout.core.snapshot_store import SnapshotCollection, SnapshotStore
from viewport_layout.errors import PreconditionViolationError
from viewport_layout.models import FractionalRect, ScreenRect, ViewportSnapshot

HALF = FractionalRect(x=0, y=0, width=0.5, height=1)


@pytest.fixture
def registry(emitter):
    return ContextRegistry(emitter)


@pytest.fixture
def store(registry, id_generator):
    return SnapshotStore(registry, id_generator)


class TestSnapshotCollection:
    """Insertion-ordered, id-keyed collection."""

    def test_add_keeps_order_and_replaces_in_place(self):
        collection = SnapshotCollection()
        collection.add(ViewportSnapshot(id="a"))
        collection.add(ViewportSnapshot(id="b"))
        collection.add(ViewportSnapshot(id="a", is_maximized=True))

        assert collection.ids() == ["a", "b"]
        assert collection.find_by_id("a").is_maximized
        assert len(collection) == 2

    def test_update_validates(self):
        collection = SnapshotCollection([ViewportSnapshot(id="a", fractional_rect=HALF)])
        assert collection.update("a", is_minimized=True)
        assert collection.find_by_id("a").is_minimized
        assert collection.find_by_id("a").fractional_rect == HALF
        assert not collection.update("missing", is_minimized=True)

    def test_remove(self):
        collection = SnapshotCollection([ViewportSnapshot(id="a")])
        assert collection.remove("a") is True
        assert collection.remove("a") is False
        assert "a" not in collection


class TestAreaMigration:
    """add_viewport() minimizes new content in strictly smaller contexts."""

    def test_add_while_large_is_current(self, registry, store, large_surface, small_surface):
        """Test the small context receives the viewport minimized, without bounds."""
        small = registry.resolve(small_surface)
        large = registry.resolve(large_surface)

        viewport_id = store.add_viewport(HALF)

        large_snapshot = store.get_snapshots_for_context(large.id)[0]
        small_snapshot = store.get_snapshots_for_context(small.id)[0]
        assert large_snapshot.id == small_snapshot.id == viewport_id
        assert large_snapshot.is_minimized is False
        assert large_snapshot.fractional_rect == HALF
        assert small_snapshot.is_minimized is True
        assert small_snapshot.fractional_rect is None

    def test_add_while_small_is_current(self, registry, store, large_surface, small_surface):
        """Test neither context minimizes when the smallest context is current."""
        large = registry.resolve(large_surface)
        small = registry.resolve(small_surface)

        store.add_viewport(HALF)

        for context in (large, small):
            snapshot = store.get_snapshots_for_context(context.id)[0]
            assert snapshot.is_minimized is False
            assert snapshot.fractional_rect == HALF

    def test_equal_area_never_minimizes(self, registry, store):
        """Test 200x50 and 100x100 (same area) keep the viewport visible."""
        wide = registry.resolve(ScreenRect(width=200, height=50))
        square = registry.resolve(ScreenRect(width=100, height=100))

        store.add_viewport(HALF)

        assert store.get_snapshots_for_context(wide.id)[0].is_minimized is False
        assert store.get_snapshots_for_context(square.id)[0].is_minimized is False

    def test_snapshots_carry_owning_context(self, registry, store, large_surface, small_surface):
        small = registry.resolve(small_surface)
        large = registry.resolve(large_surface)
        store.add_viewport(HALF)
        assert store.get_snapshots_for_context(small.id)[0].context_id == small.id
        assert store.get_snapshots_for_context(large.id)[0].context_id == large.id

    def test_generated_ids(self, registry, store, large_surface):
        registry.resolve(large_surface)
        assert store.add_viewport(HALF) == "test-id-1"
        assert store.add_viewport(HALF) == "test-id-2"

    def test_requires_current_context(self, store):
        with pytest.raises(PreconditionViolationError):
            store.add_viewport(HALF)

    def test_unknown_context_is_empty(self, store):
        assert store.get_snapshots_for_context("nowhere") == []


class TestSaveContext:
    """save_context() merges the live arrangement with stored snapshots."""

    def test_merge_rules(self, registry, store, large_surface):
        context = registry.resolve(large_surface)
        store.import_snapshot(context.id, ViewportSnapshot(id="stale", fractional_rect=HALF))
        store.import_snapshot(context.id, ViewportSnapshot(id="hidden", is_minimized=True))
        store.import_snapshot(context.id, ViewportSnapshot(id="live", fractional_rect=HALF))

        store.save_context(context.id, [
            ViewportSnapshot(id="live", fractional_rect=FractionalRect()),
            ViewportSnapshot(id="fresh", fractional_rect=HALF),
        ])

        snapshots = store.get_snapshots_for_context(context.id)
        assert [s.id for s in snapshots] == ["live", "fresh", "hidden"]
        assert snapshots[0].fractional_rect == FractionalRect()
        assert all(s.context_id == context.id for s in snapshots)


class TestCrossContextUpdates:
    """Updates and removals applied to every context."""

    def test_minimize_and_restore(self, registry, store, large_surface, small_surface):
        small = registry.resolve(small_surface)
        registry.resolve(large_surface)
        viewport_id = store.add_viewport(HALF)

        assert store.minimize_viewport(viewport_id)
        assert all(
            store.get_snapshots_for_context(c.id)[0].is_minimized for c in registry.contexts()
        )
        assert store.restore_viewport(viewport_id, small.id)
        assert store.get_snapshots_for_context(small.id)[0].is_minimized is False

    def test_maximize_clears_minimized(self, registry, store, large_surface):
        context = registry.resolve(large_surface)
        viewport_id = store.add_viewport(HALF)
        store.minimize_viewport(viewport_id)
        store.maximize_viewport(viewport_id)
        snapshot = store.get_snapshots_for_context(context.id)[0]
        assert snapshot.is_maximized and not snapshot.is_minimized

    def test_remove_everywhere(self, registry, store, large_surface, small_surface):
        registry.resolve(small_surface)
        registry.resolve(large_surface)
        viewport_id = store.add_viewport(HALF)

        assert store.remove_viewport(viewport_id) is True
        assert store.remove_viewport(viewport_id) is False
        assert all(store.get_snapshots_for_context(c.id) == [] for c in registry.contexts())

    def test_update_unknown(self, store):
        assert store.update_viewport("missing", is_required=True) is False

    def test_contains_viewport(self, registry, store, large_surface, small_surface):
        small = registry.resolve(small_surface)
        registry.resolve(large_surface)
        store.import_snapshot(small.id, ViewportSnapshot(id="only-small"))

        assert store.contains_viewport("only-small")
        assert not store.contains_viewport("missing")


class TestContextRemoval:
    """Snapshots follow their context out of the registry."""

    def test_removed_context_starts_empty_when_seen_again(self, registry, store, large_surface):
        context = registry.resolve(large_surface)
        store.add_viewport(HALF, viewport_id="old")

        registry.remove(large_surface)
        assert store.get_snapshots_for_context(context.id) == []

        registry.resolve(large_surface)
        assert store.get_snapshots_for_context(context.id) == []
        assert not store.contains_viewport("old")

    def test_removal_keeps_other_contexts(self, registry, store, large_surface, small_surface):
        small = registry.resolve(small_surface)
        registry.resolve(large_surface)
        store.add_viewport(HALF, viewport_id="kept")

        registry.remove(large_surface)
        assert [s.id for s in store.get_snapshots_for_context(small.id)] == ["kept"]

    def test_shared_sink_ignores_other_registries(self, emitter, id_generator, large_surface):
        """Test a removal in one registry leaves a registry sharing the sink untouched."""
        first = ContextRegistry(emitter)
        second = ContextRegistry(emitter)
        second_store = SnapshotStore(second, id_generator)
        SnapshotStore(first, id_generator)

        first.resolve(large_surface)
        context = second.resolve(large_surface)
        second_store.add_viewport(HALF, viewport_id="mine")

        first.remove(large_surface)
        assert [s.id for s in second_store.get_snapshots_for_context(context.id)] == ["mine"]
