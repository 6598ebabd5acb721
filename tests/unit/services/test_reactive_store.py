"""Unit tests for observable stores."""

from src.services.reactive_store import DerivedStore, WritableStore


class TestWritableStore:
    """Test suite for WritableStore."""

    def test_get_set_update(self):
        """Test reading and replacing the value."""
        store = WritableStore("numbers", (1, 2))
        store.set((5,))
        store.update(lambda items: items + (6,))

        assert store.get() == (5, 6)

    def test_subscribe_receives_current_and_later_values(self):
        """Test that subscribers get the current value, then every write."""
        store = WritableStore("numbers", (1,))
        seen = []
        store.subscribe(seen.append)
        store.set((1, 2))

        assert seen == [(1,), (1, 2)]

    def test_unsubscribe_stops_notifications(self):
        """Test that unsubscribed callbacks are no longer called."""
        store = WritableStore("numbers", 0)
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        store.set(1)

        assert seen == [0]
        assert store.subscriber_count == 0

    def test_snapshot_unaffected_by_later_writes(self):
        """Test copy-on-write: held snapshots never change."""
        store = WritableStore("numbers", (1, 2))
        snapshot = store.get()
        store.update(lambda items: items + (3,))

        assert snapshot == (1, 2)


class TestDerivedStore:
    """Test suite for DerivedStore."""

    def test_get_reflects_upstream(self):
        """Test that reads always recompute from current upstream values."""
        items = WritableStore("items", (3, 1, 2))
        ordered = DerivedStore("ordered", [items], lambda xs: tuple(sorted(xs)))

        assert ordered.get() == (1, 2, 3)
        items.set((9, 8))
        assert ordered.get() == (8, 9)

    def test_subscribers_see_recomputed_values(self):
        """Test that upstream writes are pushed to derived subscribers."""
        items = WritableStore("items", (1, 2))
        limit = WritableStore("limit", 1)
        head = DerivedStore("head", [items, limit], lambda xs, n: xs[:n])
        seen = []
        head.subscribe(seen.append)

        items.set((7, 8, 9))
        limit.set(2)

        assert seen == [(1,), (7,), (7, 8)]

    def test_chained_derived_stores(self):
        """Test that a derived store over a derived store stays current."""
        items = WritableStore("items", (1, 2, 3, 4))
        evens = DerivedStore("evens", [items], lambda xs: tuple(x for x in xs if x % 2 == 0))
        count = DerivedStore("count", [evens], len)
        seen = []
        count.subscribe(seen.append)

        items.update(lambda xs: xs + (6,))

        assert seen[0] == 2
        assert seen[-1] == 3

    def test_detaches_from_upstream_without_subscribers(self):
        """Test that the last unsubscribe releases upstream subscriptions."""
        items = WritableStore("items", (1,))
        doubled = DerivedStore("doubled", [items], lambda xs: tuple(x * 2 for x in xs))
        unsubscribe = doubled.subscribe(lambda _value: None)

        assert items.subscriber_count == 1
        unsubscribe()
        assert items.subscriber_count == 0
