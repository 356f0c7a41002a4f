"""Unit tests for InMemoryTrackerStore (habit_tracker/store/memory_store.py)"""
import pytest
from uuid import uuid4

from habit_tracker.exceptions import RecordNotFoundError, ValidationError
from habit_tracker.models.tracker import CompletionRecord, Tracker
from habit_tracker.store.memory_store import InMemoryTrackerStore


class TestCategories:
    """Test category management"""

    def test_initial_categories(self, store):
        assert [c.title for c in store.list_categories()] == ["Health", "Home", "Important"]

    def test_add_category(self, store):
        category = store.add_category("  Sport ")

        assert category.title == "Sport"
        assert "Sport" in [c.title for c in store.list_categories()]

    def test_duplicate_category_rejected(self, store):
        with pytest.raises(ValidationError) as exc_info:
            store.add_category("Health")

        assert exc_info.value.field == "title"

    def test_blank_category_rejected(self, store):
        with pytest.raises(ValidationError):
            store.add_category("   ")

    def test_categories_include_their_trackers(self, populated_store):
        by_title = {c.title: [t.name for t in c.trackers] for c in populated_store.list_categories()}

        assert sorted(by_title["Health"]) == ["Drink water", "Morning run"]
        assert by_title["Home"] == ["Water plants"]

    def test_rename_category_moves_trackers(self, populated_store, water_plants):
        populated_store.rename_category("Home", "House")

        assert populated_store.get_tracker(water_plants.id).category == "House"
        assert "Home" not in [c.title for c in populated_store.list_categories()]

    def test_rename_to_existing_title_rejected(self, populated_store):
        with pytest.raises(ValidationError):
            populated_store.rename_category("Home", "Health")

    def test_rename_unknown_category(self, store):
        with pytest.raises(RecordNotFoundError):
            store.rename_category("Nope", "Still nope")

    def test_delete_category_orphans_trackers(self, populated_store, water_plants):
        populated_store.delete_category("Home")

        assert populated_store.get_tracker(water_plants.id).category == "Home"
        assert "Home" not in [c.title for c in populated_store.list_categories()]

    def test_delete_unknown_category(self, store):
        with pytest.raises(RecordNotFoundError) as exc_info:
            store.delete_category("Nope")

        assert exc_info.value.record_type == "Category"


class TestTrackers:
    """Test tracker CRUD"""

    def test_add_and_get(self, store):
        tracker = store.add_tracker(Tracker(name="Read", category="Home"))

        assert store.get_tracker(tracker.id) == tracker
        assert store.list_trackers() == [tracker]

    def test_add_duplicate_id_rejected(self, populated_store, morning_run):
        with pytest.raises(ValidationError):
            populated_store.add_tracker(morning_run)

    def test_get_unknown_tracker(self, store):
        with pytest.raises(RecordNotFoundError) as exc_info:
            store.get_tracker(uuid4())

        assert exc_info.value.record_type == "Tracker"

    def test_update_tracker(self, populated_store, morning_run):
        populated_store.update_tracker(morning_run.model_copy(update={"name": "Evening run"}))

        assert populated_store.get_tracker(morning_run.id).name == "Evening run"

    def test_update_unknown_tracker(self, store):
        with pytest.raises(RecordNotFoundError):
            store.update_tracker(Tracker(name="Ghost"))

    def test_delete_tracker_removes_its_records(self, populated_store, morning_run, drink_water, monday):
        kept = CompletionRecord(tracker_id=drink_water.id, date=monday)
        populated_store.add_completion(CompletionRecord(tracker_id=morning_run.id, date=monday))
        populated_store.add_completion(kept)

        populated_store.delete_tracker(morning_run.id)

        assert morning_run.id not in {t.id for t in populated_store.list_trackers()}
        assert populated_store.list_completions() == frozenset({kept})

    def test_list_trackers_returns_copy(self, populated_store):
        snapshot = populated_store.list_trackers()
        snapshot.clear()

        assert len(populated_store.list_trackers()) == 4


class TestCompletions:
    """Test completion record storage"""

    def test_add_completion_is_idempotent(self, store, monday):
        record = CompletionRecord(tracker_id=uuid4(), date=monday)
        store.add_completion(record)
        store.add_completion(record)

        assert store.list_completions() == frozenset({record})

    def test_delete_completion(self, store, monday):
        record = CompletionRecord(tracker_id=uuid4(), date=monday)
        store.add_completion(record)
        store.delete_completion(record)

        assert store.list_completions() == frozenset()

    def test_delete_missing_completion(self, store, monday):
        with pytest.raises(RecordNotFoundError):
            store.delete_completion(CompletionRecord(tracker_id=uuid4(), date=monday))

    def test_replace_completions(self, store, monday, tuesday):
        records = [
            CompletionRecord(tracker_id=uuid4(), date=monday),
            CompletionRecord(tracker_id=uuid4(), date=tuesday),
        ]
        store.replace_completions(records)

        assert store.list_completions() == frozenset(records)


class TestObservers:
    """Test subscribe/unsubscribe notifications"""

    def test_observer_receives_change_names(self, store, monday):
        changes = []
        store.subscribe(changes.append)

        store.add_category("Sport")
        tracker = store.add_tracker(Tracker(name="Swim", category="Sport"))
        store.add_completion(CompletionRecord(tracker_id=tracker.id, date=monday))

        assert changes == ["categories", "trackers", "completions"]

    def test_unsubscribe_callable(self, store):
        changes = []
        unsubscribe = store.subscribe(changes.append)
        unsubscribe()

        store.add_category("Sport")

        assert changes == []

    def test_unsubscribe_method(self, store):
        changes = []
        store.subscribe(changes.append)
        store.unsubscribe(changes.append)
        store.unsubscribe(changes.append)  # second call is a no-op

        store.add_category("Sport")

        assert changes == []

    def test_failing_observer_does_not_block_others(self, store):
        def broken(change):
            raise RuntimeError("boom")

        changes = []
        store.subscribe(broken)
        store.subscribe(changes.append)

        store.add_category("Sport")

        assert changes == ["categories"]

    def test_delete_tracker_with_records_notifies_both(self, populated_store, morning_run, monday):
        populated_store.add_completion(CompletionRecord(tracker_id=morning_run.id, date=monday))
        changes = []
        populated_store.subscribe(changes.append)

        populated_store.delete_tracker(morning_run.id)

        assert changes == ["trackers", "completions"]


def test_store_rejects_duplicate_initial_categories():
    with pytest.raises(ValidationError):
        InMemoryTrackerStore(categories=["Health", "Health"])
