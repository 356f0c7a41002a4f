"""Tracker storage"""

from habit_tracker.store.memory_store import InMemoryTrackerStore

__all__ = ["InMemoryTrackerStore"]
