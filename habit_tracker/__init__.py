"""
Habit tracker core

Pure computations behind a habit-tracking app:
- Schedule evaluation (which trackers are due on a day)
- Visibility pipeline (due filter, search, status filter, grouping, sorting)
- Completion toggling
- Statistics (best period, ideal days, completed today, average)
"""

from habit_tracker.models.filters import TrackerFilter, TrackerStatistics
from habit_tracker.models.tracker import CompletionRecord, Schedule, Tracker, TrackerCategory
from habit_tracker.services.completion import completed_days_count, is_completed, toggle_completion
from habit_tracker.services.schedule import is_due
from habit_tracker.services.statistics import compute_statistics
from habit_tracker.services.tracker_service import TrackerService
from habit_tracker.services.visibility import resolve_filter_date, visible_trackers
from habit_tracker.store.memory_store import InMemoryTrackerStore

__all__ = [
    "TrackerFilter",
    "TrackerStatistics",
    "CompletionRecord",
    "Schedule",
    "Tracker",
    "TrackerCategory",
    "completed_days_count",
    "is_completed",
    "toggle_completion",
    "is_due",
    "compute_statistics",
    "TrackerService",
    "resolve_filter_date",
    "visible_trackers",
    "InMemoryTrackerStore",
]
