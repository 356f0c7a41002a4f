"""
TrackerService - Tracker Screen Business Logic

Owns the view state of a tracker screen (active day, status filter, search
text) and turns store snapshots into grouped sections, completion toggles and
statistics. Hosts call it on every user interaction and re-render from the
returned values.
"""

import logging
from datetime import date
from typing import Any, Callable, Iterable, Optional, Union
from uuid import UUID

import pydantic

from habit_tracker import config
from habit_tracker.exceptions import (
    FutureCompletionError,
    RecordNotFoundError,
    ValidationError,
    from_pydantic_error,
)
from habit_tracker.models.filters import TrackerFilter, TrackerStatistics
from habit_tracker.models.tracker import Schedule, Tracker, TrackerCategory
from habit_tracker.services.completion import completed_days_count, is_completed, toggle_completion
from habit_tracker.services.statistics import compute_statistics
from habit_tracker.services.visibility import resolve_filter_date, visible_trackers
from habit_tracker.store.memory_store import InMemoryTrackerStore
from habit_tracker.utils.datetime_helpers import DateLike, start_of_day, today_in_timezone

logger = logging.getLogger(__name__)


class TrackerService:
    """
    Service for the tracker list and statistics screens.

    Responsibilities:
    - Tracker and category creation/editing through the store
    - Active day, status filter and search state
    - Completion toggling for the active day
    - Statistics
    """

    def __init__(
        self,
        store: Optional[InMemoryTrackerStore] = None,
        clock: Optional[Callable[[], date]] = None,
        allow_future_completions: Optional[bool] = None
    ):
        """
        Initialize TrackerService.

        Args:
            store: Tracker store (a fresh in-memory store by default)
            clock: Returns today's date (defaults to the configured timezone)
            allow_future_completions: Override config.ALLOW_FUTURE_COMPLETIONS
        """
        self.store = store if store is not None else InMemoryTrackerStore()
        self._clock = clock or today_in_timezone
        self.allow_future_completions = (
            config.ALLOW_FUTURE_COMPLETIONS
            if allow_future_completions is None
            else allow_future_completions
        )
        self.current_date: date = self._clock()
        self.current_filter: TrackerFilter = TrackerFilter.ALL
        self.search_text: str = ""
        logger.debug("TrackerService initialized")

    def today(self) -> date:
        return self._clock()

    # Categories

    def create_category(self, title: str) -> TrackerCategory:
        return self.store.add_category(title)

    # Trackers

    def create_tracker(
        self,
        name: str,
        category: str,
        emoji: str = "",
        color: str = "",
        schedule: Optional[Union[Schedule, Iterable[bool]]] = None
    ) -> Tracker:
        """
        Create a tracker; `schedule=None` creates an irregular event.

        Raises:
            ValidationError: Bad name or schedule of the wrong length
            RecordNotFoundError: Unknown category
        """
        self._require_category(category)
        try:
            if schedule is not None and not isinstance(schedule, Schedule):
                schedule = Schedule(days_of_week=tuple(schedule))
            tracker = Tracker(
                name=name,
                emoji=emoji,
                color=color,
                category=category,
                schedule=schedule
            )
        except pydantic.ValidationError as e:
            raise from_pydantic_error(e, operation="create_tracker", context={"name": name})

        return self.store.add_tracker(tracker)

    def update_tracker(self, tracker_id: UUID, **changes: Any) -> Tracker:
        """
        Edit a tracker in place (rename, recolor, reschedule, re-categorize)

        A `schedule` change may be given as a list of 7 booleans, a Schedule
        or None (irregular).

        Raises:
            ValidationError: Unknown field or invalid value (`id` is not editable)
            RecordNotFoundError: Unknown tracker or category
        """
        tracker = self.store.get_tracker(tracker_id)
        for key, value in changes.items():
            if key == "id":
                raise ValidationError("Tracker id cannot be changed", field=key, value=value, operation="update_tracker")
            if key not in Tracker.model_fields:
                raise ValidationError(f"Unknown tracker field '{key}'", field=key, value=value, operation="update_tracker")

        if "category" in changes:
            self._require_category(changes["category"])

        data = tracker.model_dump()
        data.update(changes)
        schedule = data.get("schedule")
        if schedule is not None and not isinstance(schedule, (Schedule, dict)):
            data["schedule"] = {"days_of_week": tuple(schedule)}

        try:
            updated = Tracker.model_validate(data)
        except pydantic.ValidationError as e:
            raise from_pydantic_error(e, operation="update_tracker", context={"tracker_id": str(tracker_id)})

        return self.store.update_tracker(updated)

    def delete_tracker(self, tracker_id: UUID) -> None:
        self.store.delete_tracker(tracker_id)

    def toggle_pinned(self, tracker_id: UUID) -> Tracker:
        tracker = self.store.get_tracker(tracker_id)
        return self.store.update_tracker(tracker.model_copy(update={"is_pinned": not tracker.is_pinned}))

    # View state

    def set_date(self, day: DateLike) -> None:
        self.current_date = start_of_day(day)

    def set_filter(self, status_filter: TrackerFilter) -> None:
        """Select a status filter; "today" also moves the active day to today"""
        self.current_filter = TrackerFilter(status_filter)
        self.current_date = resolve_filter_date(self.current_date, self.current_filter, self.today())
        logger.debug(f"Filter set to {self.current_filter.value}, active day {self.current_date}")

    def set_search(self, text: str) -> None:
        self.search_text = text or ""

    def sections(self, pin_first: bool = False) -> list[TrackerCategory]:
        """Grouped trackers for the current view state"""
        return visible_trackers(
            self.store.list_trackers(),
            self.current_date,
            self.search_text,
            self.current_filter,
            self.store.list_completions(),
            today=self.today(),
            categories=self.store.list_categories(),
            pin_first=pin_first
        )

    def has_trackers(self) -> bool:
        return bool(self.sections())

    def should_show_filter_button(self) -> bool:
        """Hidden only when nothing is visible and no filter narrows the list"""
        return self.has_trackers() or self.current_filter is not TrackerFilter.ALL

    # Completions

    def toggle(self, tracker_id: UUID) -> bool:
        """
        Toggle completion of a tracker on the active day.

        Returns:
            True if the tracker is now completed

        Raises:
            RecordNotFoundError: Unknown tracker
            FutureCompletionError: Active day is after today
        """
        self.store.get_tracker(tracker_id)
        day = self.current_date
        if day > self.today() and not self.allow_future_completions:
            raise FutureCompletionError(
                f"Cannot mark tracker {tracker_id} done on {day.isoformat()}",
                value=day.isoformat(),
                operation="toggle_completion"
            )

        log = toggle_completion(tracker_id, day, self.store.list_completions())
        self.store.replace_completions(log)
        completed = is_completed(tracker_id, day, log)
        logger.info(f"Tracker {tracker_id} {'completed' if completed else 'uncompleted'} on {day}")
        return completed

    def is_completed(self, tracker_id: UUID) -> bool:
        return is_completed(tracker_id, self.current_date, self.store.list_completions())

    def days_completed(self, tracker_id: UUID) -> int:
        return completed_days_count(tracker_id, self.store.list_completions())

    # Statistics

    def statistics(self) -> TrackerStatistics:
        return compute_statistics(
            self.store.list_trackers(),
            self.store.list_completions(),
            today=self.today()
        )

    def _require_category(self, title: str) -> None:
        if title not in {c.title for c in self.store.list_categories()}:
            raise RecordNotFoundError(
                f"Category '{title}' not found",
                record_type="Category",
                record_id=title
            )
