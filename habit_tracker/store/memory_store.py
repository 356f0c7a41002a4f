"""
In-memory tracker store

Holds trackers, categories and completion records for a host application and
notifies subscribed observers after every mutation. Hosts with a real
database implement the same methods; the computation services only ever see
the snapshots returned by the list_* methods.
"""

import logging
from typing import Callable, Iterable, Optional
from uuid import UUID

from habit_tracker.exceptions import RecordNotFoundError, ValidationError
from habit_tracker.models.tracker import CompletionRecord, Tracker, TrackerCategory
from habit_tracker.services.completion import CompletionLog, as_log

logger = logging.getLogger(__name__)

StoreObserver = Callable[[str], None]

TRACKERS = "trackers"
CATEGORIES = "categories"
COMPLETIONS = "completions"


class InMemoryTrackerStore:
    """Dict-backed store with explicit subscribe/unsubscribe"""

    def __init__(
        self,
        trackers: Optional[Iterable[Tracker]] = None,
        categories: Optional[Iterable[str]] = None,
        completions: Optional[Iterable[CompletionRecord]] = None
    ):
        self._trackers: dict[UUID, Tracker] = {}
        self._categories: list[str] = []
        self._completions: CompletionLog = frozenset()
        self._observers: list[StoreObserver] = []

        for title in categories or ():
            self._add_category(title)
        for tracker in trackers or ():
            self._trackers[tracker.id] = tracker
        if completions is not None:
            self._completions = as_log(completions)

        logger.debug(
            f"InMemoryTrackerStore ready trackers={len(self._trackers)} "
            f"categories={len(self._categories)} completions={len(self._completions)}"
        )

    # ---- observers ----

    def subscribe(self, observer: StoreObserver) -> Callable[[], None]:
        """Register an observer; returns a function that unsubscribes it"""
        self._observers.append(observer)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: StoreObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, change: str) -> None:
        for observer in list(self._observers):
            try:
                observer(change)
            except Exception as e:
                logger.error(f"Store observer failed on '{change}' change: {e}", exc_info=True)

    # ---- categories ----

    def _add_category(self, title: str) -> str:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Category title cannot be empty", field="title", value=title)
        if title in self._categories:
            raise ValidationError(f"Category '{title}' already exists", field="title", value=title)
        self._categories.append(title)
        return title

    def list_categories(self) -> list[TrackerCategory]:
        """All categories with their trackers, in insertion order"""
        return [
            TrackerCategory(
                title=title,
                trackers=[t for t in self._trackers.values() if t.category == title]
            )
            for title in self._categories
        ]

    def add_category(self, title: str) -> TrackerCategory:
        title = self._add_category(title)
        logger.info(f"Category added title={title}")
        self._notify(CATEGORIES)
        return TrackerCategory(title=title)

    def rename_category(self, old_title: str, new_title: str) -> None:
        """Rename a category and move its trackers along"""
        if old_title not in self._categories:
            raise RecordNotFoundError(
                f"Category '{old_title}' not found",
                record_type="Category",
                record_id=old_title
            )
        new_title = (new_title or "").strip()
        if not new_title:
            raise ValidationError("Category title cannot be empty", field="title", value=new_title)
        if new_title != old_title and new_title in self._categories:
            raise ValidationError(f"Category '{new_title}' already exists", field="title", value=new_title)

        self._categories[self._categories.index(old_title)] = new_title
        for tracker_id, tracker in list(self._trackers.items()):
            if tracker.category == old_title:
                self._trackers[tracker_id] = tracker.model_copy(update={"category": new_title})
        logger.info(f"Category renamed {old_title} -> {new_title}")
        self._notify(CATEGORIES)

    def delete_category(self, title: str) -> None:
        """
        Delete a category

        Its trackers keep pointing at the removed title and are therefore
        left out of grouped output until they are re-categorized.
        """
        if title not in self._categories:
            raise RecordNotFoundError(
                f"Category '{title}' not found",
                record_type="Category",
                record_id=title
            )
        self._categories.remove(title)
        logger.info(f"Category deleted title={title}")
        self._notify(CATEGORIES)

    # ---- trackers ----

    def list_trackers(self) -> list[Tracker]:
        return list(self._trackers.values())

    def get_tracker(self, tracker_id: UUID) -> Tracker:
        tracker = self._trackers.get(tracker_id)
        if tracker is None:
            raise RecordNotFoundError(
                f"Tracker {tracker_id} not found",
                record_type="Tracker",
                record_id=str(tracker_id)
            )
        return tracker

    def add_tracker(self, tracker: Tracker) -> Tracker:
        if tracker.id in self._trackers:
            raise ValidationError(f"Tracker {tracker.id} already exists", field="id", value=str(tracker.id))
        self._trackers[tracker.id] = tracker
        logger.info(f"Tracker added id={tracker.id} name={tracker.name} category={tracker.category}")
        self._notify(TRACKERS)
        return tracker

    def update_tracker(self, tracker: Tracker) -> Tracker:
        self.get_tracker(tracker.id)
        self._trackers[tracker.id] = tracker
        logger.info(f"Tracker updated id={tracker.id}")
        self._notify(TRACKERS)
        return tracker

    def delete_tracker(self, tracker_id: UUID) -> None:
        """Delete a tracker together with its completion records"""
        self.get_tracker(tracker_id)
        del self._trackers[tracker_id]
        remaining = frozenset(r for r in self._completions if r.tracker_id != tracker_id)
        removed = len(self._completions) - len(remaining)
        self._completions = remaining
        logger.info(f"Tracker deleted id={tracker_id} records_removed={removed}")
        self._notify(TRACKERS)
        if removed:
            self._notify(COMPLETIONS)

    # ---- completions ----

    def list_completions(self) -> CompletionLog:
        return self._completions

    def add_completion(self, record: CompletionRecord) -> None:
        if record in self._completions:
            return
        self._completions = self._completions | {record}
        self._notify(COMPLETIONS)

    def delete_completion(self, record: CompletionRecord) -> None:
        if record not in self._completions:
            raise RecordNotFoundError(
                f"No completion for tracker {record.tracker_id} on {record.date}",
                record_type="CompletionRecord",
                record_id=f"{record.tracker_id}:{record.date.isoformat()}"
            )
        self._completions = self._completions - {record}
        self._notify(COMPLETIONS)

    def replace_completions(self, log: Iterable[CompletionRecord]) -> None:
        """Swap in a whole new completion log (e.g. the result of a toggle)"""
        self._completions = as_log(log)
        self._notify(COMPLETIONS)
