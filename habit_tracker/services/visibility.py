"""
Tracker Visibility Pipeline

Computes the grouped list of trackers a host should show for a day:

1. Due filter - the tracker's schedule includes the day's weekday
2. Search - case-insensitive substring match on the tracker name
3. Status filter - all / today / completed / incomplete
4. Grouping - trackers are bucketed by category title
5. Sorting - categories by title, trackers by name (ordinal order)

Categories left with no trackers are omitted. Trackers without a known
category are dropped from the output rather than moved to a default group.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from habit_tracker import config
from habit_tracker.models.filters import TrackerFilter
from habit_tracker.models.tracker import CompletionRecord, Tracker, TrackerCategory
from habit_tracker.services.completion import as_log
from habit_tracker.services.schedule import is_due
from habit_tracker.utils.datetime_helpers import DateLike, start_of_day, today_in_timezone

logger = logging.getLogger(__name__)


def resolve_filter_date(
    day: DateLike,
    status_filter: TrackerFilter,
    today: Optional[DateLike] = None
) -> date:
    """
    Day the pipeline actually evaluates

    Selecting the "today" filter moves the active day to today; every other
    filter keeps the requested day.
    """
    if TrackerFilter(status_filter) is TrackerFilter.TODAY:
        return start_of_day(today) if today is not None else today_in_timezone()
    return start_of_day(day)


def matches_search(tracker: Tracker, search_text: str) -> bool:
    """Case-insensitive substring match; only an empty search matches everything"""
    needle = (search_text or "").casefold()
    if not needle:
        return True
    return needle in tracker.name.casefold()


def visible_trackers(
    trackers: Iterable[Tracker],
    day: DateLike,
    search_text: str = "",
    status_filter: TrackerFilter = TrackerFilter.ALL,
    completion_log: Iterable[CompletionRecord] = (),
    *,
    today: Optional[DateLike] = None,
    categories: Optional[Iterable[TrackerCategory]] = None,
    pin_first: bool = False
) -> list[TrackerCategory]:
    """
    Group and sort the trackers visible on a day

    Args:
        trackers: All trackers
        day: Active day
        search_text: Name search text
        status_filter: Status filter
        completion_log: Completion records
        today: Today's date, used by the "today" filter (defaults to the clock)
        categories: Known categories; trackers pointing elsewhere are dropped
        pin_first: Move pinned trackers into a leading pinned group

    Returns:
        Ordered list of TrackerCategory groups, none of them empty
    """
    status_filter = TrackerFilter(status_filter)
    effective_day = resolve_filter_date(day, status_filter, today)
    completed_ids = {
        record.tracker_id for record in as_log(completion_log)
        if record.date == effective_day
    }
    known_titles = {c.title for c in categories} if categories is not None else None

    visible = [
        t for t in trackers
        if is_due(t, effective_day) and matches_search(t, search_text)
    ]

    if status_filter is TrackerFilter.COMPLETED:
        visible = [t for t in visible if t.id in completed_ids]
    elif status_filter is TrackerFilter.INCOMPLETE:
        visible = [t for t in visible if t.id not in completed_ids]

    pinned: list[Tracker] = []
    groups: dict[str, list[Tracker]] = {}
    for tracker in visible:
        if not tracker.category or (known_titles is not None and tracker.category not in known_titles):
            logger.debug(f"Skipping tracker {tracker.id} without a known category")
            continue
        if pin_first and tracker.is_pinned:
            pinned.append(tracker)
            continue
        groups.setdefault(tracker.category, []).append(tracker)

    result = [
        TrackerCategory(title=title, trackers=sorted(items, key=lambda t: t.name))
        for title, items in sorted(groups.items(), key=lambda pair: pair[0])
    ]
    if pinned:
        result.insert(0, TrackerCategory(
            title=config.PINNED_CATEGORY_TITLE,
            trackers=sorted(pinned, key=lambda t: t.name)
        ))

    logger.debug(
        f"Visible trackers on {effective_day} (filter={status_filter.value}): "
        f"{sum(len(g.trackers) for g in result)} in {len(result)} groups"
    )
    return result
