"""
Completion Statistics

Aggregates over the span from the earliest to the latest completion day
(both inclusive):

- Best period: most completions recorded on a single day
- Ideal days: days where every due tracker was completed
- Completed today: records dated today
- Average value: completions per day over the span, rounded half-up

An empty log yields zero for everything.
"""

import logging
from collections import Counter
from typing import Iterable, Optional

from habit_tracker.models.filters import TrackerStatistics
from habit_tracker.models.tracker import CompletionRecord, Tracker
from habit_tracker.services.completion import as_log
from habit_tracker.services.schedule import is_due
from habit_tracker.utils.datetime_helpers import DateLike, days_between, iter_days, start_of_day, today_in_timezone

logger = logging.getLogger(__name__)


def best_period(per_day: Counter) -> int:
    """Busiest day's completion count"""
    return max(per_day.values(), default=0)


def ideal_days(per_day: Counter, trackers: list[Tracker]) -> int:
    """
    Count days in the log span where the number of due trackers is non-zero
    and equals the number of completions recorded that day.
    """
    if not per_day:
        return 0

    count = 0
    for day in iter_days(min(per_day), max(per_day)):
        due = sum(1 for t in trackers if is_due(t, day))
        if due > 0 and per_day[day] == due:
            count += 1
    return count


def average_value(per_day: Counter) -> int:
    """
    Completions per day over the log span, rounded half-up

    Integer arithmetic: floor((2 * total + days) / (2 * days)) == round_half_up(total / days)
    """
    if not per_day:
        return 0
    total = sum(per_day.values())
    days = days_between(min(per_day), max(per_day))
    return (2 * total + days) // (2 * days)


def compute_statistics(
    trackers: Iterable[Tracker],
    log: Iterable[CompletionRecord],
    *,
    today: Optional[DateLike] = None
) -> TrackerStatistics:
    """
    Compute all statistics for a tracker list and completion log

    Args:
        trackers: All trackers (used for ideal-day due counts)
        log: Completion records
        today: Today's date (defaults to the clock in the configured timezone)

    Returns:
        TrackerStatistics
    """
    records = as_log(log)
    if not records:
        return TrackerStatistics()

    if today is None:
        today = today_in_timezone()
    today = start_of_day(today)

    tracker_list = list(trackers)
    per_day = Counter(record.date for record in records)

    stats = TrackerStatistics(
        best_period=best_period(per_day),
        ideal_days=ideal_days(per_day, tracker_list),
        completed_today=per_day.get(today, 0),
        average_value=average_value(per_day),
    )
    logger.debug(f"Computed statistics over {len(per_day)} active days: {stats.model_dump()}")
    return stats
