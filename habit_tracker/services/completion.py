"""
Completion log operations

A completion log is a set of CompletionRecord values: at most one record per
(tracker, day), and toggling the same pair twice restores the original log.
All functions are pure; the input log is never mutated.
"""

import logging
from typing import Iterable
from uuid import UUID

from habit_tracker.models.tracker import CompletionRecord
from habit_tracker.utils.datetime_helpers import DateLike, start_of_day

logger = logging.getLogger(__name__)

CompletionLog = frozenset[CompletionRecord]


def as_log(records: Iterable[CompletionRecord]) -> CompletionLog:
    """Freeze any iterable of records into a completion log"""
    if isinstance(records, frozenset):
        return records
    return frozenset(records)


def toggle_completion(
    tracker_id: UUID,
    day: DateLike,
    log: Iterable[CompletionRecord]
) -> CompletionLog:
    """
    Mark a tracker done on a day, or undo it if it is already done

    Args:
        tracker_id: Tracker being toggled
        day: Day to toggle (datetimes are truncated to their day)
        log: Current completion log

    Returns:
        New completion log with the record added or removed
    """
    current = as_log(log)
    record = CompletionRecord(tracker_id=tracker_id, date=start_of_day(day))

    if record in current:
        logger.debug(f"Unmarking tracker {tracker_id} on {record.date}")
        return current - {record}

    logger.debug(f"Marking tracker {tracker_id} done on {record.date}")
    return current | {record}


def is_completed(tracker_id: UUID, day: DateLike, log: Iterable[CompletionRecord]) -> bool:
    """Whether a record exists for (tracker, day)"""
    record = CompletionRecord(tracker_id=tracker_id, date=start_of_day(day))
    return record in as_log(log)


def completed_days_count(tracker_id: UUID, log: Iterable[CompletionRecord]) -> int:
    """Number of days a tracker has been completed on"""
    return sum(1 for record in as_log(log) if record.tracker_id == tracker_id)
