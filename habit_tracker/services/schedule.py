"""Decide whether a tracker is due on a calendar day"""
from habit_tracker.models.tracker import Tracker
from habit_tracker.utils.datetime_helpers import DateLike, weekday_index


def is_due(tracker: Tracker, day: DateLike) -> bool:
    """
    Irregular trackers are due every day; scheduled ones only on their
    selected weekdays (0=Monday .. 6=Sunday).
    """
    if tracker.schedule is None:
        return True
    return tracker.schedule.days_of_week[weekday_index(day)]
