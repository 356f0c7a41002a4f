"""Filter and statistics models"""
from enum import Enum
from pydantic import BaseModel


class TrackerFilter(str, Enum):
    """Status filter applied on top of the due-date and search filters"""
    ALL = "all"
    TODAY = "today"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class TrackerStatistics(BaseModel):
    """Aggregates derived from the completion log"""
    best_period: int = 0
    ideal_days: int = 0
    completed_today: int = 0
    average_value: int = 0

    @property
    def is_empty(self) -> bool:
        return not any((self.best_period, self.ideal_days, self.completed_today, self.average_value))
