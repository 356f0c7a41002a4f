"""Global test fixtures and utilities for habit-tracker tests"""
import pytest
from datetime import date
from uuid import UUID

from habit_tracker.models.tracker import CompletionRecord, Schedule, Tracker, TrackerCategory
from habit_tracker.services.tracker_service import TrackerService
from habit_tracker.store.memory_store import InMemoryTrackerStore


# ============================================================================
# Calendar Fixtures
# ============================================================================

# 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)
TUESDAY = date(2024, 1, 2)
WEDNESDAY = date(2024, 1, 3)
SUNDAY = date(2024, 1, 7)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def tuesday():
    return TUESDAY


@pytest.fixture
def wednesday():
    return WEDNESDAY


# ============================================================================
# Tracker Fixtures
# ============================================================================

@pytest.fixture
def water_plants():
    """Tracker due Monday, Wednesday and Friday"""
    return Tracker(
        id=UUID("00000000-0000-0000-0000-000000000001"),
        name="Water plants",
        emoji="🌺",
        color="Color selection 1",
        schedule=Schedule.from_weekdays([0, 2, 4]),
        category="Home",
    )


@pytest.fixture
def morning_run():
    """Tracker due every day"""
    return Tracker(
        id=UUID("00000000-0000-0000-0000-000000000002"),
        name="Morning run",
        emoji="🥇",
        color="Color selection 2",
        schedule=Schedule.every_day(),
        category="Health",
    )


@pytest.fixture
def drink_water():
    """Tracker due every day, same category as morning_run"""
    return Tracker(
        id=UUID("00000000-0000-0000-0000-000000000003"),
        name="Drink water",
        emoji="🥦",
        color="Color selection 3",
        schedule=Schedule.every_day(),
        category="Health",
    )


@pytest.fixture
def dentist():
    """Irregular event without a schedule"""
    return Tracker(
        id=UUID("00000000-0000-0000-0000-000000000004"),
        name="Dentist appointment",
        emoji="😇",
        color="Color selection 4",
        category="Important",
    )


@pytest.fixture
def all_trackers(water_plants, morning_run, drink_water, dentist):
    return [water_plants, morning_run, drink_water, dentist]


@pytest.fixture
def categories():
    return [
        TrackerCategory(title="Health"),
        TrackerCategory(title="Home"),
        TrackerCategory(title="Important"),
    ]


@pytest.fixture
def record_factory():
    """Factory for completion records"""
    def _create(tracker, day):
        return CompletionRecord(tracker_id=tracker.id, date=day)

    return _create


# ============================================================================
# Store & Service Fixtures
# ============================================================================

@pytest.fixture
def store():
    """Store with the three standard categories and no trackers"""
    return InMemoryTrackerStore(categories=["Health", "Home", "Important"])


@pytest.fixture
def populated_store(all_trackers):
    return InMemoryTrackerStore(
        trackers=all_trackers,
        categories=["Health", "Home", "Important"],
    )


@pytest.fixture
def service(populated_store, wednesday):
    """Service whose clock is frozen on Wednesday 2024-01-03"""
    return TrackerService(store=populated_store, clock=lambda: wednesday)
