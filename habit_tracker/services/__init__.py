"""
Service Layer Package

Pure computation services over explicit inputs:
- schedule: is_due
- visibility: visible_trackers, resolve_filter_date
- completion: toggle_completion, is_completed, completed_days_count
- statistics: compute_statistics

Stateful facade:
- TrackerService: view state (day, filter, search) over an injected store
"""
