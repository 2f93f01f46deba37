"""Care-task tracker for one pet: tasks, logs, time-of-day photos, calendar queries, CSV export."""

__version__ = "0.1.0"
