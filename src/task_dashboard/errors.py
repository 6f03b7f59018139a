# src/task_dashboard/errors.py

from __future__ import annotations


class TaskDashboardError(Exception):
    """Base class for errors surfaced by the dashboard components."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskDashboardError):
    """Client-side input problem (e.g. empty title). Never reaches the store."""


class StoreError(TaskDashboardError):
    """
    Any failure reported by the data-access collaborator.

    The message is passed through as-is: network failures, server errors and
    constraint violations are not distinguished.
    """
