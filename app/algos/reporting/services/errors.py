"""Reporting errors - Exception hierarchy for statement and report generation.

Missing ledger data is never an error (it yields zero metrics). Only lookups
of subjects that do not exist and malformed period requests raise.
"""

from typing import Optional


class ReportingError(Exception):
    """Base exception for reporting errors."""

    pass


class SubjectNotFoundError(ReportingError):
    """Raised when the campaign or user a report is requested for does not exist."""

    def __init__(self, subject_kind: str, subject_id: object, message: Optional[str] = None):
        super().__init__(message or f"{subject_kind.capitalize()} not found: {subject_id}")
        self.subject_kind = subject_kind
        self.subject_id = subject_id


class InvalidPeriodError(ReportingError, ValueError):
    """Raised for an unknown report granularity or an out-of-range period number."""

    pass


class InvalidSubjectKindError(ReportingError, ValueError):
    """Raised when a statement is requested for an unsupported subject kind."""

    pass
