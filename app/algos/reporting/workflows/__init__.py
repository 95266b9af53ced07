"""Reporting workflows - Orchestration of calculator, storage and views.

Workflows coordinate multiple services to accomplish higher-level tasks:
- statement_generator: Cached generation of statements, P&L and platform reports
"""

from .statement_generator import (
    StatementGenerator,
    PLATFORM_SUBJECT_ID,
)

__all__ = [
    "StatementGenerator",
    "PLATFORM_SUBJECT_ID",
]
