"""Domain operations for FinancialStatement model - Shared CRUD operations."""

from datetime import date
from typing import Optional, List
from uuid import UUID
from sqlmodel import Session, select, func
from app.models import FinancialStatement


class FinancialStatementOperations:
    """Core CRUD operations for FinancialStatement model.

    Statements are write-once: there is no update or upsert. Keep this
    class focused on data access only - no metric computation.
    """

    @staticmethod
    def get_by_id(session: Session, statement_id: UUID) -> Optional[FinancialStatement]:
        """Get financial statement by UUID.

        Args:
            session: Database session
            statement_id: Statement UUID

        Returns:
            FinancialStatement if found, None otherwise
        """
        return session.get(FinancialStatement, statement_id)

    @staticmethod
    def get_by_unique_key(
        session: Session,
        subject_id: UUID,
        subject_type: str,
        statement_type: str,
        period_start: date,
        period_end: date,
    ) -> Optional[FinancialStatement]:
        """Get statement by unique key (subject, subject type, statement type, period).

        Args:
            session: Database session
            subject_id: Brand, influencer or platform UUID
            subject_type: brand, influencer or platform
            statement_type: monthly, quarterly, yearly or custom
            period_start: First day of the period
            period_end: Last day of the period

        Returns:
            FinancialStatement if found, None otherwise
        """
        stmt = select(FinancialStatement).where(
            FinancialStatement.subject_id == subject_id,
            FinancialStatement.subject_type == subject_type,
            FinancialStatement.statement_type == statement_type,
            FinancialStatement.period_start == period_start,
            FinancialStatement.period_end == period_end,
        )
        return session.exec(stmt).first()

    @staticmethod
    def list_for_subject(
        session: Session,
        subject_id: UUID,
        statement_type: Optional[str] = None,
        limit: int = 24,
    ) -> List[FinancialStatement]:
        """Get a subject's statements, most recent period first.

        Args:
            session: Database session
            subject_id: Subject UUID
            statement_type: Optional filter by statement type
            limit: Maximum rows returned

        Returns:
            List of statements ordered by period_end descending
        """
        stmt = select(FinancialStatement).where(FinancialStatement.subject_id == subject_id)

        if statement_type:
            stmt = stmt.where(FinancialStatement.statement_type == statement_type)

        stmt = stmt.order_by(FinancialStatement.period_end.desc()).limit(limit)
        return list(session.exec(stmt).all())

    @staticmethod
    def create(
        session: Session,
        statement: FinancialStatement,
        commit: bool = True
    ) -> FinancialStatement:
        """Create a new financial statement.

        Args:
            session: Database session
            statement: FinancialStatement model to create
            commit: If True, commit immediately. If False, caller must commit.

        Returns:
            Created statement with populated ID

        Raises:
            IntegrityError: If a statement already exists for the same key
        """
        session.add(statement)

        if commit:
            session.commit()
            session.refresh(statement)
        else:
            session.flush()

        return statement

    @staticmethod
    def count(
        session: Session,
        subject_id: Optional[UUID] = None,
        statement_type: Optional[str] = None
    ) -> int:
        """Count statements with optional filters."""
        stmt = select(func.count(FinancialStatement.id))

        if subject_id:
            stmt = stmt.where(FinancialStatement.subject_id == subject_id)

        if statement_type:
            stmt = stmt.where(FinancialStatement.statement_type == statement_type)

        return int(session.exec(stmt).one())
