"""Domain operations for ledger tables - Read-only queries used by reporting.

Invoices, campaign payments, financial transactions, campaigns and users are
owned by the payment and invoice workflows. Nothing here mutates them.
All range filters take a half-open [start, end) datetime window.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID
from sqlmodel import Session, select, func
from app.models import (
    BrandCampaign,
    CampaignPayment,
    FinancialTransaction,
    Invoice,
    User,
)


def _as_decimal(value: object) -> Decimal:
    """SUM() returns NULL for no rows and float on some backends."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class InvoiceOperations:
    """Invoice queries for statements, P&L and earnings."""

    @staticmethod
    def get_for_subject(
        session: Session,
        subject_kind: str,
        subject_id: Optional[UUID],
        start: datetime,
        end: datetime,
    ) -> List[Invoice]:
        """Get all invoices of a subject created in the window.

        Args:
            session: Database session
            subject_kind: "brand" (payer), "influencer" (payee) or "platform" (all)
            subject_id: User UUID (ignored for platform)
            start: Window start (inclusive)
            end: Window end (exclusive)

        Returns:
            Invoices of any status, oldest first
        """
        stmt = select(Invoice).where(Invoice.created_at >= start, Invoice.created_at < end)

        if subject_kind == "brand":
            stmt = stmt.where(Invoice.brand_id == subject_id)
        elif subject_kind == "influencer":
            stmt = stmt.where(Invoice.influencer_id == subject_id)

        return list(session.exec(stmt.order_by(Invoice.created_at)).all())

    @staticmethod
    def get_paid_with_campaigns(
        session: Session,
        influencer_id: UUID,
        start: datetime,
        end: datetime,
    ) -> List[Tuple[Invoice, BrandCampaign]]:
        """Get an influencer's paid invoices joined to their campaigns."""
        stmt = (
            select(Invoice, BrandCampaign)
            .join(BrandCampaign, Invoice.campaign_id == BrandCampaign.id)
            .where(
                Invoice.influencer_id == influencer_id,
                Invoice.status == "paid",
                Invoice.created_at >= start,
                Invoice.created_at < end,
            )
            .order_by(Invoice.created_at)
        )
        return list(session.exec(stmt).all())

    @staticmethod
    def totals_by_status(
        session: Session,
        influencer_id: UUID,
        start: datetime,
        end: datetime,
    ) -> Dict[str, Decimal]:
        """Sum of invoice totals per status for one influencer."""
        stmt = (
            select(Invoice.status, func.sum(Invoice.total_amount))
            .where(
                Invoice.influencer_id == influencer_id,
                Invoice.created_at >= start,
                Invoice.created_at < end,
            )
            .group_by(Invoice.status)
        )
        return {status: _as_decimal(total) for status, total in session.exec(stmt).all()}

    @staticmethod
    def totals_for_campaign(
        session: Session,
        campaign_id: UUID,
        start: datetime,
        end: datetime,
    ) -> Tuple[Decimal, Decimal, int]:
        """(sum of totals, sum of tax, invoice count) for a campaign, any status."""
        stmt = select(
            func.sum(Invoice.total_amount),
            func.sum(Invoice.tax_amount),
            func.count(Invoice.id),
        ).where(
            Invoice.campaign_id == campaign_id,
            Invoice.created_at >= start,
            Invoice.created_at < end,
        )
        total, tax, count = session.exec(stmt).one()
        return _as_decimal(total), _as_decimal(tax), int(count or 0)

    @staticmethod
    def paid_totals(
        session: Session,
        start: datetime,
        end: datetime,
    ) -> Tuple[Decimal, Decimal, int]:
        """(volume, fees, count) of all paid invoices platform-wide."""
        stmt = select(
            func.sum(Invoice.total_amount),
            func.sum(Invoice.tax_amount),
            func.count(Invoice.id),
        ).where(
            Invoice.status == "paid",
            Invoice.created_at >= start,
            Invoice.created_at < end,
        )
        volume, fees, count = session.exec(stmt).one()
        return _as_decimal(volume), _as_decimal(fees), int(count or 0)


class CampaignPaymentOperations:
    """Campaign payment queries."""

    @staticmethod
    def sum_for_campaign(
        session: Session,
        campaign_id: UUID,
        start: datetime,
        end: datetime,
        status: str = "paid",
    ) -> Tuple[Decimal, int]:
        """(sum of amounts, payment count) for a campaign in the window."""
        stmt = select(
            func.sum(CampaignPayment.amount),
            func.count(CampaignPayment.id),
        ).where(
            CampaignPayment.campaign_id == campaign_id,
            CampaignPayment.status == status,
            CampaignPayment.created_at >= start,
            CampaignPayment.created_at < end,
        )
        total, count = session.exec(stmt).one()
        return _as_decimal(total), int(count or 0)

    @staticmethod
    def get_for_influencer(
        session: Session,
        influencer_id: UUID,
        status: Optional[str] = None,
    ) -> List[CampaignPayment]:
        """Get all payments received by an influencer, oldest first.

        Args:
            session: Database session
            influencer_id: Influencer UUID
            status: Optional status filter (e.g. "completed")

        Returns:
            List of campaign payments
        """
        stmt = select(CampaignPayment).where(CampaignPayment.influencer_id == influencer_id)

        if status:
            stmt = stmt.where(CampaignPayment.status == status)

        return list(session.exec(stmt.order_by(CampaignPayment.created_at)).all())


class FinancialTransactionOperations:
    """Financial transaction queries."""

    @staticmethod
    def sum_platform_commission(
        session: Session,
        campaign_id: UUID,
        start: datetime,
        end: datetime,
    ) -> Tuple[Decimal, int]:
        """(sum of platform fees, count) of completed commission rows for a campaign."""
        stmt = select(
            func.sum(FinancialTransaction.platform_fee),
            func.count(FinancialTransaction.id),
        ).where(
            FinancialTransaction.campaign_id == campaign_id,
            FinancialTransaction.transaction_type == "platform_commission",
            FinancialTransaction.status == "completed",
            FinancialTransaction.created_at >= start,
            FinancialTransaction.created_at < end,
        )
        total, count = session.exec(stmt).one()
        return _as_decimal(total), int(count or 0)


class BrandCampaignOperations:
    """Brand campaign queries."""

    @staticmethod
    def get_by_id(session: Session, campaign_id: UUID) -> Optional[BrandCampaign]:
        """Get campaign by UUID, None if not found."""
        return session.get(BrandCampaign, campaign_id)

    @staticmethod
    def count_by_status(
        session: Session,
        start: datetime,
        end: datetime,
        brand_id: Optional[UUID] = None,
    ) -> Dict[str, int]:
        """Campaigns created in the window, counted per status.

        Args:
            session: Database session
            start: Window start (inclusive)
            end: Window end (exclusive)
            brand_id: Optional filter to one brand

        Returns:
            Mapping of status to campaign count
        """
        stmt = (
            select(BrandCampaign.status, func.count(BrandCampaign.id))
            .where(BrandCampaign.created_at >= start, BrandCampaign.created_at < end)
            .group_by(BrandCampaign.status)
        )

        if brand_id:
            stmt = stmt.where(BrandCampaign.brand_id == brand_id)

        return {status: int(count) for status, count in session.exec(stmt).all()}


class UserOperations:
    """User queries."""

    @staticmethod
    def get_by_id(session: Session, user_id: UUID) -> Optional[User]:
        return session.get(User, user_id)

    @staticmethod
    def count_created(
        session: Session,
        start: datetime,
        end: datetime,
        role: Optional[str] = None,
    ) -> int:
        """Count users who signed up in the window, optionally for one role."""
        stmt = select(func.count(User.id)).where(User.created_at >= start, User.created_at < end)

        if role:
            stmt = stmt.where(User.role == role)

        return int(session.exec(stmt).one() or 0)
