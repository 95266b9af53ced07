"""Domain operations for campaign P&L and platform revenue reports."""

from datetime import date
from typing import Optional, List
from uuid import UUID
from sqlmodel import Session, select
from app.models import CampaignProfitLossReport, PlatformRevenueReport


class CampaignPLReportOperations:
    """CRUD operations for CampaignProfitLossReport."""

    @staticmethod
    def get_by_id(session: Session, report_id: UUID) -> Optional[CampaignProfitLossReport]:
        return session.get(CampaignProfitLossReport, report_id)

    @staticmethod
    def get_by_unique_key(
        session: Session,
        campaign_id: UUID,
        report_period: str,
        period_start: date,
        period_end: date,
    ) -> Optional[CampaignProfitLossReport]:
        """Get report by (campaign, report period kind, period boundaries)."""
        stmt = select(CampaignProfitLossReport).where(
            CampaignProfitLossReport.campaign_id == campaign_id,
            CampaignProfitLossReport.report_period == report_period,
            CampaignProfitLossReport.period_start == period_start,
            CampaignProfitLossReport.period_end == period_end,
        )
        return session.exec(stmt).first()

    @staticmethod
    def list_for_campaign(session: Session, campaign_id: UUID) -> List[CampaignProfitLossReport]:
        """All reports of a campaign, most recent period first."""
        stmt = (
            select(CampaignProfitLossReport)
            .where(CampaignProfitLossReport.campaign_id == campaign_id)
            .order_by(CampaignProfitLossReport.period_end.desc())
        )
        return list(session.exec(stmt).all())

    @staticmethod
    def create(
        session: Session,
        report: CampaignProfitLossReport,
        commit: bool = True
    ) -> CampaignProfitLossReport:
        """Insert a report.

        Raises:
            IntegrityError: If a report already exists for the same key
        """
        session.add(report)

        if commit:
            session.commit()
            session.refresh(report)
        else:
            session.flush()

        return report


class PlatformRevenueReportOperations:
    """CRUD operations for PlatformRevenueReport."""

    @staticmethod
    def get_by_id(session: Session, report_id: UUID) -> Optional[PlatformRevenueReport]:
        return session.get(PlatformRevenueReport, report_id)

    @staticmethod
    def get_by_unique_key(
        session: Session,
        report_type: str,
        period_start: date,
        period_end: date,
    ) -> Optional[PlatformRevenueReport]:
        """Get report by (granularity, period boundaries)."""
        stmt = select(PlatformRevenueReport).where(
            PlatformRevenueReport.report_type == report_type,
            PlatformRevenueReport.period_start == period_start,
            PlatformRevenueReport.period_end == period_end,
        )
        return session.exec(stmt).first()

    @staticmethod
    def create(
        session: Session,
        report: PlatformRevenueReport,
        commit: bool = True
    ) -> PlatformRevenueReport:
        """Insert a report.

        Raises:
            IntegrityError: If a report already exists for the same key
        """
        session.add(report)

        if commit:
            session.commit()
            session.refresh(report)
        else:
            session.flush()

        return report
