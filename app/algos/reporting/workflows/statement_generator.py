"""Statement Generator Workflow - Idempotent production of statements and reports.

For every (subject, period) the generator:
1. Computes period boundaries from the request
2. Returns the stored row if one already exists (cache hit, never re-derived)
3. Otherwise runs the Metric Calculator and inserts a final row
4. If the insert loses a race on the unique key, returns the winner's row

Statement views (income statement, balance sheet, cash flow, analysis) and
influencer earnings are derived on top and are not persisted.

Does NOT contain:
- Ledger queries or arithmetic (delegates to MetricCalculator)
- Database CRUD logic (delegates to domain)
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.models import CampaignProfitLossReport, FinancialStatement, PlatformRevenueReport
from app.domain import (
    BrandCampaignOperations,
    CampaignPLReportOperations,
    FinancialStatementOperations,
    PlatformRevenueReportOperations,
)
from app.algos.reporting.services import (
    EarningsAnalytics,
    EarningsReport,
    EarningsService,
    EarningsSummary,
    InvalidPeriodError,
    InvalidSubjectKindError,
    MetricCalculator,
    Period,
    ReportingPolicy,
    SUBJECT_KINDS,
    SubjectNotFoundError,
    build_balance_sheet,
    build_cash_flow_statement,
    build_financial_analysis,
    build_income_statement,
    current_period,
    month_period,
    previous_month,
    report_period,
    statement_period,
)

logger = logging.getLogger(__name__)

# Platform-wide statements are stored under this fixed subject id
PLATFORM_SUBJECT_ID = UUID(int=0)

GENERATED_BY = "system"

T = TypeVar("T")


class StatementGenerator:
    """Memoizing generator for statements and reports.

    Usage:
        from app.db.engine import get_db_session

        with get_db_session() as session:
            generator = StatementGenerator(session)
            statement = generator.generate_monthly_statement(brand_id, "brand", 2025, 2)
            again = generator.generate_monthly_statement(brand_id, "brand", 2025, 2)
            assert again.id == statement.id
    """

    def __init__(
        self,
        session: Session,
        calculator: Optional[MetricCalculator] = None,
        policy: Optional[ReportingPolicy] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """Initialize generator.

        Args:
            session: Database session (owned by the caller)
            calculator: Metric calculator (defaults to one bound to `session`)
            policy: Policy constants (defaults to the calculator's policy)
            today: Clock used for open-ended campaign windows and current periods
        """
        self.session = session
        self.policy = policy or (calculator.policy if calculator else ReportingPolicy())
        self.calculator = calculator or MetricCalculator(session, self.policy)
        self.earnings = EarningsService(session, self.policy)
        self._today = today or date.today

    # =========================================================================
    # Persistence helper
    # =========================================================================

    def _insert_or_fetch(
        self,
        row: T,
        create: Callable[[Session, T], T],
        lookup: Callable[[], Optional[T]],
        description: str,
    ) -> T:
        """Insert a new row; if the unique key is already taken, return the stored row."""
        try:
            return create(self.session, row)
        except IntegrityError:
            self.session.rollback()
            existing = lookup()
            if existing is None:
                raise
            logger.warning(f"Lost insert race for {description}, returning existing row {existing.id}")
            return existing

    # =========================================================================
    # Persisted statements and reports
    # =========================================================================

    def generate_monthly_statement(
        self,
        subject_id: Optional[UUID],
        subject_kind: str,
        year: int,
        month: int,
    ) -> FinancialStatement:
        """Get or create the monthly statement of a brand, influencer or the platform.

        Args:
            subject_id: User UUID (None or PLATFORM_SUBJECT_ID for the platform)
            subject_kind: brand, influencer or platform
            year: Calendar year
            month: Month 1-12

        Returns:
            The stored statement for the period

        Raises:
            InvalidPeriodError: Month out of range
            InvalidSubjectKindError: Unknown subject kind
        """
        period = month_period(year, month)
        if subject_kind not in SUBJECT_KINDS:
            raise InvalidSubjectKindError(f"Invalid subject kind: {subject_kind}")
        if subject_kind == "platform":
            subject_id = PLATFORM_SUBJECT_ID
        elif subject_id is None:
            raise ValueError(f"A {subject_kind} statement requires a subject id")

        def lookup() -> Optional[FinancialStatement]:
            return FinancialStatementOperations.get_by_unique_key(
                self.session, subject_id, subject_kind, "monthly", period.start, period.end
            )

        existing = lookup()
        if existing:
            logger.info(f"Cached monthly statement {existing.id} for {subject_kind} {subject_id} {period.label()}")
            return existing

        logger.info(f"Generating monthly statement for {subject_kind} {subject_id} {period.label()}")
        metrics = self.calculator.calculate_user_metrics(
            None if subject_kind == "platform" else subject_id, subject_kind, period
        )

        statement = FinancialStatement(
            subject_id=subject_id,
            subject_type=subject_kind,
            statement_type="monthly",
            period_start=period.start,
            period_end=period.end,
            status="final",
            currency=self.policy.currency,
            generated_by=GENERATED_BY,
            **metrics,
        )
        statement = self._insert_or_fetch(
            statement,
            FinancialStatementOperations.create,
            lookup,
            f"{subject_kind} {subject_id} {period.label()}",
        )

        logger.info(f"Monthly statement generated: {statement.id}")
        return statement

    def campaign_window(self, campaign: Any, report_period_kind: str) -> Period:
        """Reporting window for a campaign P&L.

        campaign_total spans the campaign's dates (start falls back to creation,
        end to today) widened by the padding policy on both sides. Payments of
        two adjacent campaigns of the same brand can fall in both windows.
        """
        if report_period_kind == "campaign_total":
            start = campaign.exact_start_date or campaign.created_at
            end = campaign.exact_end_date or self._today()
            start = start.date() if isinstance(start, datetime) else start
            end = end.date() if isinstance(end, datetime) else end
            return Period(start, max(start, end)).widened(self.policy.campaign_window_padding_days)

        if report_period_kind in ("monthly", "quarterly"):
            return current_period(report_period_kind, self._today())

        raise InvalidPeriodError(f"Invalid report period: {report_period_kind}")

    def generate_campaign_pl_report(
        self,
        campaign_id: UUID,
        brand_id: Optional[UUID] = None,
        report_period_kind: str = "campaign_total",
    ) -> CampaignProfitLossReport:
        """Get or create the P&L report of a campaign.

        Args:
            campaign_id: Campaign UUID
            brand_id: Brand UUID stored on the report (defaults to the campaign's brand)
            report_period_kind: campaign_total, monthly or quarterly

        Returns:
            The stored report for the window

        Raises:
            SubjectNotFoundError: Campaign does not exist
        """
        campaign = BrandCampaignOperations.get_by_id(self.session, campaign_id)
        if campaign is None:
            raise SubjectNotFoundError("campaign", campaign_id)

        period = self.campaign_window(campaign, report_period_kind)

        def lookup() -> Optional[CampaignProfitLossReport]:
            return CampaignPLReportOperations.get_by_unique_key(
                self.session, campaign_id, report_period_kind, period.start, period.end
            )

        existing = lookup()
        if existing:
            logger.info(f"Cached P&L report {existing.id} for campaign {campaign_id} {period.label()}")
            return existing

        logger.info(f"Generating P&L report for campaign {campaign_id} ({report_period_kind}) {period.label()}")
        metrics = self.calculator.calculate_campaign_pl_metrics(campaign_id, period)

        report = CampaignProfitLossReport(
            campaign_id=campaign_id,
            brand_id=brand_id or campaign.brand_id,
            report_period=report_period_kind,
            period_start=period.start,
            period_end=period.end,
            status="final",
            currency=self.policy.currency,
            **metrics,
        )
        report = self._insert_or_fetch(
            report,
            CampaignPLReportOperations.create,
            lookup,
            f"campaign {campaign_id} {period.label()}",
        )

        logger.info(f"Campaign P&L report generated: {report.id}")
        return report

    def generate_platform_revenue_report(
        self,
        report_type: str,
        year: int,
        period_number: int = 1,
    ) -> PlatformRevenueReport:
        """Get or create the platform revenue report for one granularity and period.

        Args:
            report_type: daily, weekly, monthly, quarterly or yearly
            year: Calendar year
            period_number: Day of year, week, month or quarter (ignored for yearly)

        Raises:
            InvalidPeriodError: Unknown report type or period out of range
        """
        period = report_period(report_type, year, period_number)

        def lookup() -> Optional[PlatformRevenueReport]:
            return PlatformRevenueReportOperations.get_by_unique_key(
                self.session, report_type, period.start, period.end
            )

        existing = lookup()
        if existing:
            logger.info(f"Cached platform report {existing.id} ({report_type}) {period.label()}")
            return existing

        logger.info(f"Generating platform revenue report ({report_type}) {period.label()}")
        metrics = self.calculator.calculate_platform_metrics(period)

        report = PlatformRevenueReport(
            report_type=report_type,
            period_start=period.start,
            period_end=period.end,
            status="final",
            currency=self.policy.currency,
            generated_by=GENERATED_BY,
            **metrics,
        )
        report = self._insert_or_fetch(
            report,
            PlatformRevenueReportOperations.create,
            lookup,
            f"platform {report_type} {period.label()}",
        )

        logger.info(f"Platform revenue report generated: {report.id}")
        return report

    # =========================================================================
    # Statement views (month defaults to December for the year view)
    # =========================================================================

    def generate_income_statement(
        self, subject_id: UUID, subject_kind: str, year: int, month: Optional[int] = None
    ) -> dict[str, Any]:
        statement = self.generate_monthly_statement(subject_id, subject_kind, year, month or 12)
        return build_income_statement(statement, statement_period(year, month))

    def generate_balance_sheet(
        self, subject_id: UUID, subject_kind: str, year: int, month: Optional[int] = None
    ) -> dict[str, Any]:
        statement = self.generate_monthly_statement(subject_id, subject_kind, year, month or 12)
        return build_balance_sheet(statement, statement_period(year, month).end)

    def generate_cash_flow_statement(
        self, subject_id: UUID, subject_kind: str, year: int, month: Optional[int] = None
    ) -> dict[str, Any]:
        """Cash flow with deltas against the preceding month.

        For a year view the comparison is December of the previous year.
        """
        current = self.generate_monthly_statement(subject_id, subject_kind, year, month or 12)
        if month:
            prev_year, prev_month = previous_month(year, month)
        else:
            prev_year, prev_month = year - 1, 12
        previous = self.generate_monthly_statement(subject_id, subject_kind, prev_year, prev_month)

        return build_cash_flow_statement(current, previous, statement_period(year, month))

    def generate_financial_analysis(
        self, subject_id: UUID, subject_kind: str, year: int, month: Optional[int] = None
    ) -> dict[str, Any]:
        statement = self.generate_monthly_statement(subject_id, subject_kind, year, month or 12)
        return build_financial_analysis(statement)

    # =========================================================================
    # Earnings (never persisted)
    # =========================================================================

    def generate_influencer_earnings_summary(
        self, influencer_id: UUID, year: int, month: Optional[int] = None
    ) -> EarningsSummary:
        return self.earnings.summary(influencer_id, year, month)

    def generate_earnings_report(self, influencer_id: UUID, year: int, month: int) -> EarningsReport:
        return self.earnings.report(influencer_id, year, month)

    def generate_earnings_analytics(
        self, influencer_id: UUID, today: Optional[date] = None
    ) -> EarningsAnalytics:
        return self.earnings.analytics(influencer_id, today or self._today())
