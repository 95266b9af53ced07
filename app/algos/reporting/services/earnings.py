"""Earnings - Influencer-facing earnings summary, report and analytics.

Nothing here is persisted; every call recomputes from the ledger.
- Summary: paid invoices joined to campaigns for a year or a month
- Report: completed campaign payments for one month, net of platform fee
- Analytics: lifetime totals and month-over-month growth of completed payments
"""

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional
from uuid import UUID

from sqlmodel import Session

from app.domain import CampaignPaymentOperations, InvoiceOperations

from .money import ZERO, HUNDRED, money, to_decimal
from .periods import Period, month_period, previous_month, statement_period
from .policy import ReportingPolicy

logger = logging.getLogger(__name__)

TOP_CATEGORY_LIMIT = 5

# Invoice status -> payment status bucket
PAYMENT_STATUS_BUCKETS = {
    "paid": "paid",
    "sent": "pending",
    "draft": "processing",
}


@dataclass
class CampaignEarnings:
    """Paid earnings from one campaign."""

    campaign_id: UUID
    campaign_title: str
    earnings: Decimal
    completion_date: Optional[datetime]
    status: str


@dataclass
class MonthlyEarnings:
    """Paid earnings within one calendar month."""

    month: str  # English month name
    earnings: Decimal = ZERO
    campaigns: int = 0  # number of paid invoices


@dataclass
class PaymentStatusSplit:
    paid: Decimal = ZERO
    pending: Decimal = ZERO
    processing: Decimal = ZERO


@dataclass
class EarningsSummary:
    """Influencer earnings over a year or a single month."""

    influencer_id: UUID
    period_start: date
    period_end: date
    total_earnings: Decimal = ZERO
    campaign_earnings: List[CampaignEarnings] = field(default_factory=list)
    monthly_breakdown: List[MonthlyEarnings] = field(default_factory=list)
    top_performing_categories: List[str] = field(default_factory=list)
    payment_status: PaymentStatusSplit = field(default_factory=PaymentStatusSplit)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class EarningsLine:
    name: str
    brand: str
    earnings: Decimal
    status: str
    date: datetime


@dataclass
class EarningsReport:
    """Completed payments for one month, net of the platform fee."""

    id: str
    user_id: UUID
    period: str  # e.g. "March 2025"
    total_earnings: Decimal
    net_earnings: Decimal
    platform_fees: Decimal
    campaign_count: int
    generated_at: datetime
    campaign_breakdown: List[EarningsLine] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class EarningsAnalytics:
    """Lifetime view of completed payments."""

    total_earnings: Decimal = ZERO
    monthly_average: Decimal = ZERO
    growth_rate: Decimal = ZERO
    current_month: Decimal = ZERO
    last_month: Decimal = ZERO
    top_campaign: Decimal = ZERO
    platform_breakdown: List[dict] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_paid_invoices(
    influencer_id: UUID,
    period: Period,
    paid_rows: List[tuple],
    totals_by_status: dict[str, Decimal],
    single_month: bool,
) -> EarningsSummary:
    """Build an earnings summary from (invoice, campaign) pairs.

    Args:
        influencer_id: Influencer UUID
        period: The year or month summarized
        paid_rows: Paid invoices joined to their campaigns
        totals_by_status: Invoice totals per status (any status)
        single_month: One monthly bucket instead of twelve
    """
    summary = EarningsSummary(
        influencer_id=influencer_id,
        period_start=period.start,
        period_end=period.end,
    )

    if single_month:
        months = [period.start.month]
    else:
        months = list(range(1, 13))
    buckets = {m: MonthlyEarnings(month=calendar.month_name[m]) for m in months}

    per_campaign: dict[UUID, CampaignEarnings] = {}
    per_type: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for invoice, campaign in paid_rows:
        amount = to_decimal(invoice.total_amount)
        summary.total_earnings += amount

        entry = per_campaign.get(campaign.id)
        if entry is None:
            entry = CampaignEarnings(
                campaign_id=campaign.id,
                campaign_title=campaign.title,
                earnings=ZERO,
                completion_date=campaign.exact_end_date,
                status=campaign.status,
            )
            per_campaign[campaign.id] = entry
        entry.earnings += amount

        bucket = buckets.get(invoice.created_at.month)
        if bucket is not None:
            bucket.earnings += amount
            bucket.campaigns += 1

        if campaign.campaign_type:
            per_type[campaign.campaign_type] += amount

    summary.total_earnings = money(summary.total_earnings)
    summary.campaign_earnings = list(per_campaign.values())
    summary.monthly_breakdown = [buckets[m] for m in months]
    summary.top_performing_categories = [
        name for name, _ in sorted(per_type.items(), key=lambda item: item[1], reverse=True)
    ][:TOP_CATEGORY_LIMIT]

    for status, amount in totals_by_status.items():
        bucket_name = PAYMENT_STATUS_BUCKETS.get(status)
        if bucket_name:
            setattr(summary.payment_status, bucket_name, money(amount))

    return summary


class EarningsService:
    """Influencer earnings computed on demand.

    Example:
        service = EarningsService(session)
        summary = service.summary(influencer_id, 2025)
        print(summary.monthly_breakdown[2].earnings)  # March
    """

    def __init__(self, session: Session, policy: Optional[ReportingPolicy] = None):
        self.session = session
        self.policy = policy or ReportingPolicy()

    def summary(self, influencer_id: UUID, year: int, month: Optional[int] = None) -> EarningsSummary:
        """Earnings from paid invoices for a year, or a single month."""
        period = statement_period(year, month)
        start, end = period.bounds()

        paid_rows = InvoiceOperations.get_paid_with_campaigns(self.session, influencer_id, start, end)
        totals_by_status = InvoiceOperations.totals_by_status(self.session, influencer_id, start, end)

        logger.info(
            f"Earnings summary for influencer {influencer_id} {period.label()}: "
            f"{len(paid_rows)} paid invoices"
        )
        return summarize_paid_invoices(
            influencer_id, period, paid_rows, totals_by_status, single_month=bool(month)
        )

    def report(self, influencer_id: UUID, year: int, month: int) -> EarningsReport:
        """Completed campaign payments of one month, net of the platform fee."""
        period = month_period(year, month)
        payments = [
            p for p in CampaignPaymentOperations.get_for_influencer(
                self.session, influencer_id, status="completed"
            )
            if period.contains(p.created_at)
        ]

        total = sum((to_decimal(p.amount) for p in payments), ZERO)
        fees = total * self.policy.earnings_platform_fee_rate

        return EarningsReport(
            id=f"earnings-{influencer_id}-{year}-{month}",
            user_id=influencer_id,
            period=f"{calendar.month_name[month]} {year}",
            total_earnings=money(total),
            net_earnings=money(total - fees),
            platform_fees=money(fees),
            campaign_count=len(payments),
            generated_at=datetime.utcnow(),
            campaign_breakdown=[
                EarningsLine(
                    name=p.description or "Campaign Payment",
                    brand="Brand Partner",
                    earnings=money(p.amount),
                    status="paid",
                    date=p.created_at,
                )
                for p in payments
            ],
        )

    def analytics(self, influencer_id: UUID, today: Optional[date] = None) -> EarningsAnalytics:
        """Lifetime totals and growth over the last two months with earnings."""
        today = today or date.today()
        payments = CampaignPaymentOperations.get_for_influencer(
            self.session, influencer_id, status="completed"
        )
        if not payments:
            return EarningsAnalytics()

        by_month: dict[tuple, Decimal] = defaultdict(lambda: ZERO)
        for p in payments:
            by_month[(p.created_at.year, p.created_at.month)] += to_decimal(p.amount)

        total = sum(by_month.values(), ZERO)
        ordered = [by_month[key] for key in sorted(by_month)]

        growth = ZERO
        if len(ordered) >= 2 and ordered[-2] != 0:
            growth = (ordered[-1] - ordered[-2]) / ordered[-2] * HUNDRED

        return EarningsAnalytics(
            total_earnings=money(total),
            monthly_average=money(total / len(by_month)),
            growth_rate=money(growth),
            current_month=money(by_month.get((today.year, today.month), ZERO)),
            last_month=money(by_month.get(previous_month(today.year, today.month), ZERO)),
            top_campaign=money(max(to_decimal(p.amount) for p in payments)),
        )
