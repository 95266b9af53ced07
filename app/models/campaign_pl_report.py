"""CampaignProfitLossReport model - Profit and loss per campaign and period."""

from decimal import Decimal
from typing import Optional
from uuid import UUID
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import UniqueConstraint
from .base import JSONVariant, money_field
from .mixins import UUIDMixin, TimestampMixin, PeriodMixin


class CampaignProfitLossReport(SQLModel, UUIDMixin, PeriodMixin, TimestampMixin, table=True):
    """P&L view scoped to a single campaign."""

    __tablename__ = "campaign_profit_loss_reports"

    campaign_id: UUID = Field(foreign_key="brand_campaigns.id", nullable=False, index=True)
    brand_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    report_period: str = Field(nullable=False)  # campaign_total, monthly, quarterly

    # Revenue breakdown
    total_revenue: Decimal = money_field()
    direct_sales: Decimal = money_field()
    brand_lift: Decimal = money_field()

    # Cost breakdown
    total_costs: Decimal = money_field()
    influencer_payments: Decimal = money_field()
    platform_fees: Decimal = money_field()
    production_costs: Decimal = money_field()
    advertising_spend: Decimal = money_field()

    # Profitability
    gross_profit: Decimal = money_field()
    net_profit: Decimal = money_field()
    profit_margin: Decimal = money_field()
    roi: Decimal = money_field()

    # Campaign performance
    total_reach: int = Field(default=0)
    total_engagements: int = Field(default=0)
    conversion_rate: Decimal = money_field(max_digits=9, decimal_places=4)
    cost_per_acquisition: Decimal = money_field()
    lifetime_value: Decimal = money_field()

    deliverable_breakdown: Optional[dict] = Field(default=None, sa_column=Column(JSONVariant))
    influencer_breakdown: Optional[dict] = Field(default=None, sa_column=Column(JSONVariant))

    status: str = Field(default="draft")  # draft, final, archived
    currency: str = Field(default="INR")
    report_notes: Optional[str] = Field(default=None)

    __table_args__ = (
        UniqueConstraint(
            "campaign_id", "report_period", "period_start", "period_end",
            name="uq_campaign_pl_report_period",
        ),
    )
