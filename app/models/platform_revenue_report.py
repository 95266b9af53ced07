"""PlatformRevenueReport model - Platform-wide revenue and activity per period."""

from decimal import Decimal
from typing import List, Optional
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import UniqueConstraint
from .base import JSONVariant, money_field
from .mixins import UUIDMixin, TimestampMixin, PeriodMixin


class PlatformRevenueReport(SQLModel, UUIDMixin, PeriodMixin, TimestampMixin, table=True):
    """Admin-level revenue report for one granularity and period."""

    __tablename__ = "platform_revenue_reports"

    report_type: str = Field(nullable=False)  # daily, weekly, monthly, quarterly, yearly

    # Revenue streams
    total_platform_revenue: Decimal = money_field()
    transaction_fees: Decimal = money_field()
    subscription_revenue: Decimal = money_field()
    premium_features: Decimal = money_field()
    advertising_revenue: Decimal = money_field()

    # Fee rates
    standard_fee_rate: Decimal = Field(default=Decimal("0.0500"), max_digits=5, decimal_places=4)
    premium_fee_rate: Decimal = Field(default=Decimal("0.0300"), max_digits=5, decimal_places=4)

    # Transaction volume
    total_transaction_volume: Decimal = money_field(max_digits=14)
    total_transactions: int = Field(default=0)
    avg_transaction_size: Decimal = money_field()

    # Users
    active_brands: int = Field(default=0)
    active_influencers: int = Field(default=0)
    new_signups: int = Field(default=0)
    churned_users: int = Field(default=0)

    # Campaigns
    total_campaigns: int = Field(default=0)
    active_campaigns: int = Field(default=0)
    completed_campaigns: int = Field(default=0)
    avg_campaign_value: Decimal = money_field()

    # Geography
    revenue_by_region: dict = Field(default_factory=dict, sa_column=Column(JSONVariant))
    top_markets: List[str] = Field(default_factory=list, sa_column=Column(JSONVariant))

    # Growth
    revenue_growth_rate: Decimal = money_field()
    user_growth_rate: Decimal = money_field()
    transaction_growth_rate: Decimal = money_field()

    # Operating costs
    operational_costs: Decimal = money_field()
    marketing_costs: Decimal = money_field()
    support_costs: Decimal = money_field()

    status: str = Field(default="draft")  # draft, final, published
    currency: str = Field(default="INR")
    generated_by: Optional[str] = Field(default=None)

    __table_args__ = (
        UniqueConstraint(
            "report_type", "period_start", "period_end",
            name="uq_platform_revenue_report_period",
        ),
    )
