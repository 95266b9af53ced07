"""FinancialStatement model - Period statements for brands, influencers and the platform."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import UniqueConstraint, Index
from .base import JSONVariant, money_field
from .mixins import UUIDMixin, TimestampMixin, PeriodMixin


class FinancialStatement(SQLModel, UUIDMixin, PeriodMixin, TimestampMixin, table=True):
    """GAAP-shaped statement for one subject over one period.

    At most one row exists per (subject_id, subject_type, statement_type,
    period_start, period_end); generation never re-derives an existing row.
    """

    __tablename__ = "financial_statements"

    subject_id: UUID = Field(nullable=False, index=True)
    subject_type: str = Field(nullable=False)  # brand, influencer, platform
    statement_type: str = Field(nullable=False)  # monthly, quarterly, yearly, custom
    statement_date: datetime = Field(default_factory=datetime.utcnow)

    # Income statement: revenue
    gross_revenue: Decimal = money_field()
    revenue_deductions: Decimal = money_field()
    net_revenue: Decimal = money_field()

    # Cost of services
    cost_of_services: Decimal = money_field()
    gross_profit: Decimal = money_field()

    # Operating expenses
    operating_expenses: Decimal = money_field()
    platform_fees: Decimal = money_field()
    marketing_expenses: Decimal = money_field()
    administrative_expenses: Decimal = money_field()

    # EBIT and other income
    operating_income: Decimal = money_field()
    interest_income: Decimal = money_field()
    interest_expense: Decimal = money_field()
    other_income: Decimal = money_field()

    # Pre-tax and net income
    income_before_tax: Decimal = money_field()
    tax_expense: Decimal = money_field()
    net_income: Decimal = money_field()

    # Balance sheet: assets
    cash_and_equivalents: Decimal = money_field()
    accounts_receivable: Decimal = money_field()
    prepaid_expenses: Decimal = money_field()
    current_assets: Decimal = money_field()
    fixed_assets: Decimal = money_field()
    intangible_assets: Decimal = money_field()
    total_assets: Decimal = money_field()

    # Balance sheet: liabilities and equity
    accounts_payable: Decimal = money_field()
    accrued_expenses: Decimal = money_field()
    current_liabilities: Decimal = money_field()
    long_term_debt: Decimal = money_field()
    total_liabilities: Decimal = money_field()
    retained_earnings: Decimal = money_field()
    total_equity: Decimal = money_field()

    # Cash flow
    operating_cash_flow: Decimal = money_field()
    investing_cash_flow: Decimal = money_field()
    financing_cash_flow: Decimal = money_field()
    net_cash_flow: Decimal = money_field()

    # Ratios (percentages except current_ratio and debt_to_equity_ratio)
    gross_profit_margin: Decimal = money_field()
    operating_margin: Decimal = money_field()
    net_profit_margin: Decimal = money_field()
    return_on_assets: Decimal = money_field()
    return_on_equity: Decimal = money_field()
    current_ratio: Decimal = money_field()
    debt_to_equity_ratio: Decimal = money_field()

    # Legacy totals kept for existing dashboards
    total_revenue: Decimal = money_field()
    total_expenses: Decimal = money_field()
    taxes_paid: Decimal = money_field()

    # Transaction metrics
    total_transactions: int = Field(default=0)
    successful_transactions: int = Field(default=0)
    failed_transactions: int = Field(default=0)
    refunded_transactions: int = Field(default=0)

    # Brand campaign metrics
    active_campaigns: int = Field(default=0)
    completed_campaigns: int = Field(default=0)
    campaign_roi: Decimal = money_field()
    avg_campaign_cost: Decimal = money_field()

    # Influencer metrics
    collaborations_completed: int = Field(default=0)
    avg_earnings_per_campaign: Decimal = money_field()
    top_performing_categories: List[str] = Field(default_factory=list, sa_column=Column(JSONVariant))

    # Status and metadata
    status: str = Field(default="draft")  # draft, final, sent, archived
    currency: str = Field(default="INR")
    accounting_method: str = Field(default="accrual")  # accrual, cash
    reporting_standard: str = Field(default="GAAP")
    notes: Optional[str] = Field(default=None)
    generated_by: Optional[str] = Field(default=None)  # system, manual, admin

    __table_args__ = (
        # One statement per subject, type and period
        UniqueConstraint(
            "subject_id", "subject_type", "statement_type", "period_start", "period_end",
            name="uq_financial_statement_subject_period",
        ),
        # Composite index for listing a subject's statements (most recent first)
        Index(
            "ix_financial_statement_subject_period_desc", "subject_id", "period_end",
            postgresql_ops={"period_end": "DESC"},
        ),
    )
