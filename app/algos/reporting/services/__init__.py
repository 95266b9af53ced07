"""Reporting services - Single-responsibility pieces of the reporting pipeline.

Services layer contains files that execute single-responsibility tasks:
- errors: Reporting exception hierarchy
- policy: Fixed-percentage business constants
- money: Decimal rounding and guarded division
- periods: Calendar boundaries for statements and reports
- metric_calculator: Ledger aggregation into GAAP-shaped metrics
- statement_views: Income statement, balance sheet, cash flow, analysis
- earnings: Influencer earnings summary, report and analytics
- report_renderer: PDF rendering per report kind
"""

from .errors import (
    ReportingError,
    SubjectNotFoundError,
    InvalidPeriodError,
    InvalidSubjectKindError,
)
from .policy import ReportingPolicy
from .periods import (
    Period,
    REPORT_TYPES,
    month_period,
    quarter_period,
    year_period,
    statement_period,
    previous_month,
    report_period,
    current_period,
)
from .metric_calculator import (
    MetricCalculator,
    SUBJECT_KINDS,
    compute_statement_metrics,
    compute_campaign_pl_metrics,
    compute_platform_metrics,
)
from .statement_views import (
    build_income_statement,
    build_balance_sheet,
    build_cash_flow_statement,
    build_financial_analysis,
    assess_financial_stability,
    assess_liquidity_risk,
    assess_profitability_risk,
)
from .earnings import (
    EarningsService,
    EarningsSummary,
    EarningsReport,
    EarningsAnalytics,
)
from .report_renderer import (
    ReportKind,
    Recipient,
    generate_report_pdf,
)

__all__ = [
    # Errors
    "ReportingError",
    "SubjectNotFoundError",
    "InvalidPeriodError",
    "InvalidSubjectKindError",
    # Policy
    "ReportingPolicy",
    # Periods
    "Period",
    "REPORT_TYPES",
    "month_period",
    "quarter_period",
    "year_period",
    "statement_period",
    "previous_month",
    "report_period",
    "current_period",
    # Metric calculator
    "MetricCalculator",
    "SUBJECT_KINDS",
    "compute_statement_metrics",
    "compute_campaign_pl_metrics",
    "compute_platform_metrics",
    # Statement views
    "build_income_statement",
    "build_balance_sheet",
    "build_cash_flow_statement",
    "build_financial_analysis",
    "assess_financial_stability",
    "assess_liquidity_risk",
    "assess_profitability_risk",
    # Earnings
    "EarningsService",
    "EarningsSummary",
    "EarningsReport",
    "EarningsAnalytics",
    # Renderer
    "ReportKind",
    "Recipient",
    "generate_report_pdf",
]
