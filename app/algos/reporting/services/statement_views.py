"""Statement views - Income statement, balance sheet, cash flow and analysis.

Each view reshapes an already generated FinancialStatement into a nested
dict. Views hold no state and add only differences and ratio lookups.
"""

from datetime import date, datetime
from decimal import Decimal
from functools import partial
from typing import Any, Optional

from app.models import FinancialStatement

from .money import ZERO, money, safe_divide, to_decimal
from .periods import Period

REPORTING_STANDARD = "GAAP"


def _field(statement: Any, name: str) -> Decimal:
    return to_decimal(getattr(statement, name, None))


def build_income_statement(statement: FinancialStatement, period: Period) -> dict[str, Any]:
    """Revenue down to net income in GAAP order."""
    f = partial(_field, statement)

    return {
        "revenue": {
            "gross_revenue": f("gross_revenue"),
            "revenue_deductions": f("revenue_deductions"),
            "net_revenue": f("net_revenue"),
        },
        "cost_of_sales": {
            "cost_of_services": f("cost_of_services"),
            "gross_profit": f("gross_profit"),
            "gross_profit_margin": f("gross_profit_margin"),
        },
        "operating_expenses": {
            "platform_fees": f("platform_fees"),
            "marketing_expenses": f("marketing_expenses"),
            "administrative_expenses": f("administrative_expenses"),
            "total_operating_expenses": f("operating_expenses"),
        },
        "operating_income": {
            "amount": f("operating_income"),
            "operating_margin": f("operating_margin"),
        },
        "other_income_expenses": {
            "interest_income": f("interest_income"),
            "interest_expense": f("interest_expense"),
            "other_income": f("other_income"),
        },
        "final_income": {
            "income_before_tax": f("income_before_tax"),
            "tax_expense": f("tax_expense"),
            "net_income": f("net_income"),
            "net_profit_margin": f("net_profit_margin"),
        },
        "key_ratios": {
            "gross_profit_margin": f("gross_profit_margin"),
            "operating_margin": f("operating_margin"),
            "net_profit_margin": f("net_profit_margin"),
        },
        "period_start": period.start,
        "period_end": period.end,
        "statement_type": "income_statement",
        "reporting_standard": REPORTING_STANDARD,
    }


def build_balance_sheet(statement: FinancialStatement, as_of_date: date) -> dict[str, Any]:
    """Assets, liabilities and equity with the accounting identity check."""
    f = partial(_field, statement)

    total_assets = f("total_assets")
    total_liabilities = f("total_liabilities")
    total_equity = f("total_equity")

    return {
        "assets": {
            "current_assets": {
                "cash_and_equivalents": f("cash_and_equivalents"),
                "accounts_receivable": f("accounts_receivable"),
                "prepaid_expenses": f("prepaid_expenses"),
                "total": f("current_assets"),
            },
            "non_current_assets": {
                "fixed_assets": f("fixed_assets"),
                "intangible_assets": f("intangible_assets"),
                "total": f("fixed_assets") + f("intangible_assets"),
            },
            "total_assets": total_assets,
        },
        "liabilities": {
            "current_liabilities": {
                "accounts_payable": f("accounts_payable"),
                "accrued_expenses": f("accrued_expenses"),
                "total": f("current_liabilities"),
            },
            "non_current_liabilities": {
                "long_term_debt": f("long_term_debt"),
                "total": f("long_term_debt"),
            },
            "total_liabilities": total_liabilities,
        },
        "equity": {
            "retained_earnings": f("retained_earnings"),
            "total_equity": total_equity,
        },
        # Assets = Liabilities + Equity
        "balance_check": money(total_assets) == money(total_liabilities + total_equity),
        "as_of_date": as_of_date,
        "statement_type": "balance_sheet",
        "reporting_standard": REPORTING_STANDARD,
    }


def build_cash_flow_statement(
    current: FinancialStatement,
    previous: FinancialStatement,
    period: Period,
) -> dict[str, Any]:
    """Cash flow for `current`, with working-capital deltas against `previous`.

    Args:
        current: Statement of the reported month
        previous: Statement of the month before
        period: Reported period (month, or the full year)
    """
    cur = partial(_field, current)
    prev = partial(_field, previous)

    return {
        "operating_activities": {
            "net_income": cur("net_income"),
            "depreciation": ZERO,
            "accounts_receivable_change": prev("accounts_receivable") - cur("accounts_receivable"),
            "accounts_payable_change": cur("accounts_payable") - prev("accounts_payable"),
            "net_operating_cash_flow": cur("operating_cash_flow"),
        },
        "investing_activities": {
            "capital_expenditures": cur("investing_cash_flow"),
            "asset_sales": ZERO,
            "net_investing_cash_flow": cur("investing_cash_flow"),
        },
        "financing_activities": {
            "debt_proceeds": ZERO,
            "debt_repayments": ZERO,
            "net_financing_cash_flow": cur("financing_cash_flow"),
        },
        "net_cash_change": cur("net_cash_flow"),
        "beginning_cash": prev("cash_and_equivalents"),
        "ending_cash": cur("cash_and_equivalents"),
        "period_start": period.start,
        "period_end": period.end,
        "statement_type": "cash_flow",
        "reporting_standard": REPORTING_STANDARD,
    }


def assess_financial_stability(statement: Any) -> str:
    """Excellent, Good, Fair or Poor from current ratio, leverage and net margin."""
    current_ratio = _field(statement, "current_ratio")
    debt_to_equity = _field(statement, "debt_to_equity_ratio")
    profit_margin = _field(statement, "net_profit_margin")

    if current_ratio >= 2 and debt_to_equity <= Decimal("0.5") and profit_margin >= 10:
        return "Excellent"
    if current_ratio >= Decimal("1.5") and debt_to_equity <= 1 and profit_margin >= 5:
        return "Good"
    if current_ratio >= 1 and debt_to_equity <= 2 and profit_margin >= 0:
        return "Fair"
    return "Poor"


def assess_liquidity_risk(statement: Any) -> str:
    """Low, Moderate or High from current ratio and cash ratio."""
    current_ratio = _field(statement, "current_ratio")
    cash_ratio = safe_divide(
        _field(statement, "cash_and_equivalents"), _field(statement, "current_liabilities")
    )

    if current_ratio >= 2 and cash_ratio >= Decimal("0.5"):
        return "Low"
    if current_ratio >= Decimal("1.5") and cash_ratio >= Decimal("0.2"):
        return "Moderate"
    return "High"


def assess_profitability_risk(statement: Any) -> str:
    """Low, Moderate or High from the three margins."""
    gross_margin = _field(statement, "gross_profit_margin")
    operating_margin = _field(statement, "operating_margin")
    net_margin = _field(statement, "net_profit_margin")

    if gross_margin >= 50 and operating_margin >= 20 and net_margin >= 15:
        return "Low"
    if gross_margin >= 30 and operating_margin >= 10 and net_margin >= 5:
        return "Moderate"
    return "High"


def build_financial_analysis(
    statement: FinancialStatement,
    analysis_date: Optional[datetime] = None,
) -> dict[str, Any]:
    """Ratio analysis and risk assessment of one statement."""
    f = partial(_field, statement)

    return {
        "profitability_ratios": {
            "gross_profit_margin": f("gross_profit_margin"),
            "operating_margin": f("operating_margin"),
            "net_profit_margin": f("net_profit_margin"),
            "return_on_assets": f("return_on_assets"),
            "return_on_equity": f("return_on_equity"),
        },
        "liquidity_ratios": {
            "current_ratio": f("current_ratio"),
            "quick_ratio": money(
                safe_divide(f("current_assets") - f("prepaid_expenses"), f("current_liabilities"))
            ),
        },
        "leverage_ratios": {
            "debt_to_equity_ratio": f("debt_to_equity_ratio"),
            "debt_to_assets_ratio": money(safe_divide(f("total_liabilities"), f("total_assets"))),
        },
        "efficiency_ratios": {
            "asset_turnover": money(safe_divide(f("net_revenue"), f("total_assets"))),
            "receivables_turnover": money(safe_divide(f("net_revenue"), f("accounts_receivable"))),
        },
        "performance_indicators": {
            # Growth rates need a statement history
            "revenue_growth_rate": ZERO,
            "profit_growth_rate": ZERO,
            "campaign_efficiency": f("campaign_roi"),
        },
        "risk_assessment": {
            "financial_stability": assess_financial_stability(statement),
            "liquidity_risk": assess_liquidity_risk(statement),
            "profitability_risk": assess_profitability_risk(statement),
        },
        "analysis_date": analysis_date or datetime.utcnow(),
        "statement_type": "financial_analysis",
        "reporting_standard": REPORTING_STANDARD,
    }
