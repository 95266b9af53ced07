"""Tests for statement views and risk labels."""

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

from app.algos.reporting.services import (
    assess_financial_stability,
    assess_liquidity_risk,
    assess_profitability_risk,
    build_balance_sheet,
    build_cash_flow_statement,
    build_financial_analysis,
    build_income_statement,
    month_period,
)


def make_statement(**fields):
    return SimpleNamespace(**{name: Decimal(str(value)) for name, value in fields.items()})


def test_income_statement_keeps_gaap_order():
    statement = make_statement(gross_revenue=1000, revenue_deductions=20, net_revenue=980, net_income=500)

    view = build_income_statement(statement, month_period(2025, 3))

    assert list(view)[:6] == [
        "revenue",
        "cost_of_sales",
        "operating_expenses",
        "operating_income",
        "other_income_expenses",
        "final_income",
    ]
    assert view["revenue"]["net_revenue"] == Decimal("980")
    assert view["final_income"]["net_income"] == Decimal("500")
    # Fields missing on the statement read as zero
    assert view["cost_of_sales"]["cost_of_services"] == Decimal("0")
    assert view["statement_type"] == "income_statement"


def test_balance_sheet_check():
    balanced = make_statement(total_assets=100, total_liabilities=40, total_equity=60)
    unbalanced = make_statement(total_assets=100, total_liabilities=40, total_equity=50)

    assert build_balance_sheet(balanced, date(2025, 3, 31))["balance_check"] is True
    assert build_balance_sheet(unbalanced, date(2025, 3, 31))["balance_check"] is False


def test_balance_sheet_non_current_assets_total():
    statement = make_statement(fixed_assets=10, intangible_assets=5)

    view = build_balance_sheet(statement, date(2025, 3, 31))

    assert view["assets"]["non_current_assets"]["total"] == Decimal("15")
    assert view["as_of_date"] == date(2025, 3, 31)


def test_cash_flow_deltas_against_previous_month():
    current = make_statement(
        net_income=300, operating_cash_flow=300, net_cash_flow=300,
        cash_and_equivalents=900, accounts_receivable=50, accounts_payable=30,
    )
    previous = make_statement(cash_and_equivalents=600, accounts_receivable=80, accounts_payable=10)

    view = build_cash_flow_statement(current, previous, month_period(2025, 3))

    assert view["operating_activities"]["accounts_receivable_change"] == Decimal("30")
    assert view["operating_activities"]["accounts_payable_change"] == Decimal("20")
    assert view["beginning_cash"] == Decimal("600")
    assert view["ending_cash"] == Decimal("900")
    assert view["net_cash_change"] == Decimal("300")


def test_financial_analysis_on_empty_statement_has_zero_ratios():
    view = build_financial_analysis(make_statement(), analysis_date=datetime(2025, 4, 1))

    assert view["liquidity_ratios"]["quick_ratio"] == Decimal("0")
    assert view["leverage_ratios"]["debt_to_assets_ratio"] == Decimal("0")
    assert view["efficiency_ratios"]["receivables_turnover"] == Decimal("0")
    assert view["analysis_date"] == datetime(2025, 4, 1)


def test_financial_stability_labels():
    assert assess_financial_stability(make_statement(
        current_ratio=2.5, debt_to_equity_ratio=0.3, net_profit_margin=12,
    )) == "Excellent"
    assert assess_financial_stability(make_statement(
        current_ratio=1.6, debt_to_equity_ratio=0.8, net_profit_margin=6,
    )) == "Good"
    assert assess_financial_stability(make_statement(
        current_ratio=1.1, debt_to_equity_ratio=1.5, net_profit_margin=0,
    )) == "Fair"
    assert assess_financial_stability(make_statement(
        current_ratio=0.5, debt_to_equity_ratio=3, net_profit_margin=-5,
    )) == "Poor"


def test_liquidity_risk_labels():
    assert assess_liquidity_risk(make_statement(
        current_ratio=2, cash_and_equivalents=50, current_liabilities=100,
    )) == "Low"
    assert assess_liquidity_risk(make_statement(
        current_ratio=1.5, cash_and_equivalents=20, current_liabilities=100,
    )) == "Moderate"
    # No liabilities means a cash ratio of zero
    assert assess_liquidity_risk(make_statement(current_ratio=3, cash_and_equivalents=50)) == "High"


def test_profitability_risk_labels():
    assert assess_profitability_risk(make_statement(
        gross_profit_margin=60, operating_margin=25, net_profit_margin=18,
    )) == "Low"
    assert assess_profitability_risk(make_statement(
        gross_profit_margin=35, operating_margin=12, net_profit_margin=6,
    )) == "Moderate"
    assert assess_profitability_risk(make_statement(
        gross_profit_margin=100, operating_margin=5, net_profit_margin=3,
    )) == "High"
