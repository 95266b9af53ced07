"""Tests for the pure metric computations."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.algos.reporting.services import (
    InvalidSubjectKindError,
    ReportingPolicy,
    compute_campaign_pl_metrics,
    compute_platform_metrics,
    compute_statement_metrics,
)


def make_invoice(subtotal: str, tax: str, status: str = "paid"):
    subtotal_amount = Decimal(subtotal)
    tax_amount = Decimal(tax)
    return SimpleNamespace(
        status=status,
        subtotal_amount=subtotal_amount,
        tax_amount=tax_amount,
        total_amount=subtotal_amount + tax_amount,
    )


# =============================================================================
# Statement metrics
# =============================================================================

@pytest.mark.parametrize("subject_kind", ["brand", "influencer", "platform"])
def test_no_invoices_gives_all_zero_statement(subject_kind):
    metrics = compute_statement_metrics(subject_kind, [])

    for name, value in metrics.items():
        if isinstance(value, Decimal):
            assert value == Decimal("0.00"), name
    assert metrics["total_transactions"] == 0
    assert metrics["top_performing_categories"] == []


def test_unknown_subject_kind_raises():
    with pytest.raises(InvalidSubjectKindError):
        compute_statement_metrics("agency", [])


def test_influencer_statement():
    metrics = compute_statement_metrics("influencer", [make_invoice("1000.00", "180.00")])

    assert metrics["gross_revenue"] == Decimal("1180.00")
    assert metrics["revenue_deductions"] == Decimal("23.60")
    assert metrics["net_revenue"] == Decimal("1156.40")
    assert metrics["platform_fees"] == Decimal("180.00")
    assert metrics["operating_expenses"] == Decimal("180.00")
    assert metrics["operating_income"] == Decimal("976.40")
    assert metrics["tax_expense"] == Decimal("244.10")
    assert metrics["net_income"] == Decimal("732.30")
    assert metrics["gross_profit_margin"] == Decimal("100.00")
    assert metrics["net_profit_margin"] == Decimal("63.33")
    assert metrics["cash_and_equivalents"] == Decimal("732.30")
    assert metrics["return_on_assets"] == Decimal("100.00")
    assert metrics["collaborations_completed"] == 1
    assert metrics["avg_earnings_per_campaign"] == Decimal("1180.00")


def test_brand_statement_books_costs_and_negative_income():
    metrics = compute_statement_metrics(
        "brand",
        [make_invoice("1000.00", "180.00")],
        campaign_counts={"active": 2, "completed": 1},
    )

    assert metrics["gross_revenue"] == Decimal("0.00")
    assert metrics["cost_of_services"] == Decimal("1000.00")
    assert metrics["gross_profit"] == Decimal("-1000.00")
    assert metrics["marketing_expenses"] == Decimal("54.00")
    assert metrics["administrative_expenses"] == Decimal("36.00")
    assert metrics["operating_expenses"] == Decimal("450.00")
    assert metrics["tax_expense"] == Decimal("0.00")
    assert metrics["net_income"] == Decimal("-1450.00")
    # Negative income is not cash
    assert metrics["cash_and_equivalents"] == Decimal("0.00")
    assert metrics["retained_earnings"] == Decimal("-1450.00")
    assert metrics["campaign_roi"] == Decimal("-100.00")
    assert metrics["active_campaigns"] == 2
    assert metrics["completed_campaigns"] == 1
    assert metrics["avg_campaign_cost"] == Decimal("1000.00")


def test_platform_statement_earns_transaction_fees():
    metrics = compute_statement_metrics("platform", [make_invoice("1000.00", "180.00")])

    assert metrics["gross_revenue"] == Decimal("180.00")
    assert metrics["platform_fees"] == Decimal("0.00")
    assert metrics["net_income"] == Decimal("132.30")


def test_transaction_counts_by_status():
    invoices = [
        make_invoice("100.00", "10.00", status="paid"),
        make_invoice("100.00", "10.00", status="cancelled"),
        make_invoice("100.00", "10.00", status="sent"),
    ]
    metrics = compute_statement_metrics("influencer", invoices)

    assert metrics["total_transactions"] == 3
    assert metrics["successful_transactions"] == 1
    assert metrics["failed_transactions"] == 1
    assert metrics["gross_revenue"] == Decimal("110.00")


def test_policy_rates_are_injected():
    policy = ReportingPolicy(revenue_deduction_rate=Decimal("0"), tax_rate=Decimal("0"))
    metrics = compute_statement_metrics("influencer", [make_invoice("100.00", "0.00")], policy=policy)

    assert metrics["net_revenue"] == Decimal("100.00")
    assert metrics["net_income"] == Decimal("100.00")


def test_zero_liabilities_give_zero_ratios():
    metrics = compute_statement_metrics("influencer", [make_invoice("100.00", "0.00")])

    assert metrics["current_ratio"] == Decimal("0.00")
    assert metrics["debt_to_equity_ratio"] == Decimal("0.00")


# =============================================================================
# Campaign P&L
# =============================================================================

def test_campaign_pl_metrics():
    metrics = compute_campaign_pl_metrics(
        Decimal("1000"), Decimal("50"), Decimal("1180"), Decimal("180")
    )

    assert metrics["total_revenue"] == Decimal("1050.00")
    assert metrics["total_costs"] == Decimal("1000.00")
    assert metrics["gross_profit"] == Decimal("50.00")
    assert metrics["net_profit"] == Decimal("-130.00")
    assert metrics["profit_margin"] == Decimal("-12.38")
    assert metrics["roi"] == Decimal("5.00")
    assert metrics["production_costs"] == Decimal("180.00")
    assert metrics["cost_per_acquisition"] == Decimal("95.24")
    assert metrics["conversion_rate"] == Decimal("0.0000")


def test_campaign_pl_without_activity_is_zero():
    metrics = compute_campaign_pl_metrics(Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"))

    assert metrics["profit_margin"] == Decimal("0.00")
    assert metrics["roi"] == Decimal("0.00")
    assert metrics["cost_per_acquisition"] == Decimal("0.00")
    assert metrics["production_costs"] == Decimal("0.00")


# =============================================================================
# Platform revenue
# =============================================================================

def test_platform_metrics():
    metrics = compute_platform_metrics(
        volume=Decimal("2360"),
        fees=Decimal("360"),
        transaction_count=2,
        new_signups=5,
        new_brands=2,
        new_influencers=3,
        campaign_counts={"active": 2, "completed": 1},
    )

    assert metrics["total_platform_revenue"] == Decimal("360.00")
    assert metrics["transaction_fees"] == Decimal("360.00")
    assert metrics["avg_transaction_size"] == Decimal("1180.00")
    assert metrics["total_campaigns"] == 3
    assert metrics["avg_campaign_value"] == Decimal("2360.00")
    assert metrics["new_signups"] == 5


def test_platform_metrics_empty_period():
    metrics = compute_platform_metrics(Decimal("0"), Decimal("0"), 0, 0, 0, 0)

    assert metrics["avg_transaction_size"] == Decimal("0.00")
    assert metrics["avg_campaign_value"] == Decimal("0.00")
    assert metrics["total_campaigns"] == 0
