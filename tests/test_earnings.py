"""Tests for influencer earnings summary, report and analytics."""

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

from app.algos.reporting.services import EarningsService, ReportingPolicy


def test_yearly_summary_buckets_paid_invoices_by_month(session, ledger, campaign, influencer):
    ledger.invoice(campaign, influencer, "1000.00", "0.00", created_at=datetime(2025, 3, 10))
    ledger.invoice(campaign, influencer, "200.00", "0.00", status="sent")
    ledger.invoice(campaign, influencer, "50.00", "0.00", status="draft")

    summary = EarningsService(session).summary(influencer.id, 2025)

    assert summary.total_earnings == Decimal("1000.00")
    assert len(summary.monthly_breakdown) == 12
    march = summary.monthly_breakdown[2]
    assert march.month == "March"
    assert march.earnings == Decimal("1000.00")
    assert march.campaigns == 1
    assert summary.monthly_breakdown[0].earnings == Decimal("0")

    assert len(summary.campaign_earnings) == 1
    assert summary.campaign_earnings[0].campaign_title == "Spring Launch"
    assert summary.campaign_earnings[0].earnings == Decimal("1000.00")
    assert summary.top_performing_categories == ["sponsored_posts"]

    assert summary.payment_status.paid == Decimal("1000.00")
    assert summary.payment_status.pending == Decimal("200.00")
    assert summary.payment_status.processing == Decimal("50.00")


def test_monthly_summary_has_single_bucket(session, ledger, campaign, influencer):
    ledger.invoice(campaign, influencer, "1000.00", "0.00", created_at=datetime(2025, 3, 10))
    ledger.invoice(campaign, influencer, "400.00", "0.00", created_at=datetime(2025, 4, 2))

    summary = EarningsService(session).summary(influencer.id, 2025, 3)

    assert summary.period_start == date(2025, 3, 1)
    assert summary.period_end == date(2025, 3, 31)
    assert [bucket.month for bucket in summary.monthly_breakdown] == ["March"]
    assert summary.total_earnings == Decimal("1000.00")


def test_summary_ranks_categories_by_earnings(session, ledger, brand, influencer):
    posts = ledger.campaign(brand, campaign_type="sponsored_posts")
    ambassador = ledger.campaign(brand, campaign_type="brand_ambassador")
    ledger.invoice(posts, influencer, "100.00", "0.00")
    ledger.invoice(ambassador, influencer, "900.00", "0.00")

    summary = EarningsService(session).summary(influencer.id, 2025)

    assert summary.top_performing_categories == ["brand_ambassador", "sponsored_posts"]


def test_summary_for_unknown_influencer_is_empty(session):
    summary = EarningsService(session).summary(uuid4(), 2025)

    assert summary.total_earnings == Decimal("0")
    assert summary.campaign_earnings == []
    assert summary.payment_status.paid == Decimal("0")
    assert summary.to_dict()["monthly_breakdown"][11]["month"] == "December"


def test_monthly_report_nets_platform_fee(session, ledger, campaign, influencer):
    ledger.payment(campaign, influencer, "1000.00", status="completed", description="Launch reel")
    ledger.payment(campaign, influencer, "500.00", status="completed", created_at=datetime(2025, 3, 31, 18))
    ledger.payment(campaign, influencer, "300.00", status="pending")
    ledger.payment(campaign, influencer, "700.00", status="completed", created_at=datetime(2025, 4, 1))

    report = EarningsService(session).report(influencer.id, 2025, 3)

    assert report.id == f"earnings-{influencer.id}-2025-3"
    assert report.period == "March 2025"
    assert report.total_earnings == Decimal("1500.00")
    assert report.platform_fees == Decimal("75.00")
    assert report.net_earnings == Decimal("1425.00")
    assert report.campaign_count == 2
    assert report.campaign_breakdown[0].name == "Launch reel"
    assert report.campaign_breakdown[1].name == "Campaign Payment"


def test_monthly_report_fee_rate_from_policy(session, ledger, campaign, influencer):
    ledger.payment(campaign, influencer, "1000.00", status="completed")
    policy = ReportingPolicy(earnings_platform_fee_rate=Decimal("0.10"))

    report = EarningsService(session, policy).report(influencer.id, 2025, 3)

    assert report.net_earnings == Decimal("900.00")


def test_analytics_growth_over_last_two_months(session, ledger, campaign, influencer):
    ledger.payment(campaign, influencer, "400.00", status="completed", created_at=datetime(2025, 2, 10))
    ledger.payment(campaign, influencer, "1000.00", status="completed", created_at=datetime(2025, 3, 5))
    ledger.payment(campaign, influencer, "500.00", status="completed", created_at=datetime(2025, 3, 12))
    ledger.payment(campaign, influencer, "9000.00", status="pending", created_at=datetime(2025, 3, 12))

    analytics = EarningsService(session).analytics(influencer.id, today=date(2025, 3, 20))

    assert analytics.total_earnings == Decimal("1900.00")
    assert analytics.monthly_average == Decimal("950.00")
    assert analytics.growth_rate == Decimal("275.00")
    assert analytics.current_month == Decimal("1500.00")
    assert analytics.last_month == Decimal("400.00")
    assert analytics.top_campaign == Decimal("1000.00")


def test_analytics_without_payments_is_zero(session, influencer):
    analytics = EarningsService(session).analytics(influencer.id, today=date(2025, 3, 20))

    assert analytics.total_earnings == Decimal("0")
    assert analytics.growth_rate == Decimal("0")
    assert analytics.platform_breakdown == []
