"""Tests for PDF rendering of every report kind."""

import re
from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, Table

from app.models import CampaignProfitLossReport, FinancialStatement, PlatformRevenueReport
from app.algos.reporting.services import (
    Recipient,
    ReportKind,
    build_balance_sheet,
    build_financial_analysis,
    build_income_statement,
    generate_report_pdf,
    month_period,
)
from app.algos.reporting.services.earnings import (
    CampaignEarnings,
    EarningsReport,
    EarningsSummary,
    EarningsLine,
)
from app.algos.reporting.services.report_renderer import (
    _as_mapping,
    _earnings_body,
    _lookup,
    _reporting_period,
)


def is_pdf(content: bytes) -> bool:
    return content.startswith(b"%PDF") and b"%%EOF" in content[-1024:]


def page_count(content: bytes) -> int:
    return len(re.findall(rb"/Type /Page\b", content))


@pytest.mark.parametrize("kind", list(ReportKind))
@pytest.mark.parametrize("data", [None, {}])
def test_every_kind_renders_sparse_data(kind, data):
    assert is_pdf(generate_report_pdf(kind, data))


@pytest.mark.parametrize("kind", [k.value for k in ReportKind])
def test_kind_can_be_given_as_string(kind):
    assert is_pdf(generate_report_pdf(kind, {}))


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        generate_report_pdf("tax_return", {})


def test_statement_model_renders_with_recipient():
    statement = FinancialStatement(
        subject_id=uuid4(),
        subject_type="influencer",
        statement_type="monthly",
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 31),
        total_revenue=Decimal("1180.00"),
        net_income=Decimal("732.30"),
        total_transactions=2,
    )
    recipient = Recipient(name="Riya <Sen> & Co", email="riya@example.com")

    content = generate_report_pdf(
        ReportKind.STATEMENT,
        statement,
        recipient=recipient,
        report_date=date(2025, 4, 1),
        platform_name="Acme & Partners",
    )

    assert is_pdf(content)


def test_pl_and_platform_models_render():
    pl = CampaignProfitLossReport(
        period_start=date(2025, 2, 22),
        period_end=date(2025, 4, 7),
        report_period="campaign_total",
        total_revenue=Decimal("1260.00"),
        roi=Decimal("5.00"),
    )
    platform = PlatformRevenueReport(
        report_type="monthly",
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 31),
        total_platform_revenue=Decimal("360.00"),
        total_transactions=2,
    )

    assert is_pdf(generate_report_pdf(ReportKind.PNL, pl))
    assert is_pdf(generate_report_pdf(ReportKind.PLATFORM, platform))


def test_earnings_dataclasses_render():
    summary = EarningsSummary(
        influencer_id=uuid4(),
        period_start=date(2025, 1, 1),
        period_end=date(2025, 12, 31),
        total_earnings=Decimal("1000.00"),
        campaign_earnings=[
            CampaignEarnings(
                campaign_id=uuid4(),
                campaign_title=f"Campaign {n}",
                earnings=Decimal("50.00"),
                completion_date=None,
                status="completed",
            )
            for n in range(20)
        ],
    )
    report = EarningsReport(
        id="earnings-x-2025-3",
        user_id=summary.influencer_id,
        period="March 2025",
        total_earnings=Decimal("1500.00"),
        net_earnings=Decimal("1425.00"),
        platform_fees=Decimal("75.00"),
        campaign_count=1,
        generated_at=datetime(2025, 4, 1),
        campaign_breakdown=[
            EarningsLine(
                name="Launch reel",
                brand="Brand Partner",
                earnings=Decimal("1500.00"),
                status="paid",
                date=datetime(2025, 3, 15),
            ),
        ],
    )

    assert is_pdf(generate_report_pdf(ReportKind.EARNINGS, summary))
    assert is_pdf(generate_report_pdf(ReportKind.EARNINGS, report))


def test_view_dicts_render():
    statement = FinancialStatement(
        subject_id=uuid4(),
        subject_type="brand",
        statement_type="monthly",
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 31),
    )

    assert is_pdf(generate_report_pdf(
        ReportKind.INCOME_STATEMENT, build_income_statement(statement, month_period(2025, 3))
    ))
    assert is_pdf(generate_report_pdf(
        ReportKind.BALANCE_SHEET, build_balance_sheet(statement, date(2025, 3, 31))
    ))
    assert is_pdf(generate_report_pdf(
        ReportKind.FINANCIAL_ANALYSIS, build_financial_analysis(statement)
    ))


def test_value_helpers():
    data = {"revenue": {"net_revenue": Decimal("980")}, "period": "March 2025"}

    assert _lookup(data, "revenue.net_revenue") == Decimal("980")
    assert _lookup(data, "revenue.missing.deeper") is None
    assert _as_mapping(None) == {}
    assert _reporting_period(data) == "March 2025"
    assert _reporting_period({"as_of_date": date(2025, 3, 31)}) == "As of 03/31/2025"
    assert _reporting_period({}) == "N/A - N/A"


def earnings_summary(titles):
    return EarningsSummary(
        influencer_id=uuid4(),
        period_start=date(2025, 1, 1),
        period_end=date(2025, 12, 31),
        total_earnings=Decimal("10.00") * len(titles),
        campaign_earnings=[
            CampaignEarnings(
                campaign_id=uuid4(),
                campaign_title=title,
                earnings=Decimal("10.00"),
                completion_date=None,
                status="paid",
            )
            for title in titles
        ],
    )


def test_earnings_table_keeps_every_campaign_across_pages():
    titles = [f"Campaign {n:02d}" for n in range(40)]
    summary = earnings_summary(titles)

    body = _earnings_body(_as_mapping(summary), getSampleStyleSheet())
    table = next(element for element in body if isinstance(element, Table))
    shown = [row[0].text for row in table._cellvalues[1:]]
    content = generate_report_pdf(ReportKind.EARNINGS, summary)

    assert shown == titles
    assert table.repeatRows == 1
    assert is_pdf(content)
    assert page_count(content) >= 2


def test_long_campaign_title_wraps_in_its_column():
    title = "Autumn collection launch with three creators, a giveaway and a long-form review series & more"
    body = _earnings_body(_as_mapping(earnings_summary([title])), getSampleStyleSheet())
    table = next(element for element in body if isinstance(element, Table))
    cell = table._cellvalues[1][0]

    assert isinstance(cell, Paragraph)
    assert "&amp;" in cell.text
    assert is_pdf(generate_report_pdf(ReportKind.EARNINGS, earnings_summary([title])))
