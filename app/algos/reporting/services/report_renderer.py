"""Report Renderer - Financial reports as paginated PDF documents.

Every document carries the same header (platform name, GAAP notice, report
type, dates, recipient) and a footer on every page (page number,
confidentiality notice, disclaimers). The body is one fixed-layout table
set per ReportKind. The earnings table grows with its campaign rows and
splits across pages under a repeated header row.

Missing or None values render as 0; rendering never raises on sparse data.
"""

import logging
from dataclasses import dataclass, asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from functools import partial
from io import BytesIO
from typing import Any, Callable, Dict, List, Optional, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from .money import to_decimal

logger = logging.getLogger(__name__)

PLATFORM_NAME = "INFLUENCER HUB"

ROW_HEIGHT = 8 * mm
COLUMN_WIDTH = 60 * mm
EARNINGS_COLUMN_WIDTH = 50 * mm

FOOTER_DISCLAIMERS = (
    "Prepared using GAAP accounting standards. This report is for informational purposes only.",
    "Not intended as investment advice. Please consult with a qualified financial advisor.",
)


class ReportKind(str, Enum):
    """Closed set of renderable report kinds."""

    STATEMENT = "statement"
    PNL = "pnl"
    PLATFORM = "platform"
    EARNINGS = "earnings"
    INCOME_STATEMENT = "income_statement"
    BALANCE_SHEET = "balance_sheet"
    CASH_FLOW = "cash_flow"
    FINANCIAL_ANALYSIS = "financial_analysis"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").upper()


@dataclass
class Recipient:
    """Who the report is prepared for."""

    name: str
    email: str


# =============================================================================
# Value access and formatting
# =============================================================================

def _as_mapping(report_data: Any) -> Dict[str, Any]:
    """Normalize a model instance, dataclass or dict into a dict."""
    if report_data is None:
        return {}
    if isinstance(report_data, dict):
        return report_data
    if is_dataclass(report_data):
        return asdict(report_data)
    if hasattr(report_data, "model_dump"):
        return report_data.model_dump()
    return dict(vars(report_data))


def _lookup(data: Dict[str, Any], path: str) -> Any:
    """Dotted-path lookup through nested dicts; None when any step is missing."""
    value: Any = data
    for key in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _amount(data: Dict[str, Any], path: str) -> str:
    return f"{to_decimal(_lookup(data, path) or 0):,.2f}"


def _percent(data: Dict[str, Any], path: str) -> str:
    return f"{to_decimal(_lookup(data, path) or 0):.2f}%"


def _ratio(data: Dict[str, Any], path: str) -> str:
    return f"{to_decimal(_lookup(data, path) or 0):.2f}"


def _count(data: Dict[str, Any], path: str) -> str:
    return str(int(to_decimal(_lookup(data, path) or 0)))


def _format_date(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%m/%d/%Y")
    if value:
        return str(value)
    return "N/A"


def _reporting_period(data: Dict[str, Any]) -> str:
    if data.get("period_start") or data.get("period_end"):
        return f"{_format_date(data.get('period_start'))} - {_format_date(data.get('period_end'))}"
    if data.get("as_of_date"):
        return f"As of {_format_date(data.get('as_of_date'))}"
    if isinstance(data.get("period"), str):
        return data["period"]
    return "N/A - N/A"


# =============================================================================
# Canvas with page numbering
# =============================================================================

class NumberedCanvas(canvas.Canvas):
    """Canvas that defers page output so the footer can print 'Page i of N'."""

    def __init__(self, *args, platform_name: str = PLATFORM_NAME, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._saved_page_states = []
        self._platform_name = platform_name

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for page_number, state in enumerate(self._saved_page_states, start=1):
            self.__dict__.update(state)
            self.draw_footer(page_number, page_count)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def draw_footer(self, page_number: int, page_count: int) -> None:
        width, _ = self._pagesize
        self.saveState()
        self.setFont("Helvetica", 8)
        self.drawRightString(width - 20 * mm, 20 * mm, f"Page {page_number} of {page_count}")
        self.drawString(20 * mm, 20 * mm, f"CONFIDENTIAL - {self._platform_name} FINANCIAL REPORT")
        self.drawString(20 * mm, 14 * mm, FOOTER_DISCLAIMERS[0])
        self.drawString(20 * mm, 8 * mm, FOOTER_DISCLAIMERS[1])
        self.restoreState()


# =============================================================================
# Body tables
# =============================================================================

Row = List[str]


def _fixed_table(rows: List[Row], col_width: float = COLUMN_WIDTH) -> Table:
    """Label/value table with fixed row height and column width."""
    table = Table(
        rows,
        colWidths=[col_width] * len(rows[0]),
        rowHeights=[ROW_HEIGHT] * len(rows),
    )
    table.setStyle(TableStyle([
        ("FONT", (0, 0), (-1, -1), "Helvetica", 9),
        ("FONT", (0, 0), (-1, 0), "Helvetica-Bold", 9),
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f3f4f6")),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LINEBELOW", (0, 0), (-1, 0), 0.5, colors.grey),
    ]))
    return table


def _section(title: str, rows: List[Row], styles) -> List[Any]:
    return [
        Paragraph(title, styles["Heading3"]),
        _fixed_table([["Item", "Amount"]] + rows),
        Spacer(1, 4 * mm),
    ]


def _statement_body(data: Dict[str, Any], styles) -> List[Any]:
    return _section("FINANCIAL STATEMENT", [
        ["Total Revenue", _amount(data, "total_revenue")],
        ["Total Expenses", _amount(data, "total_expenses")],
        ["Platform Fees", _amount(data, "platform_fees")],
        ["Net Income", _amount(data, "net_income")],
        ["Total Transactions", _count(data, "total_transactions")],
        ["Successful Transactions", _count(data, "successful_transactions")],
        ["Failed Transactions", _count(data, "failed_transactions")],
    ], styles)


def _pnl_body(data: Dict[str, Any], styles) -> List[Any]:
    return _section("CAMPAIGN PROFIT &amp; LOSS", [
        ["Total Revenue", _amount(data, "total_revenue")],
        ["Direct Sales", _amount(data, "direct_sales")],
        ["Brand Lift", _amount(data, "brand_lift")],
        ["Total Costs", _amount(data, "total_costs")],
        ["Influencer Payments", _amount(data, "influencer_payments")],
        ["Platform Fees", _amount(data, "platform_fees")],
        ["Gross Profit", _amount(data, "gross_profit")],
        ["Net Profit", _amount(data, "net_profit")],
        ["Profit Margin %", _percent(data, "profit_margin")],
        ["ROI %", _percent(data, "roi")],
    ], styles)


def _platform_body(data: Dict[str, Any], styles) -> List[Any]:
    return _section("PLATFORM REVENUE", [
        ["Total Platform Revenue", _amount(data, "total_platform_revenue")],
        ["Transaction Fees", _amount(data, "transaction_fees")],
        ["Subscription Revenue", _amount(data, "subscription_revenue")],
        ["Total Transaction Volume", _amount(data, "total_transaction_volume")],
        ["Total Transactions", _count(data, "total_transactions")],
        ["Avg Transaction Size", _amount(data, "avg_transaction_size")],
        ["Active Brands", _count(data, "active_brands")],
        ["Active Influencers", _count(data, "active_influencers")],
        ["New Signups", _count(data, "new_signups")],
        ["Total Campaigns", _count(data, "total_campaigns")],
        ["Completed Campaigns", _count(data, "completed_campaigns")],
    ], styles)


def _earnings_rows(data: Dict[str, Any], styles) -> List[List[Any]]:
    # Summary carries campaign_earnings, the monthly report carries campaign_breakdown
    lines = data.get("campaign_earnings") or data.get("campaign_breakdown") or []
    cell_style = ParagraphStyle("EarningsCell", parent=styles["Normal"], fontSize=9, leading=11)
    rows: List[List[Any]] = [["Campaign", "Earnings", "Status"]]
    for line in lines:
        line = _as_mapping(line)
        title = str(line.get("campaign_title") or line.get("name") or "Campaign")
        rows.append([
            Paragraph(escape(title), cell_style),
            _amount(line, "earnings"),
            str(line.get("status") or ""),
        ])
    return rows


def _earnings_table(rows: List[List[Any]]) -> Table:
    """Campaign rows in fixed-width columns; splits across pages under a repeated header."""
    table = Table(
        rows,
        colWidths=[EARNINGS_COLUMN_WIDTH] * len(rows[0]),
        repeatRows=1,
    )
    table.setStyle(TableStyle([
        ("FONT", (0, 0), (-1, -1), "Helvetica", 9),
        ("FONT", (0, 0), (-1, 0), "Helvetica-Bold", 9),
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f3f4f6")),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LINEBELOW", (0, 0), (-1, 0), 0.5, colors.grey),
        ("TOPPADDING", (0, 0), (-1, -1), 2 * mm),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 2 * mm),
    ]))
    return table


def _earnings_body(data: Dict[str, Any], styles) -> List[Any]:
    rows = _earnings_rows(data, styles)

    elements: List[Any] = [
        Paragraph("EARNINGS", styles["Heading3"]),
        Paragraph(f"Total Earnings: {_amount(data, 'total_earnings')}", styles["Normal"]),
    ]
    if data.get("net_earnings") is not None:
        elements.append(Paragraph(f"Net Earnings: {_amount(data, 'net_earnings')}", styles["Normal"]))
    elements.append(Spacer(1, 2 * mm))
    if len(rows) > 1:
        elements.append(_earnings_table(rows))
    else:
        elements.append(Paragraph("No earnings in this period.", styles["Normal"]))
    return elements



def _income_statement_body(data: Dict[str, Any], styles) -> List[Any]:
    return (
        _section("REVENUE", [
            ["Gross Revenue", _amount(data, "revenue.gross_revenue")],
            ["Less: Revenue Deductions", _amount(data, "revenue.revenue_deductions")],
            ["Net Revenue", _amount(data, "revenue.net_revenue")],
        ], styles)
        + _section("COST OF SERVICES", [
            ["Cost of Services", _amount(data, "cost_of_sales.cost_of_services")],
            ["Gross Profit", _amount(data, "cost_of_sales.gross_profit")],
            ["Gross Profit Margin", _percent(data, "cost_of_sales.gross_profit_margin")],
        ], styles)
        + _section("OPERATING EXPENSES", [
            ["Platform Fees", _amount(data, "operating_expenses.platform_fees")],
            ["Marketing Expenses", _amount(data, "operating_expenses.marketing_expenses")],
            ["Administrative Expenses", _amount(data, "operating_expenses.administrative_expenses")],
            ["Total Operating Expenses", _amount(data, "operating_expenses.total_operating_expenses")],
        ], styles)
        + _section("NET INCOME", [
            ["Operating Income", _amount(data, "operating_income.amount")],
            ["Income Before Tax", _amount(data, "final_income.income_before_tax")],
            ["Tax Expense", _amount(data, "final_income.tax_expense")],
            ["Net Income", _amount(data, "final_income.net_income")],
            ["Net Profit Margin", _percent(data, "final_income.net_profit_margin")],
        ], styles)
    )


def _balance_sheet_body(data: Dict[str, Any], styles) -> List[Any]:
    balanced = "Yes" if data.get("balance_check") else "No"
    return (
        _section("ASSETS", [
            ["Cash and Equivalents", _amount(data, "assets.current_assets.cash_and_equivalents")],
            ["Accounts Receivable", _amount(data, "assets.current_assets.accounts_receivable")],
            ["Prepaid Expenses", _amount(data, "assets.current_assets.prepaid_expenses")],
            ["Total Current Assets", _amount(data, "assets.current_assets.total")],
            ["Total Non-Current Assets", _amount(data, "assets.non_current_assets.total")],
            ["Total Assets", _amount(data, "assets.total_assets")],
        ], styles)
        + _section("LIABILITIES AND EQUITY", [
            ["Accounts Payable", _amount(data, "liabilities.current_liabilities.accounts_payable")],
            ["Accrued Expenses", _amount(data, "liabilities.current_liabilities.accrued_expenses")],
            ["Long-Term Debt", _amount(data, "liabilities.non_current_liabilities.long_term_debt")],
            ["Total Liabilities", _amount(data, "liabilities.total_liabilities")],
            ["Retained Earnings", _amount(data, "equity.retained_earnings")],
            ["Total Equity", _amount(data, "equity.total_equity")],
            ["Balanced", balanced],
        ], styles)
    )


def _cash_flow_body(data: Dict[str, Any], styles) -> List[Any]:
    return _section("CASH FLOW STATEMENT", [
        ["Net Income", _amount(data, "operating_activities.net_income")],
        ["Accounts Receivable Change", _amount(data, "operating_activities.accounts_receivable_change")],
        ["Accounts Payable Change", _amount(data, "operating_activities.accounts_payable_change")],
        ["Net Operating Cash Flow", _amount(data, "operating_activities.net_operating_cash_flow")],
        ["Net Investing Cash Flow", _amount(data, "investing_activities.net_investing_cash_flow")],
        ["Net Financing Cash Flow", _amount(data, "financing_activities.net_financing_cash_flow")],
        ["Net Change in Cash", _amount(data, "net_cash_change")],
        ["Beginning Cash", _amount(data, "beginning_cash")],
        ["Ending Cash", _amount(data, "ending_cash")],
    ], styles)


def _financial_analysis_body(data: Dict[str, Any], styles) -> List[Any]:
    return (
        _section("KEY RATIOS", [
            ["Gross Profit Margin", _percent(data, "profitability_ratios.gross_profit_margin")],
            ["Operating Margin", _percent(data, "profitability_ratios.operating_margin")],
            ["Net Profit Margin", _percent(data, "profitability_ratios.net_profit_margin")],
            ["Return on Assets", _percent(data, "profitability_ratios.return_on_assets")],
            ["Return on Equity", _percent(data, "profitability_ratios.return_on_equity")],
            ["Current Ratio", _ratio(data, "liquidity_ratios.current_ratio")],
            ["Quick Ratio", _ratio(data, "liquidity_ratios.quick_ratio")],
            ["Debt to Equity", _ratio(data, "leverage_ratios.debt_to_equity_ratio")],
            ["Debt to Assets", _ratio(data, "leverage_ratios.debt_to_assets_ratio")],
            ["Asset Turnover", _ratio(data, "efficiency_ratios.asset_turnover")],
        ], styles)
        + _section("RISK ASSESSMENT", [
            ["Financial Stability", str(_lookup(data, "risk_assessment.financial_stability") or "N/A")],
            ["Liquidity Risk", str(_lookup(data, "risk_assessment.liquidity_risk") or "N/A")],
            ["Profitability Risk", str(_lookup(data, "risk_assessment.profitability_risk") or "N/A")],
        ], styles)
    )


SectionBuilder = Callable[[Dict[str, Any], Any], List[Any]]

SECTION_BUILDERS: Dict[ReportKind, SectionBuilder] = {
    ReportKind.STATEMENT: _statement_body,
    ReportKind.PNL: _pnl_body,
    ReportKind.PLATFORM: _platform_body,
    ReportKind.EARNINGS: _earnings_body,
    ReportKind.INCOME_STATEMENT: _income_statement_body,
    ReportKind.BALANCE_SHEET: _balance_sheet_body,
    ReportKind.CASH_FLOW: _cash_flow_body,
    ReportKind.FINANCIAL_ANALYSIS: _financial_analysis_body,
}


# =============================================================================
# Document assembly
# =============================================================================

def _header(
    kind: ReportKind,
    data: Dict[str, Any],
    recipient: Optional[Recipient],
    report_date: date,
    platform_name: str,
    styles,
) -> List[Any]:
    title_style = ParagraphStyle("ReportTitle", parent=styles["Heading1"], fontSize=18, spaceAfter=2)
    subtitle_style = ParagraphStyle("ReportSubtitle", parent=styles["Heading2"], fontSize=14, spaceAfter=2)
    small_style = ParagraphStyle("Small", parent=styles["Normal"], fontSize=8)

    elements: List[Any] = [
        Paragraph(escape(platform_name), title_style),
        Paragraph("FINANCIAL REPORT", subtitle_style),
        Paragraph("Prepared in accordance with Generally Accepted Accounting Principles (GAAP)", styles["Normal"]),
        Spacer(1, 4 * mm),
        Paragraph(f"Report Type: {kind.label}", styles["Normal"]),
        Paragraph(f"Report Date: {_format_date(report_date)}", styles["Normal"]),
        Paragraph(f"Reporting Period: {escape(_reporting_period(data))}", styles["Normal"]),
    ]
    if recipient:
        elements.append(Paragraph(f"Prepared For: {escape(recipient.name)}", styles["Normal"]))
        elements.append(Paragraph(f"Account: {escape(recipient.email)}", styles["Normal"]))
    elements.append(Spacer(1, 2 * mm))
    elements.append(Paragraph(
        "This report contains confidential financial information. Distribution is restricted.",
        small_style,
    ))
    elements.append(Spacer(1, 6 * mm))
    return elements


def generate_report_pdf(
    report_kind: Union[ReportKind, str],
    report_data: Any,
    recipient: Optional[Recipient] = None,
    report_date: Optional[date] = None,
    platform_name: str = PLATFORM_NAME,
) -> bytes:
    """Render one report as PDF bytes.

    Args:
        report_kind: ReportKind or its string value
        report_data: Report model, dataclass or view dict
        recipient: Optional name/email printed in the header
        report_date: Date printed as the report date (defaults to today)
        platform_name: Brand name printed in the header and footer

    Returns:
        PDF document content

    Raises:
        ValueError: Unknown report kind string
    """
    kind = ReportKind(report_kind)
    data = _as_mapping(report_data)
    styles = getSampleStyleSheet()

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        topMargin=20 * mm,
        bottomMargin=30 * mm,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        title=f"{platform_name} {kind.label}",
    )

    elements = _header(kind, data, recipient, report_date or date.today(), platform_name, styles)
    elements.extend(SECTION_BUILDERS[kind](data, styles))

    doc.build(elements, canvasmaker=partial(NumberedCanvas, platform_name=platform_name))
    pdf_bytes = buffer.getvalue()
    buffer.close()

    logger.info(f"Rendered {kind.value} report ({len(pdf_bytes)} bytes)")
    return pdf_bytes
