import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field
from sqlmodel import Session

from app.core.config import settings
from app.db.engine import get_db
from app.domain import (
    CampaignPLReportOperations,
    FinancialStatementOperations,
    PlatformRevenueReportOperations,
    UserOperations,
)
from app.models import CampaignProfitLossReport, FinancialStatement, PlatformRevenueReport
from app.algos.reporting.services import (
    Recipient,
    ReportingError,
    ReportingPolicy,
    ReportKind,
    SubjectNotFoundError,
    generate_report_pdf,
)
from app.algos.reporting.workflows import StatementGenerator

logger = logging.getLogger(__name__)

router = APIRouter()


class StatementRequest(BaseModel):
    subject_id: Optional[UUID] = None
    subject_kind: str = Field(default="brand", pattern="^(brand|influencer|platform)$")
    year: int = Field(ge=2000, le=2100)
    month: int = Field(ge=1, le=12)


class CampaignPLRequest(BaseModel):
    campaign_id: UUID
    brand_id: Optional[UUID] = None
    report_period: str = Field(default="campaign_total", pattern="^(campaign_total|monthly|quarterly)$")


class PlatformReportRequest(BaseModel):
    report_type: str = Field(pattern="^(daily|weekly|monthly|quarterly|yearly)$")
    year: int = Field(ge=2000, le=2100)
    period: int = Field(default=1, ge=1)


def get_generator(db: Session = Depends(get_db)) -> StatementGenerator:
    return StatementGenerator(db, policy=ReportingPolicy.from_settings(settings))


def _http_error(exc: Exception) -> HTTPException:
    """Translate a reporting error into an HTTP error."""
    if isinstance(exc, SubjectNotFoundError):
        logger.error(f"Report subject missing: {exc}")
        return HTTPException(status_code=404, detail=str(exc))
    logger.error(f"Invalid report request: {exc}")
    return HTTPException(status_code=400, detail=str(exc))


def _pdf_response(kind: ReportKind, data, filename: str, recipient: Optional[Recipient] = None) -> Response:
    pdf_bytes = generate_report_pdf(kind, data, recipient=recipient, platform_name=settings.PLATFORM_NAME)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =============================================================================
# Statements
# =============================================================================

@router.post("/statements/generate", response_model=FinancialStatement)
def generate_statement(request: StatementRequest, generator: StatementGenerator = Depends(get_generator)):
    try:
        return generator.generate_monthly_statement(
            request.subject_id, request.subject_kind, request.year, request.month
        )
    except (ReportingError, ValueError) as exc:
        raise _http_error(exc) from exc


@router.get("/statements", response_model=List[FinancialStatement])
def list_statements(
    subject_id: UUID,
    statement_type: Optional[str] = None,
    limit: int = Query(default=24, ge=1, le=120),
    db: Session = Depends(get_db),
):
    return FinancialStatementOperations.list_for_subject(db, subject_id, statement_type, limit)


@router.get("/statements/{statement_id}", response_model=FinancialStatement)
def get_statement(statement_id: UUID, db: Session = Depends(get_db)):
    statement = FinancialStatementOperations.get_by_id(db, statement_id)
    if statement is None:
        raise HTTPException(status_code=404, detail=f"Statement not found: {statement_id}")
    return statement


@router.get("/statements/{statement_id}/pdf")
def get_statement_pdf(statement_id: UUID, db: Session = Depends(get_db)):
    statement = FinancialStatementOperations.get_by_id(db, statement_id)
    if statement is None:
        raise HTTPException(status_code=404, detail=f"Statement not found: {statement_id}")

    recipient = None
    user = UserOperations.get_by_id(db, statement.subject_id)
    if user is not None:
        recipient = Recipient(name=user.display_name, email=user.email or "")

    return _pdf_response(ReportKind.STATEMENT, statement, f"statement-{statement_id}.pdf", recipient)


# =============================================================================
# Campaign P&L
# =============================================================================

@router.post("/pnl/generate", response_model=CampaignProfitLossReport)
def generate_campaign_pl(request: CampaignPLRequest, generator: StatementGenerator = Depends(get_generator)):
    try:
        return generator.generate_campaign_pl_report(
            request.campaign_id, request.brand_id, request.report_period
        )
    except (ReportingError, ValueError) as exc:
        raise _http_error(exc) from exc


@router.get("/pnl/campaign/{campaign_id}", response_model=List[CampaignProfitLossReport])
def list_campaign_pl(campaign_id: UUID, db: Session = Depends(get_db)):
    return CampaignPLReportOperations.list_for_campaign(db, campaign_id)


@router.get("/pnl/{report_id}/pdf")
def get_campaign_pl_pdf(report_id: UUID, db: Session = Depends(get_db)):
    report = CampaignPLReportOperations.get_by_id(db, report_id)
    if report is None:
        raise HTTPException(status_code=404, detail=f"P&L report not found: {report_id}")
    return _pdf_response(ReportKind.PNL, report, f"pnl-{report_id}.pdf")


# =============================================================================
# Platform revenue
# =============================================================================

@router.post("/platform/generate", response_model=PlatformRevenueReport)
def generate_platform_report(
    request: PlatformReportRequest,
    generator: StatementGenerator = Depends(get_generator),
):
    try:
        return generator.generate_platform_revenue_report(request.report_type, request.year, request.period)
    except (ReportingError, ValueError) as exc:
        raise _http_error(exc) from exc


@router.get("/platform/{report_id}/pdf")
def get_platform_report_pdf(report_id: UUID, db: Session = Depends(get_db)):
    report = PlatformRevenueReportOperations.get_by_id(db, report_id)
    if report is None:
        raise HTTPException(status_code=404, detail=f"Platform report not found: {report_id}")
    return _pdf_response(ReportKind.PLATFORM, report, f"platform-{report_id}.pdf")


# =============================================================================
# Influencer earnings
# =============================================================================

@router.get("/earnings/{influencer_id}")
def get_earnings_summary(
    influencer_id: UUID,
    year: int = Query(ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    generator: StatementGenerator = Depends(get_generator),
):
    try:
        return generator.generate_influencer_earnings_summary(influencer_id, year, month).to_dict()
    except (ReportingError, ValueError) as exc:
        raise _http_error(exc) from exc


@router.get("/earnings/{influencer_id}/report")
def get_earnings_report(
    influencer_id: UUID,
    year: int = Query(ge=2000, le=2100),
    month: int = Query(ge=1, le=12),
    format: str = Query(default="json", pattern="^(json|pdf)$"),
    generator: StatementGenerator = Depends(get_generator),
):
    try:
        report = generator.generate_earnings_report(influencer_id, year, month)
    except (ReportingError, ValueError) as exc:
        raise _http_error(exc) from exc

    if format == "pdf":
        return _pdf_response(ReportKind.EARNINGS, report, f"{report.id}.pdf")
    return report.to_dict()


@router.get("/earnings/{influencer_id}/analytics")
def get_earnings_analytics(influencer_id: UUID, generator: StatementGenerator = Depends(get_generator)):
    return generator.generate_earnings_analytics(influencer_id).to_dict()


# =============================================================================
# Statement views
# =============================================================================

def _view(
    kind: ReportKind,
    generator: StatementGenerator,
    subject_id: UUID,
    subject_kind: str,
    year: Optional[int],
    month: Optional[int],
    format: str,
):
    year = year or date.today().year
    builders = {
        ReportKind.INCOME_STATEMENT: generator.generate_income_statement,
        ReportKind.BALANCE_SHEET: generator.generate_balance_sheet,
        ReportKind.CASH_FLOW: generator.generate_cash_flow_statement,
        ReportKind.FINANCIAL_ANALYSIS: generator.generate_financial_analysis,
    }
    try:
        view = builders[kind](subject_id, subject_kind, year, month)
    except (ReportingError, ValueError) as exc:
        raise _http_error(exc) from exc

    if format == "pdf":
        suffix = f"{year}-{month:02d}" if month else str(year)
        return _pdf_response(kind, view, f"{kind.value}-{suffix}.pdf")
    return view


SUBJECT_KIND_PATTERN = "^(brand|influencer|platform)$"


@router.get("/income-statement")
def get_income_statement(
    subject_id: UUID,
    subject_kind: str = Query(default="brand", pattern=SUBJECT_KIND_PATTERN),
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    format: str = Query(default="json", pattern="^(json|pdf)$"),
    generator: StatementGenerator = Depends(get_generator),
):
    return _view(ReportKind.INCOME_STATEMENT, generator, subject_id, subject_kind, year, month, format)


@router.get("/balance-sheet")
def get_balance_sheet(
    subject_id: UUID,
    subject_kind: str = Query(default="brand", pattern=SUBJECT_KIND_PATTERN),
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    format: str = Query(default="json", pattern="^(json|pdf)$"),
    generator: StatementGenerator = Depends(get_generator),
):
    return _view(ReportKind.BALANCE_SHEET, generator, subject_id, subject_kind, year, month, format)


@router.get("/cash-flow")
def get_cash_flow(
    subject_id: UUID,
    subject_kind: str = Query(default="brand", pattern=SUBJECT_KIND_PATTERN),
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    format: str = Query(default="json", pattern="^(json|pdf)$"),
    generator: StatementGenerator = Depends(get_generator),
):
    return _view(ReportKind.CASH_FLOW, generator, subject_id, subject_kind, year, month, format)


@router.get("/financial-analysis")
def get_financial_analysis(
    subject_id: UUID,
    subject_kind: str = Query(default="brand", pattern=SUBJECT_KIND_PATTERN),
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    format: str = Query(default="json", pattern="^(json|pdf)$"),
    generator: StatementGenerator = Depends(get_generator),
):
    return _view(ReportKind.FINANCIAL_ANALYSIS, generator, subject_id, subject_kind, year, month, format)
