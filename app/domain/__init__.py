"""Domain layer - Shared data access for ledger and report tables.

This layer provides pure data access functions (no metric computation).
Ledger operations are read-only; report operations insert write-once rows.

Usage:
    from app.domain import FinancialStatementOperations, InvoiceOperations

    with get_db_session() as session:
        statement = FinancialStatementOperations.get_by_id(session, statement_id)
        invoices = InvoiceOperations.get_for_subject(session, "brand", brand_id, start, end)
"""

from .ledger_operations import (
    InvoiceOperations,
    CampaignPaymentOperations,
    FinancialTransactionOperations,
    BrandCampaignOperations,
    UserOperations,
)
from .financial_statement_operations import FinancialStatementOperations
from .report_operations import CampaignPLReportOperations, PlatformRevenueReportOperations

__all__ = [
    # Ledger (read-only)
    "InvoiceOperations",
    "CampaignPaymentOperations",
    "FinancialTransactionOperations",
    "BrandCampaignOperations",
    "UserOperations",
    # Reports
    "FinancialStatementOperations",
    "CampaignPLReportOperations",
    "PlatformRevenueReportOperations",
]
