"""SQLModel exports for all database tables."""

# Section A: Ledger Tables (owned by the payment/invoice workflows, read-only here)
from .user import User
from .brand_campaign import BrandCampaign
from .invoice import Invoice
from .campaign_payment import CampaignPayment
from .financial_transaction import FinancialTransaction

# Section B: Report Tables
from .financial_statement import FinancialStatement
from .campaign_pl_report import CampaignProfitLossReport
from .platform_revenue_report import PlatformRevenueReport

__all__ = [
    # Ledger
    "User",
    "BrandCampaign",
    "Invoice",
    "CampaignPayment",
    "FinancialTransaction",
    # Reports
    "FinancialStatement",
    "CampaignProfitLossReport",
    "PlatformRevenueReport",
]
