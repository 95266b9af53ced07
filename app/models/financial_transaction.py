"""FinancialTransaction model - Money movements including platform commission."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from sqlmodel import SQLModel, Field
from .base import money_field
from .mixins import UUIDMixin


class FinancialTransaction(SQLModel, UUIDMixin, table=True):
    """Ledger transaction. Commission rows carry transaction_type='platform_commission'."""

    __tablename__ = "financial_transactions"

    transaction_id: str = Field(unique=True, nullable=False)  # e.g. TXN-2025-001
    campaign_id: Optional[UUID] = Field(default=None, foreign_key="brand_campaigns.id", index=True)
    brand_id: UUID = Field(foreign_key="users.id", nullable=False)
    influencer_id: UUID = Field(foreign_key="users.id", nullable=False)
    transaction_type: str = Field(nullable=False)  # upfront_payment, completion_payment, platform_commission, refund
    status: str = Field(default="pending")  # pending, processing, completed, failed, cancelled, disputed
    gross_amount: Decimal = money_field()
    platform_fee: Decimal = money_field()
    net_amount: Decimal = money_field()
    currency: str = Field(default="INR")
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
