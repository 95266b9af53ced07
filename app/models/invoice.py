"""Invoice model - Influencer invoices raised against brand campaigns."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID
from sqlmodel import SQLModel, Field
from sqlalchemy import Index
from .base import money_field
from .mixins import UUIDMixin


class Invoice(SQLModel, UUIDMixin, table=True):
    """Invoice issued by an influencer to a brand for campaign work."""

    __tablename__ = "invoices"

    invoice_number: str = Field(unique=True, nullable=False)
    campaign_id: UUID = Field(foreign_key="brand_campaigns.id", nullable=False, index=True)
    brand_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    influencer_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    status: str = Field(default="draft")  # draft, sent, paid, overdue, cancelled
    subtotal_amount: Decimal = money_field()
    tax_amount: Decimal = money_field()
    total_amount: Decimal = money_field()
    currency: str = Field(default="INR")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    __table_args__ = (
        # Range scans by status within a period
        Index("ix_invoices_status_created", "status", "created_at"),
    )
