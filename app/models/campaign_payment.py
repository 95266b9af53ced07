"""CampaignPayment model - Payments from brands to influencers per campaign."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from sqlmodel import SQLModel, Field
from .base import money_field
from .mixins import UUIDMixin


class CampaignPayment(SQLModel, UUIDMixin, table=True):
    """Single payment leg (upfront, completion, bonus) for a campaign."""

    __tablename__ = "campaign_payments"

    campaign_id: UUID = Field(foreign_key="brand_campaigns.id", nullable=False, index=True)
    influencer_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    brand_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    payment_type: str = Field(default="upfront")  # upfront, completion, full, bonus
    amount: Decimal = money_field()
    currency: str = Field(default="INR")
    status: str = Field(default="pending")  # pending, processing, completed, paid, failed, cancelled
    description: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
