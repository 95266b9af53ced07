"""BrandCampaign model - Campaigns created by brands."""

from datetime import datetime
from typing import Optional
from uuid import UUID
from sqlmodel import SQLModel, Field
from .mixins import UUIDMixin


class BrandCampaign(SQLModel, UUIDMixin, table=True):
    """Campaign run by a brand. Read-only to the reporting layer."""

    __tablename__ = "brand_campaigns"

    brand_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    title: str = Field(nullable=False)
    campaign_type: str = Field(nullable=False)  # product_placement, sponsored_posts, brand_ambassador
    status: str = Field(default="draft", index=True)  # draft, active, paused, completed, cancelled, archived
    exact_start_date: Optional[datetime] = Field(default=None)
    exact_end_date: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Monsoon Launch",
                "campaign_type": "sponsored_posts",
                "status": "active",
                "exact_start_date": "2025-03-01T00:00:00",
                "exact_end_date": "2025-03-31T00:00:00",
            }
        }
