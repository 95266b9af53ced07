"""User model - Brands, influencers and admins registered on the platform."""

from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field
from .mixins import UUIDMixin


class User(SQLModel, UUIDMixin, table=True):
    """Platform account. Reporting reads role and signup date only."""

    __tablename__ = "users"

    email: Optional[str] = Field(default=None, unique=True)
    first_name: Optional[str] = Field(default=None)
    last_name: Optional[str] = Field(default=None)
    role: str = Field(nullable=False, index=True)  # brand, influencer, admin
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)

    @property
    def display_name(self) -> str:
        """Full name, falling back to email."""
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email or str(self.id)

    class Config:
        json_schema_extra = {
            "example": {
                "email": "studio@acme.example",
                "first_name": "Acme",
                "last_name": "Studio",
                "role": "brand",
            }
        }
