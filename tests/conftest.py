"""Shared fixtures: in-memory SQLite database and ledger row factories."""

from datetime import datetime
from decimal import Decimal
from itertools import count
from typing import Optional

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from app.db.engine import create_session_factory
from app.models import (
    BrandCampaign,
    CampaignPayment,
    FinancialTransaction,
    Invoice,
    User,
)

_sequence = count(1)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


class LedgerFactory:
    """Inserts ledger rows with sensible defaults."""

    def __init__(self, session):
        self.session = session

    def _save(self, row):
        self.session.add(row)
        self.session.commit()
        return row

    def user(self, role: str = "brand", created_at: Optional[datetime] = None, **kwargs) -> User:
        n = next(_sequence)
        return self._save(User(
            email=kwargs.pop("email", f"user{n}@example.com"),
            role=role,
            created_at=created_at or datetime(2025, 1, 1),
            **kwargs,
        ))

    def campaign(
        self,
        brand: User,
        status: str = "active",
        created_at: Optional[datetime] = None,
        **kwargs,
    ) -> BrandCampaign:
        return self._save(BrandCampaign(
            brand_id=brand.id,
            title=kwargs.pop("title", "Spring Launch"),
            campaign_type=kwargs.pop("campaign_type", "sponsored_posts"),
            status=status,
            created_at=created_at or datetime(2025, 1, 1),
            **kwargs,
        ))

    def invoice(
        self,
        campaign: BrandCampaign,
        influencer: User,
        subtotal: str,
        tax: str,
        status: str = "paid",
        created_at: Optional[datetime] = None,
    ) -> Invoice:
        n = next(_sequence)
        subtotal_amount = Decimal(subtotal)
        tax_amount = Decimal(tax)
        return self._save(Invoice(
            invoice_number=f"INV-{n:05d}",
            campaign_id=campaign.id,
            brand_id=campaign.brand_id,
            influencer_id=influencer.id,
            status=status,
            subtotal_amount=subtotal_amount,
            tax_amount=tax_amount,
            total_amount=subtotal_amount + tax_amount,
            created_at=created_at or datetime(2025, 3, 15),
        ))

    def payment(
        self,
        campaign: BrandCampaign,
        influencer: User,
        amount: str,
        status: str = "paid",
        created_at: Optional[datetime] = None,
        description: Optional[str] = None,
    ) -> CampaignPayment:
        return self._save(CampaignPayment(
            campaign_id=campaign.id,
            influencer_id=influencer.id,
            brand_id=campaign.brand_id,
            amount=Decimal(amount),
            status=status,
            description=description,
            created_at=created_at or datetime(2025, 3, 15),
        ))

    def commission(
        self,
        campaign: BrandCampaign,
        influencer: User,
        fee: str,
        status: str = "completed",
        created_at: Optional[datetime] = None,
    ) -> FinancialTransaction:
        n = next(_sequence)
        return self._save(FinancialTransaction(
            transaction_id=f"TXN-{n:05d}",
            campaign_id=campaign.id,
            brand_id=campaign.brand_id,
            influencer_id=influencer.id,
            transaction_type="platform_commission",
            status=status,
            platform_fee=Decimal(fee),
            created_at=created_at or datetime(2025, 3, 15),
        ))


@pytest.fixture
def ledger(session):
    return LedgerFactory(session)


@pytest.fixture
def brand(ledger) -> User:
    return ledger.user(role="brand", first_name="Acme", last_name="Studio")


@pytest.fixture
def influencer(ledger) -> User:
    return ledger.user(role="influencer", first_name="Riya", last_name="Sen")


@pytest.fixture
def campaign(ledger, brand) -> BrandCampaign:
    return ledger.campaign(
        brand,
        exact_start_date=datetime(2025, 3, 1),
        exact_end_date=datetime(2025, 3, 31),
    )
