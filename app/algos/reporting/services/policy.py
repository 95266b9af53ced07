"""Reporting policy - Business constants injected into the metric calculator."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ReportingPolicy:
    """Fixed-percentage policy applied on top of ledger sums.

    None of these values is measured from data. They are deployment policy
    and can be varied per environment or per test.
    """

    revenue_deduction_rate: Decimal = Decimal("0.02")
    marketing_expense_share: Decimal = Decimal("0.30")
    admin_expense_share: Decimal = Decimal("0.20")
    tax_rate: Decimal = Decimal("0.25")
    campaign_window_padding_days: int = 7
    earnings_platform_fee_rate: Decimal = Decimal("0.05")
    currency: str = "INR"

    @classmethod
    def from_settings(cls, settings: Any) -> "ReportingPolicy":
        """Build a policy from the application Settings object."""
        return cls(
            revenue_deduction_rate=Decimal(str(settings.REVENUE_DEDUCTION_RATE)),
            marketing_expense_share=Decimal(str(settings.MARKETING_EXPENSE_SHARE)),
            admin_expense_share=Decimal(str(settings.ADMIN_EXPENSE_SHARE)),
            tax_rate=Decimal(str(settings.TAX_RATE)),
            campaign_window_padding_days=int(settings.CAMPAIGN_WINDOW_PADDING_DAYS),
            earnings_platform_fee_rate=Decimal(str(settings.EARNINGS_PLATFORM_FEE_RATE)),
            currency=settings.DEFAULT_CURRENCY,
        )
