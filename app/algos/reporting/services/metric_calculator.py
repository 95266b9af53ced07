"""Metric Calculator - Aggregates ledger rows into GAAP-shaped metrics.

Three metric sets are produced:
- Statement metrics for a brand, influencer or the platform over a period
- Campaign P&L metrics from payments, commissions and invoices
- Platform revenue metrics from paid invoices, signups and campaigns

The compute_* functions are pure and take already-fetched rows; the
MetricCalculator class runs the ledger queries and feeds them in. Every
metric defaults to zero when the period has no rows.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from sqlmodel import Session

from app.domain import (
    BrandCampaignOperations,
    CampaignPaymentOperations,
    FinancialTransactionOperations,
    InvoiceOperations,
    UserOperations,
)

from .errors import InvalidSubjectKindError
from .money import ZERO, BASIS, HUNDRED, money, percent_of, ratio_of, to_decimal
from .periods import Period
from .policy import ReportingPolicy

logger = logging.getLogger(__name__)

SUBJECT_KINDS = ("brand", "influencer", "platform")


def compute_statement_metrics(
    subject_kind: str,
    invoices: Iterable[Any],
    campaign_counts: Optional[Dict[str, int]] = None,
    policy: Optional[ReportingPolicy] = None,
) -> dict[str, Any]:
    """Derive a full statement from a subject's invoices in one period.

    Args:
        subject_kind: brand (payer), influencer (payee) or platform
        invoices: Invoice rows of any status created in the period
        campaign_counts: Brand campaigns created in the period, by status
        policy: Percentages applied on top of ledger sums

    Returns:
        Dict keyed by FinancialStatement field names, money as 2dp Decimals
    """
    if subject_kind not in SUBJECT_KINDS:
        raise InvalidSubjectKindError(f"Invalid subject kind: {subject_kind}")

    policy = policy or ReportingPolicy()
    campaign_counts = campaign_counts or {}

    gross_revenue = ZERO
    cost_of_services = ZERO
    raw_operating_expenses = ZERO
    platform_fees = ZERO
    total_transactions = 0
    successful_transactions = 0
    failed_transactions = 0

    for invoice in invoices:
        total_transactions += 1
        total = to_decimal(invoice.total_amount)
        subtotal = to_decimal(invoice.subtotal_amount)
        tax = to_decimal(invoice.tax_amount)

        if invoice.status == "paid":
            successful_transactions += 1
            if subject_kind == "brand":
                cost_of_services += subtotal
                raw_operating_expenses += total - subtotal
                platform_fees += tax
            elif subject_kind == "influencer":
                gross_revenue += total
                platform_fees += tax
            else:
                # Transaction fees are the platform's revenue
                gross_revenue += tax
        elif invoice.status == "cancelled":
            failed_transactions += 1

    # Income statement
    revenue_deductions = gross_revenue * policy.revenue_deduction_rate
    net_revenue = gross_revenue - revenue_deductions
    gross_profit = net_revenue - cost_of_services

    marketing_expenses = raw_operating_expenses * policy.marketing_expense_share
    administrative_expenses = raw_operating_expenses * policy.admin_expense_share
    operating_expenses = (
        raw_operating_expenses + platform_fees + marketing_expenses + administrative_expenses
    )
    operating_income = gross_profit - operating_expenses

    interest_income = ZERO
    interest_expense = ZERO
    other_income = ZERO
    income_before_tax = operating_income + interest_income - interest_expense + other_income
    tax_expense = max(income_before_tax * policy.tax_rate, ZERO)
    net_income = income_before_tax - tax_expense

    # Balance sheet: only cash is sourced (from earnings), everything else has no ledger
    cash_and_equivalents = max(net_income, ZERO)
    accounts_receivable = ZERO
    prepaid_expenses = ZERO
    current_assets = cash_and_equivalents + accounts_receivable + prepaid_expenses
    fixed_assets = ZERO
    intangible_assets = ZERO
    total_assets = current_assets + fixed_assets + intangible_assets

    accounts_payable = ZERO
    accrued_expenses = ZERO
    current_liabilities = accounts_payable + accrued_expenses
    long_term_debt = ZERO
    total_liabilities = current_liabilities + long_term_debt

    retained_earnings = net_income
    total_equity = total_assets - total_liabilities

    # Cash flow
    operating_cash_flow = net_income
    investing_cash_flow = ZERO
    financing_cash_flow = ZERO
    net_cash_flow = operating_cash_flow + investing_cash_flow + financing_cash_flow

    # Campaign and collaboration metrics
    active_campaigns = 0
    completed_campaigns = 0
    collaborations_completed = 0
    campaign_roi = ZERO

    if subject_kind == "brand":
        active_campaigns = campaign_counts.get("active", 0)
        completed_campaigns = campaign_counts.get("completed", 0)
        if cost_of_services > 0:
            campaign_roi = (gross_revenue / cost_of_services - 1) * HUNDRED
    elif subject_kind == "influencer":
        collaborations_completed = successful_transactions

    metrics = {
        # Income statement
        "gross_revenue": gross_revenue,
        "revenue_deductions": revenue_deductions,
        "net_revenue": net_revenue,
        "cost_of_services": cost_of_services,
        "gross_profit": gross_profit,
        "operating_expenses": operating_expenses,
        "platform_fees": platform_fees,
        "marketing_expenses": marketing_expenses,
        "administrative_expenses": administrative_expenses,
        "operating_income": operating_income,
        "interest_income": interest_income,
        "interest_expense": interest_expense,
        "other_income": other_income,
        "income_before_tax": income_before_tax,
        "tax_expense": tax_expense,
        "net_income": net_income,
        # Balance sheet
        "cash_and_equivalents": cash_and_equivalents,
        "accounts_receivable": accounts_receivable,
        "prepaid_expenses": prepaid_expenses,
        "current_assets": current_assets,
        "fixed_assets": fixed_assets,
        "intangible_assets": intangible_assets,
        "total_assets": total_assets,
        "accounts_payable": accounts_payable,
        "accrued_expenses": accrued_expenses,
        "current_liabilities": current_liabilities,
        "long_term_debt": long_term_debt,
        "total_liabilities": total_liabilities,
        "retained_earnings": retained_earnings,
        "total_equity": total_equity,
        # Cash flow
        "operating_cash_flow": operating_cash_flow,
        "investing_cash_flow": investing_cash_flow,
        "financing_cash_flow": financing_cash_flow,
        "net_cash_flow": net_cash_flow,
        # Ratios
        "gross_profit_margin": percent_of(gross_profit, net_revenue),
        "operating_margin": percent_of(operating_income, net_revenue),
        "net_profit_margin": percent_of(net_income, net_revenue),
        "return_on_assets": percent_of(net_income, total_assets),
        "return_on_equity": percent_of(net_income, total_equity),
        "current_ratio": ratio_of(current_assets, current_liabilities),
        "debt_to_equity_ratio": ratio_of(total_liabilities, total_equity),
        # Legacy totals
        "total_revenue": gross_revenue,
        "total_expenses": cost_of_services + operating_expenses,
        "taxes_paid": tax_expense,
        # Campaign metrics
        "campaign_roi": campaign_roi,
        "avg_campaign_cost": ratio_of(cost_of_services, completed_campaigns),
        "avg_earnings_per_campaign": ratio_of(gross_revenue, collaborations_completed),
    }
    metrics = {name: money(value) for name, value in metrics.items()}

    metrics.update(
        total_transactions=total_transactions,
        successful_transactions=successful_transactions,
        failed_transactions=failed_transactions,
        refunded_transactions=0,
        active_campaigns=active_campaigns,
        completed_campaigns=completed_campaigns,
        collaborations_completed=collaborations_completed,
        top_performing_categories=[],
    )
    return metrics


def compute_campaign_pl_metrics(
    brand_paid: Decimal,
    platform_commission: Decimal,
    total_invoiced: Decimal,
    invoice_tax: Decimal,
) -> dict[str, Any]:
    """Campaign P&L from the brand's point of view.

    Args:
        brand_paid: Sum of paid campaign payments
        platform_commission: Sum of completed platform_commission fees
        total_invoiced: Sum of invoice totals, any status
        invoice_tax: Sum of invoice tax

    Returns:
        Dict keyed by CampaignProfitLossReport field names
    """
    brand_paid = to_decimal(brand_paid)
    platform_commission = to_decimal(platform_commission)
    total_invoiced = to_decimal(total_invoiced)
    invoice_tax = to_decimal(invoice_tax)

    total_costs = brand_paid
    total_revenue = brand_paid + platform_commission
    gross_profit = total_revenue - total_costs
    net_profit = gross_profit - invoice_tax

    # No reach or engagement source yet
    total_reach = 0
    total_engagements = 0
    conversion_rate = ZERO
    if total_reach > 0 and total_revenue > 0:
        conversion_rate = (total_revenue / total_reach * HUNDRED).quantize(BASIS)

    return {
        "total_revenue": money(total_revenue),
        "direct_sales": money(total_revenue),
        "brand_lift": money(ZERO),
        "total_costs": money(total_costs),
        "influencer_payments": money(brand_paid),
        "platform_fees": money(platform_commission),
        "production_costs": money(max(total_invoiced - brand_paid, ZERO)),
        "advertising_spend": money(ZERO),
        "gross_profit": money(gross_profit),
        "net_profit": money(net_profit),
        "profit_margin": money(percent_of(net_profit, total_revenue)),
        "roi": money(percent_of(total_revenue - total_costs, total_costs)),
        "total_reach": total_reach,
        "total_engagements": total_engagements,
        "conversion_rate": conversion_rate.quantize(BASIS),
        "cost_per_acquisition": money(ratio_of(total_costs, total_revenue / HUNDRED)),
        "lifetime_value": money(ZERO),
    }


def compute_platform_metrics(
    volume: Decimal,
    fees: Decimal,
    transaction_count: int,
    new_signups: int,
    new_brands: int,
    new_influencers: int,
    campaign_counts: Optional[Dict[str, int]] = None,
) -> dict[str, Any]:
    """Platform-wide revenue and activity.

    Returns:
        Dict keyed by PlatformRevenueReport field names
    """
    campaign_counts = campaign_counts or {}
    volume = to_decimal(volume)
    fees = to_decimal(fees)
    completed_campaigns = campaign_counts.get("completed", 0)

    return {
        "total_platform_revenue": money(fees),
        "transaction_fees": money(fees),
        "subscription_revenue": money(ZERO),
        "premium_features": money(ZERO),
        "advertising_revenue": money(ZERO),
        "total_transaction_volume": money(volume),
        "total_transactions": transaction_count,
        "avg_transaction_size": money(ratio_of(volume, transaction_count)),
        "active_brands": new_brands,
        "active_influencers": new_influencers,
        "new_signups": new_signups,
        "churned_users": 0,
        "total_campaigns": sum(campaign_counts.values()),
        "active_campaigns": campaign_counts.get("active", 0),
        "completed_campaigns": completed_campaigns,
        "avg_campaign_value": money(ratio_of(volume, completed_campaigns)),
        "revenue_by_region": {},
        "top_markets": [],
        "revenue_growth_rate": money(ZERO),
        "user_growth_rate": money(ZERO),
        "transaction_growth_rate": money(ZERO),
        "operational_costs": money(ZERO),
        "marketing_costs": money(ZERO),
        "support_costs": money(ZERO),
    }


class MetricCalculator:
    """Runs ledger queries for a period and computes metric sets.

    Example:
        calculator = MetricCalculator(session, ReportingPolicy())
        metrics = calculator.calculate_user_metrics(brand_id, "brand", month_period(2025, 2))
    """

    def __init__(self, session: Session, policy: Optional[ReportingPolicy] = None):
        """Initialize calculator.

        Args:
            session: Database session used for ledger reads
            policy: Policy constants (defaults match the production settings)
        """
        self.session = session
        self.policy = policy or ReportingPolicy()

    def calculate_user_metrics(
        self,
        subject_id: Optional[UUID],
        subject_kind: str,
        period: Period,
    ) -> dict[str, Any]:
        """Statement metrics for a brand, influencer or the whole platform."""
        if subject_kind not in SUBJECT_KINDS:
            raise InvalidSubjectKindError(f"Invalid subject kind: {subject_kind}")

        start, end = period.bounds()
        invoices = InvoiceOperations.get_for_subject(self.session, subject_kind, subject_id, start, end)
        logger.debug(f"{len(invoices)} invoices for {subject_kind} {subject_id} in {period.label()}")

        campaign_counts: Dict[str, int] = {}
        if subject_kind == "brand":
            campaign_counts = BrandCampaignOperations.count_by_status(
                self.session, start, end, brand_id=subject_id
            )

        return compute_statement_metrics(subject_kind, invoices, campaign_counts, self.policy)

    def calculate_campaign_pl_metrics(self, campaign_id: UUID, period: Period) -> dict[str, Any]:
        """P&L metrics for one campaign over a (possibly widened) window."""
        start, end = period.bounds()

        brand_paid, payment_count = CampaignPaymentOperations.sum_for_campaign(
            self.session, campaign_id, start, end, status="paid"
        )
        commission, commission_count = FinancialTransactionOperations.sum_platform_commission(
            self.session, campaign_id, start, end
        )
        invoiced, invoice_tax, invoice_count = InvoiceOperations.totals_for_campaign(
            self.session, campaign_id, start, end
        )

        logger.debug(
            f"Campaign {campaign_id} {period.label()}: paid={brand_paid} ({payment_count}), "
            f"commission={commission} ({commission_count}), invoiced={invoiced} ({invoice_count})"
        )

        return compute_campaign_pl_metrics(brand_paid, commission, invoiced, invoice_tax)

    def calculate_platform_metrics(self, period: Period) -> dict[str, Any]:
        """Platform revenue metrics for a period."""
        start, end = period.bounds()

        volume, fees, transaction_count = InvoiceOperations.paid_totals(self.session, start, end)
        new_signups = UserOperations.count_created(self.session, start, end)
        new_brands = UserOperations.count_created(self.session, start, end, role="brand")
        new_influencers = UserOperations.count_created(self.session, start, end, role="influencer")
        campaign_counts = BrandCampaignOperations.count_by_status(self.session, start, end)

        return compute_platform_metrics(
            volume,
            fees,
            transaction_count,
            new_signups,
            new_brands,
            new_influencers,
            campaign_counts,
        )
