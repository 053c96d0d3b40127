"""Borrower qualification math.

Everything here is pure: inputs are typed snapshots produced by
:mod:`clearpath.parsing` and outputs are fresh models.  The live preview and
any server-side caller both go through :func:`compute_metrics` so the two can
never disagree.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import pandas as pd

from .models import BorrowerSnapshot, QualificationMetrics
from .presets import (
    AMORTIZATION_MONTHS,
    CLOSING_COST_PCT,
    DEFAULT_DOWN_PAYMENT_FRACTION,
    DTI_TIERS,
    NON_LIQUID_ASSET_TYPES,
    PREPAID_ESCROW_MONTHS,
)

logger = logging.getLogger(__name__)

BREAKDOWN_COLUMNS = [
    "Borrower",
    "Source",
    "Description",
    "PayType",
    "BaseMonthly",
    "VariableMonthly",
    "Monthly",
    "Included",
]


def monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100 / 12


def monthly_payment(principal, annual_rate_pct, months=AMORTIZATION_MONTHS):
    """Fully amortizing monthly principal and interest.

    ``M = L * r(1+r)^n / ((1+r)^n - 1)`` with ``r`` the monthly rate.  A
    non-positive principal or rate yields ``0`` rather than an interest-free
    payment.
    """

    r = monthly_rate(annual_rate_pct)
    if principal <= 0 or r <= 0 or months <= 0:
        return 0.0
    growth = (1 + r) ** months
    return principal * (r * growth) / (growth - 1)


def principal_from_payment(payment, annual_rate_pct, months=AMORTIZATION_MONTHS):
    """Reverse amortization: the loan a given P&I payment supports."""

    r = monthly_rate(annual_rate_pct)
    if payment <= 0 or r <= 0 or months <= 0:
        return 0.0
    growth = (1 + r) ** months
    return payment * (growth - 1) / (r * growth)


def compute_ltv(property_value, loan_amount):
    """Loan-to-value percentage, ``0`` without a property value."""

    if property_value <= 0:
        return 0.0
    return 100.0 * loan_amount / property_value


def dti(obligations, total_income):
    """Debt-to-income as a percentage, ``0`` when there is no income."""

    if total_income <= 0:
        return 0.0
    return 100.0 * obligations / total_income


def employer_monthly_income(employer) -> float:
    return employer.base_monthly() + employer.variable_monthly()


def income_breakdown(snapshot: BorrowerSnapshot) -> pd.DataFrame:
    """One row per employer or other-income entry with its monthly amount.

    Previous employers and, without a co-borrower, every co row are listed
    with ``Included`` set to ``False`` so they stay visible but never reach
    the totals.
    """

    rows = []
    for borrower, employers, others in (
        ("primary", snapshot.primary_employers, snapshot.primary_other_income),
        ("co", snapshot.co_employers, snapshot.co_other_income),
    ):
        active = borrower == "primary" or snapshot.has_co_borrower
        for emp in employers:
            base = emp.base_monthly()
            variable = emp.variable_monthly()
            rows.append(
                {
                    "Borrower": borrower,
                    "Source": "employment",
                    "Description": emp.name,
                    "PayType": emp.pay_type,
                    "BaseMonthly": base,
                    "VariableMonthly": variable,
                    "Monthly": base + variable,
                    "Included": active and not emp.is_previous,
                }
            )
        for inc in others:
            rows.append(
                {
                    "Borrower": borrower,
                    "Source": "other",
                    "Description": inc.type,
                    "PayType": "",
                    "BaseMonthly": inc.monthly_amount,
                    "VariableMonthly": 0.0,
                    "Monthly": inc.monthly_amount,
                    "Included": active,
                }
            )
    if not rows:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)


def income_totals(breakdown: pd.DataFrame) -> Dict[Tuple[str, str], float]:
    """Sum included monthly income by ``(borrower, source)``."""

    totals = {
        (b, s): 0.0 for b in ("primary", "co") for s in ("employment", "other")
    }
    if breakdown.empty:
        return totals
    included = breakdown[breakdown["Included"].astype(bool)]
    grouped = included.groupby(["Borrower", "Source"])["Monthly"].sum()
    for key, value in grouped.items():
        totals[key] = float(value)
    return totals


def asset_totals(assets) -> Tuple[float, float]:
    """Return ``(total, liquid)``; retirement accounts are not liquid."""

    total = 0.0
    liquid = 0.0
    for asset in assets:
        total += asset.balance
        if asset.type not in NON_LIQUID_ASSET_TYPES:
            liquid += asset.balance
    return total, liquid


def loan_terms(snapshot: BorrowerSnapshot) -> Tuple[float, float, float]:
    """Return ``(loan_amount, ltv, property_value_used)`` for the loan purpose."""

    if snapshot.loan_purpose == "Refinance":
        value = snapshot.property_value
        loan = snapshot.current_loan_balance + snapshot.cash_out_amount
    else:
        value = snapshot.purchase_price
        loan = max(0.0, snapshot.purchase_price - snapshot.down_payment_amount)
    return loan, compute_ltv(value, loan), value


def projection_down_payment_fraction(snapshot: BorrowerSnapshot) -> float:
    """Down payment share assumed when projecting max purchase power.

    The borrower's own share when a purchase price is entered, otherwise 3%.
    A share of 100% or more cannot be financed and falls back to 3% as well.
    """

    if snapshot.purchase_price <= 0:
        return DEFAULT_DOWN_PAYMENT_FRACTION
    fraction = snapshot.down_payment_amount / snapshot.purchase_price
    if fraction >= 1:
        logger.debug(
            "Down payment %.2f covers purchase price %.2f; projecting with %.0f%% down",
            snapshot.down_payment_amount,
            snapshot.purchase_price,
            DEFAULT_DOWN_PAYMENT_FRACTION * 100,
        )
        return DEFAULT_DOWN_PAYMENT_FRACTION
    return fraction


def max_purchase_power(
    total_income,
    monthly_debts,
    escrow_monthly,
    target_dti_pct,
    annual_rate_pct,
    down_payment_fraction,
    months=AMORTIZATION_MONTHS,
):
    """Highest price affordable at a back-end DTI ceiling.

    ``escrow_monthly`` is taxes + insurance + HOA.  Returns ``(price, piti)``
    where ``piti`` is the housing payment at that price; both are ``0`` when
    the ceiling leaves nothing for principal and interest.
    """

    if total_income <= 0:
        return 0.0, 0.0
    max_total_payment = total_income * target_dti_pct / 100 - monthly_debts
    max_pi = max_total_payment - escrow_monthly
    if max_pi <= 0 or monthly_rate(annual_rate_pct) <= 0:
        return 0.0, 0.0
    max_loan = principal_from_payment(max_pi, annual_rate_pct, months)
    return max_loan / (1 - down_payment_fraction), max_pi + escrow_monthly


def cash_to_close(snapshot: BorrowerSnapshot, loan_amount, monthly_taxes, monthly_insurance):
    """Return ``(closing_costs, prepaid_items, cash_to_close)``.

    Closing costs are a flat 3% of the loan and prepaids six months of taxes
    and insurance.  A refinance brings no down payment.
    """

    closing = loan_amount * CLOSING_COST_PCT / 100
    prepaids = (monthly_taxes + monthly_insurance) * PREPAID_ESCROW_MONTHS
    if snapshot.loan_purpose == "Refinance":
        logger.debug("Refinance cash to close excludes down payment (estimate only)")
        down = 0.0
    else:
        down = snapshot.down_payment_amount
    return closing, prepaids, down + closing + prepaids


def compute_metrics(
    snapshot: BorrowerSnapshot, down_payment_fraction: Optional[float] = None
) -> QualificationMetrics:
    """Derive every qualification figure for ``snapshot``.

    ``down_payment_fraction`` overrides the share assumed by the max purchase
    projection; what-if scenarios use it when no purchase price is entered.
    """

    totals = income_totals(income_breakdown(snapshot))
    employment = totals[("primary", "employment")]
    co_employment = totals[("co", "employment")]
    other = totals[("primary", "other")]
    co_other = totals[("co", "other")]
    total_income = employment + co_employment + other + co_other
    if total_income <= 0:
        logger.debug("No qualifying income; ratios and max purchase reported as 0")

    total_assets, liquid_assets = asset_totals(snapshot.assets)
    total_debts = sum(d.monthly_payment for d in snapshot.debts)

    loan_amount, ltv, property_value_used = loan_terms(snapshot)
    rate = snapshot.interest_rate_pct
    pi = monthly_payment(loan_amount, rate)
    taxes = snapshot.property_taxes_annual / 12
    insurance = snapshot.insurance_annual / 12
    hoa = snapshot.hoa_monthly
    piti = pi + taxes + insurance + hoa

    if down_payment_fraction is None or not 0 <= down_payment_fraction < 1:
        down_fraction = projection_down_payment_fraction(snapshot)
    else:
        down_fraction = down_payment_fraction
    tiers = {
        t: max_purchase_power(
            total_income, total_debts, taxes + insurance + hoa, t, rate, down_fraction
        )
        for t in DTI_TIERS
    }

    closing, prepaids, cash_needed = cash_to_close(snapshot, loan_amount, taxes, insurance)

    return QualificationMetrics(
        loan_purpose=snapshot.loan_purpose,
        monthly_employment_income=employment,
        co_monthly_employment_income=co_employment,
        monthly_other_income=other,
        co_monthly_other_income=co_other,
        total_monthly_income=total_income,
        annual_income=total_income * 12,
        total_assets=total_assets,
        liquid_assets=liquid_assets,
        total_monthly_debts=total_debts,
        current_dti=dti(total_debts, total_income),
        loan_amount=loan_amount,
        ltv=ltv,
        property_value_used=property_value_used,
        principal_and_interest=pi,
        monthly_taxes=taxes,
        monthly_insurance=insurance,
        monthly_hoa=hoa,
        total_piti=piti,
        front_end_dti=dti(piti, total_income),
        back_end_dti=dti(total_debts + piti, total_income),
        down_payment_fraction=down_fraction,
        max_purchase_43=tiers[43][0],
        piti_43=tiers[43][1],
        max_purchase_45=tiers[45][0],
        piti_45=tiers[45][1],
        max_purchase_50=tiers[50][0],
        piti_50=tiers[50][1],
        closing_costs=closing,
        prepaid_items=prepaids,
        cash_to_close=cash_needed,
    )
