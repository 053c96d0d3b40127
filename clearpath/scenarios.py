"""What-if adjustments on top of a borrower snapshot.

Adjusted figures are never computed by a second copy of the math: the
overrides are folded into a new snapshot and handed to
:func:`clearpath.calculators.compute_metrics`.
"""
from __future__ import annotations

import logging
from typing import Dict

from .calculators import compute_metrics
from .models import BorrowerSnapshot, Debt, QualificationMetrics, ScenarioAdjustments
from .presets import DEFAULT_DOWN_PAYMENT_FRACTION

logger = logging.getLogger(__name__)

_PASS_THROUGH = (
    "interest_rate_pct",
    "property_taxes_annual",
    "insurance_annual",
    "hoa_monthly",
)


def current_down_payment_pct(snapshot: BorrowerSnapshot) -> float:
    if snapshot.purchase_price > 0:
        return 100.0 * snapshot.down_payment_amount / snapshot.purchase_price
    return DEFAULT_DOWN_PAYMENT_FRACTION * 100


def apply_adjustments(
    snapshot: BorrowerSnapshot, adjustments: ScenarioAdjustments
) -> BorrowerSnapshot:
    """Return a copy of ``snapshot`` with the overrides applied.

    A home price turns the scenario into a purchase at that price, with the
    down payment taken from the override percentage, else the borrower's
    current percentage, else 3%.  A percentage alone re-derives the down
    payment from the current purchase price.
    """

    update = {}
    for field in _PASS_THROUGH:
        value = getattr(adjustments, field)
        if value is not None:
            update[field] = float(value)

    if adjustments.home_price is not None:
        pct = adjustments.down_payment_pct
        if pct is None:
            pct = current_down_payment_pct(snapshot)
        price = float(adjustments.home_price)
        update.update(
            loan_purpose="Purchase",
            purchase_price=price,
            down_payment_amount=price * pct / 100,
        )
    elif adjustments.down_payment_pct is not None and snapshot.purchase_price > 0:
        update["down_payment_amount"] = (
            snapshot.purchase_price * adjustments.down_payment_pct / 100
        )

    if update:
        logger.debug("Applying scenario overrides: %s", sorted(update))
    return snapshot.model_copy(update=update)


def compute_adjusted_metrics(
    snapshot: BorrowerSnapshot, adjustments: ScenarioAdjustments
) -> QualificationMetrics:
    """Metrics for ``snapshot`` under ``adjustments``."""

    adjusted = apply_adjustments(snapshot, adjustments)
    fraction = None
    if adjustments.down_payment_pct is not None:
        fraction = adjustments.down_payment_pct / 100
    return compute_metrics(adjusted, down_payment_fraction=fraction)


def compare_scenarios(
    snapshot: BorrowerSnapshot, adjustments: ScenarioAdjustments
) -> Dict[str, QualificationMetrics]:
    return {
        "base": compute_metrics(snapshot),
        "adjusted": compute_adjusted_metrics(snapshot, adjustments),
    }


def what_if_scenarios(snapshot: BorrowerSnapshot) -> Dict[str, QualificationMetrics]:
    """Common sensitivity checks a loan officer walks a borrower through."""

    with_debt = snapshot.model_copy(
        update={"debts": list(snapshot.debts) + [Debt(type="Other", monthly_payment=300.0)]}
    )
    more_down = snapshot.model_copy(
        update={"down_payment_amount": snapshot.down_payment_amount + 10000.0}
    )
    higher_rate = snapshot.model_copy(
        update={"interest_rate_pct": snapshot.interest_rate_pct + 0.25}
    )
    return {
        "base": compute_metrics(snapshot),
        "down_payment_plus_10k": compute_metrics(more_down),
        "rate_plus_0.25": compute_metrics(higher_rate),
        "debt_plus_300": compute_metrics(with_debt),
    }
