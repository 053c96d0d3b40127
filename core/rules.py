from __future__ import annotations
from typing import Literal, List, Dict, Any, Optional
from pydantic import BaseModel, Field

from clearpath.models import BorrowerSnapshot, CreditHistory, QualificationMetrics
from clearpath.presets import DTI_TIERS, PMI_LTV_THRESHOLD

Flag = Literal["green", "yellow", "red"]


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(
    metrics: QualificationMetrics, snapshot: Optional[BorrowerSnapshot] = None
) -> List[RuleResult]:
    """Advisory findings for a computed scenario.

    ``metrics`` reports ``0`` for ratios when no income is entered; the
    ``NO_INCOME`` finding is how callers tell that apart from a real 0% DTI.
    """

    res: List[RuleResult] = []

    if metrics.total_monthly_income <= 0:
        res.append(
            RuleResult(
                code="NO_INCOME",
                severity="critical",
                message="No qualifying income entered; DTI is not meaningful.",
            )
        )
    else:
        be = metrics.back_end_dti
        for tier in DTI_TIERS:
            if be > tier:
                res.append(
                    RuleResult(
                        code=f"BACK_END_OVER_{tier}",
                        severity="critical" if tier == max(DTI_TIERS) else "warn",
                        message=f"Back-end DTI exceeds {tier}%.",
                        context={"actual": be, "limit": float(tier)},
                    )
                )

    if metrics.loan_amount > 0 and metrics.principal_and_interest <= 0:
        res.append(
            RuleResult(
                code="NO_RATE",
                severity="warn",
                message="Interest rate missing; principal and interest not estimated.",
            )
        )

    if metrics.loan_purpose == "Purchase" and metrics.ltv > PMI_LTV_THRESHOLD:
        res.append(
            RuleResult(
                code="PMI_LIKELY",
                severity="info",
                message="Down payment below 20%; mortgage insurance likely required.",
                context={"ltv": metrics.ltv},
            )
        )

    if (
        snapshot is not None
        and snapshot.loan_purpose == "Purchase"
        and snapshot.purchase_price > 0
        and snapshot.down_payment_amount >= snapshot.purchase_price
    ):
        res.append(
            RuleResult(
                code="DOWN_PAYMENT_EXCEEDS_PRICE",
                severity="warn",
                message="Down payment covers the full purchase price.",
                context={
                    "purchase_price": snapshot.purchase_price,
                    "down_payment": snapshot.down_payment_amount,
                },
            )
        )

    if metrics.loan_purpose == "Refinance":
        res.append(
            RuleResult(
                code="REFI_CASH_TO_CLOSE_ESTIMATE",
                severity="info",
                message="Refinance cash to close is closing costs and prepaids only; confirm payoff and credits.",
            )
        )
    elif metrics.liquid_assets < metrics.cash_to_close:
        res.append(
            RuleResult(
                code="CASH_TO_CLOSE_SHORT",
                severity="warn",
                message="Liquid assets do not cover estimated cash to close.",
                context={
                    "liquid_assets": metrics.liquid_assets,
                    "cash_to_close": metrics.cash_to_close,
                },
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)


def credit_flags(credit: CreditHistory) -> Dict[str, Flag]:
    """Traffic-light flags for the credit section of the interview."""

    def _dated(value: str, recent: str, older: str) -> Flag:
        if value == recent:
            return "red"
        if value == older:
            return "yellow"
        return "green"

    return {
        "late_12": "red" if credit.late_payments_12 else "green",
        "late_24": "yellow" if credit.late_payments_24 else "green",
        "bankruptcy": _dated(credit.bankruptcy, "Within 2 years", "2+ years ago"),
        "foreclosure": _dated(credit.foreclosure, "Within 3 years", "3+ years ago"),
        "collections": "yellow" if credit.collections else "green",
    }
