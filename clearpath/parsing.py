"""Parse stored borrower records into typed snapshots.

Intake form values arrive as strings (``"$84,000"``, ``""``, ``"7.25"``) or as
JSON text when list columns come straight out of the database.  Everything is
coerced once here so the calculators only ever see floats.
"""
from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Mapping

from .models import (
    Asset,
    BorrowerSnapshot,
    CreditHistory,
    Debt,
    HourlyEmployer,
    OtherIncome,
    SalariedEmployer,
)
from .presets import SALARY_FREQUENCIES

logger = logging.getLogger(__name__)

_CURRENCY_CHARS = str.maketrans("", "", "$,% \t")
_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Mirrors the spreadsheet ``NZ()`` function: ``None``, blanks, ``NaN`` and
    anything that does not look like a number become ``default``.
    """

    if x is None or isinstance(x, bool):
        return default
    if isinstance(x, str):
        text = x.translate(_CURRENCY_CHARS)
        if not text:
            return default
        x = text
    try:
        value = float(x)
    except (TypeError, ValueError):
        logger.debug("Unparseable numeric value %r treated as %s", x, default)
        return default
    if math.isnan(value) or math.isinf(value):
        return default
    return value


def parse_money(x) -> float:
    """Money amount, never negative; missing or unparseable is ``0``."""
    value = nz(x)
    if value < 0:
        logger.debug("Negative amount %r clipped to 0", x)
        return 0.0
    return value


def parse_rate(x) -> float:
    """Annual percentage rate as entered (``6.5`` means 6.5%)."""
    return parse_money(x)


def parse_flag(x) -> bool:
    if isinstance(x, bool):
        return x
    if x is None:
        return False
    if isinstance(x, (int, float)):
        return not math.isnan(x) and x != 0
    return str(x).strip().lower() in _TRUE_STRINGS


def parse_rows(value) -> List[Dict[str, Any]]:
    """Return a list of row mappings from a list or a JSON-encoded column."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            logger.debug("Malformed JSON list column ignored: %.60r", value)
            return []
    if not isinstance(value, list):
        return []
    rows = []
    for row in value:
        if isinstance(row, Mapping):
            rows.append(dict(row))
        else:
            logger.debug("Skipping non-mapping row %r", row)
    return rows


def annualize_salary(amount, frequency) -> float:
    """Normalize a salary amount entered per year, month or week to annual."""
    factor = SALARY_FREQUENCIES.get(str(frequency or "annual").strip().lower())
    if factor is None:
        return 0.0
    return parse_money(amount) * factor


def parse_employer(row: Mapping[str, Any]):
    """Build a salaried or hourly employer from an intake form row.

    Rows without a ``pay_type`` are salaried, which is how the form creates
    them.  When ``salary_amount`` is present it wins over ``annual_salary``
    unless its frequency is unknown.
    """

    shared = dict(
        name=str(row.get("employer_name") or row.get("name") or ""),
        overtime_monthly=parse_money(row.get("overtime_monthly")),
        bonus_monthly=parse_money(row.get("bonus_monthly")),
        commission_monthly=parse_money(row.get("commission_monthly")),
        is_previous=parse_flag(row.get("is_previous")),
    )
    pay_type = str(row.get("pay_type") or "salary").strip().lower()
    if pay_type == "salary":
        annual = parse_money(row.get("annual_salary"))
        if row.get("salary_amount") not in (None, ""):
            frequency = str(row.get("salary_frequency") or "annual").strip().lower()
            if frequency in SALARY_FREQUENCIES:
                annual = annualize_salary(row.get("salary_amount"), frequency)
            else:
                logger.debug("Unknown salary frequency %r; using annual_salary", frequency)
        return SalariedEmployer(annual_salary=annual, **shared)
    return HourlyEmployer(
        hourly_rate=parse_money(row.get("hourly_rate")),
        hours_per_week=parse_money(row.get("hours_per_week")),
        **shared,
    )


def parse_other_income(row: Mapping[str, Any]) -> OtherIncome:
    return OtherIncome(
        type=str(row.get("type") or ""),
        monthly_amount=parse_money(row.get("monthly_amount")),
    )


def parse_asset(row: Mapping[str, Any]) -> Asset:
    return Asset(
        type=str(row.get("type") or ""),
        institution=str(row.get("institution") or ""),
        balance=parse_money(row.get("balance")),
    )


def parse_debt(row: Mapping[str, Any]) -> Debt:
    return Debt(
        type=str(row.get("type") or ""),
        creditor=str(row.get("creditor") or ""),
        balance=parse_money(row.get("balance")),
        monthly_payment=parse_money(row.get("monthly_payment")),
    )


def parse_loan_purpose(x) -> str:
    return "Refinance" if str(x or "").strip().lower() == "refinance" else "Purchase"


def snapshot_from_record(record: Mapping[str, Any]) -> BorrowerSnapshot:
    """Convert a stored borrower record into a :class:`BorrowerSnapshot`.

    ``record`` uses the intake form's keys.  Unknown keys are ignored and
    nothing here raises for bad values; they degrade to zero or empty.
    """

    return BorrowerSnapshot(
        has_co_borrower=parse_flag(record.get("has_coborrower")),
        primary_employers=[parse_employer(r) for r in parse_rows(record.get("employers"))],
        co_employers=[parse_employer(r) for r in parse_rows(record.get("co_employers"))],
        primary_other_income=[
            parse_other_income(r) for r in parse_rows(record.get("other_income"))
        ],
        co_other_income=[
            parse_other_income(r) for r in parse_rows(record.get("co_other_income"))
        ],
        assets=[parse_asset(r) for r in parse_rows(record.get("assets"))],
        debts=[parse_debt(r) for r in parse_rows(record.get("debts"))],
        loan_purpose=parse_loan_purpose(record.get("loan_purpose")),
        purchase_price=parse_money(record.get("purchase_price")),
        down_payment_amount=parse_money(record.get("down_payment_amount")),
        property_value=parse_money(record.get("property_value")),
        current_loan_balance=parse_money(record.get("current_loan_balance")),
        cash_out_amount=parse_money(record.get("cash_out_amount")),
        interest_rate_pct=parse_rate(record.get("interest_rate")),
        property_taxes_annual=parse_money(record.get("property_taxes_annual")),
        insurance_annual=parse_money(record.get("insurance_annual")),
        hoa_monthly=parse_money(record.get("hoa_monthly")),
    )


def credit_from_record(record: Mapping[str, Any]) -> CreditHistory:
    return CreditHistory(
        late_payments_12=parse_flag(record.get("late_payments_12")),
        late_payments_24=parse_flag(record.get("late_payments_24")),
        bankruptcy=str(record.get("bankruptcy") or "Never"),
        foreclosure=str(record.get("foreclosure") or "Never"),
        collections=parse_flag(record.get("collections")),
        collections_amount=parse_money(record.get("collections_amount")),
    )
