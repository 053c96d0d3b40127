import json

import pytest

from clearpath.calculators import compute_metrics
from clearpath.models import HourlyEmployer, SalariedEmployer
from clearpath.parsing import (
    annualize_salary,
    credit_from_record,
    nz,
    parse_employer,
    parse_flag,
    parse_money,
    parse_rows,
    snapshot_from_record,
)


def test_parse_money_degrades_to_zero():
    assert parse_money(None) == 0.0
    assert parse_money("") == 0.0
    assert parse_money("abc") == 0.0
    assert parse_money(float("nan")) == 0.0
    assert parse_money("inf") == 0.0
    assert parse_money(True) == 0.0
    assert parse_money([1, 2]) == 0.0


def test_parse_money_strips_formatting_and_clips_negatives():
    assert parse_money("$84,000") == 84000.0
    assert parse_money(" 1,250.50 ") == 1250.5
    assert parse_money("-500") == 0.0
    assert parse_money(-12.5) == 0.0


def test_nz_default():
    assert nz("", 7.0) == 7.0
    assert nz("6.25", 7.0) == 6.25


def test_parse_flag_variants():
    assert parse_flag(1) is True
    assert parse_flag(0) is False
    assert parse_flag("true") is True
    assert parse_flag("on") is True
    assert parse_flag("0") is False
    assert parse_flag(None) is False
    assert parse_flag(float("nan")) is False


def test_parse_rows_json_and_garbage():
    assert parse_rows('[{"a": 1}]') == [{"a": 1}]
    assert parse_rows("not json") == []
    assert parse_rows(None) == []
    assert parse_rows({"a": 1}) == []
    assert parse_rows([{"a": 1}, "junk", 3]) == [{"a": 1}]


def test_annualize_salary_frequencies():
    assert annualize_salary(84000, "annual") == 84000
    assert annualize_salary("7,000", "monthly") == 84000
    assert annualize_salary(1000, "weekly") == 52000
    assert annualize_salary(1000, "fortnightly") == 0.0


def test_parse_employer_salary_frequency_wins():
    emp = parse_employer(
        {"pay_type": "salary", "salary_amount": "1000", "salary_frequency": "weekly", "annual_salary": "1"}
    )
    assert isinstance(emp, SalariedEmployer)
    assert emp.annual_salary == 52000
    assert emp.base_monthly() == pytest.approx(52000 / 12)


def test_parse_employer_unknown_frequency_falls_back():
    emp = parse_employer({"salary_amount": "5000", "salary_frequency": "daily", "annual_salary": "60000"})
    assert emp.annual_salary == 60000


def test_parse_employer_hourly_and_default_pay_type():
    hourly = parse_employer(
        {"pay_type": "Hourly", "hourly_rate": "22.50", "hours_per_week": "40", "overtime_monthly": "300"}
    )
    assert isinstance(hourly, HourlyEmployer)
    assert hourly.hourly_rate == 22.5
    assert hourly.overtime_monthly == 300

    default = parse_employer({"annual_salary": "48000"})
    assert isinstance(default, SalariedEmployer)
    assert default.is_previous is False


def test_snapshot_from_stored_record():
    record = {
        "has_coborrower": 1,
        "employers": json.dumps(
            [
                {"pay_type": "salary", "annual_salary": "84000"},
                {"pay_type": "salary", "annual_salary": "120000", "is_previous": True},
            ]
        ),
        "co_employers": [{"pay_type": "hourly", "hourly_rate": "20", "hours_per_week": "30"}],
        "other_income": "[]",
        "co_other_income": [{"type": "Pension", "monthly_amount": "$500"}],
        "assets": [{"type": "401(k)/IRA", "balance": "10000"}, {"type": "Checking", "balance": "2,500"}],
        "debts": [{"type": "Credit Card", "monthly_payment": "75"}],
        "loan_purpose": "refinance",
        "property_value": "400000",
        "current_loan_balance": "250000",
        "cash_out_amount": "",
        "interest_rate": "6.75",
        "property_taxes_annual": None,
    }
    snap = snapshot_from_record(record)
    assert snap.has_co_borrower is True
    assert len(snap.primary_employers) == 2
    assert snap.loan_purpose == "Refinance"
    assert snap.cash_out_amount == 0
    assert snap.interest_rate_pct == 6.75
    assert snap.property_taxes_annual == 0

    m = compute_metrics(snap)
    assert m.monthly_employment_income == pytest.approx(7000)
    assert m.co_monthly_employment_income == pytest.approx(20 * 30 * 4.333)
    assert m.co_monthly_other_income == pytest.approx(500)
    assert m.liquid_assets == 2500
    assert m.loan_amount == 250000


def test_snapshot_from_empty_record():
    snap = snapshot_from_record({})
    assert snap.primary_employers == []
    assert snap.loan_purpose == "Purchase"
    m = compute_metrics(snap)
    assert m.total_monthly_income == 0
    assert m.cash_to_close == 0


def test_credit_from_record():
    credit = credit_from_record({"late_payments_12": "1", "bankruptcy": "", "collections_amount": "$300"})
    assert credit.late_payments_12 is True
    assert credit.bankruptcy == "Never"
    assert credit.collections_amount == 300
