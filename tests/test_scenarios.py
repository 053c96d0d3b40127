import pytest
from pydantic import ValidationError

from clearpath.calculators import compute_metrics, principal_from_payment
from clearpath.models import BorrowerSnapshot, Debt, SalariedEmployer, ScenarioAdjustments
from clearpath.scenarios import (
    apply_adjustments,
    compare_scenarios,
    compute_adjusted_metrics,
    current_down_payment_pct,
    what_if_scenarios,
)


def _snapshot(**overrides):
    base = dict(
        primary_employers=[SalariedEmployer(annual_salary=120000)],
        debts=[Debt(type="Auto Loan", monthly_payment=500)],
        purchase_price=400000,
        down_payment_amount=40000,
        interest_rate_pct=6.5,
        property_taxes_annual=4800,
        insurance_annual=1800,
        hoa_monthly=50,
    )
    base.update(overrides)
    return BorrowerSnapshot(**base)


def test_empty_adjustments_match_base():
    s = _snapshot()
    adj = ScenarioAdjustments()
    assert adj.is_empty()
    assert compute_adjusted_metrics(s, adj) == compute_metrics(s)


def test_home_price_keeps_current_down_payment_pct():
    s = _snapshot()
    adjusted = apply_adjustments(s, ScenarioAdjustments(home_price=500000))
    assert adjusted.purchase_price == 500000
    assert adjusted.down_payment_amount == pytest.approx(50000)
    assert s.purchase_price == 400000


def test_home_price_with_pct_on_refinance_becomes_purchase():
    s = _snapshot(loan_purpose="Refinance", purchase_price=0, down_payment_amount=0)
    m = compute_adjusted_metrics(s, ScenarioAdjustments(home_price=300000, down_payment_pct=10))
    assert m.loan_purpose == "Purchase"
    assert m.loan_amount == pytest.approx(270000)
    assert m.ltv == pytest.approx(90.0)
    assert m.down_payment_fraction == pytest.approx(0.10)


def test_home_price_without_any_pct_defaults_to_three():
    s = _snapshot(purchase_price=0, down_payment_amount=0)
    assert current_down_payment_pct(s) == pytest.approx(3.0)
    adjusted = apply_adjustments(s, ScenarioAdjustments(home_price=200000))
    assert adjusted.down_payment_amount == pytest.approx(6000)


def test_down_payment_pct_without_price_drives_projection():
    s = _snapshot(purchase_price=0, down_payment_amount=0)
    m = compute_adjusted_metrics(s, ScenarioAdjustments(down_payment_pct=20))
    assert m.down_payment_fraction == pytest.approx(0.20)
    max_pi = 10000 * 0.43 - 500 - 400 - 150 - 50
    assert m.max_purchase_43 == pytest.approx(principal_from_payment(max_pi, 6.5) / 0.8)


def test_rate_and_escrow_overrides():
    s = _snapshot()
    m = compute_adjusted_metrics(
        s,
        ScenarioAdjustments(interest_rate_pct=5.5, property_taxes_annual=6000, hoa_monthly=0),
    )
    assert m.monthly_taxes == pytest.approx(500)
    assert m.monthly_hoa == 0
    assert m.principal_and_interest < compute_metrics(s).principal_and_interest


def test_adjustments_validate_ranges():
    with pytest.raises(ValidationError):
        ScenarioAdjustments(down_payment_pct=100)
    with pytest.raises(ValidationError):
        ScenarioAdjustments(home_price=-1)


def test_compare_scenarios_rate_drop_raises_purchase_power():
    res = compare_scenarios(_snapshot(), ScenarioAdjustments(interest_rate_pct=5.0))
    assert res["adjusted"].max_purchase_45 > res["base"].max_purchase_45


def test_what_if_scenarios_directions():
    res = what_if_scenarios(_snapshot())
    base = res["base"]
    assert res["down_payment_plus_10k"].loan_amount == pytest.approx(base.loan_amount - 10000)
    assert res["rate_plus_0.25"].max_purchase_43 < base.max_purchase_43
    assert res["debt_plus_300"].back_end_dti > base.back_end_dti
    assert res["debt_plus_300"].total_monthly_debts == pytest.approx(800)
