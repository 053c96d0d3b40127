import streamlit as st
from pydantic import ValidationError

from clearpath.models import BorrowerSnapshot, QualificationMetrics, ScenarioAdjustments
from clearpath.presets import DTI_TIERS
from clearpath.scenarios import compute_adjusted_metrics, what_if_scenarios


def _optional(label: str, key: str):
    """Number input left blank to keep the borrower's value; ``0`` applies."""
    return st.number_input(label, value=None, min_value=0.0, key=key)


def render_tiers(metrics: QualificationMetrics):
    cols = st.columns(len(DTI_TIERS))
    for col, tier in zip(cols, DTI_TIERS):
        price = getattr(metrics, f"max_purchase_{tier}")
        piti = getattr(metrics, f"piti_{tier}")
        col.metric(f"At {tier}% DTI", f"${price:,.0f}")
        col.caption(f"PITI: ${piti:,.2f}/mo")


def render_max_purchase_view(snapshot: BorrowerSnapshot, metrics: QualificationMetrics):
    """Render max purchase power with a what-if adjustment panel."""
    st.header("Max Purchase Power")
    render_tiers(metrics)
    st.caption(f"Assumes {metrics.down_payment_fraction * 100:.1f}% down, 30-year fixed.")

    with st.expander("Adjust Scenario"):
        values = dict(
            home_price=_optional("Home Price", "adj_home_price"),
            down_payment_pct=_optional("Down Payment %", "adj_down_pct"),
            interest_rate_pct=_optional("Rate %", "adj_rate"),
            property_taxes_annual=_optional("Taxes (annual)", "adj_taxes"),
            insurance_annual=_optional("HOI (annual)", "adj_hoi"),
            hoa_monthly=_optional("HOA (monthly)", "adj_hoa"),
        )
        try:
            adj = ScenarioAdjustments(**values)
        except ValidationError:
            st.warning("Down payment % must be below 100; showing the borrower's figures.")
            adj = ScenarioAdjustments()
    if not adj.is_empty():
        adjusted = compute_adjusted_metrics(snapshot, adj)
        st.subheader("Adjusted")
        render_tiers(adjusted)
        st.caption(
            f"Adjusted Loan: ${adjusted.loan_amount:,.0f} • LTV: {adjusted.ltv:.1f}% • "
            f"PITI: ${adjusted.total_piti:,.2f} • Back DTI: {adjusted.back_end_dti:.1f}%"
        )

    c1, c2, c3 = st.columns(3)
    with c1:
        more_down = st.checkbox("Increase down payment by $10k", key="mp_more_down")
    with c2:
        more_rate = st.checkbox("Increase rate by 0.25%", key="mp_more_rate")
    with c3:
        more_debt = st.checkbox("Add $300 monthly debt", key="mp_more_debt")

    checked = [
        (label, key)
        for on, label, key in (
            (more_down, "+$10k Down", "down_payment_plus_10k"),
            (more_rate, "+0.25% Rate", "rate_plus_0.25"),
            (more_debt, "+$300 Debt", "debt_plus_300"),
        )
        if on
    ]
    if checked:
        scenarios = what_if_scenarios(snapshot)
        for label, key in checked:
            alt = scenarios[key]
            st.caption(
                f"What-If ({label}) Max at 43%: ${alt.max_purchase_43:,.0f} • "
                f"PITI: ${alt.total_piti:,.2f} • Back DTI: {alt.back_end_dti:.1f}%"
            )
