import streamlit as st
from clearpath.calculators import income_breakdown
from clearpath.models import BorrowerSnapshot, QualificationMetrics


def render_summary(metrics: QualificationMetrics):
    """Render the headline numbers for the current scenario."""
    st.header("The Numbers")
    cols = st.columns(4)
    cols[0].metric("Monthly Income", f"${metrics.total_monthly_income:,.2f}")
    cols[1].metric("PITI", f"${metrics.total_piti:,.2f}")
    cols[2].metric("Front DTI", f"{metrics.front_end_dti:.1f}%")
    cols[3].metric("Back DTI", f"{metrics.back_end_dti:.1f}%")

    st.caption(
        f"Loan Amount: ${metrics.loan_amount:,.0f} • LTV: {metrics.ltv:.1f}% • "
        f"Monthly Debts: ${metrics.total_monthly_debts:,.2f}"
    )
    st.caption(
        f"P&I: ${metrics.principal_and_interest:,.2f} • Taxes: ${metrics.monthly_taxes:,.2f} • "
        f"Insurance: ${metrics.monthly_insurance:,.2f} • HOA: ${metrics.monthly_hoa:,.2f}"
    )
    st.caption(
        f"Total Assets: ${metrics.total_assets:,.0f} • Liquid Assets: ${metrics.liquid_assets:,.0f}"
    )
    st.caption(f"Cash to Close: ${metrics.cash_to_close:,.2f}")


def render_income_breakdown(snapshot: BorrowerSnapshot):
    df = income_breakdown(snapshot)
    st.subheader("Income Sources")
    if df.empty:
        st.info("No income entered yet.")
        return df
    st.dataframe(df, hide_index=True)
    excluded = int((~df["Included"].astype(bool)).sum())
    if excluded:
        st.caption(f"{excluded} source(s) excluded from totals (previous employer or co-borrower off).")
    return df
