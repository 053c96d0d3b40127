import streamlit as st
from core.rules import credit_flags, evaluate_rules

_FLAG_ICONS = {"green": "🟢", "yellow": "🟡", "red": "🔴"}
_FLAG_LABELS = {
    "late_12": "Late Payments (12 mo)",
    "late_24": "Late Payments (24 mo)",
    "bankruptcy": "Bankruptcy",
    "foreclosure": "Foreclosure",
    "collections": "Collections",
}


def render_dashboard_view(metrics, snapshot=None, credit=None):
    """Render rule evaluations and credit flags."""
    st.header("Dashboard")
    results = evaluate_rules(metrics, snapshot)
    for r in results:
        if r.severity == "critical":
            st.error(f"[{r.code}] {r.message}")
        elif r.severity == "warn":
            st.warning(f"[{r.code}] {r.message}")
        else:
            st.info(f"[{r.code}] {r.message}")

    if credit is not None:
        st.subheader("Credit")
        for key, color in credit_flags(credit).items():
            st.markdown(f"{_FLAG_ICONS[color]} {_FLAG_LABELS[key]}")
    return results
