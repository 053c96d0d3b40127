import json
import streamlit as st

from clearpath import __version__
from clearpath.calculators import compute_metrics
from clearpath.parsing import credit_from_record, snapshot_from_record
from clearpath.presets import DISCLAIMER
from ui.dashboard import render_dashboard_view
from ui.max_purchase import render_max_purchase_view
from ui.summary import render_income_breakdown, render_summary

# Starting record for a fresh session; same shape the intake form saves.
SAMPLE_BORROWER = {
    "has_coborrower": False,
    "employers": [
        {
            "employer_name": "Acme Corp",
            "pay_type": "salary",
            "salary_amount": "84000",
            "salary_frequency": "annual",
            "is_previous": False,
        }
    ],
    "other_income": [],
    "co_employers": [],
    "co_other_income": [],
    "assets": [
        {"type": "Checking", "institution": "", "balance": 25000},
        {"type": "401(k)/IRA", "institution": "", "balance": 40000},
    ],
    "debts": [{"type": "Auto Loan", "creditor": "", "balance": 12000, "monthly_payment": 400}],
    "loan_purpose": "Purchase",
    "purchase_price": 350000,
    "down_payment_amount": 17500,
    "interest_rate": 6.5,
    "property_taxes_annual": 3000,
    "insurance_annual": 1200,
    "hoa_monthly": 0,
}


def render_borrower_sidebar():
    """Sidebar editor holding the raw borrower record as JSON.

    Returns the parsed record, or ``None`` when the JSON does not parse.
    """
    st.session_state.setdefault("borrower_record", SAMPLE_BORROWER)
    if "borrower_json" not in st.session_state:
        st.session_state["borrower_json"] = json.dumps(
            st.session_state["borrower_record"], indent=2
        )
    st.sidebar.header("Borrower Record")
    raw = st.sidebar.text_area("Borrower JSON", key="borrower_json", height=400)
    try:
        record = json.loads(raw)
    except ValueError as exc:
        st.sidebar.error(f"Invalid JSON: {exc}")
        return None
    if not isinstance(record, dict):
        st.sidebar.error("Borrower JSON must be an object.")
        return None
    st.session_state["borrower_record"] = record
    return record


def render_app():
    st.title("Borrower Qualification")
    record = render_borrower_sidebar()
    if record is None:
        st.error("Fix the borrower record to see qualification figures.")
        return None
    snapshot = snapshot_from_record(record)
    metrics = compute_metrics(snapshot)
    st.session_state["metrics"] = metrics.model_dump(by_alias=True)

    render_summary(metrics)
    render_income_breakdown(snapshot)
    render_max_purchase_view(snapshot, metrics)
    render_dashboard_view(metrics, snapshot, credit_from_record(record))
    st.caption(f"v{__version__} • {DISCLAIMER}")
    return metrics


if __name__ == "__main__":
    st.set_page_config(page_title="Borrower Qualification", layout="wide")
    render_app()
