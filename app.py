import streamlit as st

from core.helpers import format_currency
from core.layout import render_sidebar, show_ai_progress
from core.session_manager import get_ai_calls, get_state, init_session_state
from services.ai_service import analyze_financials

SEVERITY_ICONS = {"high": "🔴", "medium": "🟠", "low": "🔵"}


def request_insights(state):
    get_ai_calls().submit("insights", analyze_financials, state.transactions())


def main():
    st.set_page_config(
        page_title="Medius-AI Hospital ERP",
        page_icon="🏥",
        layout="wide",
    )

    init_session_state()
    render_sidebar("app.py")
    state = get_state()
    calls = get_ai_calls()

    cols = st.columns([4, 2])
    with cols[0]:
        st.title("Executive Dashboard")
        st.caption("Real-time hospital performance and AI strategic analysis")
    with cols[1]:
        if st.button("Refresh AI Insights"):
            request_insights(state)
            st.rerun()

    # Kick off the first analysis once per session
    if not st.session_state.get("insights_requested"):
        st.session_state.insights_requested = True
        if state.transactions(limit=1):
            request_insights(state)

    summary = state.summary()
    st.subheader("Overview")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Revenue", format_currency(summary["total_revenue"]))
    c2.metric("Total Expenses", format_currency(summary["total_expenses"]))
    c3.metric("Net Income", format_currency(summary["net_income"]))
    c4.metric("Active Patients", summary["active_patients"])

    if summary["low_stock_items"]:
        st.warning(f"{summary['low_stock_items']} inventory item(s) at or below reorder level.")

    st.write("---")

    left, right = st.columns([3, 2])
    with left:
        st.subheader("Revenue vs Expenses")
        ledger = state.ledger()
        by_date = {}
        for row in ledger:
            day = by_date.setdefault(row["date"], {"revenue": 0.0, "expenses": 0.0})
            if row["type"] == "REVENUE":
                day["revenue"] += row["amount"]
            elif row["type"] == "EXPENSE":
                day["expenses"] += row["amount"]
        if by_date:
            dates = sorted(by_date)
            st.area_chart(
                {
                    "revenue": [by_date[d]["revenue"] for d in dates],
                    "expenses": [by_date[d]["expenses"] for d in dates],
                }
            )
        else:
            st.info("No ledger activity yet.")

    with right:
        st.subheader("AI Strategic Analysis")
        show_ai_progress("insights", "Analyzing the ledger...")
        insights = calls.result("insights", [])
        if not insights:
            st.info("No insights generated yet.")
        for item in insights:
            with st.container(border=True):
                icon = SEVERITY_ICONS.get(item.severity.value, "")
                st.markdown(f"**{item.title}** {icon} `{item.severity.value}`")
                st.write(item.insight)
                st.caption(f"Recommended: {item.actionable}")


if __name__ == "__main__":
    main()
