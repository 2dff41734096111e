import streamlit as st

from core.layout import render_sidebar, show_ai_progress
from core.session_manager import get_ai_calls, get_state
from services.ai_service import forecast_inventory

# Page config is set globally in app.py

render_sidebar("pages/pharmacy.py")
state = get_state()
calls = get_ai_calls()

cols = st.columns([4, 2])
with cols[0]:
    st.title("Pharmacy & Inventory")
    st.caption("Material management and predictive supply chain")
with cols[1]:
    if st.button("Run AI Forecast", disabled=calls.is_pending("forecast")):
        calls.submit("forecast", forecast_inventory, state.inventory())
        st.rerun()

show_ai_progress("forecast", "Forecasting demand...")

forecasts = calls.result("forecast", [])
if forecasts:
    st.subheader("Predictive Demand Analysis")
    cards = st.columns(min(len(forecasts), 3))
    for i, item in enumerate(forecasts):
        with cards[i % len(cards)]:
            with st.container(border=True):
                st.markdown(f"**{item.item_name}**")
                st.metric("Predicted demand", f"{item.predicted_demand:g}")
                st.write(f"Order: **{item.recommended_order:g}**")
                st.caption(f'"{item.reasoning}"')

st.subheader("Current Stock Levels")
st.dataframe(
    [
        {
            "Item Name": i["name"],
            "Category": i["category"],
            "In Stock": i["current_stock"],
            "Reorder Level": i["reorder_level"],
            "Weekly Usage": i["last_usage_rate"],
            "Status": "Low Stock" if i["current_stock"] <= i["reorder_level"] else "OK",
        }
        for i in state.inventory()
    ],
    use_container_width=True,
    hide_index=True,
)
