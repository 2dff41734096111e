import streamlit as st

from core.helpers import format_currency
from core.layout import render_sidebar, show_ai_progress
from core.session_manager import get_ai_calls, get_state
from services.ai_service import extract_invoice

# Page config is set globally in app.py

render_sidebar("pages/finance.py")
state = get_state()
calls = get_ai_calls()

st.title("Finance & General Ledger")
st.caption("AI-assisted accounts payable and real-time GL")

left, right = st.columns([1, 2])

with left:
    st.subheader("Smart Invoice Entry")
    if st.session_state.pop("clear_invoice", False):
        st.session_state.invoice_text = ""
    st.write("Paste OCR text from vendor invoices here. AI will structure it and prepare the GL entry.")
    invoice_text = st.text_area(
        "Invoice text",
        key="invoice_text",
        height=200,
        placeholder="Vendor: MedSupply Corp\nDate: 2023-10-25\nItems: Surgical Gloves (50 boxes) - $500\nTotal: $500",
    )
    if st.button("Analyze & Draft Entry", disabled=not invoice_text.strip() or calls.is_pending("invoice")):
        calls.submit("invoice", extract_invoice, invoice_text)
        st.rerun()

    show_ai_progress("invoice", "Processing...")

    parsed = calls.result("invoice")
    if parsed is not None:
        with st.container(border=True):
            st.markdown(f"**AI Extraction** - {parsed.confidence * 100:.0f}% Match")
            st.write(f"**Vendor:** {parsed.vendor_name}")
            st.write(f"**Date:** {parsed.invoice_date or '-'}")
            st.write(f"**Total:** {format_currency(parsed.total_amount)}")
            for line in parsed.line_items:
                st.caption(f"- {line.description}: {format_currency(line.amount)}")
            if st.button("Post to Ledger"):
                try:
                    txn = state.post_invoice(parsed)
                except ValueError as e:
                    st.error(str(e))
                else:
                    calls.discard("invoice")
                    st.session_state.clear_invoice = True
                    st.toast(f"Invoice posted to General Ledger as {txn['id']}.")
                    st.rerun()

with right:
    st.subheader("General Ledger")
    st.dataframe(
        [
            {
                "Date": row["date"],
                "Description": row["description"],
                "Account": row["account_code"],
                "Debit": format_currency(row["debit"]),
                "Credit": format_currency(row["credit"]),
            }
            for row in state.ledger()
        ],
        use_container_width=True,
        hide_index=True,
    )
