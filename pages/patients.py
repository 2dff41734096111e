import streamlit as st

from core.layout import render_sidebar
from core.session_manager import get_state
from models.enums import Gender, PatientStatus

# Page config is set globally in app.py

render_sidebar("pages/patients.py")
state = get_state()

st.title("Patient Management")
st.write("Register admissions and browse patient records.")

INSURANCE_OPTIONS = ["Private", "National Health", "Self Pay"]

with st.expander("Register Patient"):
    with st.form("patient_form", clear_on_submit=True):
        name = st.text_input("Full Name", placeholder="John Doe")
        c1, c2 = st.columns(2)
        with c1:
            age = st.number_input("Age", min_value=0, max_value=130, step=1)
        with c2:
            gender = st.selectbox("Gender", Gender.values())
        status = st.selectbox("Admission Type", [PatientStatus.OUTPATIENT.value, PatientStatus.INPATIENT.value])
        insurance = st.selectbox("Insurance Provider", INSURANCE_OPTIONS)
        submitted = st.form_submit_button("Register & Bill")

        if submitted:
            try:
                patient, fee = state.register_patient(
                    name=name,
                    age=int(age),
                    gender=gender,
                    status=status,
                    insurance_provider=insurance,
                )
            except ValueError as e:
                st.error(str(e))
            else:
                st.success(
                    f"Patient registered! ID: {patient['id']}. "
                    f"Registration fee posted as {fee['id']}."
                )

# Search bar
search_query = st.text_input("Search by name or patient ID", placeholder="e.g., Sarah or P-1002")
patients = state.search_patients(search_query)

if not patients:
    st.info("No patients found.")
    st.stop()

st.dataframe(
    [
        {
            "Patient ID": p["id"],
            "Name": p["name"],
            "Age/Gender": f"{p['age']} / {p['gender']}",
            "Admission": p["admission_date"],
            "Status": p["status"],
            "Insurance": p["insurance_provider"] or "-",
        }
        for p in patients
    ],
    use_container_width=True,
    hide_index=True,
)
