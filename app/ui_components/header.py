"""Page header and profile form."""
import streamlit as st

from ecg_risk.models import UserProfile

GENDER_OPTIONS = ["", "Male", "Female", "Other"]


def render_page_header():
    st.title("🫀 ECG Heart Risk AI Prediction")
    st.caption("Upload up to four ECG feature files (one row of 20 values each) for a risk estimate and AI advice.")


def render_profile_form() -> UserProfile:
    """
    Render the profile inputs and return the current values.

    Widgets are keyed, so values survive reruns; the batch run snapshots
    whatever is returned here at the moment it starts.
    """
    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        name = st.text_input("Name (optional)", key="profile_name")
    with col2:
        age = st.number_input("Age", min_value=0, max_value=130, value=None, step=1, placeholder="Age", key="profile_age")
    with col3:
        gender = st.selectbox(
            "Gender",
            GENDER_OPTIONS,
            format_func=lambda x: x or "Select gender",
            key="profile_gender",
        )
    history = st.text_area("Medical history (optional)", height=68, key="profile_history")

    return UserProfile(name=name, age=age, gender=gender, history=history)
