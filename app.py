# app.py
import os
import streamlit as st

# MUST be the first Streamlit command in the file
st.set_page_config(
    page_title="Certificate of Completion",
    page_icon="🎓",
    layout="centered"
)

# Imports AFTER set_page_config
from services import config  # noqa: E402
from ui.certificate_page import issue_certificate_ui  # noqa: E402


# Sidebar branding
with st.sidebar:
    if os.path.exists(config.LOGO_PATH):
        st.image(config.LOGO_PATH, width=120)
    st.markdown("## Certificate Generator")
    st.caption(f"Output file: `{config.OUTPUT_PATH}`")

issue_certificate_ui()
