import streamlit as st

from services import config
from services.certificate_generator import CertificateError, render_certificate


def issue_certificate_ui():
    st.header("🎓 Issue Completion Certificate")
    st.caption("Extra spaces in the name are removed before printing.")

    name = st.text_input("Full name", value="", max_chars=80)

    if st.button("Generate Certificate"):
        try:
            # each session renders into its own temporary file
            data, cert = render_certificate(name)
        except (CertificateError, OSError) as e:
            st.error(f"⚠️ {e}")
            return

        st.success(f"✅ Certificate generated for {cert['student_name'] or 'an unnamed student'} ({cert['issue_date']})")
        st.download_button(
            "⬇ Download Certificate",
            data=data,
            file_name=cert["file_name"],
            mime="application/pdf",
        )

    if config.DEBUG_GRID:
        st.info("CERT_DEBUG_GRID is on: the layout grid is drawn over the page.")
