"""
Save as Template dialog.

Shows what the template will contain and saves the whole draft under a name.
"""
import streamlit as st

from frontend.api_client import get_api_client, APIError
from frontend.ui_helpers import flash


def render_save_template(draft_id: str):
    client = get_api_client()

    with st.container(border=True):
        st.subheader("Save as Template")
        st.caption("Save this RFQ configuration as a reusable template.")

        with st.form(f"save_template_{draft_id}"):
            name = st.text_input("Template Name *", placeholder="e.g. Office Equipment RFQ")
            description = st.text_area("Description", height=68)

            st.markdown("**Template will include:**")
            for summary in client.get_summary(draft_id):
                st.markdown(f"*{summary.name}*")
                for line in summary.lines:
                    st.caption(line)

            save, cancel = st.columns(2)
            with save:
                submitted = st.form_submit_button("Save Template", type="primary")
            with cancel:
                cancelled = st.form_submit_button("Cancel")

        if cancelled:
            st.session_state.show_save_template = False
            st.rerun()

        if submitted:
            with st.spinner("Saving template..."):
                try:
                    result = client.save_rfq_template(draft_id, name, description)
                except APIError as e:
                    st.error(f"{e.title}: {e.message}")
                    return
            flash(result.notice)
            st.session_state.show_save_template = False
            st.rerun()
