"""
New RFQ Page.

Header with progress, one card per wizard section, and the final actions.
"""
import streamlit as st

from frontend.api_client import get_api_client, APIError
from frontend.ui_helpers import show_notice, show_pending_notice
from frontend.pages.general_details import render_general_details
from frontend.pages.items import render_items
from frontend.pages.questionnaire import render_questionnaire
from frontend.pages.suppliers import render_suppliers
from frontend.pages.terms import render_terms
from frontend.pages.email_template import render_email_template
from frontend.pages.save_template import render_save_template

SECTION_ICONS = {
    "general": "📄",
    "items": "📦",
    "questionnaire": "❓",
    "suppliers": "👥",
    "terms": "🏢",
    "email": "✉️"
}

SECTION_RENDERERS = {
    "general": render_general_details,
    "items": render_items,
    "questionnaire": render_questionnaire,
    "suppliers": render_suppliers,
    "terms": render_terms,
    "email": render_email_template
}


def render_new_rfq(draft_id: str):
    """Render the whole RFQ wizard for one draft."""
    client = get_api_client()

    try:
        response = client.get_draft(draft_id)
    except APIError as e:
        if e.status_code == 404:
            # Backend restarted; drafts are in memory only
            st.session_state.draft_id = client.create_draft().draft.draft_id
            st.rerun()
        st.error(f"Failed to load draft: {e.message}")
        return

    draft = response.draft
    progress = response.progress

    # Header
    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        st.title("Create New RFQ")
        st.caption("Build your request for quotation from scratch")
    with col2:
        st.markdown(f"**Progress:** {progress.percent_display}%")
        st.progress(progress.percent_display / 100)
    with col3:
        if st.button("💾 Save as Template", disabled=not progress.can_save_template):
            st.session_state.show_save_template = True

    show_pending_notice()

    if st.session_state.get("show_save_template"):
        render_save_template(draft_id)

    # Sections
    for status in progress.sections:
        icon = SECTION_ICONS.get(status.section_id, "")
        badge = " ✅ Complete" if status.completed else ""
        with st.expander(f"{icon} {status.title}{badge}", expanded=not status.completed):
            st.caption(status.description)
            SECTION_RENDERERS[status.section_id](draft)

    # Actions
    st.markdown("---")
    _, col_save, col_create = st.columns([4, 1, 1])
    with col_save:
        if st.button("Save Draft", use_container_width=True):
            with st.spinner("Saving..."):
                try:
                    show_notice(client.save_draft(draft_id).notice)
                except APIError as e:
                    st.error(f"Failed to save draft: {e.message}")
    with col_create:
        if st.button("Create RFQ", type="primary", use_container_width=True,
                     disabled=not progress.can_create_rfq):
            try:
                result = client.create_rfq(draft_id)
                show_notice(result.notice)
                st.json(result.rfq)
            except APIError as e:
                st.error(f"{e.title}: {e.message}")
