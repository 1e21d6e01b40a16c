"""
Streamlit Frontend Application.

This is the main entry point for the frontend.
All backend communication goes through the API client.
"""
import streamlit as st
import sys
from pathlib import Path

# Add project root to path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from frontend.api_client import get_api_client, APIError
from frontend.pages.new_rfq import render_new_rfq


# Page config
st.set_page_config(
    page_title="RFQ Builder",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .stButton button {
        border-radius: 8px;
    }
    div[data-testid="stSidebarNav"] {
        display: none;
    }
</style>
""", unsafe_allow_html=True)


def main():
    """Main application entry point."""
    client = get_api_client()

    with st.sidebar:
        st.markdown("## 📝 RFQ Builder")
        st.markdown("---")

        # Backend status
        health = client.health_check()
        if health.get("status") == "healthy":
            st.success("✅ Backend connected")
        else:
            st.error("❌ Backend offline")
            st.markdown("Start with:")
            st.code("python -m uvicorn backend.main:app --reload", language="bash")
            return

        st.markdown("---")

        # Draft picker
        try:
            drafts = client.list_drafts().drafts
        except APIError as e:
            st.error(f"Failed to load drafts: {e.message}")
            drafts = []

        if st.button("➕ New RFQ", use_container_width=True):
            st.session_state.draft_id = client.create_draft().draft.draft_id
            st.rerun()

        for summary in drafts:
            label = f"{summary.name} ({summary.percent_display}%)"
            is_current = st.session_state.get("draft_id") == summary.draft_id
            if st.button(label, key=f"draft_{summary.draft_id}", use_container_width=True,
                         type="primary" if is_current else "secondary"):
                st.session_state.draft_id = summary.draft_id
                st.rerun()

    if "draft_id" not in st.session_state:
        st.session_state.draft_id = client.create_draft().draft.draft_id

    render_new_rfq(st.session_state.draft_id)


if __name__ == "__main__":
    main()
