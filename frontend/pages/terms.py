"""
Terms & Conditions section.
"""
import streamlit as st

from frontend.api_client import get_api_client, APIError
from frontend.ui_helpers import apply
from shared.constants import CUSTOM_TEMPLATE_ID
from shared.schemas import RFQDraft


def render_terms(draft: RFQDraft):
    client = get_api_client()
    draft_id = draft.draft_id
    templates = client.list_terms_templates()

    choices = [CUSTOM_TEMPLATE_ID] + [t.id for t in templates]
    names = {t.id: t.name for t in templates}
    names[CUSTOM_TEMPLATE_ID] = "Custom terms"
    current = draft.terms.selected_template or CUSTOM_TEMPLATE_ID
    picked = st.selectbox("Template", choices, index=choices.index(current) if current in choices else 0,
                          format_func=lambda t: names[t], key=f"terms_tpl_{draft_id}")
    if picked != current:
        apply(client.select_terms_template, draft_id, picked)

    text = st.text_area("Terms & Conditions *", value=draft.terms.terms, height=240, key=f"terms_text_{draft_id}")
    st.caption(f"{len(text)} characters")
    if text != draft.terms.terms and st.button("Save Terms", key=f"save_terms_{draft_id}"):
        apply(client.set_terms, draft_id, text)

    with st.popover("Save as template"):
        name = st.text_input("Template name", key=f"terms_tpl_name_{draft_id}")
        if st.button("Save", key=f"terms_tpl_save_{draft_id}"):
            try:
                template = client.save_terms_template(draft_id, name)
                st.success(f"Saved \"{template.name}\"")
            except APIError as e:
                st.error(f"{e.title}: {e.message}")

    with st.popover("Manage templates"):
        for template in templates:
            st.markdown(f"**{template.name}**")
            new_name = st.text_input("Name", value=template.name, key=f"tn_{template.id}")
            content = st.text_area("Content", value=template.content, height=120, key=f"tc_{template.id}")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Update", key=f"tu_{template.id}"):
                    apply(client.update_terms_template, template.id, new_name, content)
            with col2:
                if st.button("Delete", key=f"td_{template.id}"):
                    apply(client.delete_terms_template, template.id)
            if template.last_used:
                st.caption(f"Last used {template.last_used:%b %d, %Y}")
