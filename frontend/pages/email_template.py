"""
Email Template section.

Subject, header, body and footer may contain {{TOKEN}} placeholders that are
filled per supplier when the RFQ goes out.
"""
import streamlit as st

from frontend.api_client import get_api_client, APIError
from frontend.ui_helpers import apply
from shared.constants import CUSTOM_TEMPLATE_ID
from shared.schemas import RFQDraft, EmailContentUpdate


def _render_email(email):
    st.markdown(f"**Subject:** {email.subject}")
    st.text(email.header)
    st.text(email.body)
    st.text(email.footer)


def render_email_template(draft: RFQDraft):
    client = get_api_client()
    draft_id = draft.draft_id
    email = draft.email
    templates = client.list_email_templates()

    choices = [CUSTOM_TEMPLATE_ID] + [t.id for t in templates]
    names = {t.id: t.name for t in templates}
    names[CUSTOM_TEMPLATE_ID] = "Custom email"
    current = email.selected_template or CUSTOM_TEMPLATE_ID
    picked = st.selectbox("Template", choices, index=choices.index(current) if current in choices else 0,
                          format_func=lambda t: names[t], key=f"email_tpl_{draft_id}")
    if picked != current:
        apply(client.select_email_template, draft_id, picked)

    tab_edit, tab_preview, tab_variables = st.tabs(["Edit", "Preview", "Variables"])

    with tab_edit:
        with st.form(f"email_{draft_id}"):
            subject = st.text_input("Subject *", value=email.subject)
            header = st.text_area("Header", value=email.header, height=80)
            body = st.text_area("Body *", value=email.body, height=200)
            footer = st.text_area("Footer", value=email.footer, height=100)
            if st.form_submit_button("Save Email"):
                apply(client.update_email, draft_id, EmailContentUpdate(
                    subject=subject, header=header, body=body, footer=footer
                ))

        with st.popover("Save as template"):
            name = st.text_input("Template name", key=f"email_tpl_name_{draft_id}")
            if st.button("Save", key=f"email_tpl_save_{draft_id}"):
                try:
                    template = client.save_email_template(draft_id, name)
                    st.success(f"Saved \"{template.name}\"")
                except APIError as e:
                    st.error(f"{e.title}: {e.message}")

    with tab_preview:
        _render_email(client.preview_email(draft_id))
        if draft.suppliers:
            st.markdown("---")
            st.markdown("**Per supplier**")
            for rendered in client.render_supplier_emails(draft_id):
                with st.container(border=True):
                    st.caption(rendered.supplier_name or "Supplier")
                    _render_email(rendered)

    with tab_variables:
        for variable in client.list_email_variables():
            st.markdown(f"`{variable.token}` - {variable.description} (e.g. {variable.sample_value})")

    with st.popover("Manage templates"):
        for template in templates:
            st.markdown(f"**{template.name}** - {template.subject}")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Replace with current email", key=f"eu_{template.id}"):
                    apply(client.update_email_template, template.id, template.name, {
                        "subject": email.subject,
                        "header": email.header,
                        "body": email.body,
                        "footer": email.footer
                    })
            with col2:
                if st.button("Delete", key=f"ed_{template.id}"):
                    apply(client.delete_email_template, template.id)
