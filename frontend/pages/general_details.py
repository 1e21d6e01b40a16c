"""
General Details section.
"""
import streamlit as st

from frontend.api_client import get_api_client
from frontend.ui_helpers import apply
from shared.constants import DetailLevel
from shared.schemas import RFQDraft, GeneralDetailsUpdate


def _index(options, value):
    return options.index(value) if value in options else None


def render_general_details(draft: RFQDraft):
    """Basic information form plus the advanced multi-round settings."""
    client = get_api_client()
    options = client.get_options()
    general = draft.general
    key = draft.draft_id

    with st.form(f"general_{key}"):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("RFQ Name *", value=general.name, placeholder="Enter RFQ name")
            assignee = st.text_input("Assignee *", value=general.assignee, placeholder="Enter assignee")
            budget = st.selectbox("Budget *", options.budgets, index=_index(options.budgets, general.budget),
                                  placeholder="Select budget")
            location = st.text_input("Location *", value=general.location, placeholder="Enter location")
        with col2:
            requesters = st.text_input("Requesters *", value=general.requesters, placeholder="Enter requesters")
            project = st.selectbox("Project *", options.projects, index=_index(options.projects, general.project),
                                   placeholder="Select project")
            department = st.text_input("Department *", value=general.department, placeholder="Enter department")
            delivery_date = st.date_input("Expected Delivery Date", value=general.expected_delivery_date)

        delivery_address = st.text_area("Delivery Address", value=general.delivery_address, height=80)

        col3, col4 = st.columns(2)
        with col3:
            currency = st.selectbox("Currency", options.currencies,
                                    index=_index(options.currencies, general.currency) or 0)
            allow_multi = st.checkbox("Allow multiple currencies", value=general.allow_multiple_currencies)
        with col4:
            payment_terms = st.selectbox("Payment Terms", options.payment_terms,
                                         index=_index(options.payment_terms, general.payment_terms),
                                         placeholder="Select payment terms")

        st.markdown("**Advanced Settings**")
        with st.container(border=True):
            levels = [level.value for level in DetailLevel]
            budget_level = st.radio("Budget level", levels, index=levels.index(general.budget_level.value),
                                    horizontal=True)
            delivery_level = st.radio("Delivery date level", levels,
                                      index=levels.index(general.delivery_date_level.value), horizontal=True)
            multi_round = st.checkbox("Enable multi-round RFQ", value=general.multi_round_enabled)
            rounds = st.selectbox("Number of rounds (max 3)", options.round_options,
                                  index=_index(options.round_options, general.number_of_rounds) or 0)
            auto_elim = st.checkbox("Automatic supplier elimination", value=general.auto_elimination_enabled)
            to_remove = st.number_input("Suppliers to remove per round", min_value=1, max_value=10,
                                        value=general.suppliers_to_remove)

        if st.form_submit_button("Save General Details"):
            updates = GeneralDetailsUpdate(
                name=name,
                requesters=requesters,
                assignee=assignee,
                project=project or "",
                budget=budget or "",
                department=department,
                location=location,
                delivery_address=delivery_address,
                expected_delivery_date=delivery_date,
                currency=currency,
                allow_multiple_currencies=allow_multi,
                payment_terms=payment_terms or "",
                budget_level=budget_level,
                delivery_date_level=delivery_level,
                multi_round_enabled=multi_round,
                number_of_rounds=rounds,
                auto_elimination_enabled=auto_elim,
                suppliers_to_remove=int(to_remove)
            )
            apply(client.update_general, draft.draft_id, updates)
