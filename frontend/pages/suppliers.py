"""
Suppliers section.
"""
import pandas as pd
import streamlit as st

from frontend.api_client import get_api_client, APIError
from frontend.ui_helpers import apply, add_selected, selection_picker
from shared.schemas import RFQDraft, NewSupplierRequest, SupplierSearchFilters


def _supplier_results(draft: RFQDraft, suppliers, key: str):
    """Checkbox list of search results; invited suppliers are shown disabled."""
    invited = set(s.id for s in draft.suppliers)
    selection_picker(
        suppliers, key,
        lambda s: f"**{s.name}** - {s.location} · ⭐ {s.rating} · {', '.join(s.category)}",
        disabled_ids=invited
    )


def render_suppliers(draft: RFQDraft):
    client = get_api_client()
    options = client.get_options()
    draft_id = draft.draft_id

    tab_search, tab_advanced, tab_new = st.tabs(["Search", "Advanced Search", "New Supplier"])

    with tab_search:
        term = st.text_input("Search by name, category or location", key=f"sup_search_{draft_id}")
        _supplier_results(draft, client.search_suppliers(term), f"sup_{draft_id}")
        add_selected(client.add_existing_suppliers, draft_id, f"sup_{draft_id}", f"add_sup_{draft_id}")

    with tab_advanced:
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            category = st.selectbox("Category", options.supplier_categories, index=None,
                                    key=f"adv_cat_{draft_id}")
        with col2:
            min_rating = st.selectbox("Min rating", [0.0] + options.rating_filters, key=f"adv_rating_{draft_id}")
        with col3:
            location = st.text_input("Location", key=f"adv_loc_{draft_id}")
        with col4:
            min_years = st.number_input("Min years", min_value=0, value=0, key=f"adv_years_{draft_id}")
        filters = SupplierSearchFilters(
            category=category or "",
            min_rating=min_rating,
            location=location,
            min_years=int(min_years)
        )
        try:
            results = client.advanced_search_suppliers(filters)
        except APIError as e:
            st.error(f"Search failed: {e.message}")
            results = []
        _supplier_results(draft, results, f"adv_{draft_id}")
        add_selected(client.add_existing_suppliers, draft_id, f"adv_{draft_id}", f"add_adv_{draft_id}")

    with tab_new:
        with st.form(f"new_supplier_{draft_id}", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                name = st.text_input("Company Name *")
                email = st.text_input("Email *")
                phone = st.text_input("Phone")
            with col2:
                location = st.text_input("Location")
                categories = st.multiselect("Categories", options.supplier_categories)
                years = st.number_input("Years in business", min_value=0, value=0)
            description = st.text_area("Description", height=68)
            certifications = st.text_input("Certifications (comma separated)")
            if st.form_submit_button("Add Supplier"):
                apply(client.create_supplier, draft_id, NewSupplierRequest(
                    name=name,
                    email=email,
                    phone=phone,
                    location=location,
                    category=categories,
                    description=description,
                    certifications=[c.strip() for c in certifications.split(",") if c.strip()],
                    years_in_business=int(years)
                ))

    if not draft.suppliers:
        st.info("No suppliers invited yet.")
        return

    frame = pd.DataFrame([
        {
            "Name": s.name,
            "Email": s.email,
            "Location": s.location,
            "Rating": s.rating,
            "Source": s.source.value
        }
        for s in draft.suppliers
    ])
    st.dataframe(frame, use_container_width=True, hide_index=True)

    for supplier in draft.suppliers:
        if st.button(f"Remove {supplier.name}", key=f"rm_sup_{supplier.id}"):
            apply(client.remove_supplier, draft_id, supplier.id)
