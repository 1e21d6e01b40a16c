"""
Items section.

Items come from the catalog, from open requests, or are typed in by hand.
"""
import streamlit as st

from frontend.api_client import get_api_client
from frontend.ui_helpers import apply, add_selected, grouped_frame, group_by_picker, selection_picker
from shared.schemas import RFQDraft, NewItemRequest, ItemUpdate

ITEM_COLUMNS = ["name", "description", "quantity", "unit", "category", "source"]


def _entry_label(entry):
    return f"**{entry.name}** - {entry.description} ({entry.category}, {entry.unit})"


def render_items(draft: RFQDraft):
    client = get_api_client()
    options = client.get_options()
    draft_id = draft.draft_id

    tab_catalog, tab_requests, tab_new = st.tabs(["From Catalog", "From Requests", "New Item"])

    with tab_catalog:
        selection_picker(client.list_catalog_items(), f"cat_{draft_id}", _entry_label)
        add_selected(client.add_catalog_items, draft_id, f"cat_{draft_id}", f"add_cat_{draft_id}")

    with tab_requests:
        selection_picker(client.list_open_requests(), f"req_{draft_id}", _entry_label)
        add_selected(client.add_request_items, draft_id, f"req_{draft_id}", f"add_req_{draft_id}")

    with tab_new:
        with st.form(f"new_item_{draft_id}", clear_on_submit=True):
            name = st.text_input("Name *")
            description = st.text_area("Description", height=68)
            col1, col2, col3 = st.columns(3)
            with col1:
                quantity = st.number_input("Quantity", min_value=1, value=1)
            with col2:
                unit = st.selectbox("Unit", options.units)
            with col3:
                category = st.selectbox("Category", options.item_categories, index=None)
            specifications = st.text_area("Specifications", height=68)
            if st.form_submit_button("Add Item"):
                apply(client.create_item, draft_id, NewItemRequest(
                    name=name,
                    description=description,
                    quantity=int(quantity),
                    unit=unit,
                    category=category or "",
                    specifications=specifications
                ))

    if not draft.items:
        st.info("No items added yet.")
        return

    field = group_by_picker("Group by", options.item_group_fields, draft.items_group_by, f"item_group_{draft_id}")
    if field != draft.items_group_by:
        apply(client.group_items, draft_id, field)

    display = client.display_items(draft_id)
    st.dataframe(grouped_frame(display, ITEM_COLUMNS), use_container_width=True, hide_index=True)

    with st.popover("Edit items"):
        for item in draft.items:
            col1, col2, col3, col4 = st.columns([3, 1, 1, 1])
            with col1:
                st.markdown(f"**{item.name}** ({item.source.value})")
            with col2:
                quantity = st.number_input("Qty", min_value=1, value=item.quantity,
                                           key=f"qty_{item.id}", label_visibility="collapsed")
            with col3:
                if quantity != item.quantity and st.button("Update", key=f"upd_{item.id}"):
                    apply(client.update_item, draft_id, item.id, ItemUpdate(quantity=int(quantity)))
            with col4:
                if st.button("Remove", key=f"rm_{item.id}"):
                    apply(client.remove_item, draft_id, item.id)
