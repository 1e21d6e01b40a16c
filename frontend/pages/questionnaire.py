"""
Questionnaire section.
"""
import streamlit as st

from frontend.api_client import get_api_client
from frontend.ui_helpers import apply, add_selected, grouped_frame, group_by_picker, selection_picker
from shared.constants import ScoringType
from shared.schemas import RFQDraft, CardSettingsUpdate

CARD_COLUMNS = ["name", "scoring_type", "scoring_weight", "max_score", "group"]


def _card_settings(client, draft_id: str, card):
    with st.form(f"card_{draft_id}_{card.id}"):
        st.markdown(f"**{card.name}** - {card.description}")
        for question in card.questions:
            st.caption(f"• {question}")
        col1, col2, col3, col4 = st.columns(4)
        types = [t.value for t in ScoringType]
        with col1:
            scoring_type = st.selectbox("Scoring", types, index=types.index(card.scoring_type.value),
                                        key=f"type_{card.id}")
        with col2:
            weight = st.number_input("Weight %", min_value=1, max_value=100, value=card.scoring_weight,
                                     key=f"weight_{card.id}")
        with col3:
            max_score = st.number_input("Max score", min_value=1, max_value=1000, value=card.max_score,
                                        key=f"max_{card.id}")
        with col4:
            group = st.text_input("Group", value=card.group or "", key=f"group_{card.id}")
        save, remove = st.columns(2)
        with save:
            if st.form_submit_button("Save"):
                apply(client.update_card, draft_id, card.id, CardSettingsUpdate(
                    scoring_type=scoring_type,
                    scoring_weight=int(weight),
                    max_score=int(max_score),
                    group=group
                ))
        with remove:
            if st.form_submit_button("Remove"):
                apply(client.remove_card, draft_id, card.id)


def render_questionnaire(draft: RFQDraft):
    client = get_api_client()
    options = client.get_options()
    draft_id = draft.draft_id
    questionnaire = draft.questionnaire

    show_before = st.toggle("Show questionnaire before RFQ details",
                            value=questionnaire.show_before_rfq_details, key=f"show_before_{draft_id}")
    if show_before != questionnaire.show_before_rfq_details:
        apply(client.set_show_before, draft_id, show_before)

    with st.popover("➕ Add Cards"):
        chosen = set(c.id for c in questionnaire.cards)
        selection_picker(client.list_available_cards(), f"avail_{draft_id}",
                         lambda card: f"**{card.name}** - {card.description}", disabled_ids=chosen)
        add_selected(client.add_cards, draft_id, f"avail_{draft_id}", f"add_cards_{draft_id}")

    if not questionnaire.cards:
        st.info("No questionnaire cards added yet.")
        return

    field = group_by_picker("Group by", options.card_group_fields, questionnaire.group_by,
                            f"card_group_{draft_id}")
    if field != questionnaire.group_by:
        apply(client.group_cards, draft_id, field)

    display = client.display_cards(draft_id)
    st.dataframe(grouped_frame(display, CARD_COLUMNS), use_container_width=True, hide_index=True)

    for card in questionnaire.cards:
        _card_settings(client, draft_id, card)
