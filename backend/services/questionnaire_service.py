"""
Questionnaire section service: info cards, scoring settings and grouping.
"""
import logging
from typing import List, Optional

from backend.catalog import get_available_cards
from backend.services.draft_service import get_draft_service, DraftService
from backend.services.errors import WizardError, RecordNotFoundError
from backend.wizard.grouping import build_display_rows, group_records, normalize_group_field
from shared.selection import SelectionSet
from shared.constants import CARD_GROUP_FIELDS, ScoringType, DEFAULT_SCORING_WEIGHT, DEFAULT_MAX_SCORE
from shared.schemas import (
    RFQDraft, QuestionnaireCard, CardSettingsUpdate, GroupedListResponse
)

logger = logging.getLogger(__name__)


class QuestionnaireService:
    """Operations on a draft's supplier questionnaire."""

    def __init__(self, drafts: Optional[DraftService] = None):
        self.drafts = drafts or get_draft_service()

    def add_cards(self, draft_id: str, selection: SelectionSet) -> List[QuestionnaireCard]:
        """
        Add the selected cards with default scoring settings.

        Cards keep their catalog id, so a card already on the questionnaire
        is skipped rather than added twice.
        """
        draft = self.drafts.get_draft(draft_id)
        if not len(selection):
            raise WizardError("Nothing selected", "Select at least one card to add.")
        available = get_available_cards()
        unknown = selection.unknown_ids(available)
        if unknown:
            raise RecordNotFoundError("Card", unknown[0])

        existing_ids = {card.id for card in draft.questionnaire.cards}
        new_cards = [
            QuestionnaireCard(
                **card.model_dump(),
                scoring_type=ScoringType.AUTOMATIC,
                scoring_weight=DEFAULT_SCORING_WEIGHT,
                max_score=DEFAULT_MAX_SCORE
            )
            for card in selection.resolve(available)
            if card.id not in existing_ids
        ]
        draft.questionnaire.cards.extend(new_cards)
        selection.clear()
        logger.info(f"[QuestionnaireService] Added {len(new_cards)} cards to {draft_id}")
        self.drafts.section_changed(draft, "questionnaire")
        return new_cards

    def update_card_settings(
        self,
        draft_id: str,
        card_id: str,
        settings: CardSettingsUpdate
    ) -> QuestionnaireCard:
        draft = self.drafts.get_draft(draft_id)
        changes = settings.model_dump(exclude_none=True)
        if "group" in changes:
            # An empty group name means "no group"
            changes["group"] = changes["group"].strip() or None
        cards = draft.questionnaire.cards
        for index, card in enumerate(cards):
            if card.id == card_id:
                cards[index] = card.model_copy(update=changes)
                self.drafts.section_changed(draft, "questionnaire")
                return cards[index]
        raise RecordNotFoundError("Card", card_id)

    def remove_card(self, draft_id: str, card_id: str) -> None:
        draft = self.drafts.get_draft(draft_id)
        cards = draft.questionnaire.cards
        remaining = [card for card in cards if card.id != card_id]
        if len(remaining) == len(cards):
            raise RecordNotFoundError("Card", card_id)
        draft.questionnaire.cards = remaining
        self.drafts.section_changed(draft, "questionnaire")

    def set_show_before_rfq_details(self, draft_id: str, enabled: bool) -> RFQDraft:
        draft = self.drafts.get_draft(draft_id)
        draft.questionnaire.show_before_rfq_details = enabled
        self.drafts.section_changed(draft, "questionnaire")
        return draft

    def set_group_by(self, draft_id: str, field: str) -> RFQDraft:
        draft = self.drafts.get_draft(draft_id)
        try:
            draft.questionnaire.group_by = normalize_group_field(field, CARD_GROUP_FIELDS)
        except ValueError as e:
            raise WizardError("Invalid grouping", str(e))
        return draft

    def grouped_cards(self, draft_id: str) -> GroupedListResponse:
        draft = self.drafts.get_draft(draft_id)
        field = draft.questionnaire.group_by
        cards = draft.questionnaire.cards
        groups = {}
        if field:
            groups = {name: len(members) for name, members in group_records(cards, field).items()}
        return GroupedListResponse(group_by=field, rows=build_display_rows(cards, field), groups=groups)


# Singleton
_questionnaire_service = None


def get_questionnaire_service() -> QuestionnaireService:
    global _questionnaire_service
    if _questionnaire_service is None:
        _questionnaire_service = QuestionnaireService()
    return _questionnaire_service
