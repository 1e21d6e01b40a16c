"""
Section completion tracking and progress aggregation.

A section is marked complete the first time its requirement is met. It is
not un-marked if the data is emptied again afterwards.
"""
from typing import Any, Dict, List
import logging

from shared.constants import SECTIONS, SECTION_TITLES, SECTION_DESCRIPTIONS
from shared.section_requirements import (
    SECTION_REQUIREMENTS, get_missing_fields, get_requirement_description
)
from shared.schemas import RFQDraft, ProgressResponse, SectionStatus
from backend.services import feature_flags

logger = logging.getLogger(__name__)


def section_data(draft: RFQDraft, section: str) -> Any:
    """The slice of the draft a section's requirement is checked against."""
    if section == "general":
        return draft.general.model_dump()
    if section == "items":
        return draft.items
    if section == "questionnaire":
        return draft.questionnaire.cards
    if section == "suppliers":
        return draft.suppliers
    if section == "terms":
        return draft.terms.model_dump()
    if section == "email":
        return draft.email.model_dump()
    raise KeyError(f"Unknown section: {section}")


def is_section_satisfied(section: str, data: Any) -> bool:
    """Check a section's data against SECTION_REQUIREMENTS."""
    requirements = SECTION_REQUIREMENTS[section]
    min_entries = requirements.get("min_entries", 0)
    if min_entries:
        return len(data) >= min_entries
    return not get_missing_fields(section, data)


class CompletionTracker:
    """
    Unions completed section IDs for one draft.

    Works directly on ``draft.completed_sections`` so the state travels
    with the draft.
    """

    def __init__(self, draft: RFQDraft):
        self.draft = draft

    @property
    def completed(self) -> List[str]:
        return list(self.draft.completed_sections)

    def is_complete(self, section: str) -> bool:
        return section in self.draft.completed_sections

    def mark_complete(self, section: str) -> bool:
        """Add a section; returns True only on the first completion."""
        if section not in SECTIONS:
            raise KeyError(f"Unknown section: {section}")
        if section in self.draft.completed_sections:
            return False
        self.draft.completed_sections.append(section)
        if feature_flags.ENABLE_COMPLETION_LOGS:
            logger.info(
                f"[CompletionTracker] Draft {self.draft.draft_id}: section '{section}' complete "
                f"({len(self.draft.completed_sections)}/{len(SECTIONS)})"
            )
        return True

    def evaluate(self, section: str) -> bool:
        """
        Re-check one section after its data changed.

        Returns whether the section is complete after the check.
        """
        if self.is_complete(section):
            return True
        if is_section_satisfied(section, section_data(self.draft, section)):
            self.mark_complete(section)
            return True
        return False

    def evaluate_all(self) -> List[str]:
        for section in SECTIONS:
            self.evaluate(section)
        return self.completed

    @property
    def percent(self) -> float:
        return len(self.draft.completed_sections) / len(SECTIONS) * 100

    @property
    def can_save_template(self) -> bool:
        return len(self.draft.completed_sections) > 0

    @property
    def can_create_rfq(self) -> bool:
        return len(self.draft.completed_sections) >= len(SECTIONS)

    def to_response(self) -> ProgressResponse:
        percent = self.percent
        return ProgressResponse(
            draft_id=self.draft.draft_id,
            completed_sections=self.completed,
            total_sections=len(SECTIONS),
            percent=percent,
            percent_display=round(percent),
            can_save_template=self.can_save_template,
            can_create_rfq=self.can_create_rfq,
            sections=[
                SectionStatus(
                    section_id=section,
                    title=SECTION_TITLES[section],
                    description=SECTION_DESCRIPTIONS[section],
                    requirement=get_requirement_description(section),
                    completed=self.is_complete(section)
                )
                for section in SECTIONS
            ]
        )


def missing_requirements(draft: RFQDraft) -> Dict[str, str]:
    """Requirement text for every section that is not yet complete."""
    return {
        section: get_requirement_description(section)
        for section in SECTIONS
        if section not in draft.completed_sections
    }
