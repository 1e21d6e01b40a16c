"""
Per-section summary lines for the "Save RFQ Template" dialog.
"""
from typing import List

from shared.schemas import RFQDraft, SectionSummary


def _distinct(values) -> List[str]:
    """Distinct values in first-seen order."""
    seen = []
    for value in values:
        value = getattr(value, "value", value)
        if value not in seen:
            seen.append(value)
    return seen


def summarize_draft(draft: RFQDraft) -> List[SectionSummary]:
    """
    Summarize every section that holds data.

    Sections with nothing entered are left out, except General Details,
    which always carries its default settings. The length of the result is
    the number of sections a saved template carries.
    """
    sections: List[SectionSummary] = []

    general = draft.general
    general_lines = [
        general.name and f"Name: {general.name}",
        general.project and f"Project: {general.project}",
        general.multi_round_enabled and f"Multi-round: {general.number_of_rounds} rounds",
        general.budget_level and f"Budget: {general.budget_level.value} level",
    ]
    sections.append(SectionSummary(
        section_id="general",
        name="General Details",
        lines=[line for line in general_lines if line]
    ))

    if draft.items:
        categories = _distinct(item.category for item in draft.items)
        sections.append(SectionSummary(
            section_id="items",
            name="Items",
            lines=[
                f"{len(draft.items)} items",
                f"Categories: {', '.join(categories)}"
            ]
        ))

    cards = draft.questionnaire.cards
    if cards:
        lines = [f"{len(cards)} cards"]
        if draft.questionnaire.show_before_rfq_details:
            lines.append("Show before RFQ details")
        sections.append(SectionSummary(section_id="questionnaire", name="Questionnaire", lines=lines))

    if draft.suppliers:
        sources = _distinct(s.source for s in draft.suppliers)
        sections.append(SectionSummary(
            section_id="suppliers",
            name="Suppliers",
            lines=[
                f"{len(draft.suppliers)} suppliers selected",
                f"Sources: {', '.join(sources)}"
            ]
        ))

    if draft.terms.terms:
        lines = [f"{len(draft.terms.terms)} characters"]
        if draft.terms.selected_template:
            lines.append("Using template")
        sections.append(SectionSummary(section_id="terms", name="Terms & Conditions", lines=lines))

    if draft.email.subject:
        lines = [f"Subject: {draft.email.subject}"]
        if draft.email.selected_template:
            lines.append("Using template")
        sections.append(SectionSummary(section_id="email", name="Email Template", lines=lines))

    return sections
