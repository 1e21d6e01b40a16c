"""
Placeholder substitution for email templates.

Templates use ``{{TOKEN}}`` placeholders. Substitution is a flat textual
replace: every occurrence of each known token is replaced, anything else
(including unknown ``{{TOKENS}}``) is left exactly as written. Nothing is
escaped; the output is only ever shown back to the user.
"""
from typing import Dict, List, Optional

from shared.schemas import (
    EmailContent, GeneralDetails, RenderedEmail, Supplier, TemplateVariable
)


# token -> (description, sample value used by the preview)
TEMPLATE_VARIABLES: Dict[str, tuple] = {
    "RFQ_NAME": ("Name of the RFQ", "Office Equipment RFQ 2024"),
    "SUPPLIER_NAME": ("Supplier company name", "ABC Suppliers Inc."),
    "PROJECT_NAME": ("Associated project name", "Office Renovation Project"),
    "DEADLINE": ("Submission deadline", "March 15, 2024"),
    "AWARD_DATE": ("Expected award date", "March 22, 2024"),
    "ROUNDS": ("Number of RFQ rounds", "3"),
    "ROUND1_DEADLINE": ("First round deadline", "March 10, 2024"),
    "REQUESTER_NAME": ("Name of the requester", "John Smith"),
    "COMPANY_NAME": ("Your company name", "Your Company Name"),
    "CONTACT_EMAIL": ("Your contact email", "john.smith@company.com"),
    "PHONE_NUMBER": ("Your phone number", "+1-555-0123"),
}

SAMPLE_VALUES: Dict[str, str] = {
    token: sample for token, (_, sample) in TEMPLATE_VARIABLES.items()
}


def placeholder(token: str) -> str:
    return "{{" + token + "}}"


def render_text(text: str, values: Dict[str, str]) -> str:
    """
    Replace every ``{{TOKEN}}`` whose token is a recognized variable and
    has a value. Tokens outside TEMPLATE_VARIABLES are never touched.
    """
    result = text
    for token, value in values.items():
        if token not in TEMPLATE_VARIABLES or value is None:
            continue
        result = result.replace(placeholder(token), str(value))
    return result


def render_email(content: EmailContent, values: Dict[str, str]) -> EmailContent:
    return EmailContent(
        subject=render_text(content.subject, values),
        header=render_text(content.header, values),
        body=render_text(content.body, values),
        footer=render_text(content.footer, values)
    )


def render_preview(content: EmailContent) -> RenderedEmail:
    """Fill every known variable with its sample value."""
    rendered = render_email(content, SAMPLE_VALUES)
    return RenderedEmail(**rendered.model_dump())


def _format_date(value) -> Optional[str]:
    if value is None:
        return None
    return f"{value:%B} {value.day}, {value.year}"


def values_from_draft(
    general: GeneralDetails,
    supplier: Optional[Supplier] = None,
    company: Optional[Dict[str, str]] = None
) -> Dict[str, str]:
    """
    Real variable values taken from the draft.

    Only variables the draft can answer are returned, so placeholders with
    no known value (e.g. AWARD_DATE) survive rendering for manual edits.
    """
    values: Dict[str, str] = {}
    if general.name:
        values["RFQ_NAME"] = general.name
    if general.project:
        values["PROJECT_NAME"] = general.project
    if general.requesters:
        values["REQUESTER_NAME"] = general.requesters
    deadline = _format_date(general.expected_delivery_date)
    if deadline:
        values["DEADLINE"] = deadline
    if general.multi_round_enabled:
        values["ROUNDS"] = str(general.number_of_rounds)
    if supplier is not None and supplier.name:
        values["SUPPLIER_NAME"] = supplier.name
    for token, value in (company or {}).items():
        if value:
            values[token] = value
    return values


def render_for_suppliers(
    content: EmailContent,
    general: GeneralDetails,
    suppliers: List[Supplier],
    company: Optional[Dict[str, str]] = None
) -> List[RenderedEmail]:
    """One personalised email per selected supplier."""
    emails = []
    for supplier in suppliers:
        rendered = render_email(content, values_from_draft(general, supplier, company))
        emails.append(RenderedEmail(
            supplier_id=supplier.id,
            supplier_name=supplier.name,
            **rendered.model_dump()
        ))
    return emails


def list_variables() -> List[TemplateVariable]:
    return [
        TemplateVariable(token=placeholder(token), description=description, sample_value=sample)
        for token, (description, sample) in TEMPLATE_VARIABLES.items()
    ]
