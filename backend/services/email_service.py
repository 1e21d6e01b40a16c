"""
Email template service: the draft's invitation email, the in-memory email
template library, previews and per-supplier rendering.
"""
import logging
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from backend.catalog import get_default_email_templates
from backend.services import feature_flags
from backend.services.draft_service import get_draft_service, DraftService
from backend.services.errors import WizardError, RecordNotFoundError
from backend.wizard.templating import render_preview, render_for_suppliers, list_variables
from shared.constants import CUSTOM_TEMPLATE_ID
from shared.schemas import (
    RFQDraft, EmailData, EmailContent, EmailContentUpdate, EmailTemplate,
    RenderedEmail, TemplateVariable, Notice
)

logger = logging.getLogger(__name__)


def _content_of(email: EmailData) -> EmailContent:
    return EmailContent(
        subject=email.subject,
        header=email.header,
        body=email.body,
        footer=email.footer
    )


def _require_subject_and_body(subject: str, body: str, message: str) -> None:
    if not subject.strip() or not body.strip():
        raise WizardError("Error", message)


class EmailService:
    """Email editing plus template save / update / delete and rendering."""

    def __init__(self, drafts: Optional[DraftService] = None):
        self.drafts = drafts or get_draft_service()
        self._templates: List[EmailTemplate] = get_default_email_templates()

    # ==================== TEMPLATE LIBRARY ====================

    def list_templates(self) -> List[EmailTemplate]:
        return list(self._templates)

    def get_template(self, template_id: str) -> EmailTemplate:
        for template in self._templates:
            if template.id == template_id:
                return template
        raise RecordNotFoundError("Template", template_id)

    def update_template(self, template_id: str, name: str, content: EmailContent) -> Notice:
        """Rewrite a template; drafts using it pick up the new content."""
        if not name.strip():
            raise WizardError("Error", "Please enter a template name.")
        _require_subject_and_body(content.subject, content.body, "Template subject and body cannot be empty.")
        template = self.get_template(template_id)
        template.name = name.strip()
        template.subject = content.subject
        template.header = content.header
        template.body = content.body
        template.footer = content.footer
        for draft in self.drafts.all_drafts():
            if draft.email.selected_template == template_id:
                draft.email = EmailData(selected_template=template_id, **content.model_dump())
                self.drafts.section_changed(draft, "email")
        logger.info(f"[EmailService] Updated template {template_id}")
        return Notice(title="Template Updated", description="The email template has been updated successfully.")

    def delete_template(self, template_id: str) -> Notice:
        """Remove a template; drafts using it are reset to an empty email."""
        self.get_template(template_id)
        self._templates = [t for t in self._templates if t.id != template_id]
        for draft in self.drafts.all_drafts():
            if draft.email.selected_template == template_id:
                draft.email = EmailData()
        logger.info(f"[EmailService] Deleted template {template_id}")
        return Notice(title="Template Deleted", description="The email template has been removed.")

    # ==================== DRAFT EMAIL ====================

    def select_template(self, draft_id: str, template_id: str) -> RFQDraft:
        """
        Load a template into the draft's email.

        Choosing "custom" clears both the selection and all four fields.
        """
        draft = self.drafts.get_draft(draft_id)
        if template_id == CUSTOM_TEMPLATE_ID:
            draft.email = EmailData()
            return draft
        template = self.get_template(template_id)
        draft.email = EmailData(
            selected_template=template_id,
            subject=template.subject,
            header=template.header,
            body=template.body,
            footer=template.footer
        )
        template.last_used = datetime.now()
        self.drafts.section_changed(draft, "email")
        return draft

    def update_email(self, draft_id: str, updates: EmailContentUpdate) -> RFQDraft:
        draft = self.drafts.get_draft(draft_id)
        draft.email = draft.email.model_copy(update=updates.model_dump(exclude_none=True))
        self.drafts.section_changed(draft, "email")
        return draft

    def save_as_template(self, draft_id: str, name: str) -> EmailTemplate:
        draft = self.drafts.get_draft(draft_id)
        if not name.strip():
            raise WizardError("Error", "Please enter a template name.")
        _require_subject_and_body(
            draft.email.subject, draft.email.body,
            "Please enter subject and body before saving as template."
        )
        template = EmailTemplate(
            id=f"template_{uuid4().hex[:8]}",
            name=name.strip(),
            created_at=datetime.now(),
            **_content_of(draft.email).model_dump()
        )
        self._templates.append(template)
        logger.info(f"[EmailService] Saved email template '{template.name}' from {draft_id}")
        return template

    # ==================== RENDERING ====================

    def preview(self, draft_id: str) -> RenderedEmail:
        """The draft's email with sample values filled in."""
        draft = self.drafts.get_draft(draft_id)
        return render_preview(_content_of(draft.email))

    def render_for_suppliers(self, draft_id: str) -> List[RenderedEmail]:
        """One email per invited supplier, filled from the draft's own data."""
        draft = self.drafts.get_draft(draft_id)
        return render_for_suppliers(
            _content_of(draft.email),
            draft.general,
            draft.suppliers,
            feature_flags.company_values()
        )

    def variables(self) -> List[TemplateVariable]:
        return list_variables()


# Singleton
_email_service = None


def get_email_service() -> EmailService:
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
