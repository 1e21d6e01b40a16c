"""
Errors raised by the wizard services.

Each carries the title/description pair the UI shows as a destructive toast.
"""
from shared.constants import NoticeVariant
from shared.schemas import Notice


class WizardError(Exception):
    """A user-correctable validation failure."""

    def __init__(self, title: str, description: str = ""):
        self.title = title
        self.description = description
        super().__init__(f"{title}: {description}" if description else title)

    def to_notice(self) -> Notice:
        return Notice(
            title=self.title,
            description=self.description,
            variant=NoticeVariant.DESTRUCTIVE
        )


class DraftNotFoundError(WizardError):
    def __init__(self, draft_id: str):
        self.draft_id = draft_id
        super().__init__("Draft not found", f"No RFQ draft with id {draft_id}")


class RecordNotFoundError(WizardError):
    """An item, card, supplier or template id that is not in its list."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found", f"No {kind.lower()} with id {record_id}")
