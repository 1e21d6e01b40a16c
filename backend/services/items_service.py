"""
Items section service: catalog and open-request imports, hand-made items,
edits and grouping.
"""
import logging
from typing import List, Optional
from uuid import uuid4

from backend.catalog import get_catalog_items, get_open_requests
from backend.services.draft_service import get_draft_service, DraftService
from backend.services.errors import WizardError, RecordNotFoundError
from backend.wizard.grouping import build_display_rows, group_records, normalize_group_field
from shared.selection import SelectionSet
from shared.constants import ItemSource, ITEM_GROUP_FIELDS
from shared.schemas import (
    RFQDraft, Item, CatalogEntry, NewItemRequest, ItemUpdate, GroupedListResponse
)

logger = logging.getLogger(__name__)


def generate_item_id() -> str:
    return f"item_{uuid4().hex[:12]}"


class ItemsService:
    """Operations on a draft's line items."""

    def __init__(self, drafts: Optional[DraftService] = None):
        self.drafts = drafts or get_draft_service()

    def _import(
        self,
        draft_id: str,
        selection: SelectionSet,
        source_list: List[CatalogEntry],
        source: ItemSource
    ) -> List[Item]:
        draft = self.drafts.get_draft(draft_id)
        if not len(selection):
            raise WizardError("Nothing selected", "Select at least one item to add.")
        unknown = selection.unknown_ids(source_list)
        if unknown:
            raise RecordNotFoundError("Item", unknown[0])

        new_items = [
            Item(
                id=generate_item_id(),
                name=entry.name,
                description=entry.description,
                quantity=1,
                unit=entry.unit,
                category=entry.category,
                specifications="",
                source=source
            )
            for entry in selection.resolve(source_list)
        ]
        draft.items.extend(new_items)
        selection.clear()
        logger.info(f"[ItemsService] Added {len(new_items)} {source.value} items to {draft_id}")
        self.drafts.section_changed(draft, "items")
        return new_items

    def add_from_catalog(self, draft_id: str, selection: SelectionSet) -> List[Item]:
        return self._import(draft_id, selection, get_catalog_items(), ItemSource.CATALOG)

    def add_from_requests(self, draft_id: str, selection: SelectionSet) -> List[Item]:
        return self._import(draft_id, selection, get_open_requests(), ItemSource.REQUEST)

    def create_item(self, draft_id: str, request: NewItemRequest) -> Item:
        draft = self.drafts.get_draft(draft_id)
        if not request.name.strip():
            raise WizardError("Item name required", "Enter a name for the new item.")
        item = Item(
            id=generate_item_id(),
            source=ItemSource.NEW,
            **request.model_dump()
        )
        draft.items.append(item)
        self.drafts.section_changed(draft, "items")
        return item

    def update_item(self, draft_id: str, item_id: str, updates: ItemUpdate) -> Item:
        draft = self.drafts.get_draft(draft_id)
        changes = updates.model_dump(exclude_none=True)
        for index, item in enumerate(draft.items):
            if item.id == item_id:
                draft.items[index] = item.model_copy(update=changes)
                self.drafts.section_changed(draft, "items")
                return draft.items[index]
        raise RecordNotFoundError("Item", item_id)

    def remove_item(self, draft_id: str, item_id: str) -> None:
        draft = self.drafts.get_draft(draft_id)
        remaining = [item for item in draft.items if item.id != item_id]
        if len(remaining) == len(draft.items):
            raise RecordNotFoundError("Item", item_id)
        draft.items = remaining
        self.drafts.section_changed(draft, "items")

    def set_group_by(self, draft_id: str, field: str) -> RFQDraft:
        draft = self.drafts.get_draft(draft_id)
        try:
            draft.items_group_by = normalize_group_field(field, ITEM_GROUP_FIELDS)
        except ValueError as e:
            raise WizardError("Invalid grouping", str(e))
        return draft

    def grouped_items(self, draft_id: str) -> GroupedListResponse:
        draft = self.drafts.get_draft(draft_id)
        field = draft.items_group_by
        groups = {}
        if field:
            groups = {name: len(members) for name, members in group_records(draft.items, field).items()}
        return GroupedListResponse(
            group_by=field,
            rows=build_display_rows(draft.items, field),
            groups=groups
        )


# Singleton
_items_service = None


def get_items_service() -> ItemsService:
    global _items_service
    if _items_service is None:
        _items_service = ItemsService()
    return _items_service
