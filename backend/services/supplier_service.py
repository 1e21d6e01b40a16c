"""
Suppliers section service: quick add with text search, advanced search,
new suppliers and removal.
"""
import logging
from typing import List, Optional
from uuid import uuid4

from backend.catalog import get_existing_suppliers
from backend.services.draft_service import get_draft_service, DraftService
from backend.services.errors import WizardError, RecordNotFoundError
from shared.selection import SelectionSet
from shared.constants import SupplierSource
from shared.schemas import Supplier, NewSupplierRequest, SupplierSearchFilters

logger = logging.getLogger(__name__)


def search_suppliers(suppliers: List[Supplier], term: str) -> List[Supplier]:
    """Case-insensitive match on the name or any category."""
    needle = term.strip().lower()
    if not needle:
        return list(suppliers)
    return [
        s for s in suppliers
        if needle in s.name.lower() or any(needle in cat.lower() for cat in s.category)
    ]


def filter_suppliers(suppliers: List[Supplier], filters: SupplierSearchFilters) -> List[Supplier]:
    """Apply the advanced search filters; zero or empty filters match everything."""
    results = []
    for s in suppliers:
        if filters.category and filters.category not in s.category:
            continue
        if filters.min_rating and s.rating < filters.min_rating:
            continue
        if filters.location and filters.location.lower() not in s.location.lower():
            continue
        if filters.min_years and s.years_in_business < filters.min_years:
            continue
        results.append(s)
    return results


class SupplierService:
    """Operations on a draft's invited suppliers."""

    def __init__(self, drafts: Optional[DraftService] = None):
        self.drafts = drafts or get_draft_service()

    def quick_search(self, term: str = "") -> List[Supplier]:
        return search_suppliers(get_existing_suppliers(), term)

    def advanced_search(self, filters: SupplierSearchFilters) -> List[Supplier]:
        return filter_suppliers(get_existing_suppliers(), filters)

    def add_existing(self, draft_id: str, selection: SelectionSet) -> List[Supplier]:
        """
        Add selected suppliers from the supplier master.

        Suppliers already invited are skipped.
        """
        draft = self.drafts.get_draft(draft_id)
        if not len(selection):
            raise WizardError("Nothing selected", "Select at least one supplier to add.")
        existing = get_existing_suppliers()
        unknown = selection.unknown_ids(existing)
        if unknown:
            raise RecordNotFoundError("Supplier", unknown[0])

        invited = {s.id for s in draft.suppliers}
        new_suppliers = [s for s in selection.resolve(existing) if s.id not in invited]
        draft.suppliers.extend(new_suppliers)
        selection.clear()
        logger.info(f"[SupplierService] Added {len(new_suppliers)} existing suppliers to {draft_id}")
        self.drafts.section_changed(draft, "suppliers")
        return new_suppliers

    def create_supplier(self, draft_id: str, request: NewSupplierRequest) -> Supplier:
        draft = self.drafts.get_draft(draft_id)
        if not request.name.strip():
            raise WizardError("Supplier name required", "Enter a company name for the new supplier.")
        if not request.email.strip():
            raise WizardError("Supplier email required", "Enter a contact email for the new supplier.")
        supplier = Supplier(
            id=f"sup_{uuid4().hex[:12]}",
            rating=0.0,
            source=SupplierSource.NEW,
            **request.model_dump()
        )
        draft.suppliers.append(supplier)
        self.drafts.section_changed(draft, "suppliers")
        return supplier

    def remove_supplier(self, draft_id: str, supplier_id: str) -> None:
        draft = self.drafts.get_draft(draft_id)
        remaining = [s for s in draft.suppliers if s.id != supplier_id]
        if len(remaining) == len(draft.suppliers):
            raise RecordNotFoundError("Supplier", supplier_id)
        draft.suppliers = remaining
        self.drafts.section_changed(draft, "suppliers")


# Singleton
_supplier_service = None


def get_supplier_service() -> SupplierService:
    global _supplier_service
    if _supplier_service is None:
        _supplier_service = SupplierService()
    return _supplier_service
