"""
API Client for frontend-backend communication.

The frontend ONLY communicates with the backend through this client.
It NEVER touches drafts or template libraries directly.
"""
import requests
from typing import Optional, List, Dict, Any

from shared.constants import API_BASE_URL
from shared.schemas import (
    CatalogOptions, CatalogEntry, AvailableCard, Supplier, SupplierSearchFilters,
    DraftResponse, DraftListResponse, ProgressResponse, GroupedListResponse,
    GeneralDetailsUpdate, NewItemRequest, ItemUpdate, CardSettingsUpdate,
    NewSupplierRequest, TermsTemplate, EmailTemplate, EmailContentUpdate,
    RenderedEmail, TemplateVariable, SectionSummary, SaveRFQTemplateResponse,
    SaveDraftResponse, CreateRFQResponse, Notice
)


class APIClient:
    """
    Client for communicating with the backend API.

    Every draft-mutating call returns the updated DraftResponse so the UI can
    redraw from a single source of truth.
    """

    def __init__(self, base_url: str = None, timeout: float = 30):
        self.base_url = base_url or API_BASE_URL
        self.timeout = timeout

    def _url(self, path: str) -> str:
        """Build full URL."""
        return f"{self.base_url}{path}"

    def _handle_response(self, response: requests.Response) -> Any:
        """Handle API response."""
        if response.status_code >= 400:
            try:
                detail = response.json().get("detail", "Unknown error")
            except ValueError:
                raise APIError(response.text, response.status_code)
            if isinstance(detail, dict):
                message = detail.get("description") or detail.get("title", "Unknown error")
                raise APIError(message, response.status_code, title=detail.get("title"))
            raise APIError(str(detail), response.status_code)

        return response.json()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._handle_response(requests.get(self._url(path), params=params, timeout=self.timeout))

    def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        response = requests.request(method, self._url(path), json=payload, timeout=self.timeout)
        return self._handle_response(response)

    def _draft(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> DraftResponse:
        return DraftResponse(**self._send(method, path, payload))

    # ==================== HEALTH ====================

    def health_check(self) -> Dict[str, Any]:
        """Check backend health."""
        try:
            response = requests.get(self._url("/health"), timeout=5)
            return self._handle_response(response)
        except requests.exceptions.ConnectionError:
            return {"status": "unhealthy", "error": "Cannot connect to backend"}

    # ==================== CATALOG ====================

    def get_options(self) -> CatalogOptions:
        return CatalogOptions(**self._get("/api/catalog/options"))

    def list_catalog_items(self) -> List[CatalogEntry]:
        return [CatalogEntry(**e) for e in self._get("/api/catalog/items")]

    def list_open_requests(self) -> List[CatalogEntry]:
        return [CatalogEntry(**e) for e in self._get("/api/catalog/requests")]

    def list_available_cards(self) -> List[AvailableCard]:
        return [AvailableCard(**c) for c in self._get("/api/catalog/cards")]

    def search_suppliers(self, term: str = "") -> List[Supplier]:
        return [Supplier(**s) for s in self._get("/api/catalog/suppliers", params={"search": term})]

    def advanced_search_suppliers(self, filters: SupplierSearchFilters) -> List[Supplier]:
        data = self._send("POST", "/api/catalog/suppliers/search", filters.model_dump())
        return [Supplier(**s) for s in data]

    # ==================== DRAFTS ====================

    def list_drafts(self, limit: int = 50) -> DraftListResponse:
        return DraftListResponse(**self._get("/api/drafts", params={"limit": limit}))

    def create_draft(self) -> DraftResponse:
        return self._draft("POST", "/api/drafts")

    def get_draft(self, draft_id: str) -> DraftResponse:
        return DraftResponse(**self._get(f"/api/drafts/{draft_id}"))

    def get_progress(self, draft_id: str) -> ProgressResponse:
        return ProgressResponse(**self._get(f"/api/drafts/{draft_id}/progress"))

    def update_general(self, draft_id: str, updates: GeneralDetailsUpdate) -> DraftResponse:
        return self._draft(
            "PATCH", f"/api/drafts/{draft_id}/general",
            updates.model_dump(mode="json", exclude_unset=True)
        )

    def save_draft(self, draft_id: str) -> SaveDraftResponse:
        return SaveDraftResponse(**self._send("POST", f"/api/drafts/{draft_id}/save"))

    def create_rfq(self, draft_id: str) -> CreateRFQResponse:
        return CreateRFQResponse(**self._send("POST", f"/api/drafts/{draft_id}/create"))

    # ==================== ITEMS ====================

    def add_catalog_items(self, draft_id: str, ids: List[str]) -> DraftResponse:
        return self._draft("POST", f"/api/drafts/{draft_id}/items/catalog", {"ids": ids})

    def add_request_items(self, draft_id: str, ids: List[str]) -> DraftResponse:
        return self._draft("POST", f"/api/drafts/{draft_id}/items/requests", {"ids": ids})

    def create_item(self, draft_id: str, item: NewItemRequest) -> DraftResponse:
        return self._draft("POST", f"/api/drafts/{draft_id}/items", item.model_dump())

    def update_item(self, draft_id: str, item_id: str, updates: ItemUpdate) -> DraftResponse:
        return self._draft(
            "PATCH", f"/api/drafts/{draft_id}/items/{item_id}",
            updates.model_dump(exclude_none=True)
        )

    def remove_item(self, draft_id: str, item_id: str) -> DraftResponse:
        return self._draft("DELETE", f"/api/drafts/{draft_id}/items/{item_id}")

    def group_items(self, draft_id: str, field: str) -> DraftResponse:
        return self._draft("PUT", f"/api/drafts/{draft_id}/items/group-by", {"field": field})

    def display_items(self, draft_id: str) -> GroupedListResponse:
        return GroupedListResponse(**self._get(f"/api/drafts/{draft_id}/items/display"))

    # ==================== QUESTIONNAIRE ====================

    def add_cards(self, draft_id: str, ids: List[str]) -> DraftResponse:
        return self._draft("POST", f"/api/drafts/{draft_id}/questionnaire/cards", {"ids": ids})

    def update_card(self, draft_id: str, card_id: str, settings: CardSettingsUpdate) -> DraftResponse:
        return self._draft(
            "PATCH", f"/api/drafts/{draft_id}/questionnaire/cards/{card_id}",
            settings.model_dump(mode="json", exclude_none=True)
        )

    def remove_card(self, draft_id: str, card_id: str) -> DraftResponse:
        return self._draft("DELETE", f"/api/drafts/{draft_id}/questionnaire/cards/{card_id}")

    def set_show_before(self, draft_id: str, enabled: bool) -> DraftResponse:
        return self._draft("PUT", f"/api/drafts/{draft_id}/questionnaire/show-before", {"enabled": enabled})

    def group_cards(self, draft_id: str, field: str) -> DraftResponse:
        return self._draft("PUT", f"/api/drafts/{draft_id}/questionnaire/group-by", {"field": field})

    def display_cards(self, draft_id: str) -> GroupedListResponse:
        return GroupedListResponse(**self._get(f"/api/drafts/{draft_id}/questionnaire/display"))

    # ==================== SUPPLIERS ====================

    def add_existing_suppliers(self, draft_id: str, ids: List[str]) -> DraftResponse:
        return self._draft("POST", f"/api/drafts/{draft_id}/suppliers/existing", {"ids": ids})

    def create_supplier(self, draft_id: str, supplier: NewSupplierRequest) -> DraftResponse:
        return self._draft("POST", f"/api/drafts/{draft_id}/suppliers", supplier.model_dump())

    def remove_supplier(self, draft_id: str, supplier_id: str) -> DraftResponse:
        return self._draft("DELETE", f"/api/drafts/{draft_id}/suppliers/{supplier_id}")

    # ==================== TERMS ====================

    def set_terms(self, draft_id: str, terms: str) -> DraftResponse:
        return self._draft("PUT", f"/api/drafts/{draft_id}/terms", {"terms": terms})

    def select_terms_template(self, draft_id: str, template_id: str) -> DraftResponse:
        return self._draft("PUT", f"/api/drafts/{draft_id}/terms/template", {"template_id": template_id})

    def save_terms_template(self, draft_id: str, name: str) -> TermsTemplate:
        return TermsTemplate(**self._send("POST", f"/api/drafts/{draft_id}/terms/templates", {"name": name}))

    def list_terms_templates(self) -> List[TermsTemplate]:
        return [TermsTemplate(**t) for t in self._get("/api/terms-templates")]

    def update_terms_template(self, template_id: str, name: str, content: str) -> Notice:
        return Notice(**self._send("PUT", f"/api/terms-templates/{template_id}", {"name": name, "content": content}))

    def delete_terms_template(self, template_id: str) -> Notice:
        return Notice(**self._send("DELETE", f"/api/terms-templates/{template_id}"))

    # ==================== EMAIL ====================

    def update_email(self, draft_id: str, updates: EmailContentUpdate) -> DraftResponse:
        return self._draft("PATCH", f"/api/drafts/{draft_id}/email", updates.model_dump(exclude_none=True))

    def select_email_template(self, draft_id: str, template_id: str) -> DraftResponse:
        return self._draft("PUT", f"/api/drafts/{draft_id}/email/template", {"template_id": template_id})

    def save_email_template(self, draft_id: str, name: str) -> EmailTemplate:
        return EmailTemplate(**self._send("POST", f"/api/drafts/{draft_id}/email/templates", {"name": name}))

    def preview_email(self, draft_id: str) -> RenderedEmail:
        return RenderedEmail(**self._get(f"/api/drafts/{draft_id}/email/preview"))

    def render_supplier_emails(self, draft_id: str) -> List[RenderedEmail]:
        return [RenderedEmail(**e) for e in self._get(f"/api/drafts/{draft_id}/email/rendered")]

    def list_email_templates(self) -> List[EmailTemplate]:
        return [EmailTemplate(**t) for t in self._get("/api/email-templates")]

    def list_email_variables(self) -> List[TemplateVariable]:
        return [TemplateVariable(**v) for v in self._get("/api/email-templates/variables")]

    def update_email_template(self, template_id: str, name: str, content: Dict[str, str]) -> Notice:
        return Notice(**self._send("PUT", f"/api/email-templates/{template_id}", {"name": name, **content}))

    def delete_email_template(self, template_id: str) -> Notice:
        return Notice(**self._send("DELETE", f"/api/email-templates/{template_id}"))

    # ==================== RFQ TEMPLATES ====================

    def get_summary(self, draft_id: str) -> List[SectionSummary]:
        return [SectionSummary(**s) for s in self._get(f"/api/drafts/{draft_id}/summary")]

    def save_rfq_template(self, draft_id: str, name: str, description: str = "") -> SaveRFQTemplateResponse:
        data = self._send("POST", "/api/rfq-templates", {
            "draft_id": draft_id,
            "name": name,
            "description": description
        })
        return SaveRFQTemplateResponse(**data)


class APIError(Exception):
    """API error with status code."""

    def __init__(self, message: str, status_code: int = 500, title: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.title = title or "Error"
        super().__init__(self.message)


# Singleton client
_client = None


def get_api_client() -> APIClient:
    """Get or create API client singleton."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client
