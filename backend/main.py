"""
FastAPI backend for the RFQ Builder.

This is the ONLY entry point for the frontend.
Drafts, section logic and template libraries all live behind this API.
"""
import os
import logging
from typing import List, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Import services
from backend.services.draft_service import get_draft_service
from backend.services.items_service import get_items_service
from backend.services.questionnaire_service import get_questionnaire_service
from backend.services.supplier_service import get_supplier_service
from backend.services.terms_service import get_terms_service
from backend.services.email_service import get_email_service
from backend.services.template_service import get_template_service
from backend.services.errors import WizardError, DraftNotFoundError, RecordNotFoundError
from backend.catalog import get_catalog_items, get_open_requests, get_available_cards
from shared.selection import SelectionSet

# Import shared schemas
from shared.schemas import (
    HealthCheckResponse, CatalogOptions, CatalogEntry, AvailableCard, Supplier,
    SupplierSearchFilters, DraftResponse, DraftListResponse, ProgressResponse,
    GeneralDetailsUpdate, SelectionRequest, NewItemRequest, ItemUpdate,
    GroupByRequest, GroupedListResponse, CardSettingsUpdate, ShowBeforeRequest,
    NewSupplierRequest, TermsContentRequest, TemplateSelectRequest,
    SaveTermsTemplateRequest, UpdateTermsTemplateRequest, TermsTemplate,
    EmailContent, EmailContentUpdate, SaveEmailTemplateRequest,
    UpdateEmailTemplateRequest, EmailTemplate, RenderedEmail, TemplateVariable,
    SectionSummary, SaveRFQTemplateRequest, SaveRFQTemplateResponse,
    RFQTemplate, SaveDraftResponse, CreateRFQResponse, Notice
)
from shared import constants


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    get_draft_service()
    print("✅ RFQ builder ready (in-memory drafts)")
    yield
    # Shutdown
    print("👋 Shutting down, drafts discarded")


# Create FastAPI app
app = FastAPI(
    title="RFQ Builder API",
    description="Backend API for composing Requests for Quotation",
    version="1.0.0",
    lifespan=lifespan
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict to frontend URL
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ERROR HANDLING
# ============================================================

@app.exception_handler(WizardError)
async def wizard_error_handler(request: Request, exc: WizardError):
    """Validation failures become a destructive notice in `detail`."""
    status_code = 404 if isinstance(exc, (DraftNotFoundError, RecordNotFoundError)) else 400
    logger.warning(f"[API] {request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.to_notice().model_dump(mode="json")}
    )


# ============================================================
# HEALTH CHECK
# ============================================================

@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Health check endpoint."""
    return HealthCheckResponse(
        status="healthy",
        version="1.0.0",
        components={
            "drafts": "ok",
            "catalog": "ok",
            "templates": "ok"
        }
    )


# ============================================================
# CATALOG ENDPOINTS
# ============================================================

@app.get("/api/catalog/options", response_model=CatalogOptions)
async def get_catalog_options():
    """Dropdown option lists for the wizard forms."""
    return CatalogOptions(
        projects=constants.PROJECTS,
        budgets=constants.BUDGETS,
        currencies=constants.CURRENCIES,
        payment_terms=constants.PAYMENT_TERMS,
        round_options=constants.ROUND_OPTIONS,
        units=constants.UNITS,
        item_categories=constants.ITEM_CATEGORIES,
        supplier_categories=constants.SUPPLIER_CATEGORIES,
        rating_filters=constants.RATING_FILTERS,
        item_group_fields=constants.ITEM_GROUP_FIELDS,
        card_group_fields=constants.CARD_GROUP_FIELDS
    )


@app.get("/api/catalog/items", response_model=List[CatalogEntry])
async def list_catalog_items():
    return get_catalog_items()


@app.get("/api/catalog/requests", response_model=List[CatalogEntry])
async def list_open_requests():
    return get_open_requests()


@app.get("/api/catalog/cards", response_model=List[AvailableCard])
async def list_available_cards():
    return get_available_cards()


@app.get("/api/catalog/suppliers", response_model=List[Supplier])
async def list_suppliers(search: str = ""):
    """Existing suppliers, optionally filtered by name or category."""
    return get_supplier_service().quick_search(search)


@app.post("/api/catalog/suppliers/search", response_model=List[Supplier])
async def advanced_supplier_search(filters: SupplierSearchFilters):
    return get_supplier_service().advanced_search(filters)


# ============================================================
# DRAFT ENDPOINTS
# ============================================================

@app.get("/api/drafts", response_model=DraftListResponse)
async def list_drafts(limit: int = 50):
    drafts = get_draft_service().list_drafts(limit=limit)
    return DraftListResponse(drafts=drafts, total_count=len(drafts))


@app.post("/api/drafts", response_model=DraftResponse)
async def create_draft():
    service = get_draft_service()
    draft = service.create_draft()
    return service.respond(draft)


@app.get("/api/drafts/{draft_id}", response_model=DraftResponse)
async def get_draft(draft_id: str):
    service = get_draft_service()
    return service.respond(service.get_draft(draft_id))


@app.delete("/api/drafts/{draft_id}")
async def delete_draft(draft_id: str):
    get_draft_service().delete_draft(draft_id)
    return {"success": True, "message": f"Draft {draft_id} deleted"}


@app.get("/api/drafts/{draft_id}/progress", response_model=ProgressResponse)
async def get_progress(draft_id: str):
    return get_draft_service().get_progress(draft_id)


@app.patch("/api/drafts/{draft_id}/general", response_model=DraftResponse)
async def update_general(draft_id: str, request: GeneralDetailsUpdate):
    service = get_draft_service()
    return service.respond(service.update_general(draft_id, request))


@app.post("/api/drafts/{draft_id}/save", response_model=SaveDraftResponse)
async def save_draft(draft_id: str):
    """Simulated save; nothing is persisted."""
    notice = await get_draft_service().save_draft(draft_id)
    return SaveDraftResponse(draft_id=draft_id, success=True, notice=notice)


@app.post("/api/drafts/{draft_id}/create", response_model=CreateRFQResponse)
async def create_rfq(draft_id: str):
    """Finalize the RFQ; every section must be complete."""
    rfq = get_draft_service().create_rfq(draft_id)
    return CreateRFQResponse(
        draft_id=draft_id,
        success=True,
        rfq=rfq,
        notice=Notice(title="RFQ Created", description=f"RFQ {draft_id} is ready to send.")
    )


# ============================================================
# ITEMS ENDPOINTS
# ============================================================

@app.post("/api/drafts/{draft_id}/items/catalog", response_model=DraftResponse)
async def add_catalog_items(draft_id: str, request: SelectionRequest):
    added = get_items_service().add_from_catalog(draft_id, SelectionSet(request.ids))
    return _draft_response(draft_id, Notice(title="Items Added", description=f"Added {len(added)} items from the catalog."))


@app.post("/api/drafts/{draft_id}/items/requests", response_model=DraftResponse)
async def add_request_items(draft_id: str, request: SelectionRequest):
    added = get_items_service().add_from_requests(draft_id, SelectionSet(request.ids))
    return _draft_response(draft_id, Notice(title="Items Added", description=f"Added {len(added)} items from open requests."))


@app.post("/api/drafts/{draft_id}/items", response_model=DraftResponse)
async def create_item(draft_id: str, request: NewItemRequest):
    get_items_service().create_item(draft_id, request)
    return _draft_response(draft_id)


@app.put("/api/drafts/{draft_id}/items/group-by", response_model=DraftResponse)
async def group_items(draft_id: str, request: GroupByRequest):
    get_items_service().set_group_by(draft_id, request.field)
    return _draft_response(draft_id)


@app.get("/api/drafts/{draft_id}/items/display", response_model=GroupedListResponse)
async def display_items(draft_id: str):
    return get_items_service().grouped_items(draft_id)


@app.patch("/api/drafts/{draft_id}/items/{item_id}", response_model=DraftResponse)
async def update_item(draft_id: str, item_id: str, request: ItemUpdate):
    get_items_service().update_item(draft_id, item_id, request)
    return _draft_response(draft_id)


@app.delete("/api/drafts/{draft_id}/items/{item_id}", response_model=DraftResponse)
async def remove_item(draft_id: str, item_id: str):
    get_items_service().remove_item(draft_id, item_id)
    return _draft_response(draft_id)


# ============================================================
# QUESTIONNAIRE ENDPOINTS
# ============================================================

@app.post("/api/drafts/{draft_id}/questionnaire/cards", response_model=DraftResponse)
async def add_cards(draft_id: str, request: SelectionRequest):
    added = get_questionnaire_service().add_cards(draft_id, SelectionSet(request.ids))
    return _draft_response(draft_id, Notice(title="Cards Added", description=f"Added {len(added)} cards."))


@app.patch("/api/drafts/{draft_id}/questionnaire/cards/{card_id}", response_model=DraftResponse)
async def update_card(draft_id: str, card_id: str, request: CardSettingsUpdate):
    get_questionnaire_service().update_card_settings(draft_id, card_id, request)
    return _draft_response(draft_id)


@app.delete("/api/drafts/{draft_id}/questionnaire/cards/{card_id}", response_model=DraftResponse)
async def remove_card(draft_id: str, card_id: str):
    get_questionnaire_service().remove_card(draft_id, card_id)
    return _draft_response(draft_id)


@app.put("/api/drafts/{draft_id}/questionnaire/show-before", response_model=DraftResponse)
async def set_show_before(draft_id: str, request: ShowBeforeRequest):
    get_questionnaire_service().set_show_before_rfq_details(draft_id, request.enabled)
    return _draft_response(draft_id)


@app.put("/api/drafts/{draft_id}/questionnaire/group-by", response_model=DraftResponse)
async def group_cards(draft_id: str, request: GroupByRequest):
    get_questionnaire_service().set_group_by(draft_id, request.field)
    return _draft_response(draft_id)


@app.get("/api/drafts/{draft_id}/questionnaire/display", response_model=GroupedListResponse)
async def display_cards(draft_id: str):
    return get_questionnaire_service().grouped_cards(draft_id)


# ============================================================
# SUPPLIER ENDPOINTS
# ============================================================

@app.post("/api/drafts/{draft_id}/suppliers/existing", response_model=DraftResponse)
async def add_existing_suppliers(draft_id: str, request: SelectionRequest):
    added = get_supplier_service().add_existing(draft_id, SelectionSet(request.ids))
    return _draft_response(draft_id, Notice(title="Suppliers Added", description=f"Added {len(added)} suppliers."))


@app.post("/api/drafts/{draft_id}/suppliers", response_model=DraftResponse)
async def create_supplier(draft_id: str, request: NewSupplierRequest):
    get_supplier_service().create_supplier(draft_id, request)
    return _draft_response(draft_id)


@app.delete("/api/drafts/{draft_id}/suppliers/{supplier_id}", response_model=DraftResponse)
async def remove_supplier(draft_id: str, supplier_id: str):
    get_supplier_service().remove_supplier(draft_id, supplier_id)
    return _draft_response(draft_id)


# ============================================================
# TERMS ENDPOINTS
# ============================================================

@app.put("/api/drafts/{draft_id}/terms", response_model=DraftResponse)
async def set_terms(draft_id: str, request: TermsContentRequest):
    get_terms_service().set_terms(draft_id, request.terms)
    return _draft_response(draft_id)


@app.put("/api/drafts/{draft_id}/terms/template", response_model=DraftResponse)
async def select_terms_template(draft_id: str, request: TemplateSelectRequest):
    get_terms_service().select_template(draft_id, request.template_id)
    return _draft_response(draft_id)


@app.post("/api/drafts/{draft_id}/terms/templates", response_model=TermsTemplate)
async def save_terms_template(draft_id: str, request: SaveTermsTemplateRequest):
    return get_terms_service().save_as_template(draft_id, request.name)


@app.get("/api/terms-templates", response_model=List[TermsTemplate])
async def list_terms_templates():
    return get_terms_service().list_templates()


@app.put("/api/terms-templates/{template_id}", response_model=Notice)
async def update_terms_template(template_id: str, request: UpdateTermsTemplateRequest):
    return get_terms_service().update_template(template_id, request.name, request.content)


@app.delete("/api/terms-templates/{template_id}", response_model=Notice)
async def delete_terms_template(template_id: str):
    return get_terms_service().delete_template(template_id)


# ============================================================
# EMAIL ENDPOINTS
# ============================================================

@app.patch("/api/drafts/{draft_id}/email", response_model=DraftResponse)
async def update_email(draft_id: str, request: EmailContentUpdate):
    get_email_service().update_email(draft_id, request)
    return _draft_response(draft_id)


@app.put("/api/drafts/{draft_id}/email/template", response_model=DraftResponse)
async def select_email_template(draft_id: str, request: TemplateSelectRequest):
    get_email_service().select_template(draft_id, request.template_id)
    return _draft_response(draft_id)


@app.post("/api/drafts/{draft_id}/email/templates", response_model=EmailTemplate)
async def save_email_template(draft_id: str, request: SaveEmailTemplateRequest):
    return get_email_service().save_as_template(draft_id, request.name)


@app.get("/api/drafts/{draft_id}/email/preview", response_model=RenderedEmail)
async def preview_email(draft_id: str):
    return get_email_service().preview(draft_id)


@app.get("/api/drafts/{draft_id}/email/rendered", response_model=List[RenderedEmail])
async def render_supplier_emails(draft_id: str):
    return get_email_service().render_for_suppliers(draft_id)


@app.get("/api/email-templates", response_model=List[EmailTemplate])
async def list_email_templates():
    return get_email_service().list_templates()


@app.get("/api/email-templates/variables", response_model=List[TemplateVariable])
async def list_email_variables():
    return get_email_service().variables()


@app.put("/api/email-templates/{template_id}", response_model=Notice)
async def update_email_template(template_id: str, request: UpdateEmailTemplateRequest):
    content = EmailContent(
        subject=request.subject,
        header=request.header,
        body=request.body,
        footer=request.footer
    )
    return get_email_service().update_template(template_id, request.name, content)


@app.delete("/api/email-templates/{template_id}", response_model=Notice)
async def delete_email_template(template_id: str):
    return get_email_service().delete_template(template_id)


# ============================================================
# RFQ TEMPLATE ENDPOINTS
# ============================================================

@app.get("/api/drafts/{draft_id}/summary", response_model=List[SectionSummary])
async def get_draft_summary(draft_id: str):
    return get_template_service().preview(draft_id)


@app.get("/api/rfq-templates", response_model=List[RFQTemplate])
async def list_rfq_templates():
    return get_template_service().list_templates()


@app.post("/api/rfq-templates", response_model=SaveRFQTemplateResponse)
async def save_rfq_template(request: SaveRFQTemplateRequest):
    template, notice = await get_template_service().save_template(
        request.draft_id, request.name, request.description
    )
    return SaveRFQTemplateResponse(template=template, notice=notice)


def _draft_response(draft_id: str, notice: Optional[Notice] = None) -> DraftResponse:
    service = get_draft_service()
    return service.respond(service.get_draft(draft_id), notice)


# ============================================================
# RUN SERVER
# ============================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
