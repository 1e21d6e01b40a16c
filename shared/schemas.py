"""
Shared Pydantic schemas for frontend-backend communication.
All API request/response models are defined here.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, date
from pydantic import BaseModel, Field, field_validator

from shared.constants import (
    ItemSource, SupplierSource, ScoringType, DetailLevel, NoticeVariant,
    DEFAULT_UNIT, DEFAULT_CURRENCY, DEFAULT_SCORING_WEIGHT, DEFAULT_MAX_SCORE
)


# ============================================================
# NOTICES
# ============================================================

class Notice(BaseModel):
    """Toast-style message shown to the user after an operation."""
    title: str
    description: str = ""
    variant: NoticeVariant = NoticeVariant.DEFAULT


# ============================================================
# GENERAL DETAILS
# ============================================================

class GeneralDetails(BaseModel):
    """Basic RFQ information and settings."""
    name: str = ""
    requesters: str = ""
    assignee: str = ""
    project: str = ""
    budget: str = ""
    department: str = ""
    location: str = ""
    delivery_address: str = ""
    expected_delivery_date: Optional[date] = None
    currency: str = DEFAULT_CURRENCY
    allow_multiple_currencies: bool = False
    payment_terms: str = ""
    budget_level: DetailLevel = DetailLevel.GENERAL
    delivery_date_level: DetailLevel = DetailLevel.GENERAL
    # Advanced settings
    multi_round_enabled: bool = False
    number_of_rounds: int = Field(default=2, ge=2, le=3)
    auto_elimination_enabled: bool = False
    suppliers_to_remove: int = Field(default=1, ge=1, le=10)


class GeneralDetailsUpdate(BaseModel):
    """Partial update of general details; unset fields are left alone."""
    name: Optional[str] = None
    requesters: Optional[str] = None
    assignee: Optional[str] = None
    project: Optional[str] = None
    budget: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    delivery_address: Optional[str] = None
    expected_delivery_date: Optional[date] = None
    currency: Optional[str] = None
    allow_multiple_currencies: Optional[bool] = None
    payment_terms: Optional[str] = None
    budget_level: Optional[DetailLevel] = None
    delivery_date_level: Optional[DetailLevel] = None
    multi_round_enabled: Optional[bool] = None
    number_of_rounds: Optional[int] = Field(default=None, ge=2, le=3)
    auto_elimination_enabled: Optional[bool] = None
    suppliers_to_remove: Optional[int] = Field(default=None, ge=1, le=10)


# ============================================================
# ITEMS
# ============================================================

def _at_least_one(value: Any) -> int:
    """Quantities that are missing, unparseable or below 1 become 1."""
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return 1
    return quantity if quantity >= 1 else 1


class CatalogEntry(BaseModel):
    """A catalog item or open purchase request that can be pulled into an RFQ."""
    id: str
    name: str
    description: str
    category: str
    unit: str


class Item(BaseModel):
    """An RFQ line item."""
    id: str
    name: str
    description: str = ""
    quantity: int = 1
    unit: str = DEFAULT_UNIT
    category: str = ""
    specifications: str = ""
    source: ItemSource
    group: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value):
        return _at_least_one(value)


class NewItemRequest(BaseModel):
    """Create a new item by hand."""
    name: str
    description: str = ""
    quantity: int = 1
    unit: str = DEFAULT_UNIT
    category: str = ""
    specifications: str = ""

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value):
        return _at_least_one(value)


class ItemUpdate(BaseModel):
    """Partial update of an item."""
    name: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    specifications: Optional[str] = None
    group: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value):
        if value is None:
            return None
        return _at_least_one(value)


# ============================================================
# QUESTIONNAIRE
# ============================================================

class AvailableCard(BaseModel):
    """An information card suppliers can be asked to fill in."""
    id: str
    name: str
    description: str
    questions: List[str] = Field(default_factory=list)


class QuestionnaireCard(BaseModel):
    """A card added to the RFQ questionnaire, with its scoring settings."""
    id: str
    name: str
    description: str = ""
    questions: List[str] = Field(default_factory=list)
    scoring_type: ScoringType = ScoringType.AUTOMATIC
    scoring_weight: int = DEFAULT_SCORING_WEIGHT
    max_score: int = DEFAULT_MAX_SCORE
    group: Optional[str] = None


class CardSettingsUpdate(BaseModel):
    """Scoring settings for a questionnaire card."""
    scoring_type: Optional[ScoringType] = None
    scoring_weight: Optional[int] = Field(default=None, ge=1, le=100)
    max_score: Optional[int] = Field(default=None, ge=1, le=1000)
    group: Optional[str] = None


class QuestionnaireData(BaseModel):
    cards: List[QuestionnaireCard] = Field(default_factory=list)
    show_before_rfq_details: bool = False
    group_by: str = ""


# ============================================================
# SUPPLIERS
# ============================================================

class Supplier(BaseModel):
    """A supplier invited to quote."""
    id: str
    name: str
    email: str = ""
    phone: str = ""
    location: str = ""
    category: List[str] = Field(default_factory=list)
    rating: float = 0.0
    description: str = ""
    certifications: List[str] = Field(default_factory=list)
    years_in_business: int = 0
    source: SupplierSource = SupplierSource.EXISTING


class NewSupplierRequest(BaseModel):
    name: str
    email: str = ""
    phone: str = ""
    location: str = ""
    category: List[str] = Field(default_factory=list)
    description: str = ""
    certifications: List[str] = Field(default_factory=list)
    years_in_business: int = Field(default=0, ge=0)


class SupplierSearchFilters(BaseModel):
    """Advanced search filters. Zero or empty values are ignored."""
    category: str = ""
    min_rating: float = 0.0
    location: str = ""
    min_years: int = 0


# ============================================================
# TERMS & EMAIL
# ============================================================

class TermsData(BaseModel):
    terms: str = ""
    selected_template: str = ""


class EmailData(BaseModel):
    selected_template: str = ""
    subject: str = ""
    header: str = ""
    body: str = ""
    footer: str = ""


class EmailContent(BaseModel):
    """The four editable parts of an email, without template bookkeeping."""
    subject: str = ""
    header: str = ""
    body: str = ""
    footer: str = ""


class EmailContentUpdate(BaseModel):
    subject: Optional[str] = None
    header: Optional[str] = None
    body: Optional[str] = None
    footer: Optional[str] = None


class TermsTemplate(BaseModel):
    id: str
    name: str
    content: str
    created_at: datetime
    last_used: Optional[datetime] = None


class EmailTemplate(BaseModel):
    id: str
    name: str
    subject: str
    header: str = ""
    body: str
    footer: str = ""
    created_at: datetime
    last_used: Optional[datetime] = None


class SaveTermsTemplateRequest(BaseModel):
    name: str


class UpdateTermsTemplateRequest(BaseModel):
    name: str
    content: str


class SaveEmailTemplateRequest(BaseModel):
    name: str


class UpdateEmailTemplateRequest(BaseModel):
    name: str
    subject: str
    header: str = ""
    body: str
    footer: str = ""


class RenderedEmail(BaseModel):
    """An email with its variables substituted."""
    supplier_id: Optional[str] = None
    supplier_name: Optional[str] = None
    subject: str
    header: str
    body: str
    footer: str


class TemplateVariable(BaseModel):
    token: str
    description: str
    sample_value: str


# ============================================================
# DRAFT SCHEMAS
# ============================================================

class RFQDraft(BaseModel):
    """Full wizard state for one RFQ being composed."""
    draft_id: str
    general: GeneralDetails = Field(default_factory=GeneralDetails)
    items: List[Item] = Field(default_factory=list)
    items_group_by: str = ""
    questionnaire: QuestionnaireData = Field(default_factory=QuestionnaireData)
    suppliers: List[Supplier] = Field(default_factory=list)
    terms: TermsData = Field(default_factory=TermsData)
    email: EmailData = Field(default_factory=EmailData)
    # Insertion order is the order sections completed in
    completed_sections: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def to_document(self) -> Dict[str, Any]:
        """The RFQ object handed to a backend: the six sections, nothing else."""
        return {
            "general": self.general.model_dump(mode="json"),
            "items": [item.model_dump(mode="json") for item in self.items],
            "questionnaire": self.questionnaire.model_dump(mode="json"),
            "suppliers": [s.model_dump(mode="json") for s in self.suppliers],
            "terms": self.terms.model_dump(mode="json"),
            "email": self.email.model_dump(mode="json"),
        }


class SectionStatus(BaseModel):
    section_id: str
    title: str
    description: str
    requirement: str
    completed: bool


class ProgressResponse(BaseModel):
    """Aggregate completion for a draft."""
    draft_id: str
    completed_sections: List[str]
    total_sections: int
    percent: float
    percent_display: int
    can_save_template: bool
    can_create_rfq: bool
    sections: List[SectionStatus] = Field(default_factory=list)


class DraftResponse(BaseModel):
    """Draft plus progress, returned by every mutating endpoint."""
    draft: RFQDraft
    progress: ProgressResponse
    notice: Optional[Notice] = None


class DraftSummary(BaseModel):
    draft_id: str
    name: str
    percent_display: int
    updated_at: datetime


class DraftListResponse(BaseModel):
    drafts: List[DraftSummary]
    total_count: int


class SelectionRequest(BaseModel):
    """A batch of checked IDs from a selection dialog."""
    ids: List[str] = Field(default_factory=list)


class GroupByRequest(BaseModel):
    """Empty string or "none" turns grouping off."""
    field: str = ""


class ShowBeforeRequest(BaseModel):
    enabled: bool


class TermsContentRequest(BaseModel):
    terms: str


class TemplateSelectRequest(BaseModel):
    template_id: str


class DisplayRow(BaseModel):
    """A data row or a synthetic group header row."""
    id: str
    is_group_header: bool = False
    group_name: Optional[str] = None
    count: int = 0
    record: Optional[Dict[str, Any]] = None


class GroupedListResponse(BaseModel):
    group_by: str
    rows: List[DisplayRow]
    groups: Dict[str, int] = Field(default_factory=dict)


# ============================================================
# RFQ TEMPLATE SCHEMAS
# ============================================================

class SectionSummary(BaseModel):
    section_id: str
    name: str
    lines: List[str] = Field(default_factory=list)


class SaveRFQTemplateRequest(BaseModel):
    draft_id: str
    name: str
    description: str = ""


class RFQTemplate(BaseModel):
    id: str
    name: str
    description: str = ""
    data: Dict[str, Any]
    created_at: datetime
    sections: int


class SaveRFQTemplateResponse(BaseModel):
    template: RFQTemplate
    notice: Notice


class CreateRFQResponse(BaseModel):
    draft_id: str
    success: bool
    rfq: Dict[str, Any]
    notice: Notice


class SaveDraftResponse(BaseModel):
    draft_id: str
    success: bool
    notice: Notice


# ============================================================
# CATALOG / HEALTH
# ============================================================

class CatalogOptions(BaseModel):
    """Dropdown option lists for the wizard forms."""
    projects: List[str]
    budgets: List[str]
    currencies: List[str]
    payment_terms: List[str]
    round_options: List[int]
    units: List[str]
    item_categories: List[str]
    supplier_categories: List[str]
    rating_filters: List[float]
    item_group_fields: Dict[str, str]
    card_group_fields: Dict[str, str]


class HealthCheckResponse(BaseModel):
    status: str
    version: str
    components: Dict[str, str] = Field(default_factory=dict)
