"""
Static mock data standing in for the catalog, open requests, supplier master
and template libraries.

Every accessor returns fresh model instances so callers can mutate what they
get back without touching the source lists.
"""
from datetime import datetime
from typing import List

from shared.schemas import (
    CatalogEntry, AvailableCard, Supplier, TermsTemplate, EmailTemplate
)
from shared.constants import SupplierSource


_CATALOG_ITEMS = [
    {"id": "cat1", "name": "Laptop Dell XPS 13", "description": "High-performance laptop", "category": "Electronics", "unit": "pcs"},
    {"id": "cat2", "name": "Office Chair Ergonomic", "description": "Comfortable office chair", "category": "Furniture", "unit": "pcs"},
    {"id": "cat3", "name": "Printer HP LaserJet", "description": "Laser printer", "category": "Electronics", "unit": "pcs"},
    {"id": "cat4", "name": "Desk Lamp LED", "description": "LED desk lamp", "category": "Furniture", "unit": "pcs"},
]

_OPEN_REQUESTS = [
    {"id": "req1", "name": "Software Licenses", "description": "Microsoft Office licenses", "category": "Software", "unit": "licenses"},
    {"id": "req2", "name": "Marketing Materials", "description": "Brochures and flyers", "category": "Marketing", "unit": "pcs"},
    {"id": "req3", "name": "Catering Services", "description": "Event catering", "category": "Services", "unit": "events"},
]

_AVAILABLE_CARDS = [
    {
        "id": "card1",
        "name": "Company Information",
        "description": "Basic company details and credentials",
        "questions": ["Company name", "Registration number", "Years in business", "Number of employees"]
    },
    {
        "id": "card2",
        "name": "Financial Information",
        "description": "Financial stability and credit information",
        "questions": ["Annual revenue", "Credit rating", "Bank references", "Insurance coverage"]
    },
    {
        "id": "card3",
        "name": "Technical Capabilities",
        "description": "Technical expertise and certifications",
        "questions": ["Certifications held", "Technical team size", "Equipment capabilities", "Quality standards"]
    },
    {
        "id": "card4",
        "name": "References",
        "description": "Client references and past projects",
        "questions": ["Recent client references", "Similar project experience", "Case studies", "Testimonials"]
    },
    {
        "id": "card5",
        "name": "Compliance & Safety",
        "description": "Safety records and compliance information",
        "questions": ["Safety certifications", "Incident reports", "Compliance records", "Environmental policies"]
    },
]

_EXISTING_SUPPLIERS = [
    {
        "id": "sup1",
        "name": "TechCorp Solutions",
        "email": "contact@techcorp.com",
        "phone": "+1-555-0123",
        "location": "New York, NY",
        "category": ["Electronics", "Software"],
        "rating": 4.8,
        "description": "Leading technology solutions provider",
        "certifications": ["ISO 9001", "ISO 27001"],
        "years_in_business": 15
    },
    {
        "id": "sup2",
        "name": "Global Furniture Co",
        "email": "sales@globalfurniture.com",
        "phone": "+1-555-0124",
        "location": "Los Angeles, CA",
        "category": ["Furniture", "Office Supplies"],
        "rating": 4.5,
        "description": "Premium office furniture manufacturer",
        "certifications": ["FSC Certified", "GREENGUARD"],
        "years_in_business": 22
    },
    {
        "id": "sup3",
        "name": "Swift Logistics",
        "email": "info@swiftlogistics.com",
        "phone": "+1-555-0125",
        "location": "Chicago, IL",
        "category": ["Logistics", "Transportation"],
        "rating": 4.6,
        "description": "Reliable logistics and transportation services",
        "certifications": ["DOT Certified", "ISO 14001"],
        "years_in_business": 8
    },
    {
        "id": "sup4",
        "name": "Creative Marketing Hub",
        "email": "hello@creativehub.com",
        "phone": "+1-555-0126",
        "location": "Austin, TX",
        "category": ["Marketing", "Design"],
        "rating": 4.7,
        "description": "Full-service marketing and design agency",
        "certifications": ["Google Partner", "HubSpot Certified"],
        "years_in_business": 12
    },
    {
        "id": "sup5",
        "name": "Industrial Equipment Pro",
        "email": "sales@industrialequip.com",
        "phone": "+1-555-0127",
        "location": "Detroit, MI",
        "category": ["Industrial", "Manufacturing"],
        "rating": 4.4,
        "description": "Industrial equipment and machinery supplier",
        "certifications": ["OSHA Compliant", "CE Marked"],
        "years_in_business": 28
    },
]

_TERMS_TEMPLATES = [
    {
        "id": "template1",
        "name": "Standard Commercial Terms",
        "content": """1. PAYMENT TERMS
Payment shall be made within 30 days of invoice date. Late payments may incur interest charges at 1.5% per month.

2. DELIVERY
Delivery dates are estimates and not guaranteed. Risk of loss passes to buyer upon delivery.

3. WARRANTIES
All goods are warranted to be free from defects in material and workmanship for a period of one year.

4. LIMITATION OF LIABILITY
Seller's liability shall not exceed the purchase price of the goods sold.

5. GOVERNING LAW
This agreement shall be governed by the laws of [State/Country].""",
        "created_at": datetime(2024, 1, 15),
        "last_used": datetime(2024, 1, 20)
    },
    {
        "id": "template2",
        "name": "Service Agreement Terms",
        "content": """1. SCOPE OF SERVICES
Services to be provided as detailed in the attached statement of work.

2. PAYMENT SCHEDULE
Payment terms: 50% upon contract signing, 50% upon completion.

3. INTELLECTUAL PROPERTY
All work product shall remain the property of the client upon full payment.

4. CONFIDENTIALITY
Both parties agree to maintain confidentiality of proprietary information.

5. TERMINATION
Either party may terminate with 30 days written notice.""",
        "created_at": datetime(2024, 1, 10),
        "last_used": datetime(2024, 1, 18)
    },
    {
        "id": "template3",
        "name": "International Trade Terms",
        "content": """1. INCOTERMS
All shipments shall be FOB shipping point unless otherwise specified.

2. CURRENCY
All prices quoted in USD unless otherwise stated.

3. EXPORT COMPLIANCE
Buyer responsible for all export/import licenses and compliance.

4. FORCE MAJEURE
Neither party liable for delays due to circumstances beyond reasonable control.

5. DISPUTE RESOLUTION
Disputes resolved through binding arbitration.""",
        "created_at": datetime(2024, 1, 5),
        "last_used": None
    },
]

_EMAIL_TEMPLATES = [
    {
        "id": "template1",
        "name": "Standard RFQ Invitation",
        "subject": "Request for Quotation - {{RFQ_NAME}}",
        "header": "Dear {{SUPPLIER_NAME}},",
        "body": """We are pleased to invite you to participate in our Request for Quotation (RFQ) process.

**RFQ Details:**
- RFQ Name: {{RFQ_NAME}}
- Project: {{PROJECT_NAME}}
- Submission Deadline: {{DEADLINE}}

Please review the attached RFQ documents and submit your quotation through our supplier portal.

If you have any questions, please don't hesitate to contact us.""",
        "footer": """Best regards,
{{REQUESTER_NAME}}
{{COMPANY_NAME}}
{{CONTACT_EMAIL}}""",
        "created_at": datetime(2024, 1, 15),
        "last_used": datetime(2024, 1, 20)
    },
    {
        "id": "template2",
        "name": "Urgent RFQ Request",
        "subject": "URGENT: Request for Quotation - {{RFQ_NAME}}",
        "header": "Dear {{SUPPLIER_NAME}},",
        "body": """We have an urgent requirement and would like to invite you to participate in our expedited RFQ process.

**URGENT RFQ Details:**
- RFQ Name: {{RFQ_NAME}}
- Project: {{PROJECT_NAME}}
- Submission Deadline: {{DEADLINE}} (URGENT)
- Expected Award Date: {{AWARD_DATE}}

Due to the urgent nature of this request, please prioritize your response.

Please submit your quotation as soon as possible through our supplier portal.""",
        "footer": """Urgent regards,
{{REQUESTER_NAME}}
{{COMPANY_NAME}}
{{CONTACT_EMAIL}}
{{PHONE_NUMBER}}""",
        "created_at": datetime(2024, 1, 10),
        "last_used": datetime(2024, 1, 18)
    },
    {
        "id": "template3",
        "name": "Multi-Round RFQ Invitation",
        "subject": "Multi-Round RFQ Invitation - {{RFQ_NAME}}",
        "header": "Dear {{SUPPLIER_NAME}},",
        "body": """We are conducting a multi-round RFQ process and would like to invite you to participate.

**Multi-Round RFQ Details:**
- RFQ Name: {{RFQ_NAME}}
- Project: {{PROJECT_NAME}}
- Number of Rounds: {{ROUNDS}}
- Round 1 Deadline: {{ROUND1_DEADLINE}}
- Final Award Date: {{AWARD_DATE}}

This is a competitive process with multiple evaluation rounds. Only qualified suppliers will advance to subsequent rounds.

Please review the attached documents and submit your initial quotation.""",
        "footer": """Best regards,
{{REQUESTER_NAME}}
{{COMPANY_NAME}}
{{CONTACT_EMAIL}}""",
        "created_at": datetime(2024, 1, 5),
        "last_used": None
    },
]


def get_catalog_items() -> List[CatalogEntry]:
    return [CatalogEntry(**entry) for entry in _CATALOG_ITEMS]


def get_open_requests() -> List[CatalogEntry]:
    return [CatalogEntry(**entry) for entry in _OPEN_REQUESTS]


def get_available_cards() -> List[AvailableCard]:
    return [AvailableCard(**card) for card in _AVAILABLE_CARDS]


def get_existing_suppliers() -> List[Supplier]:
    return [
        Supplier(**supplier, source=SupplierSource.EXISTING)
        for supplier in _EXISTING_SUPPLIERS
    ]


def get_default_terms_templates() -> List[TermsTemplate]:
    """Seed content for a fresh terms template library."""
    return [TermsTemplate(**template) for template in _TERMS_TEMPLATES]


def get_default_email_templates() -> List[EmailTemplate]:
    """Seed content for a fresh email template library."""
    return [EmailTemplate(**template) for template in _EMAIL_TEMPLATES]
