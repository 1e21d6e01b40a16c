"""
Tests for the wizard section services against an in-memory draft store.
"""
import sys
import asyncio
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from pydantic import ValidationError
from backend.services.errors import WizardError, DraftNotFoundError, RecordNotFoundError
from backend.services.items_service import ItemsService
from backend.services.questionnaire_service import QuestionnaireService
from backend.services.supplier_service import SupplierService
from backend.services.terms_service import TermsService
from backend.services.email_service import EmailService
from backend.services.template_service import RFQTemplateService
from shared.selection import SelectionSet
from shared.constants import ItemSource, ScoringType, SupplierSource, UNGROUPED
from shared.schemas import (
    GeneralDetailsUpdate, NewItemRequest, ItemUpdate, CardSettingsUpdate,
    NewSupplierRequest, SupplierSearchFilters, EmailContentUpdate, EmailContent, RFQTemplate, Notice
)


class TestDraftService:

    def test_unknown_draft(self, drafts):
        with pytest.raises(DraftNotFoundError):
            drafts.get_draft("RFQ-MISSING")

    def test_general_completes_when_all_required_filled(self, drafts, draft, filled_general):
        drafts.update_general(draft.draft_id, GeneralDetailsUpdate(name="Only a name"))
        assert "general" not in draft.completed_sections
        drafts.update_general(draft.draft_id, filled_general)
        assert "general" in draft.completed_sections

    def test_general_incomplete_until_every_field_filled(self, drafts, draft, filled_general):
        fields = list(filled_general.model_dump(exclude_unset=True).items())
        assert len(fields) == 7
        for field, value in fields[:-1]:
            drafts.update_general(draft.draft_id, GeneralDetailsUpdate(**{field: value}))
            assert "general" not in draft.completed_sections
        field, value = fields[-1]
        drafts.update_general(draft.draft_id, GeneralDetailsUpdate(**{field: value}))
        assert "general" in draft.completed_sections

    @pytest.mark.parametrize("left_out", ["name", "requesters", "assignee", "project",
                                          "budget", "department", "location"])
    def test_general_needs_each_field(self, drafts, draft, filled_general, left_out):
        drafts.update_general(draft.draft_id, filled_general.model_copy(update={left_out: ""}))
        assert "general" not in draft.completed_sections
        assert drafts.get_progress(draft.draft_id).percent_display == 0

    def test_partial_update_keeps_other_fields(self, drafts, draft, filled_general):
        drafts.update_general(draft.draft_id, filled_general)
        drafts.update_general(draft.draft_id, GeneralDetailsUpdate(location="Boston"))
        assert draft.general.name == "Office Equipment RFQ 2024"
        assert draft.general.location == "Boston"

    @pytest.mark.parametrize("rounds", [-2, 0, 1, 4])
    def test_rounds_bounds_on_request(self, rounds):
        with pytest.raises(ValidationError):
            GeneralDetailsUpdate(number_of_rounds=rounds)

    def test_merge_rejects_rounds_out_of_range(self, drafts, draft):
        updates = GeneralDetailsUpdate.model_construct(number_of_rounds=-2)
        with pytest.raises(WizardError):
            drafts.update_general(draft.draft_id, updates)
        assert draft.general.number_of_rounds == 2

    def test_save_draft_notice(self, drafts, draft, no_delay):
        notice = asyncio.run(drafts.save_draft(draft.draft_id))
        assert notice.title == "Draft Saved"

    def test_create_rfq_requires_every_section(self, drafts, draft):
        with pytest.raises(WizardError) as exc:
            drafts.create_rfq(draft.draft_id)
        assert exc.value.title == "RFQ incomplete"

    def test_create_rfq_returns_six_sections(self, drafts, draft):
        draft.completed_sections = ["general", "items", "questionnaire", "suppliers", "terms", "email"]
        document = drafts.create_rfq(draft.draft_id)
        assert set(document) == {"general", "items", "questionnaire", "suppliers", "terms", "email"}

    def test_list_drafts_names_untitled(self, drafts, draft):
        summaries = drafts.list_drafts()
        assert summaries[0].name == "Untitled RFQ"
        assert summaries[0].percent_display == 0


class TestItemsService:

    def test_catalog_then_new_item_sources(self, drafts, draft):
        service = ItemsService(drafts)
        service.add_from_catalog(draft.draft_id, SelectionSet(["cat1", "cat2"]))
        service.create_item(draft.draft_id, NewItemRequest(name="Custom Widget", quantity=5))
        assert [i.source for i in draft.items] == [ItemSource.CATALOG, ItemSource.CATALOG, ItemSource.NEW]
        assert draft.items[0].quantity == 1
        assert draft.items[2].quantity == 5
        assert "items" in draft.completed_sections

    def test_import_clears_selection(self, drafts, draft):
        selection = SelectionSet(["req1"])
        added = ItemsService(drafts).add_from_requests(draft.draft_id, selection)
        assert added[0].source == ItemSource.REQUEST
        assert added[0].unit == "licenses"
        assert len(selection) == 0

    def test_empty_selection_rejected(self, drafts, draft):
        with pytest.raises(WizardError):
            ItemsService(drafts).add_from_catalog(draft.draft_id, SelectionSet())

    def test_unknown_catalog_id(self, drafts, draft):
        with pytest.raises(RecordNotFoundError):
            ItemsService(drafts).add_from_catalog(draft.draft_id, SelectionSet(["nope"]))

    def test_generated_ids_are_unique(self, drafts, draft):
        service = ItemsService(drafts)
        service.add_from_catalog(draft.draft_id, SelectionSet(["cat1"]))
        service.add_from_catalog(draft.draft_id, SelectionSet(["cat1"]))
        assert len({i.id for i in draft.items}) == 2

    def test_new_item_needs_name(self, drafts, draft):
        with pytest.raises(WizardError):
            ItemsService(drafts).create_item(draft.draft_id, NewItemRequest(name="  "))

    def test_quantity_below_one_coerced(self, drafts, draft):
        service = ItemsService(drafts)
        item = service.create_item(draft.draft_id, NewItemRequest(name="Widget"))
        updated = service.update_item(draft.draft_id, item.id, ItemUpdate(quantity=0))
        assert updated.quantity == 1

    def test_remove_keeps_completion(self, drafts, draft):
        service = ItemsService(drafts)
        item = service.create_item(draft.draft_id, NewItemRequest(name="Widget"))
        service.remove_item(draft.draft_id, item.id)
        assert draft.items == []
        assert "items" in draft.completed_sections

    def test_grouped_by_category(self, drafts, draft):
        service = ItemsService(drafts)
        service.add_from_catalog(draft.draft_id, SelectionSet(["cat1", "cat2", "cat3"]))
        service.create_item(draft.draft_id, NewItemRequest(name="Widget"))
        service.set_group_by(draft.draft_id, "category")
        display = service.grouped_items(draft.draft_id)
        assert display.groups == {"Electronics": 2, "Furniture": 1, UNGROUPED: 1}
        assert display.rows[0].id == "group_Electronics"

    def test_invalid_group_field(self, drafts, draft):
        with pytest.raises(WizardError):
            ItemsService(drafts).set_group_by(draft.draft_id, "price")


class TestQuestionnaireService:

    def test_cards_get_default_scoring(self, drafts, draft):
        cards = QuestionnaireService(drafts).add_cards(draft.draft_id, SelectionSet(["card1", "card3"]))
        assert [c.id for c in cards] == ["card1", "card3"]
        assert cards[0].scoring_type == ScoringType.AUTOMATIC
        assert cards[0].scoring_weight == 10
        assert cards[0].max_score == 100
        assert "questionnaire" in draft.completed_sections

    def test_duplicate_cards_skipped(self, drafts, draft):
        service = QuestionnaireService(drafts)
        service.add_cards(draft.draft_id, SelectionSet(["card1"]))
        service.add_cards(draft.draft_id, SelectionSet(["card1", "card2"]))
        assert [c.id for c in draft.questionnaire.cards] == ["card1", "card2"]

    def test_update_settings(self, drafts, draft):
        service = QuestionnaireService(drafts)
        service.add_cards(draft.draft_id, SelectionSet(["card2"]))
        card = service.update_card_settings(
            draft.draft_id, "card2",
            CardSettingsUpdate(scoring_type=ScoringType.MANUAL, scoring_weight=25, group="Finance")
        )
        assert card.scoring_type == ScoringType.MANUAL
        assert card.scoring_weight == 25
        assert card.max_score == 100
        assert card.group == "Finance"

    def test_blank_group_clears(self, drafts, draft):
        service = QuestionnaireService(drafts)
        service.add_cards(draft.draft_id, SelectionSet(["card2"]))
        service.update_card_settings(draft.draft_id, "card2", CardSettingsUpdate(group="Finance"))
        card = service.update_card_settings(draft.draft_id, "card2", CardSettingsUpdate(group="  "))
        assert card.group is None

    def test_group_by_custom_group(self, drafts, draft):
        service = QuestionnaireService(drafts)
        service.add_cards(draft.draft_id, SelectionSet(["card1", "card2"]))
        service.update_card_settings(draft.draft_id, "card2", CardSettingsUpdate(group="Finance"))
        service.set_group_by(draft.draft_id, "group")
        display = service.grouped_cards(draft.draft_id)
        assert display.groups == {UNGROUPED: 1, "Finance": 1}

    def test_remove_unknown_card(self, drafts, draft):
        with pytest.raises(RecordNotFoundError):
            QuestionnaireService(drafts).remove_card(draft.draft_id, "card9")


class TestSupplierService:

    def test_quick_search_matches_name_or_category(self, drafts):
        service = SupplierService(drafts)
        assert [s.id for s in service.quick_search("techcorp")] == ["sup1"]
        assert [s.id for s in service.quick_search("furniture")] == ["sup2"]
        assert len(service.quick_search("")) == 5

    def test_advanced_search(self, drafts):
        service = SupplierService(drafts)
        results = service.advanced_search(SupplierSearchFilters(min_rating=4.6, min_years=10))
        assert [s.id for s in results] == ["sup1", "sup4"]

    def test_add_existing_skips_invited(self, drafts, draft):
        service = SupplierService(drafts)
        service.add_existing(draft.draft_id, SelectionSet(["sup1"]))
        added = service.add_existing(draft.draft_id, SelectionSet(["sup1", "sup3"]))
        assert [s.id for s in added] == ["sup3"]
        assert all(s.source == SupplierSource.EXISTING for s in draft.suppliers)
        assert "suppliers" in draft.completed_sections

    def test_create_supplier(self, drafts, draft):
        supplier = SupplierService(drafts).create_supplier(
            draft.draft_id,
            NewSupplierRequest(name="New Vendor", email="sales@newvendor.com", category=["Electronics"])
        )
        assert supplier.source == SupplierSource.NEW
        assert supplier.rating == 0.0
        assert supplier.id.startswith("sup_")

    def test_new_supplier_needs_name(self, drafts, draft):
        with pytest.raises(WizardError):
            SupplierService(drafts).create_supplier(
                draft.draft_id, NewSupplierRequest(name="", email="sales@newvendor.com")
            )

    @pytest.mark.parametrize("email", ["", "   "])
    def test_new_supplier_needs_email(self, drafts, draft, email):
        with pytest.raises(WizardError) as exc:
            SupplierService(drafts).create_supplier(draft.draft_id, NewSupplierRequest(name="New Vendor", email=email))
        assert exc.value.title == "Supplier email required"
        assert draft.suppliers == []
        assert "suppliers" not in draft.completed_sections


class TestTermsService:

    def test_select_template_loads_content(self, drafts, draft):
        service = TermsService(drafts)
        service.select_template(draft.draft_id, "template1")
        assert draft.terms.selected_template == "template1"
        assert draft.terms.terms.startswith("1. PAYMENT TERMS")
        assert "terms" in draft.completed_sections
        assert service.get_template("template1").last_used is not None

    def test_custom_keeps_text(self, drafts, draft):
        service = TermsService(drafts)
        service.select_template(draft.draft_id, "template1")
        service.select_template(draft.draft_id, "custom")
        assert draft.terms.selected_template == ""
        assert draft.terms.terms.startswith("1. PAYMENT TERMS")

    def test_whitespace_terms_do_not_complete(self, drafts, draft):
        TermsService(drafts).set_terms(draft.draft_id, "   ")
        assert "terms" not in draft.completed_sections

    def test_save_as_template(self, drafts, draft):
        service = TermsService(drafts)
        service.set_terms(draft.draft_id, "Net 30")
        template = service.save_as_template(draft.draft_id, "My Terms")
        assert template.content == "Net 30"
        assert len(service.list_templates()) == 4

    def test_save_as_template_needs_text(self, drafts, draft):
        with pytest.raises(WizardError):
            TermsService(drafts).save_as_template(draft.draft_id, "My Terms")

    def test_update_propagates_to_selected_drafts(self, drafts, draft):
        service = TermsService(drafts)
        service.select_template(draft.draft_id, "template2")
        service.update_template("template2", "Renamed", "New text")
        assert draft.terms.terms == "New text"

    def test_delete_clears_selection(self, drafts, draft):
        service = TermsService(drafts)
        service.select_template(draft.draft_id, "template2")
        service.delete_template("template2")
        assert draft.terms.selected_template == ""
        with pytest.raises(RecordNotFoundError):
            service.get_template("template2")


class TestEmailService:

    def test_select_template(self, drafts, draft):
        EmailService(drafts).select_template(draft.draft_id, "template1")
        assert draft.email.subject == "Request for Quotation - {{RFQ_NAME}}"
        assert "email" in draft.completed_sections

    def test_custom_resets_email(self, drafts, draft):
        service = EmailService(drafts)
        service.select_template(draft.draft_id, "template1")
        service.select_template(draft.draft_id, "custom")
        assert draft.email.subject == ""
        assert draft.email.selected_template == ""

    def test_update_email_merges(self, drafts, draft):
        service = EmailService(drafts)
        service.update_email(draft.draft_id, EmailContentUpdate(subject="Hello"))
        assert "email" not in draft.completed_sections
        service.update_email(draft.draft_id, EmailContentUpdate(body="Body"))
        assert draft.email.subject == "Hello"
        assert "email" in draft.completed_sections

    def test_body_alone_does_not_complete(self, drafts, draft):
        service = EmailService(drafts)
        service.update_email(draft.draft_id, EmailContentUpdate(body="Please quote."))
        assert "email" not in draft.completed_sections
        service.update_email(draft.draft_id, EmailContentUpdate(subject="   "))
        assert "email" not in draft.completed_sections
        service.update_email(draft.draft_id, EmailContentUpdate(subject="RFQ {{RFQ_NAME}}"))
        assert "email" in draft.completed_sections

    def test_save_needs_subject_and_body(self, drafts, draft):
        service = EmailService(drafts)
        service.update_email(draft.draft_id, EmailContentUpdate(subject="Hello"))
        with pytest.raises(WizardError):
            service.save_as_template(draft.draft_id, "Mine")

    def test_update_template_rejects_empty_body(self, drafts):
        with pytest.raises(WizardError):
            EmailService(drafts).update_template("template1", "Name", EmailContent(subject="S", body=" "))

    def test_preview(self, drafts, draft):
        service = EmailService(drafts)
        service.select_template(draft.draft_id, "template1")
        assert service.preview(draft.draft_id).subject == "Request for Quotation - Office Equipment RFQ 2024"

    def test_render_for_suppliers(self, drafts, draft):
        drafts.update_general(draft.draft_id, GeneralDetailsUpdate(name="Q1 Laptops"))
        SupplierService(drafts).add_existing(draft.draft_id, SelectionSet(["sup1", "sup2"]))
        service = EmailService(drafts)
        service.select_template(draft.draft_id, "template1")
        emails = service.render_for_suppliers(draft.draft_id)
        assert [e.header for e in emails] == ["Dear TechCorp Solutions,", "Dear Global Furniture Co,"]
        assert emails[0].subject == "Request for Quotation - Q1 Laptops"
        assert "Submission Deadline: {{DEADLINE}}" in emails[0].body


class TestRFQTemplateService:

    def test_save_requires_completed_section(self, drafts, draft, no_delay):
        with pytest.raises(WizardError):
            asyncio.run(RFQTemplateService(drafts).save_template(draft.draft_id, "Template"))

    def test_save_requires_name(self, drafts, draft, no_delay):
        draft.completed_sections.append("terms")
        with pytest.raises(WizardError):
            asyncio.run(RFQTemplateService(drafts).save_template(draft.draft_id, "  "))

    def test_save_snapshots_draft(self, drafts, draft, no_delay):
        TermsService(drafts).set_terms(draft.draft_id, "Net 30")
        service = RFQTemplateService(drafts)
        template, notice = asyncio.run(service.save_template(draft.draft_id, "Standard", "desc"))
        assert isinstance(template, RFQTemplate)
        assert isinstance(notice, Notice)
        assert template.data["terms"]["terms"] == "Net 30"
        assert template.sections == 2
        assert notice.title == "Template Saved"
        assert service.list_templates() == [template]
