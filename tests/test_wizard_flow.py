import unittest
import asyncio
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from backend.services import feature_flags
from backend.services.draft_service import DraftService
from backend.services.items_service import ItemsService
from backend.services.questionnaire_service import QuestionnaireService
from backend.services.supplier_service import SupplierService
from backend.services.terms_service import TermsService
from backend.services.email_service import EmailService
from backend.services.template_service import RFQTemplateService
from backend.services.errors import WizardError
from shared.selection import SelectionSet
from shared.constants import ItemSource
from shared.schemas import GeneralDetailsUpdate, NewItemRequest, EmailContentUpdate


class TestWizardFlow(unittest.TestCase):
    """Walk a draft through every section the way a user would."""

    def setUp(self):
        self._delay = feature_flags.SIMULATED_SAVE_DELAY_SECONDS
        feature_flags.SIMULATED_SAVE_DELAY_SECONDS = 0
        self.drafts = DraftService()
        self.draft = self.drafts.create_draft()
        self.draft_id = self.draft.draft_id

    def tearDown(self):
        feature_flags.SIMULATED_SAVE_DELAY_SECONDS = self._delay

    def _percent(self):
        return self.drafts.get_progress(self.draft_id).percent_display

    def test_item_sources_follow_import_order(self):
        """Two catalog items then one hand-made item"""
        items = ItemsService(self.drafts)
        items.add_from_catalog(self.draft_id, SelectionSet(["cat1", "cat2"]))
        items.create_item(self.draft_id, NewItemRequest(name="Custom Widget"))
        sources = [item.source for item in self.draft.items]
        self.assertEqual(sources, [ItemSource.CATALOG, ItemSource.CATALOG, ItemSource.NEW])
        self.assertEqual(self._percent(), 17)

    def test_progress_through_all_sections(self):
        self.drafts.update_general(self.draft_id, GeneralDetailsUpdate(
            name="Office Equipment RFQ 2024",
            requesters="John Smith",
            assignee="Jane Doe",
            project="Office Renovation",
            budget="Q1 Budget",
            department="Procurement",
            location="New York"
        ))
        self.assertEqual(self._percent(), 17)

        ItemsService(self.drafts).add_from_requests(self.draft_id, SelectionSet(["req1"]))
        QuestionnaireService(self.drafts).add_cards(self.draft_id, SelectionSet(["card1", "card2"]))
        SupplierService(self.drafts).add_existing(self.draft_id, SelectionSet(["sup1"]))
        self.assertEqual(self._percent(), 67)

        TermsService(self.drafts).select_template(self.draft_id, "template3")
        email = EmailService(self.drafts)
        email.update_email(self.draft_id, EmailContentUpdate(subject="RFQ {{RFQ_NAME}}"))
        self.assertEqual(self._percent(), 83)
        self.assertFalse(self.drafts.get_progress(self.draft_id).can_create_rfq)

        email.update_email(self.draft_id, EmailContentUpdate(body="Please quote."))
        progress = self.drafts.get_progress(self.draft_id)
        self.assertEqual(progress.percent_display, 100)
        self.assertTrue(progress.can_create_rfq)

        document = self.drafts.create_rfq(self.draft_id)
        self.assertEqual(document["email"]["subject"], "RFQ {{RFQ_NAME}}")
        self.assertEqual(len(document["questionnaire"]["cards"]), 2)

    def test_template_needs_one_completed_section(self):
        templates = RFQTemplateService(self.drafts)
        with self.assertRaises(WizardError):
            asyncio.run(templates.save_template(self.draft_id, "Empty"))

        TermsService(self.drafts).set_terms(self.draft_id, "Net 30 payment terms.")
        template, notice = asyncio.run(templates.save_template(self.draft_id, "Terms only"))
        self.assertEqual(template.name, "Terms only")
        self.assertIn("Terms only", notice.description)

    def test_emptied_section_stays_complete(self):
        suppliers = SupplierService(self.drafts)
        suppliers.add_existing(self.draft_id, SelectionSet(["sup2"]))
        suppliers.remove_supplier(self.draft_id, "sup2")
        self.assertEqual(self.draft.suppliers, [])
        self.assertIn("suppliers", self.draft.completed_sections)


if __name__ == '__main__':
    unittest.main()
