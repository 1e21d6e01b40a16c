"""
API tests through the FastAPI app.
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from backend.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def draft_id(client):
    return client.post("/api/drafts").json()["draft"]["draft_id"]


class TestCatalogEndpoints:

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_options(self, client):
        options = client.get("/api/catalog/options").json()
        assert options["round_options"] == [2, 3]
        assert "category" in options["item_group_fields"]

    def test_supplier_search(self, client):
        suppliers = client.get("/api/catalog/suppliers", params={"search": "marketing"}).json()
        assert [s["id"] for s in suppliers] == ["sup4"]


class TestDraftEndpoints:

    def test_new_draft_has_no_progress(self, client, draft_id):
        progress = client.get(f"/api/drafts/{draft_id}/progress").json()
        assert progress["percent"] == 0
        assert progress["can_save_template"] is False
        assert len(progress["sections"]) == 6

    def test_rounds_out_of_range_is_422(self, client, draft_id):
        response = client.patch(f"/api/drafts/{draft_id}/general", json={"number_of_rounds": 4})
        assert response.status_code == 422
        rounds = client.get(f"/api/drafts/{draft_id}").json()["draft"]["general"]["number_of_rounds"]
        assert rounds == 2

    def test_unknown_draft_is_404(self, client):
        response = client.get("/api/drafts/RFQ-NOPE")
        assert response.status_code == 404
        assert response.json()["detail"]["variant"] == "destructive"

    def test_adding_items_updates_progress(self, client, draft_id):
        response = client.post(f"/api/drafts/{draft_id}/items/catalog", json={"ids": ["cat1", "cat2"]})
        body = response.json()
        assert response.status_code == 200
        assert body["progress"]["percent_display"] == 17
        assert body["notice"]["title"] == "Items Added"
        assert [i["source"] for i in body["draft"]["items"]] == ["catalog", "catalog"]

    def test_empty_selection_is_400(self, client, draft_id):
        response = client.post(f"/api/drafts/{draft_id}/items/catalog", json={"ids": []})
        assert response.status_code == 400
        assert response.json()["detail"]["title"] == "Nothing selected"

    def test_grouped_display(self, client, draft_id):
        client.post(f"/api/drafts/{draft_id}/items/catalog", json={"ids": ["cat1", "cat2"]})
        client.put(f"/api/drafts/{draft_id}/items/group-by", json={"field": "category"})
        display = client.get(f"/api/drafts/{draft_id}/items/display").json()
        assert [r["id"] for r in display["rows"]][0] == "group_Electronics"

    def test_new_supplier_without_email_is_400(self, client, draft_id):
        response = client.post(f"/api/drafts/{draft_id}/suppliers", json={"name": "New Vendor", "email": " "})
        assert response.status_code == 400
        assert response.json()["detail"]["title"] == "Supplier email required"
        suppliers = client.get(f"/api/drafts/{draft_id}").json()["draft"]["suppliers"]
        assert suppliers == []

    def test_create_rfq_rejected_until_complete(self, client, draft_id):
        response = client.post(f"/api/drafts/{draft_id}/create")
        assert response.status_code == 400
        assert response.json()["detail"]["title"] == "RFQ incomplete"


class TestFullWizard:

    def test_all_sections_then_create(self, client, draft_id):
        base = f"/api/drafts/{draft_id}"
        client.patch(f"{base}/general", json={
            "name": "Q1 Laptops",
            "requesters": "John Smith",
            "assignee": "Jane Doe",
            "project": "Office Renovation",
            "budget": "Q1 Budget",
            "department": "IT",
            "location": "New York"
        })
        client.post(f"{base}/items", json={"name": "Laptop", "quantity": 10})
        client.post(f"{base}/questionnaire/cards", json={"ids": ["card1"]})
        client.post(f"{base}/suppliers/existing", json={"ids": ["sup1"]})
        client.put(f"{base}/terms/template", json={"template_id": "template1"})
        response = client.put(f"{base}/email/template", json={"template_id": "template1"})

        progress = response.json()["progress"]
        assert progress["percent_display"] == 100
        assert progress["can_create_rfq"] is True

        created = client.post(f"{base}/create").json()
        assert created["success"] is True
        assert created["rfq"]["items"][0]["quantity"] == 10

    def test_save_rfq_template(self, client, draft_id, monkeypatch):
        from backend.services import feature_flags
        monkeypatch.setattr(feature_flags, "SIMULATED_SAVE_DELAY_SECONDS", 0)

        client.put(f"/api/drafts/{draft_id}/terms", json={"terms": "Net 30"})
        summary = client.get(f"/api/drafts/{draft_id}/summary").json()
        assert [s["section_id"] for s in summary] == ["general", "terms"]

        response = client.post("/api/rfq-templates", json={"draft_id": draft_id, "name": "Standard"})
        assert response.status_code == 200
        assert response.json()["template"]["sections"] == 2
