import json
import pytest

pytestmark = pytest.mark.integration


@pytest.fixture
def seeded_contacts(upstream):
    upstream.contacts.extend([
        {"id": 1, "nom": "Awa Diallo", "email": "awa@example.com", "telephone": None,
         "project_type": "Construction neuve", "budget": "Plus de 5M€",
         "message": "Immeuble R+5", "date_creation": "2024-06-03T10:00:00"},
        {"id": 2, "nom": "Cheikh Fall", "email": "cheikh@example.com", "telephone": "771112233",
         "project_type": "Rénovation complète", "budget": "Moins de 100k€",
         "message": "Cuisine, salle de bain", "date_creation": "2024-06-02T10:00:00"},
        {"id": 3, "nom": "Binta Sow", "email": "binta@example.com", "telephone": None,
         "project_type": "Construction neuve", "budget": "Moins de 100k€",
         "message": "Maison F4", "date_creation": "2024-06-01T10:00:00"},
    ])
    return upstream.contacts


class TestListDevis:

    @pytest.mark.asyncio
    async def test_numeric_phone_and_missing_id(self, test_client, auth_headers, upstream):
        upstream.contacts.extend([
            {"id": 8, "nom": "Ousmane Ba", "telephone": 771234567, "project_type": "Autre projet"},
            {"nom": "Ligne sans id"},
        ])

        response = await test_client.get("/devis/", params={"q": "1234"}, headers=auth_headers)

        assert response.status_code == 200
        assert [(d["id"], d["phone"]) for d in response.json()] == [("8", "771234567")]

    @pytest.mark.asyncio
    async def test_list_keeps_upstream_order(self, test_client, auth_headers, seeded_contacts, upstream):
        response = await test_client.get("/devis/", headers=auth_headers)

        assert response.status_code == 200
        assert [d["id"] for d in response.json()] == ["1", "2", "3"]
        assert response.json()[0]["name"] == "Awa Diallo"

        sent = upstream.requests[0]
        assert sent.url.path == "/api/contact"
        assert sent.url.params["sortBy"] == "date_creation"
        assert sent.url.params["order"] == "DESC"

    @pytest.mark.asyncio
    async def test_search_sort_and_filter(self, test_client, auth_headers, seeded_contacts):
        response = await test_client.get(
            "/devis/",
            params={"project_type": "Construction neuve", "sort": "name", "direction": "asc"},
            headers=auth_headers,
        )
        assert [d["name"] for d in response.json()] == ["Awa Diallo", "Binta Sow"]

        response = await test_client.get("/devis/", params={"q": "CUISINE"}, headers=auth_headers)
        assert [d["id"] for d in response.json()] == ["2"]

    @pytest.mark.asyncio
    async def test_empty_view_is_not_an_error(self, test_client, auth_headers, seeded_contacts):
        response = await test_client.get("/devis/", params={"q": "piscine"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_upstream_failure_is_reported(self, test_client, auth_headers, upstream):
        upstream.fail_with = 500
        response = await test_client.get("/devis/", headers=auth_headers)
        assert response.status_code == 502
        assert response.json()["detail"] == "Service indisponible"

    @pytest.mark.asyncio
    async def test_export_csv(self, test_client, auth_headers, seeded_contacts):
        response = await test_client.get("/devis/export.csv", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "devis.csv" in response.headers["content-disposition"]
        lines = response.text.splitlines()
        assert lines[0] == "id,name,email,phone,project_type,budget,message,created_at"
        assert '"Cuisine, salle de bain"' in lines[2]

    @pytest.mark.asyncio
    async def test_listing_refreshes_local_snapshot(self, test_client, auth_headers, seeded_contacts):
        await test_client.get("/devis/", headers=auth_headers)
        response = await test_client.get("/settings/summary", headers=auth_headers)
        assert response.json()["counts"]["devis"] == 3


class TestWriteDevis:

    @pytest.mark.asyncio
    async def test_create_sends_upstream_fields(self, test_client, auth_headers, upstream, valid_devis_data):
        response = await test_client.post("/devis/", json=valid_devis_data, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["saved"] is True
        sent = json.loads(upstream.requests[-1].content)
        assert sent == {
            "nom": "Awa Diallo",
            "email": "awa@example.com",
            "telephone": "+221 77 000 00 00",
            "project_type": "Construction neuve",
            "budget": "100k€ - 500k€",
            "message": "Villa R+1 à Dakar",
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [
        ("email", "awa-at-example"),
        ("name", "   "),
        ("message", ""),
        ("project_type", "Piscine"),
    ])
    async def test_invalid_submission(self, test_client, auth_headers, upstream, valid_devis_data, field, value):
        response = await test_client.post(
            "/devis/", json={**valid_devis_data, field: value}, headers=auth_headers
        )
        assert response.status_code == 422
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_update(self, test_client, auth_headers, seeded_contacts, valid_devis_data):
        response = await test_client.put(
            "/devis/2", json={**valid_devis_data, "message": "Toiture"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert seeded_contacts[1]["message"] == "Toiture"

    @pytest.mark.asyncio
    async def test_delete(self, test_client, auth_headers, seeded_contacts):
        response = await test_client.delete("/devis/3", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"deleted": True}
        assert [c["id"] for c in seeded_contacts] == [1, 2]

    @pytest.mark.asyncio
    async def test_delete_unknown(self, test_client, auth_headers, seeded_contacts):
        response = await test_client.delete("/devis/99", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Introuvable"
