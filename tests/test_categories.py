"""Tests for category endpoints."""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.artwork import Artwork


class TestCategories:
    """Tests for category endpoints."""

    def test_list_is_public_and_sorted(self, client: TestClient, test_admin):
        """Anyone can list categories, sorted by name."""
        _, headers = test_admin
        for name in ("Sculpture", "Painting", "Photography"):
            client.post("/api/categories/", json={"name": name}, headers=headers)
        response = client.get("/api/categories/")
        assert response.status_code == 200
        assert [c["name"] for c in response.json()["data"]] == ["Painting", "Photography", "Sculpture"]

    def test_create_requires_super_admin(self, client: TestClient, test_artist):
        """Only a super admin can create categories."""
        _, headers = test_artist
        assert client.post("/api/categories/", json={"name": "Painting"}).status_code == 401
        response = client.post("/api/categories/", json={"name": "Painting"}, headers=headers)
        assert response.status_code == 403

    def test_create_duplicate(self, client: TestClient, test_admin):
        """A duplicate name is a conflict."""
        _, headers = test_admin
        response = client.post("/api/categories/", json={"name": "Painting", "description": "Oil"}, headers=headers)
        assert response.status_code == 201
        assert response.json()["data"]["description"] == "Oil"

        response = client.post("/api/categories/", json={"name": "Painting"}, headers=headers)
        assert response.status_code == 409

    def test_update(self, client: TestClient, test_admin):
        """Renaming onto an existing name conflicts; other edits apply."""
        _, headers = test_admin
        painting = client.post("/api/categories/", json={"name": "Painting"}, headers=headers).json()["data"]
        client.post("/api/categories/", json={"name": "Drawing"}, headers=headers)

        response = client.put(f"/api/categories/{painting['id']}", json={"name": "Drawing"}, headers=headers)
        assert response.status_code == 409

        response = client.put(
            f"/api/categories/{painting['id']}", json={"description": "Works on canvas"}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Painting"
        assert response.json()["data"]["description"] == "Works on canvas"

    def test_delete_detaches_artworks(
        self, client: TestClient, test_admin, test_artist, artwork_factory, db_session: Session
    ):
        """Deleting a category leaves its artworks uncategorized."""
        _, headers = test_admin
        artist, _ = test_artist
        category = client.post("/api/categories/", json={"name": "Painting"}, headers=headers).json()["data"]
        artwork = artwork_factory(artist, category_id=category["id"])

        response = client.delete(f"/api/categories/{category['id']}", headers=headers)
        assert response.status_code == 200

        db_session.expire_all()
        assert db_session.get(Artwork, artwork.id).category_id is None
        assert client.delete(f"/api/categories/{category['id']}", headers=headers).status_code == 404

    def test_blank_name_rejected(self, client: TestClient, test_admin):
        """A whitespace-only name is empty once stripped."""
        _, headers = test_admin
        response = client.post("/api/categories/", json={"name": "   "}, headers=headers)
        assert response.status_code == 422
        assert response.json()["success"] is False
        assert client.get("/api/categories/").json()["data"] == []

    def test_name_is_stripped(self, client: TestClient, test_admin):
        """Surrounding whitespace never creates a near-duplicate name."""
        _, headers = test_admin
        response = client.post("/api/categories/", json={"name": "  Painting  "}, headers=headers)
        assert response.json()["data"]["name"] == "Painting"
        response = client.post("/api/categories/", json={"name": "Painting "}, headers=headers)
        assert response.status_code == 409

    def test_update_rejects_null_and_blank_name(self, client: TestClient, test_admin):
        """A rename cannot clear or blank the name."""
        _, headers = test_admin
        category = client.post("/api/categories/", json={"name": "Painting"}, headers=headers).json()["data"]
        for name in (None, "   "):
            response = client.put(f"/api/categories/{category['id']}", json={"name": name}, headers=headers)
            assert response.status_code == 422
        assert client.get("/api/categories/").json()["data"][0]["name"] == "Painting"

    def test_update_clears_description(self, client: TestClient, test_admin):
        """The description is optional and can be cleared."""
        _, headers = test_admin
        category = client.post(
            "/api/categories/", json={"name": "Painting", "description": "Oil"}, headers=headers
        ).json()["data"]
        response = client.put(f"/api/categories/{category['id']}", json={"description": None}, headers=headers)
        assert response.status_code == 200
        assert response.json()["data"]["description"] is None
