import unittest

from fastapi.testclient import TestClient

from helpcenter.app import create_app
from helpcenter.auth import StaticCredentialProvider
from helpcenter.dependencies import (
    get_document_store,
    get_identity_provider,
    get_token_store,
)
from helpcenter.errors import DocumentStoreError
from helpcenter.store import InMemoryDocumentStore, empty_content_document
from helpcenter.tokens import TokenStore

EMAIL = "admin@example.com"
PASSWORD = "s3cret!"


class BrokenStore(InMemoryDocumentStore):
    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    def load(self) -> dict:
        raise self.error


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app()
        self.content = InMemoryDocumentStore(document=empty_content_document())
        self.token_backend = InMemoryDocumentStore(default={})
        tokens = TokenStore(self.token_backend)
        self.app.dependency_overrides[get_document_store] = lambda: self.content
        self.app.dependency_overrides[get_token_store] = lambda: tokens
        self.app.dependency_overrides[get_identity_provider] = (
            lambda: StaticCredentialProvider(EMAIL, PASSWORD)
        )
        self.client = TestClient(self.app)

    def login(self) -> dict:
        response = self.client.post(
            "/api/auth/login", json={"email": EMAIL, "password": PASSWORD}
        )
        self.assertEqual(response.status_code, 200)
        return {"Authorization": f"Bearer {response.json()['token']}"}

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")
        self.assertIn("timestamp", response.json())

    def test_unmatched_route(self):
        response = self.client.get("/api/does-not-exist")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Route not found"})

    def test_wrong_method_is_route_not_found(self):
        for response in (
            self.client.patch("/api/faqs/abc"),
            self.client.delete("/api/faqs"),
            self.client.put("/api/auth/login"),
        ):
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.json(), {"error": "Route not found"})

    def test_login_with_wrong_password(self):
        response = self.client.post(
            "/api/auth/login", json={"email": EMAIL, "password": "wrong"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertIn("error", response.json())
        self.assertIsNone(self.token_backend.document)

    def test_login_missing_fields(self):
        response = self.client.post("/api/auth/login", json={"email": EMAIL})
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_login_verify_logout(self):
        response = self.client.post(
            "/api/auth/login", json={"email": EMAIL, "password": PASSWORD}
        )
        payload = response.json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["user"], {"email": EMAIL})
        self.assertIsInstance(payload["expiresAt"], int)
        headers = {"Authorization": f"Bearer {payload['token']}"}

        verify = self.client.get("/api/auth/verify", headers=headers)
        self.assertEqual(verify.status_code, 200)
        self.assertEqual(verify.json(), {"valid": True, "user": {"email": EMAIL}})

        logout = self.client.post("/api/auth/logout", headers=headers)
        self.assertEqual(logout.status_code, 200)
        self.assertTrue(logout.json()["success"])

        verify = self.client.get("/api/auth/verify", headers=headers)
        self.assertEqual(verify.status_code, 401)
        self.assertEqual(verify.json(), {"valid": False, "error": "Invalid token"})

        missing = self.client.get("/api/auth/verify")
        self.assertEqual(missing.status_code, 401)
        self.assertEqual(missing.json(), {"valid": False, "error": "Token not provided"})

    def test_logout_without_token_succeeds(self):
        response = self.client.post("/api/auth/logout")
        self.assertEqual(response.status_code, 200)

    def test_mutations_require_bearer_token(self):
        for headers in ({}, {"Authorization": "Token abc"}, {"Authorization": "Bearer abc"}):
            response = self.client.post("/api/categories", json={"name": "Geral"}, headers=headers)
            self.assertEqual(response.status_code, 401)
            self.assertIn("error", response.json())
        self.assertEqual(self.content.document["categories"], [])

    def test_expired_token_is_rejected_and_removed(self):
        self.token_backend.document = {"stale": {"email": EMAIL, "expiresAt": 1}}
        response = self.client.post(
            "/api/categories", json={"name": "Geral"}, headers={"Authorization": "Bearer stale"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Token expired"})
        self.assertNotIn("stale", self.token_backend.document)
        self.assertEqual(self.content.document["categories"], [])

    def test_category_and_faq_flow(self):
        headers = self.login()

        missing = self.client.post("/api/categories", json={}, headers=headers)
        self.assertEqual(missing.status_code, 400)
        self.assertIn("error", missing.json())

        created = self.client.post(
            "/api/categories", json={"name": "Pagamentos e Preços"}, headers=headers
        )
        self.assertEqual(created.status_code, 201)
        category = created.json()
        self.assertEqual(category["slug"], "pagamentos-e-precos")

        by_slug = self.client.get("/api/categories/slug/pagamentos-e-precos")
        self.assertEqual(by_slug.json(), category)

        bad_ref = self.client.post(
            "/api/faqs",
            json={"categoryId": "nope", "question": "Q?", "answer": "A"},
            headers=headers,
        )
        self.assertEqual(bad_ref.status_code, 400)

        faq = self.client.post(
            "/api/faqs",
            json={"categoryId": category["id"], "question": "Como pagar?", "answer": "<p>Com Pix</p>"},
            headers=headers,
        ).json()

        grouped = self.client.get("/api/faqs/grouped").json()
        self.assertEqual(grouped[0]["faqs"], [faq])
        self.assertEqual(self.client.get(f"/api/faqs/category/{category['id']}").json(), [faq])
        self.assertEqual(self.client.get("/api/search", params={"q": "PIX"}).json(), [faq])
        self.assertEqual(self.client.get("/api/search", params={"q": "p"}).json(), [])

        conflict = self.client.delete(f"/api/categories/{category['id']}", headers=headers)
        self.assertEqual(conflict.status_code, 400)

        self.assertEqual(self.client.get(f"/api/faqs/{faq['id']}").json(), faq)
        deleted = self.client.delete(f"/api/faqs/{faq['id']}", headers=headers)
        self.assertEqual(deleted.json(), {"message": "FAQ deleted"})
        self.assertEqual(self.client.get(f"/api/faqs/{faq['id']}").status_code, 404)

        removed = self.client.delete(f"/api/categories/{category['id']}", headers=headers)
        self.assertEqual(removed.status_code, 200)
        self.assertEqual(self.client.get("/api/categories").json(), [])

    def test_reorder_endpoint(self):
        headers = self.login()
        category = self.client.post("/api/categories", json={"name": "Geral"}, headers=headers).json()
        ids = []
        for question in ("A", "B"):
            faq = self.client.post(
                "/api/faqs",
                json={"categoryId": category["id"], "question": question, "answer": "x"},
                headers=headers,
            ).json()
            ids.append(faq["id"])

        response = self.client.put(
            "/api/faqs/reorder",
            json={"items": [{"id": ids[0], "order": 5}, {"id": ids[1], "order": 1}]},
            headers=headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([f["id"] for f in self.client.get("/api/faqs").json()], [ids[1], ids[0]])

        not_a_list = self.client.put("/api/faqs/reorder", json={"items": "x"}, headers=headers)
        self.assertEqual(not_a_list.status_code, 400)

    def test_update_with_empty_string_keeps_value(self):
        headers = self.login()
        category = self.client.post("/api/categories", json={"name": "Geral"}, headers=headers).json()
        response = self.client.put(
            f"/api/categories/{category['id']}", json={"name": ""}, headers=headers
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Geral")

        invalid = self.client.put(
            f"/api/categories/{category['id']}", json={"order": "first"}, headers=headers
        )
        self.assertEqual(invalid.status_code, 400)
        self.assertIn("error", invalid.json())

    def test_featured_cards_settings_and_footer(self):
        headers = self.login()
        card = self.client.post(
            "/api/featured-cards", json={"title": "Comece", "description": "Guia"}, headers=headers
        )
        self.assertEqual(card.status_code, 201)
        self.assertEqual(card.json()["color"], "#6366f1")
        self.assertEqual(len(self.client.get("/api/featured-cards").json()), 1)

        self.assertEqual(
            self.client.get("/api/settings").json(), {"supportLink": "", "supportLabel": ""}
        )
        settings = self.client.put(
            "/api/settings", json={"supportLink": "https://wa.me/1"}, headers=headers
        )
        self.assertEqual(settings.json()["supportLink"], "https://wa.me/1")

        section = self.client.post(
            "/api/footer-links", json={"title": "Links"}, headers=headers
        ).json()
        item = self.client.post(
            f"/api/footer-links/{section['id']}/items",
            json={"label": "Blog", "href": "https://blog.example"},
            headers=headers,
        )
        self.assertEqual(item.status_code, 201)
        sections = self.client.get("/api/footer-links").json()
        self.assertEqual(sections[0]["items"], [item.json()])

        missing_item = self.client.delete(
            f"/api/footer-links/{section['id']}/items/nope", headers=headers
        )
        self.assertEqual(missing_item.status_code, 404)

    def test_store_failure_returns_generic_error(self):
        self.app.dependency_overrides[get_document_store] = (
            lambda: BrokenStore(DocumentStoreError("Document file not found: /srv/db.json"))
        )
        response = self.client.get("/api/categories")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Internal server error"})

    def test_unexpected_error_returns_generic_error(self):
        self.app.dependency_overrides[get_document_store] = (
            lambda: BrokenStore(RuntimeError("disk on fire"))
        )
        client = TestClient(self.app, raise_server_exceptions=False)
        response = client.get("/api/faqs")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Internal server error"})


if __name__ == "__main__":
    unittest.main()
