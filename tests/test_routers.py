"""HTTP tests for the routers, with services bound to an in-memory database."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import (
    get_faq_service,
    get_language_service,
    get_media_service,
    get_page_service,
    get_product_service,
)
from main import app


@pytest.fixture
def client(product_service, faq_service, page_service, language_service, media_service):
    app.dependency_overrides[get_product_service] = lambda: product_service
    app.dependency_overrides[get_faq_service] = lambda: faq_service
    app.dependency_overrides[get_page_service] = lambda: page_service
    app.dependency_overrides[get_language_service] = lambda: language_service
    app.dependency_overrides[get_media_service] = lambda: media_service
    yield TestClient(app)
    app.dependency_overrides.clear()


PRODUCT_BODY = {
    "position": 3,
    "category": "tea",
    "tags": ["hot"],
    "title": {"en": "Hot Milk Tea", "bn": "গরম দুধ চা"},
    "description": {"en": "Strong tea with milk"},
    "logistics": {"stock": 4, "isAvailable": True, "grandTotal": 30, "uKey": "c", "calories": 90},
}


class TestProductRoutes:
    def test_create_then_read_public_views(self, client: TestClient) -> None:
        created = client.post("/products/", json=PRODUCT_BODY)
        assert created.status_code == 201
        body = created.json()
        assert body["meta"] == {"message": "Product created successfully.", "status": "success", "code": 201}
        assert body["data"]["shortId"] == "tea--03--hot-milk-tea"

        menu = client.get("/products/menu/bn", params={"page": 1, "limit": 10}).json()
        assert menu["data"]["items"][0]["title"] == "গরম দুধ চা"
        assert menu["data"]["meta"]["total"] == 1

        detail = client.get("/products/detail/en/tea--03--hot-milk-tea").json()
        assert detail["data"]["calories"] == "90 kcal"
        assert detail["data"]["stockStatus"] == "In Stock"

        search = client.get("/products/search/bn", params={"q": "দুধ", "cat": "tea"}).json()
        assert search["data"]["meta"]["total"] == 1

    def test_validation_error_shape(self, client: TestClient) -> None:
        response = client.post("/products/", json={"category": "tea"})
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert "title" in body["detail"]

    def test_unknown_category_is_rejected(self, client: TestClient) -> None:
        response = client.post("/products/", json={**PRODUCT_BODY, "category": "juice"})
        assert response.status_code == 400

    def test_missing_english_title(self, client: TestClient) -> None:
        response = client.post("/products/", json={**PRODUCT_BODY, "title": {"bn": "চা"}})
        assert response.status_code == 400
        assert response.json()["detail"] == "English (en) Title required."

    def test_not_found_shape(self, client: TestClient) -> None:
        response = client.get("/products/detail/en/nope")
        assert response.status_code == 404
        assert response.json() == {
            "detail": "Product not found.",
            "message": "Product not found.",
            "error_code": "NOT_FOUND",
            "status": "error",
        }

    def test_admin_update_stats_and_delete(self, client: TestClient) -> None:
        product_id = client.post("/products/", json=PRODUCT_BODY).json()["data"]["_id"]

        patched = client.patch(f"/products/{product_id}", json={"position": 7, "logistics": {"isAvailable": False}})
        assert patched.status_code == 200
        assert patched.json()["data"]["shortId"] == "tea--07--hot-milk-tea"

        stats = client.get("/products/stats/count").json()["data"]
        assert (stats["total"], stats["available"]) == (1, 0)

        assert client.get("/products/menu/en").json()["data"]["meta"]["total"] == 0
        assert client.get("/products/admin/raw").json()["data"]["meta"]["total"] == 1
        assert client.get(f"/products/admin/{product_id}").json()["data"]["position"] == 7

        assert client.delete(f"/products/{product_id}").json()["data"] == {"deleted": True}
        assert client.get(f"/products/admin/{product_id}").status_code == 404

    def test_media_upload_and_reorder(self, client: TestClient) -> None:
        product_id = client.post("/products/", json=PRODUCT_BODY).json()["data"]["_id"]

        uploaded = client.patch(
            f"/products/{product_id}/media",
            files=[
                ("thumbnail", ("t.jpg", b"t", "image/jpeg")),
                ("gallery", ("a.jpg", b"a", "image/jpeg")),
                ("gallery", ("b.jpg", b"b", "image/jpeg")),
            ],
        )
        assert uploaded.status_code == 200
        media = uploaded.json()["data"]["product"]["media"]
        assert media["thumbnail"] == "https://cdn.example.com/img-1.jpg"
        assert len(media["gallery"]) == 2

        reordered = client.patch(
            f"/products/{product_id}/media/reorder",
            json={"thumbnail": media["gallery"][0], "gallery": [media["gallery"][1], media["thumbnail"]]},
        )
        assert reordered.status_code == 200
        assert reordered.json()["data"]["media"]["thumbnail"] == media["gallery"][0]


class TestFaqRoutes:
    def test_lifecycle(self, client: TestClient) -> None:
        created = client.post("/faq/", json={"question": {"en": "Wifi?"}, "answer": {"en": "Yes"}, "position": 1})
        assert created.status_code == 201
        faq = created.json()["data"]

        assert client.get("/faq/lang/bn").json()["data"][0]["question"] == "Wifi?"
        assert client.get(f"/faq/lang/en/shortid/{faq['shortId']}").status_code == 200
        assert client.get(f"/faq/lang/en/{faq['_id']}").status_code == 200
        assert client.get(f"/faq/shortid/{faq['shortId']}").json()["data"]["_id"] == faq["_id"]

        hidden = client.patch(f"/faq/{faq['_id']}", json={"hide": True}).json()["data"]
        assert hidden["shortId"] == faq["shortId"]
        assert client.get("/faq/lang/en").json()["data"] == []
        assert len(client.get("/faq/").json()["data"]) == 1

        assert client.delete(f"/faq/{faq['_id']}").status_code == 200
        assert client.get(f"/faq/{faq['_id']}").status_code == 404


class TestPageRoutes:
    def test_lifecycle(self, client: TestClient) -> None:
        body = {"key": "home", "link": "/", "title": {"en": "Home"}, "description": {"en": "Welcome"}}
        assert client.post("/pages/", json=body).status_code == 201
        assert client.post("/pages/", json=body).status_code == 409

        assert client.get("/pages/registry/bn").json()["data"]["home"]["title"] == "Home"
        assert client.get("/pages/key/en/home").json()["data"]["key"] == "home"

        patched = client.patch("/pages/home", json={"videoUrl": "https://video.example.com/v.mp4"})
        assert patched.status_code == 200
        assert client.get("/pages/key/en/home").json()["data"]["video"] == "https://video.example.com/v.mp4"

        assert client.patch("/pages/home", json={"key": "other"}).status_code == 400
        assert len(client.get("/pages/admin/raw").json()["data"]) == 1
        assert client.get("/pages/admin/key/home").status_code == 200
        assert client.delete("/pages/home").status_code == 200
        assert client.get("/pages/key/en/home").status_code == 404


class TestLanguageRoutes:
    def test_lifecycle(self, client: TestClient) -> None:
        created = client.post("/languages/", json={"label": "বাংলা", "code": "BN", "countryCode": "bd"})
        assert created.status_code == 201
        language = created.json()["data"]
        assert language["code"] == "bn"

        assert client.post("/languages/", json={"label": "Bangla", "code": "bn", "countryCode": "BD"}).status_code == 409
        assert client.get("/languages/code/bn").json()["data"]["_id"] == language["_id"]
        assert len(client.get("/languages/country/BD").json()["data"]) == 1
        assert client.patch(f"/languages/{language['_id']}", json={"label": "Bangla"}).json()["data"]["label"] == "Bangla"
        assert len(client.get("/languages/").json()["data"]) == 1
        assert client.delete(f"/languages/{language['_id']}").status_code == 200
        assert client.get(f"/languages/{language['_id']}").status_code == 404


class TestMediaRoutes:
    def test_upload_list_and_delete(self, client: TestClient, storage) -> None:
        uploaded = client.post(
            "/media/upload-file",
            files={"file": ("logo.png", b"png", "image/png")},
            data={"purpose": "logo"},
        )
        assert uploaded.status_code == 201
        media = uploaded.json()["data"]
        assert media["purpose"] == "logo"

        linked = client.post("/media/upload-link", json={"url": "https://example.com/x.jpg", "refId": "abc"})
        assert linked.status_code == 201

        assert client.get("/media/count").json()["data"] == {"count": 2, "purpose": "all"}
        assert client.get("/media/count", params={"purpose": "logo"}).json()["data"]["count"] == 1
        assert client.get("/media/", params={"limit": 1}).json()["data"]["meta"]["pages"] == 2
        assert len(client.get("/media/raw").json()["data"]) == 2
        assert len(client.get("/media/ref/abc").json()["data"]) == 1

        assert client.delete(f"/media/{media['_id']}").status_code == 200
        assert client.get(f"/media/{media['_id']}").status_code == 404

    def test_upload_without_file(self, client: TestClient) -> None:
        response = client.post("/media/upload-file", data={"purpose": "logo"})
        assert response.status_code == 400

    def test_storage_failure_is_bad_gateway(self, client: TestClient, storage) -> None:
        from common.exceptions.base_exception import UpstreamServiceException

        storage.upload_from_source.side_effect = UpstreamServiceException("Cloudinary", "invalid url")
        response = client.post("/media/upload-link", json={"url": "not-a-url"})
        assert response.status_code == 502
        assert response.json()["error_code"] == "UPSTREAM_ERROR"


class TestUtilityRoutes:
    def test_root_redirects_to_docs(self, client: TestClient) -> None:
        response = client.get("/", follow_redirects=False)
        assert response.status_code in (302, 307)
        assert response.headers["location"] == "/docs"
