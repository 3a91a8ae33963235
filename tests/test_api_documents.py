"""
Document API tests - list, search, create, upload, patch.
"""

import io


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════


def _create_document(client, **overrides):
    payload = {
        "title": "Tunnel Ventilation Check",
        "department": "Maintenance",
        "type": "maintenance",
        "summary": "Quarterly fan inspection for tunnel section B",
    }
    payload.update(overrides)
    r = client.post("/api/documents", json=payload)
    assert r.status_code == 201, f"Create document failed: {r.get_json()}"
    return r.get_json()


def _upload(client, filename, content=b"%PDF-1.4 demo"):
    return client.post(
        "/api/documents/upload",
        data={"file": (io.BytesIO(content), filename)},
        content_type="multipart/form-data",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Read endpoints
# ═══════════════════════════════════════════════════════════════════════════


class TestListAndGet:
    def test_list_seeded_newest_first(self, client):
        r = client.get("/api/documents")
        assert r.status_code == 200
        docs = r.get_json()
        assert len(docs) == 6
        assert docs[0]["title"] == "Maintenance Report - Train Car 205"
        assert docs[0]["uploaded_at"].startswith("2025-01-10")

    def test_get_by_id(self, client):
        doc_id = client.get("/api/documents").get_json()[2]["id"]
        r = client.get(f"/api/documents/{doc_id}")
        assert r.status_code == 200
        assert r.get_json()["title"] == "Vendor Invoice - Track Supplies"

    def test_get_unknown(self, client):
        r = client.get("/api/documents/does-not-exist")
        assert r.status_code == 404
        assert r.get_json() == {"error": "Document not found", "code": "ERR_NOT_FOUND"}


class TestSearch:
    def test_query(self, client):
        r = client.get("/api/documents/search?q=brake")
        assert r.status_code == 200
        results = r.get_json()
        assert len(results) == 1
        assert set(results[0]) == {"id", "title", "department", "date", "summary", "type"}
        assert results[0]["date"] == "2025-01-10"

    def test_type_filter(self, client):
        results = client.get("/api/documents/search?type=finance").get_json()
        assert [d["type"] for d in results] == ["finance", "finance"]

    def test_all_and_empty_query(self, client):
        assert len(client.get("/api/documents/search?q=&type=all").get_json()) == 6
        assert len(client.get("/api/documents/search").get_json()) == 6

    def test_unknown_type_is_empty(self, client):
        r = client.get("/api/documents/search?type=legal")
        assert r.status_code == 200
        assert r.get_json() == []

    def test_whitespace_query_is_not_ignored(self, client):
        r = client.get("/api/documents/search", query_string={"q": "   ", "type": "all"})
        assert r.status_code == 200
        assert r.get_json() == []


# ═══════════════════════════════════════════════════════════════════════════
# Create / patch
# ═══════════════════════════════════════════════════════════════════════════


class TestCreate:
    def test_create_and_list(self, client):
        doc = _create_document(client)
        assert doc["status"] == "active"
        assert doc["content"] is None
        listed = client.get("/api/documents").get_json()
        assert listed[0]["id"] == doc["id"]

    def test_create_bumps_documents_processed(self, client):
        before = client.get("/api/stats").get_json()["documents_processed"]
        _create_document(client)
        after = client.get("/api/stats").get_json()["documents_processed"]
        assert after == before + 1

    def test_long_content(self, client):
        doc = _create_document(client, content="x" * 20000)
        assert len(doc["content"]) == 20000

    def test_missing_fields(self, client):
        r = client.post("/api/documents", json={"title": "x"})
        assert r.status_code == 400
        body = r.get_json()
        assert body["code"] == "ERR_VALIDATION_INVALID"
        assert "type" in body["details"]

    def test_invalid_type(self, client):
        r = client.post("/api/documents", json={
            "title": "x", "department": "y", "type": "legal", "summary": "z",
        })
        assert r.status_code == 400

    def test_non_object_body(self, client):
        r = client.post("/api/documents", json=["x"])
        assert r.status_code == 400

    def test_non_json_body(self, client):
        r = client.post("/api/documents", data="title=x", content_type="text/plain")
        assert r.status_code == 415
        assert r.get_json()["code"] == "ERR_UNSUPPORTED_MEDIA_TYPE"


class TestPatch:
    def test_archive(self, client):
        doc = _create_document(client)
        r = client.patch(f"/api/documents/{doc['id']}", json={"status": "archived"})
        assert r.status_code == 200
        body = r.get_json()
        assert body["status"] == "archived"
        assert body["title"] == doc["title"]
        assert body["uploaded_at"] == doc["uploaded_at"]

    def test_immutable_field(self, client):
        doc = _create_document(client)
        r = client.patch(f"/api/documents/{doc['id']}", json={"type": "finance"})
        assert r.status_code == 400
        assert "type" in r.get_json()["details"]

    def test_empty_patch(self, client):
        doc = _create_document(client)
        r = client.patch(f"/api/documents/{doc['id']}", json={})
        assert r.status_code == 400

    def test_unknown_document(self, client):
        r = client.patch("/api/documents/missing", json={"status": "archived"})
        assert r.status_code == 404


# ═══════════════════════════════════════════════════════════════════════════
# Upload
# ═══════════════════════════════════════════════════════════════════════════


class TestUpload:
    def test_upload_classifies_and_stores(self, client):
        r = _upload(client, "vendor_invoice.pdf")
        assert r.status_code == 201
        body = r.get_json()
        assert body["processing"]["classification"] == "Vendor Invoice"
        assert body["processing"]["department"] == "Finance Department"
        doc = body["document"]
        assert doc["type"] == "finance"
        assert doc["title"] == "Vendor Invoice - vendor_invoice.pdf"
        assert doc["content"] == "Uploaded file: vendor_invoice.pdf (13 bytes)"
        assert client.get(f"/api/documents/{doc['id']}").status_code == 200

    def test_upload_bumps_documents_processed(self, client):
        _upload(client, "staff_training_manual.pdf")
        assert client.get("/api/stats").get_json()["documents_processed"] == 2848

    def test_upload_without_file(self, client):
        r = client.post("/api/documents/upload", data={}, content_type="multipart/form-data")
        assert r.status_code == 400
        assert r.get_json()["code"] == "ERR_VALIDATION_REQUIRED"

    def test_upload_filename_too_long(self, client):
        r = _upload(client, "a" * 300 + ".pdf")
        assert r.status_code == 400
        assert "file" in r.get_json()["details"]
