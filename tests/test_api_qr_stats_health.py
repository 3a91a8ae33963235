"""
QR job card, stats and health endpoint tests.
"""

from transitdocs.utils.helpers import STORE_KEY


def _create_qr(client, **overrides):
    payload = {
        "code": "MJC-2025-900",
        "title": "Maintenance Job Card #MJC-2025-900",
        "equipment": "Escalator E4",
        "description": "Step chain lubrication",
    }
    payload.update(overrides)
    r = client.post("/api/qr-codes", json=payload)
    assert r.status_code == 201, f"Create QR code failed: {r.get_json()}"
    return r.get_json()


# ═══════════════════════════════════════════════════════════════════════════
# QR codes
# ═══════════════════════════════════════════════════════════════════════════


class TestQrCodes:
    def test_list_newest_first(self, client):
        codes = [c["code"] for c in client.get("/api/qr-codes").get_json()]
        assert codes == ["MJC-2025-892", "MJC-2025-893", "MJC-2025-891"]

    def test_lookup_by_code(self, client):
        r = client.get("/api/qr-codes/MJC-2025-891")
        assert r.status_code == 200
        body = r.get_json()
        assert body["equipment"] == "Platform Safety Barriers"
        assert body["status"] == "completed"

    def test_lookup_unknown_code(self, client):
        r = client.get("/api/qr-codes/MJC-0000-000")
        assert r.status_code == 404
        assert r.get_json() == {"error": "QR code not found", "code": "ERR_NOT_FOUND"}

    def test_create_defaults_to_pending(self, client):
        qr = _create_qr(client)
        assert qr["status"] == "pending"
        assert client.get("/api/qr-codes").get_json()[0]["id"] == qr["id"]

    def test_create_invalid(self, client):
        r = client.post("/api/qr-codes", json={"code": "MJC-1"})
        assert r.status_code == 400

    def test_patch_status(self, client):
        qr = _create_qr(client)
        r = client.patch(f"/api/qr-codes/{qr['id']}", json={"status": "in_progress"})
        assert r.status_code == 200
        body = r.get_json()
        assert body["status"] == "in_progress"
        assert body["created_at"] == qr["created_at"]

    def test_patch_code_rejected(self, client):
        qr = _create_qr(client)
        r = client.patch(f"/api/qr-codes/{qr['id']}", json={"code": "MJC-X"})
        assert r.status_code == 400

    def test_patch_unknown(self, client):
        r = client.patch("/api/qr-codes/missing", json={"status": "completed"})
        assert r.status_code == 404


class TestScanSimulation:
    def test_returns_known_card(self, client):
        r = client.post("/api/qr-scan/simulate")
        assert r.status_code == 200
        body = r.get_json()
        assert set(body) == {"document_id", "title", "equipment", "status", "description"}
        assert body["document_id"] in {"MJC-2025-891", "MJC-2025-892", "MJC-2025-893"}

    def test_no_codes(self, app, client):
        store = app.extensions[STORE_KEY]
        with store.transaction() as session:
            for qr in store.list("qr_codes", session=session):
                session.delete(qr)
        r = client.post("/api/qr-scan/simulate")
        assert r.status_code == 404
        assert r.get_json()["code"] == "ERR_NOT_FOUND"


# ═══════════════════════════════════════════════════════════════════════════
# Stats
# ═══════════════════════════════════════════════════════════════════════════


class TestStats:
    def test_seeded_values(self, client):
        r = client.get("/api/stats")
        assert r.status_code == 200
        assert r.get_json() == {
            "documents_processed": 2847,
            "pending_approvals": 23,
            "completed_today": 156,
            "urgent_items": 7,
        }

    def test_workflow_changes_do_not_recompute(self, client):
        item_id = client.get("/api/workflow").get_json()[0]["id"]
        client.post(f"/api/workflow/{item_id}/approve")
        assert client.get("/api/stats").get_json()["pending_approvals"] == 23


# ═══════════════════════════════════════════════════════════════════════════
# Health & middleware
# ═══════════════════════════════════════════════════════════════════════════


class TestHealth:
    def test_health(self, client):
        r = client.get("/api/health")
        assert r.status_code == 200
        assert r.get_json()["status"] == "ok"

    def test_ready(self, client):
        assert client.get("/api/health/ready").get_json() == {"status": "ok"}

    def test_live(self, client):
        body = client.get("/api/health/live").get_json()
        assert body["status"] == "healthy"
        checks = body["checks"]
        assert checks["record_store"]["counts"]["documents"] == 6
        assert checks["classifier"]["name"] == "keyword"

    def test_request_id_header(self, client):
        r = client.get("/api/documents", headers={"X-Request-ID": "abc123"})
        assert r.headers["X-Request-ID"] == "abc123"
        assert "X-Request-Duration-Ms" in r.headers

    def test_unknown_route(self, client):
        r = client.get("/api/nothing-here")
        assert r.status_code == 404
        assert r.get_json() == {
            "error": "Not found",
            "code": "ERR_NOT_FOUND",
            "details": {"path": "/api/nothing-here"},
        }
