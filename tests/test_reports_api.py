from __future__ import annotations

from datetime import timedelta

import pytest

# Skip suite when the HTTP stack is not present in the local environment.
pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi import HTTPException, UploadFile
from fastapi.testclient import TestClient
from starlette.datastructures import Headers

from cityfix.api import reports as reports_api
from cityfix.config import settings
from cityfix.database import get_db
from cityfix.main import app
from cityfix.models.user import User, UserRole
from cityfix.services.media import MediaUrlResolver
from cityfix.services.report_service import ReportService
from cityfix.services.storage import LocalStorage

API_URL = "http://testserver"


@pytest.fixture
def client(db_session, tmp_path):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[reports_api.get_report_service] = lambda: ReportService(
        MediaUrlResolver(storage_type="local", api_url=API_URL)
    )
    app.dependency_overrides[reports_api.get_storage] = lambda: LocalStorage(str(tmp_path), API_URL)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _create(client, auth_headers, user, **overrides):
    body = {
        "title": "Overflowing bin",
        "description": "Garbage bin has not been collected",
        "category": "environment",
        "location": {"x": -43.2, "y": -22.9},
        "mediaUrls": ["x.jpg", "y.mp4"],
    }
    body.update(overrides)
    return client.post("/reports/", json=body, headers=auth_headers(user))


def test_requests_without_token_are_rejected(client):
    assert client.get("/reports/").status_code == 401


def test_create_and_fetch_report(client, users, auth_headers):
    response = _create(client, auth_headers, users["owner"], status="resolved")
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "pending"
    assert created["createdBy"]["email"] == "owner@cityfix.org"
    assert created["mediaUrls"] == [f"{API_URL}/uploads/x.jpg", f"{API_URL}/uploads/y.mp4"]

    fetched = client.get(f"/reports/{created['id']}", headers=auth_headers(users["other"]))
    assert fetched.status_code == 200
    assert fetched.json()["statusLogs"] == []


def test_create_validates_input(client, users, auth_headers):
    response = _create(client, auth_headers, users["owner"], category="noise")
    assert response.status_code == 422
    response = _create(client, auth_headers, users["owner"], title="")
    assert response.status_code == 422


def test_expired_token_is_rejected(client, users, auth_headers):
    headers = auth_headers(users["owner"], expires_in=timedelta(minutes=-5))
    assert client.get("/reports/", headers=headers).status_code == 401


def test_creator_with_local_domain_email_is_echoed(client, db_session, auth_headers):
    local_user = User(name="Dev Seed", email="dev@cityfix.local", role=UserRole.CITIZEN.value)
    db_session.add(local_user)
    db_session.commit()

    response = _create(client, auth_headers, local_user)
    assert response.status_code == 201
    assert response.json()["createdBy"]["email"] == "dev@cityfix.local"

    listed = client.get("/reports/", headers=auth_headers(local_user))
    assert listed.status_code == 200
    assert listed.json()[0]["createdBy"]["email"] == "dev@cityfix.local"


@pytest.mark.parametrize("location", ['{"x": NaN, "y": -22.9}', '{"x": -43.2, "y": Infinity}'])
def test_non_finite_coordinates_are_rejected(client, users, auth_headers, location):
    headers = {**auth_headers(users["owner"]), "Content-Type": "application/json"}
    # Raw body: the client's JSON encoder refuses NaN, the server's parser accepts it.
    body = '{"title": "Pothole", "description": "Deep hole", "category": "infrastructure", "location": %s}'

    created = client.post("/reports/", content=body % location, headers=headers)
    assert created.status_code == 422

    report_id = _create(client, auth_headers, users["owner"]).json()["id"]
    updated = client.patch(f"/reports/{report_id}", content='{"location": %s}' % location, headers=headers)
    assert updated.status_code == 422
    stored = client.get(f"/reports/{report_id}", headers=headers).json()
    assert stored["location"] == {"x": -43.2, "y": -22.9}


def test_my_reports_lists_only_callers_reports(client, users, auth_headers):
    _create(client, auth_headers, users["owner"])
    _create(client, auth_headers, users["other"], title="Graffiti")

    mine = client.get("/reports/my-reports", headers=auth_headers(users["owner"])).json()
    everything = client.get("/reports/", headers=auth_headers(users["owner"])).json()

    assert [r["title"] for r in mine] == ["Overflowing bin"]
    assert len(everything) == 2


def test_missing_report_is_404(client, users, auth_headers):
    assert client.get("/reports/nope", headers=auth_headers(users["owner"])).status_code == 404


def test_update_permissions(client, users, auth_headers):
    report_id = _create(client, auth_headers, users["owner"]).json()["id"]

    denied = client.patch(f"/reports/{report_id}", json={"title": "Mine now"}, headers=auth_headers(users["other"]))
    assert denied.status_code == 403

    allowed = client.patch(
        f"/reports/{report_id}",
        json={"streetName": "Av. Atlântica", "status": "resolved"},
        headers=auth_headers(users["owner"]),
    )
    assert allowed.status_code == 200
    assert allowed.json()["streetName"] == "Av. Atlântica"
    assert allowed.json()["status"] == "pending"


def test_status_update_is_admin_only(client, users, auth_headers):
    report_id = _create(client, auth_headers, users["owner"]).json()["id"]

    denied = client.patch(
        f"/reports/{report_id}/status", json={"status": "resolved"}, headers=auth_headers(users["owner"])
    )
    assert denied.status_code == 403

    ok = client.patch(
        f"/reports/{report_id}/status",
        json={"status": "in_progress", "comment": "Team on the way"},
        headers=auth_headers(users["admin"]),
    )
    assert ok.status_code == 200
    body = ok.json()
    assert body["status"] == "in_progress"
    assert body["statusLogs"][-1]["status"] == "in_progress"
    assert body["statusLogs"][-1]["changedBy"]["name"] == "Carla Admin"

    invalid = client.patch(
        f"/reports/{report_id}/status", json={"status": "archived"}, headers=auth_headers(users["admin"])
    )
    assert invalid.status_code == 422


def test_delete_permissions(client, users, auth_headers):
    report_id = _create(client, auth_headers, users["owner"]).json()["id"]

    assert client.delete(f"/reports/{report_id}", headers=auth_headers(users["other"])).status_code == 403
    assert client.delete(f"/reports/{report_id}", headers=auth_headers(users["owner"])).status_code == 204
    assert client.get(f"/reports/{report_id}", headers=auth_headers(users["owner"])).status_code == 404


def test_upload_media(client, users, auth_headers):
    response = client.post(
        "/reports/upload",
        files={"file": ("pothole.png", b"\x89PNG", "image/png")},
        headers=auth_headers(users["owner"]),
    )
    assert response.status_code == 201
    url = response.json()["fileUrl"]
    assert url.startswith(f"{API_URL}/uploads/")
    assert url.endswith(".png")


def test_upload_rejects_wrong_type(client, users, auth_headers):
    response = client.post(
        "/reports/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers(users["owner"]),
    )
    assert response.status_code == 415


def test_upload_rejects_large_files(client, users, monkeypatch, auth_headers):
    monkeypatch.setattr(settings, "MAX_FILE_SIZE", 4)
    response = client.post(
        "/reports/upload",
        files={"file": ("big.jpg", b"0123456789", "image/jpeg")},
        headers=auth_headers(users["owner"]),
    )
    assert response.status_code == 413


class _UnreadableFile:
    def read(self, *args):
        raise AssertionError("oversized upload was read into memory")


def test_upload_size_is_checked_before_reading(users, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "MAX_FILE_SIZE", 4)
    upload = UploadFile(
        file=_UnreadableFile(),
        size=10,
        filename="big.jpg",
        headers=Headers({"content-type": "image/jpeg"}),
    )

    with pytest.raises(HTTPException) as exc_info:
        reports_api.upload_media(
            file=upload, current_user=users["owner"], storage=LocalStorage(str(tmp_path), API_URL)
        )
    assert exc_info.value.status_code == 413
    assert list(tmp_path.iterdir()) == []


def test_stats_endpoints_require_admin(client, users, auth_headers):
    assert client.get("/stats/summary", headers=auth_headers(users["owner"])).status_code == 403


def test_stats_endpoints(client, users, auth_headers):
    report_id = _create(client, auth_headers, users["owner"]).json()["id"]
    _create(client, auth_headers, users["owner"], category="safety")
    client.patch(f"/reports/{report_id}/status", json={"status": "resolved"}, headers=auth_headers(users["admin"]))
    admin = auth_headers(users["admin"])

    summary = client.get("/stats/summary", headers=admin).json()
    assert summary["totalReports"] == 2
    assert summary["byStatus"]["resolved"] == 1
    assert summary["resolutionRate"] == 50.0

    by_status = client.get("/stats/by-status", headers=admin).json()
    assert [row["status"] for row in by_status] == ["pending", "in_progress", "resolved", "rejected"]

    by_category = client.get("/stats/by-category", headers=admin).json()
    assert {row["category"] for row in by_category[:2]} == {"environment", "safety"}

    by_date = client.get("/stats/by-date", params={"period": "day"}, headers=admin).json()
    assert by_date["period"] == "day"
    assert sum(bucket["total"] for bucket in by_date["data"]) == 2
    assert set(by_date["data"][0]["byStatus"]) == {"pending", "in_progress", "resolved", "rejected"}

    assert client.get("/stats/by-date", params={"period": "year"}, headers=admin).status_code == 422


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
