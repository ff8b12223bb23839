import pytest
from bson import ObjectId

from forumflow.db.base import REPORTS

REPORT = {
    "reportedUserUid": "troll-1",
    "reportedUserEmail": "troll@forumflow.dev",
    "contentId": "post-123",
    "reason": "spam",
}


@pytest.fixture
def report_id(client, user_headers):
    response = client.post("/api/reports", json=REPORT, headers=user_headers)
    assert response.status_code == 201, response.text
    return response.json()["reportId"]


def test_report_takes_reporter_from_identity(client, db, user_headers):
    body = {**REPORT, "reporterUid": "someone-else", "reporterEmail": "spoof@forumflow.dev"}
    response = client.post("/api/reports", json=body, headers=user_headers)
    assert response.status_code == 201

    report = db[REPORTS].find_one({"_id": ObjectId(response.json()["reportId"])})
    assert report["reporterUid"] == "user-1"
    assert report["reporterEmail"] == "reader@forumflow.dev"
    assert report["status"] == "pending"
    assert report["actions"] == []
    assert report["contentSnippet"] == ""


@pytest.mark.parametrize("missing", ["reportedUserUid", "reportedUserEmail", "contentId", "reason"])
def test_report_requires_fields(client, db, user_headers, missing):
    body = {k: v for k, v in REPORT.items() if k != missing}
    response = client.post("/api/reports", json=body, headers=user_headers)
    assert response.status_code == 400
    assert db[REPORTS].count_documents({}) == 0


def test_report_requires_authentication(client):
    assert client.post("/api/reports", json=REPORT).status_code == 401


def test_only_admins_list_reports(client, report_id, user_headers, admin_headers):
    assert client.get("/api/reports", headers=user_headers).status_code == 403

    response = client.get("/api/reports", headers=admin_headers)
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [report_id]


@pytest.mark.parametrize(
    "action, expected_status",
    [("warn", "action_taken"), ("delete", "action_taken"), ("ban", "action_taken"), ("resolve", "resolved")],
)
def test_apply_action_sets_status(client, report_id, admin_headers, action, expected_status):
    response = client.patch(f"/api/reports/{report_id}", json={"action": action}, headers=admin_headers)
    assert response.status_code == 200
    report = response.json()
    assert report["status"] == expected_status
    assert [a["type"] for a in report["actions"]] == [action]


def test_actions_accumulate(client, report_id, admin_headers):
    client.patch(f"/api/reports/{report_id}", json={"action": "warn"}, headers=admin_headers)
    report = client.patch(f"/api/reports/{report_id}", json={"action": "resolve"}, headers=admin_headers).json()
    assert [a["type"] for a in report["actions"]] == ["warn", "resolve"]
    assert report["status"] == "resolved"


def test_invalid_action_changes_nothing(client, db, report_id, admin_headers):
    response = client.patch(f"/api/reports/{report_id}", json={"action": "shame"}, headers=admin_headers)
    assert response.status_code == 400
    report = db[REPORTS].find_one({"_id": ObjectId(report_id)})
    assert report["status"] == "pending"
    assert report["actions"] == []


def test_action_on_missing_report(client, admin_headers):
    response = client.patch(f"/api/reports/{ObjectId()}", json={"action": "warn"}, headers=admin_headers)
    assert response.status_code == 404


def test_non_admin_cannot_apply_action(client, db, report_id, user_headers):
    response = client.patch(f"/api/reports/{report_id}", json={"action": "ban"}, headers=user_headers)
    assert response.status_code == 403
    assert db[REPORTS].find_one({"_id": ObjectId(report_id)})["actions"] == []


def test_null_content_snippet_defaults_to_empty(client, db, user_headers):
    response = client.post("/api/reports", json={**REPORT, "contentSnippet": None}, headers=user_headers)
    assert response.status_code == 201
    report = db[REPORTS].find_one({"_id": ObjectId(response.json()["reportId"])})
    assert report["contentSnippet"] == ""
