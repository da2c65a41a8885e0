"""
Admin back office: gating, applicants, job moderation, job applications
"""
import pytest
from httpx import AsyncClient

from tests.conftest import PDF, DataFactory


# ========== Gating ==========

@pytest.mark.asyncio
async def test_anonymous_admin_page_redirects_to_login(client: AsyncClient):
    resp = await client.get("/admin")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_admin_page_for_signed_in_admin(client: AsyncClient, admin_headers: dict, factory: DataFactory):
    await factory.submit_application()

    resp = await client.get("/admin", headers=admin_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["user"]["email"] == "admin@example.com"
    assert data["overview"]["stats"]["pending"] == 1
    assert any(p["key"] == "testimonials" for p in data["panels"])


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", [
    ("get", "/api/v1/admin/overview"),
    ("get", "/api/v1/admin/applicants"),
    ("post", "/api/v1/admin/applicants/bulk-status"),
    ("patch", "/api/v1/admin/jobs/some-id/status"),
    ("delete", "/api/v1/admin/testimonials/some-id?confirm=true"),
])
async def test_admin_api_requires_sign_in(client: AsyncClient, method: str, path: str):
    resp = await client.request(method, path)
    assert resp.status_code == 401
    assert resp.json()["message"] == "Please sign in to continue"


@pytest.mark.asyncio
async def test_invalid_token_is_anonymous(client: AsyncClient):
    resp = await client.get("/api/v1/admin/overview", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


# ========== Applicants ==========

@pytest.mark.asyncio
async def test_applicant_status_rejected_then_approved(client: AsyncClient, admin: DataFactory):
    applicant = await admin.submit_application()
    url = f"/api/v1/admin/applicants/{applicant['id']}/status"

    resp = await client.patch(url, json={"status": "Rejected"}, headers=admin.admin_headers)
    assert resp.json()["data"]["status"] == "Rejected"
    resp = await client.patch(url, json={"status": "Approved"}, headers=admin.admin_headers)
    assert resp.json()["data"]["status"] == "Approved"

    resp = await client.get("/api/v1/admin/applicants", headers=admin.admin_headers)
    assert resp.json()["data"]["items"][0]["status"] == "Approved"


@pytest.mark.asyncio
async def test_applicant_status_must_be_known(client: AsyncClient, admin: DataFactory):
    applicant = await admin.submit_application()
    resp = await client.patch(
        f"/api/v1/admin/applicants/{applicant['id']}/status",
        json={"status": "Hired"},
        headers=admin.admin_headers,
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_applicant_filters_and_options(client: AsyncClient, admin: DataFactory):
    await admin.submit_application()
    await admin.submit_application(full_name="Lakshmi Rao", state="Kerala", mobile="9000000001",
                                   email="lakshmi@example.com", qualification="M.Sc.")

    resp = await client.get("/api/v1/admin/applicants", params={"state": "Kerala"}, headers=admin.admin_headers)
    assert [a["full_name"] for a in resp.json()["data"]["items"]] == ["Lakshmi Rao"]

    resp = await client.get("/api/v1/admin/applicants", params={"search": "amit@"}, headers=admin.admin_headers)
    assert [a["full_name"] for a in resp.json()["data"]["items"]] == ["Amit Kumar"]

    resp = await client.get("/api/v1/admin/applicants", params={"search": "9000000001"}, headers=admin.admin_headers)
    assert resp.json()["data"]["total"] == 1

    resp = await client.get("/api/v1/admin/applicants/options", headers=admin.admin_headers)
    assert resp.json()["data"]["qualifications"] == ["B.A.", "M.Sc."]


@pytest.mark.asyncio
async def test_bulk_status_and_export(client: AsyncClient, admin: DataFactory):
    first = await admin.submit_application()
    second = await admin.submit_application(full_name="Lakshmi Rao", email="lakshmi@example.com")

    resp = await client.post(
        "/api/v1/admin/applicants/bulk-status",
        json={"ids": [first["id"], second["id"]], "status": "Approved"},
        headers=admin.admin_headers,
    )
    assert resp.json()["data"]["updated"] == 2

    resp = await client.get("/api/v1/admin/applicants/export", headers=admin.admin_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers["content-disposition"]
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("Name,Email,Mobile,State,District,Position")
    assert len(lines) == 3
    assert "1 years" in lines[1]
    assert "Approved" in lines[1]


@pytest.mark.asyncio
async def test_delete_applicant_needs_confirmation(client: AsyncClient, admin: DataFactory, settings):
    applicant = await admin.submit_application()
    url = f"/api/v1/admin/applicants/{applicant['id']}"

    resp = await client.delete(url, headers=admin.admin_headers)
    assert resp.status_code == 400

    resp = await client.delete(url, params={"confirm": "true"}, headers=admin.admin_headers)
    assert resp.status_code == 200

    resp = await client.get("/api/v1/admin/applicants", headers=admin.admin_headers)
    assert resp.json()["data"]["total"] == 0

    resp = await client.get(applicant["resume_url"].removeprefix("http://test"))
    assert resp.status_code == 404


# ========== Job moderation ==========

@pytest.mark.asyncio
async def test_approve_sets_published_at_and_writes_audit(client: AsyncClient, admin: DataFactory):
    job = await admin.post_job()
    approved = await admin.approve_job(job["id"])
    assert approved["status"] == "approved"
    assert approved["published_at"] is not None

    resp = await client.get("/api/v1/admin/audit-logs", headers=admin.admin_headers)
    log = resp.json()["data"]["items"][0]
    assert log["action"] == "APPROVE_JOB"
    assert log["entity_id"] == job["id"]
    assert log["changes"]["status"] == {"from": "pending", "to": "approved"}


@pytest.mark.asyncio
async def test_moderation_list_filters(client: AsyncClient, admin: DataFactory):
    pending = await admin.post_job(title="Pending Role")
    await admin.approved_job(title="Live Role")

    resp = await client.get("/api/v1/admin/jobs", params={"status": "pending"}, headers=admin.admin_headers)
    assert [j["id"] for j in resp.json()["data"]["items"]] == [pending["id"]]

    resp = await client.get("/api/v1/admin/jobs", params={"search": "live"}, headers=admin.admin_headers)
    assert [j["title"] for j in resp.json()["data"]["items"]] == ["Live Role"]


@pytest.mark.asyncio
async def test_bulk_approve_and_reject(client: AsyncClient, admin: DataFactory):
    jobs = [await admin.post_job() for _ in range(3)]
    ids = [j["id"] for j in jobs]

    resp = await client.post("/api/v1/admin/jobs/bulk/approve", json={"ids": ids[:2]}, headers=admin.admin_headers)
    assert resp.json()["data"]["updated"] == 2
    resp = await client.post("/api/v1/admin/jobs/bulk/reject", json={"ids": ids[2:]}, headers=admin.admin_headers)
    assert resp.json()["data"]["updated"] == 1

    resp = await client.get("/api/v1/jobs")
    assert resp.json()["data"]["total"] == 2

    resp = await client.post("/api/v1/admin/jobs/bulk/close", json={"ids": ids}, headers=admin.admin_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_closed_job_leaves_public_listing(client: AsyncClient, admin: DataFactory):
    job = await admin.approved_job()
    resp = await client.patch(
        f"/api/v1/admin/jobs/{job['id']}/status", json={"status": "closed"}, headers=admin.admin_headers
    )
    assert resp.status_code == 200
    resp = await client.get(f"/api/v1/jobs/{job['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_edit_job(client: AsyncClient, admin: DataFactory):
    job = await admin.post_job()
    resp = await client.patch(
        f"/api/v1/admin/jobs/{job['id']}", json={"salary": "25000"}, headers=admin.admin_headers
    )
    assert resp.json()["data"]["salary"] == "25000"
    assert resp.json()["data"]["title"] == job["title"]

    resp = await client.patch(
        f"/api/v1/admin/jobs/{job['id']}", json={"mobile": "12345"}, headers=admin.admin_headers
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_delete_job_cascades_to_applications(client: AsyncClient, admin: DataFactory):
    job = await admin.approved_job()
    await admin.apply_to_job(job["id"], resume=PDF)
    await client.post(f"/api/v1/jobs/{job['id']}/save", json={"email": "seeker@example.com"})

    resp = await client.delete(
        f"/api/v1/admin/jobs/{job['id']}", params={"confirm": "true"}, headers=admin.admin_headers
    )
    assert resp.status_code == 200

    resp = await client.get("/api/v1/admin/job-applications", headers=admin.admin_headers)
    assert resp.json()["data"]["total"] == 0
    resp = await client.get("/api/v1/jobs/saved", params={"email": "seeker@example.com"})
    assert resp.json()["data"] == []

    resp = await client.get("/api/v1/admin/audit-logs", params={"entity_type": "job"}, headers=admin.admin_headers)
    assert resp.json()["data"]["items"][0]["action"] == "DELETE_JOB"


# ========== Job applications ==========

@pytest.mark.asyncio
async def test_job_application_review(client: AsyncClient, admin: DataFactory):
    job = await admin.approved_job(title="Panel Cleaner")
    application = await admin.apply_to_job(job["id"])

    resp = await client.get("/api/v1/admin/job-applications", params={"job_id": job["id"]},
                            headers=admin.admin_headers)
    item = resp.json()["data"]["items"][0]
    assert item["job_title"] == "Panel Cleaner"

    resp = await client.patch(
        f"/api/v1/admin/job-applications/{application['id']}",
        json={"status": "shortlisted", "rating": 4, "notes": "Call back"},
        headers=admin.admin_headers,
    )
    data = resp.json()["data"]
    assert (data["status"], data["rating"], data["notes"]) == ("shortlisted", 4, "Call back")

    resp = await client.patch(
        f"/api/v1/admin/job-applications/{application['id']}", json={"rating": 9}, headers=admin.admin_headers
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_job_application_bulk_export_and_delete(client: AsyncClient, admin: DataFactory):
    job = await admin.approved_job()
    first = await admin.apply_to_job(job["id"])
    second = await admin.apply_to_job(job["id"], full_name="Meena Kumari")

    resp = await client.post(
        "/api/v1/admin/job-applications/bulk-status",
        json={"ids": [first["id"], second["id"]], "status": "on_hold"},
        headers=admin.admin_headers,
    )
    assert resp.json()["data"]["updated"] == 2

    resp = await client.get("/api/v1/admin/job-applications/export", params={"job_id": job["id"]},
                            headers=admin.admin_headers)
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("Name,Email,Mobile,WhatsApp,City,Status")
    assert len(lines) == 3

    resp = await client.delete(
        f"/api/v1/admin/job-applications/{first['id']}", params={"confirm": "true"}, headers=admin.admin_headers
    )
    assert resp.status_code == 200
    resp = await client.get("/api/v1/admin/job-applications", headers=admin.admin_headers)
    assert resp.json()["data"]["total"] == 1


# ========== Overview ==========

@pytest.mark.asyncio
async def test_overview_figures(client: AsyncClient, admin: DataFactory):
    await admin.submit_application()
    await admin.submit_application(state="Kerala", email="k@example.com")
    job = await admin.approved_job(category="NGO Jobs")
    await admin.post_job()
    await admin.apply_to_job(job["id"])

    resp = await client.get("/api/v1/admin/overview", headers=admin.admin_headers)
    data = resp.json()["data"]
    assert data["stats"] == {"total": 2, "pending": 2, "approved": 0, "rejected": 0}
    assert {d["name"]: d["value"] for d in data["by_state"]} == {"Rajasthan": 1, "Kerala": 1}
    assert data["monthly"][0]["applications"] == 2
    assert data["jobs"]["total_jobs"] == 2
    assert data["jobs"]["pending_jobs"] == 1
    assert data["jobs"]["jobs_by_category"] == {"NGO Jobs": 1}
    assert data["jobs"]["applications_by_status"] == {"applied": 1}
