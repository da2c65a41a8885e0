"""
Test configuration

Fixtures: in-memory database, temporary storage, HTTP client, admin
sign-in and a data factory.
"""
from dataclasses import dataclass, field
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from suryaghar.core.config import Settings
from suryaghar.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "secret123"
TEST_OTP = "1234"

PDF = ("resume.pdf", b"%PDF-1.4 test document", "application/pdf")
JPEG = ("photo.jpg", b"\xff\xd8\xff\xe0 test image", "image/jpeg")


def application_form(**overrides) -> dict:
    return {
        "full_name": "Amit Kumar",
        "state": "Rajasthan",
        "district": "Jaipur",
        "position": "Project Facilitator",
        "qualification": "B.A.",
        "experience": "1",
        "mobile": "9812345670",
        "email": "amit@example.com",
        **overrides,
    }


def application_files(**overrides) -> dict:
    return {
        "resume": PDF,
        "aadhaar": ("aadhaar.pdf", b"%PDF-1.4 aadhaar", "application/pdf"),
        "photo": JPEG,
        **overrides,
    }


def job_form(**overrides) -> dict:
    return {
        "title": "Solar Field Technician",
        "category": "Private Jobs",
        "job_type": "Full Time",
        "location": "Jaipur, Rajasthan",
        "salary": "15000-20000",
        "description": "Install and maintain rooftop solar panels.",
        "organization_name": "Sun Power Pvt Ltd",
        "contact_person": "Ravi Verma",
        "mobile": "9876543210",
        "whatsapp": "9876543210",
        "email": "hr@sunpower.example.com",
        **overrides,
    }


# ========== Data factory ==========

@dataclass
class DataFactory:
    """
    Creates records through the public and admin API.

    Admin calls need ``admin_headers``; the ``admin`` fixture fills it in.
    """
    client: AsyncClient
    admin_headers: dict = field(default_factory=dict)
    _counter: int = field(default=0, repr=False)

    def _next_id(self) -> str:
        self._counter += 1
        return str(self._counter)

    async def submit_application(self, files: Optional[dict] = None, **overrides) -> dict:
        resp = await self.client.post(
            "/api/v1/applications",
            data=application_form(**overrides),
            files=files or application_files(),
        )
        assert resp.status_code == 201, f"Application failed: {resp.text}"
        return resp.json()["data"]

    async def post_job(self, **overrides) -> dict:
        suffix = self._next_id()
        data = job_form(**{"title": f"Solar Technician {suffix}", **overrides})
        resp = await self.client.post("/api/v1/jobs", json=data)
        assert resp.status_code == 201, f"Job post failed: {resp.text}"
        return resp.json()["data"]

    async def approve_job(self, job_id: str) -> dict:
        resp = await self.client.patch(
            f"/api/v1/admin/jobs/{job_id}/status", json={"status": "approved"}, headers=self.admin_headers
        )
        assert resp.status_code == 200, f"Approve failed: {resp.text}"
        return resp.json()["data"]

    async def approved_job(self, **overrides) -> dict:
        job = await self.post_job(**overrides)
        return await self.approve_job(job["id"])

    async def apply_to_job(self, job_id: str, resume=None, **overrides) -> dict:
        data = {
            "full_name": "Sunita Devi",
            "mobile": "9123456780",
            "whatsapp": "9123456780",
            "email": "sunita@example.com",
            "city": "Jaipur",
            "message": "Interested",
            **overrides,
        }
        files = {"resume": resume} if resume else None
        resp = await self.client.post(f"/api/v1/jobs/{job_id}/apply", data=data, files=files)
        assert resp.status_code == 201, f"Job application failed: {resp.text}"
        return resp.json()["data"]

    async def create_testimonial(self, **overrides) -> dict:
        suffix = self._next_id()
        data = {
            "name": f"Person {suffix}",
            "state": "Kerala",
            "position": "Project Facilitator",
            "review": "Good experience working on the programme.",
            "rating": 5,
            **overrides,
        }
        resp = await self.client.post("/api/v1/admin/testimonials", json=data, headers=self.admin_headers)
        assert resp.status_code == 201, f"Testimonial failed: {resp.text}"
        return resp.json()["data"]

    async def create_state_manager(self, state: str = "Kerala", **overrides) -> dict:
        data = {
            "state": state,
            "name": "Anil Nair",
            "mobile": "9445566778",
            "email": "anil@example.com",
            **overrides,
        }
        resp = await self.client.post(
            "/api/v1/admin/state-managers", data=data, files={"photo": JPEG}, headers=self.admin_headers
        )
        assert resp.status_code == 201, f"State manager failed: {resp.text}"
        return resp.json()["data"]

    async def create_video(self, url: str = "https://youtu.be/dQw4w9WgXcQ", **overrides) -> dict:
        suffix = self._next_id()
        data = {"title": f"Video {suffix}", "youtube_url": url, **overrides}
        resp = await self.client.post("/api/v1/admin/videos", json=data, headers=self.admin_headers)
        assert resp.status_code == 201, f"Video failed: {resp.text}"
        return resp.json()["data"]


# ========== App and client ==========

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        app_env="development",
        database_url=TEST_DATABASE_URL,
        storage_dir=str(tmp_path / "storage"),
        public_base_url="http://test",
        admin_allowed_emails=[],
    )


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """One shared in-memory SQLite connection per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def app(settings: Settings, engine: AsyncEngine):
    app = create_app(settings=settings, engine=engine)
    # ASGITransport does not run the lifespan
    await app.state.backend.init()
    return app


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def factory(client: AsyncClient) -> DataFactory:
    return DataFactory(client=client)


async def register_admin(
    client: AsyncClient, monkeypatch, email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD
) -> dict:
    """Run the one-time-code registration; returns the session payload."""
    monkeypatch.setattr("suryaghar.services.auth.generate_otp", lambda: TEST_OTP)
    resp = await client.post("/api/v1/auth/register/send-otp", json={"email": email})
    assert resp.status_code == 200, resp.text
    resp = await client.post("/api/v1/auth/register/verify", json={
        "email": email,
        "code": TEST_OTP,
        "username": "admin",
        "password": password,
        "confirm_password": password,
    })
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


@pytest_asyncio.fixture
async def admin_headers(client: AsyncClient, monkeypatch) -> dict:
    session = await register_admin(client, monkeypatch)
    return {"Authorization": f"Bearer {session['access_token']}"}


@pytest_asyncio.fixture
async def admin(factory: DataFactory, admin_headers: dict) -> DataFactory:
    """Factory with admin credentials attached."""
    factory.admin_headers = admin_headers
    return factory


@pytest_asyncio.fixture
async def null_client(tmp_path) -> AsyncGenerator[AsyncClient, None]:
    """Client for an app started without DATABASE_URL / STORAGE_DIR."""
    app = create_app(settings=Settings(_env_file=None, database_url=None, storage_dir=None))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
