"""
Public content sections and the admin curation panels behind them
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from suryaghar.content import DEFAULT_TESTIMONIALS
from suryaghar.main import create_app
from tests.conftest import JPEG, PDF, DataFactory


# ========== Public pages ==========

@pytest.mark.asyncio
async def test_home_page_sections(client: AsyncClient):
    resp = await client.get("/")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["shell"]["brand"]["name"] == "Meri Pahal"
    assert len(data["faq"]) == 7
    assert data["hero"]["countdown"] == {"days": 15, "hours": 12, "minutes": 30, "seconds": 45}

    sections = data["sections"]
    assert sections["legal_documents"]["status"] == "empty"
    assert sections["state_managers"]["items"] == []
    assert sections["testimonials"]["status"] == "loaded"
    assert len(sections["testimonials"]["items"]) == len(DEFAULT_TESTIMONIALS)


@pytest.mark.asyncio
async def test_shell_whatsapp_link(client: AsyncClient):
    data = (await client.get("/api/v1/content/shell")).json()["data"]
    assert data["contact_button"]["href"].startswith("https://wa.me/917073741421?text=")
    assert any(link["href"] == "https://pmsuryaghar.gov.in" for link in data["footer"]["links"])


@pytest_asyncio.fixture
async def rebranded_client(settings, engine):
    custom = settings.model_copy(update={"whatsapp_number": "9123456789", "portal_url": "https://solar.example.org"})
    app = create_app(settings=custom, engine=engine)
    await app.state.backend.init()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_shell_follows_app_settings(rebranded_client: AsyncClient):
    shell = (await rebranded_client.get("/api/v1/content/shell")).json()["data"]
    assert shell["contact_button"]["href"].startswith("https://wa.me/919123456789?text=")
    assert shell["footer"]["whatsapp"].startswith("https://wa.me/919123456789?text=")
    assert shell["footer"]["links"][0]["href"] == "https://solar.example.org"

    home = (await rebranded_client.get("/")).json()["data"]
    assert home["about"]["portal_url"] == "https://solar.example.org"
    assert home["shell"]["contact_button"]["href"].startswith("https://wa.me/919123456789")


@pytest.mark.asyncio
async def test_countdown(client: AsyncClient):
    data = (await client.get("/api/v1/content/countdown")).json()["data"]
    assert data == {"days": 15, "hours": 12, "minutes": 30, "seconds": 45}


@pytest.mark.asyncio
async def test_login_page(client: AsyncClient, admin_headers: dict):
    client.cookies.clear()
    resp = await client.get("/login")
    assert resp.json()["data"]["login_endpoint"] == "/api/v1/auth/login"

    resp = await client.get("/login", headers=admin_headers)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin"


# ========== Testimonials ==========

@pytest.mark.asyncio
async def test_stored_testimonials_replace_defaults(client: AsyncClient, admin: DataFactory):
    await admin.create_testimonial(name="Kavya Menon")
    resp = await client.get("/api/v1/content/testimonials")
    assert [t["name"] for t in resp.json()["data"]["items"]] == ["Kavya Menon"]


@pytest.mark.asyncio
async def test_testimonial_toggle_twice_restores_state(client: AsyncClient, admin: DataFactory):
    testimonial = await admin.create_testimonial()
    url = f"/api/v1/admin/testimonials/{testimonial['id']}/toggle"

    first = (await client.post(url, headers=admin.admin_headers)).json()["data"]
    assert first["is_active"] is False
    second = (await client.post(url, headers=admin.admin_headers)).json()["data"]
    assert second["is_active"] is True


@pytest.mark.asyncio
async def test_inactive_testimonial_hidden_publicly_but_listed_in_admin(client: AsyncClient, admin: DataFactory):
    visible = await admin.create_testimonial(name="Visible Person")
    hidden = await admin.create_testimonial(name="Hidden Person")
    await client.post(f"/api/v1/admin/testimonials/{hidden['id']}/toggle", headers=admin.admin_headers)

    public = (await client.get("/api/v1/content/testimonials")).json()["data"]["items"]
    assert [t["id"] for t in public] == [visible["id"]]

    listed = (await client.get("/api/v1/admin/testimonials", headers=admin.admin_headers)).json()["data"]["items"]
    assert {t["id"] for t in listed} == {visible["id"], hidden["id"]}


@pytest.mark.asyncio
async def test_testimonial_reorder(client: AsyncClient, admin: DataFactory):
    a = await admin.create_testimonial(name="First Person")
    b = await admin.create_testimonial(name="Second Person")
    assert (a["display_order"], b["display_order"]) == (0, 1)

    resp = await client.post(f"/api/v1/admin/testimonials/{b['id']}/move/up", headers=admin.admin_headers)
    assert resp.json()["data"]["moved"] is True

    items = (await client.get("/api/v1/admin/testimonials", headers=admin.admin_headers)).json()["data"]["items"]
    assert [t["name"] for t in items] == ["Second Person", "First Person"]

    resp = await client.post(f"/api/v1/admin/testimonials/{b['id']}/move/up", headers=admin.admin_headers)
    assert resp.json()["data"]["moved"] is False

    resp = await client.post(f"/api/v1/admin/testimonials/{b['id']}/move/sideways", headers=admin.admin_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_testimonial_rating_range(client: AsyncClient, admin_headers: dict):
    resp = await client.post("/api/v1/admin/testimonials", json={
        "name": "X Person", "state": "Kerala", "position": "Facilitator", "review": "ok", "rating": 6,
    }, headers=admin_headers)
    assert resp.status_code == 422
    assert resp.json()["data"]["errors"]["rating"] == "Rating must be between 1 and 5"


# ========== State managers ==========

@pytest.mark.asyncio
async def test_state_manager_listed_with_whatsapp_link(client: AsyncClient, admin: DataFactory):
    manager = await admin.create_state_manager(state="Kerala", mobile="9445566778")
    assert manager["photo_url"].startswith("http://test/storage/manager-photos/managers/")

    items = (await client.get("/api/v1/content/state-managers")).json()["data"]["items"]
    assert items[0]["whatsapp_link"].startswith("https://wa.me/919445566778")


@pytest.mark.asyncio
async def test_duplicate_state_manager_conflict(client: AsyncClient, admin: DataFactory):
    await admin.create_state_manager(state="Kerala")
    resp = await client.post(
        "/api/v1/admin/state-managers",
        data={"state": "Kerala", "name": "Other Person", "mobile": "9000000002", "email": "o@example.com"},
        files={"photo": JPEG},
        headers=admin.admin_headers,
    )
    assert resp.status_code == 409
    assert resp.json()["message"] == "Manager for Kerala already exists"


@pytest.mark.asyncio
async def test_state_manager_state_must_be_listed(client: AsyncClient, admin_headers: dict):
    resp = await client.post(
        "/api/v1/admin/state-managers",
        data={"state": "Goa", "name": "Other Person", "mobile": "9000000002", "email": "o@example.com"},
        files={"photo": JPEG},
        headers=admin_headers,
    )
    assert resp.status_code == 422
    assert resp.json()["data"]["errors"]["state"] == "Please select a state"


@pytest.mark.asyncio
async def test_state_manager_update_and_move_state(client: AsyncClient, admin: DataFactory):
    kerala = await admin.create_state_manager(state="Kerala")
    await admin.create_state_manager(state="Karnataka", mobile="9000000003", email="k@example.com")

    resp = await client.patch(
        f"/api/v1/admin/state-managers/{kerala['id']}", data={"name": "Renamed Person"}, headers=admin.admin_headers
    )
    assert resp.json()["data"]["name"] == "Renamed Person"

    resp = await client.patch(
        f"/api/v1/admin/state-managers/{kerala['id']}", data={"state": "Karnataka"}, headers=admin.admin_headers
    )
    assert resp.status_code == 409

    resp = await client.get("/api/v1/admin/state-managers", headers=admin.admin_headers)
    assert "Kerala" not in resp.json()["data"]["available_states"]
    assert "Goa" not in resp.json()["data"]["available_states"]


@pytest.mark.asyncio
async def test_inactive_state_manager_hidden_publicly(client: AsyncClient, admin: DataFactory):
    manager = await admin.create_state_manager()
    await client.post(f"/api/v1/admin/state-managers/{manager['id']}/toggle", headers=admin.admin_headers)
    items = (await client.get("/api/v1/content/state-managers")).json()["data"]["items"]
    assert items == []


# ========== Videos ==========

@pytest.mark.asyncio
@pytest.mark.parametrize("url", [
    "https://youtu.be/dQw4w9WgXcQ",
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10",
    "https://www.youtube.com/embed/dQw4w9WgXcQ",
    "dQw4w9WgXcQ",
])
async def test_video_id_parsed_from_url(client: AsyncClient, admin: DataFactory, url: str):
    video = await admin.create_video(url=url)
    assert video["video_id"] == "dQw4w9WgXcQ"


@pytest.mark.asyncio
async def test_invalid_video_url(client: AsyncClient, admin_headers: dict):
    resp = await client.post(
        "/api/v1/admin/videos", json={"title": "Bad", "youtube_url": "https://vimeo.com/1"}, headers=admin_headers
    )
    assert resp.status_code == 422
    assert resp.json()["data"]["errors"] == {"youtube_url": "Invalid YouTube URL"}


@pytest.mark.asyncio
async def test_videos_public_order_and_move(client: AsyncClient, admin: DataFactory):
    first = await admin.create_video(title="Intro")
    second = await admin.create_video(url="https://youtu.be/aaaaaaaaaaa", title="Install")

    items = (await client.get("/api/v1/content/videos")).json()["data"]["items"]
    assert [v["title"] for v in items] == ["Intro", "Install"]
    assert items[0]["embed_url"].startswith("https://www.youtube.com/embed/dQw4w9WgXcQ")

    await client.post(f"/api/v1/admin/videos/{second['id']}/move/up", headers=admin.admin_headers)
    items = (await client.get("/api/v1/content/videos")).json()["data"]["items"]
    assert [v["id"] for v in items] == [second["id"], first["id"]]

    resp = await client.patch(
        f"/api/v1/admin/videos/{first['id']}", json={"youtube_url": "https://youtu.be/bbbbbbbbbbb"},
        headers=admin.admin_headers,
    )
    assert resp.json()["data"]["video_id"] == "bbbbbbbbbbb"


# ========== Gallery ==========

@pytest.mark.asyncio
async def test_gallery_upload_filter_and_deactivate(client: AsyncClient, admin_headers: dict):
    resp = await client.post(
        "/api/v1/admin/gallery", data={"title": "Rooftop install", "category": "Projects"},
        files={"image": JPEG}, headers=admin_headers,
    )
    assert resp.status_code == 201
    image = resp.json()["data"]
    assert "/storage/gallery-images/projects/" in image["image_url"]

    await client.post(
        "/api/v1/admin/gallery", data={"title": "Team day", "category": "Team"},
        files={"image": JPEG}, headers=admin_headers,
    )

    data = (await client.get("/api/v1/content/gallery", params={"category": "Projects"})).json()["data"]
    assert [i["title"] for i in data["items"]] == ["Rooftop install"]
    assert data["categories"][0] == "All"

    await client.post(f"/api/v1/admin/gallery/{image['id']}/toggle", headers=admin_headers)
    data = (await client.get("/api/v1/content/gallery")).json()["data"]
    assert [i["title"] for i in data["items"]] == ["Team day"]


@pytest.mark.asyncio
async def test_gallery_requires_image(client: AsyncClient, admin_headers: dict):
    resp = await client.post(
        "/api/v1/admin/gallery", data={"title": "Doc", "category": "Events"},
        files={"image": PDF}, headers=admin_headers,
    )
    assert resp.status_code == 422
    assert resp.json()["data"]["errors"]["image"] == "Image must be an image"


# ========== Legal documents ==========

@pytest.mark.asyncio
async def test_legal_document_reupload_overwrites(client: AsyncClient, admin_headers: dict):
    first = await client.post(
        "/api/v1/admin/legal-documents", data={"name": "80G"}, files={"file": PDF}, headers=admin_headers
    )
    assert first.status_code == 201
    second = await client.post(
        "/api/v1/admin/legal-documents", data={"name": "80G"},
        files={"file": ("new.pdf", b"%PDF-1.4 new", "application/pdf")}, headers=admin_headers,
    )
    assert second.json()["data"]["id"] == first.json()["data"]["id"]

    items = (await client.get("/api/v1/content/legal-documents")).json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["file_url"] == second.json()["data"]["file_url"]

    resp = await client.get(first.json()["data"]["file_url"].removeprefix("http://test"))
    assert resp.status_code == 404

    listed = (await client.get("/api/v1/admin/legal-documents", headers=admin_headers)).json()["data"]
    assert "80G" not in listed["missing"]
    assert len(listed["missing"]) == 9


@pytest.mark.asyncio
async def test_legal_document_type_must_be_listed(client: AsyncClient, admin_headers: dict):
    resp = await client.post(
        "/api/v1/admin/legal-documents", data={"name": "Passport"}, files={"file": PDF}, headers=admin_headers
    )
    assert resp.status_code == 422
    assert resp.json()["data"]["errors"]["name"] == "Please select a document type"
