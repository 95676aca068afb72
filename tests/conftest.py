"""
Shared fixtures: every test gets its own app, SQLite file and upload dir.
"""

import io
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from househunt.core.config import Settings
from househunt.main import create_app

Settings.model_config["env_file"] = None

PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        STATIC_UPLOAD_DIR=str(tmp_path / "uploads"),
        JWT_SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def image_bytes(fmt: str = "PNG", size=(64, 48)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buf, format=fmt)
    return buf.getvalue()


class Api:
    """Small helper around the HTTP flows most tests need."""

    def __init__(self, client: TestClient):
        self.client = client
        self._phones = 0

    def register(self, email: str, role: str = "renter", phone: str | None = None, **extra):
        body = {"name": email.split("@")[0], "email": email, "password": PASSWORD, "role": role}
        if role == "owner" and phone is None:
            self._phones += 1
            phone = f"90000000{self._phones:02d}"
        if phone is not None:
            body["phone"] = phone
        body.update(extra)
        return self.client.post("/api/auth/register", json=body)

    def login(self, email: str, password: str = PASSWORD):
        return self.client.post("/api/auth/login", json={"email": email, "password": password})

    def token_for(self, email: str, role: str = "renter") -> str:
        res = self.register(email, role=role)
        assert res.status_code == 201, res.text
        return res.json()["token"]

    def approved_owner(self, email: str, admin_token: str) -> SimpleNamespace:
        res = self.register(email, role="owner")
        assert res.status_code == 201, res.text
        owner_id = res.json()["user"]["id"]
        approve = self.client.put(f"/api/admin/owners/{owner_id}/approve", headers=bearer(admin_token))
        assert approve.status_code == 200, approve.text
        login = self.login(email)
        assert login.status_code == 200, login.text
        return SimpleNamespace(id=owner_id, token=login.json()["token"])

    def add_property(self, owner_token: str, **fields):
        data = {"title": "Flat", "location": "Hyderabad", "rent": "15000"}
        data.update({k: str(v) for k, v in fields.items()})
        return self.client.post("/api/owner/properties", data=data, headers=bearer(owner_token))


@pytest.fixture
def api(client) -> Api:
    return Api(client)


@pytest.fixture
def admin_token(api) -> str:
    return api.token_for("admin@example.com", role="admin")
