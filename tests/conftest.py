import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from novashop.core.config import Settings
from novashop.main import create_app
from novashop.models.user import User

PUBLIC_PREFIX = "https://cdn.test/storage/v1/object/public/assets/"


class FakeStorage:
    """In-memory stand-in for the Supabase bucket."""

    def __init__(self):
        self.uploads: dict[str, tuple[bytes, str]] = {}
        self.deleted: list[str] = []

    def upload(self, path: str, file_bytes: bytes, content_type: str) -> str:
        self.uploads[path] = (file_bytes, content_type)
        return PUBLIC_PREFIX + path

    def delete_public_url(self, url: str) -> None:
        self.deleted.append(url)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture()
def app(settings):
    application = create_app(settings)
    application.state.storage = FakeStorage()
    return application


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db(app, client):
    """Session on the same in-memory database the app uses."""
    with Session(app.state.engine) as session:
        yield session


def register(client, name="Ann", email="ann@x.com", password="pw123", **fields):
    data = {"name": name, "email": email, "password": password, **fields}
    return client.post("/register", data=data)


def login(client, email="ann@x.com", password="pw123"):
    return client.post("/login", json={"email": email, "password": password})


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def customer_token(client) -> str:
    assert register(client).status_code == 200
    return login(client).json()["token"]


@pytest.fixture()
def admin_token(app, client) -> str:
    """Admins cannot self-register, so insert one directly."""
    with Session(app.state.engine) as session:
        session.add(
            User(
                name="Root",
                email="root@x.com",
                password_hash=app.state.hasher.hash("admin-pw"),
                role="admin",
            )
        )
        session.commit()
    return login(client, "root@x.com", "admin-pw").json()["token"]
