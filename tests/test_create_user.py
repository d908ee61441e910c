import pytest
from sqlmodel import Session, create_engine, select

from novashop.core.config import get_settings
from novashop.models.user import User
from novashop.scripts.create_user import main


@pytest.fixture()
def db_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("JWT_SECRET", "cli-secret")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    get_settings.cache_clear()
    yield url
    get_settings.cache_clear()


def _users(url):
    engine = create_engine(url)
    with Session(engine) as session:
        users = session.exec(select(User)).all()
    engine.dispose()
    return users


def test_creates_admin_account(db_url, capsys):
    assert main(["Shop Admin", "Admin@Nova.shop", "secret-pass", "admin"]) == 0
    assert "admin@nova.shop" in capsys.readouterr().out

    [user] = _users(db_url)
    assert user.role == "admin"
    assert user.email == "admin@nova.shop"
    assert user.password_hash.startswith("$2b$04$")


def test_duplicate_account_fails(db_url, capsys):
    assert main(["Ann", "ann@x.com", "pw123"]) == 0
    assert main(["Ann again", "ann@x.com", "pw456"]) == 1
    assert "already exists" in capsys.readouterr().err
    assert len(_users(db_url)) == 1


def test_invalid_email_fails(db_url, capsys):
    assert main(["Ann", "not-an-email", "pw123"]) == 1
    assert capsys.readouterr().err
