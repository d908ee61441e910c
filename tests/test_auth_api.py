from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError
from sqlmodel import select

from novashop.core.tokens import TokenService
from novashop.models.user import User
from novashop.repositories.user_repo import UserRepository
from novashop.schemas.auth import TokenClaims

from .conftest import PUBLIC_PREFIX, bearer, login, register


# -------- register --------


def test_register_login_admin_round_trip(client):
    r = register(client, name="Ann", email="ann@x.com", password="pw123")
    assert r.status_code == 200
    assert r.json() == {"Status": "success", "message": "Account successfully created!"}

    r = login(client, "ann@x.com", "pw123")
    assert r.status_code == 200
    body = r.json()
    assert body["Status"] == "Success"
    assert body["message"] == "Login successful!"
    assert body["user"]["email"] == "ann@x.com"
    assert body["user"]["name"] == "Ann"
    assert body["user"]["role"] == "customer"
    assert body["user"]["photo"] is None

    r = client.get("/admin", headers=bearer(body["token"]))
    assert r.status_code == 200
    admin = r.json()
    assert admin["Status"] == "success"
    assert admin["message"] == "Protected route accessed"
    assert admin["role"] == "customer"
    assert admin["user"] == body["user"]


def test_password_is_stored_hashed(client, db):
    register(client)
    user = db.exec(select(User).where(User.email == "ann@x.com")).one()
    assert user.password_hash != "pw123"
    assert user.password_hash.startswith("$2b$")


def test_duplicate_email_conflicts_and_keeps_one_row(client, db):
    assert register(client).status_code == 200

    r = register(client, name="Other Ann", password="different")
    assert r.status_code == 409
    assert r.json()["Status"] == "Exists"

    rows = db.exec(select(User).where(User.email == "ann@x.com")).all()
    assert len(rows) == 1
    assert rows[0].name == "Ann"


def test_registration_race_is_decided_by_unique_email(app, client, db, monkeypatch):
    assert register(client).status_code == 200
    # simulate a concurrent request that passed the lookup before the first insert
    monkeypatch.setattr(UserRepository, "get_by_email", lambda self, session, email: None)

    r = client.post(
        "/register",
        data={"name": "Other Ann", "email": "ann@x.com", "password": "different"},
        files={"photo": ("me.png", b"\x89PNG fake", "image/png")},
    )
    assert r.status_code == 409
    assert r.json()["Status"] == "Exists"

    storage = app.state.storage
    [uploaded] = storage.uploads
    assert storage.deleted == [PUBLIC_PREFIX + uploaded]

    rows = db.exec(select(User).where(User.email == "ann@x.com")).all()
    assert len(rows) == 1
    assert rows[0].name == "Ann"


def test_failed_insert_discards_uploaded_photo(app, client, db, monkeypatch):
    def boom(self, session, user):
        raise OperationalError("INSERT INTO users", {}, Exception("connection lost"))

    monkeypatch.setattr(UserRepository, "create", boom)

    r = client.post(
        "/register",
        data={"name": "Ann", "email": "ann@x.com", "password": "pw123"},
        files={"photo": ("me.png", b"\x89PNG fake", "image/png")},
    )
    assert r.status_code == 500
    assert r.json() == {"Status": "Error", "message": "Internal database error"}
    assert len(app.state.storage.deleted) == 1
    assert db.exec(select(User)).all() == []


def test_email_is_case_insensitive(client):
    assert register(client, email="Ann@X.com").status_code == 200
    assert register(client, email="ann@x.com").status_code == 409
    assert login(client, "ANN@x.COM", "pw123").status_code == 200


def test_register_missing_fields_is_client_error(client, db):
    r = client.post("/register", data={"name": "Ann", "email": "ann@x.com"})
    assert r.status_code == 400
    assert r.json() == {"Status": "Error", "message": "All fields are required."}

    r = client.post("/register", data={"name": "  ", "email": "ann@x.com", "password": "pw"})
    assert r.status_code == 400

    r = client.post("/register", data={"name": "Ann", "email": "not-an-email", "password": "pw"})
    assert r.status_code == 400

    assert db.exec(select(User)).all() == []


def test_unknown_role_is_rejected(client):
    r = register(client, role="superuser")
    assert r.status_code == 400


def test_admin_self_registration_is_forbidden_by_default(client, db):
    r = register(client, role="admin")
    assert r.status_code == 403
    assert db.exec(select(User)).all() == []


def test_admin_self_registration_when_enabled(app, client):
    app.state.settings.ALLOW_ADMIN_SIGNUP = True
    assert register(client, role="admin").status_code == 200
    assert login(client).json()["user"]["role"] == "admin"


def test_register_with_photo_uploads_to_storage(app, client):
    r = client.post(
        "/register",
        data={"name": "Ann", "email": "ann@x.com", "password": "pw123"},
        files={"photo": ("me.png", b"\x89PNG fake", "image/png")},
    )
    assert r.status_code == 200

    storage = app.state.storage
    assert len(storage.uploads) == 1
    path = next(iter(storage.uploads))
    assert path.startswith("users/") and path.endswith(".png")

    photo = login(client).json()["user"]["photo"]
    assert photo == PUBLIC_PREFIX + path


def test_register_rejects_non_image_photo(app, client, db):
    r = client.post(
        "/register",
        data={"name": "Ann", "email": "ann@x.com", "password": "pw123"},
        files={"photo": ("notes.txt", b"hello", "text/plain")},
    )
    assert r.status_code == 400
    assert app.state.storage.uploads == {}
    assert db.exec(select(User)).all() == []


def test_register_photo_without_storage_is_unavailable(app, client):
    app.state.storage = None
    r = client.post(
        "/register",
        data={"name": "Ann", "email": "ann@x.com", "password": "pw123"},
        files={"photo": ("me.png", b"\x89PNG fake", "image/png")},
    )
    assert r.status_code == 503


# -------- login --------


def test_wrong_password_is_rejected_without_token(client):
    register(client)
    r = login(client, "ann@x.com", "wrong")
    assert r.status_code == 401
    assert "token" not in r.json()
    assert "token" not in r.cookies


def test_unknown_email_and_wrong_password_look_the_same(client):
    register(client)
    wrong_password = login(client, "ann@x.com", "wrong")
    unknown_email = login(client, "nobody@x.com", "pw123")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_login_sets_token_cookie(client):
    register(client)
    r = login(client)
    assert r.cookies.get("token") == r.json()["token"]
    set_cookie = r.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "max-age=86400" in set_cookie


def test_login_missing_fields_is_client_error(client):
    r = client.post("/login", json={"email": "ann@x.com"})
    assert r.status_code == 400
    assert r.json()["Status"] == "Error"


def test_login_token_claims_match_registered_identity(app, client, db):
    register(client)
    token = login(client).json()["token"]

    claims = app.state.tokens.verify(token)
    user = db.exec(select(User).where(User.email == "ann@x.com")).one()
    assert claims == TokenClaims(
        id=user.id, name="Ann", email="ann@x.com", photo=None, role="customer"
    )


# -------- /admin --------


def test_admin_without_header_is_not_authenticated(client):
    r = client.get("/admin")
    assert r.status_code == 403
    assert r.json() == {"Status": "Error", "message": "User not authenticated!"}


def test_admin_with_empty_header_is_not_authenticated(client):
    r = client.get("/admin", headers={"Authorization": ""})
    assert r.status_code == 403
    assert r.json() == {"Status": "Error", "message": "User not authenticated!"}


def test_admin_with_garbage_token_is_invalid(client):
    r = client.get("/admin", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 400
    assert r.json() == {"Status": "Error", "message": "Invalid token"}


def test_admin_with_non_bearer_scheme_is_invalid(client, customer_token):
    r = client.get("/admin", headers={"Authorization": f"Basic {customer_token}"})
    assert r.status_code == 400


def test_admin_with_expired_token_is_invalid(app, client, customer_token):
    claims = app.state.tokens.verify(customer_token)
    two_days_ago = datetime.now(timezone.utc) - timedelta(days=2)
    stale = TokenService("test-secret", clock=lambda: two_days_ago).issue(claims)

    r = client.get("/admin", headers=bearer(stale))
    assert r.status_code == 400


def test_admin_with_tampered_payload_is_invalid(client, customer_token):
    header, _, signature = customer_token.split(".")
    forged_body = "eyJpZCI6IjAwMDAwMDAwLTAwMDAtMDAwMC0wMDAwLTAwMDAwMDAwMDAwMCIsInJvbGUiOiJhZG1pbiJ9"
    r = client.get("/admin", headers=bearer(f"{header}.{forged_body}.{signature}"))
    assert r.status_code == 400


def test_admin_route_role_gate(app, client, customer_token, admin_token):
    app.state.settings.ADMIN_ROUTE_ROLES = ["admin"]

    r = client.get("/admin", headers=bearer(customer_token))
    assert r.status_code == 403

    r = client.get("/admin", headers=bearer(admin_token))
    assert r.status_code == 200
    assert r.json()["role"] == "admin"


def test_token_survives_without_database_lookup(app, client, db, customer_token):
    # Claims are trusted as signed; deleting the account does not revoke it
    user = db.exec(select(User).where(User.email == "ann@x.com")).one()
    db.delete(user)
    db.commit()

    r = client.get("/admin", headers=bearer(customer_token))
    assert r.status_code == 200


# -------- store errors --------


def test_database_errors_are_not_leaked(client, monkeypatch):
    def boom(self, session, email):
        raise OperationalError("SELECT * FROM users", {}, Exception("pool timeout: secret detail"))

    monkeypatch.setattr(UserRepository, "get_by_email", boom)

    r = login(client)
    assert r.status_code == 500
    assert r.json() == {"Status": "Error", "message": "Internal database error"}
    assert "secret detail" not in r.text
