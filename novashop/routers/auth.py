# novashop/routers/auth.py
"""
Registration, login and the protected /admin echo route.

Handlers are plain `def`: FastAPI runs them in its threadpool, so the
bcrypt work in register/login does not stall the event loop.
"""

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from sqlmodel import Session

from novashop.core.auth import admin_route_gate, get_password_hasher, get_token_service
from novashop.core.errors import ValidationError, validate_form
from novashop.core.security import PasswordHasher
from novashop.core.tokens import TOKEN_TTL, TokenService
from novashop.database import get_session
from novashop.repositories.user_repo import UserRepository
from novashop.schemas.auth import (
    AdminResponse,
    LoginRequest,
    LoginResponse,
    RegisterResponse,
    TokenClaims,
    UserRegister,
)
from novashop.services.auth_service import AuthService, claims_for

router = APIRouter(tags=["Auth"])

repo = UserRepository()


def get_auth_service(
    request: Request,
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(
        repo,
        hasher,
        tokens,
        allow_admin_signup=request.app.state.settings.ALLOW_ADMIN_SIGNUP,
    )


@router.post("/register", response_model=RegisterResponse)
def register(
    request: Request,
    name: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None),
    role: str | None = Form(None),
    photo: UploadFile | None = File(None),
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Create a customer account.

    Form fields: name, email, password, optional role and photo.
    Duplicate email => 409 {"Status": "Exists"}.
    """
    if not name or not email or not password:
        raise ValidationError("All fields are required.")

    payload = validate_form(
        UserRegister,
        {"name": name, "email": email, "password": password, "role": role},
    )

    photo_data = None
    if photo is not None and photo.filename:
        photo_data = (photo.content_type, photo.file.read())

    service.register(session, payload, photo_data, request.app.state.storage)
    return RegisterResponse(message="Account successfully created!")


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Exchange email + password for a session token.

    The token is returned in the body and also set as the `token` cookie.
    """
    token, user = service.login(session, payload.email, payload.password)

    response.set_cookie(
        key="token",
        value=token,
        max_age=int(TOKEN_TTL.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=request.app.state.settings.COOKIE_SECURE,
    )
    return LoginResponse(
        message="Login successful!",
        token=token,
        user=claims_for(user),
    )


@router.get("/admin", response_model=AdminResponse)
def admin(claims: TokenClaims = Depends(admin_route_gate)):
    """
    Echo the verified identity back.

    Auth:
      - Requires `Authorization: Bearer <token>`.
      - Role policy comes from the ADMIN_ROUTE_ROLES setting.
    """
    return AdminResponse(
        role=claims.role,
        message="Protected route accessed",
        user=claims,
    )
