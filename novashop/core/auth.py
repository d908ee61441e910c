# novashop/core/auth.py
from typing import Callable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from novashop.core.errors import ForbiddenError, InvalidTokenError, MissingTokenError
from novashop.core.security import PasswordHasher
from novashop.core.tokens import TokenService
from novashop.schemas.auth import TokenClaims

# HTTP Bearer scheme:
# - auto_error=False => we raise our own errors so a missing header (403)
#   can be told apart from a malformed one (400).
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """Process-wide TokenService built by create_app()."""
    return request.app.state.tokens


def get_password_hasher(request: Request) -> PasswordHasher:
    """Process-wide PasswordHasher built by create_app()."""
    return request.app.state.hasher


def get_current_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Verify the bearer token on a protected request.

    Flow:
      1. No (or empty) Authorization header => 403 "User not authenticated!".
      2. Header not in "Bearer <token>" form => 400 "Invalid token".
      3. Signature / expiry check => 400 "Invalid token" on failure.
      4. Attach the decoded claims to request.state for the handler.

    No database lookup happens here: authorization trusts the signed
    claims, so role changes only take effect once the token expires.
    """
    if credentials is None:
        if not request.headers.get("Authorization", "").strip():
            raise MissingTokenError()
        # HTTPBearer returns None for non-Bearer schemes too
        raise InvalidTokenError()

    claims = tokens.verify(credentials.credentials)
    request.state.user = claims
    request.state.role = claims.role
    return claims


def require_roles(*roles: str) -> Callable[..., TokenClaims]:
    """
    Build a per-route role gate.

    With no roles the gate only requires a valid token. Otherwise the
    token's role claim must be one of `roles`.

    Usage:

        @router.get("/users", dependencies=[Depends(require_roles("admin"))])
    """
    allowed = frozenset(roles)

    def dependency(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if allowed and claims.role not in allowed:
            raise ForbiddenError()
        return claims

    return dependency


require_admin = require_roles("admin")


def admin_route_gate(
    request: Request,
    claims: TokenClaims = Depends(get_current_claims),
) -> TokenClaims:
    """
    Role gate for GET /admin driven by the ADMIN_ROUTE_ROLES setting.

    An empty setting only requires a valid token.
    """
    allowed = request.app.state.settings.ADMIN_ROUTE_ROLES
    if allowed and claims.role not in allowed:
        raise ForbiddenError()
    return claims
