# novashop/core/tokens.py
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from novashop.core.errors import InvalidTokenError
from novashop.schemas.auth import TokenClaims

# Session tokens always live for one day from issuance
TOKEN_TTL = timedelta(days=1)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issue and verify signed session tokens (JWT, HS256 by default).

    Tokens are stateless: the server keeps no session table, so a token
    stays valid until `exp` even if the account changes afterwards.

    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = TOKEN_TTL,
        clock: Clock = utc_now,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock

    def issue(self, claims: TokenClaims) -> str:
        """Sign `claims` into a token that expires `ttl` after now."""
        now = self.clock()
        payload: dict[str, Any] = claims.model_dump(mode="json")
        payload["iat"] = int(now.timestamp())
        payload["exp"] = int((now + self.ttl).timestamp())
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Check signature and expiry, then return the embedded claims.

        Expiry is checked against the injected clock rather than jose's
        wall clock, hence `verify_exp` is turned off in the decode call.

        Raises:
            InvalidTokenError: on a bad signature, malformed token,
            missing claims, or a token at/after its expiry.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_aud": False},
            )
        except JWTError:
            raise InvalidTokenError()

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError()
        if self.clock().timestamp() >= exp:
            raise InvalidTokenError()

        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError:
            raise InvalidTokenError()
