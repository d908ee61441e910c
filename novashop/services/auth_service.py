# novashop/services/auth_service.py
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from novashop.core.errors import AuthenticationError, ConflictError, ForbiddenError
from novashop.core.security import PasswordHasher
from novashop.core.storage_utils import ImageStorage, store_image
from novashop.core.tokens import TokenService
from novashop.models.user import User
from novashop.repositories.user_repo import UserRepository
from novashop.schemas.auth import TokenClaims, UserRegister

logger = logging.getLogger(__name__)


def claims_for(user: User) -> TokenClaims:
    """Public identity of `user` as embedded in its session token."""
    return TokenClaims(
        id=user.id,
        name=user.name,
        email=user.email,
        photo=user.photo_url,
        role=user.role,
    )


class AuthService:
    """
    Registration and login.

    Responsibilities:
      - hash passwords before they reach the credential store
      - turn a duplicate email into ConflictError
      - verify credentials and issue session tokens

    Unknown email and wrong password raise the same AuthenticationError
    so the response does not reveal which accounts exist.
    """

    def __init__(
        self,
        repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        allow_admin_signup: bool = False,
    ):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens
        self.allow_admin_signup = allow_admin_signup

    def register(
        self,
        session: Session,
        payload: UserRegister,
        photo: tuple[str | None, bytes] | None = None,
        storage: ImageStorage | None = None,
    ) -> User:
        """
        Create an account.

        Steps:
          1. Reject self-service admin accounts unless allowed.
          2. Fast-path lookup for an existing email.
          3. Upload the photo, if any (content_type, file_bytes).
          4. Hash the password.
          5. Insert; the unique constraint on email decides races.

        If the insert fails for any reason, the uploaded photo is removed again
        (best-effort).

        Raises:
            ForbiddenError: role "admin" while admin signup is disabled.
            ConflictError: email already registered.
        """
        if payload.role == "admin" and not self.allow_admin_signup:
            raise ForbiddenError("Admin accounts cannot be self-registered.")

        if self.repo.get_by_email(session, payload.email) is not None:
            raise ConflictError()

        photo_url = None
        if photo is not None:
            content_type, file_bytes = photo
            photo_url = store_image(storage, "users", content_type, file_bytes)

        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=self.hasher.hash(payload.password),
            role=payload.role,
            photo_url=photo_url,
        )

        try:
            user = self.repo.create(session, user)
        except SQLAlchemyError as exc:
            session.rollback()
            self._discard_photo(storage, photo_url)
            if not isinstance(exc, IntegrityError):
                raise
            logger.info("Registration race lost for %s", payload.email)
            raise ConflictError()

        logger.info("Registered user %s (%s)", user.email, user.role)
        return user

    def login(self, session: Session, email: str, password: str) -> tuple[str, User]:
        """
        Check credentials and issue a session token.

        Returns:
            (token, user)

        Raises:
            AuthenticationError: unknown email or wrong password.
        """
        user = self.repo.get_by_email(session, email)
        if user is None:
            self.hasher.burn(password)
            logger.warning("Login failed for %s: unknown email", email)
            raise AuthenticationError()

        if not self.hasher.verify(password, user.password_hash):
            logger.warning("Login failed for %s: wrong password", email)
            raise AuthenticationError()

        token = self.tokens.issue(claims_for(user))
        logger.info("Login succeeded for %s", email)
        return token, user

    @staticmethod
    def _discard_photo(storage: ImageStorage | None, photo_url: str | None) -> None:
        if storage is None or not photo_url:
            return
        try:
            storage.delete_public_url(photo_url)
        except Exception:
            logger.warning("Could not delete orphaned photo %s", photo_url, exc_info=True)
