# novashop/core/security.py
import bcrypt

from novashop.core.errors import ValidationError

# Salt rounds used when no explicit cost is configured
DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the input
BCRYPT_MAX_BYTES = 72


def _encode(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """
    One-way password hashing backed by bcrypt.

    Responsibilities:
      - hash plaintext passwords for the users table (salted, fixed cost)
      - verify login attempts against a stored hash
      - spend the same work on unknown accounts (see `burn`)

    The plaintext is never stored or logged. Calls are CPU bound; route
    handlers that use this are plain `def` so FastAPI runs them in its
    threadpool instead of on the event loop.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, plain_password: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            ValidationError: if the password is empty.
        """
        if not plain_password:
            raise ValidationError("Password is required.")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plain_password), salt).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Re-hash `plain_password` with the stored salt and compare."""
        if not plain_password or not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            # Stored value is not a bcrypt hash
            return False

    def burn(self, plain_password: str) -> None:
        """
        Run a verification against a throwaway hash.

        Used when the email is unknown so the response time does not tell
        an attacker whether the account exists.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                b"novashop-dummy-password", bcrypt.gensalt(rounds=self.rounds)
            )
        bcrypt.checkpw(_encode(plain_password or " "), self._dummy_hash)
