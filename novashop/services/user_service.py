# novashop/services/user_service.py
from sqlmodel import Session

from novashop.models.user import User
from novashop.repositories.user_repo import UserRepository


class UserService:
    """
    Business logic for User administration.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def list_users(self, session: Session) -> list[User]:
        """List users (admin only)."""
        return self.repo.list_all(session)
