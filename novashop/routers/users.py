# novashop/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from novashop.core.auth import require_admin
from novashop.database import get_session
from novashop.repositories.user_repo import UserRepository
from novashop.schemas.user import UserListResponse, UserRead
from novashop.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(repo)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=UserListResponse,
    dependencies=[Depends(require_admin)],
)
def list_users(session: Session = Depends(get_session)):
    """
    List all users, newest first (admin only).

    Password hashes are never part of the response.
    """
    users = service.list_users(session)
    return UserListResponse(Result=[UserRead.model_validate(u) for u in users])
