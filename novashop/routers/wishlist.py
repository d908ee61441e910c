# novashop/routers/wishlist.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from novashop.core.auth import get_current_claims
from novashop.database import get_session
from novashop.repositories.cart_repo import WishlistRepository
from novashop.repositories.product_repo import ProductRepository
from novashop.schemas.auth import TokenClaims
from novashop.schemas.cart import (
    AddResult,
    RemoveResult,
    SavedProductsResponse,
    WishlistCount,
    WishlistItemCreate,
)
from novashop.services.cart_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])

service = WishlistService(WishlistRepository(), ProductRepository())


@router.get("", response_model=SavedProductsResponse)
def get_my_wishlist(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Products saved by the current user.
    """
    return SavedProductsResponse(Result=service.list_wishlist(session, claims.id))


@router.get("/count", response_model=WishlistCount)
def count_my_wishlist(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    return WishlistCount(likes=service.count(session, claims.id))


@router.post("", response_model=AddResult, response_model_exclude_none=True)
def add_to_wishlist(
    payload: WishlistItemCreate,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Save a product.

    Returns {"exists": true} if it was already saved.
    """
    return service.add(session, claims.id, payload.product_id)


@router.delete("/{product_id}", response_model=RemoveResult)
def remove_from_wishlist(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    service.remove(session, claims.id, product_id)
    return RemoveResult(message="Product successfully removed.")
