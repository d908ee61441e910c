# novashop/routers/cart.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from novashop.core.auth import get_current_claims
from novashop.database import get_session
from novashop.repositories.cart_repo import CartRepository
from novashop.repositories.product_repo import ProductRepository
from novashop.schemas.auth import TokenClaims
from novashop.schemas.cart import (
    AddResult,
    CartCount,
    CartItemCreate,
    RemoveResult,
    SavedProductsResponse,
)
from novashop.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.get("", response_model=SavedProductsResponse)
def get_my_cart(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Get current user's cart (products with quantity).

    Auth:
      - Any authenticated user; identity comes from the token.
    """
    return SavedProductsResponse(Result=service.list_cart(session, claims.id))


@router.get("/count", response_model=CartCount)
def count_my_cart(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    return CartCount(cart=service.count(session, claims.id))


@router.post("", response_model=AddResult, response_model_exclude_none=True)
def add_to_cart(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Add product to the current user's cart.

    Returns {"exists": true} if the product is already in the cart.
    """
    return service.add_to_cart(session, claims.id, payload.product_id, payload.qty)


@router.delete("/{product_id}", response_model=RemoveResult)
def remove_cart_item(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Remove a product from the cart.
    """
    service.remove_item(session, claims.id, product_id)
    return RemoveResult(message="Product removed from cart.")


@router.delete("", response_model=RemoveResult)
def clear_cart(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Clear the entire cart; 404 if it was already empty.
    """
    service.clear_cart(session, claims.id)
    return RemoveResult(message="Cart cleared successfully")
