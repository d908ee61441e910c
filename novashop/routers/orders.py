# novashop/routers/orders.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from novashop.core.auth import get_current_claims, require_admin
from novashop.database import get_session
from novashop.repositories.order_repo import OrderRepository, PaymentRepository
from novashop.repositories.product_repo import ProductRepository
from novashop.schemas.auth import TokenClaims
from novashop.schemas.cart import RemoveResult
from novashop.schemas.order import (
    AllOrdersResponse,
    CheckoutRequest,
    CheckoutResponse,
    OrderLineCreate,
    OrderPlaced,
    PendingLinesResponse,
    PendingTotal,
    StatusUpdated,
)
from novashop.services.order_service import CheckoutService, OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])
checkout_router = APIRouter(tags=["Checkout"])

order_repo = OrderRepository()
product_repo = ProductRepository()
service = OrderService(order_repo, product_repo)
checkout_service = CheckoutService(PaymentRepository())


# -------- User-facing endpoints --------


@router.post("", response_model=OrderPlaced)
def place_order(
    lines: list[OrderLineCreate],
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Place an order from a list of lines: [{product_id, qty, total_price}].

    All lines share one order reference ("nova-xxxxxxx").
    """
    order = service.place_order(session, claims.id, lines)
    return OrderPlaced(orderId=order.reference)


@router.get("/me", response_model=PendingLinesResponse)
def list_my_pending_lines(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Pending order lines of the authenticated user, with product info.
    """
    return PendingLinesResponse(Result=service.list_pending_lines(session, claims.id))


@router.get("/me/total", response_model=PendingTotal)
def my_pending_total(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    return PendingTotal(total_amount=service.pending_total(session, claims.id))


@router.delete("/me/{product_id}", response_model=RemoveResult)
def remove_pending_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Remove a product from the user's pending orders.
    """
    service.remove_pending_product(session, claims.id, product_id)
    return RemoveResult(message="Order successfully deleted.")


@router.put("/me/status", response_model=StatusUpdated)
def mark_my_orders_paid(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Mark every pending order of the user as paid.
    """
    return StatusUpdated(updated=service.mark_paid(session, claims.id))


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=AllOrdersResponse,
    dependencies=[Depends(require_admin)],
)
def list_all_orders(session: Session = Depends(get_session)):
    """
    List every order line with product and customer (admin only).
    """
    return AllOrdersResponse(Result=service.list_all_lines(session))


# -------- Checkout --------


@checkout_router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    payload: CheckoutRequest,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    Record a claimed payment for the current user.

    No payment processor is contacted.
    """
    payment = checkout_service.checkout(session, claims.id, payload)
    return CheckoutResponse(transactionId=payment.transaction_id)
