# novashop/services/order_service.py
import logging
import secrets
import string
import uuid

from sqlmodel import Session

from novashop.core.errors import NotFoundError, ValidationError
from novashop.models.order import Order, OrderItem, Payment
from novashop.repositories.order_repo import OrderRepository, PaymentRepository
from novashop.repositories.product_repo import ProductRepository
from novashop.schemas.order import (
    CheckoutRequest,
    OrderLineAdminRead,
    OrderLineCreate,
    PendingLineRead,
)

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "nova-"
REFERENCE_ALPHABET = string.ascii_lowercase + string.digits
REFERENCE_LENGTH = 7


def new_reference() -> str:
    """Short public id such as "nova-k3x9a2b" for orders and payments."""
    suffix = "".join(secrets.choice(REFERENCE_ALPHABET) for _ in range(REFERENCE_LENGTH))
    return REFERENCE_PREFIX + suffix


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create an order from submitted lines (one shared reference)
      - List / total / remove the caller's pending lines
      - Mark pending orders as paid
      - Admin listing of every line
    """

    def __init__(self, order_repo: OrderRepository, product_repo: ProductRepository):
        self.order_repo = order_repo
        self.product_repo = product_repo

    # -------- User-facing operations --------

    def place_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        lines: list[OrderLineCreate],
    ) -> Order:
        """
        Record the submitted lines as one pending order.

        Amounts are taken as submitted; every product must exist.
        """
        if not lines:
            raise ValidationError("Order must contain at least one item.")

        missing = [
            str(line.product_id)
            for line in lines
            if self.product_repo.get_by_id(session, line.product_id) is None
        ]
        if missing:
            raise NotFoundError(f"Product not found: {', '.join(missing)}")

        order = Order(
            reference=new_reference(),
            user_id=user_id,
            status="pending",
            total_amount=sum(line.total_price for line in lines),
        )
        items = [
            OrderItem(
                product_id=line.product_id,
                quantity=line.qty,
                amount=line.total_price,
            )
            for line in lines
        ]
        order = self.order_repo.create_order(session, order, items)
        logger.info("Order %s placed with %d line(s)", order.reference, len(items))
        return order

    def list_pending_lines(self, session: Session, user_id: uuid.UUID) -> list[PendingLineRead]:
        rows = self.order_repo.list_pending_lines(session, user_id)
        return [
            PendingLineRead(
                id=product.id,
                title=product.title,
                image_url=product.image_url,
                qty=item.quantity,
                amount=item.amount,
                order_reference=order.reference,
            )
            for item, order, product in rows
        ]

    def pending_total(self, session: Session, user_id: uuid.UUID) -> float:
        return self.order_repo.pending_total(session, user_id)

    def remove_pending_product(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> None:
        """
        Drop every pending line for `product_id`.

        Order totals are recomputed; an order left without lines is deleted.
        """
        items = self.order_repo.list_pending_items_for_product(session, user_id, product_id)
        if not items:
            raise NotFoundError("Failed to delete order.")

        touched = {item.order_id for item in items}
        for item in items:
            self.order_repo.delete_item(session, item)

        for order_id in touched:
            order = session.get(Order, order_id)
            remaining = self.order_repo.list_items_for_order(session, order_id)
            if remaining:
                order.total_amount = sum(it.amount for it in remaining)
                self.order_repo.update_order(session, order)
            else:
                self.order_repo.delete_order(session, order)

        self.order_repo.commit(session)

    def mark_paid(self, session: Session, user_id: uuid.UUID) -> int:
        """Set every pending order of the user to 'paid'; returns how many."""
        orders = self.order_repo.list_pending_for_user(session, user_id)
        for order in orders:
            order.status = "paid"
            self.order_repo.update_order(session, order)
        self.order_repo.commit(session)
        return len(orders)

    # -------- Admin operations --------

    def list_all_lines(self, session: Session) -> list[OrderLineAdminRead]:
        rows = self.order_repo.list_all_lines(session)
        return [
            OrderLineAdminRead(
                order_id=order.reference,
                qty=item.quantity,
                amount=item.amount,
                status=order.status,
                date=order.created_at,
                title=product.title if product else None,
                image_url=product.image_url if product else None,
                price=product.price if product else None,
                customer_name=user.name if user else None,
                customer_photo=user.photo_url if user else None,
            )
            for item, order, product, user in rows
        ]


class CheckoutService:
    """
    Records a claimed payment. No payment processor is contacted and only
    the last four card digits are stored.
    """

    def __init__(self, payment_repo: PaymentRepository):
        self.payment_repo = payment_repo

    def checkout(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: CheckoutRequest,
    ) -> Payment:
        payment = Payment(
            transaction_id=new_reference(),
            user_id=user_id,
            payment_method=payload.payment_method,
            card_last4=payload.card_number[-4:],
            total_amount=payload.total_amount,
        )
        payment = self.payment_repo.create(session, payment)
        logger.info(
            "Payment %s recorded (%s, %.2f)",
            payment.transaction_id,
            payment.payment_method,
            payment.total_amount,
        )
        return payment
