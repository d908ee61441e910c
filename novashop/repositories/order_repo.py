# novashop/repositories/order_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from novashop.models.order import Order, OrderItem, Payment
from novashop.models.product import Product
from novashop.models.user import User


class OrderRepository:
    """
    Data access layer for orders and order_items.

    NOTE:
      - Only create_order / commit commit; the multi-step status and
        line updates are committed by the service.
    """

    # ---- Orders ----

    def create_order(
        self,
        session: Session,
        order: Order,
        items: list[OrderItem],
    ) -> Order:
        """Insert an order and its lines in one commit."""
        session.add(order)
        session.flush()  # Assign PK
        for item in items:
            item.order_id = order.id
        session.add_all(items)
        session.commit()
        session.refresh(order)
        return order

    def list_pending_for_user(self, session: Session, user_id: uuid.UUID) -> list[Order]:
        stmt = select(Order).where(Order.user_id == user_id, Order.status == "pending")
        return list(session.exec(stmt).all())

    def update_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        return order

    def delete_order(self, session: Session, order: Order) -> None:
        session.delete(order)
        session.flush()

    def commit(self, session: Session) -> None:
        session.commit()

    # ---- Order lines ----

    def list_pending_lines(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> list[tuple[OrderItem, Order, Product]]:
        """The user's pending lines joined with order and product."""
        stmt = (
            select(OrderItem, Order, Product)
            .select_from(OrderItem)
            .join(Order, Order.id == OrderItem.order_id)
            .join(Product, Product.id == OrderItem.product_id)
            .where(Order.user_id == user_id, Order.status == "pending")
            .order_by(Order.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def pending_total(self, session: Session, user_id: uuid.UUID) -> float:
        stmt = (
            select(func.coalesce(func.sum(OrderItem.amount), 0))
            .select_from(OrderItem)
            .join(Order, Order.id == OrderItem.order_id)
            .where(Order.user_id == user_id, Order.status == "pending")
        )
        return float(session.exec(stmt).one())

    def list_pending_items_for_product(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> list[OrderItem]:
        stmt = (
            select(OrderItem)
            .join(Order, Order.id == OrderItem.order_id)
            .where(
                Order.user_id == user_id,
                Order.status == "pending",
                OrderItem.product_id == product_id,
            )
        )
        return list(session.exec(stmt).all())

    def list_items_for_order(self, session: Session, order_id: uuid.UUID) -> list[OrderItem]:
        stmt = select(OrderItem).where(OrderItem.order_id == order_id)
        return list(session.exec(stmt).all())

    def delete_item(self, session: Session, item: OrderItem) -> None:
        session.delete(item)
        session.flush()

    def list_all_lines(
        self,
        session: Session,
    ) -> list[tuple[OrderItem, Order, Product | None, User | None]]:
        """Every order line with product and customer, newest first (admin)."""
        stmt = (
            select(OrderItem, Order, Product, User)
            .select_from(OrderItem)
            .join(Order, Order.id == OrderItem.order_id)
            .outerjoin(Product, Product.id == OrderItem.product_id)
            .outerjoin(User, User.id == Order.user_id)
            .order_by(Order.created_at.desc())
        )
        return list(session.exec(stmt).all())


class PaymentRepository:
    """
    Data access layer for payments.
    """

    def create(self, session: Session, payment: Payment) -> Payment:
        session.add(payment)
        session.commit()
        session.refresh(payment)
        return payment
