# novashop/repositories/cart_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from novashop.models.cart import CartItem, WishlistItem
from novashop.models.product import Product


class CartRepository:
    """
    Data access layer for cart_items.
    """

    def list_for_user(
        self, session: Session, user_id: uuid.UUID
    ) -> list[tuple[Product, CartItem]]:
        """Products in the user's cart together with the cart row."""
        stmt = (
            select(Product, CartItem)
            .select_from(Product)
            .join(CartItem, CartItem.product_id == Product.id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def get_item(
        self, session: Session, user_id: uuid.UUID, product_id: uuid.UUID
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.user_id == user_id, CartItem.product_id == product_id
        )
        return session.exec(stmt).first()

    def count_for_user(self, session: Session, user_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(CartItem).where(CartItem.user_id == user_id)
        return session.exec(stmt).one()

    def create(self, session: Session, item: CartItem) -> CartItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete(self, session: Session, item: CartItem) -> None:
        session.delete(item)
        session.commit()

    def clear_user_cart(self, session: Session, user_id: uuid.UUID) -> int:
        """Delete every cart row of the user and return how many were removed."""
        rows = session.exec(select(CartItem).where(CartItem.user_id == user_id)).all()
        for row in rows:
            session.delete(row)
        session.commit()
        return len(rows)


class WishlistRepository:
    """
    Data access layer for wishlist_items.
    """

    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Product]:
        stmt = (
            select(Product)
            .join(WishlistItem, WishlistItem.product_id == Product.id)
            .where(WishlistItem.user_id == user_id)
            .order_by(WishlistItem.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def get_item(
        self, session: Session, user_id: uuid.UUID, product_id: uuid.UUID
    ) -> WishlistItem | None:
        stmt = select(WishlistItem).where(
            WishlistItem.user_id == user_id, WishlistItem.product_id == product_id
        )
        return session.exec(stmt).first()

    def count_for_user(self, session: Session, user_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(WishlistItem)
            .where(WishlistItem.user_id == user_id)
        )
        return session.exec(stmt).one()

    def create(self, session: Session, item: WishlistItem) -> WishlistItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete(self, session: Session, item: WishlistItem) -> None:
        session.delete(item)
        session.commit()
