# novashop/services/cart_service.py
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from novashop.core.errors import NotFoundError
from novashop.models.cart import CartItem, WishlistItem
from novashop.models.product import Product
from novashop.repositories.cart_repo import CartRepository, WishlistRepository
from novashop.repositories.product_repo import ProductRepository
from novashop.schemas.cart import AddResult, SavedProductRead


def _saved_product(product: Product, qty: int | None = None) -> SavedProductRead:
    return SavedProductRead(
        id=product.id,
        title=product.title,
        category=product.category,
        price=product.price,
        image_url=product.image_url,
        created_at=product.created_at,
        qty=qty,
    )


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence
      - keep a single row per (user, product)
      - report "already in cart" instead of failing
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    def _get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def list_cart(self, session: Session, user_id: uuid.UUID) -> list[SavedProductRead]:
        rows = self.cart_repo.list_for_user(session, user_id)
        return [_saved_product(product, item.quantity) for product, item in rows]

    def add_to_cart(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int = 1,
    ) -> AddResult:
        """
        Add a product to the user's cart.

        Returns {"exists": true} when the product is already there; the
        stored quantity is left as it is.
        """
        self._get_product(session, product_id)

        if self.cart_repo.get_item(session, user_id, product_id):
            return AddResult(exists=True)

        try:
            self.cart_repo.create(
                session,
                CartItem(user_id=user_id, product_id=product_id, quantity=quantity),
            )
        except IntegrityError:
            # a concurrent add for the same product won
            session.rollback()
            return AddResult(exists=True)
        return AddResult(success=True)

    def remove_item(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> None:
        item = self.cart_repo.get_item(session, user_id, product_id)
        if not item:
            raise NotFoundError("Item not found in cart")
        self.cart_repo.delete(session, item)

    def clear_cart(self, session: Session, user_id: uuid.UUID) -> None:
        """
        Clear all items from the cart.

        Raises:
            NotFoundError: the cart was already empty.
        """
        removed = self.cart_repo.clear_user_cart(session, user_id)
        if removed == 0:
            raise NotFoundError("No items found in the cart for this user")

    def count(self, session: Session, user_id: uuid.UUID) -> int:
        return self.cart_repo.count_for_user(session, user_id)


class WishlistService:
    """
    Business logic for the wishlist; same rules as the cart without
    quantities.
    """

    def __init__(self, wishlist_repo: WishlistRepository, product_repo: ProductRepository):
        self.wishlist_repo = wishlist_repo
        self.product_repo = product_repo

    def list_wishlist(self, session: Session, user_id: uuid.UUID) -> list[SavedProductRead]:
        return [_saved_product(p) for p in self.wishlist_repo.list_for_user(session, user_id)]

    def add(self, session: Session, user_id: uuid.UUID, product_id: uuid.UUID) -> AddResult:
        if not self.product_repo.get_by_id(session, product_id):
            raise NotFoundError("Product not found")

        if self.wishlist_repo.get_item(session, user_id, product_id):
            return AddResult(exists=True)

        try:
            self.wishlist_repo.create(
                session, WishlistItem(user_id=user_id, product_id=product_id)
            )
        except IntegrityError:
            session.rollback()
            return AddResult(exists=True)
        return AddResult(success=True)

    def remove(self, session: Session, user_id: uuid.UUID, product_id: uuid.UUID) -> None:
        item = self.wishlist_repo.get_item(session, user_id, product_id)
        if not item:
            raise NotFoundError("Wishlist not found.")
        self.wishlist_repo.delete(session, item)

    def count(self, session: Session, user_id: uuid.UUID) -> int:
        return self.wishlist_repo.count_for_user(session, user_id)
