# novashop/services/product_service.py
import logging
import uuid

from sqlmodel import Session

from novashop.core.errors import NotFoundError
from novashop.core.storage_utils import ImageStorage, store_image
from novashop.models.product import Product
from novashop.repositories.product_repo import ProductRepository
from novashop.schemas.product import ProductCreate

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for the product catalog.

    Responsibilities:
      - catalog listing and lookup
      - image upload orchestration with Storage
      - admin-only creation (enforced at router via require_admin)
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(self, session: Session) -> list[Product]:
        return self.repo.list_all(session)

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def create_product(
        self,
        session: Session,
        payload: ProductCreate,
        image: tuple[str | None, bytes] | None = None,
        storage: ImageStorage | None = None,
    ) -> Product:
        """
        Create a new product, uploading its image first if one was sent.

        Args:
            image: optional (content_type, file_bytes)
        """
        image_url = None
        if image is not None:
            content_type, file_bytes = image
            image_url = store_image(storage, "products", content_type, file_bytes)

        product = Product(
            title=payload.title,
            category=payload.category,
            price=payload.price,
            qty=payload.qty,
            warranty=payload.warranty,
            description=payload.description,
            image_url=image_url,
        )
        product = self.repo.create(session, product)
        logger.info("Created product %s (%s)", product.id, product.title)
        return product
