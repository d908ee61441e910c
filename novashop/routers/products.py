# novashop/routers/products.py
import uuid

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Request,
    UploadFile,
    status,
)
from sqlmodel import Session

from novashop.core.auth import require_admin
from novashop.core.errors import validate_form
from novashop.database import get_session
from novashop.repositories.product_repo import ProductRepository
from novashop.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductDetailResponse,
    ProductListResponse,
    ProductRead,
)
from novashop.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


# -------- Public endpoints --------


@router.get("", response_model=ProductListResponse)
def list_products(session: Session = Depends(get_session)):
    """
    List the whole catalog, newest first.

    - Public endpoint.
    """
    products = service.list_products(session)
    return ProductListResponse(Result=[ProductRead.model_validate(p) for p in products])


@router.get("/{product_id}", response_model=ProductDetailResponse)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.

    - Public endpoint.
    """
    product = service.get_product(session, product_id)
    return ProductDetailResponse(Result=ProductRead.model_validate(product))


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    request: Request,
    title: str | None = Form(None),
    category: str | None = Form(None),
    price: str | None = Form(None),
    qty: str | None = Form(None),
    warranty: str | None = Form(None),
    description: str | None = Form(None),
    image: UploadFile | None = File(None),
    session: Session = Depends(get_session),
):
    """
    Create a new product (admin only).

    - Multipart form; `image` is optional (JPEG, PNG, WEBP, max 5MB).
    """
    data = {
        "title": title,
        "category": category,
        "price": price,
        "warranty": warranty,
        "description": description,
    }
    if qty:
        data["qty"] = qty
    payload = validate_form(ProductCreate, data)

    image_data = None
    if image is not None and image.filename:
        image_data = (image.content_type, image.file.read())

    service.create_product(session, payload, image_data, request.app.state.storage)
    return MessageResponse(message="Product successfully added!")
