# storefront/routers/products.py
import uuid

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    UploadFile,
    status,
)
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.database import get_session
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import (
    ProductCreate,
    ProductCreated,
    ProductList,
    ProductRead,
    ProductUpdate,
    UploadResponse,
)
from storefront.schemas.user import MessageResponse
from storefront.services.product_service import ProductService

router = APIRouter(tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


# -------- Public endpoints --------


@router.get("/get-data", response_model=ProductList)
def list_products(session: Session = Depends(get_session)):
    """
    List all products.
    """
    products = service.list_products(session)
    return ProductList(data=[ProductRead.model_validate(p) for p in products])


@router.get("/products/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_product(session, product_id)


# -------- Admin endpoints --------


@router.post(
    "/admin-management",
    response_model=ProductCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Add a product to inventory (admin only).
    """
    product = service.create_product(session, payload)
    return ProductCreated(
        message="Product add successfully!",
        product=ProductRead.model_validate(product),
    )


@router.patch(
    "/products/{product_id}",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an existing product (admin only). Only sent fields change.
    """
    return service.update_product(session, product_id, payload)


@router.delete(
    "/delete-product/{product_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a product and its hosted image (admin only).
    """
    service.delete_product(session, product_id)
    return MessageResponse(message="Product deleted successfully")


@router.post(
    "/upload",
    response_model=UploadResponse,
    dependencies=[Depends(require_admin)],
    summary="Upload a product image",
)
def upload_image(image: UploadFile | None = File(default=None)):
    """
    Upload a product image to storage and return its public URL.

    - Multipart field name: `image`
    - Accepts JPG, PNG (max 5MB).
    """
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded.",
        )
    if not image.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = image.file.read()
    url = service.upload_image(image.content_type, file_bytes)
    return UploadResponse(success=True, message="Upload succeeded", url=url)
