from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List, Optional
import logging

from catalog_admin.api.deps import ProductSubmission, get_product_service, read_product_submission
from catalog_admin.schemas.product import ProductResponse
from catalog_admin.services.product_service import ProductNotFoundError, ProductService
from catalog_admin.utils.storage import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/products", tags=["Products"])

# The body is decoded by read_product_submission, so it is documented by hand
PRODUCT_MULTIPART_SCHEMA = {
    "type": "object",
    "required": ["product"],
    "properties": {
        "product": {
            "type": "string",
            "description": "Product JSON including its variants",
        },
        "image": {
            "type": "string",
            "format": "binary",
            "description": "Product image file",
        },
    },
}

PRODUCT_JSON_SCHEMA = {
    "type": "object",
    "description": "Product JSON including its variants",
}

PRODUCT_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {"schema": PRODUCT_MULTIPART_SCHEMA},
            "application/json": {"schema": PRODUCT_JSON_SCHEMA},
        },
    }
}


@router.post(
    "",
    response_model=ProductResponse,
    summary="Create a new product",
    description="Create a product from a multipart form with a `product` JSON part and an optional `image` file.",
    openapi_extra=PRODUCT_REQUEST_BODY
)
@router.post("/", response_model=ProductResponse, include_in_schema=False)
def create_product(
    submission: ProductSubmission = Depends(read_product_submission),
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product.

    - **product**: Product JSON including its variants (required)
    - **image**: Product image file (optional)
    """
    try:
        return service.create_product(submission.product, submission.image)
    except StorageError as e:
        logger.error(f"Failed to create product: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {e}"
        )


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="List all products",
    description="Get all products with optional name search and category filter."
)
@router.get("/", response_model=List[ProductResponse], include_in_schema=False)
def list_products(
    search: Optional[str] = Query(None, description="Search by product name"),
    category: Optional[str] = Query(None, description="Filter by category"),
    service: ProductService = Depends(get_product_service)
):
    """Get all products, newest first."""
    return service.list_products(search, category)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID"
)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """Get a product by ID."""
    try:
        return service.get_product(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Replace a product",
    description="""
    Replace a product with the supplied representation.

    Accepts either a JSON body or a multipart form with a `product` JSON part
    and an optional `image` file. The identifier is always taken from the path.
    """,
    openapi_extra=PRODUCT_REQUEST_BODY
)
def update_product(
    product_id: int,
    submission: ProductSubmission = Depends(read_product_submission),
    service: ProductService = Depends(get_product_service)
):
    """
    Update a product.

    This is a full replace, including the variant list. A newly uploaded
    image supersedes the previous one, whose file is then removed.
    """
    try:
        return service.update_product(product_id, submission.product, submission.image)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except StorageError as e:
        logger.error(f"Failed to update product #{product_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {e}"
        )


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
    description="Delete a product and its variants. Removing its image file is best-effort."
)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """Delete a product. Succeeds even when the product is already gone."""
    result = service.delete_product_with_image(product_id)
    logger.info(
        f"Product #{product_id} delete: row_deleted={result.product_deleted}, "
        f"image_cleanup={result.image_cleanup.value}"
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
