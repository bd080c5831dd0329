from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from fastapi.responses import FileResponse
from typing import List
import logging

from catalog_admin.api.deps import get_product_service
from catalog_admin.config import get_settings
from catalog_admin.schemas.product import ProductResponse
from catalog_admin.services.product_service import ProductNotFoundError, ProductService
from catalog_admin.utils.storage import (
    ImageNotFoundError,
    ImageUpload,
    LocalImageStorage,
    get_storage,
)

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/admin/products", tags=["Product Images"])


@router.get(
    "/images",
    response_model=List[str],
    summary="List stored images",
    description="List the URLs of all stored image files."
)
def list_images(storage: LocalImageStorage = Depends(get_storage)):
    """Return `/api/admin/products/images/{filename}` for every stored file."""
    return [storage.public_url(name) for name in storage.list_all()]


@router.get(
    "/images/{filename:path}",
    summary="Serve an image",
    description="Serve a stored image. Only the last path segment of `filename` is used."
)
def get_image(
    filename: str,
    storage: LocalImageStorage = Depends(get_storage)
):
    """Stream an image file with long-lived cache headers."""
    name = filename.rsplit("/", 1)[-1]
    try:
        path = storage.load(name)
    except ImageNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return FileResponse(
        path,
        media_type=storage.probe_media_type(name),
        headers={"Cache-Control": f"max-age={settings.IMAGE_CACHE_MAX_AGE}, public"}
    )


@router.post(
    "/{product_id}/image",
    response_model=ProductResponse,
    summary="Upload or replace a product image",
    description="""
    Replace a product's image. The old file is deleted before the new one is
    stored. An empty upload leaves the product unchanged.
    """
)
def upload_product_image(
    product_id: int,
    image: UploadFile = File(..., description="Image file"),
    service: ProductService = Depends(get_product_service)
):
    """Upload a new image for an existing product."""
    try:
        upload = ImageUpload(content=image.file.read(), filename=image.filename)
        return service.replace_image(product_id, upload)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    except Exception as e:
        logger.exception(f"Failed to replace image of product #{product_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {e}"
        )


@router.delete(
    "/{product_id}/image",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product image",
    description="Delete the product's image file and clear its reference. Fails with 500 if the file could not be removed."
)
def delete_product_image(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """Remove a product's image."""
    try:
        service.remove_image(product_id)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    except Exception as e:
        logger.exception(f"Failed to delete image of product #{product_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {e}"
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
