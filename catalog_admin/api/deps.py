from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from catalog_admin.database import get_db
from catalog_admin.schemas.product import ProductPayload
from catalog_admin.services.product_service import ProductService
from catalog_admin.utils.storage import ImageUpload, LocalImageStorage, get_storage


@dataclass
class ProductSubmission:
    """A product payload plus the image uploaded alongside it, if any."""
    product: ProductPayload
    image: Optional[ImageUpload] = None


def get_product_service(
    db: Session = Depends(get_db),
    storage: LocalImageStorage = Depends(get_storage)
) -> ProductService:
    return ProductService(db, storage)


async def read_image_upload(upload) -> Optional[ImageUpload]:
    """Read a multipart file part into memory. Missing or empty parts yield None."""
    if upload is None or not isinstance(upload, UploadFile):
        return None
    content = await upload.read()
    if not content:
        return None
    return ImageUpload(content=content, filename=upload.filename)


async def read_product_submission(request: Request) -> ProductSubmission:
    """
    Decode a product from either a JSON body or a multipart form.

    Multipart forms carry the product as JSON in a ``product`` part (sent as a
    plain field or as an ``application/json`` blob) and an optional ``image``
    file part.
    """
    content_type = request.headers.get("content-type", "")

    try:
        if content_type.startswith("multipart/form-data"):
            form = await request.form()
            raw = form.get("product")
            if raw is None:
                raise RequestValidationError([{
                    "type": "missing",
                    "loc": ("body", "product"),
                    "msg": "Field required",
                    "input": None,
                }])
            if isinstance(raw, UploadFile):
                raw = await raw.read()
            product = ProductPayload.model_validate_json(raw)
            image = await read_image_upload(form.get("image"))
            return ProductSubmission(product=product, image=image)

        product = ProductPayload.model_validate_json(await request.body())
        return ProductSubmission(product=product)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))
