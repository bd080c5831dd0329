from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional

from catalog_admin.schemas.variant import VariantPayload, VariantResponse


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    category: Optional[str] = Field(None, max_length=100, description="Category name")
    price: float = Field(0, ge=0, description="Display price")
    original_price: Optional[float] = Field(None, ge=0, description="Price before discount")
    in_stock: bool = Field(True, description="Whether the product is offered for sale")
    image_url: Optional[str] = Field(None, max_length=512, description="Stored image reference")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductPayload(ProductBase):
    """
    Full product representation accepted by create and update.

    Updates replace the whole record. An ``id`` in the body is ignored in
    favour of the one in the path.
    """
    id: Optional[int] = None
    variants: List[VariantPayload] = Field(default_factory=list)


class ProductResponse(ProductBase):
    """Schema for product response including variants."""
    id: int
    variants: List[VariantResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
