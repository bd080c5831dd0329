from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class VariantBase(BaseModel):
    """Base schema for ProductVariant with common attributes."""
    price: float = Field(0, ge=0, description="Variant price")
    original_price: Optional[float] = Field(None, ge=0, description="Price before discount")
    stock_quantity: int = Field(0, ge=0, description="Available stock")
    weight_value: Optional[str] = Field(None, max_length=50, description="Pack size, e.g. '100'")
    weight_unit: str = Field("ML", max_length=20, description="Pack size unit")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("weight_value", mode="before")
    @classmethod
    def _weight_as_text(cls, value):
        # The admin form sends either "100" or 100
        if value is None or value == "":
            return None
        return str(value)


class VariantPayload(VariantBase):
    """Variant as submitted inside a product payload. Known ids are updated in place."""
    id: Optional[int] = None


class VariantResponse(VariantBase):
    """Schema for variant response including all fields."""
    id: int
    product_id: int
    # Stored stock may be negative after delta updates
    stock_quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
