from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List

from catalog_admin.api.deps import get_product_service
from catalog_admin.schemas.variant import VariantResponse
from catalog_admin.services.product_service import ProductService, VariantNotFoundError

router = APIRouter(prefix="/admin/products/variants", tags=["Variants"])


@router.get(
    "",
    response_model=List[VariantResponse],
    summary="List all variants"
)
def list_variants(service: ProductService = Depends(get_product_service)):
    """Get every product variant."""
    return service.list_variants()


@router.get(
    "/{variant_id}",
    response_model=VariantResponse,
    summary="Get variant by ID"
)
def get_variant(
    variant_id: int,
    service: ProductService = Depends(get_product_service)
):
    """Get a single variant."""
    try:
        return service.get_variant(variant_id)
    except VariantNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.put(
    "/{variant_id}/stock",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Adjust variant stock",
    description="Add `delta` (negative to reduce) to the variant's stock. No lower bound is enforced."
)
def update_variant_stock(
    variant_id: int,
    delta: int = Query(..., description="Amount to add to the stock"),
    service: ProductService = Depends(get_product_service)
):
    """Adjust stock by a relative amount."""
    service.update_variant_stock(variant_id, delta)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{variant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a variant"
)
def delete_variant(
    variant_id: int,
    service: ProductService = Depends(get_product_service)
):
    """Delete a variant. Deleting a missing variant is a no-op."""
    service.delete_variant(variant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
