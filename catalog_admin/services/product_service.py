from sqlalchemy.orm import Session
from dataclasses import dataclass
from typing import Optional, List
import enum
import logging

from catalog_admin.models.product import Product
from catalog_admin.models.variant import ProductVariant
from catalog_admin.repositories.product_repository import ProductRepository
from catalog_admin.schemas.product import ProductPayload
from catalog_admin.utils.storage import ImageUpload, LocalImageStorage, StorageError

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    """Exception raised when the requested product doesn't exist."""
    pass


class VariantNotFoundError(Exception):
    """Exception raised when the requested variant doesn't exist."""
    pass


class ImageDeletionError(StorageError):
    """Exception raised when a product's image file could not be removed."""
    pass


class ImageCleanup(str, enum.Enum):
    """Outcome of the secondary image cleanup performed on product deletion."""
    NO_IMAGE = "no_image"
    REMOVED = "removed"
    ALREADY_ABSENT = "already_absent"
    FAILED_IGNORED = "failed_ignored"


@dataclass(frozen=True)
class ProductDeletion:
    """
    Result of deleting a product.

    ``product_deleted`` reports the primary row delete (False only when there
    was no such product). ``image_cleanup`` reports the best-effort file
    removal, whose failure never blocks the row delete.
    """
    product_id: int
    product_deleted: bool
    image_cleanup: ImageCleanup


class ProductService:
    """
    Service class for catalog administration.

    This service handles:
    - Creating and fully replacing products with their variants
    - Keeping stored image files in step with product image references
    - Variant lookups, stock deltas and deletion
    """

    def __init__(self, db: Session, storage: LocalImageStorage):
        self.repository = ProductRepository(db)
        self.storage = storage

    # Products

    def list_products(self, search: str = None, category: str = None) -> List[Product]:
        return self.repository.list_products(search, category)

    def get_product(self, product_id: int) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        product = self.repository.get_product(product_id)
        if not product:
            raise ProductNotFoundError(f"Product with ID {product_id} not found")
        return product

    def save(self, product: Product) -> Product:
        return self.repository.save_product(product)

    def create_product(self, payload: ProductPayload, image: Optional[ImageUpload] = None) -> Product:
        """
        Create a new product, storing its image first when one is uploaded.

        Args:
            payload: Product data including variants
            image: Optional uploaded image

        Returns:
            Created product instance
        """
        product = Product()
        self._apply_payload(product, payload)

        if image is not None and not image.is_empty:
            filename = self.storage.store(image)
            product.image_url = self.storage.public_url(filename)

        return self.save(product)

    def update_product(
        self,
        product_id: int,
        payload: ProductPayload,
        image: Optional[ImageUpload] = None
    ) -> Product:
        """
        Replace an existing product with the supplied representation.

        The path identifier wins over any ``id`` in the payload. When a new
        image is uploaded it is written before the record is saved, and the
        previously referenced file is removed afterwards on a best-effort basis.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        product = self.get_product(product_id)
        previous_image = product.image_url

        self._apply_payload(product, payload)

        new_upload = image is not None and not image.is_empty
        if new_upload:
            filename = self.storage.store(image)
            product.image_url = self.storage.public_url(filename)

        product = self.save(product)

        if new_upload and previous_image and previous_image != product.image_url:
            self._cleanup_image(previous_image)

        return product

    def delete_product_with_image(self, product_id: int) -> ProductDeletion:
        """
        Delete a product, first attempting to remove its image file.

        Step 1 (secondary, best-effort): remove the stored image. Any failure
        is logged and reported as ``ImageCleanup.FAILED_IGNORED``.
        Step 2 (primary): delete the database row, regardless of step 1.

        Deleting a product that doesn't exist is not an error.
        """
        product = self.repository.get_product(product_id)
        cleanup = ImageCleanup.NO_IMAGE
        if product is not None and product.image_url:
            cleanup = self._cleanup_image(product.image_url)

        deleted = self.repository.delete_product(product_id)

        return ProductDeletion(
            product_id=product_id,
            product_deleted=deleted,
            image_cleanup=cleanup
        )

    def replace_image(self, product_id: int, image: ImageUpload) -> Product:
        """
        Replace a product's image.

        Sequence: delete old file, store new file, save new reference. This
        is not transactional; if the final save fails the old file is
        already gone.

        Raises:
            ProductNotFoundError: If product doesn't exist
            StorageError: If the old file can't be deleted or the new one written
        """
        product = self.get_product(product_id)

        if image is None or image.is_empty:
            return product

        old_filename = self.storage.extract_filename_from_reference(product.image_url)
        if old_filename:
            self.storage.delete(old_filename)

        filename = self.storage.store(image)
        product.image_url = self.storage.public_url(filename)
        return self.save(product)

    def remove_image(self, product_id: int) -> Product:
        """
        Delete a product's image file and clear its reference.

        Raises:
            ProductNotFoundError: If product doesn't exist
            ImageDeletionError: If the referenced file was not removed
        """
        product = self.get_product(product_id)

        filename = self.storage.extract_filename_from_reference(product.image_url)
        if not filename:
            return product

        if not self.storage.delete(filename):
            raise ImageDeletionError(f"Failed to delete image file: {filename}")

        product.image_url = None
        return self.save(product)

    # Variants

    def list_variants(self) -> List[ProductVariant]:
        return self.repository.list_variants()

    def get_variant(self, variant_id: int) -> ProductVariant:
        """
        Raises:
            VariantNotFoundError: If variant doesn't exist
        """
        variant = self.repository.get_variant(variant_id)
        if not variant:
            raise VariantNotFoundError(f"Variant with ID {variant_id} not found")
        return variant

    def update_variant_stock(self, variant_id: int, delta: int) -> bool:
        """
        Add ``delta`` (possibly negative) to a variant's stock.

        Returns False when no variant matched; stock is not floored at zero.
        """
        updated = self.repository.update_variant_stock(variant_id, delta)
        if updated:
            logger.info(f"Variant #{variant_id} stock changed by {delta}")
        else:
            logger.warning(f"Stock update for unknown variant #{variant_id} ignored")
        return updated

    def delete_variant(self, variant_id: int) -> bool:
        return self.repository.delete_variant(variant_id)

    def _cleanup_image(self, reference: str) -> ImageCleanup:
        filename = self.storage.extract_filename_from_reference(reference)
        if not filename:
            return ImageCleanup.NO_IMAGE

        try:
            removed = self.storage.delete(filename)
        except Exception as e:
            logger.warning(f"Ignoring failure to delete image {filename}: {e}")
            return ImageCleanup.FAILED_IGNORED

        return ImageCleanup.REMOVED if removed else ImageCleanup.ALREADY_ABSENT

    @staticmethod
    def _apply_payload(product: Product, payload: ProductPayload) -> None:
        """Copy every field of the payload onto the product, replacing its variants."""
        product.name = payload.name
        product.description = payload.description
        product.category = payload.category
        product.price = payload.price
        product.original_price = payload.original_price
        product.in_stock = payload.in_stock
        product.image_url = payload.image_url

        existing = {variant.id: variant for variant in product.variants}
        variants = []
        for item in payload.variants:
            variant = existing.pop(item.id, None) if item.id is not None else None
            if variant is None:
                variant = ProductVariant()
            variant.price = item.price
            variant.original_price = item.original_price
            variant.stock_quantity = item.stock_quantity
            variant.weight_value = item.weight_value
            variant.weight_unit = item.weight_unit
            variants.append(variant)

        # Variants left out of the payload are removed (delete-orphan)
        product.variants = variants
