from sqlalchemy.orm import Session
from sqlalchemy import update
from typing import List, Optional
import logging

from catalog_admin.models.product import Product
from catalog_admin.models.variant import ProductVariant

logger = logging.getLogger(__name__)


class ProductRepository:
    """
    SQLAlchemy persistence for products and their variants.

    Missing rows are reported as None / False; the service layer decides
    how to translate that into an API response.
    """

    def __init__(self, db: Session):
        self.db = db

    # Products

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def list_products(self, search: str = None, category: str = None) -> List[Product]:
        """
        List products, newest first.

        Args:
            search: Optional case-insensitive match on product name
            category: Optional exact category filter
        """
        query = self.db.query(Product)

        if search:
            query = query.filter(Product.name.ilike(f"%{search}%"))
        if category:
            query = query.filter(Product.category == category)

        return query.order_by(Product.id.desc()).all()

    def save_product(self, product: Product) -> Product:
        """Insert or update a product (and its variants) and commit."""
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        logger.info(f"Saved product #{product.id}")
        return product

    def delete_product(self, product_id: int) -> bool:
        """
        Delete a product and its variants.

        Returns:
            True if deleted, False if not found
        """
        product = self.get_product(product_id)

        if not product:
            return False

        self.db.delete(product)
        self.db.commit()
        logger.info(f"Deleted product #{product_id}")
        return True

    # Variants

    def get_variant(self, variant_id: int) -> Optional[ProductVariant]:
        return self.db.get(ProductVariant, variant_id)

    def list_variants(self) -> List[ProductVariant]:
        return self.db.query(ProductVariant).order_by(ProductVariant.id).all()

    def save_variant(self, variant: ProductVariant) -> ProductVariant:
        self.db.add(variant)
        self.db.commit()
        self.db.refresh(variant)
        return variant

    def delete_variant(self, variant_id: int) -> bool:
        variant = self.get_variant(variant_id)

        if not variant:
            return False

        self.db.delete(variant)
        self.db.commit()
        logger.info(f"Deleted variant #{variant_id}")
        return True

    def update_variant_stock(self, variant_id: int, delta: int) -> bool:
        """
        Atomically add ``delta`` to a variant's stock.

        Runs as a single UPDATE so concurrent deltas never overwrite each
        other. No lower bound is applied.

        Returns:
            True if a variant row was updated, False if none matched
        """
        result = self.db.execute(
            update(ProductVariant)
            .where(ProductVariant.id == variant_id)
            .values(stock_quantity=ProductVariant.stock_quantity + delta)
        )
        self.db.commit()
        return result.rowcount > 0
