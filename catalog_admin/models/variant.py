from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from catalog_admin.database import Base


class ProductVariant(Base):
    """
    Variant model: a specific purchasable configuration of a product
    (e.g. 100 ML bottle) with its own price and stock count.

    Stock is deliberately left unconstrained at the database level; the
    stock-delta operation may drive it below zero.
    """
    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    price = Column(Float, nullable=False, default=0)
    original_price = Column(Float, nullable=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    weight_value = Column(String(50), nullable=True)
    weight_unit = Column(String(20), nullable=False, default="ML")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Back-reference to the owning product
    product = relationship("Product", back_populates="variants")

    def __repr__(self):
        return f"<ProductVariant(id={self.id}, product_id={self.product_id}, stock={self.stock_quantity})>"
