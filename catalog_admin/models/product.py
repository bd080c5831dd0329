from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from catalog_admin.database import Base


class Product(Base):
    """
    Product model representing a catalog entry managed from the admin panel.

    Attributes:
        id: Unique identifier for the product
        name: Product name
        description: Free-form description
        category: Catalog category name
        price: Display price (usually the first variant's price)
        original_price: Price before discount
        in_stock: Whether the product is offered for sale
        image_url: Reference to the stored image (URL, relative path or filename)
        variants: Purchasable configurations of this product
        created_at: Timestamp when product was created
        updated_at: Timestamp when product was last updated
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    price = Column(Float, nullable=False, default=0)
    original_price = Column(Float, nullable=True)
    in_stock = Column(Boolean, nullable=False, default=True)
    image_url = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    variants = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ProductVariant.id",
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', image_url='{self.image_url}')>"
