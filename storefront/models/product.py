from typing import List, Optional
from datetime import datetime
from sqlmodel import Field, Relationship, SQLModel
from sqlalchemy import CheckConstraint
from storefront.core.clock import utcnow

class Category(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    products: List["Product"] = Relationship(back_populates="category")

class Product(SQLModel, table=True):
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),)

    id: Optional[int] = Field(default=None, primary_key=True)

    # Basic Info
    name: str = Field(index=True)
    description: Optional[str] = None
    image_url: Optional[str] = None

    # Pricing
    price: float

    # Inventory
    stock: int = Field(default=0)

    category_id: int = Field(foreign_key="category.id", index=True)

    # Metadata
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    category: Optional[Category] = Relationship(back_populates="products")
