from typing import Optional
from datetime import datetime
from sqlmodel import Field, Relationship, SQLModel
from sqlalchemy import UniqueConstraint
from storefront.models.product import Product
from storefront.core.clock import utcnow

class CartItem(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_cartitem_user_product"),)

    id: Optional[int] = Field(default=None, primary_key=True)

    # References
    user_id: int = Field(foreign_key="user.id", index=True)
    product_id: int = Field(foreign_key="product.id")

    # Cart Details
    quantity: int = Field(default=1, ge=1)
    # Price snapshot taken when the product was first added
    price_at_time: float

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    product: Optional[Product] = Relationship()
