from typing import List, Optional
from datetime import datetime
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import Enum as SAEnum
from enum import Enum
from storefront.models.product import Product
from storefront.core.clock import utcnow

class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class OrderItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)
    product_id: int = Field(foreign_key="product.id")
    quantity: int
    price_at_time: float

    created_at: datetime = Field(default_factory=utcnow)

    order: Optional["Order"] = Relationship(back_populates="items")
    product: Optional[Product] = Relationship()

class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    total_price: float

    status: OrderStatus = Field(
        default=OrderStatus.PENDING,
        sa_column=Column(SAEnum(OrderStatus, values_callable=lambda x: [e.value for e in x]), nullable=False)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # Relationships
    items: List[OrderItem] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "OrderItem.id"}
    )
