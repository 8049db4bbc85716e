from typing import Generic, List, Optional, TypeVar
from datetime import datetime
from pydantic import BaseModel, ConfigDict, computed_field
from storefront.models.order import OrderStatus
from storefront.models.user import UserRole

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    status: str = "success"
    data: T


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Users

class UserRead(ORMModel):
    id: int
    name: str
    email: str
    role: UserRole


class AuthData(BaseModel):
    user: UserRead


class AuthResponse(BaseModel):
    status: str = "success"
    token: str
    data: AuthData


# Catalog

class CategorySummary(ORMModel):
    id: int
    name: str


class CategoryRead(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductRead(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    stock: int
    category_id: int
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductWithCategory(ProductRead):
    category: Optional[CategorySummary] = None


class ProductSummary(ORMModel):
    id: int
    name: str
    image_url: Optional[str] = None


# Cart

class CartProduct(ProductSummary):
    price: float


class CartItemRead(ORMModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    price_at_time: float
    created_at: datetime
    updated_at: datetime


class CartLineRead(CartItemRead):
    product: Optional[CartProduct] = None

    @computed_field
    @property
    def total(self) -> float:
        return round(self.price_at_time * self.quantity, 2)


# Orders

class OrderItemRead(ORMModel):
    id: int
    product_id: int
    quantity: int
    price_at_time: float
    product: Optional[ProductSummary] = None


class OrderRead(ORMModel):
    id: int
    user_id: int
    total_price: float
    status: OrderStatus
    created_at: datetime
    items: List[OrderItemRead] = []
