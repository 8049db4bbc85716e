# Import all models to register them with SQLModel
from storefront.models.user import User, UserRole
from storefront.models.product import Product, Category
from storefront.models.cart import CartItem
from storefront.models.order import Order, OrderItem, OrderStatus

__all__ = [
    "User",
    "UserRole",
    "Product",
    "Category",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
]
