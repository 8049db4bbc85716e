from typing import List
from sqlmodel import Session
from sqlalchemy.exc import IntegrityError
from storefront.core.errors import NotFoundError, ValidationError
from storefront.core.logger import get_logger
from storefront.models.cart import CartItem
from storefront.stores import CartStore, CatalogStore

logger = get_logger(__name__)

class CartService:
    def __init__(self, session: Session):
        self.session = session
        self.carts = CartStore(session)
        self.catalog = CatalogStore(session)

    def get_user_cart(self, user_id: int) -> List[CartItem]:
        """Get all cart items for a user with product details"""
        return self.carts.list_for_user(user_id, with_products=True)

    def add_to_cart(self, user_id: int, product_id: int, quantity: int = 1) -> CartItem:
        """Add item to cart or update quantity if already exists"""
        product = self.catalog.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        if product.stock <= 0:
            raise NotFoundError("No stock left")

        stock = product.stock
        if quantity > stock:
            raise ValidationError(f"Only {stock} items available in stock")

        if self.carts.find(user_id, product_id) is None:
            # The price is captured once and never refreshed
            item = CartItem(
                user_id=user_id,
                product_id=product_id,
                quantity=quantity,
                price_at_time=product.price
            )
            try:
                self.carts.save(item)
            except IntegrityError:
                # Another request created the line first; add to it instead
                self.session.rollback()
                logger.info(f"Cart line for user {user_id}, product {product_id} created concurrently, summing quantity")
            else:
                self.session.commit()
                self.session.refresh(item)
                return item

        if not self.carts.increment_quantity(user_id, product_id, quantity, stock):
            self.session.rollback()
            raise ValidationError(f"Only {stock} items available in stock")

        self.session.commit()
        return self.carts.find(user_id, product_id)

    def remove_from_cart(self, user_id: int, cart_item_id: int):
        """Remove item from cart"""
        item = self.carts.get_for_user(user_id, cart_item_id)
        if not item:
            raise NotFoundError("Cart item not found")

        self.carts.delete(item)
        self.session.commit()
