from typing import List
from decimal import Decimal, ROUND_HALF_UP
from sqlmodel import Session
from sqlalchemy.exc import SQLAlchemyError
from storefront.core.errors import AppError, ConflictError, EmptyCartError, NotFoundError, OutOfStockError, OrderPlacementError
from storefront.core.logger import get_logger
from storefront.models.cart import CartItem
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.stores import CartStore, CatalogStore, OrderStore

logger = get_logger(__name__)

CENT = Decimal("0.01")


def cart_total(items: List[CartItem]) -> float:
    """Sum of price snapshot x quantity, exact to the cent."""
    total = sum((Decimal(str(item.price_at_time)) * item.quantity for item in items), Decimal("0"))
    return float(total.quantize(CENT, rounding=ROUND_HALF_UP))


class OrderService:
    def __init__(self, session: Session):
        self.session = session
        self.carts = CartStore(session)
        self.catalog = CatalogStore(session)
        self.orders = OrderStore(session)

    def place_order(self, user_id: int) -> Order:
        """Turn the user's whole cart into one order.

        The cart lines read here are claimed (deleted) first, so a concurrent
        placement of the same cart finds nothing to claim and backs out with a
        409. Order, order items and stock decrements follow in the same
        transaction and are committed together. Any failure rolls everything
        back before the error leaves this method.
        """
        cart_items = self.carts.list_for_user(user_id)
        if not cart_items:
            raise EmptyCartError()

        total_price = cart_total(cart_items)

        try:
            if self.carts.claim(cart_items) != len(cart_items):
                raise ConflictError("Cart changed while the order was being placed")

            order = self.orders.add_order(
                Order(user_id=user_id, total_price=total_price, status=OrderStatus.COMPLETED)
            )

            for item in cart_items:
                self.orders.add_item(OrderItem(
                    order_id=order.id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price_at_time=item.price_at_time
                ))

                if not self.catalog.decrement_stock(item.product_id, item.quantity):
                    available = self.catalog.current_stock(item.product_id)
                    if available is None:
                        raise NotFoundError(f"Product {item.product_id} not found")
                    raise OutOfStockError(item.product_id, item.quantity, available)

            self.session.commit()
        except AppError as e:
            self.session.rollback()
            logger.warning(f"Order placement for user {user_id} rolled back: {e.message}")
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(f"Order placement for user {user_id} failed")
            raise OrderPlacementError() from e

        self.session.refresh(order)
        logger.info(f"Order {order.id} placed for user {user_id}: {len(cart_items)} item(s), total {total_price:.2f}")
        return order

    def get_order_history(self, user_id: int) -> List[Order]:
        return self.orders.list_for_user(user_id)
