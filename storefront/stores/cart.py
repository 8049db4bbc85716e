from typing import List, Optional
from storefront.core.clock import utcnow
from sqlmodel import Session, select, delete
from sqlalchemy import and_, or_, update
from sqlalchemy.orm import selectinload
from storefront.models.cart import CartItem

class CartStore:
    def __init__(self, session: Session):
        self.session = session

    def list_for_user(self, user_id: int, with_products: bool = False) -> List[CartItem]:
        query = select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.id)
        if with_products:
            query = query.options(selectinload(CartItem.product))
        return self.session.exec(query).all()

    def get_for_user(self, user_id: int, cart_item_id: int) -> Optional[CartItem]:
        return self.session.exec(
            select(CartItem).where(CartItem.id == cart_item_id, CartItem.user_id == user_id)
        ).first()

    def find(self, user_id: int, product_id: int) -> Optional[CartItem]:
        return self.session.exec(
            select(CartItem).where(
                CartItem.user_id == user_id,
                CartItem.product_id == product_id
            )
        ).first()

    def save(self, item: CartItem) -> CartItem:
        item.updated_at = utcnow()
        self.session.add(item)
        self.session.flush()
        return item

    def increment_quantity(self, user_id: int, product_id: int, quantity: int, limit: int) -> bool:
        """Add `quantity` to an existing line in place, unless that would exceed `limit`.

        Returns False when there is no such line or the limit would be crossed.
        """
        result = self.session.exec(
            update(CartItem)
            .where(
                CartItem.user_id == user_id,
                CartItem.product_id == product_id,
                CartItem.quantity + quantity <= limit
            )
            .values(quantity=CartItem.quantity + quantity, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def delete(self, item: CartItem):
        self.session.delete(item)
        self.session.flush()

    def claim(self, items: List[CartItem]) -> int:
        """Delete exactly these lines, as read, and return how many were deleted.

        A line that another transaction already removed or changed in quantity
        is not matched, so a short count means the cart moved underneath.
        """
        result = self.session.exec(
            delete(CartItem)
            .where(or_(*[
                and_(CartItem.id == item.id, CartItem.quantity == item.quantity)
                for item in items
            ]))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def clear_for_product(self, product_id: int) -> int:
        result = self.session.exec(delete(CartItem).where(CartItem.product_id == product_id))
        return result.rowcount
