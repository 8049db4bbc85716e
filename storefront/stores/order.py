from typing import List
from sqlmodel import Session, select
from sqlalchemy.orm import selectinload
from storefront.models.order import Order, OrderItem

class OrderStore:
    def __init__(self, session: Session):
        self.session = session

    def add_order(self, order: Order) -> Order:
        self.session.add(order)
        # Flush so the order id is available to its items
        self.session.flush()
        return order

    def add_item(self, item: OrderItem) -> OrderItem:
        self.session.add(item)
        return item

    def list_for_user(self, user_id: int) -> List[Order]:
        """Orders for a user, newest first, with items and their products loaded"""
        return self.session.exec(
            select(Order)
            .where(Order.user_id == user_id)
            .options(selectinload(Order.items).selectinload(OrderItem.product))
            .order_by(Order.created_at.desc(), Order.id.desc())
        ).all()
