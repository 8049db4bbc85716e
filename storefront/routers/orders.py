from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from storefront.core.security import Permission
from storefront.db.session import get_session
from storefront.models.user import User
from storefront.routers.auth import require_permission
from storefront.schemas import Envelope, OrderRead
from storefront.services.order import OrderService

router = APIRouter()

def get_order_service(session: Session = Depends(get_session)) -> OrderService:
    return OrderService(session)

@router.post("/place", response_model=Envelope[OrderRead], status_code=status.HTTP_201_CREATED)
def place_order(
    current_user: User = Depends(require_permission(Permission.ORDER_PLACE)),
    service: OrderService = Depends(get_order_service)
):
    """
    Convert the caller's cart into an order.
    Creates order items, reduces product stock and clears the cart in one transaction.
    """
    order = service.place_order(current_user.id)
    return Envelope(data=OrderRead.model_validate(order))

@router.get("/history", response_model=Envelope[List[OrderRead]])
def order_history(
    current_user: User = Depends(require_permission(Permission.ORDER_HISTORY)),
    service: OrderService = Depends(get_order_service)
):
    """Orders for the caller, newest first, with items and product details"""
    orders = service.get_order_history(current_user.id)
    return Envelope(data=[OrderRead.model_validate(order) for order in orders])
