from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session
from pydantic import BaseModel, Field
from storefront.core.security import Permission
from storefront.db.session import get_session
from storefront.models.user import User
from storefront.routers.auth import require_permission
from storefront.schemas import CartItemRead, CartLineRead, Envelope
from storefront.services.cart import CartService

router = APIRouter()

class CartItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)

def get_cart_service(session: Session = Depends(get_session)) -> CartService:
    return CartService(session)

@router.post("/add", response_model=Envelope[CartItemRead], status_code=status.HTTP_201_CREATED)
def add_to_cart(
    cart_item: CartItemCreate,
    current_user: User = Depends(require_permission(Permission.CART_MANAGE)),
    service: CartService = Depends(get_cart_service)
):
    """Add a product to the cart, capturing its current price"""
    item = service.add_to_cart(current_user.id, cart_item.product_id, cart_item.quantity)
    return Envelope(data=CartItemRead.model_validate(item))

@router.get("/view", response_model=Envelope[List[CartLineRead]])
def view_cart(
    current_user: User = Depends(require_permission(Permission.CART_MANAGE)),
    service: CartService = Depends(get_cart_service)
):
    """Get user's cart items with product details"""
    items = service.get_user_cart(current_user.id)
    return Envelope(data=[CartLineRead.model_validate(item) for item in items])

@router.delete("/delete/{cart_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_cart(
    cart_item_id: int,
    current_user: User = Depends(require_permission(Permission.CART_MANAGE)),
    service: CartService = Depends(get_cart_service)
):
    """Remove item from cart"""
    service.remove_from_cart(current_user.id, cart_item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
