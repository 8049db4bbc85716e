from datetime import timedelta
from enum import Enum
from typing import Optional, Dict, FrozenSet
from passlib.context import CryptContext
from jose import jwt, JWTError

from storefront.core.config import settings
from storefront.core.clock import utcnow
from storefront.core.errors import AuthenticationError
from storefront.models.user import UserRole

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = utcnow() + expires_delta
    else:
        expire = utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")
    if payload.get("sub") is None:
        raise AuthenticationError("Invalid or expired token")
    return payload


class Permission(str, Enum):
    CART_MANAGE = "cart.manage"
    ORDER_PLACE = "order.place"
    ORDER_HISTORY = "order.history"
    PRODUCT_BROWSE = "product.browse"
    PRODUCT_MANAGE = "product.manage"
    CATEGORY_MANAGE = "category.manage"


ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[Permission]] = {
    UserRole.CUSTOMER: frozenset({
        Permission.CART_MANAGE,
        Permission.ORDER_PLACE,
        Permission.ORDER_HISTORY,
        Permission.PRODUCT_BROWSE,
    }),
    UserRole.ADMIN: frozenset({
        Permission.PRODUCT_MANAGE,
        Permission.CATEGORY_MANAGE,
    }),
}


def has_permission(role: UserRole, permission: Permission) -> bool:
    """Check whether a role grants a permission"""
    return permission in ROLE_PERMISSIONS.get(UserRole(role), frozenset())
