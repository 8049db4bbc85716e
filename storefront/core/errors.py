"""Application error taxonomy.

Services raise these; the handlers registered in ``storefront.main`` turn
them into the JSON error envelope. Nothing here knows about HTTP beyond the
status code each error maps to.
"""
from typing import Optional


class AppError(Exception):
    status_code: int = 500
    message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    message = "You are not logged in! Please log in to get access."


class AuthorizationError(AppError):
    status_code = 403
    message = "You do not have permission to perform this action"


class NotFoundError(AppError):
    status_code = 404
    message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    message = "Resource is still in use"


class EmptyCartError(ValidationError):
    message = "Cart is empty"


class OutOfStockError(ValidationError):
    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock for product {product_id}: requested {requested}, available {available}")


class OrderPlacementError(AppError):
    status_code = 500
    message = "Order could not be placed"
