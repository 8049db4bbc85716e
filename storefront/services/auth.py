from typing import Optional
from sqlmodel import Session

from storefront.core.errors import ValidationError
from storefront.core.logger import get_logger
from storefront.core.security import get_password_hash, verify_password, create_access_token
from storefront.models.user import User, UserRole
from storefront.stores import UserStore

logger = get_logger(__name__)

class AuthService:
    def __init__(self, session: Session):
        self.session = session
        self.users = UserStore(session)

    def create_token_for(self, user: User) -> str:
        return create_access_token(
            data={"sub": str(user.id), "email": user.email, "role": UserRole(user.role).value}
        )

    def register_user(self, name: str, email: str, password: str, role: Optional[UserRole] = None) -> User:
        if self.users.get_by_email(email):
            raise ValidationError("User already exists")

        user = self.users.add(User(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=role or UserRole.CUSTOMER
        ))
        self.session.commit()
        self.session.refresh(user)
        logger.info(f"User {user.id} registered as {UserRole(user.role).value}")
        return user

    def authenticate_user(self, email: str, password: str) -> User:
        user = self.users.get_by_email(email)
        # Same message either way to prevent email enumeration
        if not user or not verify_password(password, user.password_hash):
            raise ValidationError("Invalid credentials")
        return user
