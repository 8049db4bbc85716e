from typing import Optional
from sqlmodel import Session, select
from sqlalchemy import func
from storefront.models.user import User

class UserStore:
    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        # Case-insensitive lookup
        return self.session.exec(select(User).where(func.lower(User.email) == email.lower())).first()

    def add(self, user: User) -> User:
        self.session.add(user)
        self.session.flush()
        return user
