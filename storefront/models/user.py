from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Enum as SAEnum
from storefront.core.clock import utcnow

class UserRole(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"

class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # Basic Info
    name: str
    email: str = Field(unique=True, index=True)
    password_hash: str

    role: UserRole = Field(
        default=UserRole.CUSTOMER,
        sa_column=Column(SAEnum(UserRole, values_callable=lambda x: [e.value for e in x]), nullable=False)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
