from typing import Optional
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlmodel import Session
from storefront.core.config import settings
from storefront.core.errors import AuthenticationError, AuthorizationError
from storefront.core.security import Permission, decode_access_token, has_permission
from storefront.db.session import get_session
from storefront.models.user import User, UserRole
from storefront.schemas import AuthResponse, UserRead
from storefront.services.auth import AuthService
from storefront.stores import UserStore

router = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)


class SignupRequest(BaseModel):
    name: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(session)

def auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(token=token, data={"user": UserRead.model_validate(user)})

@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(user_in: SignupRequest, service: AuthService = Depends(get_auth_service)):
    user = service.register_user(user_in.name, user_in.email, user_in.password, role=user_in.role)
    return auth_response(user, service.create_token_for(user))

@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, response: Response, service: AuthService = Depends(get_auth_service)):
    user = service.authenticate_user(credentials.email, credentials.password)
    token = service.create_token_for(user)
    response.set_cookie(
        key="jwt",
        value=token,
        max_age=settings.JWT_COOKIE_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
    )
    return auth_response(user, token)

def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session)
) -> User:
    # Bearer header wins over the login cookie
    token = credentials.credentials if credentials else request.cookies.get("jwt")
    if not token:
        raise AuthenticationError()

    payload = decode_access_token(token)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid or expired token")

    user = UserStore(session).get(user_id)
    if user is None:
        raise AuthenticationError("The user belonging to this token no longer exists")
    return user

def require_permission(permission: Permission):
    """Dependency factory: resolves the current user and checks their role grants `permission`."""
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_permission(current_user.role, permission):
            raise AuthorizationError(f"Access denied: requires {permission.value}")
        return current_user
    return checker
