from typing import List, Optional
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session
from pydantic import BaseModel, Field
from storefront.core.security import Permission
from storefront.db.session import get_session
from storefront.models.user import User
from storefront.routers.auth import require_permission
from storefront.schemas import CategoryRead, Envelope
from storefront.services.catalog import CatalogService

router = APIRouter()

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None

class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None

def get_catalog_service(session: Session = Depends(get_session)) -> CatalogService:
    return CatalogService(session)

@router.post("/create", response_model=Envelope[CategoryRead], status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: CategoryCreate,
    current_user: User = Depends(require_permission(Permission.CATEGORY_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    category = service.create_category(category_in.name, category_in.description)
    return Envelope(data=CategoryRead.model_validate(category))

@router.put("/update/{category_id}", response_model=Envelope[CategoryRead])
def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    current_user: User = Depends(require_permission(Permission.CATEGORY_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    category = service.update_category(category_id, category_in.model_dump(exclude_unset=True, exclude_none=True))
    return Envelope(data=CategoryRead.model_validate(category))

@router.delete("/delete/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    current_user: User = Depends(require_permission(Permission.CATEGORY_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/list", response_model=Envelope[List[CategoryRead]])
def list_categories(
    current_user: User = Depends(require_permission(Permission.CATEGORY_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    categories = service.list_categories()
    return Envelope(data=[CategoryRead.model_validate(c) for c in categories])
