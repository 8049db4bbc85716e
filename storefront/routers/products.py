from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session
from pydantic import BaseModel, Field
from storefront.core.security import Permission
from storefront.db.session import get_session
from storefront.models.user import User
from storefront.routers.auth import require_permission
from storefront.schemas import Envelope, ProductRead, ProductWithCategory
from storefront.services.catalog import CatalogService

router = APIRouter()

class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(gt=0)
    stock: int = Field(ge=0)
    category_id: int
    image_url: Optional[str] = None

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    stock: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    image_url: Optional[str] = None

class CategoryAssign(BaseModel):
    category_id: int

def get_catalog_service(session: Session = Depends(get_session)) -> CatalogService:
    return CatalogService(session)

@router.post("/create", response_model=Envelope[ProductRead], status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: ProductCreate,
    current_user: User = Depends(require_permission(Permission.PRODUCT_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    product = service.create_product(product_in.model_dump())
    return Envelope(data=ProductRead.model_validate(product))

@router.put("/update/{product_id}", response_model=Envelope[ProductRead])
def update_product(
    product_id: int,
    product_in: ProductUpdate,
    current_user: User = Depends(require_permission(Permission.PRODUCT_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    product = service.update_product(product_id, product_in.model_dump(exclude_unset=True, exclude_none=True))
    return Envelope(data=ProductRead.model_validate(product))

@router.delete("/delete/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    current_user: User = Depends(require_permission(Permission.PRODUCT_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/list", response_model=Envelope[List[ProductWithCategory]])
def list_products(
    current_user: User = Depends(require_permission(Permission.PRODUCT_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    products = service.list_products()
    return Envelope(data=[ProductWithCategory.model_validate(p) for p in products])

@router.get("/list/filters", response_model=Envelope[List[ProductWithCategory]])
def list_products_with_filters(
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(require_permission(Permission.PRODUCT_BROWSE)),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Filter products by price range, category and name, one page at a time.
    """
    products = service.filter_products(
        min_price=min_price,
        max_price=max_price,
        category_id=category_id,
        search=search,
        page=page,
        limit=limit,
    )
    return Envelope(data=[ProductWithCategory.model_validate(p) for p in products])

@router.put("/assign-category/{product_id}", response_model=Envelope[ProductRead])
def assign_product_category(
    product_id: int,
    assignment: CategoryAssign,
    current_user: User = Depends(require_permission(Permission.PRODUCT_MANAGE)),
    service: CatalogService = Depends(get_catalog_service)
):
    product = service.assign_category(product_id, assignment.category_id)
    return Envelope(data=ProductRead.model_validate(product))
