from typing import List, Optional
from sqlmodel import Session
from storefront.core.errors import ConflictError, NotFoundError
from storefront.core.logger import get_logger
from storefront.models.product import Product, Category
from storefront.stores import CartStore, CatalogStore

logger = get_logger(__name__)

class CatalogService:
    def __init__(self, session: Session):
        self.session = session
        self.catalog = CatalogStore(session)
        self.carts = CartStore(session)

    # Categories

    def get_category(self, category_id: int) -> Category:
        category = self.catalog.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def list_categories(self) -> List[Category]:
        return self.catalog.list_categories()

    def create_category(self, name: str, description: Optional[str] = None) -> Category:
        category = self.catalog.save_category(Category(name=name, description=description))
        self.session.commit()
        self.session.refresh(category)
        logger.info(f"Category {category.id} created: {category.name}")
        return category

    def update_category(self, category_id: int, changes: dict) -> Category:
        category = self.get_category(category_id)
        for key, value in changes.items():
            setattr(category, key, value)
        self.catalog.save_category(category)
        self.session.commit()
        self.session.refresh(category)
        return category

    def delete_category(self, category_id: int):
        category = self.get_category(category_id)
        if self.catalog.count_products_in_category(category_id):
            raise ConflictError("Category still has products assigned")
        self.catalog.delete_category(category)
        self.session.commit()
        logger.info(f"Category {category_id} deleted")

    # Products

    def get_product(self, product_id: int) -> Product:
        product = self.catalog.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def list_products(self) -> List[Product]:
        return self.catalog.list_products()

    def filter_products(
        self,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> List[Product]:
        return self.catalog.filter_products(
            min_price=min_price,
            max_price=max_price,
            category_id=category_id,
            search=search,
            offset=(page - 1) * limit,
            limit=limit,
        )

    def _require_category(self, category_id: int):
        if not self.catalog.get_category(category_id):
            raise NotFoundError("Category does not exist")

    def create_product(self, data: dict) -> Product:
        self._require_category(data["category_id"])
        product = self.catalog.save_product(Product(**data))
        self.session.commit()
        self.session.refresh(product)
        logger.info(f"Product {product.id} created: {product.name} (stock {product.stock})")
        return product

    def update_product(self, product_id: int, changes: dict) -> Product:
        product = self.get_product(product_id)
        if changes.get("category_id") is not None:
            self._require_category(changes["category_id"])
        for key, value in changes.items():
            setattr(product, key, value)
        self.catalog.save_product(product)
        self.session.commit()
        self.session.refresh(product)
        return product

    def assign_category(self, product_id: int, category_id: int) -> Product:
        product = self.get_product(product_id)
        if not self.catalog.get_category(category_id):
            raise NotFoundError("Category not found")
        product.category_id = category_id
        self.catalog.save_product(product)
        self.session.commit()
        self.session.refresh(product)
        return product

    def delete_product(self, product_id: int):
        product = self.get_product(product_id)
        if self.catalog.is_product_ordered(product_id):
            raise ConflictError("Product is referenced by existing orders")
        # Staged cart lines go with the product
        self.carts.clear_for_product(product_id)
        self.catalog.delete_product(product)
        self.session.commit()
        logger.info(f"Product {product_id} deleted")
