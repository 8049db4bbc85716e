from typing import List, Optional
from storefront.core.clock import utcnow
from sqlmodel import Session, select
from sqlalchemy import func, update
from sqlalchemy.orm import selectinload
from storefront.models.product import Product, Category
from storefront.models.order import OrderItem

class CatalogStore:
    """Products and categories.

    Bound to a session; writes are flushed, never committed. The caller owns
    the transaction.
    """

    def __init__(self, session: Session):
        self.session = session

    # Categories

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.session.get(Category, category_id)

    def list_categories(self) -> List[Category]:
        return self.session.exec(select(Category).order_by(Category.id)).all()

    def save_category(self, category: Category) -> Category:
        category.updated_at = utcnow()
        self.session.add(category)
        self.session.flush()
        return category

    def delete_category(self, category: Category):
        self.session.delete(category)
        self.session.flush()

    def count_products_in_category(self, category_id: int) -> int:
        return self.session.exec(
            select(func.count(Product.id)).where(Product.category_id == category_id)
        ).one()

    # Products

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.session.get(Product, product_id)

    def list_products(self) -> List[Product]:
        return self.session.exec(
            select(Product).options(selectinload(Product.category)).order_by(Product.id)
        ).all()

    def filter_products(
        self,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Product]:
        query = select(Product).options(selectinload(Product.category))
        if min_price is not None:
            query = query.where(Product.price >= min_price)
        if max_price is not None:
            query = query.where(Product.price <= max_price)
        if category_id is not None:
            query = query.where(Product.category_id == category_id)
        if search:
            # Wildcards in the term match literally
            query = query.where(Product.name.icontains(search, autoescape=True))
        query = query.order_by(Product.id).offset(offset).limit(limit)
        return self.session.exec(query).all()

    def save_product(self, product: Product) -> Product:
        product.updated_at = utcnow()
        self.session.add(product)
        self.session.flush()
        return product

    def delete_product(self, product: Product):
        self.session.delete(product)
        self.session.flush()

    def is_product_ordered(self, product_id: int) -> bool:
        return self.session.exec(
            select(OrderItem.id).where(OrderItem.product_id == product_id).limit(1)
        ).first() is not None

    def current_stock(self, product_id: int) -> Optional[int]:
        """Stock as stored in the database, bypassing the session's identity map"""
        return self.session.exec(select(Product.stock).where(Product.id == product_id)).first()

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Atomically take `quantity` units off a product's stock.

        Returns False when the product is missing or holds less than
        `quantity`; the row is left untouched in that case.
        """
        result = self.session.exec(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
