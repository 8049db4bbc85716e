from storefront.stores.catalog import CatalogStore
from storefront.stores.cart import CartStore
from storefront.stores.order import OrderStore
from storefront.stores.user import UserStore

__all__ = ["CatalogStore", "CartStore", "OrderStore", "UserStore"]
