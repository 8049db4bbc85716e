from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from storefront.core.config import settings
from storefront.core.handlers import register_exception_handlers
from storefront.core.logger import get_logger
from storefront.db.session import create_db_and_tables

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info(f"{settings.PROJECT_NAME} ready")
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
    description="Catalog, cart and order placement API"
)

register_exception_handlers(app)

@app.get("/")
def read_root():
    return {"message": "Welcome to Storefront API. Visit /docs for Swagger UI."}

from storefront.routers import auth, products, categories, cart, orders

app.include_router(auth.router, prefix=f"{settings.API_V1_PREFIX}/auth", tags=["auth"])
app.include_router(products.router, prefix=f"{settings.API_V1_PREFIX}/products", tags=["products"])
app.include_router(categories.router, prefix=f"{settings.API_V1_PREFIX}/categories", tags=["categories"])
app.include_router(cart.router, prefix=f"{settings.API_V1_PREFIX}/cart", tags=["cart"])
app.include_router(orders.router, prefix=f"{settings.API_V1_PREFIX}/order", tags=["order"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
