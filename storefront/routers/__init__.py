from storefront.routers.admin import router as admin_router
from storefront.routers.catalog import router as catalog_router
from storefront.routers.collections import router as collections_router
from storefront.routers.health import router as health_router
from storefront.routers.likes import router as likes_router
from storefront.routers.orders import router as orders_router
from storefront.routers.products import router as products_router
from storefront.routers.soldes import router as soldes_router
from storefront.routers.weekly_offers import router as weekly_offers_router

__all__ = [
    "admin_router",
    "catalog_router",
    "collections_router",
    "health_router",
    "likes_router",
    "orders_router",
    "products_router",
    "soldes_router",
    "weekly_offers_router",
]
