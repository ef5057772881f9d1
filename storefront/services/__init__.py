from storefront.services.dashboard_service import dashboard_summary
from storefront.services.likes_service import LikesStore
from storefront.services.order_service import submit_order
from storefront.services.pricing_service import get_all_prices_for_catalog, get_price_info

__all__ = [
    "LikesStore",
    "dashboard_summary",
    "get_all_prices_for_catalog",
    "get_price_info",
    "submit_order",
]
