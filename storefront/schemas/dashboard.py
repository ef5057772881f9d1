from typing import List

from pydantic import BaseModel, Field

from storefront.schemas.order import OrderRead
from storefront.schemas.product import ProductRead


class DashboardSummary(BaseModel):
    products_count: int
    orders_count: int
    pending_orders: int
    delivered_orders: int
    categories_count: int
    collections_count: int
    soldes_count: int
    offers_count: int
    recent_orders: List[OrderRead] = Field(default_factory=list)
    low_stock: List[ProductRead] = Field(default_factory=list)
