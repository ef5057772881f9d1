from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from storefront.core.constants import ORDER_STATUS_PENDING
from storefront.database.base import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    customer_location = Column(String(255), nullable=False)

    status = Column(String(20), nullable=False, default=ORDER_STATUS_PENDING)
    order_date = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    delivered_date = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_orders_product", "product_id"),
        Index("idx_orders_status_date", "status", "order_date"),
    )


__all__ = ["Order"]
