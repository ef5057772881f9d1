from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, Numeric, String, Text

from storefront.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)

    buy_price = Column(Numeric(10, 2), nullable=False, default=0)
    sell_price = Column(Numeric(10, 2), nullable=False, default=0)

    category = Column(String(100))
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_products_category", "category"),
        Index("idx_products_created_at", "created_at"),
    )


__all__ = ["Product"]
