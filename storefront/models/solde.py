from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Table, Text
from sqlalchemy.orm import relationship

from storefront.database.base import Base

soldes_products = Table(
    "soldes_products",
    Base.metadata,
    Column("solde_id", Integer, ForeignKey("soldes.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class Solde(Base):
    """Time-bounded sale applying a percentage or fixed discount to its products."""

    __tablename__ = "soldes"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)

    discount_percent = Column(Numeric(5, 2))
    discount_fixed = Column(Numeric(10, 2))

    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    products = relationship(
        "Product",
        secondary=soldes_products,
        order_by="Product.id",
        passive_deletes=True,
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_soldes_window", "is_active", "start_date", "end_date"),
    )


__all__ = ["Solde", "soldes_products"]
