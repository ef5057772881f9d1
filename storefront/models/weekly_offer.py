from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Numeric, Text
from sqlalchemy.orm import relationship

from storefront.database.base import Base


class WeeklyOffer(Base):
    __tablename__ = "weekly_offers"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    offer_description = Column(Text, nullable=False)
    offer_price = Column(Numeric(10, 2), nullable=False)

    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    product = relationship("Product", lazy="selectin")

    __table_args__ = (
        Index("idx_weekly_offers_product_window", "product_id", "is_active", "start_date", "end_date"),
    )


__all__ = ["WeeklyOffer"]
