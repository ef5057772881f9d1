from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from storefront.core.dates import as_utc
from storefront.schemas.product import ProductRead


class PromotionWindow(BaseModel):
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        # Bounds without an offset are UTC.
        return as_utc(value)


class SoldeBase(PromotionWindow):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    discount_percent: Optional[Decimal] = Field(default=None, gt=0, le=100, max_digits=5, decimal_places=2)
    discount_fixed: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    is_active: bool = True

    @model_validator(mode="after")
    def _check_discount_and_window(self):
        if (self.discount_percent is None) == (self.discount_fixed is None):
            raise ValueError("exactly one of discount_percent or discount_fixed is required")
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class SoldeCreate(SoldeBase):
    product_ids: List[int] = Field(default_factory=list)


class SoldeUpdate(SoldeBase):
    product_ids: Optional[List[int]] = None


class SoldeRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    discount_percent: Optional[float] = None
    discount_fixed: Optional[float] = None
    start_date: datetime
    end_date: datetime
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SoldeWithProducts(SoldeRead):
    products: List[ProductRead] = Field(default_factory=list)


class WeeklyOfferBase(PromotionWindow):
    product_id: int = Field(gt=0)
    offer_description: str = Field(min_length=1)
    offer_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    is_active: bool = True

    @model_validator(mode="after")
    def _check_window(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class WeeklyOfferCreate(WeeklyOfferBase):
    pass


class WeeklyOfferUpdate(WeeklyOfferBase):
    pass


class WeeklyOfferRead(BaseModel):
    id: int
    product_id: int
    offer_description: str
    offer_price: float
    start_date: datetime
    end_date: datetime
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WeeklyOfferWithProduct(WeeklyOfferRead):
    product: ProductRead


class ActiveWeeklyOffer(WeeklyOfferRead):
    name: str
    description: Optional[str] = None
    sell_price: float
    image_url: Optional[str] = None
    category: Optional[str] = None
    stock: int


class PromotionCounts(BaseModel):
    soldes: int
    offers: int
