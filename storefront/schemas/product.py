from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field

from storefront.config import get_settings
from storefront.core.pricing import base_price_info, format_price


class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    buy_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    sell_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(default=None, max_length=100)
    stock: int = Field(ge=0)
    image_url: Optional[str] = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    pass


class ProductRead(ProductBase):
    id: int
    buy_price: float
    sell_price: float
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PriceInfoRead(BaseModel):
    # Read back by FastAPI after the by-alias dump, so both spellings validate.
    original_price: float = Field(
        validation_alias=AliasChoices("original_price", "originalPrice"),
        serialization_alias="originalPrice",
    )
    final_price: float = Field(
        validation_alias=AliasChoices("final_price", "finalPrice"),
        serialization_alias="finalPrice",
    )
    discount_type: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("discount_type", "discountType"),
        serialization_alias="discountType",
    )
    discount_value: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("discount_value", "discountValue"),
        serialization_alias="discountValue",
    )
    offer_description: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("offer_description", "offerDescription"),
        serialization_alias="offerDescription",
    )
    price_clamped: bool = Field(
        default=False,
        validation_alias=AliasChoices("price_clamped", "priceClamped"),
        serialization_alias="priceClamped",
    )
    degraded: bool = False

    model_config = ConfigDict(from_attributes=True)

    @computed_field(alias="formattedOriginalPrice")
    @property
    def formatted_original_price(self) -> str:
        return format_price(self.original_price, get_settings().CURRENCY)

    @computed_field(alias="formattedFinalPrice")
    @property
    def formatted_final_price(self) -> str:
        return format_price(self.final_price, get_settings().CURRENCY)


class ProductWithPrice(ProductRead):
    price: PriceInfoRead


class CatalogPriceRead(BaseModel):
    product_id: int
    price: PriceInfoRead


class CategorySummary(BaseModel):
    category: str
    product_count: int
    sample_image: Optional[str] = None
    min_price: float
    max_price: float


class CategoryProducts(BaseModel):
    category: str
    products: List[ProductWithPrice] = Field(default_factory=list)


class ProductDeleteResult(BaseModel):
    success: bool = True
    message: str = "Product deleted successfully"


def build_product_with_price(product, price) -> ProductWithPrice:
    if price is None:
        price = base_price_info(product.sell_price)
    base = ProductRead.model_validate(product).model_dump()
    base["price"] = PriceInfoRead.model_validate(price)
    return ProductWithPrice(**base)
