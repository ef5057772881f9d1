from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.product import ProductWithPrice


class CollectionBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = None


class CollectionCreate(CollectionBase):
    product_ids: List[int] = Field(default_factory=list)


class CollectionUpdate(CollectionBase):
    pass


class CollectionRead(CollectionBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CollectionDetail(CollectionRead):
    products: List[ProductWithPrice] = Field(default_factory=list)


class CollectionProductsRequest(BaseModel):
    product_ids: List[int] = Field(min_length=1)
