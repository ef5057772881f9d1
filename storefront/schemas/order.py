from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class OrderCreate(BaseModel):
    # Required-field checks happen in the service so the same rules
    # apply outside HTTP.
    product_id: Optional[Union[int, str]] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_location: Optional[str] = None


class OrderCreated(BaseModel):
    success: bool = True
    order_id: int


class OrderRead(BaseModel):
    id: int
    product_id: int
    customer_name: str
    customer_phone: str
    customer_location: str
    status: str
    order_date: datetime
    delivered_date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    status: str
