import logging

from sqlalchemy import select

from storefront.core.constants import (
    ORDER_REQUIRED_FIELDS,
    ORDER_STATUS_DELIVERED,
    ORDER_STATUS_PENDING,
    ORDER_STATUSES,
)
from storefront.core.dates import utc_now
from storefront.core.errors import NotFoundError, ValidationError, require_positive_id
from storefront.models.order import Order
from storefront.models.product import Product

logger = logging.getLogger(__name__)


def _payload_dict(payload):
    if payload is None:
        return {}
    if hasattr(payload, "model_dump"):
        return payload.model_dump()
    return dict(payload)


def _missing_fields(data):
    missing = []
    for field in ORDER_REQUIRED_FIELDS:
        value = data.get(field)
        if value is None or not str(value).strip():
            missing.append(field)
    return missing


def submit_order(db, payload, *, now=None) -> int:
    """Record a purchase request against a product and return the order id.

    Stock is informational only and is not touched.
    """
    data = _payload_dict(payload)
    missing = _missing_fields(data)
    if missing:
        raise ValidationError(
            "Missing required fields: {}".format(", ".join(missing)),
            fields=missing,
        )

    product_id = require_positive_id(str(data["product_id"]).strip(), "product_id")
    if db.get(Product, product_id) is None:
        raise NotFoundError("Product", product_id)

    order = Order(
        product_id=product_id,
        customer_name=str(data["customer_name"]).strip(),
        customer_phone=str(data["customer_phone"]).strip(),
        customer_location=str(data["customer_location"]).strip(),
        status=ORDER_STATUS_PENDING,
        order_date=now or utc_now(),
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Order %s placed for product %s.", order.id, product_id)
    return order.id


def get_order(db, order_id):
    order_id = require_positive_id(order_id, "order_id")
    order = db.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order", order_id)
    return order


def _normalize_status(status):
    value = str(status or "").strip().lower()
    if value not in ORDER_STATUSES:
        raise ValidationError(
            "status must be one of: {}".format(", ".join(ORDER_STATUSES)),
            fields=["status"],
        )
    return value


def list_orders(db, status=None, limit=None):
    stmt = select(Order).order_by(Order.order_date.desc(), Order.id.desc())
    if status is not None:
        stmt = stmt.where(Order.status == _normalize_status(status))
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars().all())


def update_order_status(db, order_id, status, *, now=None):
    order = get_order(db, order_id)
    status = _normalize_status(status)
    order.status = status
    if status == ORDER_STATUS_DELIVERED:
        order.delivered_date = now or utc_now()
    else:
        order.delivered_date = None
    db.commit()
    db.refresh(order)
    logger.info("Order %s moved to %s.", order.id, status)
    return order


__all__ = ["get_order", "list_orders", "submit_order", "update_order_status"]
