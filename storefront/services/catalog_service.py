import logging
from datetime import datetime, timezone

from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError

from storefront.core.errors import ConflictError, NotFoundError, ValidationError, require_positive_id
from storefront.models.order import Order
from storefront.models.product import Product
from storefront.services.pricing_service import get_all_prices_for_catalog, get_price_info, price_map

logger = logging.getLogger(__name__)

_PRODUCT_FIELDS = ("name", "description", "buy_price", "sell_price", "category", "stock", "image_url")


def _clean_optional(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _apply_product_fields(product, payload):
    data = payload.model_dump() if hasattr(payload, "model_dump") else dict(payload)
    name = str(data.get("name") or "").strip()
    if not name:
        raise ValidationError("Product name is required.", fields=["name"])
    for field in ("buy_price", "sell_price", "stock"):
        value = data.get(field)
        if value is None:
            raise ValidationError("Missing required fields: {}".format(field), fields=[field])
        if value < 0:
            raise ValidationError("{} must be non-negative.".format(field), fields=[field])

    product.name = name
    product.description = _clean_optional(data.get("description"))
    product.buy_price = data["buy_price"]
    product.sell_price = data["sell_price"]
    product.category = _clean_optional(data.get("category"))
    product.stock = int(data["stock"])
    product.image_url = _clean_optional(data.get("image_url"))


def get_product(db, product_id):
    product_id = require_positive_id(product_id, "product_id")
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


def list_products(db):
    stmt = select(Product).order_by(Product.created_at.desc(), Product.id.desc())
    return list(db.execute(stmt).scalars().all())


def create_product(db, payload):
    product = Product()
    _apply_product_fields(product, payload)
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Created product %s (%s).", product.id, product.name)
    return product


def update_product(db, product_id, payload):
    product = get_product(db, product_id)
    _apply_product_fields(product, payload)
    product.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(product)
    return product


def product_has_orders(db, product_id) -> bool:
    stmt = select(Order.id).where(Order.product_id == product_id).limit(1)
    return db.execute(stmt).first() is not None


def delete_product(db, product_id):
    product = get_product(db, product_id)
    if product_has_orders(db, product.id):
        raise ConflictError("Cannot delete product that has existing orders")

    db.delete(product)
    try:
        db.commit()
    except IntegrityError as exc:
        # An order landed between the check and the delete.
        db.rollback()
        raise ConflictError("Cannot delete product that has existing orders") from exc
    logger.info("Deleted product %s.", product.id)


def with_prices(db, products, now=None):
    """Pair each product with its resolved price, in the given order."""
    products = list(products)
    prices = price_map(db, [product.id for product in products], now=now)
    return [(product, prices.get(product.id)) for product in products]


def list_products_with_prices(db, now=None):
    products = {product.id: product for product in list_products(db)}
    pairs = []
    for product_id, price in get_all_prices_for_catalog(db, now=now):
        product = products.get(product_id)
        if product is not None:
            pairs.append((product, price))
    return pairs


def get_product_with_price(db, product_id, now=None):
    product = get_product(db, product_id)
    return product, get_price_info(db, product.id, now=now)


def list_categories(db):
    # noinspection SqlNoDataSourceInspection
    sql = text(
        """
        SELECT
            category,
            COUNT(*) AS product_count,
            MIN(image_url) AS sample_image,
            MIN(sell_price) AS min_price,
            MAX(sell_price) AS max_price
        FROM products
        WHERE category IS NOT NULL AND category != ''
        GROUP BY category
        ORDER BY category ASC
        """
    )
    rows = db.execute(sql).mappings().all()
    return [
        {
            "category": row["category"],
            "product_count": int(row["product_count"]),
            "sample_image": row["sample_image"],
            "min_price": float(row["min_price"] or 0),
            "max_price": float(row["max_price"] or 0),
        }
        for row in rows
    ]


def list_products_by_category(db, name):
    name = str(name or "").strip()
    if not name:
        raise ValidationError("Category name is required.", fields=["name"])
    stmt = (
        select(Product)
        .where(Product.category == name)
        .order_by(Product.created_at.desc(), Product.id.desc())
    )
    products = list(db.execute(stmt).scalars().all())
    if not products:
        raise NotFoundError("Category", name)
    return products


def count_categories(db) -> int:
    stmt = (
        select(func.count(func.distinct(Product.category)))
        .where(Product.category.is_not(None), Product.category != "")
    )
    return int(db.execute(stmt).scalar() or 0)


__all__ = [
    "count_categories",
    "create_product",
    "delete_product",
    "get_product",
    "get_product_with_price",
    "list_categories",
    "list_products",
    "list_products_by_category",
    "list_products_with_prices",
    "product_has_orders",
    "update_product",
    "with_prices",
]
