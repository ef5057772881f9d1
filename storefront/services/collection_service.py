import logging

from sqlalchemy import delete, select

from storefront.core.errors import NotFoundError, ValidationError, require_positive_id
from storefront.models.collection import Collection, collection_products
from storefront.models.product import Product

logger = logging.getLogger(__name__)


def _clean_optional(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _require_name(name):
    name = str(name or "").strip()
    if not name:
        raise ValidationError("Collection name is required", fields=["name"])
    return name


def load_products(db, product_ids):
    """Fetch products by id, raising NotFoundError for the first missing one."""
    ids = []
    for value in product_ids or []:
        product_id = require_positive_id(value, "product_id")
        if product_id not in ids:
            ids.append(product_id)
    if not ids:
        return []
    found = {
        product.id: product
        for product in db.execute(select(Product).where(Product.id.in_(ids))).scalars().all()
    }
    for product_id in ids:
        if product_id not in found:
            raise NotFoundError("Product", product_id)
    return [found[product_id] for product_id in ids]


def list_collections(db):
    stmt = select(Collection).order_by(Collection.created_at.desc(), Collection.id.desc())
    return list(db.execute(stmt).scalars().all())


def get_collection(db, collection_id):
    collection_id = require_positive_id(collection_id, "collection_id")
    collection = db.get(Collection, collection_id)
    if collection is None:
        raise NotFoundError("Collection", collection_id)
    return collection


def create_collection(db, payload):
    collection = Collection(
        name=_require_name(payload.name),
        description=_clean_optional(payload.description),
        image_url=_clean_optional(payload.image_url),
    )
    collection.products = load_products(db, getattr(payload, "product_ids", None))
    db.add(collection)
    db.commit()
    db.refresh(collection)
    logger.info("Created collection %s with %d products.", collection.id, len(collection.products))
    return collection


def update_collection(db, collection_id, payload):
    collection = get_collection(db, collection_id)
    collection.name = _require_name(payload.name)
    collection.description = _clean_optional(payload.description)
    collection.image_url = _clean_optional(payload.image_url)
    db.commit()
    db.refresh(collection)
    return collection


def delete_collection(db, collection_id):
    collection = get_collection(db, collection_id)
    db.delete(collection)
    db.commit()
    logger.info("Deleted collection %s.", collection.id)


def add_products_to_collection(db, collection_id, product_ids):
    collection = get_collection(db, collection_id)
    products = load_products(db, product_ids)
    existing = {product.id for product in collection.products}
    for product in products:
        if product.id not in existing:
            collection.products.append(product)
    db.commit()
    db.refresh(collection)
    return collection


def remove_product_from_collection(db, collection_id, product_id):
    collection = get_collection(db, collection_id)
    product_id = require_positive_id(product_id, "product_id")
    result = db.execute(
        delete(collection_products).where(
            collection_products.c.collection_id == collection.id,
            collection_products.c.product_id == product_id,
        )
    )
    if not result.rowcount:
        raise NotFoundError("Collection product", product_id)
    db.commit()
    db.expire(collection, ["products"])
    return collection


__all__ = [
    "add_products_to_collection",
    "create_collection",
    "delete_collection",
    "get_collection",
    "list_collections",
    "load_products",
    "remove_product_from_collection",
    "update_collection",
]
