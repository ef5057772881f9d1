from sqlalchemy import Boolean, bindparam, func, select, text

from storefront.config import get_settings
from storefront.core.constants import ORDER_STATUS_DELIVERED, ORDER_STATUS_PENDING
from storefront.models.collection import Collection
from storefront.models.product import Product
from storefront.services.catalog_service import count_categories
from storefront.services.order_service import list_orders


def _order_counts(db):
    # noinspection SqlNoDataSourceInspection
    sql = text(
        """
        SELECT
            COUNT(*) AS total,
            SUM(CASE WHEN status = :pending THEN 1 ELSE 0 END) AS pending,
            SUM(CASE WHEN status = :delivered THEN 1 ELSE 0 END) AS delivered
        FROM orders
        """
    )
    row = db.execute(
        sql,
        {"pending": ORDER_STATUS_PENDING, "delivered": ORDER_STATUS_DELIVERED},
    ).mappings().first()
    if not row:
        return 0, 0, 0
    return int(row["total"] or 0), int(row["pending"] or 0), int(row["delivered"] or 0)


def _flagged_active_count(db, table_name):
    # Counts the is_active flag only, regardless of the date window.
    # noinspection SqlNoDataSourceInspection
    sql = text(
        "SELECT COUNT(*) FROM {} WHERE is_active = :active".format(table_name)
    ).bindparams(bindparam("active", type_=Boolean()))
    return int(db.execute(sql, {"active": True}).scalar() or 0)


def low_stock_products(db, threshold=None, limit=None):
    settings = get_settings()
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    limit = settings.LOW_STOCK_LIMIT if limit is None else limit
    stmt = (
        select(Product)
        .where(Product.stock < threshold)
        .order_by(Product.stock.asc(), Product.id.asc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def dashboard_summary(db):
    settings = get_settings()
    orders_count, pending, delivered = _order_counts(db)
    return {
        "products_count": int(db.execute(select(func.count(Product.id))).scalar() or 0),
        "orders_count": orders_count,
        "pending_orders": pending,
        "delivered_orders": delivered,
        "categories_count": count_categories(db),
        "collections_count": int(db.execute(select(func.count(Collection.id))).scalar() or 0),
        "soldes_count": _flagged_active_count(db, "soldes"),
        "offers_count": _flagged_active_count(db, "weekly_offers"),
        "recent_orders": list_orders(db, limit=settings.RECENT_ORDERS_LIMIT),
        "low_stock": low_stock_products(db),
    }


__all__ = ["dashboard_summary", "low_stock_products"]
