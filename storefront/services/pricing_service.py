import logging

from sqlalchemy import Boolean, DateTime, bindparam, select, text

from storefront.config import get_settings
from storefront.core.dates import as_utc, utc_now
from storefront.core.errors import NotFoundError, require_positive_id
from storefront.core.pricing import PriceInfo, base_price_info, resolve_price
from storefront.models.product import Product
from storefront.models.solde import Solde, soldes_products
from storefront.models.weekly_offer import WeeklyOffer

logger = logging.getLogger(__name__)

# One row per (product, active offer, active solde); the first row of each
# product carries the most recently created promotion of each kind.
# noinspection SqlNoDataSourceInspection
_CATALOG_PRICES_SQL = """
    WITH active_offers AS (
        SELECT
            wo.id,
            wo.product_id,
            wo.offer_price,
            wo.offer_description,
            wo.created_at
        FROM weekly_offers wo
        WHERE wo.is_active = :active
            AND :now BETWEEN wo.start_date AND wo.end_date
    ),
    active_soldes AS (
        SELECT
            s.id,
            sp.product_id,
            s.discount_percent,
            s.discount_fixed,
            s.created_at
        FROM soldes_products sp
        JOIN soldes s ON s.id = sp.solde_id
        WHERE s.is_active = :active
            AND :now BETWEEN s.start_date AND s.end_date
    )
    SELECT
        p.id AS product_id,
        p.sell_price,
        ao.id AS offer_id,
        ao.offer_price,
        ao.offer_description,
        aso.id AS solde_id,
        aso.discount_percent,
        aso.discount_fixed
    FROM products p
    LEFT JOIN active_offers ao ON ao.product_id = p.id
    LEFT JOIN active_soldes aso ON aso.product_id = p.id
    {where_clause}
    ORDER BY
        p.created_at DESC,
        p.id DESC,
        ao.created_at DESC,
        ao.id DESC,
        aso.created_at DESC,
        aso.id DESC
"""


def _catalog_prices_stmt(filter_ids: bool):
    where_clause = "WHERE p.id IN :product_ids" if filter_ids else ""
    stmt = text(_CATALOG_PRICES_SQL.format(where_clause=where_clause))
    params = [
        bindparam("now", type_=DateTime(timezone=True)),
        bindparam("active", type_=Boolean()),
    ]
    if filter_ids:
        params.append(bindparam("product_ids", expanding=True))
    return stmt.bindparams(*params)


def _price_places() -> int:
    return get_settings().PRICE_DECIMAL_PLACES


def find_active_weekly_offer(db, product_id, now):
    moment = as_utc(now)
    stmt = (
        select(WeeklyOffer)
        .where(
            WeeklyOffer.product_id == product_id,
            WeeklyOffer.is_active.is_(True),
            WeeklyOffer.start_date <= moment,
            WeeklyOffer.end_date >= moment,
        )
        .order_by(WeeklyOffer.created_at.desc(), WeeklyOffer.id.desc())
        .limit(1)
    )
    return db.execute(stmt).scalars().first()


def find_active_solde(db, product_id, now):
    moment = as_utc(now)
    stmt = (
        select(Solde)
        .join(soldes_products, soldes_products.c.solde_id == Solde.id)
        .where(
            soldes_products.c.product_id == product_id,
            Solde.is_active.is_(True),
            Solde.start_date <= moment,
            Solde.end_date >= moment,
        )
        .order_by(Solde.created_at.desc(), Solde.id.desc())
        .limit(1)
    )
    return db.execute(stmt).scalars().first()


def get_price_info(db, product_id, now=None) -> PriceInfo:
    product_id = require_positive_id(product_id, "product_id")
    now = as_utc(now) if now is not None else utc_now()

    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product", product_id)

    weekly_offer = find_active_weekly_offer(db, product_id, now)
    solde = None
    if weekly_offer is None:
        solde = find_active_solde(db, product_id, now)
    return resolve_price(product.sell_price, weekly_offer, solde, places=_price_places())


def _resolve_row(row, places):
    offer = None
    if row["offer_id"] is not None:
        offer = {
            "offer_price": row["offer_price"],
            "offer_description": row["offer_description"],
        }
    solde = None
    if row["solde_id"] is not None:
        solde = {
            "discount_percent": row["discount_percent"],
            "discount_fixed": row["discount_fixed"],
        }
    try:
        return resolve_price(row["sell_price"], offer, solde, places=places)
    except (ArithmeticError, TypeError, ValueError):
        logger.warning(
            "Price resolution failed for product %s; showing base price.",
            row["product_id"],
            exc_info=True,
        )
        return base_price_info(row["sell_price"])


def get_all_prices_for_catalog(db, now=None, product_ids=None) -> list[tuple[int, PriceInfo]]:
    """Resolve prices for the whole catalog (or a subset) in one query.

    Returns ``(product_id, PriceInfo)`` pairs, newest product first.
    """
    now = as_utc(now) if now is not None else utc_now()
    params = {"now": now, "active": True}
    if product_ids is not None:
        product_ids = sorted({int(value) for value in product_ids})
        if not product_ids:
            return []
        params["product_ids"] = product_ids

    stmt = _catalog_prices_stmt(product_ids is not None)
    rows = db.execute(stmt, params).mappings().all()

    places = _price_places()
    results = []
    seen = set()
    for row in rows:
        product_id = row["product_id"]
        if product_id in seen:
            continue
        seen.add(product_id)
        results.append((product_id, _resolve_row(row, places)))
    return results


def price_map(db, product_ids, now=None) -> dict[int, PriceInfo]:
    return dict(get_all_prices_for_catalog(db, now=now, product_ids=product_ids))


__all__ = [
    "find_active_solde",
    "find_active_weekly_offer",
    "get_all_prices_for_catalog",
    "get_price_info",
    "price_map",
]
