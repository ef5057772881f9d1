import logging

from sqlalchemy import Boolean, DateTime, bindparam, func, select, text

from storefront.core.dates import as_utc, utc_now
from storefront.core.errors import NotFoundError, ValidationError, require_positive_id
from storefront.core.pricing import discount_from_fields
from storefront.models.product import Product
from storefront.models.solde import Solde
from storefront.models.weekly_offer import WeeklyOffer
from storefront.services.collection_service import load_products

logger = logging.getLogger(__name__)


def _clean_optional(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _validate_window(start_date, end_date):
    start_date = as_utc(start_date)
    end_date = as_utc(end_date)
    if start_date is None or end_date is None:
        raise ValidationError("start_date and end_date are required.", fields=["start_date", "end_date"])
    if start_date > end_date:
        raise ValidationError("start_date must not be after end_date.", fields=["start_date", "end_date"])
    return start_date, end_date


def _validate_discount(discount_percent, discount_fixed):
    if (discount_percent is None) == (discount_fixed is None):
        raise ValidationError(
            "Exactly one of discount_percent or discount_fixed is required.",
            fields=["discount_percent", "discount_fixed"],
        )
    if discount_percent is not None and not 0 < discount_percent <= 100:
        raise ValidationError("discount_percent must be in (0, 100].", fields=["discount_percent"])
    if discount_fixed is not None and discount_fixed <= 0:
        raise ValidationError("discount_fixed must be positive.", fields=["discount_fixed"])
    return discount_from_fields(discount_percent, discount_fixed)


# ==============================
# Soldes
# ==============================


def get_solde(db, solde_id):
    solde_id = require_positive_id(solde_id, "solde_id")
    solde = db.get(Solde, solde_id)
    if solde is None:
        raise NotFoundError("Solde", solde_id)
    return solde


def _apply_solde_fields(solde, payload):
    name = str(payload.name or "").strip()
    if not name:
        raise ValidationError("Solde name is required.", fields=["name"])
    _validate_discount(payload.discount_percent, payload.discount_fixed)
    start_date, end_date = _validate_window(payload.start_date, payload.end_date)

    solde.name = name
    solde.description = _clean_optional(payload.description)
    solde.discount_percent = payload.discount_percent
    solde.discount_fixed = payload.discount_fixed
    solde.start_date = start_date
    solde.end_date = end_date
    solde.is_active = bool(payload.is_active)


def create_solde(db, payload):
    solde = Solde()
    _apply_solde_fields(solde, payload)
    solde.products = load_products(db, payload.product_ids)
    db.add(solde)
    db.commit()
    db.refresh(solde)
    logger.info("Created solde %s covering %d products.", solde.id, len(solde.products))
    return solde


def update_solde(db, solde_id, payload):
    solde = get_solde(db, solde_id)
    _apply_solde_fields(solde, payload)
    if payload.product_ids is not None:
        solde.products = load_products(db, payload.product_ids)
    db.commit()
    db.refresh(solde)
    return solde


def set_solde_products(db, solde_id, product_ids):
    solde = get_solde(db, solde_id)
    solde.products = load_products(db, product_ids)
    db.commit()
    db.refresh(solde)
    return solde


def delete_solde(db, solde_id):
    solde = get_solde(db, solde_id)
    db.delete(solde)
    db.commit()
    logger.info("Deleted solde %s.", solde.id)


def list_active_soldes(db, now=None):
    moment = as_utc(now) if now is not None else utc_now()
    stmt = (
        select(Solde)
        .where(
            Solde.is_active.is_(True),
            Solde.start_date <= moment,
            Solde.end_date >= moment,
        )
        .order_by(Solde.created_at.desc(), Solde.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


# ==============================
# Weekly offers
# ==============================


def get_weekly_offer(db, offer_id):
    offer_id = require_positive_id(offer_id, "offer_id")
    offer = db.get(WeeklyOffer, offer_id)
    if offer is None:
        raise NotFoundError("Weekly offer", offer_id)
    return offer


def _apply_offer_fields(db, offer, payload):
    product_id = require_positive_id(payload.product_id, "product_id")
    if db.get(Product, product_id) is None:
        raise NotFoundError("Product", product_id)
    description = str(payload.offer_description or "").strip()
    if not description:
        raise ValidationError("offer_description is required.", fields=["offer_description"])
    if payload.offer_price is None or payload.offer_price < 0:
        raise ValidationError("offer_price must be non-negative.", fields=["offer_price"])
    start_date, end_date = _validate_window(payload.start_date, payload.end_date)

    offer.product_id = product_id
    offer.offer_description = description
    offer.offer_price = payload.offer_price
    offer.start_date = start_date
    offer.end_date = end_date
    offer.is_active = True if payload.is_active is None else bool(payload.is_active)


def create_weekly_offer(db, payload):
    offer = WeeklyOffer()
    _apply_offer_fields(db, offer, payload)
    db.add(offer)
    db.commit()
    db.refresh(offer)
    logger.info("Created weekly offer %s for product %s.", offer.id, offer.product_id)
    return offer


def update_weekly_offer(db, offer_id, payload):
    offer = get_weekly_offer(db, offer_id)
    _apply_offer_fields(db, offer, payload)
    db.commit()
    db.refresh(offer)
    return offer


def delete_weekly_offer(db, offer_id):
    offer = get_weekly_offer(db, offer_id)
    db.delete(offer)
    db.commit()
    logger.info("Deleted weekly offer %s.", offer.id)


def list_active_weekly_offers(db, now=None):
    """Active offers joined with their product, soonest ending first."""
    moment = as_utc(now) if now is not None else utc_now()
    # noinspection SqlNoDataSourceInspection
    sql = text(
        """
        SELECT
            wo.id,
            wo.product_id,
            wo.offer_description,
            wo.offer_price,
            wo.start_date,
            wo.end_date,
            wo.is_active,
            wo.created_at,
            p.name,
            p.description,
            p.sell_price,
            p.image_url,
            p.category,
            p.stock
        FROM weekly_offers wo
        JOIN products p ON p.id = wo.product_id
        WHERE wo.is_active = :active
            AND :now BETWEEN wo.start_date AND wo.end_date
        ORDER BY wo.end_date ASC, wo.id ASC
        """
    ).bindparams(
        bindparam("now", type_=DateTime(timezone=True)),
        bindparam("active", type_=Boolean()),
    ).columns(
        start_date=DateTime(timezone=True),
        end_date=DateTime(timezone=True),
        created_at=DateTime(timezone=True),
        is_active=Boolean(),
    )
    rows = db.execute(sql, {"now": moment, "active": True}).mappings().all()
    return [dict(row) for row in rows]


def count_active_promotions(db, now=None):
    moment = as_utc(now) if now is not None else utc_now()
    soldes = db.execute(
        select(func.count(Solde.id)).where(
            Solde.is_active.is_(True),
            Solde.start_date <= moment,
            Solde.end_date >= moment,
        )
    ).scalar()
    offers = db.execute(
        select(func.count(WeeklyOffer.id)).where(
            WeeklyOffer.is_active.is_(True),
            WeeklyOffer.start_date <= moment,
            WeeklyOffer.end_date >= moment,
        )
    ).scalar()
    return {"soldes": int(soldes or 0), "offers": int(offers or 0)}


__all__ = [
    "count_active_promotions",
    "create_solde",
    "create_weekly_offer",
    "delete_solde",
    "delete_weekly_offer",
    "get_solde",
    "get_weekly_offer",
    "list_active_soldes",
    "list_active_weekly_offers",
    "set_solde_products",
    "update_solde",
    "update_weekly_offer",
]
