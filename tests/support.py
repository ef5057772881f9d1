from datetime import timedelta

from sqlalchemy.orm import sessionmaker

from storefront.core.dates import utc_now
from storefront.database import Base, build_engine
from storefront.models import Order, Product, Solde, WeeklyOffer, import_all_models


def make_session_factory():
    import_all_models()
    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def add_product(db, **overrides):
    values = dict(
        name="Robe en wax",
        buy_price=60,
        sell_price=100,
        category="robes",
        stock=5,
    )
    values.update(overrides)
    product = Product(**values)
    db.add(product)
    db.commit()
    return product


def add_solde(db, products, now=None, **overrides):
    now = now or utc_now()
    values = dict(
        name="Soldes",
        discount_percent=20,
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=1),
        is_active=True,
    )
    values.update(overrides)
    solde = Solde(**values)
    solde.products = list(products)
    db.add(solde)
    db.commit()
    return solde


def add_weekly_offer(db, product, now=None, **overrides):
    now = now or utc_now()
    values = dict(
        product_id=product.id,
        offer_description="Offre de la semaine",
        offer_price=65,
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=1),
        is_active=True,
    )
    values.update(overrides)
    offer = WeeklyOffer(**values)
    db.add(offer)
    db.commit()
    return offer


def add_order(db, product, **overrides):
    values = dict(
        product_id=product.id,
        customer_name="Awa",
        customer_phone="+221 77 000 00 00",
        customer_location="Dakar",
    )
    values.update(overrides)
    order = Order(**values)
    db.add(order)
    db.commit()
    return order
