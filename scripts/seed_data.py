import argparse
import logging
from datetime import timedelta

from sqlalchemy import delete, select

from storefront.core.dates import utc_now
from storefront.core.logging import setup_logging
from storefront.database import Base, engine, session_scope
from storefront.models import (
    Collection,
    Order,
    Product,
    Solde,
    WeeklyOffer,
    import_all_models,
)

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample catalog data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    with session_scope() as db:
        if args.reset:
            db.execute(delete(Order))
            db.execute(delete(WeeklyOffer))
            db.execute(delete(Solde))
            db.execute(delete(Collection))
            db.execute(delete(Product))
            db.flush()
            logger.info("Existing catalog data cleared.")

        has_product = db.execute(select(Product.id).limit(1)).first()
        if has_product:
            logger.info("Seed skipped: products already exist.")
            return

        products = [
            Product(
                name="Robe en wax",
                description="Robe longue en tissu wax.",
                buy_price=9000,
                sell_price=15000,
                category="robes",
                stock=12,
            ),
            Product(
                name="Sac en cuir",
                description="Sac a main en cuir tanne.",
                buy_price=14000,
                sell_price=25000,
                category="accessoires",
                stock=4,
            ),
            Product(
                name="Sandales tressees",
                buy_price=4000,
                sell_price=8000,
                category="chaussures",
                stock=30,
            ),
        ]
        db.add_all(products)
        db.flush()

        now = utc_now()
        db.add(
            Collection(
                name="Nouveautes",
                description="Les derniers arrivages.",
                products=products[:2],
            )
        )
        db.add(
            Solde(
                name="Soldes d'ete",
                description="20% sur les robes.",
                discount_percent=20,
                start_date=now - timedelta(days=1),
                end_date=now + timedelta(days=14),
                is_active=True,
                products=[products[0]],
            )
        )
        db.add(
            WeeklyOffer(
                product_id=products[1].id,
                offer_description="Offre de la semaine",
                offer_price=19900,
                start_date=now - timedelta(hours=1),
                end_date=now + timedelta(days=7),
                is_active=True,
            )
        )
        logger.info("Seed data created.", extra={"products": len(products)})


if __name__ == "__main__":
    main()
