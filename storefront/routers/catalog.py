from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.dependencies import get_db
from storefront.schemas.product import (
    CatalogPriceRead,
    CategoryProducts,
    CategorySummary,
    PriceInfoRead,
    build_product_with_price,
)
from storefront.schemas.promotion import PromotionCounts
from storefront.services import catalog_service
from storefront.services.pricing_service import get_all_prices_for_catalog
from storefront.services.promotion_service import count_active_promotions

router = APIRouter(tags=["Catalog"])


@router.get("/catalog/prices", response_model=List[CatalogPriceRead])
def catalog_prices(db: Session = Depends(get_db)):
    return [
        CatalogPriceRead(product_id=product_id, price=PriceInfoRead.model_validate(price))
        for product_id, price in get_all_prices_for_catalog(db)
    ]


@router.get("/categories", response_model=List[CategorySummary])
def list_categories(db: Session = Depends(get_db)):
    return catalog_service.list_categories(db)


@router.get("/categories/{name}", response_model=CategoryProducts)
def get_category(name: str, db: Session = Depends(get_db)):
    products = catalog_service.list_products_by_category(db, name)
    return CategoryProducts(
        category=name,
        products=[
            build_product_with_price(product, price)
            for product, price in catalog_service.with_prices(db, products)
        ],
    )


@router.get("/promotions/counts", response_model=PromotionCounts)
def promotion_counts(db: Session = Depends(get_db)):
    return count_active_promotions(db)


__all__ = ["router"]
