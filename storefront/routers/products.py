from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.dependencies import get_db
from storefront.schemas.product import (
    PriceInfoRead,
    ProductCreate,
    ProductDeleteResult,
    ProductRead,
    ProductUpdate,
    ProductWithPrice,
    build_product_with_price,
)
from storefront.services import catalog_service
from storefront.services.pricing_service import get_price_info

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[ProductWithPrice])
def list_products(db: Session = Depends(get_db)):
    return [
        build_product_with_price(product, price)
        for product, price in catalog_service.list_products_with_prices(db)
    ]


@router.post("", response_model=ProductRead, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    return catalog_service.create_product(db, payload)


@router.get("/{product_id}", response_model=ProductWithPrice)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product, price = catalog_service.get_product_with_price(db, product_id)
    return build_product_with_price(product, price)


@router.get("/{product_id}/price", response_model=PriceInfoRead)
def get_product_price(product_id: int, db: Session = Depends(get_db)):
    return PriceInfoRead.model_validate(get_price_info(db, product_id))


@router.put("/{product_id}", response_model=ProductRead)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    return catalog_service.update_product(db, product_id, payload)


@router.delete("/{product_id}", response_model=ProductDeleteResult)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_product(db, product_id)
    return ProductDeleteResult()


__all__ = ["router"]
