from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.dependencies import get_db
from storefront.schemas.collection import (
    CollectionCreate,
    CollectionDetail,
    CollectionProductsRequest,
    CollectionRead,
    CollectionUpdate,
)
from storefront.schemas.product import build_product_with_price
from storefront.services import catalog_service, collection_service

router = APIRouter(prefix="/collections", tags=["Collections"])


def _detail(db, collection):
    base = CollectionRead.model_validate(collection).model_dump()
    base["products"] = [
        build_product_with_price(product, price)
        for product, price in catalog_service.with_prices(db, collection.products)
    ]
    return CollectionDetail(**base)


@router.get("", response_model=List[CollectionRead])
def list_collections(db: Session = Depends(get_db)):
    return collection_service.list_collections(db)


@router.post("", response_model=CollectionDetail, status_code=201)
def create_collection(payload: CollectionCreate, db: Session = Depends(get_db)):
    return _detail(db, collection_service.create_collection(db, payload))


@router.get("/{collection_id}", response_model=CollectionDetail)
def get_collection(collection_id: int, db: Session = Depends(get_db)):
    return _detail(db, collection_service.get_collection(db, collection_id))


@router.put("/{collection_id}", response_model=CollectionRead)
def update_collection(collection_id: int, payload: CollectionUpdate, db: Session = Depends(get_db)):
    return collection_service.update_collection(db, collection_id, payload)


@router.delete("/{collection_id}")
def delete_collection(collection_id: int, db: Session = Depends(get_db)):
    collection_service.delete_collection(db, collection_id)
    return {"success": True, "message": "Collection deleted successfully"}


@router.post("/{collection_id}/products", response_model=CollectionDetail)
def add_collection_products(
    collection_id: int,
    payload: CollectionProductsRequest,
    db: Session = Depends(get_db),
):
    collection = collection_service.add_products_to_collection(db, collection_id, payload.product_ids)
    return _detail(db, collection)


@router.delete("/{collection_id}/products/{product_id}", response_model=CollectionDetail)
def remove_collection_product(collection_id: int, product_id: int, db: Session = Depends(get_db)):
    collection = collection_service.remove_product_from_collection(db, collection_id, product_id)
    return _detail(db, collection)


__all__ = ["router"]
