from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.errors import require_positive_id
from storefront.dependencies import get_db, get_likes_store
from storefront.models.product import Product
from storefront.schemas.likes import LikedIds, LikeToggleResult
from storefront.schemas.product import ProductWithPrice, build_product_with_price
from storefront.services.catalog_service import with_prices
from storefront.services.likes_service import LikesStore

router = APIRouter(prefix="/likes", tags=["Likes"])


@router.get("", response_model=LikedIds)
def liked_ids(store: LikesStore = Depends(get_likes_store)):
    return LikedIds(liked_ids=store.get())


@router.post("/{product_id}/toggle", response_model=LikeToggleResult)
def toggle_like(product_id: int, store: LikesStore = Depends(get_likes_store)):
    product_id = require_positive_id(product_id, "product_id")
    return LikeToggleResult(product_id=product_id, liked=store.toggle(product_id))


@router.get("/products", response_model=List[ProductWithPrice])
def liked_products(
    db: Session = Depends(get_db),
    store: LikesStore = Depends(get_likes_store),
):
    ids = store.get()
    if not ids:
        return []
    # Liked ids of deleted products are skipped.
    products = db.execute(
        select(Product).where(Product.id.in_(ids)).order_by(Product.created_at.desc(), Product.id.desc())
    ).scalars().all()
    return [build_product_with_price(product, price) for product, price in with_prices(db, products)]


__all__ = ["router"]
