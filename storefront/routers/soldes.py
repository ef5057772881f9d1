from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.dependencies import get_db
from storefront.schemas.collection import CollectionProductsRequest
from storefront.schemas.promotion import SoldeCreate, SoldeUpdate, SoldeWithProducts
from storefront.services import promotion_service

router = APIRouter(prefix="/soldes", tags=["Soldes"])


@router.get("/active", response_model=List[SoldeWithProducts])
def list_active_soldes(db: Session = Depends(get_db)):
    return promotion_service.list_active_soldes(db)


@router.post("", response_model=SoldeWithProducts, status_code=201)
def create_solde(payload: SoldeCreate, db: Session = Depends(get_db)):
    return promotion_service.create_solde(db, payload)


@router.get("/{solde_id}", response_model=SoldeWithProducts)
def get_solde(solde_id: int, db: Session = Depends(get_db)):
    return promotion_service.get_solde(db, solde_id)


@router.put("/{solde_id}", response_model=SoldeWithProducts)
def update_solde(solde_id: int, payload: SoldeUpdate, db: Session = Depends(get_db)):
    return promotion_service.update_solde(db, solde_id, payload)


@router.put("/{solde_id}/products", response_model=SoldeWithProducts)
def set_solde_products(
    solde_id: int,
    payload: CollectionProductsRequest,
    db: Session = Depends(get_db),
):
    return promotion_service.set_solde_products(db, solde_id, payload.product_ids)


@router.delete("/{solde_id}")
def delete_solde(solde_id: int, db: Session = Depends(get_db)):
    promotion_service.delete_solde(db, solde_id)
    return {"success": True, "message": "Solde deleted successfully"}


__all__ = ["router"]
