from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.dependencies import get_db
from storefront.schemas.promotion import (
    ActiveWeeklyOffer,
    WeeklyOfferCreate,
    WeeklyOfferRead,
    WeeklyOfferUpdate,
    WeeklyOfferWithProduct,
)
from storefront.services import promotion_service

router = APIRouter(prefix="/weekly-offers", tags=["Weekly offers"])


@router.get("/active", response_model=List[ActiveWeeklyOffer])
def list_active_weekly_offers(db: Session = Depends(get_db)):
    return promotion_service.list_active_weekly_offers(db)


@router.post("", response_model=WeeklyOfferRead, status_code=201)
def create_weekly_offer(payload: WeeklyOfferCreate, db: Session = Depends(get_db)):
    return promotion_service.create_weekly_offer(db, payload)


@router.get("/{offer_id}", response_model=WeeklyOfferWithProduct)
def get_weekly_offer(offer_id: int, db: Session = Depends(get_db)):
    return promotion_service.get_weekly_offer(db, offer_id)


@router.put("/{offer_id}", response_model=WeeklyOfferRead)
def update_weekly_offer(offer_id: int, payload: WeeklyOfferUpdate, db: Session = Depends(get_db)):
    return promotion_service.update_weekly_offer(db, offer_id, payload)


@router.delete("/{offer_id}")
def delete_weekly_offer(offer_id: int, db: Session = Depends(get_db)):
    promotion_service.delete_weekly_offer(db, offer_id)
    return {"success": True, "message": "Weekly offer deleted successfully"}


__all__ = ["router"]
