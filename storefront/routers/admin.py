from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.dependencies import get_db
from storefront.schemas.dashboard import DashboardSummary
from storefront.services.dashboard_service import dashboard_summary

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/dashboard", response_model=DashboardSummary)
def admin_dashboard(db: Session = Depends(get_db)):
    return dashboard_summary(db)


__all__ = ["router"]
