from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from billing.database import get_db
from billing.schemas.dashboard import DashboardStats
from billing.services.query_service import query_service

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    as_of: Optional[date] = Query(None, description="ISO date (YYYY-MM-DD); defaults to today"),
    db: Session = Depends(get_db)
):
    """Revenue, overdue and draft counts, and the monthly revenue trend"""
    return query_service.get_dashboard_stats(db, as_of=as_of)
