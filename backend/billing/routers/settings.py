from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from billing.database import get_db
from billing.schemas.settings import SettingsResponse, SettingsUpdate
from billing.services.settings_service import settings_service

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
def get_settings(db: Session = Depends(get_db)):
    """Current settings, stored values merged over defaults"""
    return settings_service.get_all(db)


@router.put("", response_model=SettingsResponse)
def update_settings(updates: SettingsUpdate, db: Session = Depends(get_db)):
    """Write the settings present in the payload; null resets a key to its default"""
    return settings_service.update(updates, db)
