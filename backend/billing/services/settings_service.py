"""
Settings Service - Runtime key/value configuration of the ledger.

Stored values override the defaults from ``billing.config``. The numbering
counters live in the same table but are written only by the numbering
service.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from billing.config import settings
from billing.database import transaction
from billing.models.setting import Setting
from billing.schemas.settings import SettingsUpdate
from billing.utils.money import to_decimal

logger = logging.getLogger(__name__)

NEXT_INVOICE_NUMBER_KEY = "next_invoice_number"
NEXT_QUOTE_NUMBER_KEY = "next_quote_number"


class SettingsService:
    """Service for reading and writing ledger settings"""

    def defaults(self) -> Dict[str, Any]:
        return {
            "tax_rate": str(settings.default_tax_rate),
            "currency_symbol": settings.currency_symbol,
            "invoice_prefix": settings.invoice_prefix,
            NEXT_INVOICE_NUMBER_KEY: 1,
            NEXT_QUOTE_NUMBER_KEY: 1,
            "primary_color": "#0ea5e9",
            "font_family": "Inter",
            "background_opacity": 0.1,
        }

    def get_all(self, db: Session) -> Dict[str, Any]:
        values = self.defaults()
        for row in db.query(Setting).all():
            values[row.key] = row.value
        values["quotation_prefix"] = settings.quotation_prefix
        return values

    def get_value(self, key: str, db: Session, default: Optional[Any] = None) -> Any:
        row = db.get(Setting, key)
        if row is not None:
            return row.value
        return self.defaults().get(key, default)

    def update(self, updates: SettingsUpdate, db: Session) -> Dict[str, Any]:
        """
        Write the fields present in ``updates``.

        A field sent as null removes the stored value so the default applies
        again.
        """
        changes = updates.model_dump(exclude_unset=True, mode="json")

        with transaction(db):
            for key, value in changes.items():
                row = db.get(Setting, key)
                if value is None:
                    if row is not None:
                        db.delete(row)
                elif row is None:
                    db.add(Setting(key=key, value=value))
                else:
                    row.value = value

        logger.info(f"Updated settings: {sorted(changes)}")
        return self.get_all(db)

    def default_tax_rate(self, db: Session) -> Decimal:
        return to_decimal(self.get_value("tax_rate", db))

    def invoice_prefix(self, db: Session) -> str:
        return self.get_value("invoice_prefix", db)


# Singleton instance
settings_service = SettingsService()
