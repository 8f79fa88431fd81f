"""
Numbering Service - Issues human-readable document numbers.

One counter per document type (INV-0001, QT-0001, ...). Numbers are issued
inside the caller's transaction, so a rolled-back creation does not consume
one, and under a process-wide lock so two creations never read the same
counter value.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy.orm import Session

from billing.config import settings
from billing.models.enums import DocumentType
from billing.models.setting import Setting
from billing.services.settings_service import (
    NEXT_INVOICE_NUMBER_KEY,
    NEXT_QUOTE_NUMBER_KEY,
    settings_service,
)

logger = logging.getLogger(__name__)

COUNTER_KEYS = {
    DocumentType.INVOICE: NEXT_INVOICE_NUMBER_KEY,
    DocumentType.QUOTATION: NEXT_QUOTE_NUMBER_KEY,
}

_numbering_lock = threading.Lock()


def format_document_number(prefix: str, sequence: int) -> str:
    return f"{prefix}-{sequence:04d}"


class NumberingService:
    """Service owning the per-type document number counters"""

    @contextmanager
    def serialized(self) -> Iterator[None]:
        """
        Hold the numbering lock. Wrap the whole create transaction, commit
        included, so the counter read and the document insert land together.
        """
        with _numbering_lock:
            yield

    def prefix_for(self, document_type: DocumentType, db: Session) -> str:
        if document_type == DocumentType.QUOTATION:
            return settings.quotation_prefix
        return settings_service.invoice_prefix(db)

    def next_number(self, document_type: DocumentType, db: Session) -> str:
        """
        Issue the next number for ``document_type`` and advance its counter.

        Must run inside the transaction that inserts the document, while
        ``serialized()`` is held.
        """
        key = COUNTER_KEYS[document_type]
        counter = db.query(Setting).filter(Setting.key == key).with_for_update().first()
        sequence = int(counter.value) if counter is not None else 1

        if counter is None:
            db.add(Setting(key=key, value=sequence + 1))
        else:
            counter.value = sequence + 1
        db.flush()

        number = format_document_number(self.prefix_for(document_type, db), sequence)
        logger.debug(f"Issued document number {number}")
        return number


# Singleton instance
numbering_service = NumberingService()
