"""
Ledger error taxonomy.

Services raise these; routers never catch them. The HTTP layer maps each
``code`` to a status in ``billing.main``.
"""
from typing import Optional


class LedgerError(Exception):
    """Base class for every domain failure raised by the ledger."""

    code = "ledger_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LedgerError):
    code = "not_found"

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(LedgerError):
    code = "invalid_transition"

    def __init__(self, current_status: str, requested_status: str, reason: Optional[str] = None):
        message = f"Cannot change status from '{current_status}' to '{requested_status}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.current_status = current_status
        self.requested_status = requested_status


class DocumentFinalizedError(LedgerError):
    code = "document_finalized"

    def __init__(self, current_status: str, action: str = "edit"):
        super().__init__(f"Cannot {action} finalized document. Current status: {current_status}")
        self.current_status = current_status


class InvalidPaymentError(LedgerError):
    code = "invalid_payment"


class ReferentialIntegrityError(LedgerError):
    code = "referential_integrity"


class StorageError(LedgerError):
    """Transient or unexpected failure of the underlying store."""

    code = "storage_error"


class ConcurrentUpdateError(StorageError):
    code = "concurrent_update"
