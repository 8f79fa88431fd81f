"""
Document lifecycle rules.

Each check returns an ``(allowed, reason)`` tuple; the document service
turns a refusal into the matching ledger error.
"""
from typing import Optional, Tuple

from billing.models.enums import DocumentStatus, DocumentType

STATUSES_BY_TYPE = {
    DocumentType.INVOICE: frozenset({
        DocumentStatus.DRAFT,
        DocumentStatus.SENT,
        DocumentStatus.PARTIALLY_PAID,
        DocumentStatus.PAID,
        DocumentStatus.OVERDUE,
        DocumentStatus.VOID,
    }),
    DocumentType.QUOTATION: frozenset({
        DocumentStatus.DRAFT,
        DocumentStatus.SENT,
        DocumentStatus.APPROVED,
        DocumentStatus.REJECTED,
        DocumentStatus.INVOICED,
        DocumentStatus.VOID,
    }),
}

EDITABLE_STATUSES = frozenset({DocumentStatus.DRAFT})
DELETABLE_STATUSES = frozenset({DocumentStatus.DRAFT, DocumentStatus.VOID})

RuleResult = Tuple[bool, Optional[str]]


def check_status_transition(
    document_type: DocumentType,
    current: DocumentStatus,
    requested: DocumentStatus,
) -> RuleResult:
    """
    Validate a status change.

    Rules:
    - requesting the current status is always accepted (no-op)
    - the requested status must exist for the document type
    - a paid document may only move to void
    - a quotation may only become invoiced from approved
    """
    if current == requested:
        return True, None

    if requested not in STATUSES_BY_TYPE[document_type]:
        return False, f"'{requested.value}' is not a valid status for a {document_type.value}"

    if current == DocumentStatus.PAID and requested != DocumentStatus.VOID:
        return False, "paid documents can only be voided"

    if (
        document_type == DocumentType.QUOTATION
        and requested == DocumentStatus.INVOICED
        and current != DocumentStatus.APPROVED
    ):
        return False, "quotation must be approved before it is invoiced"

    return True, None


def check_financial_edit(current: DocumentStatus) -> RuleResult:
    """Line items and tax rate are frozen once a document leaves draft."""
    if current in EDITABLE_STATUSES:
        return True, None
    return False, f"financial fields are locked in status '{current.value}'"


def check_payment_allowed(document_type: DocumentType, current: DocumentStatus) -> RuleResult:
    if document_type == DocumentType.QUOTATION:
        return False, "Cannot add payment to a quotation"
    if current == DocumentStatus.DRAFT:
        return False, "Cannot add payment to a draft invoice. Send it first."
    if current == DocumentStatus.VOID:
        return False, "Cannot add payment to a void invoice"
    return True, None


def check_deletion_allowed(current: DocumentStatus) -> RuleResult:
    if current in DELETABLE_STATUSES:
        return True, None
    return False, "only draft or void documents can be deleted, void it instead"


def status_after_payment(balance_remaining_minor_units: int) -> DocumentStatus:
    """Status implied by the unclamped balance left after a payment."""
    if balance_remaining_minor_units <= 0:
        return DocumentStatus.PAID
    return DocumentStatus.PARTIALLY_PAID
