"""
Document Service - Lifecycle engine for invoices and quotations.

Every public operation loads current state, checks it against the rules in
``billing.utils.status_rules``, recomputes the derived amounts and commits in
a single transaction. A refused operation raises a ledger error and leaves
nothing written.
"""
import logging
from datetime import date
from typing import List
from sqlalchemy.orm import Session

from billing.database import transaction
from billing.exceptions import (
    DocumentFinalizedError,
    InvalidPaymentError,
    InvalidTransitionError,
    NotFoundError,
)
from billing.models.client import Client
from billing.models.document import Document
from billing.models.enums import DocumentStatus, DocumentType
from billing.models.line_item import LineItem
from billing.models.payment import Payment
from billing.schemas.document import (
    DocumentCreate,
    DocumentUpdate,
    FinancialEdit,
    LineItemInput,
    MetadataEdit,
    StatusChange,
)
from billing.schemas.payment import PaymentCreate
from billing.services.numbering_service import numbering_service
from billing.services.query_service import query_service
from billing.services.settings_service import settings_service
from billing.utils.money import Money
from billing.utils.status_rules import (
    check_deletion_allowed,
    check_financial_edit,
    check_payment_allowed,
    check_status_transition,
    status_after_payment,
)
from billing.utils.totals import (
    DocumentTotals,
    calculate_line_total,
    calculate_totals,
    normalize_quantity,
    normalize_tax_rate,
)

logger = logging.getLogger(__name__)

DEFAULT_NAMES = {
    DocumentType.INVOICE: "New Invoice",
    DocumentType.QUOTATION: "New Quote",
}


class DocumentService:
    """Service for creating, editing, paying and deleting documents"""

    def create_document(self, data: DocumentCreate, db: Session) -> Document:
        """
        Create a draft document with its line items.

        The number is issued under the numbering lock, in the same transaction
        as the insert.

        Raises:
            NotFoundError: the client does not exist
        """
        with numbering_service.serialized(), transaction(db):
            client = db.get(Client, data.client_id)
            if client is None:
                raise NotFoundError("Client", data.client_id)

            tax_rate = normalize_tax_rate(
                data.tax_rate if data.tax_rate is not None else settings_service.default_tax_rate(db)
            )
            line_items = self._build_line_items(data.items)

            document = Document(
                client_id=client.id,
                number=numbering_service.next_number(data.type, db),
                name=data.name or DEFAULT_NAMES[data.type],
                type=data.type,
                status=DocumentStatus.DRAFT,
                issue_date=data.issue_date or date.today(),
                due_date=data.due_date,
                notes=data.notes,
                tax_rate=tax_rate,
                design_config=data.design_config or {},
                amount_paid=Money.zero(),
                line_items=line_items,
            )
            self._apply_totals(document, calculate_totals(line_items, tax_rate))
            db.add(document)

        logger.info(
            f"Created {document.type.value} {document.number} (ID: {document.id}) "
            f"for client {document.client_id}, grand total {document.grand_total}"
        )
        return query_service.get_document(document.id, db)

    def update_document(self, document_id: int, update: DocumentUpdate, db: Session) -> Document:
        """
        Apply a set of update commands atomically.

        All checks run against the status the document had before this
        update: a draft may be given new items and sent in the same request.

        Raises:
            NotFoundError: the document does not exist
            InvalidTransitionError: the status change breaks the state machine
            DocumentFinalizedError: items or tax rate edited outside draft
        """
        status_change = update.command(StatusChange)
        financial_edit = update.command(FinancialEdit)
        metadata_edit = update.command(MetadataEdit)

        with transaction(db):
            document = self._load_for_update(document_id, db)
            current_status = document.status

            if status_change is not None:
                self._check_transition(document, status_change.status)

            if financial_edit is not None:
                allowed, _ = check_financial_edit(current_status)
                if not allowed:
                    logger.warning(f"Refused financial edit of {document.number} in status {current_status.value}")
                    raise DocumentFinalizedError(current_status.value)
                self._apply_financial_edit(document, financial_edit)

            if metadata_edit is not None:
                for field, value in metadata_edit.changes().items():
                    setattr(document, field, value)

            if status_change is not None and status_change.status != current_status:
                document.status = status_change.status
                logger.info(f"{document.number}: status {current_status.value} -> {status_change.status.value}")

        return query_service.get_document(document_id, db)

    def change_status(self, document_id: int, status: DocumentStatus, db: Session) -> Document:
        return self.update_document(document_id, DocumentUpdate.of(StatusChange(status=status)), db)

    def add_payment(self, document_id: int, data: PaymentCreate, db: Session) -> Document:
        """
        Record a payment and settle the document's balance.

        Overpayment is accepted: the payment is stored verbatim, the balance
        clamps at zero and the surplus shows up as ``overpaid_amount``.

        Raises:
            NotFoundError: the document does not exist
            InvalidPaymentError: quotation, draft or void document, or an
                amount that rounds to zero
        """
        amount = Money.from_decimal(data.amount)

        with transaction(db):
            document = self._load_for_update(document_id, db)

            allowed, reason = check_payment_allowed(document.type, document.status)
            if not allowed:
                logger.warning(f"Refused payment on {document.number}: {reason}")
                raise InvalidPaymentError(reason)
            if amount <= Money.zero():
                raise InvalidPaymentError(f"Payment amount must be at least 0.01, got {data.amount}")

            document.payments.append(Payment(
                amount=amount,
                payment_date=data.payment_date,
                method=data.method,
                reference=data.reference,
                notes=data.notes,
            ))

            document.amount_paid = document.amount_paid + amount
            remaining = document.grand_total - document.amount_paid
            document.balance_due = remaining.clamp_non_negative()
            document.status = status_after_payment(remaining.minor_units)

            if remaining < Money.zero():
                logger.warning(f"{document.number} overpaid by {-remaining}")

        logger.info(
            f"Recorded payment of {amount} on {document.number}; "
            f"paid {document.amount_paid}, balance {document.balance_due}, status {document.status.value}"
        )
        return query_service.get_document(document_id, db)

    def delete_document(self, document_id: int, db: Session) -> None:
        """
        Delete a draft or void document together with its items and payments.

        Raises:
            NotFoundError: the document does not exist
            DocumentFinalizedError: the document is in any other status
        """
        with transaction(db):
            document = self._load_for_update(document_id, db)

            allowed, reason = check_deletion_allowed(document.status)
            if not allowed:
                logger.warning(f"Refused to delete {document.number}: {reason}")
                raise DocumentFinalizedError(document.status.value, action="delete")

            number = document.number
            db.delete(document)

        logger.info(f"Deleted document {number} (ID: {document_id})")

    # --- Helpers ---

    def _load_for_update(self, document_id: int, db: Session) -> Document:
        document = db.query(Document).filter(Document.id == document_id).with_for_update().first()
        if document is None:
            raise NotFoundError("Document", document_id)
        return document

    def _check_transition(self, document: Document, requested: DocumentStatus) -> None:
        allowed, reason = check_status_transition(document.type, document.status, requested)
        if not allowed:
            logger.warning(f"Refused status change of {document.number}: {reason}")
            raise InvalidTransitionError(document.status.value, requested.value, reason)

    def _apply_financial_edit(self, document: Document, edit: FinancialEdit) -> None:
        if edit.tax_rate is not None:
            document.tax_rate = normalize_tax_rate(edit.tax_rate)
        if edit.items is not None:
            # delete-orphan cascade removes the old rows on flush
            document.line_items = self._build_line_items(edit.items)

        self._apply_totals(document, calculate_totals(document.line_items, document.tax_rate))

    def _apply_totals(self, document: Document, totals: DocumentTotals) -> None:
        document.subtotal = totals.subtotal
        document.tax_total = totals.tax_total
        document.grand_total = totals.grand_total
        document.balance_due = (totals.grand_total - document.amount_paid).clamp_non_negative()

    def _build_line_items(self, items: List[LineItemInput]) -> List[LineItem]:
        line_items = []
        for position, item in enumerate(items):
            unit_price = Money.from_decimal(item.unit_price)
            quantity = normalize_quantity(item.quantity)
            line_items.append(LineItem(
                position=position,
                description=item.description,
                quantity=quantity,
                unit_price=unit_price,
                line_total=calculate_line_total(unit_price, quantity),
            ))
        return line_items


# Singleton instance
document_service = DocumentService()
