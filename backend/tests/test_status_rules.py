from billing.models.enums import DocumentStatus, DocumentType
from billing.utils.status_rules import (
    check_deletion_allowed,
    check_financial_edit,
    check_payment_allowed,
    check_status_transition,
    status_after_payment,
)


def test_same_status_always_allowed():
    for status in DocumentStatus:
        assert check_status_transition(DocumentType.INVOICE, status, status) == (True, None)


def test_paid_only_to_void():
    allowed, reason = check_status_transition(DocumentType.INVOICE, DocumentStatus.PAID, DocumentStatus.SENT)
    assert not allowed
    assert "void" in reason
    assert check_status_transition(DocumentType.INVOICE, DocumentStatus.PAID, DocumentStatus.VOID)[0]


def test_invoiced_requires_approved():
    for current in (DocumentStatus.DRAFT, DocumentStatus.SENT, DocumentStatus.REJECTED):
        assert not check_status_transition(DocumentType.QUOTATION, current, DocumentStatus.INVOICED)[0]
    assert check_status_transition(DocumentType.QUOTATION, DocumentStatus.APPROVED, DocumentStatus.INVOICED)[0]


def test_status_must_exist_for_type():
    assert not check_status_transition(DocumentType.INVOICE, DocumentStatus.SENT, DocumentStatus.APPROVED)[0]
    assert not check_status_transition(DocumentType.QUOTATION, DocumentStatus.SENT, DocumentStatus.PAID)[0]


def test_edit_lock_only_open_in_draft():
    assert check_financial_edit(DocumentStatus.DRAFT) == (True, None)
    for status in DocumentStatus:
        if status != DocumentStatus.DRAFT:
            assert not check_financial_edit(status)[0]


def test_payment_preconditions():
    assert not check_payment_allowed(DocumentType.QUOTATION, DocumentStatus.APPROVED)[0]
    assert not check_payment_allowed(DocumentType.INVOICE, DocumentStatus.DRAFT)[0]
    assert not check_payment_allowed(DocumentType.INVOICE, DocumentStatus.VOID)[0]
    assert check_payment_allowed(DocumentType.INVOICE, DocumentStatus.SENT)[0]
    assert check_payment_allowed(DocumentType.INVOICE, DocumentStatus.OVERDUE)[0]


def test_deletion_only_for_draft_or_void():
    allowed = {s for s in DocumentStatus if check_deletion_allowed(s)[0]}
    assert allowed == {DocumentStatus.DRAFT, DocumentStatus.VOID}


def test_status_after_payment():
    assert status_after_payment(0) == DocumentStatus.PAID
    assert status_after_payment(-1) == DocumentStatus.PAID
    assert status_after_payment(1) == DocumentStatus.PARTIALLY_PAID
