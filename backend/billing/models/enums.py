from enum import Enum


class DocumentType(str, Enum):
    """Discriminator shared by invoices and quotations"""
    INVOICE = "invoice"
    QUOTATION = "quotation"


class DocumentStatus(str, Enum):
    """Lifecycle status of a document"""
    DRAFT = "draft"
    SENT = "sent"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    OVERDUE = "overdue"
    VOID = "void"
    # Quotation only
    APPROVED = "approved"
    REJECTED = "rejected"
    INVOICED = "invoiced"
