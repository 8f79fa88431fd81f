from billing.models.enums import DocumentType, DocumentStatus
from billing.models.client import Client
from billing.models.document import Document
from billing.models.line_item import LineItem
from billing.models.payment import Payment
from billing.models.setting import Setting

__all__ = ["DocumentType", "DocumentStatus", "Client", "Document", "LineItem", "Payment", "Setting"]
