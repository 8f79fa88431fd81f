from billing.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from billing.schemas.payment import PaymentCreate, PaymentResponse
from billing.schemas.document import (
    LineItemInput,
    LineItemResponse,
    DocumentCreate,
    StatusChange,
    FinancialEdit,
    MetadataEdit,
    DocumentUpdate,
    DocumentListResponse,
    DocumentResponse,
)
from billing.schemas.dashboard import DashboardStats, MonthlyRevenue
from billing.schemas.settings import SettingsUpdate, SettingsResponse

__all__ = [
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "PaymentCreate",
    "PaymentResponse",
    "LineItemInput",
    "LineItemResponse",
    "DocumentCreate",
    "StatusChange",
    "FinancialEdit",
    "MetadataEdit",
    "DocumentUpdate",
    "DocumentListResponse",
    "DocumentResponse",
    "DashboardStats",
    "MonthlyRevenue",
    "SettingsUpdate",
    "SettingsResponse",
]
