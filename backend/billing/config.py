from decimal import Decimal
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./billing_ledger.db"
    sql_echo: bool = False
    auto_create_tables: bool = False  # In production, use alembic migrations

    # Logging
    log_level: str = "INFO"

    # Ledger defaults (overridable at runtime through the settings store)
    default_tax_rate: Decimal = Decimal("15")
    currency_symbol: str = "R"
    invoice_prefix: str = "INV"
    quotation_prefix: str = "QT"  # Fixed, not exposed through the settings store

    # Dashboard
    revenue_trend_months: int = 6

    # CORS Configuration
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in .env file


settings = Settings()
