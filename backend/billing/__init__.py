"""Billing ledger: clients, invoices, quotations, line items and payments."""

__version__ = "1.0.0"
