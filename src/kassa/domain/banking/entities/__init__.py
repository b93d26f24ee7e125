"""Entities for banking domain."""

from kassa.domain.banking.entities.bank_account import DEFAULT_CURRENCY, BankAccount
from kassa.domain.banking.entities.bank_reconciliation import BankReconciliation
from kassa.domain.banking.entities.bank_statement_import import BankStatementImport
from kassa.domain.banking.entities.bank_transaction import BankTransaction
from kassa.domain.banking.entities.payment import Payment, format_payment_number

__all__ = [
    "DEFAULT_CURRENCY",
    "BankAccount",
    "BankReconciliation",
    "BankStatementImport",
    "BankTransaction",
    "Payment",
    "format_payment_number",
]
