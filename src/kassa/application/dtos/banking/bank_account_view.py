"""DTO pairing a bank account with its derived balance."""

from dataclasses import dataclass
from decimal import Decimal

from kassa.domain.banking.entities import BankAccount


@dataclass(frozen=True)
class BankAccountView:
    """A bank account as shown to callers, balance included."""

    account: BankAccount
    balance: Decimal
