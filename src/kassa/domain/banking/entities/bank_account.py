"""Bank account entity."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from kassa.domain.shared.exceptions import ErrorCode, ValidationError
from kassa.domain.shared.time import utc_now

DEFAULT_CURRENCY = "EUR"


class BankAccount:
    """A tenant's account at a bank, the owner of imported transactions.

    At most one account per tenant carries ``is_default``. The balance is
    not part of the entity; it is derived from the transaction ledger on
    every read.
    """

    def __init__(  # noqa: PLR0913
        self,
        tenant_id: UUID,
        name: str,
        account_number: str,
        bank_name: Optional[str] = None,
        swift_code: Optional[str] = None,
        currency: Optional[str] = None,
        gl_account_id: Optional[UUID] = None,
        is_default: bool = False,
        is_active: bool = True,
        # For reconstitution from persistence:
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id or uuid4()
        self._tenant_id = tenant_id
        self._name = self._clean_required(name, "name")
        self._account_number = self._clean_required(account_number, "account_number")
        self._bank_name = bank_name
        self._swift_code = swift_code
        self._currency = (currency or DEFAULT_CURRENCY).strip().upper()
        self._gl_account_id = gl_account_id
        self._is_default = is_default
        self._is_active = is_active
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

        if len(self._currency) != 3:
            msg = f"Invalid currency code: {self._currency}"
            raise ValidationError(msg, code=ErrorCode.INVALID_CURRENCY)

    @staticmethod
    def _clean_required(value: str, field: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            msg = f"Bank account {field} cannot be empty"
            raise ValidationError(msg, details={"field": field})
        return cleaned

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def tenant_id(self) -> UUID:
        return self._tenant_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def bank_name(self) -> Optional[str]:
        return self._bank_name

    @property
    def swift_code(self) -> Optional[str]:
        return self._swift_code

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def gl_account_id(self) -> Optional[UUID]:
        return self._gl_account_id

    @property
    def is_default(self) -> bool:
        return self._is_default

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def rename(self, name: str) -> None:
        self._name = self._clean_required(name, "name")
        self._touch()

    def update_bank_details(
        self,
        bank_name: Optional[str] = None,
        swift_code: Optional[str] = None,
    ) -> None:
        if bank_name is not None:
            self._bank_name = bank_name
        if swift_code is not None:
            self._swift_code = swift_code
        self._touch()

    def link_gl_account(self, gl_account_id: Optional[UUID]) -> None:
        self._gl_account_id = gl_account_id
        self._touch()

    def mark_as_default(self) -> None:
        self._is_default = True
        self._touch()

    def clear_default(self) -> None:
        self._is_default = False
        self._touch()

    def activate(self) -> None:
        self._is_active = True
        self._touch()

    def deactivate(self) -> None:
        self._is_active = False
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()

    def __eq__(self, other) -> bool:
        if not isinstance(other, BankAccount):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return f"BankAccount[{self._name}]: {self._account_number}"
