"""CSV column mapping value object."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from kassa.domain.banking.value_objects.statement_format import StatementFormat


class CSVColumnMapping(BaseModel):
    """Which 0-based column of a bank export holds which field.

    Optional columns are ``None`` when the layout does not carry them.
    ``date_format`` is a ``strptime`` pattern and is applied strictly: the
    mapping declares the date order, so ``01/02/2025`` is never guessed.
    """

    format: StatementFormat = Field(default=StatementFormat.GENERIC)

    date_column: int = Field(default=0, ge=0)
    value_date_column: Optional[int] = Field(default=None, ge=0)
    amount_column: int = Field(default=1, ge=0)
    description_column: Optional[int] = Field(default=2, ge=0)
    reference_column: Optional[int] = Field(default=None, ge=0)
    counterparty_name_column: Optional[int] = Field(default=None, ge=0)
    counterparty_account_column: Optional[int] = Field(default=None, ge=0)
    external_id_column: Optional[int] = Field(default=None, ge=0)

    date_format: str = Field(default="%Y-%m-%d", min_length=2)
    decimal_separator: str = Field(default=".", min_length=1, max_length=1)
    thousands_separator: str = Field(default=",", max_length=1)
    has_header: bool = Field(default=True)
    skip_rows: int = Field(default=0, ge=0)

    # Separators are significant whitespace (" " groups thousands in
    # several locales), so no str_strip_whitespace here.
    model_config = ConfigDict(
        frozen=True,
        validate_assignment=True,
    )

    @field_validator("thousands_separator")
    @classmethod
    def validate_separators_differ(cls, v: Any, info: ValidationInfo) -> str:
        if v and v == info.data.get("decimal_separator"):
            msg = "Thousands separator must differ from the decimal separator"
            raise ValueError(msg)
        return v

    @property
    def header_rows(self) -> int:
        """Number of leading records that never hold transactions."""
        return self.skip_rows + (1 if self.has_header else 0)
