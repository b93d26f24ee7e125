"""Catalog of known bank export layouts and header-based detection.

A bank is added by adding a catalog entry (and, if it can be recognised,
a header signature), never by adding a type.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Optional, Sequence

from kassa.domain.banking.value_objects import CSVColumnMapping, StatementFormat

logger = logging.getLogger(__name__)

GENERIC_MAPPING = CSVColumnMapping(
    format=StatementFormat.GENERIC,
    date_column=0,
    amount_column=1,
    description_column=2,
    date_format="%Y-%m-%d",
    decimal_separator=".",
    thousands_separator=",",
    has_header=True,
)

SWEDBANK_EE_MAPPING = CSVColumnMapping(
    format=StatementFormat.SWEDBANK_EE,
    date_column=0,
    value_date_column=1,
    amount_column=3,
    description_column=6,
    reference_column=5,
    counterparty_name_column=7,
    counterparty_account_column=8,
    date_format="%d.%m.%Y",
    decimal_separator=",",
    thousands_separator=" ",
    has_header=True,
)

# SEB and LHV have tags but no dedicated layout yet; they resolve to generic.
FORMAT_CATALOG: dict[StatementFormat, CSVColumnMapping] = {
    StatementFormat.GENERIC: GENERIC_MAPPING,
    StatementFormat.SWEDBANK_EE: SWEDBANK_EE_MAPPING,
}

# Checked top to bottom; every keyword must occur in the header row.
FORMAT_SIGNATURES: list[tuple[StatementFormat, tuple[str, ...]]] = [
    (StatementFormat.SWEDBANK_EE, ("kuupäev", "summa", "saaja/maksja nimi")),
]


def normalize_header(value: str) -> str:
    """Case and Unicode-composition insensitive form of a header cell."""
    return unicodedata.normalize("NFC", value.replace("\ufeff", "")).strip().casefold()


def detect_format(headers: Sequence[str]) -> StatementFormat:
    """Pick the catalog entry whose header signature matches.

    Best effort only: exports describe themselves through their headers
    alone, so callers may still override the result.
    """
    header_text = ",".join(normalize_header(h) for h in headers)

    for statement_format, keywords in FORMAT_SIGNATURES:
        if all(keyword in header_text for keyword in keywords):
            logger.debug("Detected statement format %s", statement_format.value)
            return statement_format

    return StatementFormat.GENERIC


def get_mapping(
    statement_format: StatementFormat | str | None = None,
) -> CSVColumnMapping:
    """Mapping for a format tag; unknown or unsupported tags get generic."""
    if not isinstance(statement_format, StatementFormat):
        statement_format = StatementFormat.parse(statement_format)
    return FORMAT_CATALOG.get(statement_format, GENERIC_MAPPING)


def resolve_mapping(
    headers: Optional[Sequence[str]],
    statement_format: StatementFormat | str | None = None,
) -> CSVColumnMapping:
    """Explicit tag if given, otherwise whatever the headers suggest."""
    if statement_format:
        return get_mapping(statement_format)
    return get_mapping(detect_format(headers or []))
