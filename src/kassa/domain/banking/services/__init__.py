"""Domain services for the banking context.

Pure functions and stateless helpers: statement format catalog, field
normalization, CSV reading and match scoring. None of them touch storage.
"""

from kassa.domain.banking.services.field_normalizer import (
    candidate_date_formats,
    format_amount,
    parse_amount,
    parse_date,
    parse_date_formats,
)
from kassa.domain.banking.services.format_catalog import (
    FORMAT_CATALOG,
    GENERIC_MAPPING,
    SWEDBANK_EE_MAPPING,
    detect_format,
    get_mapping,
    resolve_mapping,
)
from kassa.domain.banking.services.match_scorer import (
    DEFAULT_MATCHER_CONFIG,
    MAX_SUGGESTIONS,
    MatcherConfig,
    is_candidate,
    pick_unambiguous,
    rank_payments,
    text_similarity,
)
from kassa.domain.banking.services.statement_reader import (
    StatementRecord,
    iter_statement_records,
    parse_statement_record,
    preview_records,
    preview_rows,
    read_lines,
    validate_row,
)

__all__ = [
    "DEFAULT_MATCHER_CONFIG",
    "FORMAT_CATALOG",
    "GENERIC_MAPPING",
    "MAX_SUGGESTIONS",
    "SWEDBANK_EE_MAPPING",
    "MatcherConfig",
    "StatementRecord",
    "candidate_date_formats",
    "detect_format",
    "format_amount",
    "get_mapping",
    "is_candidate",
    "iter_statement_records",
    "parse_amount",
    "parse_date",
    "parse_date_formats",
    "parse_statement_record",
    "pick_unambiguous",
    "preview_records",
    "preview_rows",
    "read_lines",
    "rank_payments",
    "resolve_mapping",
    "text_similarity",
    "validate_row",
]
