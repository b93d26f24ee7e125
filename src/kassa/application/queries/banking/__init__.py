"""Banking queries."""

from kassa.application.queries.banking.bank_account_queries import (
    GetBankAccountQuery,
    ListBankAccountsQuery,
)
from kassa.application.queries.banking.bank_transaction_queries import (
    DEFAULT_TRANSACTION_LIMIT,
    GetBankTransactionQuery,
    ListBankTransactionsQuery,
)
from kassa.application.queries.banking.import_history_query import (
    ImportHistoryQuery,
)
from kassa.application.queries.banking.preview_statement_query import (
    DEFAULT_PREVIEW_ROWS,
    PreviewStatementQuery,
)
from kassa.application.queries.banking.reconciliation_queries import (
    GetReconciliationQuery,
    ListReconciliationsQuery,
    ReconciliationSummaryQuery,
)
from kassa.application.queries.banking.suggest_matches_query import (
    SuggestMatchesQuery,
)

__all__ = [
    "DEFAULT_PREVIEW_ROWS",
    "DEFAULT_TRANSACTION_LIMIT",
    "GetBankAccountQuery",
    "GetBankTransactionQuery",
    "GetReconciliationQuery",
    "ImportHistoryQuery",
    "ListBankAccountsQuery",
    "ListBankTransactionsQuery",
    "ListReconciliationsQuery",
    "PreviewStatementQuery",
    "ReconciliationSummaryQuery",
    "SuggestMatchesQuery",
]
