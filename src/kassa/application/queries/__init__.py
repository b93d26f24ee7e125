"""Query layer - read operations that never mutate state.

Queries are organized by domain:
- banking: Bank accounts, transactions, match suggestions, reconciliations,
  import history and statement previews
"""

from kassa.application.queries.banking import (
    GetBankAccountQuery,
    GetBankTransactionQuery,
    GetReconciliationQuery,
    ImportHistoryQuery,
    ListBankAccountsQuery,
    ListBankTransactionsQuery,
    ListReconciliationsQuery,
    PreviewStatementQuery,
    ReconciliationSummaryQuery,
    SuggestMatchesQuery,
)

__all__ = [
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
