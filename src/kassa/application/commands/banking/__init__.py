"""Banking commands - bank accounts, statement imports, matching, reconciliation."""

from kassa.application.commands.banking.auto_match_transactions_command import (
    DEFAULT_AUTO_MATCH_CONFIDENCE,
    AutoMatchTransactionsCommand,
)
from kassa.application.commands.banking.create_bank_account_command import (
    CreateBankAccountCommand,
)
from kassa.application.commands.banking.create_payment_command import (
    CreatePaymentFromTransactionCommand,
    PaymentCreationResult,
)
from kassa.application.commands.banking.delete_bank_account_command import (
    DeleteBankAccountCommand,
)
from kassa.application.commands.banking.import_statement_command import (
    ImportStatementCommand,
)
from kassa.application.commands.banking.import_transaction_rows_command import (
    ImportTransactionRowsCommand,
)
from kassa.application.commands.banking.match_transaction_command import (
    MatchTransactionCommand,
    UnmatchTransactionCommand,
)
from kassa.application.commands.banking.reconciliation_commands import (
    AddTransactionToReconciliationCommand,
    CompleteReconciliationCommand,
    OpenReconciliationCommand,
)
from kassa.application.commands.banking.update_bank_account_command import (
    UpdateBankAccountCommand,
)

__all__ = [
    "DEFAULT_AUTO_MATCH_CONFIDENCE",
    "AddTransactionToReconciliationCommand",
    "AutoMatchTransactionsCommand",
    "CompleteReconciliationCommand",
    "CreateBankAccountCommand",
    "CreatePaymentFromTransactionCommand",
    "DeleteBankAccountCommand",
    "ImportStatementCommand",
    "ImportTransactionRowsCommand",
    "MatchTransactionCommand",
    "OpenReconciliationCommand",
    "PaymentCreationResult",
    "UnmatchTransactionCommand",
    "UpdateBankAccountCommand",
]
