from .base import (
    Amount,
    DisputeAlreadyFinished,
    DisputeAlreadyInProgress,
    DuplicateTransaction,
    InsufficientFunds,
    LedgerError,
    MissingTransaction,
    RecordError,
    TransactionError,
    TxType,
)
from .ledger import Account, AccountReport, Ledger, Rollback
from .records import read_transactions, write_accounts
from .transaction import Chargeback, Deposit, Dispute, Resolve, Transaction, Withdrawal
