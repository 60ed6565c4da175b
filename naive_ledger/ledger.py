"""Client accounts ledger that replays a sequence of transactions.

The main class is `Ledger`. You change the state of the ledger by applying
transactions to it one at a time, in the order they arrive:

- `Deposit` and `Withdrawal` change available funds and are kept in
  `Ledger.history`,
- `Dispute` holds the amount of an earlier deposit or withdrawal,
- `Resolve` releases the held amount,
- `Chargeback` reverses the original transaction and locks the account.

A transaction can be disputed once. The dispute moves from
`Ledger.ongoing_rollbacks` to `Ledger.finished_rollbacks` when resolved
or charged back, and cannot be reopened.
"""

import logging
from collections import UserDict
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Iterable, assert_never

import simplejson as json  # type: ignore

from .base import (
    Amount,
    DisputeAlreadyFinished,
    DisputeAlreadyInProgress,
    DuplicateTransaction,
    InsufficientFunds,
    MissingTransaction,
    SaveLoadMixin,
    TransactionError,
)
from .transaction import (
    Chargeback,
    Deposit,
    Dispute,
    Funding,
    Resolve,
    Transaction,
    Withdrawal,
    tx_type,
)

logger = logging.getLogger(__name__)


@dataclass
class Account:
    client: int
    available: Amount = Decimal(0)
    held: Amount = Decimal(0)
    total: Amount = Decimal(0)
    locked: bool = False

    def is_consistent(self) -> bool:
        """Return True if total equals available plus held funds."""
        return self.total == self.available + self.held


@dataclass
class Rollback:
    """Client account and the deposit or withdrawal under dispute."""

    client: int
    original: Funding


@dataclass
class Ledger:
    accounts: dict[int, Account] = field(default_factory=dict)
    history: dict[int, Funding] = field(default_factory=dict)
    ongoing_rollbacks: dict[int, Rollback] = field(default_factory=dict)
    finished_rollbacks: set[int] = field(default_factory=set)

    @classmethod
    def from_list(cls, transactions: Iterable[Transaction]):
        ledger = cls()
        for transaction in transactions:
            ledger.apply(transaction)
        return ledger

    def account(self, client: int) -> Account:
        """Return client account, create an empty one if not found."""
        if client not in self.accounts:
            self.accounts[client] = Account(client)
        return self.accounts[client]

    def apply(self, transaction: Transaction):
        """Change ledger state with *transaction* or raise `TransactionError`."""
        if isinstance(transaction, (Deposit, Withdrawal)):
            DuplicateTransaction.must_not_exist(self.history, transaction.tx)
        account = self.account(transaction.client)
        match transaction:
            case Deposit(_, tx, amount):
                account.available += amount
                account.total += amount
                self.history[tx] = transaction
            case Withdrawal(client, tx, amount):
                if account.available < amount:
                    raise InsufficientFunds(tx, client)
                account.available -= amount
                account.total -= amount
                self.history[tx] = transaction
            case Dispute(_, tx):
                self.dispute(account, tx)
            case Resolve(_, tx):
                self.resolve(tx)
            case Chargeback(_, tx):
                self.chargeback(tx)
            case _:
                assert_never(transaction)
        return self

    def apply_many(self, transactions: Iterable[Transaction]):
        """Apply transactions in order, log and skip the rejected ones."""
        for transaction in transactions:
            try:
                self.apply(transaction)
            except TransactionError as e:
                logger.warning("%s %s: %s", tx_type(transaction).value, e.tx, e)
        return self

    def dispute(self, account: Account, tx: int):
        if tx in self.ongoing_rollbacks:
            raise DisputeAlreadyInProgress(tx)
        if tx in self.finished_rollbacks:
            raise DisputeAlreadyFinished(tx)
        MissingTransaction.must_exist(self.history, tx)
        original = self.history[tx]
        match original:
            case Deposit(amount=amount):
                account.available -= amount
                account.held += amount
            case Withdrawal(amount=amount):
                account.held += amount
                account.total += amount
            case _:
                assert_never(original)
        self.ongoing_rollbacks[tx] = Rollback(account.client, original)

    def resolve(self, tx: int):
        account, original = self.finish_rollback(tx)
        match original:
            case Deposit(amount=amount):
                account.available += amount
                account.held -= amount
            case Withdrawal(amount=amount):
                account.total -= amount
                account.held -= amount
            case _:
                assert_never(original)

    def chargeback(self, tx: int):
        account, original = self.finish_rollback(tx)
        match original:
            case Deposit(amount=amount):
                account.held -= amount
                account.total -= amount
            case Withdrawal(amount=amount):
                # total already includes the amount restored by the dispute
                account.available += amount
                account.held -= amount
            case _:
                assert_never(original)
        account.locked = True

    def finish_rollback(self, tx: int) -> tuple[Account, Funding]:
        """Close open dispute for *tx*, return its account and original transaction."""
        MissingTransaction.must_exist(self.ongoing_rollbacks, tx)
        dispute = self.ongoing_rollbacks.pop(tx)
        self.finished_rollbacks.add(tx)
        return self.accounts[dispute.client], dispute.original

    def export(self) -> list[Account]:
        """Return all known accounts in no particular order."""
        return list(self.accounts.values())

    @property
    def balances(self) -> "AccountReport":
        return AccountReport({account.client: account for account in self.export()})


class AccountReport(UserDict[int, Account], SaveLoadMixin):
    """Final account balances by client."""

    @property
    def total(self) -> Amount:
        return Decimal(sum(account.total for account in self.data.values()))

    def model_dump_json(self, indent: int = 2):
        return json.dumps([asdict(a) for a in self.data.values()], indent=indent)

    @classmethod
    def model_validate_json(cls, text: str):
        report = cls()
        for item in json.loads(text, use_decimal=True):
            account = Account(
                client=int(item["client"]),
                available=Decimal(item["available"]),
                held=Decimal(item["held"]),
                total=Decimal(item["total"]),
                locked=bool(item["locked"]),
            )
            report[account.client] = account
        return report
