"""Transactions that change account balances.

Funding transactions (`Deposit`, `Withdrawal`) move money in and out of
a client account and carry an amount. Dispute steps (`Dispute`,
`Resolve`, `Chargeback`) carry no amount and refer to an earlier funding
transaction by its `tx` id.
"""

from dataclasses import dataclass
from typing import Literal

from .base import Amount, TxType


@dataclass(frozen=True)
class Deposit:
    """Credit client account."""

    client: int
    tx: int
    amount: Amount
    tag: Literal["deposit"] = "deposit"


@dataclass(frozen=True)
class Withdrawal:
    """Debit client account if enough funds are available."""

    client: int
    tx: int
    amount: Amount
    tag: Literal["withdrawal"] = "withdrawal"


@dataclass(frozen=True)
class Dispute:
    """Claim against an earlier deposit or withdrawal, holds its amount."""

    client: int
    tx: int
    tag: Literal["dispute"] = "dispute"


@dataclass(frozen=True)
class Resolve:
    """Close dispute and release held funds."""

    client: int
    tx: int
    tag: Literal["resolve"] = "resolve"


@dataclass(frozen=True)
class Chargeback:
    """Close dispute by reversing the original transaction and lock account."""

    client: int
    tx: int
    tag: Literal["chargeback"] = "chargeback"


Funding = Deposit | Withdrawal
DisputeStep = Dispute | Resolve | Chargeback
Transaction = Funding | DisputeStep


def tx_type(transaction: Transaction) -> TxType:
    return TxType(transaction.tag)
