from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Container

Amount = Decimal


class TxType(Enum):
    """Five types of transactions."""

    Deposit = "deposit"
    Withdrawal = "withdrawal"
    Dispute = "dispute"
    Resolve = "resolve"
    Chargeback = "chargeback"

    def __repr__(self):
        return self.value.capitalize()


class LedgerError(Exception):
    """Custom error for the naive ledger project."""


class RecordError(LedgerError):
    """Input row that cannot be turned into a transaction."""


class TransactionError(LedgerError):
    """Transaction rejected by the ledger."""

    def __init__(self, tx: int):
        self.tx = tx
        super().__init__(self.message())

    def message(self) -> str:
        return f"transaction {self.tx} rejected"


class DuplicateTransaction(TransactionError):
    def message(self):
        return f"skipped transaction {self.tx} because it was already processed"

    @classmethod
    def must_not_exist(cls, collection: Container[int], tx: int):
        if tx in collection:
            raise cls(tx)


class InsufficientFunds(TransactionError):
    def __init__(self, tx: int, client: int):
        self.client = client
        super().__init__(tx)

    def message(self):
        return (
            f"skipped transaction {self.tx} "
            f"because client {self.client} has insufficient funds"
        )


class MissingTransaction(TransactionError):
    def message(self):
        return f"rollback not possible because transaction {self.tx} is missing"

    @classmethod
    def must_exist(cls, collection: Container[int], tx: int):
        if tx not in collection:
            raise cls(tx)


class DisputeAlreadyInProgress(TransactionError):
    def message(self):
        return f"skipped transaction because there is already a dispute for {self.tx} in progress"


class DisputeAlreadyFinished(TransactionError):
    def message(self):
        return f"skipped transaction because the dispute for {self.tx} was already finished"


class SaveLoadMixin:
    """A mix-in class for loading and saving models to files."""

    @classmethod
    def load(cls, filename: str | Path):
        return cls.model_validate_json(Path(filename).read_text())  # type: ignore

    def save(self, filename: str | Path, allow_overwrite: bool = False):
        if not allow_overwrite and Path(filename).exists():
            raise FileExistsError(f"File already exists: {filename}")
        content = self.model_dump_json(indent=2)  # type: ignore
        Path(filename).write_text(content)
