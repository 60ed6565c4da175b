"""Read transactions from and write accounts to delimited text streams."""

import csv
import logging
from dataclasses import asdict
from typing import Any, Iterable, Iterator, TextIO, assert_never

import simplejson as json  # type: ignore
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .base import Amount, RecordError, TxType
from .ledger import Account
from .transaction import Chargeback, Deposit, Dispute, Resolve, Transaction, Withdrawal

logger = logging.getLogger(__name__)

OUTPUT_FIELDS = ["client", "available", "held", "total", "locked"]


class Record(BaseModel):
    """Single row of the input file."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    type: TxType
    client: int = Field(ge=0, le=65_535)
    tx: int = Field(ge=0, le=4_294_967_295)
    amount: Amount | None = Field(default=None, ge=0)

    @field_validator("type", mode="before")
    @classmethod
    def lowercase_type(cls, value: Any):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def blank_amount_is_none(cls, value: Any):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def amount_required_for_funding(self):
        if self.type in (TxType.Deposit, TxType.Withdrawal) and self.amount is None:
            raise ValueError(f"amount is required for {self.type.value}")
        return self

    def to_transaction(self) -> Transaction:
        match self.type:
            case TxType.Deposit:
                return Deposit(self.client, self.tx, self.amount)  # type: ignore
            case TxType.Withdrawal:
                return Withdrawal(self.client, self.tx, self.amount)  # type: ignore
            case TxType.Dispute:
                return Dispute(self.client, self.tx)
            case TxType.Resolve:
                return Resolve(self.client, self.tx)
            case TxType.Chargeback:
                return Chargeback(self.client, self.tx)
            case _:
                assert_never(self.type)


def parse_row(row: dict[str | None, Any]) -> Transaction:
    """Convert a row shaped like `csv.DictReader` output to a transaction."""
    if None in row:
        raise RecordError(f"Too many fields: {row[None]}")
    values = {key: value.strip() for key, value in row.items() if value is not None}
    try:
        return Record.model_validate(values).to_transaction()
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(map(str, err['loc'])) or 'row'}: {err['msg']}"
            for err in e.errors()
        )
        raise RecordError(errors) from e


def csv_rows(reader) -> Iterator[list[str]]:
    """Yield rows from a `csv.reader`, log and skip rows it cannot split."""
    while True:
        try:
            yield next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.warning("line %d: skipped malformed record: %s", reader.line_num, e)


def format_amount(value: Amount) -> str:
    """Plain decimal notation with at least one fractional digit."""
    text = format(value, "f")
    return text if "." in text else f"{text}.0"


def read_transactions(stream: Iterable[str]) -> Iterator[Transaction]:
    """Yield transactions from CSV *stream* with a header row.

    Malformed rows are logged and skipped.
    """
    reader = csv.reader(stream)
    rows = csv_rows(reader)
    header = next(rows, None)
    if header is None:
        return
    fieldnames = [name.strip().lower() for name in header]
    for values in rows:
        if not any(value.strip() for value in values):
            continue
        row: dict[str | None, Any] = dict(zip(fieldnames, values))
        if len(values) > len(fieldnames):
            row[None] = values[len(fieldnames) :]
        try:
            yield parse_row(row)
        except RecordError as e:
            logger.warning("line %d: skipped malformed record: %s", reader.line_num, e)


def write_accounts(accounts: Iterable[Account], stream: TextIO):
    """Write accounts as CSV with a header row."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_FIELDS)
    for account in accounts:
        writer.writerow(
            [
                account.client,
                format_amount(account.available),
                format_amount(account.held),
                format_amount(account.total),
                str(account.locked).lower(),
            ]
        )


def dump_accounts_json(accounts: Iterable[Account], stream: TextIO, indent: int = 2):
    """Write accounts as a JSON array."""
    json.dump([asdict(account) for account in accounts], stream, indent=indent)
    stream.write("\n")
