import io
from decimal import Decimal

import pytest
import simplejson as json  # type: ignore

from naive_ledger import (
    Account,
    Chargeback,
    Deposit,
    Dispute,
    RecordError,
    Resolve,
    TxType,
    Withdrawal,
    read_transactions,
    write_accounts,
)
from naive_ledger.records import Record, dump_accounts_json, format_amount, parse_row


def read(text: str):
    return list(read_transactions(io.StringIO(text)))


@pytest.mark.record
def test_read_trims_whitespace_and_tolerates_missing_amount():
    text = "type, client, tx, amount\ndeposit,    1,   2, 5.50\nwithdrawal,1,1\ndispute, 1, 2\n"
    assert read(text) == [Deposit(1, 2, Decimal("5.50")), Dispute(1, 2)]


@pytest.mark.record
def test_read_all_transaction_types():
    text = (
        "type,client,tx,amount\n"
        "deposit,1,1,1.0\n"
        "withdrawal,1,2,0.5\n"
        "dispute,1,1,\n"
        "resolve,1,1,\n"
        "chargeback,1,1\n"
    )
    assert read(text) == [
        Deposit(1, 1, Decimal("1.0")),
        Withdrawal(1, 2, Decimal("0.5")),
        Dispute(1, 1),
        Resolve(1, 1),
        Chargeback(1, 1),
    ]


@pytest.mark.record
def test_type_is_case_insensitive():
    assert Record(type=" Deposit ", client="1", tx="1", amount="2").type == TxType.Deposit


@pytest.mark.record
def test_amount_is_ignored_for_rollbacks():
    assert parse_row({"type": "dispute", "client": "3", "tx": "4", "amount": "9.99"}) == Dispute(3, 4)


@pytest.mark.record
@pytest.mark.parametrize(
    "row",
    [
        {"type": "bacon", "client": "1", "tx": "1", "amount": "1"},
        {"type": "deposit", "client": "x", "tx": "1", "amount": "1"},
        {"type": "deposit", "client": "65536", "tx": "1", "amount": "1"},
        {"type": "deposit", "client": "1", "tx": "-1", "amount": "1"},
        {"type": "deposit", "client": "1", "tx": "1", "amount": "abc"},
        {"type": "deposit", "client": "1", "tx": "1", "amount": "-5"},
        {"type": "deposit", "client": "1", "tx": "1", "amount": ""},
        {"type": "withdrawal", "client": "1", "tx": "1"},
        {"type": "deposit", "client": "1", "tx": "1", "amount": "1", None: ["extra"]},
    ],
)
def test_malformed_row_raises_record_error(row):
    with pytest.raises(RecordError):
        parse_row(row)


@pytest.mark.record
def test_malformed_rows_are_logged_and_skipped(caplog):
    text = (
        "type,client,tx,amount\n"
        "deposit,1,1,1.0\n"
        "corn,potato\n"
        "\n"
        "deposit,1,2,1.0,extra\n"
        "deposit,2,3,2.0\n"
    )
    assert read(text) == [Deposit(1, 1, Decimal("1.0")), Deposit(2, 3, Decimal("2.0"))]
    warnings = [r.getMessage() for r in caplog.records if r.levelname == "WARNING"]
    assert len(warnings) == 2
    assert warnings[0].startswith("line 3: skipped malformed record")
    assert "Too many fields" in warnings[1]


@pytest.mark.record
def test_empty_stream_yields_nothing():
    assert read("") == []


@pytest.mark.record
def test_write_accounts():
    buffer = io.StringIO()
    write_accounts(
        [Account(1), Account(2, Decimal("1.5"), Decimal("0.5"), Decimal("2.0"), True)],
        buffer,
    )
    assert buffer.getvalue() == (
        "client,available,held,total,locked\n"
        "1,0.0,0.0,0.0,false\n"
        "2,1.5,0.5,2.0,true\n"
    )


@pytest.mark.record
def test_dump_accounts_json():
    buffer = io.StringIO()
    dump_accounts_json([Account(1, Decimal("1.5"), Decimal(0), Decimal("1.5"))], buffer)
    assert json.loads(buffer.getvalue()) == [
        dict(client=1, available=1.5, held=0, total=1.5, locked=False)
    ]


@pytest.mark.record
def test_row_over_csv_field_limit_is_logged_and_skipped(caplog):
    text = (
        "type,client,tx,amount\n"
        f"deposit,1,1,{'1' * 200_000}\n"
        "deposit,1,2,2.0\n"
    )
    assert read(text) == [Deposit(1, 2, Decimal("2.0"))]
    assert "line 2: skipped malformed record" in caplog.text


@pytest.mark.record
@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal(0), "0.0"),
        (Decimal("1E-7"), "0.0000001"),
        (Decimal("3E+2"), "300.0"),
        (Decimal("-0.5"), "-0.5"),
        (Decimal("2.50"), "2.50"),
    ],
)
def test_format_amount_uses_plain_notation(value, expected):
    assert format_amount(value) == expected
