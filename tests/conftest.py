from decimal import Decimal

import pytest

from naive_ledger import Deposit, Ledger, Withdrawal


@pytest.fixture
def funded_ledger():
    return Ledger.from_list(
        [
            Deposit(1, 1, Decimal("50.0")),
            Withdrawal(1, 2, Decimal("20.0")),
        ]
    )


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(
        "type, client, tx, amount\n"
        "deposit, 1, 1, 1.0\n"
        "deposit, 2, 2, 2.0\n"
        "deposit, 1, 3, 2.0\n"
        "withdrawal, 1, 4, 1.5\n"
        "withdrawal, 2, 5, 3.0\n"
    )
    return path
