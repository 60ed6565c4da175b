from decimal import Decimal

from naive_ledger import Chargeback, Deposit, Dispute, Ledger, Resolve, Withdrawal

# Replay transactions
ledger = Ledger()
# fmt: off
transactions = [
    Deposit(client=1, tx=1, amount=Decimal("100.0")),
    Deposit(client=2, tx=2, amount=Decimal("50.0")),
    Withdrawal(client=2, tx=3, amount=Decimal("20.0")),
    Withdrawal(client=2, tx=4, amount=Decimal("40.0")),  # insufficient funds, skipped
    Dispute(client=1, tx=1),
    Chargeback(client=1, tx=1),
    Dispute(client=2, tx=2),
    Resolve(client=2, tx=2),
]
# fmt: on
ledger.apply_many(transactions)

# Show final balances
assert ledger.accounts[1].locked is True
assert ledger.accounts[1].total == 0
assert ledger.accounts[2].available == 30
print(ledger.balances.model_dump_json())
