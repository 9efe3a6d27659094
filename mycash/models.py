"""Account holders and the transaction history kept during a session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

HISTORY_HEADER = "Tran ID\tDescription\tAmount\tBalance"


def format_amount(value: float) -> str:
    """Format a number with six significant digits, dropping trailing zeros."""
    return f"{value:g}"


@dataclass
class Member:
    """A registered account holder."""

    mobile: str
    name: str
    amount: float = 0.0
    pin: str = ""


@dataclass(frozen=True)
class Transaction:
    """One recorded money movement and the balance left after it."""

    transaction_id: int
    description: str
    amount: float
    balance: float

    def __str__(self) -> str:
        return "\t".join(
            (
                str(self.transaction_id),
                self.description,
                format_amount(self.amount),
                format_amount(self.balance),
            )
        )


class History:
    """An ordered log of transactions."""

    def __init__(self) -> None:
        self._transactions: list[Transaction] = []

    def add_transaction(
        self, transaction_id: int, description: str, amount: float, balance: float
    ) -> Transaction:
        """Record a transaction and return it."""
        transaction = Transaction(transaction_id, description, amount, balance)
        self._transactions.append(transaction)
        return transaction

    def render(self) -> str:
        """Return the history as a tab-separated table with a header line."""
        lines = [HISTORY_HEADER, *(str(t) for t in self._transactions)]
        return "\n".join(lines) + "\n"

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)