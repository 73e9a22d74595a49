from __future__ import annotations
from typing import Dict

from ..core.errors import InsufficientBalance, LedgerError


class BridgeService:
    """Cross-chain asset bridge kept as an in-memory balance ledger.

    Proof checking is a placeholder: any non-empty proof is accepted.
    """

    def __init__(self) -> None:
        self.balances: Dict[str, int] = {}

    def _ensure_user(self, user: str) -> None:
        self.balances.setdefault(user, 0)

    @staticmethod
    def _check_amount(amount: int) -> int:
        amount = int(amount)
        if amount < 0:
            raise LedgerError(f"amount must be non-negative, got {amount}")
        return amount

    def deposit(self, user: str, amount: int) -> None:
        amount = self._check_amount(amount)
        self._ensure_user(user)
        self.balances[user] += amount
        print(f"Deposit successful: user={user}, amount={amount}")

    def withdraw(self, user: str, amount: int) -> None:
        amount = self._check_amount(amount)
        self._ensure_user(user)
        balance = self.balances[user]
        if balance < amount:
            raise InsufficientBalance(user, balance, amount)
        self.balances[user] = balance - amount
        print(f"Withdrawal successful: user={user}, amount={amount}")

    def verify_proof(self, proof_data: bytes) -> bool:
        return len(proof_data) > 0

    def get_balance(self, user: str) -> int:
        return self.balances.get(user, 0)
