from __future__ import annotations
from typing import Dict, List, Tuple


class BasicExecutor:
    """Execution-layer stub: records calls, runs no code, moves no funds."""

    def __init__(self) -> None:
        self.balances: Dict[str, int] = {}
        self.history: List[Tuple[str, str, bytes]] = []

    def _ensure_address(self, addr: str) -> None:
        self.balances.setdefault(addr, 0)

    def execute_transaction(self, sender: str, to: str, data: bytes) -> None:
        self._ensure_address(sender)
        self._ensure_address(to)
        self.history.append((sender, to, bytes(data)))
        print(f"Executing transaction from: {sender} to: {to}, data: {list(bytes(data))}")

    def get_balance(self, address: str) -> int:
        return self.balances.get(address, 0)

    def set_balance(self, address: str, amount: int) -> None:
        amount = int(amount)
        if amount < 0:
            raise ValueError(f"balance must be non-negative, got {amount}")
        self.balances[address] = amount
