from __future__ import annotations
from typing import Any, Optional


class ConsensusError(Exception):
    """Base class for every error raised by the simulator."""


class InvalidBlock(ConsensusError):
    """A proposed block carries the reserved invalid-marker transaction."""

    def __init__(self, block: Any, validator_id: Optional[str] = None) -> None:
        self.block = block
        self.validator_id = validator_id
        by = f" (rejected by {validator_id})" if validator_id else ""
        super().__init__(f"Invalid block {block.id} from {block.proposer}{by}")


class NetworkError(ConsensusError):
    """Transport-level failure. Nothing in the round loop raises it yet."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"Network error: {description}")


class LedgerError(ConsensusError):
    pass


class InsufficientBalance(LedgerError):
    def __init__(self, user: str, balance: int, amount: int) -> None:
        self.user = user
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Insufficient balance for withdrawal. user={user}, balance={balance}, amount={amount}"
        )
