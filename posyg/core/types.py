from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

# Transaction carried by a malicious proposer; any block holding it fails validation.
INVALID_TX = "INVALID_TX"

# Block id used by malicious proposers instead of their sequence number.
SENTINEL_BLOCK_ID = 0

@dataclass(frozen=True)
class Block:
    id: int
    proposer: str
    transactions: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ValueError(f"Block id must be non-negative, got {self.id}")
        object.__setattr__(self, "transactions", tuple(self.transactions))

    @property
    def is_marked_invalid(self) -> bool:
        return INVALID_TX in self.transactions

@dataclass
class ValidatorSpec:
    id: str
    stake: int
    malicious: bool = False
    score: float = 0.0
