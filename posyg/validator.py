from __future__ import annotations
from typing import Any, Dict

from .core.errors import InvalidBlock
from .incentive.scoring import SynergyScoring
from .core.types import Block, INVALID_TX, SENTINEL_BLOCK_ID


class Validator:
    """A single consensus participant.

    ``stake`` and ``is_malicious`` are fixed at construction. The synergy score
    changes only through :meth:`update_scores`, and the block counters only
    through the ``increment_*`` methods called by the round orchestrator.
    """

    def __init__(
        self,
        validator_id: str,
        *,
        stake: int,
        is_malicious: bool = False,
        scoring: Any = None,
        synergy_score: float = 0.0,
    ) -> None:
        if int(stake) < 0:
            raise ValueError(f"stake must be non-negative, got {stake}")
        self._id = str(validator_id)
        self._stake = int(stake)
        self._is_malicious = bool(is_malicious)
        self.scoring = scoring if scoring is not None else SynergyScoring()
        self.synergy_score = float(synergy_score)
        self.proposed_blocks = 0
        self.accepted_blocks = 0
        self.violations = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def stake(self) -> int:
        return self._stake

    @property
    def is_malicious(self) -> bool:
        return self._is_malicious

    def propose_block(self) -> Block:
        if self._is_malicious:
            return Block(id=SENTINEL_BLOCK_ID, proposer=self._id, transactions=(INVALID_TX,))
        return Block(id=self.proposed_blocks + 1, proposer=self._id)

    def validate_block(self, block: Block) -> bool:
        if block.is_marked_invalid:
            raise InvalidBlock(block, validator_id=self._id)
        return True

    def update_scores(self, accepted: bool, violation_occurred: bool) -> float:
        """Apply one round's score update and return the applied delta.

        A charged violation is counted before the penalty is computed, so the
        n-th violation pays ``base_penalty * multiplier ** (n - 1)``.
        """
        penalty = 0.0
        if violation_occurred:
            self.violations += 1
            penalty = self.scoring.penalty(self.violations)
        delta = self.scoring.delta(stake=self._stake, accepted=bool(accepted), penalty=penalty)
        self.synergy_score += delta
        return delta

    def get_synergy_score(self) -> float:
        return self.synergy_score

    def increment_proposed_blocks(self) -> None:
        self.proposed_blocks += 1

    def increment_accepted_blocks(self) -> None:
        # The orchestrator counts acceptance before the proposal, so accepted may
        # lead proposed by one until increment_proposed_blocks() runs.
        if self.accepted_blocks >= self.proposed_blocks + 1:
            raise ValueError(f"{self._id}: accepted blocks would exceed proposed blocks")
        self.accepted_blocks += 1

    def snapshot(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "stake": self._stake,
            "malicious": self._is_malicious,
            "score": self.synergy_score,
            "violations": self.violations,
            "proposed": self.proposed_blocks,
            "accepted": self.accepted_blocks,
        }

    def __repr__(self) -> str:
        return (
            f"Validator(id={self._id!r}, stake={self._stake}, score={self.synergy_score:.2f}, "
            f"violations={self.violations}, proposed={self.proposed_blocks}, "
            f"accepted={self.accepted_blocks}, malicious={self._is_malicious})"
        )
