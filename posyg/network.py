from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence
import numpy as np

from .core.errors import InvalidBlock
from .core.registry import SCORING, SELECTION
from .core.types import ValidatorSpec
from .metrics import ConsensusMetrics
from .validator import Validator
from . import incentive  # noqa: F401  # registers the built-in strategies


@dataclass
class NetworkConfig:
    scoring: str = "synergy"
    selection: str = "weighted_random"
    seed: Optional[int] = None


class Network:
    """Owns a fixed, ordered validator set and drives consensus rounds.

    Only one round runs at a time. Each round is split into a read-only
    snapshot of the proposer, a read-only validation scan over the other
    validators, and a mutation step applied to the proposer alone.
    """

    def __init__(
        self,
        validators: Iterable[ValidatorSpec],
        cfg: NetworkConfig | None = None,
        strategy_params: dict | None = None,
        rng: Any = None,
        verbose: bool = False,
    ):
        self.cfg = cfg or NetworkConfig()
        params = strategy_params or {}
        self.scoring = SCORING.build(self.cfg.scoring, **params.get("scoring", {}))
        self.selector = SELECTION.build(self.cfg.selection, **params.get("selection", {}))
        self.rng = rng if rng is not None else np.random.default_rng(self.cfg.seed)
        self.verbose = bool(verbose)

        self._validators: List[Validator] = []
        seen = set()
        for spec in validators:
            vid = str(spec.id)
            if vid in seen:
                raise ValueError(f"Duplicate validator id: {vid}")
            seen.add(vid)
            self._validators.append(
                Validator(
                    vid,
                    stake=spec.stake,
                    is_malicious=spec.malicious,
                    scoring=self.scoring,
                    synergy_score=spec.score,
                )
            )
        if not self._validators:
            raise ValueError("Network requires at least one validator")

        self.round_idx = 0
        self.metrics = ConsensusMetrics()

    @property
    def validators(self) -> Sequence[Validator]:
        return tuple(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def get(self, validator_id: str) -> Validator:
        for v in self._validators:
            if v.id == validator_id:
                return v
        raise KeyError(f"Unknown validator: {validator_id}")

    def select_proposer(self) -> int:
        return self.selector.select(self._validators, self.rng)

    def run_consensus_round(self) -> Dict[str, Any]:
        self.round_idx += 1
        i = self.select_proposer()
        proposer = self._validators[i]

        # snapshot
        block = proposer.propose_block()
        malicious = proposer.is_malicious

        # validate: the first rejection decides the round
        valid = True
        rejected_by = None
        for j, peer in enumerate(self._validators):
            if j == i:
                continue
            try:
                peer.validate_block(block)
            except InvalidBlock as err:
                valid = False
                rejected_by = err.validator_id
                break

        # mutate
        # Honest proposers are never charged, even for a rejected block.
        violation_occurred = (not valid) and malicious
        delta = proposer.update_scores(valid, violation_occurred)
        if valid:
            proposer.increment_accepted_blocks()
        proposer.increment_proposed_blocks()

        self.metrics.log(self.round_idx, proposer.id, valid, violation_occurred)
        if self.verbose:
            status = "accepted" if valid else f"rejected by {rejected_by}"
            print(f"[Round {self.round_idx}] proposer={proposer.id} block={block.id} {status}; "
                  f"violation={violation_occurred} delta={delta:+.2f}")

        return {
            "round": self.round_idx,
            "proposer": proposer.id,
            "proposer_index": i,
            "block_id": block.id,
            "valid": valid,
            "violation": violation_occurred,
            "rejected_by": rejected_by,
            "delta": delta,
            "scores": {v.id: v.synergy_score for v in self._validators},
        }

    def run(self, rounds: int) -> List[Dict[str, Any]]:
        if rounds < 0:
            raise ValueError(f"rounds must be non-negative, got {rounds}")
        return [self.run_consensus_round() for _ in range(rounds)]

    def snapshot(self) -> List[Dict[str, Any]]:
        return [v.snapshot() for v in self._validators]
