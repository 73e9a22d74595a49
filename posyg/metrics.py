from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import numpy as np

@dataclass
class ConsensusMetrics:
    rounds: List[int] = field(default_factory=list)
    proposers: List[str] = field(default_factory=list)
    valid: List[bool] = field(default_factory=list)
    violations: List[bool] = field(default_factory=list)

    def log(self, round_idx: int, proposer: str, valid: bool, violation: bool):
        self.rounds.append(int(round_idx))
        self.proposers.append(str(proposer))
        self.valid.append(bool(valid))
        self.violations.append(bool(violation))

    def summary(self):
        out = []
        for r, p, ok, vio in zip(self.rounds, self.proposers, self.valid, self.violations):
            out.append({"round": r, "proposer": p, "valid": ok, "violation": vio})
        return out

    def acceptance_rates(self) -> Dict[str, float]:
        """Fraction of each proposer's blocks that were accepted."""
        proposed: Dict[str, int] = {}
        accepted: Dict[str, int] = {}
        for p, ok in zip(self.proposers, self.valid):
            proposed[p] = proposed.get(p, 0) + 1
            accepted[p] = accepted.get(p, 0) + int(ok)
        return {p: accepted[p] / proposed[p] for p in proposed}


def jain_fairness(values: Sequence[float]) -> float:
    """Compute Jain's fairness index for a sequence of values."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0 or np.all(arr == 0):
        return 0.0
    num = arr.sum() ** 2
    den = arr.size * np.sum(arr ** 2)
    return float(num / den) if den > 0 else 0.0


def gini_coefficient(values: Sequence[float]) -> float:
    """Compute the Gini coefficient; negative inputs are shifted to start at zero."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    if np.any(arr < 0):
        arr = arr - arr.min()
    if arr.sum() == 0:
        return 0.0
    arr = np.sort(arr)
    n = arr.size
    index = np.arange(1, n + 1)
    return float((2 * np.sum(index * arr)) / (n * arr.sum()) - (n + 1) / n)


def compute_round_statistics(results: List[Dict[str, Any]], validator_ids: Optional[Sequence[str]] = None):
    """Collect score trajectories and selection statistics from round records.

    Parameters
    ----------
    results: List[Dict[str, Any]]
        Round records returned by :meth:`posyg.network.Network.run_consensus_round`
        (each holding ``round``, ``proposer``, ``valid`` and ``scores``).
    validator_ids: Sequence[str], optional
        Validators to report on. Defaults to the ids found in the first record,
        in that record's order.

    Returns
    -------
    Dict[str, Any]
        ``scores_per_round``
            ``{validator_id: [score after round 1, ...]}``.
        ``proposer_counts``
            Number of rounds each validator proposed.
        ``acceptance_rate``
            Fraction of rounds whose block was accepted.
        ``selection_fairness``
            Jain's index over proposer counts.
        ``score_gini``
            Gini coefficient of the final scores.
    """
    if validator_ids is None:
        validator_ids = list(results[0]["scores"].keys()) if results else []
    ids = list(validator_ids)

    trajectories: Dict[str, List[float]] = {vid: [] for vid in ids}
    counts: Dict[str, int] = {vid: 0 for vid in ids}
    accepted = 0
    for res in results:
        for vid in ids:
            trajectories[vid].append(float(res["scores"][vid]))
        if res["proposer"] in counts:
            counts[res["proposer"]] += 1
        accepted += int(bool(res["valid"]))

    final_scores = [traj[-1] for traj in trajectories.values() if traj]
    return {
        "scores_per_round": trajectories,
        "proposer_counts": counts,
        "acceptance_rate": accepted / len(results) if results else 0.0,
        "selection_fairness": jain_fairness(list(counts.values())),
        "score_gini": gini_coefficient(final_scores),
    }
