from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import numpy as np
from ..core.registry import SELECTION

@dataclass
class SelectionParams:
    stake_weight: float = 0.01

@SELECTION.register("weighted_random")
class WeightedRandomSelector:
    """Draw a proposer with probability proportional to ``score + stake * stake_weight``.

    A zero total weight falls back to a uniform draw over all validators. If
    rounding leaves the cumulative walk short of the drawn value, index 0 is
    returned; selection never fails on a non-empty validator set.
    """

    def __init__(self, params: SelectionParams | None = None, **kwargs) -> None:
        self.p = params or SelectionParams(**kwargs)

    def weights(self, validators: Sequence) -> np.ndarray:
        return np.asarray(
            [v.get_synergy_score() + v.stake * self.p.stake_weight for v in validators],
            dtype=float,
        )

    def select(self, validators: Sequence, rng) -> int:
        if not validators:
            raise ValueError("select() received no validators")
        w = self.weights(validators)
        total_weight = float(w.sum())
        if total_weight == 0.0:
            return int(rng.integers(len(validators)))

        r = float(rng.random()) * total_weight
        cumulative_weight = 0.0
        for i, wv in enumerate(w):
            cumulative_weight += float(wv)
            if cumulative_weight >= r:
                return i
        return 0


@SELECTION.register("uniform")
class UniformSelector:
    """Selector that ignores weights; every validator is equally likely."""

    def __init__(self, params: SelectionParams | None = None, **kwargs) -> None:  # noqa: D401
        self.p = params or SelectionParams(**kwargs)

    def select(self, validators: Sequence, rng) -> int:
        if not validators:
            raise ValueError("select() received no validators")
        return int(rng.integers(len(validators)))
