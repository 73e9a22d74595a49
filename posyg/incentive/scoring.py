from __future__ import annotations
from dataclasses import dataclass
from ..core.registry import SCORING

@dataclass
class ScoringParams:
    alpha: float = 0.4          # participation (accepted block)
    beta: float = 0.3           # stake contribution
    gamma: float = 0.2          # validation term, currently always zero
    delta: float = 0.5          # penalty weight
    base_penalty: float = 10.0
    multiplier: float = 2.0
    stake_factor: float = 0.01

@SCORING.register("synergy")
class SynergyScoring:
    """Proof-of-Synergy score update.

    ``score += alpha*H + beta*E + gamma*V - delta*P`` where ``H`` is 1 for an
    accepted block, ``E = stake * stake_factor``, ``V`` is reserved and inert,
    and ``P`` escalates as ``base_penalty * multiplier ** (violations - 1)``
    for the violation being charged in this round.
    """

    def __init__(self, params: ScoringParams | None = None, **kwargs) -> None:
        self.p = params or ScoringParams(**kwargs)

    def participation(self, accepted: bool) -> float:
        return 1.0 if accepted else 0.0

    def stake_term(self, stake: int) -> float:
        return float(stake) * self.p.stake_factor

    def validation_term(self) -> float:
        return 0.0

    def penalty(self, violations: int) -> float:
        """Penalty for the ``violations``-th violation (1-based); 0 means none charged."""
        if violations <= 0:
            return 0.0
        return self.p.base_penalty * self.p.multiplier ** (violations - 1)

    def delta(self, *, stake: int, accepted: bool, penalty: float) -> float:
        return (
            self.p.alpha * self.participation(accepted)
            + self.p.beta * self.stake_term(stake)
            + self.p.gamma * self.validation_term()
            - self.p.delta * penalty
        )


@SCORING.register("none")
class NoScoring:
    """Scoring policy that leaves every synergy score untouched."""

    def __init__(self, params: ScoringParams | None = None, **kwargs) -> None:  # noqa: D401
        self.p = params or ScoringParams(**kwargs)

    def penalty(self, violations: int) -> float:
        return 0.0

    def delta(self, *, stake: int, accepted: bool, penalty: float) -> float:
        return 0.0
