from __future__ import annotations
from typing import Any, Dict, List

import yaml

from .core.types import ValidatorSpec
from .network import Network, NetworkConfig


def _load_yaml(path: str) -> Dict[str, Any]:
    print(f"load yaml path: {path}")
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(cfg).__name__}")
    return cfg

def _validator_specs(entries: Any) -> List[ValidatorSpec]:
    if not isinstance(entries, list) or not entries:
        raise ValueError("Config needs a non-empty 'validators' list")
    specs = []
    for idx, e in enumerate(entries):
        if not isinstance(e, dict) or "id" not in e:
            raise ValueError(f"validators[{idx}] must be a mapping with an 'id'")
        specs.append(ValidatorSpec(
            id=str(e["id"]),
            stake=int(e.get("stake", 0)),
            malicious=bool(e.get("malicious", False)),
            score=float(e.get("score", 0.0)),
        ))
    return specs

def build_network_from_dict(cfg: Dict[str, Any], *, verbose: bool = False) -> Network:
    def _get(section: str, default_name: str):
        sec = cfg.get(section, default_name)
        if isinstance(sec, dict):
            return sec.get("name", default_name), sec.get("params", {}) or {}
        return str(sec), {}

    names = {}
    params = {}
    for section, default_name in [
        ("scoring", "synergy"),
        ("selection", "weighted_random"),
    ]:
        n, p = _get(section, default_name)
        names[section] = n
        params[section] = p

    seed = cfg.get("seed")
    nc = NetworkConfig(
        scoring=names["scoring"],
        selection=names["selection"],
        seed=int(seed) if seed is not None else None,
    )
    return Network(_validator_specs(cfg.get("validators")), nc, strategy_params=params, verbose=verbose)

def build_network_from_yaml(path: str, *, verbose: bool = False) -> Network:
    cfg = _load_yaml(path)
    return build_network_from_dict(cfg, verbose=verbose)
