#!/usr/bin/env python3
from __future__ import annotations
import argparse
import csv
import sys
from typing import Any, Dict, List, Optional

from posyg.config import build_network_from_yaml
from posyg.core.errors import InsufficientBalance
from posyg.core.types import ValidatorSpec
from posyg.ledger import BasicExecutor, BridgeService
from posyg.metrics import compute_round_statistics
from posyg.network import Network, NetworkConfig

LOG_FIELDS = [
    "round",
    "validator_id",
    "stake",
    "score",
    "violations",
    "proposed",
    "accepted",
    "is_proposer",
    "is_malicious",
]


def default_specs(n: int, stakes: List[int], malicious_ids: set[int]) -> List[ValidatorSpec]:
    """Build ``n`` validators; ``stakes`` is reused cyclically when shorter than ``n``."""
    if n <= 0:
        raise ValueError(f"need at least one validator, got {n}")
    if not stakes:
        raise ValueError("need at least one stake value")
    return [
        ValidatorSpec(id=f"validator_{i + 1}", stake=stakes[i % len(stakes)], malicious=(i in malicious_ids))
        for i in range(n)
    ]


def print_round(net: Network, round_idx: Optional[int] = None) -> None:
    if round_idx is not None:
        print(f"--- Round {round_idx} ---")
    for v in net.validators:
        print(f"  {v.id}: score={v.get_synergy_score():.2f} violations={v.violations} "
              f"proposed={v.proposed_blocks} accepted={v.accepted_blocks}")


def print_summary(net: Network, results: List[Dict[str, Any]]) -> Dict[str, Any]:
    stats = compute_round_statistics(results, [v.id for v in net.validators])
    rates = {vid: round(r, 2) for vid, r in net.metrics.acceptance_rates().items()}
    print(f"[Info] Acceptance rates: {rates}")
    print(f"[Info] Proposer counts: {stats['proposer_counts']}")
    print(f"[Info] Round acceptance: {stats['acceptance_rate']:.2f} "
          f"selection fairness: {stats['selection_fairness']:.3f} "
          f"score gini: {stats['score_gini']:.3f}")
    return stats


def run_ledger_demo() -> Dict[str, int]:
    """Exercise the bridge and execution ledgers independently of consensus."""
    bridge = BridgeService()
    bridge.deposit("alice", 100)
    bridge.withdraw("alice", 40)
    try:
        bridge.withdraw("bob", 10)
    except InsufficientBalance as err:
        print(f"[Info] {err}")
    print(f"[Info] proof accepted: {bridge.verify_proof(b'merkle-proof')}")

    executor = BasicExecutor()
    executor.set_balance("0xabc", 500)
    executor.execute_transaction("0xabc", "0xdef", b"\x01\x02")
    return {
        "bridge:alice": bridge.get_balance("alice"),
        "exec:0xabc": executor.get_balance("0xabc"),
        "exec:0xdef": executor.get_balance("0xdef"),
    }


def run(net: Network, rounds: int, out: Optional[str] = None, quiet: bool = False):
    log_file = open(out, "w", newline="") if out else None
    writer = None
    if log_file is not None:
        writer = csv.DictWriter(log_file, fieldnames=LOG_FIELDS)
        writer.writeheader()

    results = []
    try:
        for _ in range(rounds):
            res = net.run_consensus_round()
            results.append(res)
            if not quiet:
                print_round(net, res["round"])
            if writer is not None:
                for row in net.snapshot():
                    writer.writerow({
                        "round": res["round"],
                        "validator_id": row["id"],
                        "stake": row["stake"],
                        "score": f"{row['score']:.6f}",
                        "violations": row["violations"],
                        "proposed": row["proposed"],
                        "accepted": row["accepted"],
                        "is_proposer": int(row["id"] == res["proposer"]),
                        "is_malicious": int(row["malicious"]),
                    })
    finally:
        if log_file is not None:
            log_file.close()
    return results


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Proof-of-Synergy consensus simulation")
    ap.add_argument("--config", default=None, help="YAML config with validators and strategy settings")
    ap.add_argument("--validators", type=int, default=3)
    ap.add_argument("--stakes", type=str, default="1000,1200,800",
                    help="comma separated stakes, reused cyclically across generated validators")
    ap.add_argument("--malicious-ids", type=str, default="2",
                    help="0-based indices of malicious validators, comma separated, e.g. 2 or 0,3")
    ap.add_argument("--rounds", type=int, default=10)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--out", default=None, help="CSV file for the per-round log")
    ap.add_argument("--with-ledgers", action="store_true", help="also run the bridge/execution ledger demo")
    ap.add_argument("--quiet", action="store_true", help="suppress per-round tables")
    args = ap.parse_args(argv)

    if args.config:
        net = build_network_from_yaml(args.config, verbose=not args.quiet)
    else:
        mal = {int(x) for x in args.malicious_ids.split(",") if x.strip()}
        stakes = [int(x) for x in args.stakes.split(",") if x.strip()]
        net = Network(
            default_specs(args.validators, stakes, mal),
            NetworkConfig(seed=args.seed),
            verbose=not args.quiet,
        )
    print(f"[Info] Validators: {[v.id for v in net.validators]}; "
          f"malicious: {[v.id for v in net.validators if v.is_malicious]}")

    results = run(net, args.rounds, out=args.out, quiet=args.quiet)

    print("=== Final state ===")
    print_round(net)
    print_summary(net, results)

    if args.with_ledgers:
        balances = run_ledger_demo()
        print(f"[Info] Ledger balances: {balances}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
