import dataclasses

import pytest

from posyg.core.errors import InvalidBlock
from posyg.core.types import Block, INVALID_TX, SENTINEL_BLOCK_ID
from posyg.validator import Validator


def test_honest_proposal_uses_next_sequence_number():
    v = Validator("v1", stake=100)
    b = v.propose_block()
    assert b.id == 1
    assert b.proposer == "v1"
    assert b.transactions == ()
    # proposing is a pure query
    assert v.propose_block() == b
    v.increment_proposed_blocks()
    assert v.propose_block().id == 2


def test_malicious_proposal_carries_marker():
    v = Validator("m", stake=100, is_malicious=True)
    v.increment_proposed_blocks()
    b = v.propose_block()
    assert b.id == SENTINEL_BLOCK_ID
    assert b.transactions == (INVALID_TX,)
    assert v.proposed_blocks == 1


def test_validate_block():
    v = Validator("v1", stake=100)
    assert v.validate_block(Block(id=3, proposer="x", transactions=["tx-a", "tx-b"])) is True
    bad = Block(id=0, proposer="x", transactions=["tx-a", INVALID_TX])
    with pytest.raises(InvalidBlock) as exc:
        v.validate_block(bad)
    assert exc.value.block is bad
    assert exc.value.validator_id == "v1"


def test_block_is_immutable():
    b = Block(id=1, proposer="v1", transactions=["a"])
    assert b.transactions == ("a",)
    with pytest.raises(dataclasses.FrozenInstanceError):
        b.id = 2


def test_identity_stake_and_flag_are_read_only():
    v = Validator("v1", stake=100, is_malicious=True)
    with pytest.raises(AttributeError):
        v.stake = 5
    with pytest.raises(AttributeError):
        v.is_malicious = False
    with pytest.raises(AttributeError):
        v.id = "other"


def test_negative_stake_rejected():
    with pytest.raises(ValueError):
        Validator("v1", stake=-1)


def test_accepted_leads_proposed_by_at_most_one():
    v = Validator("v1", stake=100)
    v.increment_accepted_blocks()
    with pytest.raises(ValueError):
        v.increment_accepted_blocks()
    v.increment_proposed_blocks()
    assert v.accepted_blocks == v.proposed_blocks == 1


def test_snapshot():
    v = Validator("v1", stake=250, synergy_score=1.5)
    assert v.snapshot() == {
        "id": "v1",
        "stake": 250,
        "malicious": False,
        "score": 1.5,
        "violations": 0,
        "proposed": 0,
        "accepted": 0,
    }
