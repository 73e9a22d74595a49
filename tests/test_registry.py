import pytest

from posyg.core.registry import Registry, SCORING, SELECTION
from posyg.network import Network  # noqa: F401  # registers built-ins


def test_builtin_strategies_registered():
    assert {"synergy", "none"} <= set(SCORING.available())
    assert {"weighted_random", "uniform"} <= set(SELECTION.available())


def test_lookup_is_case_insensitive():
    assert SCORING.get("Synergy") is SCORING.get("synergy")


def test_unknown_name_raises():
    with pytest.raises(KeyError, match="unknown_thing"):
        SELECTION.get("unknown_thing")


def test_duplicate_registration_raises():
    reg = Registry("demo")

    @reg.register("a")
    class A:
        pass

    with pytest.raises(ValueError, match="Duplicate"):
        reg.register("A")(A)
