import pytest

from scalargrad import GraphConfig


def test_defaults():
    cfg = GraphConfig()
    assert cfg.pow_rule == "standard"
    assert (cfg.init_low, cfg.init_high) == (-1.0, 1.0)


def test_unknown_pow_rule_is_rejected():
    with pytest.raises(ValueError):
        GraphConfig(pow_rule="textbook")


def test_empty_init_range_is_rejected():
    with pytest.raises(ValueError):
        GraphConfig(init_low=1.0, init_high=1.0)


def test_make_rng_is_seeded():
    cfg = GraphConfig(seed=11)
    assert cfg.make_rng().uniform() == cfg.make_rng().uniform()
