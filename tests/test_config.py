"""Configuration models and YAML round-trip."""

import pytest
import yaml

from spindle.core.config import (
    SpindleConfig,
    default_config,
    load_config,
    make_optimization_config,
    merge_config,
    save_config,
)
from spindle.core.errors import ConfigurationError


def test_defaults():
    cfg = default_config()
    assert cfg.optimization.pop_size == 50
    assert cfg.optimization.n_gen == 20
    assert cfg.optimization.crossover_alpha == 0.5
    assert cfg.optimization.mutation_prob == 0.1
    assert cfg.optimization.eta_m == 20.0
    assert cfg.maintenance.k == 3
    assert cfg.maintenance.n_synthetic == 100


def test_save_load(tmp_path):
    cfg = merge_config(default_config(), {"optimization": {"pop_size": 64, "seed": 9}})
    path = tmp_path / "nested" / "run.yaml"
    save_config(cfg, path)
    loaded = load_config(path)
    assert loaded == cfg


def test_load_partial_file(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text(yaml.safe_dump({"optimization": {"n_gen": 5}}))
    cfg = load_config(path)
    assert cfg.optimization.n_gen == 5
    assert cfg.optimization.pop_size == 50


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == SpindleConfig()


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_invalid_values(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"optimization": {"load_factor": 3.0}}))
    with pytest.raises(ConfigurationError) as info:
        load_config(path)
    assert info.value.field == "optimization.load_factor"
    assert info.value.value == 3.0


def test_merge_keeps_untouched_sections():
    cfg = merge_config(default_config(), {"logging": {"level": "DEBUG"}})
    assert cfg.logging.level == "DEBUG"
    assert cfg.optimization == default_config().optimization


def test_merge_rejects_unknown_level():
    with pytest.raises(ConfigurationError, match="logging.level"):
        merge_config(default_config(), {"logging": {"level": "LOUD"}})


def test_make_optimization_config():
    cfg = make_optimization_config(pop_size=12, n_gen=2, duration_s=1.0)
    assert cfg.pop_size == 12
    with pytest.raises(ConfigurationError, match="n_gen"):
        make_optimization_config(n_gen=0)
