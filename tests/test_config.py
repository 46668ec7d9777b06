import json

import pytest

from cancer_knn.config import K_GRID, SCALING_STRATEGIES, SEED, ExperimentConfig, load_config
from cancer_knn.errors import ConfigError


def _write(tmp_path, payload):
    path = tmp_path / "experiment.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_defaults():
    cfg = load_config()
    assert cfg.holdout_size == 100
    assert cfg.seed == SEED
    assert cfg.scaling_strategies == SCALING_STRATEGIES
    assert cfg.k_values == K_GRID
    assert cfg.figs_dir.endswith("figs")


def test_defaults_are_not_shared():
    a = ExperimentConfig()
    a.k_values.append(99)
    assert ExperimentConfig().k_values == K_GRID


def test_json_overrides(tmp_path):
    cfg = load_config(_write(tmp_path, {"holdout_size": 50, "seed": None, "scaling_strategies": ["zscore"], "k_values": [3, 7]}))
    assert cfg.holdout_size == 50
    assert cfg.seed is None
    assert cfg.scaling_strategies == ["zscore"]
    assert cfg.k_values == [3, 7]
    assert cfg.to_dict()["k_values"] == [3, 7]


@pytest.mark.parametrize("payload", [
    {"holdout": 10},
    {"scaling_strategies": ["robust"]},
    {"scaling_strategies": []},
    {"scaling_strategies": ["minmax", "minmax"]},
    {"k_values": [1, "5"]},
    {"k_values": []},
    {"seed": "42"},
    {"holdout_size": "100"},
    [1, 2, 3],
])
def test_invalid_config(tmp_path, payload):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, payload))


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))
