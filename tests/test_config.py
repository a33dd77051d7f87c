import json

import pytest

from trifield.config import config_from_mapping, load_config
from trifield.errors import ConfigError
from trifield.options import StopRule
from trifield.region import PolygonRegion


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_config_resolves_relative_paths(tmp_path):
    path = _write(
        tmp_path / "run.json",
        {
            "allowed_area": [[0, 0], [40, 0], [40, 40], [0, 40]],
            "template": "template.json",
            "output": "levels/out.json",
            "seed": 5,
            "placement": {"stop_rule": "rejections", "max_rejections": 25},
        },
    )

    config = load_config(path)

    assert config.template == tmp_path / "template.json"
    assert config.output == tmp_path / "levels" / "out.json"
    assert config.seed == 5
    assert config.placement.stop_rule is StopRule.REJECTIONS
    region = config.build_region()
    assert isinstance(region, PolygonRegion)
    assert len(region.vertices) == 4


def test_defaults_when_optional_keys_missing():
    config = config_from_mapping({"allowed_area": [[0, 0], [1, 0], [0, 1]]}, base_dir="/data")

    assert config.template is None
    assert str(config.output).endswith("out.json")
    assert config.seed is None
    assert config.include_region is False


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"allowed_area": []},
        {"allowed_area": [[0, 0], [1, 0]]},
        {"allowed_area": [[0, 0], [1, 0], [0, 1]], "seed": "abc"},
        {"allowed_area": [[0, 0], [1, 0], [0, 1]], "placement": {"p_marker": 2}},
        {"allowed_area": [[0, 0], [1, 0], [0, 1]], "placement": []},
        {"allowed_area": [[0, 0], [1, 0], [0, 1]], "output": 3},
    ],
)
def test_invalid_mappings_raise_config_error(data):
    with pytest.raises(ConfigError):
        config_from_mapping(data)


def test_load_config_file_errors(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")
    with pytest.raises(ConfigError):
        load_config(broken)
