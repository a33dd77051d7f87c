import json

import pytest

import trifield.__main__ as cli


def _config(tmp_path, **extra):
    data = {
        "allowed_area": [[0, 0], [40, 0], [40, 40], [0, 40]],
        "output": "out.json",
        "seed": 3,
        "placement": {"max_attempts": 150},
    }
    data.update(extra)
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_main_writes_level_and_tikz(tmp_path, capsys):
    template = tmp_path / "template.json"
    template.write_text(json.dumps({"title": "Template", "polygons": [], "objects": []}), encoding="utf-8")
    config_path = _config(tmp_path, template="template.json", include_region=True)
    tikz_path = tmp_path / "preview" / "run.tex"

    cli.main([str(config_path), "--tikz-output-path", str(tikz_path)])

    level = json.loads((tmp_path / "out.json").read_text(encoding="utf-8"))
    assert level["title"] == "Template auto lev"
    # Region outline first, then at least one triangle.
    assert len(level["polygons"]) >= 2
    assert all(len(poly) == 3 for poly in level["polygons"][1:])
    assert all(obj["type"] == "apple" for obj in level["objects"])
    assert tikz_path.read_text(encoding="utf-8").startswith("\\documentclass")
    assert "Level written to" in capsys.readouterr().out


def test_main_flags_override_config(tmp_path, monkeypatch):
    config_path = _config(tmp_path)
    seen = {}
    original = cli.generate_placements

    def _fake_generate(region, rng, options, progress=None):
        seen["max_attempts"] = options.max_attempts
        return original(region, rng, options, progress=progress)

    monkeypatch.setattr(cli, "generate_placements", _fake_generate)
    output = tmp_path / "elsewhere.json"

    cli.main([str(config_path), "--max-attempts", "20", "--seed", "8", "--output", str(output)])

    assert seen["max_attempts"] == 20
    assert output.exists()


def test_main_exits_with_error_for_missing_config(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path / "nope.json")])

    assert excinfo.value.code == 1
