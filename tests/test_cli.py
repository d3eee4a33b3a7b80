from pathlib import Path

import ujson as json
from typer.testing import CliRunner

from evolution_engine import api
from evolution_engine.cli import app


def test_cli_run_and_show(tmp_path: Path, spea2_spec):
    cfg = tmp_path / "spec.yaml"
    api.save_spec(spea2_spec, cfg)
    out = tmp_path / "archive.json"
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["run", str(cfg), "--generations", "2", "--seed", "3", "--out", str(out)],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["age"] == 2
    assert data["goals"] == ["origin", "corner"]
    assert len(data["members"]) == 10

    shown = runner.invoke(app, ["show", str(out)])
    assert shown.exit_code == 0, shown.output
    assert "origin" in shown.output


def test_cli_run_rejects_unknown_operator(tmp_path: Path, integer_spec):
    data = integer_spec.model_dump(mode="python")
    data["unary_ops"] = [{"name": "teleport", "repeat": 3}]
    cfg = tmp_path / "spec.json"
    cfg.write_text(json.dumps(data))
    result = CliRunner().invoke(app, ["run", str(cfg), "--out", str(tmp_path / "a.json")])
    assert result.exit_code != 0
    assert not (tmp_path / "a.json").exists()


def test_cli_show_missing_file(tmp_path: Path):
    result = CliRunner().invoke(app, ["show", str(tmp_path / "missing.json")])
    assert result.exit_code != 0


def test_cli_problems_and_version():
    runner = CliRunner()
    listed = runner.invoke(app, ["problems"])
    assert listed.exit_code == 0, listed.output
    assert "unit_square" in listed.output
    assert "integer_walk" in listed.output
    assert runner.invoke(app, ["version"]).exit_code == 0
