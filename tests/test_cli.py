from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from prophet_tracker.cli import app

SHIPPED_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def _write_config(tmp_path: Path, text: str = "{}") -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(text, encoding="utf-8")
    return config_path


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "render" in result.stdout
    assert "charts" in result.stdout
    assert "validate" in result.stdout


def test_render_command_writes_page(artifact_path: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "site"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "render",
            "--artifact",
            str(artifact_path),
            "--out",
            str(out_dir),
            "--config",
            str(_write_config(tmp_path)),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Page written to:" in result.stdout
    assert (out_dir / "index.html").exists()
    assert not any((out_dir / "figures").iterdir())


def test_render_command_figures_flag_overrides_config(artifact_path: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "site"
    config_path = _write_config(tmp_path, "outputs:\n  figures: false\n")
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "render",
            "--artifact",
            str(artifact_path),
            "--out",
            str(out_dir),
            "--config",
            str(config_path),
            "--figures",
        ],
    )

    assert result.exit_code == 0, result.output
    assert (out_dir / "figures" / "timeline.png").exists()


def test_render_command_uses_env_artifact(
    monkeypatch, artifact_path: Path, tmp_path: Path
) -> None:
    monkeypatch.setenv("PROPHET_TRACKER_ARTIFACT", str(artifact_path))
    out_dir = tmp_path / "site"
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["render", "--out", str(out_dir), "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert (out_dir / "index.html").exists()


def test_validate_with_shipped_config_reads_env_artifact(
    monkeypatch, artifact_path: Path, tmp_path: Path
) -> None:
    workdir = tmp_path / "workdir"
    (workdir / "configs").mkdir(parents=True)
    shutil.copy(SHIPPED_CONFIG, workdir / "configs" / "default.yaml")
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("PROPHET_TRACKER_ARTIFACT", str(artifact_path))
    runner = CliRunner()
    result = runner.invoke(app, ["validate"])

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == f"{artifact_path}: OK"


def test_render_command_reports_missing_artifact(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "render",
            "--artifact",
            str(tmp_path / "missing.json"),
            "--out",
            str(tmp_path / "site"),
            "--config",
            str(_write_config(tmp_path)),
        ],
    )

    assert result.exit_code != 0
    assert not (tmp_path / "site").exists()


def test_charts_command_prints_descriptions(artifact_path: Path, tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["charts", "--artifact", str(artifact_path), "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert sorted(payload) == ["age", "probability", "timeline"]
    assert payload["timeline"]["annotations"][0]["name"] == "Adams"


def test_charts_command_writes_output_file(artifact_path: Path, tmp_path: Path) -> None:
    output = tmp_path / "charts" / "charts.json"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "charts",
            "--artifact",
            str(artifact_path),
            "--config",
            str(_write_config(tmp_path)),
            "--output",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text(encoding="utf-8"))["age"]["id"] == "age"


def test_validate_command_accepts_clean_artifact(artifact_path: Path, tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["validate", "--artifact", str(artifact_path), "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout.strip().endswith(": OK")


def test_validate_command_lists_issues(
    artifact_payload: dict[str, Any], tmp_path: Path
) -> None:
    artifact_payload["metadata"]["totalApostles"] = 15
    artifact_payload["timeline"][3]["Adams"] = 10.0
    artifact = tmp_path / "apostles.json"
    artifact.write_text(json.dumps(artifact_payload), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["validate", "--artifact", str(artifact), "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert "2 issue(s)" in result.stdout
    assert "- [total_apostles]" in result.stdout
    assert "- [timeline_sums]" in result.stdout
