from __future__ import annotations

import json
from pathlib import Path

import typer

from prophet_tracker.config import DEFAULT_CONFIG_PATH, AppConfig, default_config, load_config
from prophet_tracker.io.integrity import DEFAULT_SUM_TOLERANCE, check_artifact
from prophet_tracker.io.read import load_artifact
from prophet_tracker.io.write import write_json
from prophet_tracker.logging import configure_logging
from prophet_tracker.report.page import build_charts, render_page

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is None:
        if DEFAULT_CONFIG_PATH.exists():
            return load_config(DEFAULT_CONFIG_PATH)
        return default_config()
    return load_config(config_path)


def _resolve_artifact(artifact: Path | None, cfg: AppConfig) -> Path:
    path = artifact or cfg.artifact_path()
    if not path.exists():
        raise typer.BadParameter(
            f"Artifact not found: {path}. Pass --artifact or set artifact.path in config "
            "or PROPHET_TRACKER_ARTIFACT."
        )
    return path


@app.command()
def render(
    artifact: Path | None = typer.Option(None, readable=True, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    figures: bool | None = typer.Option(
        None,
        "--figures/--no-figures",
        help="Also save each chart as an image under out/figures. Defaults to config.",
    ),
) -> None:
    """Render the tracker page from the artifact."""
    configure_logging()
    cfg = _load_app_config(config)
    if figures is not None:
        cfg.outputs.figures = figures
    artifact_path = _resolve_artifact(artifact, cfg)
    page_path = render_page(artifact_path=artifact_path, out_dir=out, config=cfg)
    typer.echo(f"Page written to: {page_path}")


@app.command()
def charts(
    artifact: Path | None = typer.Option(None, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    output: Path | None = typer.Option(
        None,
        resolve_path=True,
        help="Write the chart descriptions here instead of printing them.",
    ),
) -> None:
    """Emit the chart descriptions as JSON without rendering the page."""
    configure_logging("WARNING")
    cfg = _load_app_config(config)
    artifact_path = _resolve_artifact(artifact, cfg)
    payload = build_charts(load_artifact(artifact_path), cfg)
    if output is None:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    write_json(payload, output)
    typer.echo(f"Chart descriptions written to: {output}")


@app.command()
def validate(
    artifact: Path | None = typer.Option(None, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    sum_tolerance: float = typer.Option(
        DEFAULT_SUM_TOLERANCE,
        min=0.0,
        help="Allowed distance from 100 for each timeline date's total.",
    ),
) -> None:
    """Check the artifact against the producer contract."""
    configure_logging("WARNING")
    cfg = _load_app_config(config)
    artifact_path = _resolve_artifact(artifact, cfg)
    issues = check_artifact(load_artifact(artifact_path), sum_tolerance=sum_tolerance)
    if not issues:
        typer.echo(f"{artifact_path}: OK")
        return
    typer.echo(f"{artifact_path}: {len(issues)} issue(s)")
    for issue in issues:
        typer.echo(f"- [{issue.code}] {issue.message}")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
