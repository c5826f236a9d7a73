from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from time import perf_counter
from typing import Any

import pandas as pd
from jinja2 import Environment, FileSystemLoader, select_autoescape

from prophet_tracker.charts.age import build_age_chart
from prophet_tracker.charts.formatting import format_count, format_long_datetime, round_half_up
from prophet_tracker.charts.probability import build_probability_chart
from prophet_tracker.charts.timeline import build_timeline_chart
from prophet_tracker.config import AppConfig
from prophet_tracker.io.read import load_artifact
from prophet_tracker.io.schema import ApostlesData
from prophet_tracker.io.write import write_json
from prophet_tracker.paths import build_output_paths
from prophet_tracker.report.chrome import build_layout
from prophet_tracker.viz.charts import render_chart_svg, save_chart_figure

LOGGER = logging.getLogger(__name__)

CHART_ORDER = ("age", "probability", "timeline")

DISCLAIMER = (
    "These probabilities are statistical estimates for educational purposes only. "
    "They do not represent official church doctrine or predictions. Apostolic succession "
    "is determined by seniority and inspiration, not probability."
)


@dataclass(frozen=True, slots=True)
class SummaryTile:
    label: str
    value: int | None

    @property
    def display(self) -> str:
        return "n/a" if self.value is None else format_count(self.value)


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if hasattr(value, "item"):
        try:
            value = value.item()
        except (TypeError, ValueError):
            pass
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    return value


def _script_json(value: Any) -> str:
    # Keeps a literal "</script>" inside a string from closing the tag.
    return json.dumps(value, ensure_ascii=False, allow_nan=False).replace("</", "<\\/")


def average_age(data: ApostlesData) -> int | None:
    if not data.apostles:
        return None
    ages = pd.Series([apostle.age for apostle in data.apostles], dtype="float64")
    return round_half_up(float(ages.mean()))


def build_summary_tiles(data: ApostlesData) -> list[SummaryTile]:
    return [
        SummaryTile(label="Total Apostles", value=data.metadata.total_apostles),
        SummaryTile(label="Average Age", value=average_age(data)),
        SummaryTile(label="Simulation Runs", value=data.metadata.simulation_runs),
    ]


def build_charts(data: ApostlesData, config: AppConfig) -> dict[str, dict[str, Any]]:
    charts = {
        "age": build_age_chart(data.apostles),
        "probability": build_probability_chart(data.apostles),
        "timeline": build_timeline_chart(
            data.timeline,
            data.last_names(),
            palette=config.charts.palette,
            stride=config.charts.timeline_stride,
            tooltip_min_percent=config.charts.tooltip_min_percent,
        ),
    }
    return _json_safe(charts)


def compose_page(
    data: ApostlesData,
    config: AppConfig,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Template context for the tracker page."""
    runs = format_count(data.metadata.simulation_runs)
    return {
        "layout": build_layout(
            current_tool=config.site.current_tool,
            show_header=config.site.show_header,
            show_footer=config.site.show_footer,
            now=now,
        ),
        "heading": {
            "title": "Prophet Probability Tracker",
            "subtitle": (
                "Statistical analysis of succession probabilities in the "
                "Quorum of the Twelve Apostles"
            ),
            "last_updated": format_long_datetime(data.metadata.generated_at),
        },
        "about": (
            f"This application uses actuarial science and Monte Carlo simulation ({runs} runs) "
            "to estimate the probability that each apostle will eventually become President "
            "of The Church of Jesus Christ of Latter-day Saints. Calculations are based on "
            "current ages, seniority (ordination dates), and CDC life expectancy data."
        ),
        "charts": build_charts(data, config),
        "tiles": [
            {"label": tile.label, "value": tile.value, "display": tile.display}
            for tile in build_summary_tiles(data)
        ],
        "disclaimer": DISCLAIMER,
        "page_footer": {
            "tagline": (
                "Prophet Probability Tracker | Statistical analysis for educational purposes only"
            ),
            "repository_url": config.site.repository_url,
        },
    }


def _save_figures(charts: dict[str, dict[str, Any]], figures_dir: Path, fmt: str) -> list[Path]:
    saved: list[Path] = []
    for chart_id in CHART_ORDER:
        try:
            saved.append(save_chart_figure(charts[chart_id], figures_dir / f"{chart_id}.{fmt}"))
        except Exception:
            LOGGER.exception("Failed saving %s chart figure", chart_id)
    return saved


def render_page(artifact_path: Path, out_dir: Path, config: AppConfig) -> Path:
    render_started = perf_counter()
    data = load_artifact(artifact_path)
    paths = build_output_paths(out_dir)

    compose_started = perf_counter()
    context = compose_page(data, config)
    compose_ms = round((perf_counter() - compose_started) * 1000.0, 3)

    svg_started = perf_counter()
    chart_svgs = {
        chart_id: render_chart_svg(context["charts"][chart_id]) for chart_id in CHART_ORDER
    }
    svg_ms = round((perf_counter() - svg_started) * 1000.0, 3)

    template = _template_env().get_template("page.html.j2")
    rendered = template.render(
        **context,
        chart_order=CHART_ORDER,
        chart_svgs=chart_svgs,
        chart_payload_json=_script_json(context["charts"]),
    )
    paths.page.write_text(rendered, encoding="utf-8")

    if config.outputs.write_chart_payload:
        write_json(context["charts"], paths.charts)
    figure_files: list[Path] = []
    if config.outputs.figures:
        figure_files = _save_figures(
            context["charts"], paths.figures, config.outputs.figures_format
        )

    runtime_metrics = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "artifact": str(artifact_path),
        "compose_ms": compose_ms,
        "svg_render_ms": svg_ms,
        "render_total_ms": round((perf_counter() - render_started) * 1000.0, 3),
        "page_html_bytes": int(paths.page.stat().st_size),
        "figure_files": sorted(path.name for path in figure_files),
    }
    write_json(runtime_metrics, paths.artifacts / "render_runtime.json")
    LOGGER.info(
        "Rendered %s (%d bytes) in %.1f ms",
        paths.page,
        runtime_metrics["page_html_bytes"],
        runtime_metrics["render_total_ms"],
    )
    return paths.page
