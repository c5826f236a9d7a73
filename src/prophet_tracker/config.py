from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from prophet_tracker.charts.palette import LINE_COLORS

ARTIFACT_ENV_VAR = "PROPHET_TRACKER_ARTIFACT"
DEFAULT_ARTIFACT_PATH = "public/apostles.json"

ToolName = Literal["prophet", "temples", "conference", "home"]


class ArtifactConfig(BaseModel):
    # Relative paths resolve against the process working directory.
    path: str | None = None


class ChartsConfig(BaseModel):
    timeline_stride: int = Field(default=3, ge=1)
    palette: list[str] = Field(default_factory=lambda: list(LINE_COLORS), min_length=1)
    tooltip_min_percent: float = Field(default=0.5, ge=0.0, le=100.0)


class SiteConfig(BaseModel):
    current_tool: ToolName | None = "prophet"
    show_header: bool = True
    show_footer: bool = True
    repository_url: str = "https://github.com/cnoyes/apostles"


class OutputsConfig(BaseModel):
    figures: bool = False
    figures_format: Literal["png", "svg", "pdf"] = "png"
    write_chart_payload: bool = True


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    artifact: ArtifactConfig = Field(default_factory=ArtifactConfig)
    charts: ChartsConfig = Field(default_factory=ChartsConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)

    def artifact_path(self) -> Path:
        return Path(self.artifact.path or DEFAULT_ARTIFACT_PATH)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _apply_environment(config: AppConfig) -> AppConfig:
    config.artifact.path = config.artifact.path or os.getenv(ARTIFACT_ENV_VAR)
    return config


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    return _apply_environment(AppConfig.model_validate(data))


def default_config() -> AppConfig:
    return _apply_environment(AppConfig())
