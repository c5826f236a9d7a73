from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class OutputPaths:
    root: Path
    page: Path
    charts: Path
    figures: Path
    artifacts: Path


def build_output_paths(out_dir: Path) -> OutputPaths:
    paths = OutputPaths(
        root=out_dir,
        page=out_dir / "index.html",
        charts=out_dir / "charts.json",
        figures=out_dir / "figures",
        artifacts=out_dir / "artifacts",
    )
    for path in (paths.root, paths.figures, paths.artifacts):
        path.mkdir(parents=True, exist_ok=True)
    return paths
