from __future__ import annotations

import json
import logging
from pathlib import Path

from prophet_tracker.io.schema import ApostlesData, parse_artifact

LOGGER = logging.getLogger(__name__)


def load_artifact(path: Path) -> ApostlesData:
    """Read and parse the artifact; every call reads the file again."""
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"artifact {path} is not valid JSON: {exc.msg}") from exc
    data = parse_artifact(payload)
    LOGGER.info(
        "Loaded artifact %s: %d apostles, %d timeline entries",
        path,
        len(data.apostles),
        len(data.timeline),
    )
    return data
