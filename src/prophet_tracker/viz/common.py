from __future__ import annotations

import io
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402


def save_figure(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def figure_to_svg() -> str:
    """Serialize the current figure as inline SVG markup and close it."""
    buffer = io.StringIO()
    plt.tight_layout()
    plt.savefig(buffer, format="svg")
    plt.close()
    markup = buffer.getvalue()
    # Drop the XML prolog and doctype so the markup can sit inside HTML.
    start = markup.find("<svg")
    return markup[start:] if start >= 0 else markup
