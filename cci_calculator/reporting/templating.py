"""
Shared helpers for report rendering — Jinja2 environment, band icons and file naming.
"""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..scoring.frameworks import group_by_category
from ..scoring.maturity import score_band
from ..scoring.models import CCIResult, Parameter

TEMPLATE_DIR = Path(__file__).parent / "templates"

BAND_ICONS = {
    "strong":   "🟢",
    "adequate": "🟡",
    "weak":     "🟠",
    "critical": "🔴",
}


def band_icon(score: float) -> str:
    return BAND_ICONS[score_band(score)]


def safe_name(text: str) -> str:
    """Collapse whitespace runs to underscores for use in file names."""
    return re.sub(r"\s+", "_", text.strip()) or "Organization"


def render_template(name: str, **context) -> str:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["band_icon"] = band_icon
    return env.get_template(name).render(**context)


def category_sections(result: CCIResult, parameters: list[Parameter]) -> list[dict]:
    """Pair each category score with its parameters and their computed scores."""
    scores = {ps.measure_id: ps for ps in result.parameter_scores}
    by_category = {cs.category: cs for cs in result.category_scores}
    return [
        {
            "score": by_category[category],
            "rows": [(p, scores[p.measure_id]) for p in params],
        }
        for category, params in group_by_category(parameters).items()
    ]
