"""
Markdown detailed report — Full category-by-category report rendered via Jinja2.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from ..scoring.models import CCIResult, Parameter
from .templating import category_sections, render_template


def export_markdown(
    result: CCIResult,
    parameters: list[Parameter],
    output_dir: Path,
    report_id: str,
) -> Path:
    """
    Generate the detailed Markdown report: score summary, function dashboard,
    category tables and per-parameter detail.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / f"detailed_report_{report_id}.md"

    content = render_template(
        "detailed_report.md.j2",
        report_id=report_id,
        generated_utc=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
        result=result,
        sections=category_sections(result, parameters),
        parameter_count=len(parameters),
    )

    with open(filepath, "w", encoding="utf-8") as fh:
        fh.write(content)

    return filepath
