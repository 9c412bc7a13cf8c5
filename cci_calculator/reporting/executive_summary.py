"""
Executive summary — One-page CCI summary for leadership audiences.
"""

from __future__ import annotations

from pathlib import Path

from ..scoring.maturity import next_steps
from ..scoring.models import CCIResult, Parameter
from .templating import render_template

# Parameters listed under "Lowest Scoring Parameters"
WEAKEST_COUNT = 5


def export_executive_summary(
    result: CCIResult,
    parameters: list[Parameter],
    output_dir: Path,
    report_id: str,
) -> Path:
    """
    Generate a concise executive summary in Markdown.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / f"executive_summary_{report_id}.md"

    # Weightage breaks ties so heavier parameters surface first
    weakest = sorted(
        (ps for ps in result.parameter_scores if ps.score < 100),
        key=lambda ps: (ps.score, -ps.weightage),
    )[:WEAKEST_COUNT]

    content = render_template(
        "executive_summary.md.j2",
        report_id=report_id,
        result=result,
        next_steps=next_steps(result.total_score),
        weakest=weakest,
    )

    with open(filepath, "w", encoding="utf-8") as fh:
        fh.write(content)

    return filepath
