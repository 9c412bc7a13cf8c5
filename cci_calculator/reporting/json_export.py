"""
JSON exporter — Produces the full machine-readable output of an assessment.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from .. import __version__
from ..scoring.models import CCIResult, Parameter


def export_json(
    result: CCIResult,
    parameters: list[Parameter],
    output_dir: Path,
    report_id: str,
) -> Path:
    """
    Write the assessment result and parameter inputs to a JSON file.

    Returns:
        Path to the created JSON file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    payload = {
        "metadata": {
            "engine": "CCI Calculator",
            "version": __version__,
            "report_id": report_id,
            "generated_utc": datetime.now(timezone.utc).isoformat(),
            "framework": "SEBI CSCRF Cyber Capability Index",
        },
        "result": result.to_dict(),
        "parameters": [p.to_dict() for p in parameters],
    }

    filepath = output_dir / f"cci_report_{report_id}.json"

    with open(filepath, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, default=str, ensure_ascii=False)

    return filepath
