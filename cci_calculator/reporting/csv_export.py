"""
CSV exporter — Produces structured CSV summaries of parameter and category scores.
"""

from __future__ import annotations

import csv
from pathlib import Path

from ..scoring.models import CCIResult, Parameter


def export_csv(
    result: CCIResult,
    parameters: list[Parameter],
    output_dir: Path,
    report_id: str,
) -> list[Path]:
    """
    Write CSV files for parameter scores, category scores and the summary.

    Returns:
        List of created CSV file paths.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    created = []

    # --- Parameter Scores CSV ---
    params_path = output_dir / f"parameter_scores_{report_id}.csv"
    PARAMETER_FIELDS = [
        "measure_id", "title", "framework_category", "numerator", "denominator",
        "target", "weightage", "percentage", "score", "weighted_score",
    ]
    by_measure = {p.measure_id: p for p in parameters}

    with open(params_path, "w", newline="", encoding="utf-8-sig") as fh:
        writer = csv.DictWriter(fh, fieldnames=PARAMETER_FIELDS)
        writer.writeheader()
        for ps in result.parameter_scores:
            p = by_measure[ps.measure_id]
            writer.writerow({
                "measure_id": ps.measure_id,
                "title": ps.title,
                "framework_category": p.framework_category,
                "numerator": p.numerator,
                "denominator": p.denominator,
                "target": p.target,
                "weightage": ps.weightage,
                "percentage": round(ps.percentage, 2),
                "score": round(ps.score, 2),
                "weighted_score": round(ps.weighted_score, 2),
            })
    created.append(params_path)

    # --- Category Scores CSV ---
    categories_path = output_dir / f"category_scores_{report_id}.csv"
    CATEGORY_FIELDS = [
        "category", "main_category", "sub_category", "score", "weighted_score",
        "total_weightage", "parameter_count", "maturity_level",
    ]

    with open(categories_path, "w", newline="", encoding="utf-8-sig") as fh:
        writer = csv.DictWriter(fh, fieldnames=CATEGORY_FIELDS)
        writer.writeheader()
        for cs in result.category_scores:
            writer.writerow(cs.to_dict())
    created.append(categories_path)

    # --- Summary Row CSV ---
    summary_path = output_dir / f"cci_summary_{report_id}.csv"
    with open(summary_path, "w", newline="", encoding="utf-8-sig") as fh:
        writer = csv.writer(fh)
        writer.writerow(["metric", "value"])
        writer.writerow(["organization", result.organization])
        writer.writerow(["assessment_date", result.date])
        writer.writerow(["total_score", round(result.total_score, 2)])
        writer.writerow(["maturity_level", result.maturity_level])
        writer.writerow(["compliance_status", result.compliance_status])
        writer.writerow(["parameter_count", len(result.parameter_scores)])
    created.append(summary_path)

    return created
