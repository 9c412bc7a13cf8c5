"""
Scoring Engine — Computes the 0-100 Cyber Capability Index from parameter values.

Scoring model:
  - Each parameter scores 0-100 from its numerator/denominator and target direction.
  - Parameter scores are scaled by weightage and summed into the total score.
  - The total is classified into a maturity tier and a compliance status.
  - Category breakdowns re-normalise the same weighted scores per category.
"""

from __future__ import annotations

import logging

from .calculator import raw_percentage, score_parameter, weighted_score
from .frameworks import category_scores, main_category_scores
from .maturity import classify_maturity, compliance_status
from .models import CCIResult, Parameter, ParameterScore

logger = logging.getLogger("cci_calculator.scoring")


def compute_result(
    parameters: list[Parameter],
    organization: str = "",
    assessment_date: str = "",
) -> CCIResult:
    """
    Compute the full CCI result for the current parameter list.

    The total is not clamped: weightages that do not sum to 100 can push it
    outside [0, 100].
    """
    result = CCIResult(organization=organization, date=assessment_date)

    for p in parameters:
        result.parameter_scores.append(ParameterScore(
            measure_id=p.measure_id,
            title=p.title,
            percentage=raw_percentage(p),
            score=score_parameter(p),
            weightage=p.weightage,
            weighted_score=weighted_score(p),
        ))

    result.total_score = sum(ps.weighted_score for ps in result.parameter_scores)

    total_weightage = sum(p.weightage for p in parameters)
    if parameters and abs(total_weightage - 100) > 1e-6:
        logger.warning(f"Parameter weightages sum to {total_weightage:g}, not 100")

    tier = classify_maturity(result.total_score)
    result.maturity_level = tier.level
    result.maturity_description = tier.description
    result.compliance_status = compliance_status(result.total_score)

    result.category_scores = category_scores(parameters)
    result.main_category_scores = main_category_scores(parameters)

    logger.debug(
        f"CCI computed over {len(parameters)} parameters: "
        f"{result.total_score:.2f} ({result.maturity_level}, {result.compliance_status})"
    )
    return result
