"""
Parameter arithmetic — converts one parameter's numerator/denominator into a 0-100 score.

Scoring model:
  - raw percentage = numerator / denominator * 100 (0 when the denominator is not positive)
  - higher-is-better (target 100): score = raw, capped at 100
  - lower-is-better (target 0):    score = 100 - raw, floored at 0
  - weighted score = score / 100 * weightage
"""

from __future__ import annotations

from .models import Parameter


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def raw_percentage(parameter: Parameter) -> float:
    """Unclamped numerator/denominator ratio as a percentage."""
    if parameter.denominator > 0:
        return parameter.numerator / parameter.denominator * 100
    return 0.0


def score_parameter(parameter: Parameter) -> float:
    """Score in [0, 100]. A zero denominator scores 0 whatever the target."""
    if not parameter.denominator > 0:
        return 0.0

    raw = raw_percentage(parameter)
    if parameter.target == 0:
        return _clamp(100 - raw)
    return _clamp(min(raw, 100))


def weighted_score(parameter: Parameter) -> float:
    return score_parameter(parameter) / 100 * parameter.weightage
