"""Scoring package — CCI calculation, maturity classification and category aggregation."""

from .engine import compute_result
from .calculator import raw_percentage, score_parameter, weighted_score
from .maturity import MaturityTier, classify_maturity, compliance_status
from .models import CCIResult, CategoryScore, Parameter, ParameterScore
from .frameworks import category_scores, group_by_category, main_category_scores

__all__ = [
    "compute_result",
    "raw_percentage",
    "score_parameter",
    "weighted_score",
    "MaturityTier",
    "classify_maturity",
    "compliance_status",
    "CCIResult",
    "CategoryScore",
    "Parameter",
    "ParameterScore",
    "category_scores",
    "group_by_category",
    "main_category_scores",
]
