"""
Maturity classification — maps a composite score to a named tier and compliance status.

The compliance cutoff (60) sits one point below the "Developing" tier (61),
so a score of 60 is "Bare Minimum" yet "Compliant".
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import (
    COMPLIANCE_THRESHOLD,
    COMPLIANT,
    MATURITY_DESCRIPTIONS,
    MATURITY_THRESHOLDS,
    NEXT_STEPS,
    NON_COMPLIANT,
    SCORE_BANDS,
)


@dataclass(frozen=True)
class MaturityTier:
    level: str
    description: str
    lower_bound: float


def classify_maturity(score: float) -> MaturityTier:
    """Return the tier whose lower bound is the highest one not above *score*."""
    for threshold, level in MATURITY_THRESHOLDS:
        if score >= threshold:
            return MaturityTier(level, MATURITY_DESCRIPTIONS[level], threshold)
    # Below zero only happens with malformed configuration
    threshold, level = MATURITY_THRESHOLDS[-1]
    return MaturityTier(level, MATURITY_DESCRIPTIONS[level], threshold)


def maturity_level(score: float) -> str:
    return classify_maturity(score).level


def compliance_status(score: float) -> str:
    return COMPLIANT if score >= COMPLIANCE_THRESHOLD else NON_COMPLIANT


def score_band(score: float) -> str:
    """Display band (strong / adequate / weak / critical) for report colouring."""
    for threshold, band in SCORE_BANDS:
        if score >= threshold:
            return band
    return SCORE_BANDS[-1][1]


def next_steps(score: float) -> str:
    if score >= 80:
        return NEXT_STEPS["strong"]
    if score >= COMPLIANCE_THRESHOLD:
        return NEXT_STEPS["adequate"]
    return NEXT_STEPS["deficient"]
