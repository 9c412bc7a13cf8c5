"""
Framework alignment — Groups parameters by NIST CSF category and computes re-normalised category scores.
"""

from __future__ import annotations

from ..config import CATEGORY_ORDER, MAIN_CATEGORY_ORDER, UNCATEGORIZED
from .calculator import weighted_score
from .maturity import maturity_level
from .models import CategoryScore, Parameter


def main_category(category: str) -> str:
    """'Protect: Data Security' -> 'Protect'."""
    head, sep, _ = category.partition(":")
    return head.strip() if sep else category


def sub_category(category: str) -> str:
    """'Protect: Data Security' -> 'Data Security'."""
    _, sep, tail = category.partition(":")
    return tail.strip() if sep else ""


def _category_sort_key(category: str) -> tuple[int, int]:
    """
    Known sub-categories sort by their canonical position, other sub-categories
    of a known function after its known ones, then Uncategorized, then anything
    unknown. sorted() is stable, so unknowns keep first-seen order.

    An unlisted sub-category of a known function (e.g. "Protect: Key Custody")
    stays inside that function's block instead of moving to the end, so
    function sections remain contiguous.
    """
    unknown = len(MAIN_CATEGORY_ORDER)
    if category == UNCATEGORIZED:
        return (unknown, 0)

    main = main_category(category)
    if main not in MAIN_CATEGORY_ORDER:
        return (unknown + 1, 0)
    if category in CATEGORY_ORDER:
        return (MAIN_CATEGORY_ORDER.index(main), CATEGORY_ORDER.index(category))
    return (MAIN_CATEGORY_ORDER.index(main), len(CATEGORY_ORDER))


def group_by_category(parameters: list[Parameter]) -> dict[str, list[Parameter]]:
    """Group parameters by framework category in canonical order."""
    groups: dict[str, list[Parameter]] = {}
    for p in parameters:
        category = (p.framework_category or "").strip() or UNCATEGORIZED
        groups.setdefault(category, []).append(p)

    return {c: groups[c] for c in sorted(groups, key=_category_sort_key)}


def _aggregate(category: str, params: list[Parameter]) -> CategoryScore:
    total_weightage = sum(p.weightage for p in params)
    weighted_sum = sum(weighted_score(p) for p in params)
    score = (weighted_sum / total_weightage) * 100 if total_weightage > 0 else 0.0

    return CategoryScore(
        category=category,
        main_category=main_category(category),
        sub_category=sub_category(category),
        score=score,
        weighted_score=weighted_sum,
        total_weightage=total_weightage,
        parameter_count=len(params),
        maturity_level=maturity_level(score),
    )


def category_scores(parameters: list[Parameter]) -> list[CategoryScore]:
    """Per-category scores, independent of each category's share of the total weight."""
    return [
        _aggregate(category, params)
        for category, params in group_by_category(parameters).items()
    ]


def main_category_scores(parameters: list[Parameter]) -> list[CategoryScore]:
    """Roll categories up to their CSF function (Governance, Identify, ...)."""
    mains: dict[str, list[Parameter]] = {}
    for category, params in group_by_category(parameters).items():
        mains.setdefault(main_category(category), []).extend(params)

    return [_aggregate(main, params) for main, params in mains.items()]
