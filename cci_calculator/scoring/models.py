"""
Scoring data models — Parameter input records and the structured CCI result.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Parameter:
    """One weighted CCI scoring criterion."""
    id: int
    measure_id: str                     # e.g. "PR.AA.1"; prefix is the CSF function code
    title: str
    numerator: float = 0.0
    denominator: float = 0.0
    weightage: float = 0.0              # Percentage contribution to the total score
    target: float = 100.0               # 100 = higher is better, 0 = lower is better
    framework_category: str = ""        # e.g. "Protect: Data Security"
    description: str = ""
    formula: str = ""
    control_info: str = ""
    numerator_help: str = ""
    denominator_help: str = ""
    implementation_evidence: str = ""
    auditor_comments: str = ""
    standard_context: str = ""
    best_practices: str = ""
    regulatory_guidelines: str = ""

    @property
    def lower_is_better(self) -> bool:
        return self.target == 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "measure_id": self.measure_id,
            "title": self.title,
            "numerator": self.numerator,
            "denominator": self.denominator,
            "weightage": self.weightage,
            "target": self.target,
            "framework_category": self.framework_category,
            "implementation_evidence": self.implementation_evidence,
            "auditor_comments": self.auditor_comments,
        }


@dataclass
class ParameterScore:
    """Computed score for a single parameter."""
    measure_id: str
    title: str
    percentage: float
    score: float
    weightage: float
    weighted_score: float

    def to_dict(self) -> dict:
        return {
            "measure_id": self.measure_id,
            "title": self.title,
            "percentage": round(self.percentage, 2),
            "score": round(self.score, 2),
            "weightage": self.weightage,
            "weighted_score": round(self.weighted_score, 2),
        }


@dataclass
class CategoryScore:
    """Re-normalised score for a framework category or main function."""
    category: str
    main_category: str
    sub_category: str = ""
    score: float = 0.0
    weighted_score: float = 0.0
    total_weightage: float = 0.0
    parameter_count: int = 0
    maturity_level: str = ""

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "main_category": self.main_category,
            "sub_category": self.sub_category,
            "score": round(self.score, 2),
            "weighted_score": round(self.weighted_score, 2),
            "total_weightage": self.total_weightage,
            "parameter_count": self.parameter_count,
            "maturity_level": self.maturity_level,
        }


@dataclass
class CCIResult:
    """Complete Cyber Capability Index result for one assessment."""
    total_score: float = 0.0
    maturity_level: str = "Insufficient"
    maturity_description: str = ""
    compliance_status: str = "Non-Compliant"
    organization: str = ""
    date: str = ""
    parameter_scores: list[ParameterScore] = field(default_factory=list)
    category_scores: list[CategoryScore] = field(default_factory=list)
    main_category_scores: list[CategoryScore] = field(default_factory=list)

    @property
    def is_compliant(self) -> bool:
        return self.compliance_status == "Compliant"

    def to_dict(self) -> dict:
        return {
            "organization": self.organization,
            "date": self.date,
            "total_score": round(self.total_score, 2),
            "maturity_level": self.maturity_level,
            "maturity_description": self.maturity_description,
            "compliance_status": self.compliance_status,
            "parameter_scores": [p.to_dict() for p in self.parameter_scores],
            "category_scores": [c.to_dict() for c in self.category_scores],
            "main_category_scores": [c.to_dict() for c in self.main_category_scores],
        }
