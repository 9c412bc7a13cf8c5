"""
Configuration module for the CCI Calculator.
Defines scoring thresholds, framework category ordering, form options and output settings.
"""

from __future__ import annotations

import os
import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path


# ─── Maturity Classification ────────────────────────────────────────────────

# (lower bound inclusive, tier); evaluated top-down
MATURITY_THRESHOLDS = [
    (91, "Exceptional"),
    (81, "Optimal"),
    (71, "Manageable"),
    (61, "Developing"),
    (51, "Bare Minimum"),
    ( 0, "Insufficient"),
]

MATURITY_DESCRIPTIONS = {
    "Exceptional": (
        "Cybersecurity controls are comprehensive, well embedded and continuously "
        "improved. The organization demonstrates leading cyber resilience."
    ),
    "Optimal": (
        "Cybersecurity controls are mature and consistently applied, with only "
        "minor gaps to address."
    ),
    "Manageable": (
        "Core cybersecurity controls are in place and working. Some areas need "
        "strengthening to reach an optimal posture."
    ),
    "Developing": (
        "Cybersecurity controls are being established but are not yet applied "
        "consistently across the organization."
    ),
    "Bare Minimum": (
        "Only the most basic cybersecurity controls are in place. Significant "
        "improvement is needed to withstand common threats."
    ),
    "Insufficient": (
        "Cybersecurity controls are inadequate. Immediate action is required to "
        "address critical gaps in cyber capability."
    ),
}

COMPLIANCE_THRESHOLD = 60
COMPLIANT = "Compliant"
NON_COMPLIANT = "Non-Compliant"

# Display bands used by reports for colour and wording
SCORE_BANDS = [
    (80, "strong"),
    (60, "adequate"),
    (40, "weak"),
    ( 0, "critical"),
]

NEXT_STEPS = {
    "strong": (
        "Your organization has demonstrated strong cybersecurity practices. "
        "Continue maintaining this high standard and stay updated with emerging threats."
    ),
    "adequate": (
        "Your organization meets compliance requirements but has opportunities for "
        "improvement. Review the detailed report to identify areas for enhancement."
    ),
    "deficient": (
        "Your organization needs significant improvements to meet SEBI CSCRF "
        "requirements. Review the detailed report to prioritize critical areas for "
        "immediate attention."
    ),
}


# ─── Framework Categories (NIST CSF functions) ──────────────────────────────

UNCATEGORIZED = "Uncategorized"

CATEGORY_NAMES = {
    "GV": "Governance",
    "ID": "Identify",
    "PR": "Protect",
    "DE": "Detect",
    "RS": "Respond",
    "RC": "Recover",
}

MAIN_CATEGORY_ORDER = list(CATEGORY_NAMES.values())

CATEGORY_ORDER = [
    "Governance: Roles and Responsibilities",
    "Identify: Risk Assessment",
    "Identify: Asset Management",
    "Protect: Identity Management, Authentication, and Access Control",
    "Protect: Awareness and Training",
    "Protect: Data Security",
    "Protect: Information Protection",
    "Detect: Continuous Monitoring",
    "Detect: Detection Processes",
    "Respond: Response Planning",
    "Respond: Communications",
    "Respond: Analysis and Mitigation",
    "Recover: Recovery Planning",
    "Recover: Improvements",
]


# ─── Annexure-K Form Options ────────────────────────────────────────────────

MII_ENTITY_TYPES = ["Stock Exchange", "Depository", "Clearing Corporation"]

ENTITY_TYPES = MII_ENTITY_TYPES + [
    "Stock Broker",
    "Depository Participant",
    "Mutual Fund",
    "Registrar and Transfer Agent",
    "Portfolio Manager",
    "Investment Advisor",
    "Research Analyst",
    "Other RE",
]

ENTITY_CATEGORIES = ["Critical", "Major", "Minor"]

DESIGNATIONS = ["MD", "CEO", "Board member", "Partners", "Proprietor"]

FORM_STORE_DIR = Path.home() / ".cci_calculator"


# ─── Output Configuration ───────────────────────────────────────────────────

REPORT_FORMATS = ["json", "csv", "markdown", "executive", "pdf"]


@dataclass
class OutputConfig:
    """Output directory and format settings."""
    base_dir: str = ""
    formats: list[str] = field(default_factory=lambda: list(REPORT_FORMATS))

    def __post_init__(self):
        if not self.base_dir:
            self.base_dir = os.path.join(os.getcwd(), "cci_output")

    @property
    def report_dir(self) -> Path:
        return Path(self.base_dir)

    def create_directories(self):
        self.report_dir.mkdir(parents=True, exist_ok=True)


# ─── Master Configuration ───────────────────────────────────────────────────

@dataclass
class CalculatorConfig:
    """Top-level configuration for a calculation run."""
    organization: str = "Your Organization"
    assessment_date: str = ""
    output: OutputConfig = field(default_factory=OutputConfig)
    form_store_dir: Path = FORM_STORE_DIR
    verbose: bool = False

    def __post_init__(self):
        if not self.assessment_date:
            self.assessment_date = date.today().isoformat()

    @classmethod
    def from_file(cls, path: str | Path) -> "CalculatorConfig":
        """Load configuration from a JSON file. Unknown keys are ignored."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        config = cls()
        config.organization = data.get("organization", config.organization)
        config.assessment_date = data.get("assessment_date", config.assessment_date)
        if "output" in data:
            for k, v in data["output"].items():
                if hasattr(config.output, k):
                    setattr(config.output, k, v)
        if data.get("form_store_dir"):
            config.form_store_dir = Path(data["form_store_dir"]).expanduser()
        config.verbose = data.get("verbose", False)
        return config
