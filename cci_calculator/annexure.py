"""
Annexure-K submission form — the SEBI reporting format for submitting a CCI score.

Draft form data is cached in:
    ~/.cci_calculator/annexure_k.json

A cached draft is only restored for the organization it was saved for, and is
cleared once the form has been exported successfully.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from .config import (
    DESIGNATIONS,
    ENTITY_CATEGORIES,
    ENTITY_TYPES,
    FORM_STORE_DIR,
    MII_ENTITY_TYPES,
)

logger = logging.getLogger("cci_calculator.annexure")

_FORM_FILE = "annexure_k.json"
_PERIOD_RE = re.compile(r"^[A-Za-z]+\s+\d{4}\s+-\s+[A-Za-z]+\s+\d{4}$")
MIN_RATIONALE_LENGTH = 10

# ---------------------------------------------------------------------------
# Fixed wording of the reporting format
# ---------------------------------------------------------------------------
ANNEXURE_TITLE = "Annexure-K: Cyber Capability Index (CCI)"
ANNEXURE_SUBTITLE = "REPORTING FORMAT FOR MIIs AND QUALIFIED REs TO SUBMIT THEIR CCI SCORE"

SIGNATORY_DECLARATION = (
    "I/ We hereby confirm that Cyber Capability Index (CCI) has been verified by "
    "me/ us and I/ We shall take the responsibility and ownership of the CCI report."
)

BACKGROUND = (
    "CCI is an index-framework to rate the preparedness and resilience of the "
    "cybersecurity framework of the Market Infrastructure Institutions (MIIs) and "
    "Qualified REs. While MIIs are required to conduct third-party assessment of "
    "their cyber resilience on a half-yearly basis, Qualified REs are directed to "
    "conduct self-assessment of their cyber resilience on an annual basis."
)

METHODOLOGY = [
    "The index is calculated on the basis of 23 parameters. These parameters have "
    "been given different weightages.",
    "Implementation evidence to be submitted to SEBI only on demand.",
    "All implementation evidences shall be verified by the auditor for conducting "
    "third-party assessment of MIIs.",
    "The list of CCI parameters, their corresponding target and weightages in the "
    "index, is as follows:",
]


class FormValidationError(ValueError):
    """Raised when an export is attempted with an invalid form."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass
class AnnexureKForm:
    """Organisation and signatory details submitted alongside the CCI score."""
    organization: str = ""
    entity_type: str = ""              # One of ENTITY_TYPES
    entity_category: str = ""          # Critical / Major / Minor
    rationale: str = ""                # Why the entity falls in that category
    period: str = ""                   # "Month YYYY - Month YYYY"
    auditing_organization: str = ""    # Required for MIIs only
    signatory_name: str = ""
    designation: str = ""              # One of DESIGNATIONS

    @property
    def is_mii(self) -> bool:
        """Market Infrastructure Institutions are audited by a third party."""
        return self.entity_type in MII_ENTITY_TYPES

    def validate(self) -> dict[str, str]:
        """Return field -> error message. Empty when the form is valid."""
        errors: dict[str, str] = {}

        if not self.organization.strip():
            errors["organization"] = "Organization name is required"

        if not self.entity_type:
            errors["entity_type"] = "Entity type is required"
        elif self.entity_type not in ENTITY_TYPES:
            errors["entity_type"] = f"Unknown entity type '{self.entity_type}'"

        if not self.entity_category:
            errors["entity_category"] = "Entity category is required"
        elif self.entity_category not in ENTITY_CATEGORIES:
            errors["entity_category"] = f"Unknown entity category '{self.entity_category}'"

        rationale = self.rationale.strip()
        if not rationale:
            errors["rationale"] = "Rationale is required"
        elif len(rationale) < MIN_RATIONALE_LENGTH:
            errors["rationale"] = (
                f"Please provide a more detailed rationale "
                f"(minimum {MIN_RATIONALE_LENGTH} characters)"
            )

        period = self.period.strip()
        if not period:
            errors["period"] = "Period is required"
        elif not _PERIOD_RE.match(period):
            errors["period"] = 'Period should be in format "Month YYYY - Month YYYY"'

        if self.is_mii and not self.auditing_organization.strip():
            errors["auditing_organization"] = "Auditing organization is required for MIIs"

        if not self.signatory_name.strip():
            errors["signatory_name"] = "Signatory name is required"

        if not self.designation:
            errors["designation"] = "Designation is required"
        elif self.designation not in DESIGNATIONS:
            errors["designation"] = f"Unknown designation '{self.designation}'"

        return errors

    def ensure_valid(self) -> None:
        errors = self.validate()
        if errors:
            raise FormValidationError(errors)

    def update(self, **values: Optional[str]) -> "AnnexureKForm":
        """Set every non-None value whose key is a form field."""
        names = {f.name for f in fields(self)}
        for key, value in values.items():
            if key in names and value is not None:
                setattr(self, key, value)
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "AnnexureKForm":
        names = {f.name for f in fields(cls)}
        return cls(**{k: str(v) for k, v in data.items() if k in names and v is not None})


# ---------------------------------------------------------------------------
# Draft cache
# ---------------------------------------------------------------------------

class FormStore:
    """Caches the draft Annexure-K form on disk between runs."""

    def __init__(self, directory: Path = FORM_STORE_DIR):
        self.directory = Path(directory)
        self.path = self.directory / _FORM_FILE

    def load(self, organization: Optional[str] = None) -> Optional[AnnexureKForm]:
        """
        Load the cached draft. When *organization* is given, the draft is only
        returned if it was saved for that organization.
        """
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            form = AnnexureKForm.from_dict(data)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable form cache {self.path}: {e}")
            return None

        if organization is not None and form.organization != organization:
            logger.debug(
                f"Cached form belongs to '{form.organization}', not '{organization}'"
            )
            return None
        return form

    def save(self, form: AnnexureKForm) -> bool:
        """Persist the draft. Drafts without an organization are not saved."""
        if not form.organization:
            return False
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(form.to_dict(), indent=2) + "\n", encoding="utf-8"
        )
        return True

    def clear(self) -> bool:
        """Remove the cached draft. Returns True if one existed."""
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
