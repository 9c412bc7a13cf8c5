"""
CCI parameter catalogue — the 23 weighted SEBI CSCRF parameters, sample data and input files.

Input files are JSON:

    {
      "organization": "Acme Securities",
      "assessment_date": "2025-03-31",
      "parameters": [
        {"measure_id": "GV.RR.1", "numerator": 9, "denominator": 10,
         "implementation_evidence": "...", "auditor_comments": "..."}
      ]
    }

Values are merged onto the defaults by measure_id; parameters not listed keep 0/0.
"""

from __future__ import annotations

import copy
import json
import logging
import math
import random
from pathlib import Path
from typing import Any, Optional

from .scoring.models import Parameter

logger = logging.getLogger("cci_calculator.parameters")


class ParameterInputError(ValueError):
    """Raised when a parameter input file cannot be applied to the catalogue."""


# ---------------------------------------------------------------------------
# Catalogue (weightages sum to 100)
# ---------------------------------------------------------------------------
_CATALOGUE: list[dict[str, Any]] = [
    {
        "measure_id": "GV.RR.1",
        "title": "Cybersecurity roles staffed",
        "weightage": 4, "target": 100,
        "framework_category": "Governance: Roles and Responsibilities",
        "description": "Proportion of cybersecurity roles defined in the CSCRF governance structure that are filled by designated personnel.",
        "formula": "(Number of cybersecurity roles filled / Total number of cybersecurity roles defined) * 100",
        "control_info": "CISO, IT Committee and cybersecurity team roles documented with responsibilities.",
        "numerator_help": "Roles filled",
        "denominator_help": "Roles defined",
        "regulatory_guidelines": "SEBI CSCRF requires a designated CISO and a technology committee for REs.",
    },
    {
        "measure_id": "GV.RR.2",
        "title": "Board reviews of cybersecurity posture",
        "weightage": 5, "target": 100,
        "framework_category": "Governance: Roles and Responsibilities",
        "description": "Share of scheduled board or committee reviews of cybersecurity posture that were held during the period.",
        "formula": "(Reviews held / Reviews scheduled) * 100",
        "control_info": "Minutes of board and IT committee meetings covering cybersecurity.",
        "numerator_help": "Reviews held",
        "denominator_help": "Reviews scheduled",
    },
    {
        "measure_id": "ID.RA.1",
        "title": "Vulnerability assessment coverage",
        "weightage": 5, "target": 100,
        "framework_category": "Identify: Risk Assessment",
        "description": "Critical systems covered by vulnerability assessment and penetration testing during the period.",
        "formula": "(Critical systems assessed / Total critical systems) * 100",
        "control_info": "VAPT reports for all critical systems.",
        "numerator_help": "Critical systems assessed",
        "denominator_help": "Total critical systems",
        "best_practices": "Run authenticated scans and retest after remediation.",
    },
    {
        "measure_id": "ID.RA.2",
        "title": "Critical vulnerabilities open beyond timeline",
        "weightage": 5, "target": 0,
        "framework_category": "Identify: Risk Assessment",
        "description": "Critical and high vulnerabilities not closed within the prescribed remediation timeline.",
        "formula": "(Vulnerabilities open beyond timeline / Total critical and high vulnerabilities) * 100",
        "control_info": "Vulnerability tracker with closure dates.",
        "numerator_help": "Open beyond timeline",
        "denominator_help": "Total critical and high vulnerabilities",
    },
    {
        "measure_id": "ID.AM.1",
        "title": "Asset inventory coverage",
        "weightage": 5, "target": 100,
        "framework_category": "Identify: Asset Management",
        "description": "IT assets recorded in the authorised asset inventory with owner and classification.",
        "formula": "(Assets in inventory / Total assets discovered) * 100",
        "control_info": "Asset register reconciled against discovery scans.",
        "numerator_help": "Assets in inventory",
        "denominator_help": "Assets discovered",
    },
    {
        "measure_id": "ID.AM.2",
        "title": "Unsupported systems in production",
        "weightage": 4, "target": 0,
        "framework_category": "Identify: Asset Management",
        "description": "Production systems running end-of-life or unsupported software.",
        "formula": "(Unsupported systems / Total production systems) * 100",
        "control_info": "Software inventory with vendor support status.",
        "numerator_help": "Unsupported systems",
        "denominator_help": "Production systems",
    },
    {
        "measure_id": "PR.AA.1",
        "title": "Multi-factor authentication coverage",
        "weightage": 5, "target": 100,
        "framework_category": "Protect: Identity Management, Authentication, and Access Control",
        "description": "Privileged and remote-access accounts protected by multi-factor authentication.",
        "formula": "(Accounts with MFA / Total privileged and remote accounts) * 100",
        "control_info": "Identity provider MFA enrolment report.",
        "numerator_help": "Accounts with MFA",
        "denominator_help": "Privileged and remote accounts",
        "standard_context": "Aligned with NIST CSF PR.AA and ISO 27001 A.5.17.",
    },
    {
        "measure_id": "PR.AA.2",
        "title": "Privileged access reviews completed",
        "weightage": 4, "target": 100,
        "framework_category": "Protect: Identity Management, Authentication, and Access Control",
        "description": "Periodic reviews of privileged access completed on schedule.",
        "formula": "(Reviews completed / Reviews due) * 100",
        "control_info": "Access review sign-offs.",
        "numerator_help": "Reviews completed",
        "denominator_help": "Reviews due",
    },
    {
        "measure_id": "PR.AA.3",
        "title": "Dormant accounts left enabled",
        "weightage": 4, "target": 0,
        "framework_category": "Protect: Identity Management, Authentication, and Access Control",
        "description": "User accounts inactive for more than 90 days that remain enabled.",
        "formula": "(Dormant enabled accounts / Total user accounts) * 100",
        "control_info": "Directory last-logon report.",
        "numerator_help": "Dormant enabled accounts",
        "denominator_help": "Total user accounts",
    },
    {
        "measure_id": "PR.AT.1",
        "title": "Cybersecurity training completion",
        "weightage": 4, "target": 100,
        "framework_category": "Protect: Awareness and Training",
        "description": "Employees who completed mandatory cybersecurity awareness training.",
        "formula": "(Employees trained / Total employees) * 100",
        "control_info": "Learning management system completion records.",
        "numerator_help": "Employees trained",
        "denominator_help": "Total employees",
    },
    {
        "measure_id": "PR.AT.2",
        "title": "Phishing simulation failure rate",
        "weightage": 4, "target": 0,
        "framework_category": "Protect: Awareness and Training",
        "description": "Recipients who clicked or submitted credentials in phishing simulations.",
        "formula": "(Recipients who failed / Total recipients) * 100",
        "control_info": "Phishing campaign results.",
        "numerator_help": "Recipients who failed",
        "denominator_help": "Total recipients",
    },
    {
        "measure_id": "PR.DS.1",
        "title": "Encryption of critical data at rest",
        "weightage": 5, "target": 100,
        "framework_category": "Protect: Data Security",
        "description": "Data stores holding critical or personal data that are encrypted at rest.",
        "formula": "(Encrypted critical data stores / Total critical data stores) * 100",
        "control_info": "Encryption configuration evidence per data store.",
        "numerator_help": "Encrypted data stores",
        "denominator_help": "Critical data stores",
    },
    {
        "measure_id": "PR.DS.2",
        "title": "Backup success rate",
        "weightage": 4, "target": 100,
        "framework_category": "Protect: Data Security",
        "description": "Scheduled backups of critical systems that completed successfully.",
        "formula": "(Successful backups / Scheduled backups) * 100",
        "control_info": "Backup job logs.",
        "numerator_help": "Successful backups",
        "denominator_help": "Scheduled backups",
    },
    {
        "measure_id": "PR.IP.1",
        "title": "Patch compliance within SLA",
        "weightage": 5, "target": 100,
        "framework_category": "Protect: Information Protection",
        "description": "Critical security patches applied within the defined service level.",
        "formula": "(Patches applied within SLA / Total critical patches released) * 100",
        "control_info": "Patch management reports.",
        "numerator_help": "Patches applied within SLA",
        "denominator_help": "Critical patches released",
    },
    {
        "measure_id": "PR.IP.2",
        "title": "Secure configuration baseline compliance",
        "weightage": 4, "target": 100,
        "framework_category": "Protect: Information Protection",
        "description": "Systems compliant with the approved hardening baseline.",
        "formula": "(Compliant systems / Systems assessed) * 100",
        "control_info": "Configuration compliance scans.",
        "numerator_help": "Compliant systems",
        "denominator_help": "Systems assessed",
    },
    {
        "measure_id": "DE.CM.1",
        "title": "Security monitoring coverage",
        "weightage": 5, "target": 100,
        "framework_category": "Detect: Continuous Monitoring",
        "description": "Critical systems monitored by the security operations centre.",
        "formula": "(Critical systems monitored / Total critical systems) * 100",
        "control_info": "SOC coverage matrix.",
        "numerator_help": "Systems monitored",
        "denominator_help": "Critical systems",
        "regulatory_guidelines": "MIIs and Qualified REs shall have 24x7 SOC monitoring.",
    },
    {
        "measure_id": "DE.CM.2",
        "title": "Log sources integrated with SIEM",
        "weightage": 4, "target": 100,
        "framework_category": "Detect: Continuous Monitoring",
        "description": "Required log sources forwarding events to the SIEM.",
        "formula": "(Log sources integrated / Log sources required) * 100",
        "control_info": "SIEM source inventory.",
        "numerator_help": "Sources integrated",
        "denominator_help": "Sources required",
    },
    {
        "measure_id": "DE.DP.1",
        "title": "Incidents first detected externally",
        "weightage": 4, "target": 0,
        "framework_category": "Detect: Detection Processes",
        "description": "Security incidents first reported by external parties rather than internal detection.",
        "formula": "(Incidents detected externally / Total incidents) * 100",
        "control_info": "Incident register with detection source.",
        "numerator_help": "Externally detected incidents",
        "denominator_help": "Total incidents",
    },
    {
        "measure_id": "RS.RP.1",
        "title": "Incident response drills conducted",
        "weightage": 4, "target": 100,
        "framework_category": "Respond: Response Planning",
        "description": "Planned incident response and cyber crisis drills that were conducted.",
        "formula": "(Drills conducted / Drills planned) * 100",
        "control_info": "Drill reports and after-action notes.",
        "numerator_help": "Drills conducted",
        "denominator_help": "Drills planned",
    },
    {
        "measure_id": "RS.CO.1",
        "title": "Incidents reported within timelines",
        "weightage": 4, "target": 100,
        "framework_category": "Respond: Communications",
        "description": "Reportable incidents notified to SEBI and CERT-In within the prescribed timelines.",
        "formula": "(Incidents reported on time / Reportable incidents) * 100",
        "control_info": "Regulatory incident submissions.",
        "numerator_help": "Reported on time",
        "denominator_help": "Reportable incidents",
    },
    {
        "measure_id": "RS.AN.1",
        "title": "Root cause analysis completed",
        "weightage": 4, "target": 100,
        "framework_category": "Respond: Analysis and Mitigation",
        "description": "Closed incidents with a documented root cause analysis.",
        "formula": "(Incidents with RCA / Closed incidents) * 100",
        "control_info": "RCA documents.",
        "numerator_help": "Incidents with RCA",
        "denominator_help": "Closed incidents",
    },
    {
        "measure_id": "RC.RP.1",
        "title": "Disaster recovery drills meeting RTO/RPO",
        "weightage": 4, "target": 100,
        "framework_category": "Recover: Recovery Planning",
        "description": "DR drills for critical systems that met recovery time and point objectives.",
        "formula": "(Drills meeting RTO/RPO / DR drills conducted) * 100",
        "control_info": "DR drill reports.",
        "numerator_help": "Drills meeting objectives",
        "denominator_help": "Drills conducted",
    },
    {
        "measure_id": "RC.IM.1",
        "title": "Post-incident improvements implemented",
        "weightage": 4, "target": 100,
        "framework_category": "Recover: Improvements",
        "description": "Lessons-learned actions from incidents and drills that were implemented.",
        "formula": "(Actions implemented / Actions identified) * 100",
        "control_info": "Improvement action tracker.",
        "numerator_help": "Actions implemented",
        "denominator_help": "Actions identified",
    },
]

DEFAULT_PARAMETERS: list[Parameter] = [
    Parameter(id=i, **entry) for i, entry in enumerate(_CATALOGUE, 1)
]


def default_parameters() -> list[Parameter]:
    """Fresh copies of the catalogue with zeroed numerators and denominators."""
    return copy.deepcopy(DEFAULT_PARAMETERS)


def generate_sample_data(seed: Optional[int] = None) -> list[Parameter]:
    """
    Plausible sample values for every parameter.
    Higher-is-better parameters land at 60-100% of the denominator,
    lower-is-better ones at 0-15%.
    """
    rng = random.Random(seed)
    params = default_parameters()
    for p in params:
        p.denominator = rng.randint(20, 500)
        if p.lower_is_better:
            ratio = rng.uniform(0.0, 0.15)
        else:
            ratio = rng.uniform(0.6, 1.0)
        p.numerator = round(p.denominator * ratio)
        p.implementation_evidence = f"Sample evidence: {p.control_info}"
    return params


# ---------------------------------------------------------------------------
# Input files
# ---------------------------------------------------------------------------

def _as_number(value: Any, field_name: str, measure_id: str) -> float:
    if isinstance(value, bool):
        raise ParameterInputError(f"{measure_id}: {field_name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParameterInputError(
            f"{measure_id}: {field_name} must be a number, got {value!r}"
        ) from None
    if not math.isfinite(number):
        raise ParameterInputError(
            f"{measure_id}: {field_name} must be a finite number, got {value!r}"
        )
    return number


def apply_values(parameters: list[Parameter], entries: list[dict]) -> list[Parameter]:
    """Merge input entries onto *parameters* (in place) by measure_id."""
    by_measure = {p.measure_id: p for p in parameters}

    for entry in entries:
        if not isinstance(entry, dict):
            raise ParameterInputError(f"Parameter entry must be an object, got {entry!r}")
        measure_id = entry.get("measure_id")
        if not isinstance(measure_id, str):
            raise ParameterInputError(f"measure_id must be a string, got {measure_id!r}")
        if measure_id not in by_measure:
            raise ParameterInputError(f"Unknown measure_id: {measure_id!r}")

        param = by_measure[measure_id]
        for key in ("numerator", "denominator"):
            if key in entry:
                setattr(param, key, _as_number(entry[key], key, measure_id))
        for key in ("implementation_evidence", "auditor_comments"):
            if key in entry:
                setattr(param, key, str(entry[key] or ""))

    return parameters


def load_parameters(path: str | Path) -> tuple[list[Parameter], dict[str, str]]:
    """
    Read a parameter input file.

    Returns:
        (parameters, metadata) where metadata holds organization and
        assessment_date when present in the file.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ParameterInputError(f"{path}: invalid JSON ({e})") from e

    if not isinstance(data, dict) or not isinstance(data.get("parameters"), list):
        raise ParameterInputError(f"{path}: expected an object with a 'parameters' list")

    params = apply_values(default_parameters(), data["parameters"])
    metadata = {
        k: str(data[k]) for k in ("organization", "assessment_date") if data.get(k)
    }
    logger.info(f"Loaded {len(data['parameters'])} parameter entries from {path}")
    return params, metadata


def dump_parameters(
    parameters: list[Parameter],
    path: str | Path,
    organization: str = "",
    assessment_date: str = "",
) -> Path:
    """Write parameters as an input file that load_parameters() accepts."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "organization": organization,
        "assessment_date": assessment_date,
        "parameters": [
            {
                "measure_id": p.measure_id,
                "title": p.title,
                "numerator": p.numerator,
                "denominator": p.denominator,
                "numerator_help": p.numerator_help,
                "denominator_help": p.denominator_help,
                "implementation_evidence": p.implementation_evidence,
                "auditor_comments": p.auditor_comments,
            }
            for p in parameters
        ],
    }
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path
