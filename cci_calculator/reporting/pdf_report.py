"""
PDF exporter — Detailed CCI compliance report and the Annexure-K submission (ReportLab).
"""

from __future__ import annotations

import logging
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle,
)

from ..annexure import (
    ANNEXURE_SUBTITLE,
    ANNEXURE_TITLE,
    BACKGROUND,
    METHODOLOGY,
    SIGNATORY_DECLARATION,
    AnnexureKForm,
)
from ..scoring.models import CCIResult, Parameter
from .templating import category_sections, safe_name

logger = logging.getLogger("cci_calculator.reporting")

_FONT      = "Helvetica"
_FONT_BOLD = "Helvetica-Bold"

# ── Report colours ───────────────────────────────────────────────────────────
_BLUE  = colors.HexColor("#003399")
_LIGHT = colors.HexColor("#eef2fb")
_GREY  = colors.HexColor("#dcdcdc")
_WHITE = colors.white
_DARK  = colors.HexColor("#1a1a2e")

_DETAIL_SECTIONS = [
    ("description", "Description"),
    ("formula", "Formula"),
    ("control_info", "Control Information"),
    ("implementation_evidence", "Implementation Evidence"),
    ("standard_context", "Standard Context"),
    ("best_practices", "Best Practices"),
    ("regulatory_guidelines", "Regulatory Guidelines"),
    ("auditor_comments", "Auditor Comments"),
]

# Always printed, even when empty
_REQUIRED_DETAILS = {"description", "formula", "control_info", "implementation_evidence"}


def _get_styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "Title": ParagraphStyle(
            "CCITitle", parent=base["Title"],
            fontName=_FONT_BOLD, fontSize=20, textColor=_BLUE,
            alignment=TA_CENTER, spaceAfter=10,
        ),
        "Subtitle": ParagraphStyle(
            "CCISubtitle", parent=base["Normal"],
            fontName=_FONT_BOLD, fontSize=11, alignment=TA_CENTER, spaceAfter=10,
        ),
        "Heading1": ParagraphStyle(
            "CCIH1", parent=base["Heading1"],
            fontName=_FONT_BOLD, fontSize=14, textColor=_BLUE,
            spaceBefore=12, spaceAfter=6,
        ),
        "Heading2": ParagraphStyle(
            "CCIH2", parent=base["Heading2"],
            fontName=_FONT_BOLD, fontSize=11, textColor=_DARK,
            spaceBefore=8, spaceAfter=3,
        ),
        "Normal": ParagraphStyle(
            "CCINormal", parent=base["Normal"],
            fontName=_FONT, fontSize=10, textColor=_DARK, spaceAfter=4,
        ),
        "Cell": ParagraphStyle(
            "CCICell", parent=base["Normal"],
            fontName=_FONT, fontSize=8, leading=10,
        ),
    }


def _table_style(header_bg=_BLUE, header_fg=_WHITE, footer: bool = False) -> TableStyle:
    commands = [
        ("BACKGROUND",  (0, 0), (-1, 0),  header_bg),
        ("TEXTCOLOR",   (0, 0), (-1, 0),  header_fg),
        ("FONTNAME",    (0, 0), (-1, 0),  _FONT_BOLD),
        ("FONTNAME",    (0, 1), (-1, -1), _FONT),
        ("FONTSIZE",    (0, 0), (-1, -1), 8),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [_WHITE, _LIGHT]),
        ("GRID",        (0, 0), (-1, -1), 0.3, _GREY),
        ("VALIGN",      (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING",  (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if footer:
        commands += [
            ("BACKGROUND", (0, -1), (-1, -1), colors.HexColor("#f0f0f0")),
            ("FONTNAME",   (0, -1), (-1, -1), _FONT_BOLD),
        ]
    return TableStyle(commands)


def _numbered_canvas(footer_lines: list[str]):
    """
    Canvas class that stamps *footer_lines* plus "Page i of n" on every page.
    Page states are buffered until save() so the total page count is known.
    """

    class NumberedCanvas(canvas.Canvas):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states: list[dict] = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            total = len(self._saved_page_states)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                self._draw_footer(total)
                super().showPage()
            super().save()

        def _draw_footer(self, total: int):
            width = self._pagesize[0]
            self.setFont(_FONT, 8)
            self.setFillGray(0.4)
            y = 10 * mm
            for line in reversed(footer_lines + [f"Page {self._pageNumber} of {total}"]):
                self.drawCentredString(width / 2, y, line)
                y += 4 * mm

    return NumberedCanvas


def _p(text, style) -> Paragraph:
    return Paragraph(escape(str(text)), style)


def _build(path: Path, story: list, footer_lines: list[str], title: str) -> Path:
    doc = SimpleDocTemplate(
        str(path), pagesize=A4, title=title,
        leftMargin=14 * mm, rightMargin=14 * mm,
        topMargin=15 * mm, bottomMargin=22 * mm,
    )
    doc.build(story, canvasmaker=_numbered_canvas(footer_lines))
    logger.info(f"Wrote PDF {path}")
    return path


# ── Detailed report ──────────────────────────────────────────────────────────

def export_pdf(
    result: CCIResult,
    parameters: list[Parameter],
    output_dir: Path,
    report_id: str,
) -> Path:
    """
    Detailed compliance report: summary, per-category parameter tables, one
    detail page per parameter, and a declaration page for signatures.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    stamp = result.date or report_id
    filepath = output_dir / f"CCI_Detailed_Report_{safe_name(result.organization)}_{stamp}.pdf"

    s = _get_styles()
    story: list = [
        _p("SEBI CSCRF Compliance Report", s["Title"]),
        _p(f"Organization: {result.organization}", s["Normal"]),
        _p(f"Assessment Date: {result.date}", s["Normal"]),
        _p(f"Maturity Level: {result.maturity_level}", s["Normal"]),
        _p(f"Total CCI Score: {result.total_score:.2f}", s["Normal"]),
        Paragraph(f"<b>Compliance Status: {escape(result.compliance_status)}</b>", s["Normal"]),
        Spacer(1, 8),
    ]

    sections = category_sections(result, parameters)

    for section in sections:
        cs = section["score"]
        story.append(_p(f"{cs.category} Parameters", s["Heading1"]))
        story.append(_p(f"Category score: {cs.score:.1f} ({cs.maturity_level})", s["Normal"]))
        rows = [["ID", "Parameter", "Numerator", "Denominator", "Weightage", "Score", "Weighted"]]
        for p, ps in section["rows"]:
            rows.append([
                p.measure_id,
                _p(p.title, s["Cell"]),
                f"{p.numerator:g}",
                f"{p.denominator:g}",
                f"{p.weightage:g}%",
                f"{ps.score:.2f}",
                f"{ps.weighted_score:.2f}",
            ])
        table = Table(rows, colWidths=[18 * mm, 66 * mm, 20 * mm, 22 * mm, 20 * mm, 18 * mm, 18 * mm])
        table.setStyle(_table_style())
        story.extend([table, Spacer(1, 8)])

    for section in sections:
        for p, _ in section["rows"]:
            story.append(PageBreak())
            story.append(_p(f"{p.measure_id}: {p.title}", s["Heading1"]))
            for attr, label in _DETAIL_SECTIONS:
                value = getattr(p, attr)
                if not value and attr not in _REQUIRED_DETAILS:
                    continue
                story.append(_p(f"{label}:", s["Heading2"]))
                story.append(_p(value or "Not provided", s["Normal"]))

    story += [
        PageBreak(),
        _p("Declaration and Attestation", s["Title"]),
        _p(
            "I/We hereby declare that all information provided in this assessment is "
            "true and accurate to the best of our knowledge. We confirm that this "
            "assessment has been conducted in accordance with the SEBI Cybersecurity "
            "and Cyber Resilience Framework (CSCRF).",
            s["Normal"],
        ),
        _p("The Board of Directors has reviewed and approved this assessment.", s["Normal"]),
        Spacer(1, 20),
    ]
    for signer in ("Chief Information Security Officer", "Chief Executive Officer"):
        story += [
            _p(f"Signature of {signer}: ______________________________", s["Normal"]),
            _p("Name: ______________________________", s["Normal"]),
            _p("Date: ______________________________", s["Normal"]),
            Spacer(1, 20),
        ]

    footer = [f"SEBI CSCRF Compliance Report - {result.organization}"]
    return _build(filepath, story, footer, "SEBI CSCRF Compliance Report")


# ── Annexure-K ───────────────────────────────────────────────────────────────

def export_annexure_pdf(
    result: CCIResult,
    parameters: list[Parameter],
    form: AnnexureKForm,
    output_dir: Path,
) -> Path:
    """
    Annexure-K reporting format. Raises FormValidationError if *form* is invalid.
    """
    form.ensure_valid()
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / f"Annexure-K-CCI-Report_{safe_name(form.organization)}.pdf"

    s = _get_styles()
    details = [
        ("NAME OF THE ORGANISATION", form.organization),
        ("ENTITY TYPE", form.entity_type),
        ("ENTITY CATEGORY", form.entity_category),
        ("RATIONALE FOR THE CATEGORY", form.rationale),
        ("PERIOD", form.period),
        ("NAME OF THE AUDITING ORGANISATION (applicable for MIIs)",
         form.auditing_organization or "Not Applicable"),
    ]
    detail_table = Table(
        [[_p(label + ":", s["Cell"]), _p(value, s["Cell"])] for label, value in details],
        colWidths=[80 * mm, 100 * mm],
    )
    detail_table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (0, -1), _FONT_BOLD),
        ("VALIGN",   (0, 0), (-1, -1), "TOP"),
        ("GRID",     (0, 0), (-1, -1), 0.3, _GREY),
    ]))

    story: list = [
        _p(ANNEXURE_TITLE, s["Title"]),
        _p(ANNEXURE_SUBTITLE, s["Subtitle"]),
        detail_table,
        Spacer(1, 10),
        _p("RE's Authorised signatory declaration:", s["Heading2"]),
        _p(SIGNATORY_DECLARATION, s["Normal"]),
        _p("Signature: ______________________", s["Normal"]),
        _p(f"Name of the signatory: {form.signatory_name}", s["Normal"]),
        _p(f"Designation: {form.designation}", s["Normal"]),
        _p("Company stamp: [            ]", s["Normal"]),
        Spacer(1, 8),
        _p("Annexures:", s["Heading2"]),
        _p("1. CCI report as per the format given in Table 27 and CCI score", s["Normal"]),
        _p("Cyber Capability Index (CCI)", s["Heading1"]),
        _p("A. Background-", s["Heading2"]),
        _p(BACKGROUND, s["Normal"]),
        _p("B. Index Calculation Methodology-", s["Heading2"]),
    ]
    story += [_p(f"{i}. {line}", s["Normal"]) for i, line in enumerate(METHODOLOGY, 1)]

    scores = {ps.measure_id: ps for ps in result.parameter_scores}
    rows = [["ID", "Parameter", "Weightage", "Target", "Numerator", "Denominator", "Score", "Weighted"]]
    for p in parameters:
        ps = scores[p.measure_id]
        rows.append([
            p.measure_id,
            _p(p.title, s["Cell"]),
            f"{p.weightage:g}%",
            f"{p.target:g}%",
            f"{p.numerator:g}",
            f"{p.denominator:g}",
            f"{ps.score:.2f}%",
            f"{ps.weighted_score:.2f}",
        ])
    total_weightage = sum(p.weightage for p in parameters)
    rows.append(["Total", "", f"{total_weightage:g}%", "", "", "", "", f"{result.total_score:.2f}"])

    table = Table(
        rows,
        colWidths=[16 * mm, 60 * mm, 18 * mm, 14 * mm, 20 * mm, 22 * mm, 16 * mm, 16 * mm],
        repeatRows=1,
    )
    table.setStyle(_table_style(header_bg=_GREY, header_fg=colors.black, footer=True))
    story += [Spacer(1, 6), table]

    return _build(filepath, story, ["Version 1.0"], ANNEXURE_TITLE)
