"""
CCI Calculator — Main Orchestrator

Usage:
    python -m cci_calculator calculate --input values.json        # score an input file
    python -m cci_calculator calculate --sample --seed 7          # score generated sample data
    python -m cci_calculator calculate -i values.json --formats json pdf
    python -m cci_calculator template -o values.json              # blank input file
    python -m cci_calculator sample -o sample.json                # input file with sample values

Annexure-K submission:
    python -m cci_calculator annexure set --organization "Acme" --entity-type "Stock Broker" ...
    python -m cci_calculator annexure show
    python -m cci_calculator annexure export --input values.json --formats pdf docx
    python -m cci_calculator annexure clear
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from . import __version__
from .annexure import AnnexureKForm, FormStore, FormValidationError
from .config import (
    CalculatorConfig,
    DESIGNATIONS,
    ENTITY_CATEGORIES,
    ENTITY_TYPES,
    REPORT_FORMATS,
)
from .parameters import (
    ParameterInputError,
    default_parameters,
    dump_parameters,
    generate_sample_data,
    load_parameters,
)
from .reporting import (
    export_annexure_docx,
    export_annexure_pdf,
    export_csv,
    export_executive_summary,
    export_json,
    export_markdown,
    export_pdf,
)
from .scoring import CCIResult, Parameter, compute_result

logger = logging.getLogger("cci_calculator")

_FORM_FIELDS = [
    "organization", "entity_type", "entity_category", "rationale", "period",
    "auditing_organization", "signatory_name", "designation",
]


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _add_input_args(p: argparse.ArgumentParser) -> None:
    source = p.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", "-i", type=Path, help="Parameter input file (JSON)")
    source.add_argument("--sample", action="store_true", help="Use generated sample data")
    p.add_argument("--seed", type=int, default=None, help="Seed for --sample")
    p.add_argument("--organization", help="Organization name (overrides input file and config)")
    p.add_argument("--date", help="Assessment date, e.g. 2025-03-31 (overrides input file and config)")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cci_calculator",
        description="SEBI CSCRF Cyber Capability Index (CCI) calculator",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", "-c", type=Path, help="Path to JSON configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable info logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # calculate
    calc_p = subparsers.add_parser("calculate", help="Compute the CCI and write reports")
    _add_input_args(calc_p)
    calc_p.add_argument("--output-dir", "-o", type=Path, help="Output directory for reports")
    calc_p.add_argument(
        "--formats",
        nargs="+",
        choices=REPORT_FORMATS,
        default=None,
        help="Report formats to generate (default: all)",
    )

    # template
    tpl_p = subparsers.add_parser("template", help="Write a blank parameter input file")
    tpl_p.add_argument("--output", "-o", type=Path, default=Path("cci_input.json"))
    tpl_p.add_argument("--organization", default="")

    # sample
    smp_p = subparsers.add_parser("sample", help="Write an input file with sample values")
    smp_p.add_argument("--output", "-o", type=Path, default=Path("cci_sample.json"))
    smp_p.add_argument("--seed", type=int, default=None)
    smp_p.add_argument("--organization", default="")

    # annexure
    ann_p = subparsers.add_parser("annexure", help="Manage and export the Annexure-K form")
    ann_p.add_argument("--store-dir", type=Path, help="Directory holding the cached form")
    ann_sub = ann_p.add_subparsers(dest="annexure_action", help="Annexure actions")

    set_p = ann_sub.add_parser("set", help="Update fields of the cached form")
    set_p.add_argument("--organization")
    set_p.add_argument("--entity-type", choices=ENTITY_TYPES)
    set_p.add_argument("--entity-category", choices=ENTITY_CATEGORIES)
    set_p.add_argument("--rationale")
    set_p.add_argument("--period", help='Reporting period, "Month YYYY - Month YYYY"')
    set_p.add_argument("--auditing-organization", help="Third-party auditor (MIIs only)")
    set_p.add_argument("--signatory-name")
    set_p.add_argument("--designation", choices=DESIGNATIONS)

    ann_sub.add_parser("show", help="Show the cached form and its validation status")
    ann_sub.add_parser("clear", help="Discard the cached form")

    exp_p = ann_sub.add_parser("export", help="Validate the form and export Annexure-K documents")
    _add_input_args(exp_p)
    exp_p.add_argument("--output-dir", "-o", type=Path, help="Output directory")
    exp_p.add_argument("--formats", nargs="+", choices=["pdf", "docx"], default=["pdf", "docx"])

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CalculatorConfig:
    """Build configuration from the config file and CLI overrides."""
    if args.config and args.config.exists():
        config = CalculatorConfig.from_file(args.config)
    else:
        if args.config:
            logger.warning(f"Config file {args.config} not found, using defaults")
        config = CalculatorConfig()

    config.verbose = config.verbose or args.verbose
    if getattr(args, "output_dir", None):
        config.output.base_dir = str(args.output_dir)
    if getattr(args, "formats", None) and args.command == "calculate":
        config.output.formats = args.formats
    if getattr(args, "store_dir", None):
        config.form_store_dir = args.store_dir
    return config


# ---------------------------------------------------------------------------
# Shared steps
# ---------------------------------------------------------------------------

def load_inputs(
    args: argparse.Namespace,
    config: CalculatorConfig,
    fallback_organization: str = "",
) -> tuple[list[Parameter], str, str]:
    """Resolve parameters, organization and date from CLI, input file and config."""
    metadata: dict[str, str] = {}
    if args.sample:
        parameters = generate_sample_data(args.seed)
    else:
        parameters, metadata = load_parameters(args.input)

    organization = (
        args.organization
        or metadata.get("organization")
        or fallback_organization
        or config.organization
    )
    assessment_date = args.date or metadata.get("assessment_date") or config.assessment_date
    return parameters, organization, assessment_date


def print_result(result: CCIResult) -> None:
    print(f"  CCI Score:          {result.total_score:.2f}/100")
    print(f"  Maturity Level:     {result.maturity_level}")
    print(f"  Compliance Status:  {result.compliance_status}")
    print()
    for cs in result.main_category_scores:
        print(f"    {cs.category:40s} {cs.score:6.1f}/100  ({cs.maturity_level})")


def generate_reports(
    result: CCIResult,
    parameters: list[Parameter],
    output_dir: Path,
    report_id: str,
    formats: list[str],
) -> list[Path]:
    """Generate all requested report formats."""
    created = []

    if "json" in formats:
        path = export_json(result, parameters, output_dir, report_id)
        created.append(path)
        print(f"  📄 JSON:       {path}")

    if "csv" in formats:
        paths = export_csv(result, parameters, output_dir, report_id)
        created.extend(paths)
        for p in paths:
            print(f"  📊 CSV:        {p}")

    if "markdown" in formats:
        path = export_markdown(result, parameters, output_dir, report_id)
        created.append(path)
        print(f"  📝 Markdown:   {path}")

    if "executive" in formats:
        path = export_executive_summary(result, parameters, output_dir, report_id)
        created.append(path)
        print(f"  📋 Executive:  {path}")

    if "pdf" in formats:
        path = export_pdf(result, parameters, output_dir, report_id)
        created.append(path)
        print(f"  📕 PDF:        {path}")

    return created


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_calculate(args: argparse.Namespace, config: CalculatorConfig) -> int:
    try:
        parameters, organization, assessment_date = load_inputs(args, config)
    except (OSError, ParameterInputError) as e:
        print(f"\n❌ Could not load parameters: {e}")
        return 1

    report_id = datetime.now().strftime("%Y%m%d_%H%M%S") + "_" + uuid.uuid4().hex[:8]
    output_dir = config.output.report_dir

    print("=" * 70)
    print(f" CCI Calculator v{__version__}")
    print("=" * 70)
    print(f"\n🏢 Organization:  {organization}")
    print(f"📅 Date:          {assessment_date}")
    print(f"📂 Output:        {output_dir.resolve()}\n")

    result = compute_result(parameters, organization, assessment_date)
    print_result(result)

    print("\n" + "=" * 70)
    print(" REPORT GENERATION")
    print("=" * 70 + "\n")
    config.output.create_directories()
    created = generate_reports(result, parameters, output_dir, report_id, config.output.formats)

    print(f"\n  Score: {result.total_score:.2f}/100 ({result.maturity_level}, {result.compliance_status})")
    print(f"  Files: {len(created)} reports generated\n")
    return 0


def _cmd_template(args: argparse.Namespace, config: CalculatorConfig) -> int:
    path = dump_parameters(
        default_parameters(), args.output,
        organization=args.organization or config.organization,
        assessment_date=config.assessment_date,
    )
    print(f"  ✅ Input template written to {path}")
    return 0


def _cmd_sample(args: argparse.Namespace, config: CalculatorConfig) -> int:
    path = dump_parameters(
        generate_sample_data(args.seed), args.output,
        organization=args.organization or config.organization,
        assessment_date=config.assessment_date,
    )
    print(f"  ✅ Sample input written to {path}")
    return 0


def _cmd_annexure(args: argparse.Namespace, config: CalculatorConfig) -> int:
    """Handle `annexure set|show|clear|export` sub-commands."""
    store = FormStore(config.form_store_dir)
    action = args.annexure_action

    if action == "set":
        return _annexure_set(args, store)
    elif action == "show":
        return _annexure_show(store)
    elif action == "clear":
        if store.clear():
            print("  ✅ Cached Annexure-K form cleared.")
        else:
            print("  No cached Annexure-K form.")
        return 0
    elif action == "export":
        return _annexure_export(args, config, store)

    print("Usage: python -m cci_calculator annexure {set|show|clear|export}")
    return 1


def _print_form_errors(errors: dict[str, str]) -> None:
    for field_name, message in errors.items():
        print(f"    ⚠  {field_name}: {message}")


def _annexure_set(args: argparse.Namespace, store: FormStore) -> int:
    form = store.load() or AnnexureKForm()
    form.update(**{name: getattr(args, name, None) for name in _FORM_FIELDS})

    if not store.save(form):
        print("  ❌ Organization is required before the form can be saved.")
        return 1

    print(f"  ✅ Annexure-K form saved for '{form.organization}'.")
    errors = form.validate()
    if errors:
        print("  Still incomplete:")
        _print_form_errors(errors)
    return 0


def _annexure_show(store: FormStore) -> int:
    form = store.load()
    if form is None:
        print("  No cached Annexure-K form. Start one with 'annexure set --organization ...'")
        return 0

    print()
    for name, value in form.to_dict().items():
        print(f"  {name.replace('_', ' ').title():<24s} {value}")
    print(f"  {'MII':<24s} {'yes' if form.is_mii else 'no'}")

    errors = form.validate()
    print()
    if errors:
        print("  ❌ Form is not ready for export:")
        _print_form_errors(errors)
    else:
        print("  ✅ Form is complete.")
    return 0


def _annexure_export(
    args: argparse.Namespace,
    config: CalculatorConfig,
    store: FormStore,
) -> int:
    cached = store.load()
    try:
        parameters, organization, assessment_date = load_inputs(
            args, config, fallback_organization=cached.organization if cached else "",
        )
    except (OSError, ParameterInputError) as e:
        print(f"\n❌ Could not load parameters: {e}")
        return 1

    form = store.load(organization)
    if form is None:
        print(f"\n❌ No saved Annexure-K form for '{organization}'. Use 'annexure set' first.")
        return 1

    result = compute_result(parameters, organization, assessment_date)
    print_result(result)
    print()

    output_dir = config.output.report_dir
    try:
        if "pdf" in args.formats:
            print(f"  📕 PDF:        {export_annexure_pdf(result, parameters, form, output_dir)}")
        if "docx" in args.formats:
            print(f"  📘 Word:       {export_annexure_docx(result, parameters, form, output_dir)}")
    except FormValidationError as e:
        print("  ❌ Annexure-K form is incomplete:")
        _print_form_errors(e.errors)
        return 1

    store.clear()
    return 0


_COMMANDS = {
    "calculate": _cmd_calculate,
    "template": _cmd_template,
    "sample": _cmd_sample,
    "annexure": _cmd_annexure,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for `python -m cci_calculator` and the `cci-calculator` script."""
    args = parse_args(argv)
    config = build_config(args)

    logging.basicConfig(
        level=logging.INFO if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        print("Usage: python -m cci_calculator {calculate|template|sample|annexure} ...")
        return 1

    return _COMMANDS[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
