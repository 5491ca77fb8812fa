"""Run a full three-caller overlap comparison from a YAML config.

Orchestrates the workflow:
1. Pre-flight validation of config and inputs (collect-all-errors)
2. Load every caller's variant file
3. Compute the intersection lattice over all variants and per variant type
4. Extract each caller's private calls and validate them against the truth log
5. Write membership/intersection/private-call tables and the JSON report

Usage:
    caller-overlap config.yaml [log_file]
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Add scripts directory and project root to path
SCRIPTS_DIR = str(Path(__file__).resolve().parent.parent)
if SCRIPTS_DIR not in sys.path:
    sys.path.insert(0, SCRIPTS_DIR)

PROJECT_ROOT = str(Path(__file__).resolve().parent.parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from constants import ALL_TYPES_SCOPE, VariantType  # noqa: E402
from models.callset import CallerPanel, NamedVariantSet  # noqa: E402
from analysis.set_comparison import (  # noqa: E402
    build_membership_table,
    compute_intersection_lattice,
    pairwise_concordance,
    private_vids,
)
from analysis.truth_validation import validate_private_calls  # noqa: E402
from parsers.load_truth_log import load_truth_log  # noqa: E402
from parsers.load_variants import count_by_type, load_variants, vids  # noqa: E402
from reporting.json_report import generate_json_report, serialize_report  # noqa: E402
from reporting.report_storage import (  # noqa: E402
    compute_input_checksums,
    generate_report_name,
    save_report,
    unique_file_stems,
)
from reporting.tables import (  # noqa: E402
    write_intersections_table,
    write_membership_table,
    write_private_calls,
)
from validators import (  # noqa: E402
    EmptyComparisonInput,
    ValidationContext,
    ValidationError,
    load_config,
    validate_config,
    validate_single_sample_vcf,
    validate_truth_log_format,
    validate_variant_file,
)

log = logging.getLogger(__name__)


def validate_all_inputs(config: dict) -> ValidationContext:
    """Validate config structure and every referenced input file.

    Args:
        config: Loaded configuration dictionary

    Returns:
        ValidationContext with collected errors and warnings
    """
    ctx = ValidationContext()

    log.info("Validating configuration structure...")
    ctx.validate(validate_config, config)
    if ctx.has_errors():
        return ctx  # Paths below are not trustworthy

    for caller, path in config["callers"].items():
        log.info("Validating variant file for %s: %s", caller, path)
        ctx.validate(validate_variant_file, path)
        ctx.validate(validate_single_sample_vcf, path)

    truth_log = config.get("truth_log")
    if truth_log:
        log.info("Validating truth log: %s", truth_log)
        ctx.validate(validate_truth_log_format, truth_log)
    else:
        ctx.warn("No truth_log configured; private calls will not be validated")

    if ctx.warnings:
        log.warning("Validation completed with %d warning(s):", len(ctx.warnings))
        for i, warning in enumerate(ctx.warnings, 1):
            log.warning("  %d. %s", i, warning)

    if ctx.has_errors():
        log.error("Validation failed with %d error(s)", len(ctx.errors))
    else:
        log.info("All input validations passed")

    return ctx


def compare_scopes(
    records_by_caller: dict,
    panel: CallerPanel,
    variant_types: list[str],
) -> dict:
    """Compute one lattice for all variants plus one per variant type.

    Scopes with no variants in any caller map to None ("no data").
    """
    scopes = {ALL_TYPES_SCOPE: None}
    scopes.update({t: t for t in variant_types})

    comparisons = {}
    for scope, variant_type in scopes.items():
        collections = {
            caller: vids(records_by_caller[caller], variant_type)
            for caller in panel.callers
        }
        try:
            comparisons[scope] = compute_intersection_lattice(collections, panel)
        except EmptyComparisonInput as e:
            log.warning("Comparison '%s' has no data: %s", scope, e)
            comparisons[scope] = None
    return comparisons


def run_comparison(config: dict) -> dict:
    """Run the comparison described by an already-validated config.

    Args:
        config: Configuration dictionary (see validators.config)

    Returns:
        Dict with report path, output table paths and the report itself

    Raises:
        ValidationError: On malformed inputs (MalformedRecord, VidFormatError)
    """
    sample = config["sample"]
    output_dir = Path(config["output_dir"])
    panel = CallerPanel.from_names(config["callers"].keys())
    variant_types = config.get("variant_types") or list(VariantType.ORDERED)
    truth_log = config.get("truth_log")

    log.info("Comparing %d callers for sample %s: %s", len(panel), sample, ", ".join(panel))

    # 1. Load
    records_by_caller = {
        caller: load_variants(config["callers"][caller]) for caller in panel.callers
    }
    variant_counts = {
        caller: count_by_type(records) for caller, records in records_by_caller.items()
    }

    # 2. Compare
    comparisons = compare_scopes(records_by_caller, panel, variant_types)
    all_vids = {
        caller: NamedVariantSet.from_iterable(caller, vids(records))
        for caller, records in records_by_caller.items()
    }
    concordance = pairwise_concordance(all_vids)

    # 3. Private calls vs truth
    truth_results = {}
    private_tables = {}
    if truth_log:
        truth = load_truth_log(truth_log)
        stems = unique_file_stems(panel.callers)
        for caller in panel.callers:
            result = validate_private_calls(private_vids(all_vids, caller), truth, caller=caller)
            truth_results[caller] = result
            private_tables[caller] = write_private_calls(
                result, output_dir / f"private_calls_{stems[caller]}.tsv"
            )

    # 4. Tables for the charting collaborator
    membership_path = write_membership_table(
        build_membership_table(records_by_caller, panel),
        output_dir / "membership.tsv",
    )
    intersections_path = write_intersections_table(
        comparisons, list(panel.callers), output_dir / "intersections.tsv"
    )

    # 5. Report
    inputs = {f"caller:{c}": p for c, p in config["callers"].items()}
    if truth_log:
        inputs["truth_log"] = truth_log

    report = generate_json_report(
        sample=sample,
        callers=list(panel.callers),
        input_checksums=compute_input_checksums(inputs),
        variant_counts=variant_counts,
        comparisons=comparisons,
        pairwise_concordance=concordance,
        truth_validation=truth_results,
        truth_log=truth_log,
    )
    report_path = save_report(serialize_report(report), output_dir, generate_report_name(sample))

    return {
        "report": report,
        "report_path": report_path,
        "membership_table": membership_path,
        "intersections_table": intersections_path,
        "private_call_tables": private_tables,
    }


def main(config_path: str, log_file: str = "caller_overlap.log") -> int:
    """Main entry point for a comparison run.

    Args:
        config_path: Path to configuration file
        log_file: Path to log file

    Returns:
        Process exit status (0 on success, 1 on failure)
    """
    logging.basicConfig(
        filename=log_file,
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    # Also log to console
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    log.addHandler(console)

    log.info("=" * 60)
    log.info("Caller overlap comparison")
    log.info("=" * 60)

    try:
        config = load_config(config_path)
        validate_all_inputs(config).raise_if_errors()
        result = run_comparison(config)

        log.info("=" * 60)
        log.info("Comparison completed successfully")
        log.info("Report: %s", result["report_path"])
        log.info("=" * 60)
        return 0

    except ValidationError as e:
        log.error("=" * 60)
        log.error("COMPARISON FAILED")
        log.error("=" * 60)
        log.error(str(e))
        log.error("=" * 60)
        log.error("Please fix the errors above and re-run the comparison")
        return 1

    except Exception:
        log.exception("Unexpected error during comparison")
        return 1


def cli() -> None:
    """Console-script wrapper around main()."""
    if len(sys.argv) < 2:
        print("Usage: caller-overlap <config.yaml> [log_file]")
        sys.exit(1)

    log_file = sys.argv[2] if len(sys.argv) > 2 else "caller_overlap.log"
    sys.exit(main(sys.argv[1], log_file))


if __name__ == "__main__":
    cli()
