"""Configuration validation for comparison config.yaml.

This module provides validators to ensure config.yaml has required fields,
valid values, and proper structure before a comparison runs.
"""

from pathlib import Path

import yaml

from constants import RESERVED_COLUMN_NAMES, VariantType

from .base import ValidationError

VALID_VARIANT_TYPES = VariantType.ALL
MIN_CALLERS = 2


def load_config(config_path: str | Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Configuration dictionary

    Raises:
        ValidationError: If config cannot be loaded
    """
    path = Path(config_path)

    if not path.exists():
        raise ValidationError(f"Configuration file not found: {path}")

    try:
        with open(path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Failed to parse configuration file {path}: {e}")
    except OSError as e:
        raise ValidationError(f"Failed to load configuration file {path}: {e}")

    if not isinstance(config, dict):
        raise ValidationError(
            f"Configuration file {path} does not contain a valid YAML dictionary"
        )

    return config


def validate_callers_config(callers: dict) -> None:
    """Validate the caller name -> variant file mapping.

    Args:
        callers: Mapping from caller name to variant file path

    Raises:
        ValidationError: If the mapping is malformed

    Example:
        >>> validate_callers_config({
        ...     "bcftools": "calls/bt.vcf",
        ...     "haplotypecaller": "calls/hc.vcf",
        ...     "freebayes": "calls/fb.vcf",
        ... })
    """
    if not isinstance(callers, dict):
        raise ValidationError(
            f"Config field 'callers' must be a mapping of caller name to file, "
            f"got: {type(callers).__name__}"
        )

    if len(callers) < MIN_CALLERS:
        raise ValidationError(
            f"Config field 'callers' needs at least {MIN_CALLERS} callers, "
            f"got {len(callers)}"
        )

    for name, path in callers.items():
        if not name or not isinstance(name, str):
            raise ValidationError(
                f"Caller name must be a non-empty string, got: {name!r}"
            )
        if name in RESERVED_COLUMN_NAMES:
            raise ValidationError(
                f"Caller name '{name}' is reserved for an output table column. "
                f"Reserved names are: {sorted(RESERVED_COLUMN_NAMES)}"
            )
        if not isinstance(path, str) or not path:
            raise ValidationError(
                f"Caller '{name}' file must be a non-empty string, "
                f"got: {type(path).__name__}"
            )


def validate_variant_types(variant_types: list[str]) -> None:
    """Validate the per-type comparison list.

    Args:
        variant_types: List of variant type names

    Raises:
        ValidationError: If any type is invalid or the list is empty

    Example:
        >>> validate_variant_types(["snv", "del"])  # Pass
        >>> validate_variant_types(["SNP"])  # Fail
    """
    if not isinstance(variant_types, list):
        raise ValidationError(
            f"Config field 'variant_types' must be a list, "
            f"got: {type(variant_types).__name__}"
        )

    if not variant_types:
        raise ValidationError(
            "variant_types cannot be empty. "
            f"Valid options are: {sorted(VALID_VARIANT_TYPES)}"
        )

    invalid = set(variant_types) - VALID_VARIANT_TYPES
    if invalid:
        raise ValidationError(
            f"Invalid variant_types: {sorted(invalid)}. "
            f"Valid options are: {sorted(VALID_VARIANT_TYPES)}"
        )


def validate_config(config: dict) -> None:
    """Comprehensive configuration validation.

    Validates:
    - Required fields are present
    - Callers mapping is well formed
    - Variant types are valid
    - File paths are strings (existence checked separately)

    Args:
        config: Configuration dictionary from config.yaml

    Raises:
        ValidationError: If configuration is invalid

    Example:
        >>> validate_config({
        ...     "sample": "S1",
        ...     "callers": {"bcftools": "bt.vcf", "haplotypecaller": "hc.vcf"},
        ...     "truth_log": "mutations.tsv",
        ...     "variant_types": ["snv", "ins", "del"],
        ...     "output_dir": "results",
        ... })
    """
    required_fields = {"sample", "callers", "output_dir"}

    missing = required_fields - set(config.keys())
    if missing:
        raise ValidationError(
            f"Config missing required fields: {sorted(missing)}"
        )

    if not config["sample"] or not isinstance(config["sample"], str):
        raise ValidationError(
            f"Config field 'sample' must be a non-empty string, "
            f"got: {config.get('sample')}"
        )

    validate_callers_config(config["callers"])

    if "variant_types" in config:
        validate_variant_types(config["variant_types"])

    if not isinstance(config["output_dir"], str):
        raise ValidationError(
            f"Config field 'output_dir' must be a string, "
            f"got: {type(config['output_dir']).__name__}"
        )

    # Optional truth log
    if config.get("truth_log") is not None and not isinstance(config["truth_log"], str):
        raise ValidationError(
            f"Config field 'truth_log' must be a string, "
            f"got: {type(config['truth_log']).__name__}"
        )

