"""Data validation utilities for the caller-overlap pipeline.

This package provides the error taxonomy and pre-flight validation functions
that ensure data integrity before the loaders and comparisons run, preventing
silent failures and improving error messages.

Modules:
    base: Exception hierarchy, error collection, file existence
    input_files: Variant table, single-sample VCF and truth log checks
    config: Comparison config loading and structure validation

Example:
    >>> from validators import ValidationError, validate_variant_file
    >>> try:
    ...     validate_variant_file("bcftools.vcf")
    ... except ValidationError as e:
    ...     print(f"Validation failed: {e}")
"""

from .base import (
    ValidationError,
    MalformedRecord,
    VidFormatError,
    EmptyComparisonInput,
    ValidationContext,
    validate_file_exists,
)

from .input_files import (
    validate_variant_file,
    validate_single_sample_vcf,
    validate_truth_log_format,
)

from .config import (
    load_config,
    validate_callers_config,
    validate_variant_types,
    validate_config,
)

__all__ = [
    # Exceptions
    "ValidationError",
    "MalformedRecord",
    "VidFormatError",
    "EmptyComparisonInput",
    "ValidationContext",
    # Base validators
    "validate_file_exists",
    # Input file validators
    "validate_variant_file",
    "validate_single_sample_vcf",
    "validate_truth_log_format",
    # Config validators
    "load_config",
    "validate_callers_config",
    "validate_variant_types",
    "validate_config",
]
