"""Report storage and naming convention.

Provides naming conventions, checksum computation, and storage
utilities for comparison reports and their tabular outputs.
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

log = logging.getLogger(__name__)

REPORT_TYPE = "caller_overlap"


def sanitize_name(name: str) -> str:
    """Make a sample or caller name safe to embed in a filename."""
    return re.sub(r"[^A-Za-z0-9._-]+", "_", name.strip()) or "unnamed"


def unique_file_stems(names: Iterable[str]) -> dict[str, str]:
    """Map each name to a sanitized filename stem that no other name shares.

    Names whose sanitized forms coincide are suffixed with their 1-based
    position in ``names``.

    Examples:
        >>> unique_file_stems(["a b", "a/b", "c"])
        {'a b': 'a_b_1', 'a/b': 'a_b_2', 'c': 'c'}
    """
    names = list(names)
    stems = [sanitize_name(n) for n in names]
    counts = Counter(stems)

    result = {}
    used = set()
    for i, (name, stem) in enumerate(zip(names, stems), start=1):
        candidate = stem if counts[stem] == 1 else f"{stem}_{i}"
        while candidate in used:
            candidate = f"{candidate}_{i}"
        if candidate != stem:
            log.warning("File name for '%s' collides with another name; using '%s'", name, candidate)
        used.add(candidate)
        result[name] = candidate
    return result


def generate_report_name(
    sample: str,
    report_type: str = REPORT_TYPE,
    extension: str = "json",
    date: datetime | None = None,
) -> str:
    """Generate a report filename following the naming convention.

    Format: {sample}_{date}_{report_type}.{ext}

    Args:
        sample: Sample identifier
        report_type: Report type label
        extension: File extension
        date: Report date (defaults to now)

    Returns:
        Formatted filename string

    Examples:
        >>> generate_report_name("S1", date=datetime(2024, 5, 1, 12, 0, 0))
        'S1_20240501_120000_caller_overlap.json'
    """
    dt = date or datetime.now(UTC)
    date_str = dt.strftime("%Y%m%d_%H%M%S")
    return f"{sanitize_name(sample)}_{date_str}_{report_type}.{extension}"


def compute_file_checksum(file_path: str | Path) -> str:
    """Compute SHA-256 checksum of a file.

    Args:
        file_path: Path to the file

    Returns:
        Hex digest string
    """
    h = hashlib.sha256()
    with open(file_path, "rb") as f:
        while True:
            chunk = f.read(8192)
            if not chunk:
                break
            h.update(chunk)
    return h.hexdigest()


def compute_input_checksums(paths: dict[str, str | Path]) -> dict[str, dict]:
    """Checksum each named input file.

    Returns:
        Mapping label -> {"path", "sha256"}
    """
    return {
        label: {"path": str(path), "sha256": compute_file_checksum(path)}
        for label, path in paths.items()
    }


def save_report(
    content: str,
    output_dir: str | Path,
    filename: str,
) -> str:
    """Save a report to disk and return its path.

    Args:
        content: Serialized report content
        output_dir: Directory to save the report in
        filename: Report filename

    Returns:
        Full path to the saved report
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    file_path = out_dir / filename
    file_path.write_text(content)

    checksum = compute_file_checksum(file_path)
    log.info("Saved report: %s (sha256=%s)", file_path, checksum[:12])

    return str(file_path)
