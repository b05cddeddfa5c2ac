"""
Output path helpers.

Report names become file names, so they are sanitised in one place.
"""

import re
from pathlib import Path
from typing import Union

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def _safe_name(report_name: str) -> str:
    name = _UNSAFE_CHARS.sub("_", report_name.strip()).strip("_")
    if not name:
        raise ValueError(f"Invalid report name: {report_name!r}")
    return name


def build_report_path(output_dir: Union[str, Path], report_name: str) -> Path:
    """
    Build the CSV path for a report.

    Example:
        build_report_path("output/reports", "q03_revenue_by_category")
        -> Path("output/reports/q03_revenue_by_category.csv")
    """
    return Path(output_dir) / f"{_safe_name(report_name)}.csv"
