"""
Shared utilities for the catalog reporter.
"""

from .paths import build_report_path

__all__ = ["build_report_path"]
