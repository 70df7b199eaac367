"""Core probe functionality.

Provides:
- Severity levels and policy letters
- Per-category classification of pending updates
- Report building and overall severity aggregation
"""

from .classifier import classify_core, classify_extensions, malformed_result, pending_updates
from .config import CategoryCheck, Config, build_plan, load_config
from .output import Category, CategoryResult, CoreUpdate, ExtensionUpdate, format_detail
from .report import Report, build_report, run_checks, summary_notes
from .severity import POLICY_LETTERS, Severity, reduce_core_severity, severity_from_letter, worst

__all__ = [
    "classify_core",
    "classify_extensions",
    "malformed_result",
    "pending_updates",
    "CategoryCheck",
    "Config",
    "build_plan",
    "load_config",
    "Category",
    "CategoryResult",
    "CoreUpdate",
    "ExtensionUpdate",
    "format_detail",
    "Report",
    "build_report",
    "run_checks",
    "summary_notes",
    "POLICY_LETTERS",
    "Severity",
    "reduce_core_severity",
    "severity_from_letter",
    "worst",
]
