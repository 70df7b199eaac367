"""Adapters for the site management tool.

Provides:
- Base adapter protocol and infrastructure
- WPCliTool for reading pending updates through WP-CLI
"""

from .base import (
    AdapterFailure,
    ToolResult,
    ToolStatus,
    UpdateSource,
    check_binary,
    run_subprocess,
)
from .wpcli import WPCliTool

__all__ = [
    "AdapterFailure",
    "ToolResult",
    "ToolStatus",
    "UpdateSource",
    "check_binary",
    "run_subprocess",
    "WPCliTool",
]
