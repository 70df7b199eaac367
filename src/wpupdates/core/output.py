"""Update records, category results and detail line formatting.

Provides structured types for what the site tool reports and for what the
probe prints. Every detail line carries its severity label, so a monitoring
operator can read each finding on its own.

Provides:
- Category: Enum for the three scanned categories (core/theme/plugin)
- CoreUpdate: Pending WordPress core release
- ExtensionUpdate: Theme or plugin record with its available version
- CategoryResult: Classified lines and reduced severity for one category
- format_detail: Format a "[SEVERITY] message" detail line
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

from wpupdates.core.severity import Severity


class Category(str, Enum):
    """Scanned category, in declaration (and output) order."""

    CORE = "core"
    THEME = "theme"
    PLUGIN = "plugin"


class CoreUpdate(BaseModel):
    """Pending core release as listed by ``wp core check-update``.

    Attributes:
        version: Release that can be installed (e.g. "6.4.2")
        update_type: "major" or "minor"
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    version: str
    update_type: str


class ExtensionUpdate(BaseModel):
    """Theme or plugin row as listed by ``wp <category> list``.

    Attributes:
        title: Human readable name shown in detail lines
        version: Installed version
        update_version: Available version, empty when already current
        name: Slug of the theme or plugin
        status: Activation status (active, inactive, parent, must-use...)
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    version: str
    update_version: str | None = ""
    name: str = ""
    status: str = ""

    @property
    def has_update(self) -> bool:
        return bool(self.update_version)


@dataclass(frozen=True)
class CategoryResult:
    """Outcome of classifying one category."""

    category: Category
    severity: Severity
    lines: tuple[str, ...]

    @property
    def is_ok(self) -> bool:
        return bool(self.lines) and self.lines[0].startswith(f"[{Severity.OK.label}]")


def format_detail(severity: Severity, message: str) -> str:
    """Format a detail line as ``[SEVERITY] message``."""
    return f"[{severity.label}] {message}"
