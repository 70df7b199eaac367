"""Per-category classification of pending updates.

Turns the records the site tool returned for one category into detail lines
and a single category severity. All functions here are pure: the adapter
result has already been collected and no I/O happens.

Provides:
- NO_UPDATES_MESSAGE / PROBLEM_MESSAGE: Fixed single-line messages
- classify_core: Classify pending core releases
- classify_extensions: Classify pending theme/plugin updates
- pending_updates: Drop theme/plugin rows without an available version
- malformed_result: Result for data that could not be understood
"""

from collections.abc import Iterable, Mapping, Sequence

from wpupdates.core.output import (
    Category,
    CategoryResult,
    CoreUpdate,
    ExtensionUpdate,
    format_detail,
)
from wpupdates.core.severity import Severity, reduce_core_severity

NO_UPDATES_MESSAGE = "No updates needed"
PROBLEM_MESSAGE = "Problem checking status"


def _no_updates(category: Category) -> CategoryResult:
    return CategoryResult(
        category=category,
        severity=Severity.OK,
        lines=(format_detail(Severity.OK, NO_UPDATES_MESSAGE),),
    )


def malformed_result(category: Category) -> CategoryResult:
    """Build the UNKNOWN result for a category whose data was unusable."""
    return CategoryResult(
        category=category,
        severity=Severity.UNKNOWN,
        lines=(format_detail(Severity.UNKNOWN, PROBLEM_MESSAGE),),
    )


def pending_updates(items: Iterable[ExtensionUpdate]) -> list[ExtensionUpdate]:
    """Keep only theme/plugin rows that have an update available."""
    return [item for item in items if item.has_update]


def classify_core(
    items: Sequence[CoreUpdate],
    policy: Mapping[str, Severity],
) -> CategoryResult:
    """Classify pending core releases.

    Each release is mapped through the policy by its ``update_type``. The
    category severity follows the equality rule in
    :func:`~wpupdates.core.severity.reduce_core_severity`.

    Args:
        items: Pending core releases
        policy: ``{"major": Severity, "minor": Severity}``

    Returns:
        CategoryResult with one line per release, or the UNKNOWN result when
        a release has an update type the policy does not know
    """
    if not items:
        return _no_updates(Category.CORE)

    lines = []
    severities = []
    for item in items:
        severity = policy.get(item.update_type)
        if severity is None:
            return malformed_result(Category.CORE)
        severities.append(severity)
        lines.append(format_detail(severity, f"WordPress {item.version} available"))

    return CategoryResult(
        category=Category.CORE,
        severity=reduce_core_severity(severities),
        lines=tuple(lines),
    )


def classify_extensions(
    category: Category,
    items: Sequence[ExtensionUpdate],
    severity: Severity,
) -> CategoryResult:
    """Classify pending theme or plugin updates.

    Every update in the category gets the same configured severity.

    Args:
        category: Category.THEME or Category.PLUGIN
        items: Rows that have an update available
        severity: Severity configured for the category

    Returns:
        CategoryResult with one ``title version -> update_version`` line per row
    """
    if not items:
        return _no_updates(category)

    lines = tuple(
        format_detail(severity, f"{item.title} {item.version} -> {item.update_version}")
        for item in items
    )
    return CategoryResult(category=category, severity=severity, lines=lines)
