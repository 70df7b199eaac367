"""Report builder: run the category plan and assemble the probe output.

Queries the update source for each planned category in order, classifies
the records and folds the category severities into one overall severity.
A collection failure stops the run and is returned as an AdapterFailure;
printing and exiting are left to the command line entry point.

Provides:
- Report: Overall severity, summary line and per-category results
- summary_notes: Notes for the summary line
- build_report: Assemble a Report from classified category results
- run_checks: Query the update source and build the Report
"""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from wpupdates.core.classifier import (
    classify_core,
    classify_extensions,
    malformed_result,
    pending_updates,
)
from wpupdates.core.config import CategoryCheck
from wpupdates.core.output import Category, CategoryResult
from wpupdates.core.severity import Severity, worst
from wpupdates.tools.base import AdapterFailure, ToolResult, ToolStatus, UpdateSource

logger = structlog.get_logger()


@dataclass(frozen=True)
class Report:
    """Result of a complete run.

    Attributes:
        severity: Worst severity across all checked categories
        summary: First output line, e.g. "WARNING: Core update, 2 plugins"
        sections: (check, result) pairs in output order
    """

    severity: Severity
    summary: str
    sections: tuple[tuple[CategoryCheck, CategoryResult], ...]

    @property
    def exit_code(self) -> int:
        return self.severity.exit_code

    def lines(self) -> list[str]:
        """Summary line, then each category header followed by its details."""
        output = [self.summary]
        for check, result in self.sections:
            output.append(check.header)
            output.extend(result.lines)
        return output

    def render(self) -> str:
        return "\n".join(self.lines())


def summary_notes(results: Sequence[CategoryResult]) -> list[str]:
    """Build the summary notes for categories that are not OK.

    Core contributes "Core update" however many releases are pending;
    themes and plugins contribute their line count, e.g. "1 theme" or
    "3 plugins".
    """
    notes = []
    for result in results:
        if result.is_ok:
            continue
        if result.category == Category.CORE:
            notes.append("Core update")
        else:
            count = len(result.lines)
            suffix = "" if count == 1 else "s"
            notes.append(f"{count} {result.category.value}{suffix}")
    return notes


def build_report(sections: Sequence[tuple[CategoryCheck, CategoryResult]]) -> Report:
    """Fold classified categories into a Report.

    Args:
        sections: (check, result) pairs in plan order

    Returns:
        Report with the ordinal maximum severity and the summary line
    """
    overall = Severity.OK
    for _, result in sections:
        overall = worst(overall, result.severity)

    notes = summary_notes([result for _, result in sections])
    return Report(
        severity=overall,
        summary=f"{overall.label}: {', '.join(notes)}",
        sections=tuple(sections),
    )


def classify_result(check: CategoryCheck, result: ToolResult) -> CategoryResult:
    """Classify a successful or malformed adapter result for one category."""
    if result.status == ToolStatus.MALFORMED:
        return malformed_result(check.category)
    if check.category == Category.CORE:
        return classify_core(result.items, check.policy)
    return classify_extensions(check.category, pending_updates(result.items), check.severity)


async def run_checks(
    plan: Sequence[CategoryCheck],
    source: UpdateSource,
) -> Report | AdapterFailure:
    """Check every planned category, one after the other.

    Args:
        plan: Ordered category checks (core first)
        source: Adapter used to collect update records

    Returns:
        Report for the whole run, or AdapterFailure as soon as one adapter
        call fails; later categories are then never queried
    """
    log = logger.bind(source=source.name)
    sections = []

    for check in plan:
        if check.category == Category.CORE:
            result = await source.fetch_core_updates()
        else:
            result = await source.fetch_category_updates(check.category.value, check.include_disabled)

        if result.failed:
            log.error("collection_failed", category=check.category.value, status=result.status.value)
            return AdapterFailure.from_result(source.name, result)

        classified = classify_result(check, result)
        log.info(
            "category_checked",
            category=check.category.value,
            severity=classified.severity.label,
            lines=len(classified.lines),
        )
        sections.append((check, classified))

    return build_report(sections)
