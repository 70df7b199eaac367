"""Severity levels, policy letters and severity reduction.

Severity doubles as the probe's exit code, following the Nagios plugin
convention (0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN). Policy letters are the
short values accepted on the command line to choose how serious a finding
is for a category.

Provides:
- Severity: Ordered severity levels usable as exit codes
- POLICY_LETTERS: Read-only letter -> Severity lookup table
- severity_from_letter: Resolve a policy letter
- reduce_core_severity: Reduce per-release severities for core
- worst: Ordinal maximum of two severities
"""

from collections.abc import Iterable
from enum import IntEnum
from types import MappingProxyType


class Severity(IntEnum):
    """Monitoring status, ordered OK < WARNING < CRITICAL < UNKNOWN.

    UNKNOWN is reserved for collection problems (the site tool failed or
    returned data that could not be understood), never for a pending update.
    """

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def label(self) -> str:
        return self.name

    @property
    def exit_code(self) -> int:
        return int(self)


POLICY_LETTERS = MappingProxyType({
    "w": Severity.WARNING,
    "c": Severity.CRITICAL,
})


def severity_from_letter(letter: str) -> Severity:
    """Resolve a policy letter (``w`` or ``c``) to its severity.

    Args:
        letter: Policy letter, case insensitive

    Returns:
        Mapped severity

    Raises:
        ValueError: If the letter is not a known policy letter
    """
    try:
        return POLICY_LETTERS[letter.strip().lower()]
    except KeyError:
        allowed = "|".join(POLICY_LETTERS)
        raise ValueError(f"invalid severity letter {letter!r}, expected {allowed}") from None


def reduce_core_severity(severities: Iterable[Severity]) -> Severity:
    """Reduce the severities of all pending core releases to one value.

    When every release maps to the same severity that severity wins. When
    they differ the result is CRITICAL. This is an equality rule, not a max:
    with a WARNING/CRITICAL policy the two agree, but a mix is escalated
    regardless of which levels are involved.

    Args:
        severities: Per-release severities

    Returns:
        Reduced severity, OK when there are no releases
    """
    distinct = set(severities)
    if not distinct:
        return Severity.OK
    if len(distinct) == 1:
        return distinct.pop()
    return Severity.CRITICAL


def worst(current: Severity, other: Severity) -> Severity:
    """Return the more severe of two levels by ordinal value."""
    return max(current, other)
