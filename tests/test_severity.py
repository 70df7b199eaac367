"""Tests for severity levels, policy letters and per-category classification."""

import pytest

from wpupdates.core.classifier import (
    classify_core,
    classify_extensions,
    malformed_result,
    pending_updates,
)
from wpupdates.core.output import Category, CoreUpdate, ExtensionUpdate, format_detail
from wpupdates.core.severity import (
    POLICY_LETTERS,
    Severity,
    reduce_core_severity,
    severity_from_letter,
    worst,
)

DEFAULT_CORE_POLICY = {"major": Severity.CRITICAL, "minor": Severity.WARNING}


# Severity Tests


def test_severity_order_and_exit_codes():
    """Test OK < WARNING < CRITICAL < UNKNOWN and the matching exit codes."""
    assert Severity.OK < Severity.WARNING < Severity.CRITICAL < Severity.UNKNOWN
    assert [s.exit_code for s in Severity] == [0, 1, 2, 3]
    assert Severity.CRITICAL.label == "CRITICAL"


@pytest.mark.parametrize("letter,expected", [
    ("w", Severity.WARNING),
    ("c", Severity.CRITICAL),
    ("W", Severity.WARNING),
    (" c ", Severity.CRITICAL),
])
def test_severity_from_letter(letter, expected):
    assert severity_from_letter(letter) == expected


def test_severity_from_letter_rejects_unknown():
    with pytest.raises(ValueError, match="invalid severity letter"):
        severity_from_letter("x")


def test_policy_letters_are_read_only():
    with pytest.raises(TypeError):
        POLICY_LETTERS["u"] = Severity.UNKNOWN


def test_worst_is_ordinal_max():
    assert worst(Severity.OK, Severity.WARNING) == Severity.WARNING
    assert worst(Severity.UNKNOWN, Severity.CRITICAL) == Severity.UNKNOWN


def test_reduce_core_uniform():
    assert reduce_core_severity([Severity.WARNING, Severity.WARNING]) == Severity.WARNING
    assert reduce_core_severity([Severity.CRITICAL]) == Severity.CRITICAL


def test_reduce_core_mixed_escalates_to_critical():
    assert reduce_core_severity([Severity.WARNING, Severity.CRITICAL]) == Severity.CRITICAL


def test_reduce_core_mixed_is_not_a_max():
    """A mix is CRITICAL even when neither value is CRITICAL."""
    assert reduce_core_severity([Severity.OK, Severity.WARNING]) == Severity.CRITICAL
    assert reduce_core_severity([Severity.UNKNOWN, Severity.WARNING]) == Severity.CRITICAL


def test_reduce_core_empty_is_ok():
    assert reduce_core_severity([]) == Severity.OK


# Core Classification Tests


def test_core_all_minor_default_policy():
    """Test that uniform minor releases map to WARNING under the default policy."""
    items = [
        CoreUpdate(version="6.4.3", update_type="minor"),
        CoreUpdate(version="6.3.4", update_type="minor"),
    ]

    result = classify_core(items, DEFAULT_CORE_POLICY)

    assert result.severity == Severity.WARNING
    assert result.lines == (
        "[WARNING] WordPress 6.4.3 available",
        "[WARNING] WordPress 6.3.4 available",
    )


def test_core_all_major_default_policy():
    items = [CoreUpdate(version="6.5", update_type="major")]

    result = classify_core(items, DEFAULT_CORE_POLICY)

    assert result.severity == Severity.CRITICAL
    assert result.lines == ("[CRITICAL] WordPress 6.5 available",)


def test_core_major_and_minor_escalates():
    """Test that a major and a minor release together give CRITICAL."""
    items = [
        CoreUpdate(version="6.5", update_type="major"),
        CoreUpdate(version="6.4.3", update_type="minor"),
    ]

    result = classify_core(items, DEFAULT_CORE_POLICY)

    assert result.severity == Severity.CRITICAL
    assert result.lines == (
        "[CRITICAL] WordPress 6.5 available",
        "[WARNING] WordPress 6.4.3 available",
    )


def test_core_major_and_minor_with_equal_letters():
    """Test that major and minor both set to w stay WARNING (equal branch)."""
    items = [
        CoreUpdate(version="6.5", update_type="major"),
        CoreUpdate(version="6.4.3", update_type="minor"),
    ]
    policy = {"major": Severity.WARNING, "minor": Severity.WARNING}

    result = classify_core(items, policy)

    assert result.severity == Severity.WARNING
    assert all(line.startswith("[WARNING]") for line in result.lines)


def test_core_no_updates():
    result = classify_core([], DEFAULT_CORE_POLICY)

    assert result.severity == Severity.OK
    assert result.lines == ("[OK] No updates needed",)
    assert result.is_ok


def test_core_unknown_update_type_is_malformed():
    items = [CoreUpdate(version="7.0", update_type="beta")]

    result = classify_core(items, DEFAULT_CORE_POLICY)

    assert result.severity == Severity.UNKNOWN
    assert result.lines == ("[UNKNOWN] Problem checking status",)


# Theme/Plugin Classification Tests


def test_extensions_get_category_severity():
    items = [
        ExtensionUpdate(title="Akismet Anti-spam", version="5.3", update_version="5.3.1"),
        ExtensionUpdate(title="Hello Dolly", version="1.7.1", update_version="1.7.2"),
    ]

    result = classify_extensions(Category.PLUGIN, items, Severity.CRITICAL)

    assert result.category == Category.PLUGIN
    assert result.severity == Severity.CRITICAL
    assert result.lines == (
        "[CRITICAL] Akismet Anti-spam 5.3 -> 5.3.1",
        "[CRITICAL] Hello Dolly 1.7.1 -> 1.7.2",
    )
    assert not result.is_ok


def test_extensions_none_pending():
    result = classify_extensions(Category.THEME, [], Severity.WARNING)

    assert result.severity == Severity.OK
    assert result.lines == ("[OK] No updates needed",)


def test_pending_updates_drops_empty_update_version():
    items = [
        ExtensionUpdate(title="Twenty Twenty-Four", version="1.0", update_version="1.1"),
        ExtensionUpdate(title="Twenty Twenty-Three", version="1.3", update_version=""),
        ExtensionUpdate(title="Twenty Twenty-Two", version="1.6", update_version=None),
        ExtensionUpdate(title="Astra", version="4.6.4"),
    ]

    pending = pending_updates(items)

    assert [item.title for item in pending] == ["Twenty Twenty-Four"]


def test_malformed_result():
    result = malformed_result(Category.THEME)

    assert result.severity == Severity.UNKNOWN
    assert result.lines == ("[UNKNOWN] Problem checking status",)
    assert not result.is_ok


def test_format_detail():
    assert format_detail(Severity.WARNING, "WordPress 5.9 available") == "[WARNING] WordPress 5.9 available"
