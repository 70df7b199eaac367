"""Configuration management for the update probe.

Combines command line values with environment settings using Pydantic.
Policy letters are validated and converted to severities here, so the rest
of the probe only ever sees Severity values.

Provides:
- Config: Pydantic model with all probe settings
- CategoryCheck: Frozen descriptor for one category to check
- CATEGORY_HEADERS: Read-only category -> section header table
- ENVIRONMENT_SETTINGS: Read-only field -> environment variable table
- build_plan: Ordered category checks enabled by a Config
- load_config: Factory function to create a Config instance
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wpupdates.core.output import Category
from wpupdates.core.severity import Severity, severity_from_letter

DEFAULT_WP_BINARY = "wp"

CATEGORY_HEADERS = MappingProxyType({
    Category.CORE: "Core:",
    Category.THEME: "Themes:",
    Category.PLUGIN: "Plugins:",
})

ENVIRONMENT_SETTINGS = MappingProxyType({
    "timeout": "CHECK_WP_TIMEOUT",
    "log_level": "CHECK_WP_LOG_LEVEL",
})


class Config(BaseModel):
    """Probe configuration from command line options and environment.

    Attributes:
        site_path: WordPress installation directory (-p, required)
        wp_binary: WP-CLI executable name or path (-x)
        core_major: Severity for major core releases (-M, default c)
        core_minor: Severity for minor core releases (-m, default w)
        theme: Severity for theme updates, None disables theme checks (-T)
        plugin: Severity for plugin updates, None disables plugin checks (-P)
        include_disabled: Also report inactive themes/plugins (-d)
        timeout: Seconds allowed per WP-CLI call (CHECK_WP_TIMEOUT env)
        log_level: structlog level name (CHECK_WP_LOG_LEVEL env)
    """

    model_config = ConfigDict(frozen=True)

    site_path: str = Field(min_length=1)
    wp_binary: str = Field(default=DEFAULT_WP_BINARY, min_length=1)

    core_major: Severity = Field(default=Severity.CRITICAL)
    core_minor: Severity = Field(default=Severity.WARNING)
    theme: Severity | None = None
    plugin: Severity | None = None
    include_disabled: bool = False

    timeout: float = Field(
        default_factory=lambda: os.getenv("CHECK_WP_TIMEOUT", "60"),
        gt=0,
        validate_default=True,
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("CHECK_WP_LOG_LEVEL", "warning"),
        validate_default=True,
    )

    @field_validator("core_major", "core_minor", "theme", "plugin", mode="before")
    @classmethod
    def _resolve_letter(cls, value):
        if isinstance(value, str):
            return severity_from_letter(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().lower()


@dataclass(frozen=True)
class CategoryCheck:
    """One enabled category with its header and severity policy.

    For core the policy maps ``major``/``minor``; for themes and plugins it
    holds the single configured severity under the category name.
    """

    category: Category
    header: str
    policy: Mapping[str, Severity]
    include_disabled: bool = False

    @property
    def severity(self) -> Severity:
        """Severity applied to every theme/plugin update."""
        return self.policy[self.category.value]


def build_plan(config: Config) -> tuple[CategoryCheck, ...]:
    """Build the ordered list of category checks for a run.

    Core is always checked first, then themes and plugins when a severity
    was configured for them.

    Args:
        config: Validated probe configuration

    Returns:
        Tuple of CategoryCheck in output order
    """
    plan = [
        CategoryCheck(
            category=Category.CORE,
            header=CATEGORY_HEADERS[Category.CORE],
            policy=MappingProxyType({
                "major": config.core_major,
                "minor": config.core_minor,
            }),
        )
    ]

    for category, severity in ((Category.THEME, config.theme), (Category.PLUGIN, config.plugin)):
        if severity is None:
            continue
        plan.append(
            CategoryCheck(
                category=category,
                header=CATEGORY_HEADERS[category],
                policy=MappingProxyType({category.value: severity}),
                include_disabled=config.include_disabled,
            )
        )

    return tuple(plan)


def load_config(**values) -> Config:
    """Create a Config from command line values.

    Options left as None fall back to their defaults (or, for the timeout and
    log level, to the environment).

    Returns:
        Populated Config instance

    Raises:
        pydantic.ValidationError: If the site path is missing or a value is invalid
    """
    return Config(**{key: value for key, value in values.items() if value is not None})
