"""AsyncClick command for the WordPress update probe.

Provides the Nagios-compatible ``check_wp_updates`` command. It prints one
summary line followed by per-category details and exits with the overall
severity (0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN).
"""

import sys

import asyncclick as click
import structlog
from pydantic import ValidationError

from wpupdates.core.config import ENVIRONMENT_SETTINGS, build_plan, load_config
from wpupdates.core.log import configure_logging
from wpupdates.core.severity import Severity
from wpupdates.core.report import run_checks
from wpupdates.tools.base import AdapterFailure
from wpupdates.tools.wpcli import WPCliTool

logger = structlog.get_logger()

USAGE = (
    "Usage: check_wp_updates -p <path> [-x <wp>] [-M w|c] [-m w|c] [-T w|c] [-P w|c] [-d]\n"
    "  -p <path>  WordPress installation path (required)\n"
    "  -x <path>  path to the wp executable (default: wp on PATH)\n"
    "  -M <w|c>   severity for major core updates (default: c)\n"
    "  -m <w|c>   severity for minor core updates (default: w)\n"
    "  -T <w|c>   check themes with the given severity\n"
    "  -P <w|c>   check plugins with the given severity\n"
    "  -d         include disabled themes and plugins"
)


def usage_exit() -> None:
    """Print usage on stdout and exit UNKNOWN."""
    click.echo(USAGE)
    sys.exit(Severity.UNKNOWN.exit_code)


class ProbeCommand(click.Command):
    """Command whose option errors print the usage text and exit UNKNOWN.

    Exit code 2 is reserved for CRITICAL.
    """

    async def main(self, *args, standalone_mode: bool = True, **kwargs):
        try:
            rv = await super().main(*args, standalone_mode=False, **kwargs)
        except click.UsageError:
            usage_exit()
        except (click.ClickException, click.Abort):
            sys.exit(Severity.UNKNOWN.exit_code)

        if not standalone_mode:
            return rv
        sys.exit(rv if isinstance(rv, int) else 0)


def config_error_exit(error: ValidationError) -> None:
    """Report invalid settings; bad options get the usage text."""
    errors = error.errors()
    env_errors = [err for err in errors if err["loc"] and err["loc"][0] in ENVIRONMENT_SETTINGS]
    if len(env_errors) < len(errors):
        usage_exit()

    click.echo("UNKNOWN: Invalid environment setting")
    for err in env_errors:
        field = err["loc"][0]
        click.echo(f"{ENVIRONMENT_SETTINGS[field]}: {err['msg']}")
    sys.exit(Severity.UNKNOWN.exit_code)


@click.command(cls=ProbeCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-p", "site_path", default=None, metavar="PATH", help="WordPress installation path (required)")
@click.option("-x", "wp_binary", default=None, metavar="PATH", help="Path to the wp executable")
@click.option("-M", "core_major", default="c", metavar="w|c", help="Severity for major core updates")
@click.option("-m", "core_minor", default="w", metavar="w|c", help="Severity for minor core updates")
@click.option("-T", "theme", default=None, metavar="w|c", help="Check themes with the given severity")
@click.option("-P", "plugin", default=None, metavar="w|c", help="Check plugins with the given severity")
@click.option("-d", "include_disabled", is_flag=True, help="Include disabled themes and plugins")
async def cli(
    site_path: str | None,
    wp_binary: str | None,
    core_major: str,
    core_minor: str,
    theme: str | None,
    plugin: str | None,
    include_disabled: bool,
):
    """Report pending WordPress core, theme and plugin updates.

    Examples:
        check_wp_updates -p /var/www/html
        check_wp_updates -p /var/www/html -T w -P c -d
    """
    try:
        config = load_config(
            site_path=site_path,
            wp_binary=wp_binary,
            core_major=core_major,
            core_minor=core_minor,
            theme=theme,
            plugin=plugin,
            include_disabled=include_disabled,
        )
    except ValidationError as e:
        config_error_exit(e)

    configure_logging(config.log_level)
    log = logger.bind(path=config.site_path)
    log.debug("probe_start", themes=config.theme is not None, plugins=config.plugin is not None)

    tool = WPCliTool(config.site_path, binary_name=config.wp_binary, timeout=config.timeout)
    outcome = await run_checks(build_plan(config), tool)

    if isinstance(outcome, AdapterFailure):
        click.echo(outcome.render())
        sys.exit(Severity.UNKNOWN.exit_code)

    log.debug("probe_complete", severity=outcome.severity.label)
    click.echo(outcome.render())
    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    cli()
