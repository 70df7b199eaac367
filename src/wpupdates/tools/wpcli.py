"""WP-CLI adapter for reading pending WordPress updates.

Wraps the ``wp`` binary to list pending core releases and theme/plugin
versions. Parses JSON output and returns validated records. The site is
never modified: only read-only ``check-update`` and ``list`` commands run.
"""

import asyncio
import json
import time
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from wpupdates.core.output import CoreUpdate, ExtensionUpdate
from .base import ToolResult, ToolStatus, check_binary, run_subprocess

logger = structlog.get_logger()

EXTENSION_CATEGORIES = ("theme", "plugin")
EXTENSION_FIELDS = "name,title,status,version,update_version"
DISABLED_STATUS = "inactive"


class WPCliTool:
    """Wrapper for the WP-CLI command line tool.

    Runs read-only wp commands with ``--format=json`` against one site and
    parses the records. Missing binary, non-zero exits, timeouts and output
    that is not JSON are reported as failed results; JSON of the wrong shape
    is reported as MALFORMED.
    """

    name = "wp"

    def __init__(self, site_path: str, binary_name: str = "wp", timeout: float = 60):
        """Initialize WP-CLI wrapper.

        Args:
            site_path: WordPress installation directory passed as --path
            binary_name: wp executable name or path (default: "wp")
            timeout: Timeout in seconds per wp call (default: 60)
        """
        self.site_path = site_path
        self.binary_name = binary_name
        self.timeout = timeout
        self.log = logger.bind(tool=self.name, path=site_path)

    def is_available(self) -> bool:
        """Check if the wp binary is available.

        Returns:
            True if WP-CLI is installed, False otherwise
        """
        return check_binary(self.binary_name)

    async def fetch_core_updates(self) -> ToolResult:
        """List pending core releases.

        Runs: wp core check-update --format=json --path=<site>
        When WordPress is current, wp prints a "Success: ..." message instead
        of JSON; that is treated as no releases.

        Returns:
            ToolResult with items: list[CoreUpdate]
        """
        result = await self._run(["core", "check-update"])
        if result.status != ToolStatus.SUCCESS:
            return result

        text = result.raw_output.strip()
        if not text or text.startswith("Success:"):
            return result

        return self._parse(result, CoreUpdate)

    async def fetch_category_updates(self, category: str, include_disabled: bool = False) -> ToolResult:
        """List themes or plugins with their installed and available versions.

        Runs: wp <category> list --format=json --fields=... --path=<site>

        Args:
            category: "theme" or "plugin"
            include_disabled: Keep rows whose status is inactive

        Returns:
            ToolResult with items: list[ExtensionUpdate]

        Raises:
            ValueError: If category is not theme or plugin
        """
        if category not in EXTENSION_CATEGORIES:
            raise ValueError(f"unsupported category: {category}")

        result = await self._run([category, "list", f"--fields={EXTENSION_FIELDS}"])
        if result.status != ToolStatus.SUCCESS:
            return result

        result = self._parse(result, ExtensionUpdate)
        if result.status == ToolStatus.SUCCESS and not include_disabled:
            result.items = [item for item in result.items if item.status != DISABLED_STATUS]
        return result

    async def _run(self, args: list[str]) -> ToolResult:
        start_time = time.time()
        command = " ".join(args[:2])
        self.log.info("wpcli_start", command=command)

        if not self.is_available():
            error_msg = (
                f"{self.binary_name} not installed. "
                "Install WP-CLI from https://wp-cli.org or pass its path with -x"
            )
            self.log.warning("binary_not_found", binary=self.binary_name)
            return ToolResult(
                status=ToolStatus.NOT_INSTALLED,
                error=error_msg,
                duration_seconds=time.time() - start_time
            )

        cmd = [
            self.binary_name,
            *args,
            "--format=json",
            f"--path={self.site_path}",
        ]

        try:
            stdout, stderr, returncode = await run_subprocess(cmd, timeout=self.timeout)
        except asyncio.TimeoutError:
            self.log.error("wpcli_timeout", command=command, timeout=self.timeout)
            return ToolResult(
                status=ToolStatus.TIMEOUT,
                error=f"wp {command} timed out after {self.timeout}s",
                duration_seconds=time.time() - start_time
            )
        except OSError as e:
            self.log.error("wpcli_exception", command=command, error=str(e))
            return ToolResult(
                status=ToolStatus.ERROR,
                error=f"wp execution error: {e}",
                duration_seconds=time.time() - start_time
            )

        duration = time.time() - start_time
        if returncode != 0:
            self.log.error("wpcli_failed", command=command, returncode=returncode, stderr=stderr)
            return ToolResult(
                status=ToolStatus.ERROR,
                error=f"wp {command} failed with code {returncode}",
                raw_output=stdout,
                stderr=stderr,
                duration_seconds=duration
            )

        self.log.info("wpcli_complete", command=command, duration=duration)
        return ToolResult(
            status=ToolStatus.SUCCESS,
            raw_output=stdout,
            stderr=stderr,
            duration_seconds=duration
        )

    def _parse(self, result: ToolResult, model: type[BaseModel]) -> ToolResult:
        """Decode JSON output into validated records.

        Output that is not JSON at all turns the result into ERROR; a JSON
        value that is not a list of valid records turns it into MALFORMED.
        """
        try:
            data: Any = json.loads(result.raw_output)
        except json.JSONDecodeError as e:
            self.log.error("json_parse_error", output=result.raw_output[:100])
            result.status = ToolStatus.ERROR
            result.error = f"wp returned invalid JSON: {e}"
            return result

        if not isinstance(data, list):
            self.log.warning("unexpected_json_shape", kind=type(data).__name__)
            result.status = ToolStatus.MALFORMED
            result.error = "wp returned JSON that is not a list"
            return result

        try:
            result.items = [model.model_validate(row) for row in data]
        except ValidationError as e:
            self.log.warning("invalid_record", errors=e.error_count())
            result.status = ToolStatus.MALFORMED
            result.error = f"wp returned unexpected records: {e.error_count()} errors"
            return result

        self.log.debug("records_parsed", count=len(result.items))
        return result
