"""Base adapter protocol and shared infrastructure for the site tool.

Provides:
- UpdateSource protocol for the adapter the report builder talks to
- ToolResult dataclass for structured tool output
- AdapterFailure for collection failures that end the run
- Helper functions for binary checking and subprocess execution
"""

import asyncio
import shutil
import structlog
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

logger = structlog.get_logger()


class ToolStatus(str, Enum):
    """Tool execution status."""
    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"
    NOT_INSTALLED = "not_installed"
    MALFORMED = "malformed"


@dataclass
class ToolResult:
    """Structured result from a tool execution.

    ``items`` holds parsed records on SUCCESS. MALFORMED means the tool ran
    but its JSON did not have the expected shape.
    """
    status: ToolStatus
    items: list[Any] = field(default_factory=list)
    raw_output: str = ""
    error: str = ""
    stderr: str = ""
    duration_seconds: float = 0.0

    @property
    def failed(self) -> bool:
        """True when the tool could not be run to completion."""
        return self.status in (ToolStatus.ERROR, ToolStatus.TIMEOUT, ToolStatus.NOT_INSTALLED)

    def diagnostic_lines(self) -> list[str]:
        """Error description followed by non-blank stderr and stdout lines."""
        lines = [self.error] if self.error else []
        for text in (self.stderr, self.raw_output):
            lines.extend(line.rstrip() for line in text.splitlines() if line.strip())
        return lines


@dataclass(frozen=True)
class AdapterFailure:
    """The site tool could not be executed; the run reports UNKNOWN."""
    tool: str
    lines: tuple[str, ...] = ()

    @property
    def headline(self) -> str:
        return f"UNKNOWN: Error executing {self.tool}"

    def render(self) -> str:
        return "\n".join((self.headline, *self.lines))

    @classmethod
    def from_result(cls, tool: str, result: ToolResult) -> "AdapterFailure":
        return cls(tool=tool, lines=tuple(result.diagnostic_lines()))


@runtime_checkable
class UpdateSource(Protocol):
    """Protocol for adapters that report pending updates."""
    name: str

    async def fetch_core_updates(self) -> ToolResult:
        """List pending core releases."""
        ...

    async def fetch_category_updates(self, category: str, include_disabled: bool) -> ToolResult:
        """List themes or plugins with their available versions."""
        ...


def check_binary(binary_name: str) -> bool:
    """Check if binary exists on PATH (or is an executable path).

    Args:
        binary_name: Name or path of binary to check (e.g., "wp", "/usr/local/bin/wp")

    Returns:
        True if binary is available, False otherwise
    """
    return shutil.which(binary_name) is not None


async def run_subprocess(
    cmd: list[str],
    timeout: float = 60
) -> tuple[str, str, int]:
    """Run command via subprocess with timeout.

    Uses asyncio.create_subprocess_exec (NEVER shell=True), so arguments such
    as the site path need no escaping. Kills process on timeout.

    Args:
        cmd: Command and arguments as list (e.g., ["wp", "core", "check-update"])
        timeout: Timeout in seconds (default: 60)

    Returns:
        Tuple of (stdout, stderr, returncode)

    Raises:
        asyncio.TimeoutError: If command exceeds timeout
        OSError: If the binary cannot be started
    """
    log = logger.bind(cmd=cmd[0], timeout=timeout)

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    log.debug("subprocess_started", pid=process.pid)

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(),
            timeout=timeout
        )
    except asyncio.TimeoutError:
        log.warning("subprocess_timeout", pid=process.pid)
        process.kill()
        await process.communicate()
        raise

    stdout = stdout_bytes.decode("utf-8", errors="replace")
    stderr = stderr_bytes.decode("utf-8", errors="replace")
    returncode = process.returncode or 0

    log.debug(
        "subprocess_completed",
        returncode=returncode,
        stdout_len=len(stdout),
        stderr_len=len(stderr)
    )

    return stdout, stderr, returncode
