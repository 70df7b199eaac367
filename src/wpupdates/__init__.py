"""WordPress update monitoring probe (Nagios plugin)."""

__version__ = "0.1.0"
