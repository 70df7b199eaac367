"""Allow ``python -m wpupdates``."""

from wpupdates.cli.check import cli

if __name__ == "__main__":
    cli()
