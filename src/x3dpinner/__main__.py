"""Allow running the daemon with ``python -m x3dpinner``."""

from .cli import main_cli

main_cli()
