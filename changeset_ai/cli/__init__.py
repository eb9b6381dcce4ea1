"""Command Line Interface Package"""

from changeset_ai.cli.main import main

__all__ = ["main"]
