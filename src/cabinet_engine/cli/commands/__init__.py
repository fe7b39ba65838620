"""CLI command implementations for the cabinet-engine application.

This package contains subcommands for the cabinet-engine CLI, including:
- validate: Validate a catalog file
"""

from cabinet_engine.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
