"""CLI argument validation."""

from argparse import Namespace
from pathlib import Path

__all__ = ["validate_args"]


def validate_args(args: Namespace) -> str | None:
    """Validate parsed arguments beyond what argparse checks.

    Args:
        args: Parsed command-line arguments.

    Returns:
        An error message, or None when the arguments are valid.

    """
    if not Path(args.log).is_file():
        return f"Error: event log not found: {args.log}"

    profiles = getattr(args, "profiles", None)
    if profiles and not Path(profiles).is_file():
        return f"Error: profiles file not found: {profiles}"

    if getattr(args, "kind", None) and not getattr(args, "groups", False):
        return "Error: --kind requires --groups"

    return None
