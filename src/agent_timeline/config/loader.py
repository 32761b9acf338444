"""YAML loader for per-kind grouper overrides.

An overrides file maps a delegation kind to the thresholds that should
replace the settings-derived defaults for that kind:

    critique:
      min_terminal_length: 300
      acknowledgement_prefixes:
        - "I have completed"
        - "Done."
    planning:
      subagent_type: planner-agent
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ConfigDict, Field, ValidationError

from agent_timeline.config.defaults import MAX_LENGTH_CEILING, MIN_LENGTH_FLOOR
from agent_timeline.config.exceptions import ConfigurationError
from agent_timeline.logging_config import get_logger
from agent_timeline.models.base import BaseSchema
from agent_timeline.models.enums import GroupKind

__all__ = ["ProfileOverride", "load_profile_overrides", "load_yaml_file"]

logger = get_logger(__name__)


class ProfileOverride(BaseSchema):
    """Overrides for one kind profile. Unset fields keep their defaults."""

    model_config = ConfigDict(extra="forbid")

    min_narrative_length: int | None = Field(
        default=None, ge=MIN_LENGTH_FLOOR, le=MAX_LENGTH_CEILING
    )
    min_terminal_length: int | None = Field(
        default=None, ge=MIN_LENGTH_FLOOR, le=MAX_LENGTH_CEILING
    )
    acknowledgement_prefixes: list[str] | None = None
    subagent_type: str | None = Field(default=None, min_length=1)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load and validate a YAML file, returning the parsed dict.

    Handles file existence check, YAML parsing, empty-file check,
    and mapping-type validation.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed dictionary from the YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file cannot be read, is empty, is not a
            mapping or is invalid YAML.

    """
    if not path.exists():
        raise FileNotFoundError(f"Overrides file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read YAML file {path}: {e}") from e

    if data is None:
        raise ConfigurationError(f"Empty YAML file: {path}")

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid YAML structure: expected mapping, got {type(data).__name__}"
        )

    return data


def load_profile_overrides(path: Path | str) -> dict[GroupKind, ProfileOverride]:
    """Load per-kind overrides from a YAML file.

    Args:
        path: Path to the overrides file.

    Returns:
        Overrides keyed by kind. Kinds absent from the file are absent here.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If a kind is unknown or a value is invalid.

    """
    path = Path(path)
    data = load_yaml_file(path)

    overrides: dict[GroupKind, ProfileOverride] = {}
    for raw_kind, raw_values in data.items():
        try:
            kind = GroupKind(str(raw_kind))
        except ValueError as e:
            valid = ", ".join(k.value for k in GroupKind)
            raise ConfigurationError(
                f"Unknown kind '{raw_kind}' in {path} (expected one of: {valid})"
            ) from e

        if not isinstance(raw_values, dict):
            raise ConfigurationError(
                f"Overrides for '{kind.value}' must be a mapping, "
                f"got {type(raw_values).__name__}"
            )

        try:
            overrides[kind] = ProfileOverride.model_validate(raw_values)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid overrides for '{kind.value}' in {path}: {e}"
            ) from e

    logger.debug("profile_overrides_loaded", path=str(path), kinds=[k.value for k in overrides])
    return overrides
