"""Pytest configuration and shared fixtures for the agent-timeline test suite.

This module provides fixtures for building event logs, the default kind
profiles, and the directory of sample logs used by integration tests.
Plain helpers (invocation builders, sample payloads) live in builders.py.
"""

from pathlib import Path

import pytest
from builders import LogBuilder

from agent_timeline.models.enums import GroupKind
from agent_timeline.segmentation.profiles import KindProfile, default_profiles

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def log() -> LogBuilder:
    """Provide an empty event log builder."""
    return LogBuilder()


@pytest.fixture
def profiles() -> dict[GroupKind, KindProfile]:
    """Provide the default kind profiles keyed by kind."""
    return default_profiles()


@pytest.fixture
def research_profile(profiles: dict[GroupKind, KindProfile]) -> KindProfile:
    """Provide the default research profile."""
    return profiles[GroupKind.research]


@pytest.fixture
def critique_profile(profiles: dict[GroupKind, KindProfile]) -> KindProfile:
    """Provide the default critique profile."""
    return profiles[GroupKind.critique]


@pytest.fixture
def planning_profile(profiles: dict[GroupKind, KindProfile]) -> KindProfile:
    """Provide the default planning profile."""
    return profiles[GroupKind.planning]


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide the directory holding sample event logs."""
    return FIXTURES_DIR
