"""Unit tests for settings, kind profiles and YAML overrides."""

from pathlib import Path

import pytest
from builders import delegation, invocation

from agent_timeline.config import (
    ConfigurationError,
    GrouperSettings,
    LoggingSettings,
    ProfileOverride,
    Settings,
    get_settings,
    load_profile_overrides,
)
from agent_timeline.config.loader import load_yaml_file
from agent_timeline.models.enums import GroupKind
from agent_timeline.models.events import AgentTurnEvent
from agent_timeline.segmentation.profiles import build_profiles, default_profiles


class TestGrouperSettings:
    """Tests for GrouperSettings."""

    def test_defaults(self) -> None:
        """Test the default thresholds."""
        settings = GrouperSettings()
        assert settings.min_narrative_length == 100
        assert settings.min_terminal_length == 200
        assert settings.acknowledgement_prefixes == ["I have completed"]
        assert settings.delegation_tool_names == ["task"]

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables with the prefix are read."""
        monkeypatch.setenv("AGENT_TIMELINE_GROUPER_MIN_TERMINAL_LENGTH", "50")
        monkeypatch.setenv("AGENT_TIMELINE_GROUPER_DELEGATION_TOOL_NAMES", '["task", "Agent"]')

        settings = GrouperSettings()

        assert settings.min_terminal_length == 50
        assert settings.delegation_tool_names == ["task", "Agent"]

    def test_negative_threshold_rejected(self) -> None:
        """Test that thresholds below zero are invalid."""
        with pytest.raises(ValueError):
            GrouperSettings(min_narrative_length=-1)


class TestSettings:
    """Tests for the root settings container."""

    def test_nested_defaults(self) -> None:
        """Test that subsystem settings are populated."""
        settings = Settings()
        assert isinstance(settings.grouper, GrouperSettings)
        assert isinstance(settings.logging, LoggingSettings)
        assert settings.logging.verbose is False

    def test_get_settings_cached(self) -> None:
        """Test that get_settings returns the same instance."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestProfiles:
    """Tests for default and configured kind profiles."""

    def test_default_profiles(self) -> None:
        """Test ids, titles and offsets of the three kinds."""
        profiles = default_profiles()

        assert list(profiles) == [GroupKind.research, GroupKind.critique, GroupKind.planning]
        assert [p.activity_id for p in profiles.values()] == [
            "research-agents",
            "critique-agents",
            "planner-agents",
        ]
        assert [p.timeline_offset for p in profiles.values()] == [0, 1, 2]
        assert profiles[GroupKind.planning].title == "Planning Agents"

    def test_is_substantive(self) -> None:
        """Test the narrative length and prefix rules."""
        profile = default_profiles()[GroupKind.research]

        assert not profile.is_substantive("x" * 100)
        assert profile.is_substantive("x" * 101)
        assert not profile.is_substantive("I have completed " + "x" * 200)

    def test_delegations_of_turn(self) -> None:
        """Test that a profile picks only its own delegations from a turn."""
        turn = AgentTurnEvent(
            index=0,
            invocations=(
                delegation("r1", "research-agent", "Research cost"),
                delegation("c1", "critique-agent", "Critique report"),
                invocation("l1", "ls"),
                delegation("r2", "research-agent", "Research safety"),
            ),
        )

        research = default_profiles()[GroupKind.research]

        assert [inv.correlation_id for inv in research.delegations(turn)] == ["r1", "r2"]

    def test_build_profiles_from_settings(self) -> None:
        """Test that settings thresholds reach every profile."""
        settings = GrouperSettings(
            min_narrative_length=10,
            acknowledgement_prefixes=["Done"],
            delegation_tool_names=["Agent"],
        )

        profiles = build_profiles(settings)

        for profile in profiles.values():
            assert profile.min_narrative_length == 10
            assert profile.acknowledgement_prefixes == ("Done",)
            assert profile.matcher.tool_names == frozenset({"Agent"})

    def test_build_profiles_with_overrides(self) -> None:
        """Test that overrides replace thresholds and the subagent type."""
        profiles = build_profiles(
            overrides={
                GroupKind.planning: ProfileOverride(
                    subagent_type="planner", acknowledgement_prefixes=["Plan ready"]
                )
            }
        )

        planning = profiles[GroupKind.planning]
        assert planning.matcher.subagent_type == "planner"
        assert planning.acknowledgement_prefixes == ("Plan ready",)
        assert planning.min_terminal_length == 200
        assert profiles[GroupKind.research].matcher.subagent_type == "research-agent"


class TestLoadProfileOverrides:
    """Tests for load_profile_overrides."""

    def test_loads_kinds(self, tmp_path: Path) -> None:
        """Test a valid overrides file."""
        path = tmp_path / "profiles.yaml"
        path.write_text(
            "critique:\n"
            "  min_terminal_length: 300\n"
            "planning:\n"
            "  subagent_type: planner\n"
        )

        overrides = load_profile_overrides(path)

        assert overrides[GroupKind.critique].min_terminal_length == 300
        assert overrides[GroupKind.planning].subagent_type == "planner"
        assert GroupKind.research not in overrides

    def test_unknown_kind(self, tmp_path: Path) -> None:
        """Test that an unknown kind is a configuration error."""
        path = tmp_path / "profiles.yaml"
        path.write_text("coding:\n  min_terminal_length: 5\n")

        with pytest.raises(ConfigurationError, match="coding"):
            load_profile_overrides(path)

    def test_unknown_field(self, tmp_path: Path) -> None:
        """Test that misspelled fields are rejected."""
        path = tmp_path / "profiles.yaml"
        path.write_text("research:\n  min_terminal_lenght: 5\n")

        with pytest.raises(ConfigurationError, match="Invalid overrides"):
            load_profile_overrides(path)

    def test_non_mapping_values(self, tmp_path: Path) -> None:
        """Test that a kind must map to a mapping."""
        path = tmp_path / "profiles.yaml"
        path.write_text("research: 5\n")

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_profile_overrides(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_profile_overrides(tmp_path / "absent.yaml")


class TestLoadYamlFile:
    """Tests for load_yaml_file."""

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty file is rejected."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(ConfigurationError, match="Empty YAML file"):
            load_yaml_file(path)

    def test_list_root(self, tmp_path: Path) -> None:
        """Test that a non-mapping root is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="expected mapping"):
            load_yaml_file(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test that a parse error is a configuration error."""
        path = tmp_path / "broken.yaml"
        path.write_text("key: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_yaml_file(path)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        """Test that a read failure is a configuration error."""
        with pytest.raises(ConfigurationError, match="Failed to read"):
            load_yaml_file(tmp_path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Overrides file not found"):
            load_yaml_file(tmp_path / "none.yaml")
