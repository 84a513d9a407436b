"""Tests for configuration loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from semrel_py.config.loader import (
    extract_tool_config,
    find_pyproject_toml,
    load_config,
    load_pyproject_toml,
    load_versionrc,
    parse_config,
)
from semrel_py.config.models import SemrelConfig, Severity, TypeConfig
from semrel_py.exceptions import ConfigNotFoundError, ConfigValidationError

VERSIONRC = {
    "types": [
        {"type": "feat", "section": "✨ Features"},
        {"type": "fix", "section": "🐛 Bug Fixes"},
        {"type": "chore", "hidden": True},
    ],
    "commitUrlFormat": "https://github.com/AdConDev/pos-daemon/commit/{{hash}}",
    "compareUrlFormat": (
        "https://github.com/AdConDev/pos-daemon/compare/{{previousTag}}...{{currentTag}}"
    ),
    "releaseCommitMessageFormat": "chore(release): v{{currentTag}} [skip ci]",
}


class TestSemrelConfig:
    """Tests for SemrelConfig model."""

    def test_default_config(self):
        """Default configuration has sensible values."""
        config = SemrelConfig()

        assert config.tag_prefix == "v"
        assert config.header is None
        assert config.commit_url_format is None
        assert config.release_commit_message_format == "chore(release): {{currentTag}} [skip ci]"
        assert "[skip release]" in config.skip_release_patterns

    def test_default_types(self):
        """Default taxonomy shows features and fixes, hides chores."""
        config = SemrelConfig()
        types = {t.type: t for t in config.types}

        assert types["feat"].section == "✨ Features"
        assert types["fix"].section == "🐛 Bug Fixes"
        assert types["chore"].hidden
        assert types["docs"].hidden
        assert len(config.types) == 12

    def test_camel_case_keys(self):
        """.versionrc style keys are accepted."""
        config = SemrelConfig.model_validate(VERSIONRC)

        assert config.commit_url_format.endswith("/commit/{{hash}}")
        assert config.release_commit_message_format.startswith("chore(release)")
        assert [t.type for t in config.types] == ["feat", "fix", "chore"]

    def test_snake_case_keys(self):
        """pyproject style keys are accepted."""
        config = SemrelConfig.model_validate({"tag_prefix": "", "header": "# Log\n"})

        assert config.tag_prefix == ""
        assert config.header == "# Log\n"

    def test_unknown_root_keys_ignored(self):
        """Options meant for other tools do not break loading."""
        config = SemrelConfig.model_validate({"bumpFiles": ["package.json"]})

        assert config.tag_prefix == "v"

    def test_duplicate_types_rejected(self):
        """Type identifiers must be unique."""
        with pytest.raises(ValidationError, match="duplicate commit type"):
            SemrelConfig(types=[TypeConfig(type="feat"), TypeConfig(type="FEAT")])

    def test_url_templates(self):
        """url_templates bundles the link formats."""
        templates = SemrelConfig.model_validate(VERSIONRC).url_templates

        assert templates.commit_url_format == VERSIONRC["commitUrlFormat"]
        assert templates.compare_url_format == VERSIONRC["compareUrlFormat"]
        assert templates.user_url_format is None


class TestTypeConfig:
    """Tests for TypeConfig model."""

    def test_defaults(self):
        """Only type is required."""
        entry = TypeConfig(type="feat")

        assert entry.section is None
        assert entry.hidden is False
        assert entry.severity is None

    def test_type_is_normalized(self):
        """Types are stripped and lower-cased."""
        assert TypeConfig(type=" Feat ").type == "feat"

    def test_severity_from_string(self):
        """Severity accepts its string value."""
        entry = TypeConfig.model_validate({"type": "deps", "section": "Deps", "severity": "fix"})

        assert entry.severity == Severity.FIX

    def test_unknown_key_rejected(self):
        """Typos in type entries are reported."""
        with pytest.raises(ValidationError):
            TypeConfig.model_validate({"type": "feat", "sectoin": "Features"})

    def test_empty_type_rejected(self):
        """Empty type identifiers are invalid."""
        with pytest.raises(ValidationError):
            TypeConfig(type="")


class TestLoadVersionrc:
    """Tests for load_versionrc()."""

    def test_load_valid_json(self, tmp_path: Path):
        """Load a JSON .versionrc file."""
        path = tmp_path / ".versionrc.json"
        path.write_text(json.dumps(VERSIONRC), encoding="utf-8")

        assert load_versionrc(path)["commitUrlFormat"] == VERSIONRC["commitUrlFormat"]

    def test_invalid_json_raises(self, tmp_path: Path):
        """Invalid JSON raises ConfigValidationError."""
        path = tmp_path / ".versionrc"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_versionrc(path)

    def test_non_object_raises(self, tmp_path: Path):
        """A JSON list is not a configuration."""
        path = tmp_path / ".versionrc"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_versionrc(path)

    def test_missing_raises(self, tmp_path: Path):
        """Loading a nonexistent file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_versionrc(tmp_path / ".versionrc")


class TestLoadPyprojectToml:
    """Tests for load_pyproject_toml()."""

    def test_load_valid_toml(self, temp_project_with_pyproject: Path):
        """Load a valid pyproject.toml."""
        data = load_pyproject_toml(temp_project_with_pyproject / "pyproject.toml")

        assert data["project"]["name"] == "test-project"

    def test_load_nonexistent_raises(self, tmp_path: Path):
        """Loading nonexistent file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_pyproject_toml(tmp_path / "nonexistent.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        """Broken TOML raises ConfigValidationError."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[project\nname = ", encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_pyproject_toml(path)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml()."""

    def test_find_in_current_dir(self, temp_project_with_pyproject: Path):
        """Find pyproject.toml in current directory."""
        found = find_pyproject_toml(temp_project_with_pyproject)
        assert found.name == "pyproject.toml"

    def test_find_in_parent_dir(self, temp_project_with_pyproject: Path):
        """Find pyproject.toml in parent directory."""
        subdir = temp_project_with_pyproject / "src" / "package"
        subdir.mkdir(parents=True)

        found = find_pyproject_toml(subdir)
        assert found.parent == temp_project_with_pyproject.resolve()


class TestExtractToolConfig:
    """Tests for extract_tool_config()."""

    def test_extract_existing_config(self):
        """Extract existing semrel-py config."""
        pyproject = {"tool": {"semrel-py": {"tag_prefix": "rel-"}}}

        assert extract_tool_config(pyproject) == {"tag_prefix": "rel-"}

    def test_extract_missing_config(self):
        """Extract returns empty dict when config missing."""
        assert extract_tool_config({"project": {"name": "test"}}) == {}


class TestParseConfig:
    """Tests for parse_config()."""

    def test_invalid_data_raises(self):
        """Validation errors are wrapped."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration in test"):
            parse_config({"types": [{"type": "feat"}, {"type": "feat"}]}, "test")


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_from_pyproject(self, temp_project_with_pyproject: Path):
        """Load configuration from the [tool.semrel-py] table."""
        config = load_config(temp_project_with_pyproject)

        assert config.tag_prefix == "release-"
        assert config.commit_url_format == "https://example.com/commit/{{hash}}"
        assert [t.type for t in config.types] == ["feat", "fix", "chore"]

    def test_load_pyproject_file_path(self, temp_project_with_pyproject: Path):
        """An explicit pyproject.toml path works."""
        config = load_config(temp_project_with_pyproject / "pyproject.toml")

        assert config.tag_prefix == "release-"

    def test_versionrc_takes_precedence(self, temp_project_with_pyproject: Path):
        """A .versionrc.json beats pyproject.toml."""
        (temp_project_with_pyproject / ".versionrc.json").write_text(
            json.dumps(VERSIONRC), encoding="utf-8"
        )
        config = load_config(temp_project_with_pyproject)

        assert config.tag_prefix == "v"
        assert config.commit_url_format == VERSIONRC["commitUrlFormat"]

    def test_load_explicit_versionrc(self, tmp_path: Path):
        """An explicit .versionrc path is read as JSON."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"tagPrefix": ""}), encoding="utf-8")

        assert load_config(path).tag_prefix == ""

    def test_missing_explicit_file_raises(self, tmp_path: Path):
        """An explicit config path that does not exist raises."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / ".versionrc.json")

    def test_load_defaults_when_no_tool_table(self, tmp_path: Path):
        """Load defaults when no [tool.semrel-py] section."""
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "test"\nversion = "1.0.0"\n', encoding="utf-8"
        )

        assert load_config(tmp_path) == SemrelConfig()

    def test_invalid_tool_table_raises(self, tmp_path: Path):
        """Invalid [tool.semrel-py] data raises ConfigValidationError."""
        (tmp_path / "pyproject.toml").write_text(
            '[tool.semrel-py]\ntypes = "feat"\n', encoding="utf-8"
        )

        with pytest.raises(ConfigValidationError):
            load_config(tmp_path)
