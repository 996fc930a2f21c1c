"""Tests for loading the naming environment from config files."""

import json

import pytest

from constants import Constants
from naming.config import flatten, load_environment


class TestFlatten:
    """Tests for flatten."""

    def test_nested_mappings(self):
        """Nested keys become dotted keys."""
        data = {"naming": {"provider": {"url": "a://h:1"}}, "plain": 3}
        assert flatten(data) == {"naming.provider.url": "a://h:1", "plain": 3}

    def test_lists_become_comma_lists(self):
        """Scalar lists are joined with commas."""
        assert flatten({"remote": {"connections": ["c1", "c2"]}}) == {"remote.connections": "c1,c2"}


class TestLoadEnvironment:
    """Tests for load_environment."""

    @pytest.fixture(autouse=True)
    def _isolate(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)
        monkeypatch.setattr(Constants, "DEFAULT_CONFIG_PATHS", ["naming.yml"])

    def test_yaml_file(self, tmp_path):
        """YAML files are flattened."""
        path = tmp_path / "custom.yml"
        path.write_text("naming:\n  provider:\n    url: remote+http://localhost:8080\n")
        assert load_environment(str(path)) == {"naming.provider.url": "remote+http://localhost:8080"}

    def test_json_file(self, tmp_path):
        """JSON files are supported by extension."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"remote": {"connections": "c1"}}))
        assert load_environment(str(path)) == {"remote.connections": "c1"}

    def test_default_location(self, tmp_path):
        """The default path is used when nothing is given."""
        (tmp_path / "naming.yml").write_text("a: 1\n")
        assert load_environment() == {"a": 1}

    def test_environment_variable(self, tmp_path, monkeypatch):
        """NAMING_CONFIG points at the config file."""
        path = tmp_path / "from-env.yaml"
        path.write_text("b: two\n")
        monkeypatch.setenv(Constants.ENV_CONFIG, str(path))
        assert load_environment() == {"b": "two"}

    def test_missing_files(self, tmp_path):
        """Missing files give an empty environment."""
        assert load_environment() == {}
        assert load_environment(str(tmp_path / "absent.yml")) == {}

    def test_empty_file(self, tmp_path):
        """An empty YAML document is an empty environment."""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_environment(str(path)) == {}

    def test_invalid_yaml(self, tmp_path):
        """Unparsable files raise ValueError."""
        path = tmp_path / "bad.yml"
        path.write_text("a: [unclosed\n")
        with pytest.raises(ValueError):
            load_environment(str(path))

    def test_non_mapping(self, tmp_path):
        """Top-level documents must be mappings."""
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_environment(str(path))
