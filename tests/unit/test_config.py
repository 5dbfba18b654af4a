"""Unit tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from llmi18n.config import Llmi18nConfig
from llmi18n.config.loader import (
    ENV_OVERRIDES,
    YAMLConfigLoader,
    apply_env_overrides,
    deep_merge,
    dict_to_config,
    load_config,
    load_yaml_with_inheritance,
)

DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "config" / "default.yaml"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of config tests."""
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)


def write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_simple_merge(self) -> None:
        """Test merging flat dictionaries."""
        result = deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self) -> None:
        """Test merging nested dictionaries."""
        base = {"outer": {"a": 1, "b": 2}}
        override = {"outer": {"b": 3, "c": 4}}
        assert deep_merge(base, override) == {"outer": {"a": 1, "b": 3, "c": 4}}

    def test_override_replaces_non_dict(self) -> None:
        """Test that non-dict values are replaced."""
        assert deep_merge({"a": {"nested": 1}}, {"a": "replaced"}) == {"a": "replaced"}

    def test_base_is_not_modified(self) -> None:
        """Test that merging leaves the inputs untouched."""
        base = {"a": 1}
        deep_merge(base, {"a": 2})
        assert base == {"a": 1}


class TestLoadYAML:
    """Tests for YAML loading with inheritance."""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_yaml_with_inheritance(tmp_path / "missing.yaml")

    def test_empty_file_is_empty_config(self, tmp_path: Path) -> None:
        """Test that an empty file loads as an empty mapping."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml_with_inheritance(path) == {}

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        """Test that a YAML list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_yaml_with_inheritance(path)

    def test_extends_merges_base(self, tmp_path: Path) -> None:
        """Test that 'extends' loads and merges the base file."""
        write_yaml(
            tmp_path / "base.yaml",
            {"llmi18n": {"translation": {"model": "mistral", "target_language": "de"}}},
        )
        child = write_yaml(
            tmp_path / "fr.yaml",
            {"extends": "base.yaml", "llmi18n": {"translation": {"target_language": "fr"}}},
        )

        data = load_yaml_with_inheritance(child)

        assert "extends" not in data
        assert data["llmi18n"]["translation"] == {"model": "mistral", "target_language": "fr"}


class TestDictToConfig:
    """Tests for dict_to_config."""

    def test_empty_dict_gives_defaults(self) -> None:
        """Test that missing sections use defaults."""
        config = dict_to_config({})
        assert config == Llmi18nConfig()
        assert config.ollama.host == "http://localhost:11434"
        assert config.translation.model == "mistral"
        assert config.translation.target_language == "de"
        assert config.translation.options == {"temperature": 0.3, "seed": 42}
        assert config.logging.level == "INFO"

    def test_null_sections_give_defaults(self) -> None:
        """Test that sections left empty in YAML use defaults."""
        config = dict_to_config({"llmi18n": {"ollama": None, "logging": None}})
        assert config.ollama.timeout_seconds == 300.0

    def test_file_host_is_normalized(self) -> None:
        """Test that a host without scheme in a file gets one, as from the environment."""
        config = dict_to_config({"llmi18n": {"ollama": {"host": "gpu-box:11434/"}}})
        assert config.ollama.host == "http://gpu-box:11434"

    def test_options_replace_defaults(self) -> None:
        """Test that configured options are used as a whole."""
        config = dict_to_config({"llmi18n": {"translation": {"options": {"top_k": 5}}}})
        assert config.translation.options == {"top_k": 5}

    def test_unknown_option_raises(self) -> None:
        """Test that a misspelled sampling option fails at load time."""
        with pytest.raises(ValueError, match="Unknown sampling option"):
            dict_to_config({"llmi18n": {"translation": {"options": {"temp": 0.1}}}})

    def test_unknown_section_key_raises(self) -> None:
        """Test that an unknown key in a section is rejected."""
        with pytest.raises(TypeError):
            dict_to_config({"llmi18n": {"ollama": {"hots": "x"}}})


class TestEnvOverrides:
    """Tests for environment variable overrides."""

    def test_overrides_applied(self) -> None:
        """Test that each variable lands in its section."""
        data = apply_env_overrides(
            {"llmi18n": {"translation": {"model": "mistral"}}},
            environ={
                "OLLAMA_HOST": "gpu-box:11434",
                "LLMI18N_MODEL": "llama2",
                "LLMI18N_TARGET_LANGUAGE": "nb",
                "LLMI18N_LOG_LEVEL": "DEBUG",
            },
        )
        config = dict_to_config(data)
        assert config.ollama.host == "http://gpu-box:11434"
        assert config.translation.model == "llama2"
        assert config.translation.target_language == "nb"
        assert config.logging.level == "DEBUG"

    def test_empty_variables_ignored(self) -> None:
        """Test that blank variables do not override."""
        data = {"llmi18n": {"translation": {"model": "mistral"}}}
        assert apply_env_overrides(data, environ={"LLMI18N_MODEL": "  "}) == data


class TestLoadConfig:
    """Tests for load_config."""

    def test_without_path_uses_defaults(self) -> None:
        """Test that no path gives the built-in defaults."""
        assert load_config() == Llmi18nConfig()

    def test_without_path_applies_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment overrides apply to defaults."""
        monkeypatch.setenv("LLMI18N_TARGET_LANGUAGE", "sv")
        assert load_config().translation.target_language == "sv"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables win over file values."""
        path = write_yaml(
            tmp_path / "config.yaml",
            {"llmi18n": {"ollama": {"host": "http://file-host:11434"}}},
        )
        monkeypatch.setenv("OLLAMA_HOST", "http://env-host:11434")

        config = YAMLConfigLoader().load(path)

        assert config.ollama.host == "http://env-host:11434"

    def test_shipped_default_config(self) -> None:
        """Test that the bundled default config matches the built-in defaults."""
        config = load_config(path=DEFAULT_CONFIG)
        assert config == Llmi18nConfig()
