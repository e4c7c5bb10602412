"""
Property-based tests for configuration loading and environment overrides.
"""

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from hosts_editor.cli import (
    create_default_config,
    load_config_from_file,
    save_config_to_file,
)
from hosts_editor.config import (
    EditorConfig,
    LoggingConfig,
    apply_env_overrides,
)


@st.composite
def logging_config_strategy(draw) -> LoggingConfig:
    """Generate valid LoggingConfig objects."""
    return LoggingConfig(
        level=draw(st.sampled_from(["debug", "info", "warn", "error"])),
        output_format=draw(st.sampled_from(["json", "text", "both"])),
        enabled=draw(st.booleans()),
    )


@st.composite
def editor_config_strategy(draw) -> EditorConfig:
    """Generate valid EditorConfig objects."""
    hosts_file = draw(st.one_of(
        st.none(),
        st.sampled_from(["/etc/hosts", "/tmp/hosts", "C:/Windows/System32/drivers/etc/hosts"]),
    ))
    return EditorConfig(
        hosts_file=Path(hosts_file) if hosts_file else None,
        backup_suffix=draw(st.sampled_from([".backup", ".bak", "~"])),
        fallback_encoding=draw(st.sampled_from(["cp1252", "latin-1", "cp1251"])),
        prefer_idn=draw(st.booleans()),
        language=draw(st.sampled_from(["de", "en"])),
        logging=draw(logging_config_strategy()),
    )


class TestConfigRoundTrip:
    """Saving and loading a configuration preserves every field."""

    @given(config=editor_config_strategy())
    @settings(max_examples=50)
    def test_save_load_round_trip(self, config: EditorConfig) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "config.json"
            assert save_config_to_file(config, path)
            loaded = load_config_from_file(path)

        assert loaded == config

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert load_config_from_file(Path(tmpdir) / "missing.json") is None

    def test_malformed_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            assert load_config_from_file(path) is None

    def test_defaults(self) -> None:
        config = create_default_config()
        assert config.hosts_file is None
        assert config.backup_suffix == ".backup"
        assert config.fallback_encoding == "cp1252"
        assert config.prefer_idn is True
        assert config.language == "en"
        assert config.logging.enabled is False
        assert create_default_config(language="de").language == "de"


class TestEnvOverrides:
    """Environment variables override file settings."""

    def test_overrides_applied(self) -> None:
        config = apply_env_overrides(EditorConfig(), {
            "HOSTS_FILE": " /tmp/hosts ",
            "HOSTS_LANG": "DE",
            "HOSTS_LOG_LEVEL": "debug",
        })
        assert config.hosts_file == Path("/tmp/hosts")
        assert config.language == "de"
        assert config.logging.level == "debug"

    def test_unknown_values_ignored(self) -> None:
        config = apply_env_overrides(EditorConfig(), {
            "HOSTS_FILE": "   ",
            "HOSTS_LANG": "fr",
            "HOSTS_LOG_LEVEL": "loud",
        })
        assert config == EditorConfig()

    @given(language=st.sampled_from(["de", "en"]))
    def test_empty_environment_keeps_config(self, language: str) -> None:
        config = EditorConfig(language=language)
        assert apply_env_overrides(config, {}).language == language
