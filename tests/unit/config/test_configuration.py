"""
Tests for configuration management and logging setup.

This module tests TOML loading, runtime overrides and the loguru file
sinks configured from the [logging] section.
"""

from loguru import logger
import pytest

from plotpipe.config.static_config import StaticConfigManager
from plotpipe.config.unified import (
    clear_runtime_overrides,
    get_config,
    get_config_section,
    get_static_config,
    set_runtime_override
)
from plotpipe.utilities.configuration.logging_config import LoggingConfig


@pytest.fixture
def options_file(tmp_path):
    path = tmp_path / "options.toml"
    path.write_text(
        '[global]\n'
        'app_title = "test gallery"\n'
        '\n'
        '[plotting]\n'
        'qualitative_palette = "Pastel1"\n'
        'max_symbols = 4\n',
        encoding="utf-8"
    )
    return path


class TestStaticConfig:
    """Test the TOML-backed configuration layer."""

    def test_reads_values(self, options_file):
        """Test reading keys from the TOML file."""
        manager = StaticConfigManager(options_file)
        assert manager.get_value('app_title') == "test gallery"
        assert manager.get_value('max_symbols', 'plotting') == 4

    def test_default_for_missing_key(self, options_file):
        manager = StaticConfigManager(options_file)
        assert manager.get_value('absent', 'plotting', 'fallback') == 'fallback'
        assert manager.get_value('absent', 'no_section') is None

    def test_sections(self, options_file):
        manager = StaticConfigManager(options_file)
        assert manager.has_section('plotting')
        assert not manager.has_section('export')
        assert manager.has_key('qualitative_palette', 'plotting')
        assert manager.get_section('plotting')['qualitative_palette'] == "Pastel1"

    def test_missing_file_is_empty(self, tmp_path):
        manager = StaticConfigManager(tmp_path / "missing.toml")
        assert manager.get_all() == {}

    def test_broken_file_is_empty(self, tmp_path):
        """Test that an unparsable file behaves like a missing one."""
        path = tmp_path / "broken.toml"
        path.write_text("[plotting\nmax_symbols = ", encoding="utf-8")
        assert StaticConfigManager(path).get_all() == {}

    def test_cache_cleared(self, options_file):
        manager = StaticConfigManager(options_file)
        assert manager.get_value('app_title') == "test gallery"

        options_file.write_text('[global]\napp_title = "renamed"\n', encoding="utf-8")
        assert manager.get_value('app_title') == "test gallery"

        manager.clear_cache()
        assert manager.get_value('app_title') == "renamed"

    def test_environment_path(self, options_file, monkeypatch):
        monkeypatch.setenv("PLOTPIPE_CONFIG", str(options_file))
        assert StaticConfigManager().config_path == options_file

    def test_packaged_defaults(self):
        """Test the shipped options.toml defaults."""
        assert get_static_config('qualitative_palette', 'plotting') == "Set2"
        assert get_static_config('sequential_scale', 'plotting') == "Viridis"
        assert get_static_config('diverging_scale', 'plotting') == "RdBu"
        assert get_static_config('max_symbols', 'plotting') == 6
        assert get_static_config('include_plotlyjs', 'export') == "cdn"


class TestRuntimeOverrides:
    """Test runtime overrides over the static configuration."""

    def test_override_wins(self):
        set_runtime_override('default_mode', 'lines', 'plotting')
        assert get_config('default_mode', 'plotting') == 'lines'
        assert get_static_config('default_mode', 'plotting') == 'markers'

    def test_override_in_section(self):
        set_runtime_override('highlight_color', 'green', 'hover')
        assert get_config_section('hover')['highlight_color'] == 'green'

    def test_falsy_override(self):
        set_runtime_override('include_plotlyjs', False, 'export')
        assert get_config('include_plotlyjs', 'export', 'cdn') is False

    def test_clear(self):
        set_runtime_override('app_title', 'temporary')
        clear_runtime_overrides()
        assert get_config('app_title') == "plotpipe gallery"

    def test_default_when_unset(self):
        assert get_config('not_configured', 'plotting', 42) == 42


class TestLoggingConfig:
    """Test loguru file sink setup."""

    def test_creates_directory(self, tmp_path):
        log_dir = tmp_path / "nested" / "logs"
        config = LoggingConfig(base_log_dir=log_dir)
        assert log_dir.is_dir()
        assert config.get_log_directory() == log_dir

    def test_environment_directory(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLOTPIPE_LOG_DIR", str(tmp_path / "env-logs"))
        assert LoggingConfig().get_log_directory() == tmp_path / "env-logs"

    def test_utility_sink_receives_warnings(self, tmp_path):
        config = LoggingConfig(base_log_dir=tmp_path)
        config.setup_module_logging("utility", "scales")
        try:
            logger.warning("palette recycled in test")
        finally:
            config.remove_all()

        log_file = tmp_path / "utility_scales_error.log"
        assert log_file in config.list_log_files()
        assert "palette recycled in test" in log_file.read_text(encoding="utf-8")

    def test_handlers_not_duplicated(self, tmp_path):
        config = LoggingConfig(base_log_dir=tmp_path)
        config.setup_module_logging("page", "index")
        config.setup_module_logging("page", "index")
        try:
            logger.error("written once")
        finally:
            config.remove_all()

        text = (tmp_path / "page_index_error.log").read_text(encoding="utf-8")
        assert text.count("written once") == 1

    def test_debug_sink_level(self, tmp_path):
        config = LoggingConfig(base_log_dir=tmp_path)
        config.setup_module_logging("debug", "traces")
        try:
            logger.debug("debug detail")
        finally:
            config.remove_all()

        assert "debug detail" in (tmp_path / "debug_traces.log").read_text(encoding="utf-8")

    def test_unknown_module_type(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown module_type"):
            LoggingConfig(base_log_dir=tmp_path).setup_module_logging("widget", "x")
