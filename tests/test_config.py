"""Test configuration loading"""

import pytest

from m3u_migrator.core.config import (
    CONFIG_FILENAME,
    FailedRecordPolicy,
    default_config,
    load_config,
)
from m3u_migrator.core.exceptions import ConfigError


class TestLoadConfig:
    """Test load_config"""

    def test_defaults_without_file(self, temp_dir, monkeypatch):
        """Test defaults are used when no config file is present"""
        monkeypatch.chdir(temp_dir)

        config = load_config()

        assert config == default_config()
        assert config.playlist.encoding == "utf-8"
        assert config.playlist.index_width == 5
        assert config.migration.failed_records is FailedRecordPolicy.INCLUDE
        assert config.migration.strict is False
        assert config.logging.directory is None
        assert config.logging.level == "INFO"

    def test_file_in_working_directory(self, temp_dir, monkeypatch):
        """Test the config file in CWD is picked up"""
        (temp_dir / CONFIG_FILENAME).write_text(
            "playlist:\n  index_width: 3\nmigration:\n  failed_records: skip\n  strict: true\n"
        )
        monkeypatch.chdir(temp_dir)

        config = load_config()

        assert config.playlist.index_width == 3
        assert config.migration.failed_records is FailedRecordPolicy.SKIP
        assert config.migration.strict is True

    def test_explicit_path(self, temp_dir):
        """Test every section is parsed from an explicit file"""
        path = temp_dir / "custom.yaml"
        path.write_text(
            "playlist:\n"
            "  encoding: latin-1\n"
            "logging:\n"
            f"  directory: {temp_dir / 'logs-root'}\n"
            "  level: debug\n"
        )

        config = load_config(path)

        assert config.playlist.encoding == "latin-1"
        assert config.logging.directory == (temp_dir / "logs-root").resolve()
        assert config.logging.level == "DEBUG"

    def test_empty_file(self, temp_dir):
        """Test an empty file means defaults"""
        path = temp_dir / "empty.yaml"
        path.write_text("")
        assert load_config(path) == default_config()

    def test_missing_explicit_file(self, temp_dir):
        """Test an explicit path that doesn't exist is an error"""
        with pytest.raises(ConfigError) as exc_info:
            load_config(temp_dir / "nope.yaml")
        assert "not found" in exc_info.value.message

    def test_invalid_yaml(self, temp_dir):
        """Test YAML syntax errors are reported"""
        path = temp_dir / "bad.yaml"
        path.write_text("playlist: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)

    @pytest.mark.parametrize("content", [
        "- just\n- a list\n",
        "playlist: 5\n",
        "playlist:\n  index_width: 0\n",
        "playlist:\n  index_width: true\n",
        "playlist:\n  index_width: '5'\n",
        "playlist:\n  encoding: no-such-codec\n",
        "migration:\n  failed_records: sometimes\n",
        "migration:\n  strict: 'yes please'\n",
        "logging:\n  level: LOUD\n",
        "logging:\n  directory: ''\n",
    ])
    def test_invalid_values(self, temp_dir, content):
        """Test invalid structure and values raise ConfigError"""
        path = temp_dir / "bad.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError):
            load_config(path)
