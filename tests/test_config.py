"""Unit tests for FilesystemSettings and the shared settings accessors."""

import pytest
from pydantic import ValidationError

from filesystem.config import (
    FilesystemSettings,
    configure_settings,
    get_settings,
    reset_settings,
)


class TestFilesystemSettings:
    """Test defaults and validation."""

    def test_defaults(self):
        """Test the built-in allowed types, default type and maximum size."""
        settings = FilesystemSettings()

        assert settings.allowed_file_types == frozenset({"txt", "pdf", "java"})
        assert settings.default_file_type == "txt"
        assert settings.maximum_file_size == 2**31 - 1

    def test_default_type_must_be_allowed(self):
        """Test that the default type has to be one of the allowed types."""
        with pytest.raises(ValidationError) as exc_info:
            FilesystemSettings(default_file_type="exe")

        assert "default_file_type" in str(exc_info.value)

    def test_maximum_size_not_negative(self):
        """Test that a negative maximum size is rejected."""
        with pytest.raises(ValidationError):
            FilesystemSettings(maximum_file_size=-1)


class TestSettingsFromEnv:
    """Test loading settings from FILESYSTEM_* environment variables."""

    def test_unset_environment_gives_defaults(self, monkeypatch):
        """Test that missing variables fall back to defaults."""
        monkeypatch.delenv("FILESYSTEM_ALLOWED_FILE_TYPES", raising=False)
        monkeypatch.delenv("FILESYSTEM_DEFAULT_FILE_TYPE", raising=False)
        monkeypatch.delenv("FILESYSTEM_MAXIMUM_FILE_SIZE", raising=False)

        assert FilesystemSettings.from_env() == FilesystemSettings()

    def test_values_read_from_environment(self, monkeypatch):
        """Test that every variable is parsed."""
        monkeypatch.setenv("FILESYSTEM_ALLOWED_FILE_TYPES", "md, rst ,txt,")
        monkeypatch.setenv("FILESYSTEM_DEFAULT_FILE_TYPE", "md")
        monkeypatch.setenv("FILESYSTEM_MAXIMUM_FILE_SIZE", "4096")

        settings = FilesystemSettings.from_env()

        assert settings.allowed_file_types == frozenset({"md", "rst", "txt"})
        assert settings.default_file_type == "md"
        assert settings.maximum_file_size == 4096

    def test_invalid_environment_rejected(self, monkeypatch):
        """Test that an inconsistent environment fails validation."""
        monkeypatch.setenv("FILESYSTEM_ALLOWED_FILE_TYPES", "md")
        monkeypatch.delenv("FILESYSTEM_DEFAULT_FILE_TYPE", raising=False)

        with pytest.raises(ValidationError):
            FilesystemSettings.from_env()


class TestSharedSettings:
    """Test get_settings(), configure_settings() and reset_settings()."""

    def test_configure_replaces_shared_settings(self):
        """Test that configured settings are returned afterwards."""
        settings = FilesystemSettings(maximum_file_size=10)

        assert configure_settings(settings) is settings
        assert get_settings() is settings

    def test_reset_reloads_from_environment(self, monkeypatch):
        """Test that the next access after a reset reads the environment."""
        monkeypatch.setenv("FILESYSTEM_MAXIMUM_FILE_SIZE", "77")
        monkeypatch.delenv("FILESYSTEM_ALLOWED_FILE_TYPES", raising=False)
        monkeypatch.delenv("FILESYSTEM_DEFAULT_FILE_TYPE", raising=False)

        reset_settings()
        settings = get_settings()

        assert settings.maximum_file_size == 77
        assert get_settings() is settings
