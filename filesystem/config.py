"""Process-wide settings for the filesystem model.

Settings are read from environment variables the first time they are needed
and shared afterwards. Tests and embedding applications can install their own
instance with configure_settings().
"""

import os

from pydantic import BaseModel, Field, model_validator

ENV_PREFIX = "FILESYSTEM_"


class FilesystemSettings(BaseModel):
    """Limits and defaults applied when files are created and resized.

    Args:
        allowed_file_types: File type tags a File may carry.
        default_file_type: Type substituted when a File is given an unknown type.
        maximum_file_size: Largest size in bytes a File may reach.
    """

    allowed_file_types: frozenset[str] = Field(
        default=frozenset({"txt", "pdf", "java"}),
        description="File type tags a File may carry",
    )
    default_file_type: str = Field(
        default="txt",
        description="Type substituted when a File is given an unknown type",
    )
    maximum_file_size: int = Field(
        default=2**31 - 1,
        description="Largest size in bytes a File may reach",
        ge=0,
    )

    @model_validator(mode="after")
    def validate_default_type_allowed(self) -> "FilesystemSettings":
        """Ensure the default file type is itself an allowed type."""
        if self.default_file_type not in self.allowed_file_types:
            raise ValueError(
                f"default_file_type '{self.default_file_type}' is not one of "
                f"{sorted(self.allowed_file_types)}"
            )
        return self

    @classmethod
    def from_env(cls) -> "FilesystemSettings":
        """Build settings from FILESYSTEM_* environment variables.

        Unset variables fall back to the field defaults.

        Returns:
            Settings populated from the environment.
        """
        data = {}

        allowed = os.environ.get(f"{ENV_PREFIX}ALLOWED_FILE_TYPES")
        if allowed:
            data["allowed_file_types"] = frozenset(
                t.strip() for t in allowed.split(",") if t.strip()
            )

        default_type = os.environ.get(f"{ENV_PREFIX}DEFAULT_FILE_TYPE")
        if default_type:
            data["default_file_type"] = default_type.strip()

        maximum_size = os.environ.get(f"{ENV_PREFIX}MAXIMUM_FILE_SIZE")
        if maximum_size:
            data["maximum_file_size"] = maximum_size.strip()

        return cls(**data)


# Shared instance, created lazily from the environment
_settings: FilesystemSettings | None = None


def get_settings() -> FilesystemSettings:
    """Get the shared settings, loading them from the environment on first use.

    Returns:
        The shared FilesystemSettings instance.
    """
    global _settings

    if _settings is None:
        _settings = FilesystemSettings.from_env()

    return _settings


def configure_settings(settings: FilesystemSettings) -> FilesystemSettings:
    """Replace the shared settings.

    Only affects items validated afterwards; existing files keep their type
    and size.

    Args:
        settings: The settings to install.

    Returns:
        The installed settings.
    """
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Drop the shared settings so the next access reloads from the environment."""
    global _settings
    _settings = None
