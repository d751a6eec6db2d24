"""Application configuration settings.

Loads robot credentials and logging options from environment variables
with sensible defaults. ``WebHookClient`` never reads the environment on
its own; use ``WebHookClient.from_settings(get_settings())``.
"""

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://oapi.dingtalk.com/robot/send"


def _get_bool_env(name: str, default: bool = False) -> bool:
    """Get a boolean value from environment variable.

    Args:
        name: Environment variable name.
        default: Default value if not set.

    Returns:
        Boolean value from environment.
    """
    value = os.getenv(name, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default


def _get_float_env(name: str) -> float | None:
    """Get an optional float from environment variable.

    Raises:
        ValueError: If the variable is set but not a number.
    """
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from e


@dataclass
class Settings:
    """Settings loaded from environment variables.

    Attributes:
        DINGTALK_ACCESS_TOKEN: Robot access token or full webhook URL.
        DINGTALK_API_URL: Robot API base URL.
        DINGTALK_SECRET: Signing secret, if the robot has signing enabled.
        DINGTALK_TIMEOUT: HTTP timeout in seconds (None = no timeout).
        LOG_LEVEL: Logging level.
        LOG_JSON: Render logs as JSON instead of console output.
    """

    # Robot
    DINGTALK_ACCESS_TOKEN: str = ""
    DINGTALK_API_URL: str = DEFAULT_API_URL
    DINGTALK_SECRET: str | None = None
    DINGTALK_TIMEOUT: float | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            Settings instance populated from environment.
        """
        return cls(
            DINGTALK_ACCESS_TOKEN=os.getenv("DINGTALK_ACCESS_TOKEN", ""),
            DINGTALK_API_URL=os.getenv("DINGTALK_API_URL", DEFAULT_API_URL),
            DINGTALK_SECRET=os.getenv("DINGTALK_SECRET") or None,
            DINGTALK_TIMEOUT=_get_float_env("DINGTALK_TIMEOUT"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
            LOG_JSON=_get_bool_env("LOG_JSON", default=False),
        )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings.

    Returns:
        Settings loaded from the environment on first use.
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Settings | None) -> None:
    """Set the global settings.

    Useful for testing. Passing None forces a reload on next access.

    Args:
        settings: Settings instance.
    """
    global _settings
    _settings = settings
