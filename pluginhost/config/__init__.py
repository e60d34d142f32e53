"""
pluginhost Configuration - TOML-based renderer settings.

Example usage:
    from pathlib import Path
    import pluginhost.config

    pluginhost.config.write_default_config(Path("config/pluginhost.toml"))
    settings = pluginhost.config.load(Path("config/pluginhost.toml"))
    print(settings.container_class)
"""

from pathlib import Path

from pluginhost.config.schema import SchemaError, ValidationError
from pluginhost.config.settings import (
    RENDERER_SCHEMA,
    RendererSettings,
    load_settings,
    write_default_config,
)
from pluginhost.config.toml_handler import TOMLError

# Default config file path
_config_file = Path("config/pluginhost.toml")


class ConfigError(Exception):
    """Raised when settings cannot be loaded."""

    pass


def load(config_file: Path | None = None) -> RendererSettings:
    """
    Load renderer settings, falling back to the default config path.

    Raises:
        ConfigError: If the file is unreadable or holds invalid settings
    """
    path = config_file if config_file is not None else _config_file
    try:
        return load_settings(path)
    except (TOMLError, SchemaError) as e:
        raise ConfigError(f"Failed to load settings from {path}: {e}") from e


__all__ = [
    "ConfigError",
    "RENDERER_SCHEMA",
    "RendererSettings",
    "ValidationError",
    "load",
    "load_settings",
    "write_default_config",
]
