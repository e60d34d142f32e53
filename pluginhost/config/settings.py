"""
Renderer settings.

Settings live in the ``[renderer]`` table of a TOML file. A missing file or
table yields defaults; a partial table is merged over defaults.
"""

from dataclasses import dataclass, fields
from pathlib import Path

from pluginhost.config.schema import ConfigField, generate_default_config, validate_section
from pluginhost.config.toml_handler import generate_toml_from_schema, read_toml, write_toml

SECTION = "renderer"

RENDERER_SCHEMA: dict[str, ConfigField] = {
    "container_class": ConfigField(
        str, "plugin-root", "Class marking the plugin container", min=1
    ),
    "container_test_id": ConfigField(
        str, "plugin-root", "data-testid set on the plugin container", min=1
    ),
    "loader_class": ConfigField(
        str, "progress-container", "Class of the loader surface", min=1
    ),
    "loader_visible_class": ConfigField(
        str, "visible", "Class toggled on the loader surface while loading", min=1
    ),
    "loader_label": ConfigField(
        str, "loading plugin", "Accessible label of the progress indicator"
    ),
    "module_suffix": ConfigField(
        str, ".js", "Plugin module suffix replaced to locate its stylesheet", min=1
    ),
    "stylesheet_suffix": ConfigField(
        str, ".css", "Stylesheet suffix substituted for the module suffix", min=1
    ),
    "replace_on_activate": ConfigField(
        bool, True, "Unmount a still-mounted container before mounting a new one"
    ),
    "isolate_handler_errors": ConfigField(
        bool, False, "Warn and continue when an event handler raises"
    ),
}


_DEFAULTS = generate_default_config(RENDERER_SCHEMA)


@dataclass(frozen=True)
class RendererSettings:
    """Validated renderer settings; defaults come from RENDERER_SCHEMA."""

    container_class: str = _DEFAULTS["container_class"]
    container_test_id: str = _DEFAULTS["container_test_id"]
    loader_class: str = _DEFAULTS["loader_class"]
    loader_visible_class: str = _DEFAULTS["loader_visible_class"]
    loader_label: str = _DEFAULTS["loader_label"]
    module_suffix: str = _DEFAULTS["module_suffix"]
    stylesheet_suffix: str = _DEFAULTS["stylesheet_suffix"]
    replace_on_activate: bool = _DEFAULTS["replace_on_activate"]
    isolate_handler_errors: bool = _DEFAULTS["isolate_handler_errors"]

    @classmethod
    def from_dict(cls, values: dict) -> "RendererSettings":
        """Build settings from a raw section, validating against the schema."""
        merged = validate_section(values, RENDERER_SCHEMA)
        return cls(**{f.name: merged[f.name] for f in fields(cls)})


def load_settings(config_file: Path | None = None) -> RendererSettings:
    """
    Load renderer settings from a TOML file.

    Args:
        config_file: Path to the TOML file; None means defaults

    Raises:
        TOMLError: If the file exists but cannot be parsed
        ValidationError: If the section holds unknown or invalid fields
    """
    if config_file is None or not config_file.exists():
        return RendererSettings()

    data = read_toml(config_file)
    return RendererSettings.from_dict(data.get(SECTION, {}))


def write_default_config(config_file: Path) -> None:
    """Write a commented TOML file holding the default settings."""
    write_toml(config_file, generate_toml_from_schema(SECTION, RENDERER_SCHEMA))
