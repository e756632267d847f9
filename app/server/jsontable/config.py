"""
Resolution of conversion options.

Every conversion call resolves its own ``ResolvedConfig`` from the defaults in
``constants`` and the caller's options. The result is frozen and passed
explicitly through the pipeline; there is no module-level option state.
"""
import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .constants import (
    DEFAULT_ARRAY_JOIN_SEPARATOR,
    DEFAULT_BOOLEAN_FALSE_TEXT,
    DEFAULT_BOOLEAN_TRUE_TEXT,
    DEFAULT_INCLUDE_HEADERS,
    DEFAULT_PATH_SEPARATOR,
    DEFAULT_ROW_DELIMITER,
    DEFAULT_SORT_HEADERS_BY_FREQUENCY,
    DEFAULT_UNDEFINED_PLACEHOLDER,
    DEFAULT_VERTICAL_OBJECT_OUTPUT,
    OPTION_ALIASES,
)
from .errors import ConfigError

RenderFunc = Callable[[Any, Optional[str]], Any]

_RENDER_FIELDS = ("render_string", "render_number", "render_boolean")
_TEXT_FIELDS = (
    "path_separator",
    "row_delimiter",
    "array_join_separator",
    "end_of_line",
    "undefined_placeholder",
    "boolean_true_text",
    "boolean_false_text",
)
_FLAG_FIELDS = ("include_headers", "sort_headers_by_frequency", "vertical_object_output")


@dataclass(frozen=True)
class ResolvedConfig:
    path_separator: str = DEFAULT_PATH_SEPARATOR
    row_delimiter: str = DEFAULT_ROW_DELIMITER
    array_join_separator: str = DEFAULT_ARRAY_JOIN_SEPARATOR
    end_of_line: str = os.linesep
    include_headers: bool = DEFAULT_INCLUDE_HEADERS
    sort_headers_by_frequency: bool = DEFAULT_SORT_HEADERS_BY_FREQUENCY
    undefined_placeholder: str = DEFAULT_UNDEFINED_PLACEHOLDER
    vertical_object_output: bool = DEFAULT_VERTICAL_OBJECT_OUTPUT
    boolean_true_text: str = DEFAULT_BOOLEAN_TRUE_TEXT
    boolean_false_text: str = DEFAULT_BOOLEAN_FALSE_TEXT
    render_string: Optional[RenderFunc] = None
    render_number: Optional[RenderFunc] = None
    render_boolean: Optional[RenderFunc] = None
    top_level_array_key: Optional[str] = None


_FIELD_NAMES = {field.name for field in dataclasses.fields(ResolvedConfig)}


def _normalize_options(options: Mapping[str, Any]) -> dict:
    """Map alias names to field names and reject unknown options."""
    normalized = {}
    for name, value in options.items():
        field_name = OPTION_ALIASES.get(name, name)
        if field_name not in _FIELD_NAMES:
            raise ConfigError(f"Unknown conversion option: {name}")
        normalized[field_name] = value
    return normalized


def _validate(values: dict) -> dict:
    for name in _RENDER_FIELDS:
        func = values.get(name)
        if func is not None and not callable(func):
            raise ConfigError(f"Option '{name}' must be callable")

    for name in _TEXT_FIELDS:
        value = values.get(name)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"Option '{name}' must be a string")

    for name in _FLAG_FIELDS:
        if name in values and not isinstance(values[name], bool):
            raise ConfigError(f"Option '{name}' must be a boolean")

    # None falls back to the default, as in the original option table
    if "end_of_line" in values and values["end_of_line"] is None:
        values["end_of_line"] = os.linesep
    if "boolean_true_text" in values and values["boolean_true_text"] is None:
        values["boolean_true_text"] = DEFAULT_BOOLEAN_TRUE_TEXT
    if "boolean_false_text" in values and values["boolean_false_text"] is None:
        values["boolean_false_text"] = DEFAULT_BOOLEAN_FALSE_TEXT
    for name in ("path_separator", "row_delimiter", "array_join_separator", "undefined_placeholder"):
        if name in values and values[name] is None:
            raise ConfigError(f"Option '{name}' must be a string")

    key = values.get("top_level_array_key")
    if key is not None and not isinstance(key, str):
        values["top_level_array_key"] = str(key)
    return values


def resolve_config(options: Optional[Any] = None, **overrides: Any) -> ResolvedConfig:
    """
    Build the configuration for one conversion call.

    Args:
        options: A mapping of option names (field names or the original
            library's camelCase names), an existing ResolvedConfig, or None
        **overrides: Options applied on top of ``options``

    Returns:
        A new frozen ResolvedConfig

    Raises:
        ConfigError: If an option name is unknown or a value has the wrong type
    """
    if isinstance(options, ResolvedConfig):
        if not overrides:
            return options
        return dataclasses.replace(options, **_validate(_normalize_options(overrides)))

    if options is not None and not isinstance(options, Mapping):
        raise ConfigError(f"Options must be a mapping, got {type(options).__name__}")

    values = {}
    if options:
        values.update(_normalize_options(options))
    values.update(_normalize_options(overrides))
    return ResolvedConfig(**_validate(values))
