"""
Conversion of JSON-like values to delimited text.

An array root is rendered in table mode (header line plus one line per
element). An object root is rendered in single-object mode. Any other root
raises InvalidRootType.
"""
import logging
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

from .assembler import assemble_object, assemble_table
from .config import ResolvedConfig, resolve_config
from .errors import ConversionError, InvalidRootType, NestingTooDeep
from .flattener import FlatEntry, JsonKind, classify, flatten_object, kind_of
from .headers import aggregate_headers

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[Exception], Optional[str]], Any]


def _root_kind(value: Any) -> JsonKind:
    try:
        kind = kind_of(value)
    except ConversionError:
        raise InvalidRootType(value) from None
    if kind not in (JsonKind.ARRAY, JsonKind.OBJECT):
        raise InvalidRootType(value)
    return kind


def _flatten_record(record: Any, config: ResolvedConfig) -> List[FlatEntry]:
    entries = classify(record, config, config.top_level_array_key)
    # Primitive records have no key of their own; give them a column
    column = config.top_level_array_key or ""
    return [FlatEntry(column, entry.value) if entry.path is None else entry for entry in entries]


def _flatten(value: Any, kind: JsonKind, config: ResolvedConfig) -> List[List[FlatEntry]]:
    try:
        if kind is JsonKind.ARRAY:
            return [_flatten_record(record, config) for record in value]
        return [flatten_object(value, config)]
    except RecursionError as e:
        raise NestingTooDeep() from e


def flatten_records(value: Any, options: Optional[Any] = None, **overrides: Any) -> List[List[FlatEntry]]:
    """
    Flatten a root value without assembling text.

    Args:
        value: An array or object
        options: Conversion options or a ResolvedConfig

    Returns:
        One entry list per array element, or a single list for an object root

    Raises:
        InvalidRootType: If the root is neither an array nor an object
        NestingTooDeep: If the value exceeds the recursion limit
    """
    config = resolve_config(options, **overrides)
    return _flatten(value, _root_kind(value), config)


def convert(value: Any, options: Optional[Any] = None, **overrides: Any) -> str:
    """
    Convert a parsed JSON value into delimited text.

    Args:
        value: The parsed JSON (array or object)
        options: A mapping of options, a ResolvedConfig, or None for defaults
        **overrides: Options applied on top of ``options``

    Returns:
        The assembled text, lines joined by the configured end of line

    Raises:
        InvalidRootType: If the root is neither an array nor an object
        RenderFailure: If a render override raises
        UnsupportedValueType: If a nested value is not JSON-like
        NestingTooDeep: If the value exceeds the recursion limit
        ConfigError: If the options are invalid
    """
    config = resolve_config(options, **overrides)
    kind = _root_kind(value)
    records = _flatten(value, kind, config)

    if kind is JsonKind.ARRAY:
        headers = aggregate_headers(records, config.sort_headers_by_frequency)
        logger.debug(f"Converting array of {len(records)} records in table mode")
        return assemble_table(records, headers, config)

    logger.debug(f"Converting object with {len(value)} keys in single-object mode")
    return assemble_object(records[0], config)


def convert_with_callback(value: Any, options: Any = None, callback: Optional[Callback] = None) -> Any:
    """
    Callback-style wrapper around ``convert``.

    Accepts ``(value, options, callback)`` or ``(value, callback)``. The
    callback receives ``(error, None)`` on a conversion failure and
    ``(None, text)`` on success; its return value is returned. Without a
    callback this behaves like ``convert``.
    """
    if callback is None and callable(options) and not isinstance(options, (Mapping, ResolvedConfig)):
        callback, options = options, None
    if callback is None:
        return convert(value, options)

    try:
        text = convert(value, options)
    except ConversionError as e:
        return callback(e, None)
    return callback(None, text)
