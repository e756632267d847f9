"""
Flattening of JSON values into column path / text pairs.

``classify`` inspects one value and dispatches on its kind. Leaves become a
single FlatEntry; arrays and objects recurse through ``flatten_array`` and
``flatten_object`` and their children's paths are prefixed with the key the
container was found under.
"""
from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .config import RenderFunc, ResolvedConfig
from .errors import RenderFailure, UnsupportedValueType

# Integral floats below this render without a fractional part
_INTEGRAL_FLOAT_LIMIT = 1e21


class JsonKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


@dataclass(frozen=True)
class FlatEntry:
    """
    One leaf contribution to a row.

    ``path`` is None for an array element that has not been assigned a key
    yet; it is either merged into a sibling or given its parent's key.
    """
    path: Optional[str]
    value: str


def kind_of(value: Any, path: Optional[str] = None) -> JsonKind:
    """
    Return the JSON kind of a value.

    Raises:
        UnsupportedValueType: If the value is not a JSON-like value
    """
    if value is None:
        return JsonKind.NULL
    # bool is a subclass of int
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (int, float, Decimal)):
        return JsonKind.NUMBER
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    raise UnsupportedValueType(value, path)


def number_text(number: Any) -> str:
    """Canonical decimal text of a JSON number (``1.0`` renders as ``1``)."""
    if isinstance(number, float) and number.is_integer() and abs(number) < _INTEGRAL_FLOAT_LIMIT:
        return str(int(number))
    if isinstance(number, float):
        return repr(number)
    return str(number)


def _render(
    kind: JsonKind,
    func: Optional[RenderFunc],
    default: Callable[[Any], str],
    value: Any,
    key: Optional[str],
    config: ResolvedConfig,
) -> str:
    if func is None:
        return default(value)

    try:
        result = func(value, key)
    except Exception as e:
        raise RenderFailure(kind.value, key, e) from e

    if result is None:
        return config.undefined_placeholder
    return result if isinstance(result, str) else str(result)


def _classify_string(value: str, key: Optional[str], config: ResolvedConfig) -> List[FlatEntry]:
    # The empty string is a regular value and is passed through unchanged
    text = _render(JsonKind.STRING, config.render_string, str, value, key, config)
    return [FlatEntry(key, text)]


def _classify_number(value: Any, key: Optional[str], config: ResolvedConfig) -> List[FlatEntry]:
    text = _render(JsonKind.NUMBER, config.render_number, number_text, value, key, config)
    return [FlatEntry(key, text)]


def _classify_boolean(value: bool, key: Optional[str], config: ResolvedConfig) -> List[FlatEntry]:
    def default(flag: bool) -> str:
        return config.boolean_true_text if flag else config.boolean_false_text

    text = _render(JsonKind.BOOLEAN, config.render_boolean, default, value, key, config)
    return [FlatEntry(key, text)]


def _classify_null(value: None, key: Optional[str], config: ResolvedConfig) -> List[FlatEntry]:
    return [FlatEntry(key, config.undefined_placeholder)]


def _classify_container(
    flatten: Callable[[Any, ResolvedConfig], List[FlatEntry]],
) -> Callable[[Any, Optional[str], ResolvedConfig], List[FlatEntry]]:
    def classify_container(value: Any, key: Optional[str], config: ResolvedConfig) -> List[FlatEntry]:
        children = flatten(value, config)
        if key is None:
            return children
        if not children:
            # An empty container still owns its column
            return [FlatEntry(key, config.undefined_placeholder)]
        return prefix_entries(children, key, config.path_separator)

    return classify_container


def prefix_entries(entries: List[FlatEntry], key: str, separator: str) -> List[FlatEntry]:
    """
    Attach child entries to the key of their parent container.

    Named entries become ``<key><separator><path>``; pathless entries take the
    key itself.
    """
    prefixed = []
    for entry in entries:
        if entry.path is None:
            prefixed.append(replace(entry, path=key))
        else:
            prefixed.append(replace(entry, path=f"{key}{separator}{entry.path}"))
    return prefixed


def merge_pathless(entries: List[FlatEntry], separator: str) -> List[FlatEntry]:
    """
    Merge pathless array entries into the first one.

    The first entry without a path is the anchor; every later pathless entry
    has its value appended to the anchor's, joined by ``separator``, and is
    dropped. Named entries pass through in order.

    Example: entries for [1, {"y": 2}, 3] become ("1,3", None) and ("2", "y").
    """
    merged: List[FlatEntry] = []
    anchor_index = None

    for entry in entries:
        if entry.path is not None:
            merged.append(entry)
        elif anchor_index is None:
            anchor_index = len(merged)
            merged.append(entry)
        else:
            anchor = merged[anchor_index]
            merged[anchor_index] = replace(anchor, value=f"{anchor.value}{separator}{entry.value}")

    return merged


def flatten_object(obj: Mapping, config: ResolvedConfig) -> List[FlatEntry]:
    """
    Flatten every member of an object in insertion order.

    Args:
        obj: The mapping to flatten
        config: Resolved conversion options

    Returns:
        Entries of all members, each path starting with the member's key
    """
    entries: List[FlatEntry] = []
    for key, value in obj.items():
        entries.extend(classify(value, config, str(key)))
    return entries


def flatten_array(array: Any, config: ResolvedConfig) -> List[FlatEntry]:
    """
    Flatten every element of an array in index order.

    Primitive elements collapse into one pathless entry joined by the array
    join separator; elements that produce named entries (objects) keep them.

    Args:
        array: The list or tuple to flatten
        config: Resolved conversion options

    Returns:
        Entries of all elements after the pathless merge
    """
    entries: List[FlatEntry] = []
    for element in array:
        entries.extend(classify(element, config))
    return merge_pathless(entries, config.array_join_separator)


_HANDLERS: Dict[JsonKind, Callable[[Any, Optional[str], ResolvedConfig], List[FlatEntry]]] = {
    JsonKind.STRING: _classify_string,
    JsonKind.NUMBER: _classify_number,
    JsonKind.BOOLEAN: _classify_boolean,
    JsonKind.NULL: _classify_null,
    JsonKind.ARRAY: _classify_container(flatten_array),
    JsonKind.OBJECT: _classify_container(flatten_object),
}


def classify(value: Any, config: ResolvedConfig, key: Optional[str] = None) -> List[FlatEntry]:
    """
    Flatten one value found under ``key`` into entries.

    Args:
        value: Any JSON-like value
        config: Resolved conversion options
        key: The key the value was found under, None for array elements

    Returns:
        List of FlatEntry in document order

    Raises:
        UnsupportedValueType: If a nested value is not JSON-like
        RenderFailure: If a render override raises
    """
    return _HANDLERS[kind_of(value, key)](value, key, config)
