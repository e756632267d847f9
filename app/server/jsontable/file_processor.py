import json
import logging
from typing import Any, List, Optional

import pandas as pd

from .assembler import build_rows
from .config import resolve_config
from .converter import convert, flatten_records
from .errors import ConversionError
from .headers import aggregate_headers

# Configure logging
logger = logging.getLogger(__name__)


def parse_jsonl_lines(content_str: str) -> List[Any]:
    """
    Parse JSON Lines text, one JSON value per line.

    Invalid lines are skipped with a warning.

    Raises:
        ValueError: If no line holds valid JSON
    """
    records = []
    skipped_lines = 0

    for line_num, line in enumerate(content_str.strip().split('\n'), start=1):
        line = line.strip()
        if not line:
            continue

        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as e:
            logger.warning(f"Line {line_num} contains invalid JSON, skipping: {str(e)}")
            skipped_lines += 1
            continue

    if not records:
        raise ValueError("No valid JSON values found in JSONL content")

    if skipped_lines > 0:
        logger.info(f"Skipped {skipped_lines} invalid lines in JSONL content")

    return records


def looks_like_jsonl(content_str: str) -> bool:
    """True when there are several non-empty lines and each one is a whole object or array."""
    lines = [line.strip() for line in content_str.split('\n') if line.strip()]
    return len(lines) > 1 and all(line[0] in '{[' and line[-1] in '}]' for line in lines)


def parse_json_content(content: bytes) -> Any:
    """
    Parse uploaded JSON or JSON Lines content.

    A complete JSON document is returned as parsed. Content that is not one
    document but has one object or array per line is read as JSON Lines and
    the list of parsed lines is returned.

    Args:
        content: Raw bytes (or text) of the file

    Returns:
        The parsed JSON value

    Raises:
        ValueError: If the content is empty or holds no valid JSON
        json.JSONDecodeError: If a single document is malformed or truncated
    """
    content_str = content.decode('utf-8') if isinstance(content, bytes) else content

    if not content_str.strip():
        raise ValueError("JSON file is empty")

    try:
        return json.loads(content_str)
    except json.JSONDecodeError:
        if not looks_like_jsonl(content_str):
            raise
        logger.info("Content is not a single JSON document, reading as JSON Lines")

    return parse_jsonl_lines(content_str)


def convert_json_to_csv(content: bytes, options: Optional[Any] = None) -> str:
    """
    Convert JSON or JSON Lines file content to delimited text.

    Args:
        content: Raw bytes content of the file
        options: Conversion options or a ResolvedConfig

    Returns:
        The assembled text

    Raises:
        ConversionError: If the parsed value cannot be converted
        Exception: If the content cannot be decoded or parsed
    """
    try:
        data = parse_json_content(content)
        csv_text = convert(data, options)
        logger.info(f"Converted JSON content to {len(csv_text)} characters of CSV")
        return csv_text

    except ConversionError:
        raise
    except Exception as e:
        raise Exception(f"Error converting JSON to CSV: {str(e)}") from e


def convert_to_dataframe(value: Any, options: Optional[Any] = None) -> pd.DataFrame:
    """
    Project a JSON value onto a pandas DataFrame with the same cells as ``convert``.

    Array roots give one column per header and one row per element. Object
    roots give ``path``/``value`` columns in vertical layout, or a single row
    with one column per path in horizontal layout.

    Args:
        value: The parsed JSON (array or object)
        options: Conversion options or a ResolvedConfig

    Returns:
        DataFrame of string cells
    """
    config = resolve_config(options)
    records = flatten_records(value, config)

    if isinstance(value, (list, tuple)):
        headers = aggregate_headers(records, config.sort_headers_by_frequency)
        columns = [header.name for header in headers]
        return pd.DataFrame(build_rows(records, headers), columns=columns, dtype=object)

    entries = records[0]
    values = [entry.value for entry in entries]
    if config.vertical_object_output:
        return pd.DataFrame(
            {'path': [entry.path for entry in entries], 'value': values},
            dtype=object,
        )
    return pd.DataFrame([values], columns=[entry.path for entry in entries], dtype=object)
