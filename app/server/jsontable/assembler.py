"""
Row assembly: turns flattened entries into delimited lines of text.
"""
import logging
from typing import List

from .config import ResolvedConfig
from .errors import ColumnAlignmentError
from .flattener import FlatEntry
from .headers import Header

logger = logging.getLogger(__name__)


def build_rows(records: List[List[FlatEntry]], headers: List[Header]) -> List[List[str]]:
    """
    Align each record's entries to the header positions.

    Cells of columns a record does not have stay empty. When a path repeats
    within a record the last value wins.

    Raises:
        ColumnAlignmentError: If an entry's path is not in the header list
    """
    positions = {header.name: index for index, header in enumerate(headers)}
    rows = []
    for record_index, entries in enumerate(records):
        row = [""] * len(headers)
        for entry in entries:
            index = positions.get(entry.path)
            if index is None:
                raise ColumnAlignmentError(
                    f"Record {record_index} has column '{entry.path}' missing from the headers"
                )
            row[index] = entry.value
        rows.append(row)
    return rows


def assemble_table(records: List[List[FlatEntry]], headers: List[Header], config: ResolvedConfig) -> str:
    """
    Render table mode output: an optional header line, then one line per record.
    """
    lines = []
    if config.include_headers:
        lines.append(config.row_delimiter.join(header.name for header in headers))

    for row in build_rows(records, headers):
        lines.append(config.row_delimiter.join(row))

    logger.debug(f"Assembled table with {len(headers)} columns and {len(records)} rows")
    return config.end_of_line.join(lines)


def assemble_object(entries: List[FlatEntry], config: ResolvedConfig) -> str:
    """
    Render single-object mode output.

    Vertical layout emits one ``path;value`` line per entry. Horizontal
    layout emits two lines: all paths, then all values.
    """
    paths = [entry.path for entry in entries]
    values = [entry.value for entry in entries]

    if config.vertical_object_output:
        lines = [config.row_delimiter.join((path, value)) for path, value in zip(paths, values)]
    else:
        lines = [config.row_delimiter.join(paths), config.row_delimiter.join(values)]

    logger.debug(f"Assembled object with {len(entries)} entries")
    return config.end_of_line.join(lines)
