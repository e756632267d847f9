"""
jsontable command line.

Converts a JSON or JSON Lines file to delimited text.

Usage examples:
  jsontable -i input.json -o output.csv
  jsontable -i input.jsonl --delimiter ',' --array-separator '|'
  jsontable -i settings.json --horizontal
"""
import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .file_processor import convert_json_to_csv

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert JSON/JSON Lines to delimited text",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("-i", "--input", required=True, help="Path to input JSON or JSON Lines file")
    parser.add_argument("-o", "--output", help="Path to output file (stdout if omitted)")
    parser.add_argument("--delimiter", default=";", help="Delimiter between cells")
    parser.add_argument("--path-separator", default=".", help="Separator between nested keys in column names")
    parser.add_argument("--array-separator", default=",", help="Separator for merged primitive array values")
    parser.add_argument("--eol", help="Line terminator (host newline if omitted)")
    parser.add_argument("--no-headers", action="store_true", help="Omit the header line in table mode")
    parser.add_argument("--no-sort", action="store_true", help="Keep columns in first-seen order")
    parser.add_argument("--horizontal", action="store_true", help="Render an object root as two lines")
    parser.add_argument("--undefined", default="", help="Placeholder for null values")
    parser.add_argument("--true-text", default="true", help="Text for boolean true")
    parser.add_argument("--false-text", default="false", help="Text for boolean false")
    parser.add_argument("--top-level-key", help="Column name for primitive elements of a root array")
    parser.add_argument("--encoding", default="utf-8", help="Encoding of the output file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def unescape(value: Optional[str]) -> Optional[str]:
    """Decode backslash escapes typed on the command line, e.g. '\\t' to a tab."""
    if value is None:
        return None
    return value.encode("latin-1", "backslashreplace").decode("unicode_escape")


def build_options(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "row_delimiter": unescape(args.delimiter),
        "path_separator": unescape(args.path_separator),
        "array_join_separator": unescape(args.array_separator),
        "end_of_line": unescape(args.eol),
        "include_headers": not args.no_headers,
        "sort_headers_by_frequency": not args.no_sort,
        "vertical_object_output": not args.horizontal,
        "undefined_placeholder": args.undefined,
        "boolean_true_text": args.true_text,
        "boolean_false_text": args.false_text,
        "top_level_array_key": args.top_level_key,
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with open(args.input, "rb") as f:
            content = f.read()
        csv_text = convert_json_to_csv(content, build_options(args))

        if args.output:
            os.makedirs(os.path.dirname(os.path.abspath(args.output)), exist_ok=True)
            with open(args.output, "w", encoding=args.encoding, newline="") as f:
                f.write(csv_text)
            logger.info(f"Wrote {args.output}")
        else:
            sys.stdout.write(csv_text)
            sys.stdout.write("\n")
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
