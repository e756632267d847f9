"""
Constants configuration for JSON to CSV conversion.

This module contains the default values used when resolving conversion
options, plus the table of option names accepted from the original
JavaScript library.
"""

# Separator for joining nested keys into a column name
# Example: {"user": {"name": "John"}} becomes column "user.name"
DEFAULT_PATH_SEPARATOR = "."

# Delimiter between cells within a line
DEFAULT_ROW_DELIMITER = ";"

# Separator for merging primitive array items into a single cell
# Example: ["python", "javascript", "ruby"] becomes "python,javascript,ruby"
DEFAULT_ARRAY_JOIN_SEPARATOR = ","

# Rendered in place of null or absent values
DEFAULT_UNDEFINED_PLACEHOLDER = ""

DEFAULT_BOOLEAN_TRUE_TEXT = "true"
DEFAULT_BOOLEAN_FALSE_TEXT = "false"

DEFAULT_INCLUDE_HEADERS = True
DEFAULT_SORT_HEADERS_BY_FREQUENCY = True
DEFAULT_VERTICAL_OBJECT_OUTPUT = True

# Option names of the original library mapped to ResolvedConfig fields
OPTION_ALIASES = {
    "headerPathString": "path_separator",
    "rowDelimiter": "row_delimiter",
    "arrayPathString": "array_join_separator",
    "endOfLine": "end_of_line",
    "includeHeaders": "include_headers",
    "orderHeaders": "sort_headers_by_frequency",
    "undefinedString": "undefined_placeholder",
    "verticalOutput": "vertical_object_output",
    "booleanTrueString": "boolean_true_text",
    "booleanFalseString": "boolean_false_text",
    "handleString": "render_string",
    "handleNumber": "render_number",
    "handleBoolean": "render_boolean",
    "mainPathItem": "top_level_array_key",
}
