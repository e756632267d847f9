"""Exceptions raised while converting JSON values to delimited text."""


class ConversionError(Exception):
    """Base class for every failure of a single conversion call."""


class InvalidRootType(ConversionError, ValueError):
    """Root value is neither an array nor an object."""

    def __init__(self, value):
        self.value_type = type(value).__name__
        super().__init__(
            f"Unable to parse the JSON value, its not an Array or Object (got {self.value_type})"
        )


class UnsupportedValueType(ConversionError, TypeError):
    """A nested value is outside the JSON type set."""

    def __init__(self, value, path=None):
        self.value_type = type(value).__name__
        self.path = path
        location = f" at '{path}'" if path is not None else ""
        super().__init__(f"Unsupported value of type {self.value_type}{location}")


class RenderFailure(ConversionError):
    """A render override raised for a leaf value."""

    def __init__(self, kind: str, path, error: Exception):
        self.kind = kind
        self.path = path
        location = f" at '{path}'" if path is not None else ""
        super().__init__(f"Error rendering {kind} value{location}: {error}")


class ColumnAlignmentError(ConversionError):
    """A flattened entry names a column that the header list does not contain."""


class ConfigError(ConversionError, ValueError):
    """Invalid conversion options."""


class NestingTooDeep(ConversionError):
    """The value is nested deeper than the interpreter's recursion limit allows."""

    def __init__(self):
        super().__init__("Unable to flatten the JSON value, it is nested too deeply")
