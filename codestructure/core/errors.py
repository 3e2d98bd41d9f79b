"""
Exception types raised by codestructure.

Analysis itself never raises; these cover configuration, file intake and
parser start-up.
"""


class CodeStructureError(Exception):
    """Base class for all codestructure errors."""


class ConfigError(CodeStructureError):
    """Raised when a configuration file cannot be understood."""


class ParserInitializationError(CodeStructureError):
    """Raised when a tree-sitter grammar cannot be loaded."""


class InputTooLargeError(CodeStructureError):
    """Raised when a source file exceeds the configured size limit."""

    def __init__(self, path: str, size: int, limit: int):
        self.path = path
        self.size = size
        self.limit = limit
        super().__init__(f"{path} is {size} bytes, above the {limit} byte limit")


class BinaryFileError(CodeStructureError):
    """Raised when a file looks binary rather than source text."""
