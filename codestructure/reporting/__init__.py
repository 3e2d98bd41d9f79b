"""Output formatters for structural analysis results."""

from codestructure.reporting.formatters import FileReport, format_json, format_text

__all__ = [
    "FileReport",
    "format_json",
    "format_text",
]
