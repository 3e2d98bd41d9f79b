"""
Utility functions for reading source files.
"""

from codestructure.utils.files import is_binary, iter_source_files, read_source

__all__ = [
    "is_binary",
    "iter_source_files",
    "read_source",
]
