"""Core data structures, language classification and configuration."""

from codestructure.core.config import Config
from codestructure.core.errors import (
    BinaryFileError,
    CodeStructureError,
    ConfigError,
    InputTooLargeError,
    ParserInitializationError,
)
from codestructure.core.languages import LanguageFamily, classify, language_for_path
from codestructure.core.models import ANONYMOUS, CodeStructure, FunctionInfo

__all__ = [
    "ANONYMOUS",
    "BinaryFileError",
    "CodeStructure",
    "CodeStructureError",
    "Config",
    "ConfigError",
    "FunctionInfo",
    "InputTooLargeError",
    "LanguageFamily",
    "ParserInitializationError",
    "classify",
    "language_for_path",
]
