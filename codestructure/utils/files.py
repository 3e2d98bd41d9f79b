from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from codestructure.core.errors import BinaryFileError, InputTooLargeError
from codestructure.core.languages import LanguageFamily, language_for_path

logger = logging.getLogger(__name__)

BINARY_SNIFF_BYTES = 1024


def is_binary(data: bytes) -> bool:
    return b"\x00" in data[:BINARY_SNIFF_BYTES]


def read_source(path: str, max_bytes: int, oversize: str = "truncate") -> str:
    """
    Read a source file as text.

    Files above ``max_bytes`` are cut to the limit when ``oversize`` is
    "truncate" and rejected with InputTooLargeError when it is "skip".
    """
    data = Path(path).read_bytes()
    if is_binary(data):
        raise BinaryFileError(f"{path} looks like a binary file")
    if len(data) > max_bytes:
        if oversize != "truncate":
            raise InputTooLargeError(path, len(data), max_bytes)
        logger.warning("Truncating %s from %d to %d bytes", path, len(data), max_bytes)
        data = data[:max_bytes]
    return data.decode("utf-8", errors="replace")


def iter_source_files(
    root: str,
    enabled_languages: set[LanguageFamily],
    ignored_dirs: Optional[set[str]] = None,
) -> Iterable[str]:
    root_path = Path(root)
    if root_path.is_file():
        yield str(root_path)
        return
    ignored = ignored_dirs or set()
    for path in sorted(root_path.rglob("*")):
        if not path.is_file():
            continue
        if any(part in ignored for part in path.relative_to(root_path).parts):
            continue
        language = language_for_path(str(path))
        if language is None or language not in enabled_languages:
            continue
        yield str(path)
