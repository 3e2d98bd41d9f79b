"""
Shared fixtures for the codestructure tests.
"""

import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def write_file(tmp_path):
    """Write a file below the test's temporary directory and return its path."""
    def _write(relative, content, binary=False):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if binary:
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def typescript_add():
    return "function add(a, b) { if (a > 0) { return a + b; } return 0; }"


@pytest.fixture
def go_sum():
    return "package main\n\nfunc sum(a int, b int) int {\n\treturn a + b\n}"
