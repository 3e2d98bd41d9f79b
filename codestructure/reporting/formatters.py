from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import Iterable, List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from codestructure.core.models import CodeStructure

# Line lists longer than this are abbreviated in text output.
MAX_LISTED_LINES = 10


@dataclass(frozen=True)
class FileReport:
    path: str
    structure: CodeStructure


def format_json(reports: Iterable[FileReport], indent: int = 2) -> str:
    reports_list = list(reports)
    data = {
        "summary": {
            "files": len(reports_list),
            "functions": sum(len(r.structure.functions) for r in reports_list),
            "total_lines": sum(r.structure.total_lines for r in reports_list),
        },
        "files": [
            {"path": report.path, **report.structure.to_dict()}
            for report in reports_list
        ],
    }
    return json.dumps(data, indent=indent) + "\n"


def format_text(reports: Iterable[FileReport], color: bool = False, width: int = 100) -> str:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=color, no_color=not color, width=width)
    for report in reports:
        structure = report.structure
        console.print(
            f"[bold]{escape(report.path)}[/bold] ({structure.language.value}, "
            f"{structure.total_lines} lines, complexity {structure.file_cyclomatic_complexity}, "
            f"max nesting {structure.max_nesting_depth})"
        )
        if structure.functions:
            table = Table(show_header=True, header_style="bold")
            table.add_column("Function")
            table.add_column("Lines", justify="right")
            table.add_column("Length", justify="right")
            table.add_column("Params", justify="right")
            table.add_column("Complexity", justify="right")
            table.add_column("Nesting", justify="right")
            for func in structure.functions:
                table.add_row(
                    escape(func.name),
                    f"{func.start_line}-{func.end_line}",
                    str(func.line_count),
                    str(func.parameter_count),
                    str(func.cyclomatic_complexity),
                    str(func.max_nesting_depth),
                )
            console.print(table)
        else:
            console.print("  No functions found")
        console.print(f"  Dead code lines: {_line_list(structure.dead_code_lines)}")
        console.print(f"  Deep nesting lines: {_line_list(structure.deep_nest_lines)}")
        console.print(f"  Weak typing lines: {_line_list(structure.type_any_lines)}")
        console.print()
    return buffer.getvalue()


def _line_list(lines: List[int]) -> str:
    if not lines:
        return "none"
    shown = ", ".join(str(line) for line in lines[:MAX_LISTED_LINES])
    if len(lines) > MAX_LISTED_LINES:
        shown += f" (+{len(lines) - MAX_LISTED_LINES} more)"
    return shown
