"""
Tests for the line-based analyzer (Python, Rust, Go, Java, C#).
"""

import textwrap

from codestructure.analysis import analyze_structure
from codestructure.analysis.patterns import LanguagePatterns, patterns_for
from codestructure.analysis.structural import (
    analyze_structurally,
    compute_brace_nesting,
    compute_complexity,
    extract_brace_functions,
)
from codestructure.core.languages import LanguageFamily


def dedent(text):
    return textwrap.dedent(text)


class TestBraceFunctions:
    """Tests for function extraction in brace-delimited languages."""

    def test_go_sum(self, go_sum):
        """Test a minimal Go function."""
        result = analyze_structure(go_sum, "go")

        assert result.language == LanguageFamily.GO
        assert result.total_lines == 5
        assert len(result.functions) == 1
        func = result.functions[0]
        assert func.name == "sum"
        assert func.parameter_count == 2
        assert func.start_line == 3
        assert func.end_line == 5
        assert func.line_count == 3
        assert func.cyclomatic_complexity == 1
        assert func.max_nesting_depth == 0
        assert result.dead_code_lines == []
        assert result.file_cyclomatic_complexity == 1

    def test_java_method(self):
        """Test a Java method with a logical operator in its condition."""
        code = dedent("""\
            public class Greeter {
                public String greet(String name, int times) {
                    if (name == null || name.isEmpty()) {
                        return "nobody";
                    }
                    return name;
                }
            }""")
        result = analyze_structure(code, "java")

        assert [f.name for f in result.functions] == ["greet"]
        func = result.functions[0]
        assert func.parameter_count == 2
        assert (func.start_line, func.end_line, func.line_count) == (2, 7, 6)
        assert func.cyclomatic_complexity == 3
        assert func.max_nesting_depth == 1
        assert result.dead_code_lines == []

    def test_csharp_brace_on_next_line(self):
        """Test a C# method whose opening brace sits on its own line."""
        code = dedent("""\
            public class Repo
            {
                public async Task<object> Load(int id, string name)
                {
                    dynamic payload = Fetch(id) ?? Default();
                    return payload;
                }
            }""")
        result = analyze_structure(code, "c#")

        assert len(result.functions) == 1
        func = result.functions[0]
        assert func.name == "Load"
        assert func.parameter_count == 2
        assert (func.start_line, func.end_line, func.line_count) == (3, 7, 5)
        assert func.cyclomatic_complexity == 2
        assert result.type_any_lines == [3, 5]

    def test_rust_match_arms(self):
        """Test that match arms and guards count as decision points."""
        code = dedent("""\
            fn classify(n: i32) -> &'static str {
                match n {
                    0 => "zero",
                    _ if n < 0 => "negative",
                    _ => "positive",
                }
            }""")
        result = analyze_structure(code, "rust")

        func = result.functions[0]
        assert func.name == "classify"
        assert func.parameter_count == 1
        assert func.cyclomatic_complexity == 6
        assert func.max_nesting_depth == 1

    def test_declaration_without_body_is_discarded(self):
        """Test that interface methods with no body are not reported."""
        code = dedent("""\
            interface Runner {
                void run();
            }""")
        result = analyze_structure(code, "java")
        assert result.functions == []

    def test_control_statement_is_not_a_function(self):
        """Test that `else if (...) {` is never read as a signature."""
        lines = ["else if (ready) {", "    go();", "}"]
        assert extract_brace_functions(lines, patterns_for(LanguageFamily.JAVA)) == []

    def test_java_synchronized_method(self):
        """Test that a leading `synchronized` modifier keeps the method."""
        code = dedent("""\
            class Counter {
                synchronized void inc(int by) {
                    synchronized (lock) {
                        count += by;
                    }
                }
            }""")
        result = analyze_structure(code, "java")

        assert [f.name for f in result.functions] == ["inc"]
        assert result.functions[0].parameter_count == 1
        assert result.functions[0].max_nesting_depth == 1

    def test_synchronized_block_is_not_a_function(self):
        """Test that a `synchronized (...)` statement is never a signature."""
        lines = ["synchronized (lock) {", "    tick();", "}"]
        assert extract_brace_functions(lines, patterns_for(LanguageFamily.JAVA)) == []

    def test_csharp_new_modifier(self):
        """Test that a C# member hidden with `new` is still reported."""
        code = dedent("""\
            class Child : Base
            {
                new public void Run(int x)
                {
                    Work(x);
                }
            }""")
        result = analyze_structure(code, "csharp")

        assert [f.name for f in result.functions] == ["Run"]
        func = result.functions[0]
        assert func.parameter_count == 1
        assert (func.start_line, func.end_line) == (3, 6)

    def test_object_creation_is_not_a_function(self):
        """Test that `new Foo(...)` statements are not signatures."""
        lines = ["new Foo(a, b);", "{", "}"]
        assert extract_brace_functions(lines, patterns_for(LanguageFamily.CSHARP)) == []

    def test_unterminated_body_runs_to_end_of_file(self):
        """Test that a body missing its closing brace ends on the last line."""
        code = "fn broken() {\n    let x = 1;\n"
        result = analyze_structure(code, "rs")

        func = result.functions[0]
        assert func.name == "broken"
        assert func.start_line == 1
        assert func.end_line == 3
        assert func.end_line <= result.total_lines

    def test_brace_nesting_excludes_body_brace(self):
        """Test that the function's own braces are not counted as nesting."""
        assert compute_brace_nesting(["fn a() {", "}"]) == 0
        assert compute_brace_nesting(["fn a() {", "  if x {", "  }", "}"]) == 1


class TestPythonFunctions:
    """Tests for indentation-based function extraction."""

    def test_receiver_parameters_excluded(self):
        """Test that self and cls are not counted as parameters."""
        code = dedent("""\
            class Service:
                def handle(self, request, timeout=30):
                    return request

                @classmethod
                def build(cls):
                    return cls()
            """)
        result = analyze_structure(code, "python")

        assert [f.name for f in result.functions] == ["handle", "build"]
        handle, build = result.functions
        assert handle.parameter_count == 2
        assert build.parameter_count == 0
        assert (handle.start_line, handle.end_line, handle.line_count) == (2, 4, 2)
        assert (build.start_line, build.end_line, build.line_count) == (6, 8, 2)

    def test_nested_and_async_functions(self):
        """Test that nested and async definitions are all reported."""
        code = dedent("""\
            async def outer():
                def inner(x):
                    return x
                return inner
            """)
        result = analyze_structure(code, "py")

        assert [f.name for f in result.functions] == ["outer", "inner"]
        assert result.functions[1].parameter_count == 1

    def test_decision_points(self):
        """Test that if/for/while and boolean operators add complexity."""
        code = dedent("""\
            def check(a, b):
                if a and b or not a:
                    return True
                for i in range(3):
                    while i:
                        i -= 1
                return False
            """)
        result = analyze_structure(code, "python")

        func = result.functions[0]
        assert func.cyclomatic_complexity == 6
        assert func.max_nesting_depth == 3
        assert result.file_cyclomatic_complexity == 6
        assert result.max_nesting_depth == 3

    def test_comment_lines_do_not_count(self):
        """Test that decision keywords inside comments are ignored."""
        code = dedent("""\
            def quiet():
                # if this or that
                return None
            """)
        result = analyze_structure(code, "python")
        assert result.functions[0].cyclomatic_complexity == 1


class TestDeadCode:
    """Tests for unreachable statement detection."""

    def test_python_deeper_line_after_return(self):
        """Test that only lines indented past the terminal are flagged."""
        code = dedent("""\
            def f(x):
                if x:
                    return 1
                        unreachable()
                    print("after")
                return 2
            """)
        result = analyze_structure(code, "python")

        assert result.dead_code_lines == [4]
        func = result.functions[0]
        assert func.cyclomatic_complexity == 2
        assert func.max_nesting_depth == 3
        assert (func.start_line, func.end_line, func.line_count) == (1, 7, 6)

    def test_java_statement_after_return(self):
        """Test a statement following return in the same scope."""
        code = dedent("""\
            class A {
                void run() {
                    return;
                    System.out.println("never");
                }
            }""")
        result = analyze_structure(code, "java")

        assert result.dead_code_lines == [4]
        assert result.functions[0].name == "run"
        assert result.functions[0].parameter_count == 0

    def test_go_break_inside_loop(self):
        """Test that the closing brace ends the unreachable region."""
        code = dedent("""\
            func g() {
            \tfor {
            \t\tbreak
            \t\tskipped()
            \t}
            \tafter()
            }""")
        result = analyze_structure(code, "go")
        assert result.dead_code_lines == [4]

    def test_terminal_sharing_a_line_with_a_closing_brace(self):
        """Test that `return 1 }` marks the rest of the enclosing scope."""
        code = dedent("""\
            func f(x int) int {
            \tif x > 0 {
            \t\treturn 1 }
            \ty()
            \treturn 2
            }""")
        result = analyze_structure(code, "go")
        assert result.dead_code_lines == [4, 5]

    def test_terminal_opening_a_composite_literal(self):
        """Test that the fields of a returned literal are flagged."""
        code = dedent("""\
            func make() P {
            \treturn P{
            \t\tX: 1,
            \t}
            }""")
        result = analyze_structure(code, "go")
        assert result.dead_code_lines == [3]


class TestDeepNesting:
    """Tests for deep nesting detection."""

    def test_go_six_nested_blocks(self):
        """Test that lines beyond brace depth five are flagged."""
        code = dedent("""\
            func deep() {
            \tif a {
            \t\tif b {
            \t\t\tif c {
            \t\t\t\tif d {
            \t\t\t\t\tif e {
            \t\t\t\t\t\twork()
            \t\t\t\t\t}
            \t\t\t\t}
            \t\t\t}
            \t\t}
            \t}
            }""")
        result = analyze_structure(code, "go")

        assert result.deep_nest_lines == [6, 7]
        func = result.functions[0]
        assert func.cyclomatic_complexity == 6
        assert func.max_nesting_depth == 5

    def test_python_twenty_space_indent(self):
        """Test that five indentation levels are flagged."""
        code = dedent("""\
            def f():
                if a:
                    if b:
                        if c:
                            if d:
                                deep()
            """)
        result = analyze_structure(code, "python")
        assert result.deep_nest_lines == [6]


class TestWeakTypes:
    """Tests for weak typing detection."""

    def test_python_any_and_cast(self):
        """Test Any annotations and cast() calls, skipping comments."""
        code = dedent("""\
            from typing import Any

            def f(x: Any) -> int:
                # Any in a comment
                return cast(int, x)
            """)
        result = analyze_structure(code, "python")

        assert result.type_any_lines == [1, 3, 5]
        assert result.functions[0].parameter_count == 1

    def test_rust_unsafe_block(self):
        """Test that an unsafe block is reported on its line."""
        code = dedent("""\
            fn read(ptr: *const u8) -> u8 {
                unsafe { *ptr }
            }""")
        result = analyze_structure(code, "rust")

        assert result.type_any_lines == [2]
        func = result.functions[0]
        assert func.name == "read"
        assert func.parameter_count == 1
        assert func.max_nesting_depth == 1


    def test_rust_line_starting_with_dereference(self):
        """Test that a line beginning with `*` is still scanned."""
        code = dedent("""\
            fn raw(p: &u8) -> *mut u8 {
                let q = &p;
                *q as *const u8 as *mut u8
            }""")
        result = analyze_structure(code, "rust")
        assert result.type_any_lines == [3]


class TestMissingPatterns:
    """Tests for degraded behaviour when a pattern is absent."""

    def test_complexity_without_decision_pattern(self):
        """Test that complexity falls back to 1."""
        assert compute_complexity(["if x:", "    y()"], None) == 1

    def test_empty_pattern_table(self, monkeypatch):
        """Test that a family with no usable patterns yields an empty result."""
        empty = LanguagePatterns(
            function=None,
            decision=None,
            terminal=None,
            weak_type=None,
            comment_prefixes=("#",),
        )
        monkeypatch.setattr(
            "codestructure.analysis.structural.patterns_for", lambda family: empty
        )
        result = analyze_structurally("def f():\n    return 1\n    x()\n", LanguageFamily.PYTHON)

        assert result.functions == []
        assert result.file_cyclomatic_complexity == 1
        assert result.dead_code_lines == []
        assert result.type_any_lines == []
