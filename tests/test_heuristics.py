"""Tests for the clean-code heuristics."""

from code_mentor.domain.entities import Severity
from code_mentor.services.heuristics import (
    comment_density,
    function_lengths,
    magic_numbers,
    run_heuristics,
    short_identifiers,
)


def function_with_lines(count: int) -> str:
    body = "\n".join(f"  total += step{i};" for i in range(count - 2))
    return f"function accumulate(step) {{\n{body}\n}}\n"


class TestShortIdentifiers:
    """Test single-letter name detection."""

    def test_below_threshold(self):
        assert short_identifiers("let q; let w;") == []

    def test_above_threshold(self):
        issues = short_identifiers("let q; let w; let e; let r; let t; let y;")
        assert len(issues) == 1
        assert issues[0].occurrences == 6
        assert issues[0].severity is Severity.MEDIUM

    def test_assignments_are_not_counted(self):
        assert short_identifiers("a = 1; b = 2; c = 3; d = 4; e = 5; f = 6;") == []


class TestFunctionLengths:
    """Test long function detection via brace scanning."""

    def test_short_function_ignored(self):
        assert function_lengths(function_with_lines(10)) == []

    def test_long_function_is_medium(self):
        issues = function_lengths(function_with_lines(30))
        assert len(issues) == 1
        assert issues[0].issue == "Function with 30 lines"
        assert issues[0].severity is Severity.MEDIUM

    def test_very_long_function_is_high(self):
        issues = function_lengths(function_with_lines(60))
        assert issues[0].severity is Severity.HIGH

    def test_arrow_functions_are_measured(self):
        body = "\n".join("  work();" for _ in range(40))
        content = f"const run = async () => {{\n{body}\n}};\n"
        issues = function_lengths(content)
        assert issues and issues[0].issue == "Function with 42 lines"


class TestCommentDensity:
    """Test comment-heavy code detection."""

    def test_few_comments_ignored(self):
        assert comment_density("// one\nconst x = 1;\n") == []

    def test_comment_heavy_file(self):
        content = "\n".join(f"// note {i}\nrun({i});" for i in range(12))
        issues = comment_density(content)
        assert len(issues) == 1
        assert issues[0].occurrences == 12
        assert issues[0].severity is Severity.LOW


class TestMagicNumbers:
    """Test unexplained numeric literal detection."""

    def test_http_statuses_are_allowed(self):
        assert magic_numbers("if (s === 200 || s === 404 || s === 500 || s === 400) {}") == []

    def test_many_literals_reported(self):
        issues = magic_numbers("wait(3600); retry(42); pad(16); timeout(86400);")
        assert len(issues) == 1
        assert issues[0].occurrences == 4


class TestRunHeuristics:
    def test_combines_all_heuristics(self):
        content = function_with_lines(30) + "wait(3600); retry(42); pad(16); timeout(86400);"
        rule_ids = {i.rule_id for i in run_heuristics(content)}
        assert rule_ids == {"long-function", "magic-numbers"}
