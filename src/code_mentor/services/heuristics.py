"""Fixed clean-code heuristics run alongside the rule corpus."""

from __future__ import annotations

import re

from code_mentor.domain.entities import Issue, Severity
from code_mentor.services.matcher import brace_region

CATEGORY = "cleanCode"

SHORT_NAME_RE = re.compile(r"\b[a-z]\b(?!\s*[=>:|,)\]])")
SHORT_NAME_THRESHOLD = 5

FUNCTION_HEADER_RE = re.compile(
    r"(?:function\s+\w+\s*\([^)]*\)"
    r"|const\s+\w+\s*=\s*(?:async\s*)?\([^)]*\)\s*=>"
    r"|(?:async\s+)?function\s*\([^)]*\))\s*\{"
)
LONG_FUNCTION_LINES = 25
VERY_LONG_FUNCTION_LINES = 50

COMMENT_RE = re.compile(r"//.+|/\*[\s\S]*?\*/")
COMMENT_RATIO = 0.3
COMMENT_MIN = 10

MAGIC_NUMBER_RE = re.compile(r"\b\d{2,}\b(?![.]\d)")
ALLOWED_NUMBERS = frozenset({"100", "200", "300", "400", "404", "500"})
MAGIC_NUMBER_THRESHOLD = 3


def short_identifiers(content: str) -> list[Issue]:
    found = SHORT_NAME_RE.findall(content)
    if len(found) <= SHORT_NAME_THRESHOLD:
        return []
    return [
        Issue(
            category=CATEGORY,
            issue="Single-letter variable names",
            recommendation="Use descriptive names that reveal intent",
            severity=Severity.MEDIUM,
            occurrences=len(found),
            rule_id="short-identifiers",
            explanation="Code is read far more often than written. Names should reveal intent.",
            code_example="""\
// Bad
const u = getUser();
const d = new Date();

// Good
const currentUser = getUser();
const createdAt = new Date();""",
        )
    ]


def function_lengths(content: str) -> list[Issue]:
    """One issue per function whose header-to-closing-brace span is too long."""
    issues: list[Issue] = []
    for header in FUNCTION_HEADER_RE.finditer(content):
        body = brace_region(content, header.end() - 1)
        lines = content[header.start() : header.end()].count("\n") + body.count("\n") + 1
        if lines <= LONG_FUNCTION_LINES:
            continue
        issues.append(
            Issue(
                category=CATEGORY,
                issue=f"Function with {lines} lines",
                recommendation="Functions should do one thing. Split it into smaller functions",
                severity=Severity.HIGH if lines > VERY_LONG_FUNCTION_LINES else Severity.MEDIUM,
                occurrences=1,
                rule_id="long-function",
                explanation="A function should fit on one screen and do one thing well.",
            )
        )
    return issues


def comment_density(content: str) -> list[Issue]:
    comments = len(COMMENT_RE.findall(content))
    code_lines = sum(
        1
        for line in content.splitlines()
        if line.strip() and not line.strip().startswith("//")
    )
    if comments <= code_lines * COMMENT_RATIO or comments <= COMMENT_MIN:
        return []
    return [
        Issue(
            category=CATEGORY,
            issue="Too many comments",
            recommendation="Code should explain itself. Refactor instead of commenting",
            severity=Severity.LOW,
            occurrences=comments,
            rule_id="comment-density",
            explanation="Comments that restate the code go stale. Prefer self-explanatory names.",
        )
    ]


def magic_numbers(content: str) -> list[Issue]:
    found = [n for n in MAGIC_NUMBER_RE.findall(content) if n not in ALLOWED_NUMBERS]
    if len(found) <= MAGIC_NUMBER_THRESHOLD:
        return []
    return [
        Issue(
            category=CATEGORY,
            issue="Magic numbers detected",
            recommendation="Use named constants",
            severity=Severity.MEDIUM,
            occurrences=len(found),
            rule_id="magic-numbers",
            code_example="""\
// Bad
setTimeout(callback, 3600000);

// Good
const ONE_HOUR_MS = 60 * 60 * 1000;
setTimeout(callback, ONE_HOUR_MS);""",
        )
    ]


HEURISTICS = (short_identifiers, function_lengths, comment_density, magic_numbers)


def run_heuristics(content: str) -> list[Issue]:
    issues: list[Issue] = []
    for heuristic in HEURISTICS:
        issues.extend(heuristic(content))
    return issues
