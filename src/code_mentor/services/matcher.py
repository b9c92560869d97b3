"""Rule matcher — applies the rule corpus to one file's text.

Matching is purely textual.  Scoped rules look only inside brace-delimited
regions opened by their ``scope`` expression; the brace scan is naive, so
braces inside string literals or comments shift region boundaries.  Regions
of nested classes overlap, so a match inside an inner class also counts
towards every enclosing class.
"""

from __future__ import annotations

import logging

from code_mentor.domain.entities import AnalysisOptions, Issue, Rule, Severity
from code_mentor.domain.rules.corpus import RuleCorpus

logger = logging.getLogger(__name__)


def brace_region(content: str, open_index: int) -> str:
    """Return the text between the brace at ``open_index`` and its partner.

    An unbalanced region runs to the end of ``content``.
    """
    depth = 0
    for i in range(open_index, len(content)):
        ch = content[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return content[open_index + 1 : i]
    return content[open_index + 1 :]


def count_matches(rule: Rule, content: str) -> int:
    """Number of times ``rule`` matches ``content`` (before weighting)."""
    if rule.scope is None:
        count = sum(1 for _ in rule.pattern.finditer(content))
        return count if count >= rule.min_matches else 0

    total = 0
    for scope in rule.scope.finditer(content):
        brace = content.rfind("{", scope.start(), scope.end())
        if brace == -1:
            brace = content.find("{", scope.end())
            if brace == -1:
                continue
        in_region = sum(1 for _ in rule.pattern.finditer(brace_region(content, brace)))
        if in_region >= rule.min_matches:
            total += in_region
    return total


def issue_from_rule(rule: Rule, occurrences: int, layer: str) -> Issue:
    return Issue(
        category=rule.category,
        issue=rule.issue,
        recommendation=rule.recommendation,
        severity=rule.severity,
        occurrences=occurrences,
        rule_id=rule.rule_id,
        explanation=rule.explanation,
        design_pattern=rule.design_pattern,
        architecture_layer=rule.architecture_layer or layer,
        code_example=rule.code_example,
        resources=rule.resources,
    )


class RuleMatcher:
    """Evaluates every enabled rule of a corpus against a file."""

    def __init__(self, corpus: RuleCorpus) -> None:
        self._corpus = corpus

    @property
    def corpus(self) -> RuleCorpus:
        return self._corpus

    def match(self, content: str, layer: str, options: AnalysisOptions) -> list[Issue]:
        issues: list[Issue] = []
        enabled = options.enabled_categories

        for category, rules in self._corpus:
            if enabled is not None and category not in enabled:
                continue
            for rule in rules:
                if rule.severity is Severity.GOOD and not options.include_good_practices:
                    continue
                try:
                    count = count_matches(rule, content)
                except Exception as exc:
                    # skip the rule, keep the file
                    logger.warning(
                        "Rule %s (%s) failed: %s", rule.rule_id, category, exc
                    )
                    continue
                if count > 0:
                    issues.append(
                        issue_from_rule(rule, count * rule.occurrence_weight, layer)
                    )

        return issues
