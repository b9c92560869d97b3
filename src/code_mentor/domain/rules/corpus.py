"""Immutable rule corpus grouped by category."""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Iterator, Mapping

from code_mentor.domain.entities import Rule
from code_mentor.domain.rules import clean_architecture, design_patterns, react_nextjs, solid_principles


class RuleCorpus:
    """Category → rules mapping, built once and never mutated afterwards."""

    def __init__(self, categories: Mapping[str, tuple[Rule, ...]]) -> None:
        frozen: dict[str, tuple[Rule, ...]] = {}
        for category, rules in categories.items():
            frozen[category] = tuple(
                r if r.category == category else _with_category(r, category) for r in rules
            )
        self._categories = MappingProxyType(frozen)
        self._by_id = MappingProxyType(
            {r.rule_id: r for rules in frozen.values() for r in rules}
        )

    @classmethod
    def default(cls) -> RuleCorpus:
        return cls(
            {
                solid_principles.CATEGORY: solid_principles.RULES,
                clean_architecture.DOMAIN: clean_architecture.DOMAIN_RULES,
                clean_architecture.USE_CASE: clean_architecture.USE_CASE_RULES,
                clean_architecture.INFRASTRUCTURE: clean_architecture.INFRASTRUCTURE_RULES,
                clean_architecture.PRESENTATION: clean_architecture.PRESENTATION_RULES,
                react_nextjs.REACT: react_nextjs.REACT_RULES,
                react_nextjs.NEXTJS: react_nextjs.NEXTJS_RULES,
                react_nextjs.PERFORMANCE: react_nextjs.PERFORMANCE_RULES,
                design_patterns.DESIGN: design_patterns.DESIGN_RULES,
                design_patterns.ANTI: design_patterns.ANTI_RULES,
            }
        )

    @property
    def categories(self) -> Mapping[str, tuple[Rule, ...]]:
        return self._categories

    def __iter__(self) -> Iterator[tuple[str, tuple[Rule, ...]]]:
        return iter(self._categories.items())

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, rule_id: str) -> Rule | None:
        return self._by_id.get(rule_id)

    def by_design_pattern(self, name: str) -> list[Rule]:
        """Rules whose ``design_pattern`` mentions ``name`` (case-insensitive)."""
        needle = name.lower()
        return [
            r for r in self._by_id.values()
            if r.design_pattern and needle in r.design_pattern.lower()
        ]


def _with_category(rule: Rule, category: str) -> Rule:
    return replace(rule, category=category)
