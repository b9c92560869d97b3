"""Tests for the pattern catalogue, architecture advisor and rule corpus."""

import pytest

from code_mentor.domain.entities import RepoInfo
from code_mentor.domain.exceptions import ValidationError
from code_mentor.domain.result import Failure, Success
from code_mentor.domain.rules.corpus import RuleCorpus
from code_mentor.services.architecture_advisor import TEMPLATES, ProjectType, advise
from code_mentor.services.file_filter import structure_signals
from code_mentor.services.pattern_catalog import available_patterns, explain, normalize_name


class TestExplain:
    """Test design pattern lookup."""

    @pytest.mark.parametrize(
        "name,key",
        [
            ("repository", "repository"),
            ("Repository Pattern", "repository"),
            ("dependency_injection", "dependency-injection"),
            ("  Factory-pattern ", "factory"),
        ],
    )
    def test_normalize_name(self, name, key):
        assert normalize_name(name) == key

    def test_known_pattern(self):
        found = explain("Strategy")
        assert isinstance(found, Success)
        assert found.value.name == "Strategy Pattern"
        assert found.value.to_dict()["benefits"]

    def test_unknown_pattern_lists_alternatives(self):
        found = explain("visitor")

        assert isinstance(found, Failure)
        assert isinstance(found.error, ValidationError)
        assert found.error.details["available"] == available_patterns()
        assert "repository" in found.error.message

    def test_catalogue_covers_core_patterns(self):
        assert set(available_patterns()) >= {
            "repository",
            "factory",
            "strategy",
            "observer",
            "singleton",
            "adapter",
            "builder",
            "command",
            "dependency-injection",
        }


class TestAdvise:
    """Test project-type architecture templates."""

    def repo_info(self):
        return RepoInfo(name="shop", full_name="acme/shop", default_branch="main", language="TypeScript")

    def test_every_project_type_has_a_template(self):
        assert set(TEMPLATES) == set(ProjectType)

    def test_advice_reflects_current_structure(self):
        signals = structure_signals(["src/components/Nav.tsx", "src/services/api.ts"])

        advice = advise(ProjectType.WEB, signals, self.repo_info())

        assert advice["projectType"] == "web"
        assert advice["currentStructure"]["hasComponents"] is True
        steps = advice["suggestions"]["migrationSteps"]
        assert steps[0] == "Create domain/, application/ and infrastructure/ directories"
        assert not any("Move API calls" in s for s in steps)
        assert advice["resources"]


class TestRuleCorpus:
    """Test the default rule corpus."""

    def test_rule_ids_are_unique(self):
        corpus = RuleCorpus.default()
        total = sum(len(rules) for _, rules in corpus)
        assert len(corpus) == total

    def test_rules_carry_their_category(self):
        for category, rules in RuleCorpus.default():
            assert all(rule.category == category for rule in rules)

    def test_lookup_by_design_pattern(self):
        corpus = RuleCorpus.default()
        assert "direct-instantiation" in [
            r.rule_id for r in corpus.by_design_pattern("dependency injection")
        ]
        assert corpus.get("no-such-rule") is None
