"""Suggestion generator — map issue patterns to remediation proposals."""

from __future__ import annotations

from typing import Iterable, Sequence

from code_mentor.domain.entities import (
    ArchitectureSuggestion,
    FileAnalysisResult,
    Issue,
    Severity,
)
from code_mentor.domain.rules import react_nextjs, solid_principles

REMOTE_DATA_RULES = frozenset({"direct-http-call", "use-case-data-fetching", "component-http-call"})
CONSTRUCTION_RULES = frozenset({"direct-instantiation", "use-case-creates-dependencies"})
FACTORY_RULES = frozenset({"factory-pattern"})
RESPONSIBILITY_RULES = frozenset({"srp-violation", "god-object"})

LAYERED_SKELETON = """\
src/
  domain/
    entities/          # pure business models
    repositories/      # data access interfaces
    value-objects/
  application/
    use-cases/         # orchestration of business rules
    ports/             # interfaces for external services
  infrastructure/
    repositories/      # repository implementations
    services/          # external APIs
    http/              # configured HTTP client
  presentation/
    components/
    pages/
    hooks/             # adapters from UI to use cases"""

REPOSITORY_PATTERN = ArchitectureSuggestion(
    title="Introduce the Repository Pattern",
    description="Wrap remote data access in repositories so callers never issue HTTP calls directly",
    pattern="Repository Pattern",
    benefit="Decouples business logic from the data source and makes testing with fakes trivial",
    implementation=(
        "1. Define repository interfaces in the domain layer\n"
        "2. Implement them in the infrastructure layer\n"
        "3. Inject the repositories into use cases"
    ),
    example="""\
interface IUserRepository {
  findById(id: string): Promise<User>;
}

class ApiUserRepository implements IUserRepository {
  constructor(private httpClient: HttpClient) {}
  findById(id: string): Promise<User> {
    return this.httpClient.get(`/users/${id}`);
  }
}""",
)

DEPENDENCY_INJECTION = ArchitectureSuggestion(
    title="Inject dependencies instead of constructing them",
    description="Collaborators are created with `new` where they are used",
    pattern="Dependency Injection",
    benefit="Lower coupling, swappable implementations and isolated unit tests",
    implementation=(
        "1. Depend on interfaces in constructors\n"
        "2. Build the object graph in one composition root\n"
        "3. Pass fakes in tests"
    ),
    example="""\
class CreateUserUseCase {
  constructor(private users: IUserRepository) {}
}

// composition root
const useCase = new CreateUserUseCase(new ApiUserRepository(httpClient));""",
)

LAYERED_ARCHITECTURE = ArchitectureSuggestion(
    title="Organise code into Clean Architecture layers",
    description="Critical issues point at responsibilities leaking across layers",
    pattern="Layered Architecture",
    benefit="Dependencies point inwards, so business rules survive framework and API changes",
    implementation=(
        "1. Move business models into domain/\n"
        "2. Put orchestration into application/use-cases\n"
        "3. Keep HTTP, storage and SDKs in infrastructure/\n"
        "4. Let presentation/ depend only on use cases"
    ),
    example=LAYERED_SKELETON,
)

SINGLE_RESPONSIBILITY = ArchitectureSuggestion(
    title="Apply the Single Responsibility Principle",
    description="Split this class or function into smaller units with one reason to change each",
    pattern="Single Responsibility Principle",
    benefit="Code that is easier to maintain and test, with less coupling",
    implementation=(
        "1. Identify the different responsibilities\n"
        "2. Create a focused class or function for each\n"
        "3. Combine them through composition"
    ),
    example="""\
class UserValidator { validate(user) { /* ... */ } }
class UserRepository { save(user) { /* ... */ } }
class UserNotifier { notify(user) { /* ... */ } }

class CreateUserUseCase {
  constructor(validator, repository, notifier) { /* ... */ }
}""",
)


def suggest(issues: Sequence[Issue]) -> list[ArchitectureSuggestion]:
    """Derive remediation proposals from one file's issues."""
    rule_ids = {i.rule_id for i in issues}
    suggestions: list[ArchitectureSuggestion] = []

    if rule_ids & REMOTE_DATA_RULES:
        suggestions.append(REPOSITORY_PATTERN)
    if rule_ids & CONSTRUCTION_RULES and not rule_ids & FACTORY_RULES:
        suggestions.append(DEPENDENCY_INJECTION)
    if any(i.severity is Severity.CRITICAL for i in issues):
        suggestions.append(LAYERED_ARCHITECTURE)
    if rule_ids & RESPONSIBILITY_RULES:
        suggestions.append(SINGLE_RESPONSIBILITY)

    return suggestions


def merge_suggestions(
    groups: Iterable[Iterable[ArchitectureSuggestion]],
) -> list[ArchitectureSuggestion]:
    """Flatten and deduplicate by pattern name; the first occurrence wins."""
    seen: set[str] = set()
    merged: list[ArchitectureSuggestion] = []
    for group in groups:
        for suggestion in group:
            if suggestion.pattern in seen:
                continue
            seen.add(suggestion.pattern)
            merged.append(suggestion)
    return merged


def file_recommendations(result: FileAnalysisResult) -> list[str]:
    """Plain-language next steps for a single analysed file."""
    recs: list[str] = []

    if result.architecture_score < 50:
        recs.append("Architecture needs significant refactoring")
    elif result.architecture_score < 70:
        recs.append("Architecture has room for improvement")

    if result.clean_code_score < 50:
        recs.append("Apply Clean Code principles: descriptive names and small functions")
    elif result.clean_code_score < 70:
        recs.append("Improve readability and simplify long functions")

    if result.summary.critical > 0:
        recs.append(f"Resolve {result.summary.critical} critical issue(s) first")

    solid = sum(1 for i in result.issues if i.category == solid_principles.CATEGORY)
    if solid > 2:
        recs.append("Review the SOLID principles: several violations were detected")

    react = sum(1 for i in result.issues if i.category == react_nextjs.REACT)
    if react > 3:
        recs.append("Optimise React patterns: consider memoization and custom hooks")

    if not recs:
        recs.append("Excellent! The file follows good architecture and clean code practices")
    return recs
