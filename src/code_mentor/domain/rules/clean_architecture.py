"""Rules for the four Clean Architecture layers."""

from __future__ import annotations

import re

from code_mentor.domain.entities import Rule, Severity

DOMAIN = "domainLayer"
USE_CASE = "useCaseLayer"
INFRASTRUCTURE = "infrastructureLayer"
PRESENTATION = "presentationLayer"

_CLEAN_ARCHITECTURE_BOOKS = (
    "Clean Architecture - Robert C. Martin",
    "Domain-Driven Design - Eric Evans",
)

# ── Domain ──────────────────────────────────────────────────────────────────

DOMAIN_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="entity-without-validation",
        category=DOMAIN,
        pattern=re.compile(r"class\s+\w+\s*\{[^}]*constructor[^}]*\}[^}]*\}"),
        issue="Domain entity without validation",
        recommendation="Entities should validate their state in the constructor",
        severity=Severity.HIGH,
        explanation=(
            "Domain entities must be self-validating so they can never exist "
            "in an invalid state."
        ),
        design_pattern="Domain Entity Pattern",
        architecture_layer="Domain Layer (Entities)",
        code_example="""\
// Bad
class User {
  constructor(public email: string, public age: number) {}
}

// Good
class User {
  private constructor(readonly email: string, readonly age: number) {}
  static create(email: string, age: number): User {
    if (!email.includes('@')) throw new Error('Invalid email');
    if (age < 0) throw new Error('Invalid age');
    return new User(email, age);
  }
}""",
        resources=_CLEAN_ARCHITECTURE_BOOKS,
    ),
    Rule(
        rule_id="domain-interface",
        category=DOMAIN,
        pattern=re.compile(r"export\s+(?:interface|type)\s+\w+(?!Props|State)"),
        issue="Domain interface detected",
        recommendation="Make sure domain interfaces live in the innermost layer",
        severity=Severity.INFO,
        explanation=(
            "Domain contracts belong to the innermost layer and must not depend "
            "on frameworks."
        ),
        architecture_layer="Domain Layer",
    ),
    Rule(
        rule_id="entity-external-dependency",
        category=DOMAIN,
        pattern=re.compile(
            r"class\s+\w+(?:Entity|Model|Domain)\s*\{[^}]*(?:import|require)[^}]*\}",
            re.DOTALL,
        ),
        issue="Domain entity with external dependencies",
        recommendation="Domain entities must not depend on external libraries",
        severity=Severity.CRITICAL,
        explanation=(
            "The domain must stay pure: no frameworks, libraries or "
            "persistence details."
        ),
        architecture_layer="Domain Layer",
    ),
)

# ── Application (use cases) ─────────────────────────────────────────────────

USE_CASE_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="custom-hook",
        category=USE_CASE,
        pattern=re.compile(r"export\s+(?:function|const)\s+use\w+"),
        issue="Custom hook detected",
        recommendation="Hooks should only coordinate use cases, not hold business logic",
        severity=Severity.MEDIUM,
        explanation=(
            "Hooks are UI adapters. Business rules belong in plain use-case "
            "classes that do not depend on React."
        ),
        design_pattern="Use Case Pattern",
        architecture_layer="Application Layer (Use Cases)",
        resources=(
            "The Clean Architecture - Uncle Bob",
            "Hexagonal Architecture - Alistair Cockburn",
        ),
    ),
    Rule(
        rule_id="use-case-data-fetching",
        category=USE_CASE,
        pattern=re.compile(
            r"async\s+function\s+\w+\([^)]*\)\s*\{[^}]*(?:fetch|axios)[^}]*\}"
        ),
        issue="Data access mixed into a use case",
        recommendation="Move data retrieval into a Repository and keep the use case orchestrating",
        severity=Severity.HIGH,
        explanation=(
            "Use cases orchestrate business logic; they should not issue HTTP "
            "calls themselves."
        ),
        design_pattern="Repository Pattern",
        architecture_layer="Application Layer",
    ),
    Rule(
        rule_id="use-case-creates-dependencies",
        category=USE_CASE,
        pattern=re.compile(r"class\s+\w+UseCase\s*\{[^}]*new\s+\w+", re.DOTALL),
        issue="Use case creating its own dependencies",
        recommendation="Use cases should receive their dependencies through injection",
        severity=Severity.HIGH,
        explanation=(
            "A use case that constructs its collaborators violates the "
            "dependency inversion principle."
        ),
        architecture_layer="Application Layer",
        code_example="""\
// Bad
class CreateUserUseCase {
  async execute(data: UserData) {
    const repository = new UserRepository();
    return repository.save(data);
  }
}

// Good
class CreateUserUseCase {
  constructor(private userRepository: IUserRepository) {}
  async execute(data: UserData) { return this.userRepository.save(data); }
}""",
    ),
)

# ── Infrastructure ──────────────────────────────────────────────────────────

INFRASTRUCTURE_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="repository-implementation",
        category=INFRASTRUCTURE,
        pattern=re.compile(r"class\s+\w+Repository\s+(?:implements|extends)"),
        issue="Repository detected",
        recommendation="Repository pattern implemented correctly",
        severity=Severity.GOOD,
        explanation=(
            "Repositories abstract data access so the source can change "
            "without touching business logic."
        ),
        design_pattern="Repository Pattern",
        architecture_layer="Infrastructure Layer",
    ),
    Rule(
        rule_id="direct-http-call",
        category=INFRASTRUCTURE,
        pattern=re.compile(r"fetch\(|axios\."),
        issue="Direct HTTP call",
        recommendation="Wrap HTTP calls in a repository or service",
        severity=Severity.HIGH,
        explanation=(
            "Calling APIs directly couples code to the transport. Repositories "
            "abstract the data source."
        ),
        code_example="""\
// Bad
const getUsers = async () => (await fetch('/api/users')).json();

// Good
class UserApiRepository implements IUserRepository {
  constructor(private httpClient: IHttpClient) {}
  getAll(): Promise<User[]> { return this.httpClient.get<User[]>('/users'); }
}""",
    ),
    Rule(
        rule_id="direct-browser-storage",
        category=INFRASTRUCTURE,
        pattern=re.compile(r"localStorage\.|sessionStorage\."),
        issue="Direct browser storage access",
        recommendation="Create a storage service to abstract local persistence",
        severity=Severity.MEDIUM,
        explanation=(
            "Touching the storage API directly ties code to the browser; a "
            "service lets the implementation change."
        ),
        architecture_layer="Infrastructure Layer",
    ),
)

# ── Presentation ────────────────────────────────────────────────────────────

PRESENTATION_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="large-component",
        category=PRESENTATION,
        pattern=re.compile(r"function\s+\w+Component\s*\([^)]*\)\s*\{[\s\S]{200,}\}"),
        issue="Very large component",
        recommendation="Split the component into smaller parts using composition",
        severity=Severity.HIGH,
        explanation=(
            "Large components are hard to maintain and test. Apply single "
            "responsibility through composition."
        ),
        design_pattern="Composite Pattern",
        architecture_layer="Presentation Layer",
    ),
    Rule(
        rule_id="component-http-call",
        category=PRESENTATION,
        pattern=re.compile(r"function\s+\w+\([^)]*\)\s*\{[^}]*(?:fetch|axios)[^}]*\}"),
        issue="Component making direct HTTP calls",
        recommendation="Move HTTP calls into custom hooks or services",
        severity=Severity.HIGH,
        explanation=(
            "Components should focus on rendering; API calls belong to the "
            "application layer."
        ),
        architecture_layer="Presentation Layer",
    ),
)
