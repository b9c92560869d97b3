"""Architecture advisor — per-project-type Clean Architecture templates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from code_mentor.domain.entities import RepoInfo
from code_mentor.services.file_filter import StructureSignals


class ProjectType(str, Enum):
    WEB = "web"
    API = "api"
    MOBILE = "mobile"
    FULLSTACK = "fullstack"
    LIBRARY = "library"


@dataclass(frozen=True, slots=True)
class ArchitectureTemplate:
    recommended: tuple[str, ...]
    structure: dict[str, Any]
    implementation: tuple[str, ...]
    benefits: tuple[str, ...]
    resources: tuple[str, ...]


_CORE_RESOURCES = (
    "Clean Architecture - Robert C. Martin",
    "Domain-Driven Design - Eric Evans",
)

_FRONTEND_LAYERS: dict[str, Any] = {
    "domain/": {
        "entities/": "Pure business models",
        "repositories/": "Data access interfaces",
        "value-objects/": "Immutable value objects",
    },
    "application/": {
        "use-cases/": "Application use cases",
        "ports/": "Interfaces for external services",
    },
    "infrastructure/": {
        "repositories/": "Repository implementations",
        "services/": "External services (APIs, storage)",
        "http/": "Configured HTTP client",
    },
    "presentation/": {
        "components/": "Reusable React components",
        "pages/": "Next.js pages or app routes",
        "hooks/": "Custom hooks that call use cases",
    },
}

TEMPLATES: dict[ProjectType, ArchitectureTemplate] = {
    ProjectType.WEB: ArchitectureTemplate(
        recommended=(
            "Clean Architecture with separated layers",
            "Repository pattern for API access",
            "Custom hooks as adapters between UI and use cases",
        ),
        structure={"src/": _FRONTEND_LAYERS},
        implementation=(
            "Model business entities in domain/ without framework imports",
            "Expose every user action as a use case in application/",
            "Implement repositories over the HTTP client in infrastructure/",
            "Keep components focused on rendering and delegate to hooks",
        ),
        benefits=(
            "UI can change without touching business rules",
            "Use cases are testable without rendering",
            "Data sources can be swapped behind repositories",
        ),
        resources=(*_CORE_RESOURCES, "Next.js documentation - Project structure"),
    ),
    ProjectType.API: ArchitectureTemplate(
        recommended=(
            "Hexagonal architecture (ports and adapters)",
            "Use cases as the only entry point into the domain",
            "Controllers as thin adapters over use cases",
        ),
        structure={
            "src/": {
                "domain/": {"entities/": "Aggregates and entities", "ports/": "Repository and gateway interfaces"},
                "application/": {"use-cases/": "One class per operation", "dto/": "Input and output shapes"},
                "infrastructure/": {"persistence/": "Database adapters", "http/": "Controllers and routing", "config/": "Environment configuration"},
            }
        },
        implementation=(
            "Define ports in the domain for every external system",
            "Implement adapters in infrastructure/ and wire them in one composition root",
            "Map transport errors to domain errors at the adapter boundary",
        ),
        benefits=(
            "Transport and database can be replaced independently",
            "Business logic is covered by fast unit tests",
        ),
        resources=(*_CORE_RESOURCES, "Hexagonal Architecture - Alistair Cockburn"),
    ),
    ProjectType.MOBILE: ArchitectureTemplate(
        recommended=(
            "Feature modules with Clean Architecture inside each feature",
            "Offline-first repositories with a local cache",
            "State management isolated from views",
        ),
        structure={
            "src/": {
                "features/": {"<feature>/": {"domain/": "Entities and interfaces", "data/": "Repositories and API clients", "ui/": "Screens and components"}},
                "shared/": {"ui/": "Design system", "services/": "Cross-cutting services"},
            }
        },
        implementation=(
            "Split the app into features that own their domain, data and UI",
            "Back repositories with both a remote and a local source",
            "Keep navigation and platform APIs behind services",
        ),
        benefits=(
            "Features can be developed and tested in isolation",
            "The app keeps working with unreliable connectivity",
        ),
        resources=(*_CORE_RESOURCES, "React Native documentation - Architecture"),
    ),
    ProjectType.FULLSTACK: ArchitectureTemplate(
        recommended=(
            "Clean Architecture with separated layers",
            "Shared domain package between client and server",
            "Repository pattern on both sides of the API",
        ),
        structure={
            "packages/": {
                "domain/": "Entities, value objects and interfaces shared by client and server",
                "server/": {"application/": "Use cases", "infrastructure/": "Database and HTTP adapters"},
                "client/": {"src/": _FRONTEND_LAYERS},
            }
        },
        implementation=(
            "Extract shared entities and validation into a domain package",
            "Keep server use cases independent from the web framework",
            "Consume the API on the client through repositories",
        ),
        benefits=(
            "One source of truth for business rules",
            "Client and server evolve behind stable contracts",
        ),
        resources=(*_CORE_RESOURCES, "Next.js documentation - Project structure"),
    ),
    ProjectType.LIBRARY: ArchitectureTemplate(
        recommended=(
            "Small public API surface with internal modules",
            "Strategy and Adapter patterns for extension points",
            "No hidden global state",
        ),
        structure={
            "src/": {
                "index.ts": "Public API exports only",
                "core/": "Framework-independent logic",
                "adapters/": "Integrations with optional dependencies",
                "types/": "Public type definitions",
            },
            "tests/": "Unit tests against the public API",
        },
        implementation=(
            "Export only what consumers need from index.ts",
            "Express extension points as interfaces with default strategies",
            "Keep optional integrations in adapters/",
        ),
        benefits=(
            "Consumers are insulated from internal refactors",
            "Extensions do not require forking the library",
        ),
        resources=(*_CORE_RESOURCES, "Design Patterns - Gamma, Helm, Johnson, Vlissides"),
    ),
}


def migration_steps(signals: StructureSignals) -> list[str]:
    """Next steps that depend on what the repository already has."""
    steps: list[str] = []
    if not signals.has_clean_architecture:
        steps.append("Create domain/, application/ and infrastructure/ directories")
    if not signals.has_services:
        steps.append("Move API calls out of components into services or repositories")
    if not signals.has_hooks:
        steps.append("Introduce custom hooks to connect components with use cases")
    if not signals.has_dependency_injection:
        steps.append("Add a composition root that wires dependencies")
    steps.append("Migrate one feature at a time and cover it with tests")
    return steps


def advise(
    project_type: ProjectType,
    signals: StructureSignals,
    repo_info: RepoInfo,
) -> dict[str, Any]:
    template = TEMPLATES[project_type]
    return {
        "repository": repo_info.full_name,
        "projectType": project_type.value,
        "language": repo_info.language,
        "currentStructure": signals.to_dict(),
        "suggestions": {
            "recommended": list(template.recommended),
            "structure": template.structure,
            "implementation": list(template.implementation),
            "benefits": list(template.benefits),
            "migrationSteps": migration_steps(signals),
        },
        "resources": list(template.resources),
    }
