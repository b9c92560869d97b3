"""Path classification — architectural layer and repository structure signals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

UNKNOWN_LAYER = "Unknown Layer"

# Checked in order; the first layer whose marker appears in the path wins.
LAYER_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Domain Layer", ("/domain/", "/entities/", "/models/")),
    ("Application Layer", ("/usecases/", "/application/", "/use-cases/")),
    ("Infrastructure Layer", ("/infrastructure/", "/repositories/", "/adapters/")),
    ("Presentation Layer", ("/presentation/", "/components/", "/pages/", "/views/")),
)

PRESENTATION_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx")

DI_DIRECTORY_MARKERS: tuple[str, ...] = ("dependency", "injection", "container")


def detect_layer(path: str) -> str:
    """Infer the Clean Architecture layer a file belongs to from its path."""
    lowered = "/" + path.lower().lstrip("/")
    for layer, markers in LAYER_MARKERS:
        if any(marker in lowered for marker in markers):
            return layer
    if lowered.endswith(PRESENTATION_EXTENSIONS):
        return "Presentation Layer"
    return UNKNOWN_LAYER


@dataclass(frozen=True, slots=True)
class StructureSignals:
    """Which well-known directories a repository's paths contain."""

    has_components: bool = False
    has_pages: bool = False
    has_utils: bool = False
    has_services: bool = False
    has_hooks: bool = False
    has_domain: bool = False
    has_application: bool = False
    has_infrastructure: bool = False
    has_dependency_injection: bool = False

    @property
    def has_clean_architecture(self) -> bool:
        return self.has_domain and self.has_application and self.has_infrastructure

    def to_dict(self) -> dict[str, bool]:
        return {
            "hasComponents": self.has_components,
            "hasPages": self.has_pages,
            "hasUtils": self.has_utils,
            "hasServices": self.has_services,
            "hasHooks": self.has_hooks,
            "hasCleanArchitecture": self.has_clean_architecture,
            "hasDependencyInjection": self.has_dependency_injection,
        }


def structure_signals(paths: Iterable[str]) -> StructureSignals:
    lowered = ["/" + p.lower().lstrip("/") for p in paths]

    def seen(*needles: str) -> bool:
        return any(n in p for p in lowered for n in needles)

    return StructureSignals(
        has_components=seen("/components/"),
        has_pages=seen("/pages/", "/app/"),
        has_utils=seen("/utils/", "/lib/"),
        has_services=seen("/services/"),
        has_hooks=seen("/hooks/"),
        has_domain=seen("/domain/"),
        has_application=seen("/application/", "/usecases/", "/use-cases/"),
        has_infrastructure=seen("/infrastructure/"),
        has_dependency_injection=seen(*DI_DIRECTORY_MARKERS),
    )
