"""Data models for the license resolver engine."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

UNKNOWN_LICENSE = "unknown"


@dataclass(frozen=True)
class ManifestFile:
    """A discovered ``packages.config``; identified by its absolute path."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class DependencyDeclaration:
    """A raw ``<package id=... version=...>`` entry from one manifest."""

    name: str
    version: str
    manifest: ManifestFile


@dataclass(frozen=True)
class Enrichment:
    """Outcome of one registry lookup.

    Always fully populated. A failed lookup carries the ``unknown`` license,
    empty URL/description and the failure reason in ``error``.
    """

    license_url: str
    project_url: str
    description: str
    error: str | None = None

    @property
    def resolved(self) -> bool:
        return self.error is None

    @classmethod
    def unknown(cls, error: str) -> Enrichment:
        return cls(license_url=UNKNOWN_LICENSE, project_url="", description="", error=error)


@dataclass(frozen=True)
class ResolvedDependency:
    """A declaration joined with its enrichment."""

    name: str
    version: str
    manifest: ManifestFile
    license_url: str
    project_url: str
    description: str
    resolved: bool = True

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.version)

    @property
    def label(self) -> str:
        return f"{self.name} {self.version}"

    @classmethod
    def from_declaration(
        cls, declaration: DependencyDeclaration, enrichment: Enrichment
    ) -> ResolvedDependency:
        return cls(
            name=declaration.name,
            version=declaration.version,
            manifest=declaration.manifest,
            license_url=enrichment.license_url,
            project_url=enrichment.project_url,
            description=enrichment.description,
            resolved=enrichment.resolved,
        )
