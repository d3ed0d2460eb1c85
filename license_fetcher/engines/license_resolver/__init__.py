"""License resolver engine — resolve license metadata for NuGet manifests."""

from license_fetcher.engines.license_resolver.coordinator import FetchCoordinator
from license_fetcher.engines.license_resolver.dependency_set import DependencySet
from license_fetcher.engines.license_resolver.locator import locate_manifests
from license_fetcher.engines.license_resolver.models import (
    UNKNOWN_LICENSE,
    DependencyDeclaration,
    Enrichment,
    ManifestFile,
    ResolvedDependency,
)
from license_fetcher.engines.license_resolver.parser import parse_manifest, read_manifest
from license_fetcher.engines.license_resolver.pipeline import collect, run
from license_fetcher.engines.license_resolver.resolver import resolve, semantic_version_2

__all__ = [
    "UNKNOWN_LICENSE",
    "DependencyDeclaration",
    "DependencySet",
    "Enrichment",
    "FetchCoordinator",
    "ManifestFile",
    "ResolvedDependency",
    "collect",
    "locate_manifests",
    "parse_manifest",
    "read_manifest",
    "resolve",
    "run",
    "semantic_version_2",
]
