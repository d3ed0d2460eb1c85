"""End-to-end pipeline: locate → parse → fetch → aggregate."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import structlog

from license_fetcher.core.settings import DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT, RegistryUrls, Settings
from license_fetcher.engines.license_resolver.coordinator import FetchCoordinator
from license_fetcher.engines.license_resolver.dependency_set import DependencySet
from license_fetcher.engines.license_resolver.locator import locate_manifests
from license_fetcher.engines.license_resolver.models import (
    DependencyDeclaration,
    ManifestFile,
    ResolvedDependency,
)
from license_fetcher.engines.license_resolver.parser import read_manifest
from license_fetcher.exceptions import ParseError

log = structlog.get_logger("license_fetcher.engine")


def _parse_all(root: Path | str) -> list[tuple[ManifestFile, list[DependencyDeclaration]]]:
    """Discover and parse manifests; unparseable ones are skipped with a warning."""
    parsed: list[tuple[ManifestFile, list[DependencyDeclaration]]] = []
    for manifest in locate_manifests(root):
        try:
            declarations = read_manifest(manifest)
        except ParseError as exc:
            log.warning("pipeline.manifest_skipped", manifest=str(manifest), error=exc.reason)
            continue
        log.debug("pipeline.manifest_parsed", manifest=str(manifest), packages=len(declarations))
        parsed.append((manifest, declarations))
    return parsed


async def collect(
    root: Path | str,
    urls: RegistryUrls,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
    timeout: float = DEFAULT_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> DependencySet:
    """Build the :class:`DependencySet` for the project at *root*.

    Manifests are fetched concurrently; their batches are merged in
    discovery order so the first-encountered record of a duplicate is
    stable between runs. Only :class:`DiscoveryError` propagates.

    When *client* is given the caller owns it; otherwise a client with a
    per-request *timeout* is created and closed here.
    """
    manifests = await asyncio.to_thread(_parse_all, root)

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    try:
        coordinator = FetchCoordinator(client, urls, concurrency=concurrency)
        batches: list[list[ResolvedDependency]] = await asyncio.gather(
            *(coordinator.fetch(manifest, decls) for manifest, decls in manifests)
        )
    finally:
        if owns_client:
            await client.aclose()

    dependencies = DependencySet()
    for batch in batches:
        dependencies.add_batch(batch)

    log.info(
        "pipeline.done",
        root=str(root),
        manifests=len(manifests),
        dependencies=len(dependencies),
        unique=len(dependencies.deduplicated()),
        unresolved=len(dependencies.unresolved()),
    )
    return dependencies


def run(root: Path | str, settings: Settings) -> DependencySet:
    """Synchronous entry point around :func:`collect`."""
    return asyncio.run(
        collect(
            root,
            settings.urls,
            concurrency=settings.concurrency,
            timeout=settings.timeout,
        )
    )
