"""FetchCoordinator — bounded fork-join of registry lookups for one manifest."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import httpx
import structlog

from license_fetcher.core.settings import DEFAULT_CONCURRENCY, RegistryUrls
from license_fetcher.engines.license_resolver.models import (
    DependencyDeclaration,
    ManifestFile,
    ResolvedDependency,
)
from license_fetcher.engines.license_resolver.resolver import resolve

log = structlog.get_logger("license_fetcher.engine")


class FetchCoordinator:
    """Dispatch one lookup per declaration and wait for all of them.

    The semaphore is shared by every :meth:`fetch` call on this instance,
    so *concurrency* bounds in-flight lookups across manifests as well.
    ``concurrency=1`` makes lookups strictly sequential.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        urls: RegistryUrls,
        *,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self._client = client
        self._urls = urls
        self._sem = asyncio.Semaphore(concurrency)

    async def fetch(
        self,
        manifest: ManifestFile,
        declarations: Sequence[DependencyDeclaration],
    ) -> list[ResolvedDependency]:
        """Resolve every declaration of *manifest*.

        Returns one record per declaration, in declaration order; failed
        lookups are present with the ``unknown`` defaults.
        """

        async def _fetch_one(decl: DependencyDeclaration) -> ResolvedDependency:
            async with self._sem:
                enrichment = await resolve(self._client, decl.name, decl.version, self._urls)
            return ResolvedDependency.from_declaration(decl, enrichment)

        results = list(await asyncio.gather(*(_fetch_one(d) for d in declarations)))
        failed = sum(1 for r in results if not r.resolved)
        log.info(
            "coordinator.manifest_fetched",
            manifest=str(manifest),
            total=len(results),
            failed=failed,
        )
        return results
