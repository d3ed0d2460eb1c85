"""Registry metadata lookup — registration leaf → catalog entry → enrichment.

The registry is queried in two hops::

    GET {api_url}/v3/registration3/{id_lower}/{semver2}.json   → {"catalogEntry": url}
    GET {catalogEntry}                                         → {"licenseUrl", "description"}

:func:`resolve` never raises. Every failure (transport error, timeout,
non-2xx status, malformed JSON, missing field) degrades to
:meth:`Enrichment.unknown` and is logged as ``resolver.lookup_failed``.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from license_fetcher.core.settings import RegistryUrls
from license_fetcher.engines.license_resolver.models import Enrichment
from license_fetcher.exceptions import LookupFailure

log = structlog.get_logger("license_fetcher.engine")


def semantic_version_2(version: str) -> str:
    """Map a 4-part ``x.y.z.0`` version to the 3-part form the registry indexes.

    >>> semantic_version_2("1.2.3.0")
    '1.2.3'
    >>> semantic_version_2("1.2.3.4")
    '1.2.3.4'
    """
    segments = version.split(".")
    if len(segments) == 4 and segments[-1] == "0":
        segments = segments[:-1]
    return ".".join(segments)


def _join(base: str, *parts: str) -> str:
    return "/".join([base.rstrip("/"), *(p.strip("/") for p in parts)])


def registration_url(api_url: str, name: str, version: str) -> str:
    return _join(api_url, "v3", "registration3", name.lower(), f"{semantic_version_2(version)}.json")


def project_url(frontend_url: str, name: str, version: str) -> str:
    return _join(frontend_url, "packages", name, version)


async def _get_json(client: httpx.AsyncClient, url: str) -> dict[str, Any]:
    resp = await client.get(url)
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        raise LookupFailure(f"expected a JSON object from {url}, got {type(data).__name__}")
    return data


def _require_str(doc: dict[str, Any], field: str) -> str:
    value = doc.get(field)
    if not isinstance(value, str):
        raise LookupFailure(f"missing or non-string field {field!r}")
    return value


async def fetch_enrichment(
    client: httpx.AsyncClient, name: str, version: str, urls: RegistryUrls
) -> Enrichment:
    """Perform the two-hop lookup; raises on any failure."""
    leaf = await _get_json(client, registration_url(urls.api_url, name, version))
    catalog = await _get_json(client, _require_str(leaf, "catalogEntry"))

    description = catalog.get("description")
    return Enrichment(
        license_url=_require_str(catalog, "licenseUrl"),
        project_url=project_url(urls.frontend_url, name, version),
        description=description if isinstance(description, str) else "",
    )


async def resolve(
    client: httpx.AsyncClient, name: str, version: str, urls: RegistryUrls
) -> Enrichment:
    """Resolve license metadata for one package; degrades instead of raising."""
    if not version:
        log.warning("resolver.lookup_failed", package=name, version=version, error="missing version")
        return Enrichment.unknown("missing version")
    try:
        return await fetch_enrichment(client, name, version, urls)
    except Exception as exc:
        error = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
        log.warning("resolver.lookup_failed", package=name, version=version, error=error)
        return Enrichment.unknown(error)
