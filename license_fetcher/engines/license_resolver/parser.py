"""Parser for NuGet ``packages.config`` files."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import structlog

from license_fetcher.engines.license_resolver.models import DependencyDeclaration, ManifestFile
from license_fetcher.exceptions import ParseError

log = structlog.get_logger("license_fetcher.engine")

_PACKAGE_TAG = "package"


def parse_manifest(content: str | bytes, manifest: ManifestFile) -> list[DependencyDeclaration]:
    """Extract ``(id, version)`` pairs from every ``<package>`` element.

    Attribute values are kept verbatim. Bytes are decoded by the XML parser
    itself, honouring a BOM or ``encoding`` declaration. A well-formed
    document without ``<package>`` elements yields an empty list.

    A ``<package>`` without ``version`` is kept with an empty version so its
    lookup degrades to ``unknown``; one without ``id`` has no identity and
    is skipped. Both are logged as warnings.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise ParseError(manifest.path, str(exc)) from exc

    deps: list[DependencyDeclaration] = []
    for el in root.iter(_PACKAGE_TAG):
        name = el.get("id")
        version = el.get("version")
        if not name or version is None:
            log.warning(
                "parser.package_incomplete",
                manifest=str(manifest),
                attributes=dict(el.attrib),
                kept=bool(name),
            )
            if not name:
                continue
        deps.append(DependencyDeclaration(name=name, version=version or "", manifest=manifest))
    return deps


def read_manifest(manifest: ManifestFile) -> list[DependencyDeclaration]:
    """Read *manifest* from disk and parse it.

    Raises :class:`ParseError` when the file cannot be read as well as when
    its markup is malformed.
    """
    try:
        content = manifest.path.read_bytes()
    except OSError as exc:
        raise ParseError(manifest.path, str(exc)) from exc
    return parse_manifest(content, manifest)
