"""Manifest discovery — find every ``packages.config`` under a project root."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import structlog

from license_fetcher.engines.license_resolver.models import ManifestFile
from license_fetcher.exceptions import DiscoveryError

log = structlog.get_logger("license_fetcher.engine")

MANIFEST_FILENAME = "packages.config"


def locate_manifests(root: Path | str) -> Iterator[ManifestFile]:
    """Return a lazy iterator over the manifests below *root*.

    Hidden directories are searched too. Entries are visited in sorted
    order so repeated runs over the same tree yield the same sequence.

    Raises :class:`DiscoveryError` immediately if *root* is missing,
    not a directory, or unreadable.
    """
    root_path = Path(root).expanduser()
    if not root_path.exists():
        raise DiscoveryError(f"project root does not exist: {root_path}")
    if not root_path.is_dir():
        raise DiscoveryError(f"project root is not a directory: {root_path}")
    if not os.access(root_path, os.R_OK | os.X_OK):
        raise DiscoveryError(f"project root is not readable: {root_path}")
    return _walk(root_path.resolve())


def _walk(root: Path) -> Iterator[ManifestFile]:
    def _on_error(exc: OSError) -> None:
        log.warning("locator.walk_error", path=exc.filename, error=str(exc))

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        if MANIFEST_FILENAME in filenames:
            yield ManifestFile(path=Path(dirpath) / MANIFEST_FILENAME)
