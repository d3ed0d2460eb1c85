"""Machine-readable JSON report."""

from __future__ import annotations

import json
from typing import Any

from license_fetcher.engines.license_resolver.dependency_set import DependencySet
from license_fetcher.engines.license_resolver.models import ResolvedDependency


def _row(dep: ResolvedDependency) -> dict[str, Any]:
    return {
        "name": dep.name,
        "version": dep.version,
        "license_url": dep.license_url,
        "project_url": dep.project_url,
        "description": dep.description,
        "resolved": dep.resolved,
        "manifest": str(dep.manifest.path),
    }


def render_json_report(dependencies: DependencySet) -> str:
    """Render the deduplicated and per-manifest views as indented JSON."""
    doc = {
        "dependencies": [_row(d) for d in dependencies.deduplicated()],
        "manifests": [
            {
                "path": str(manifest.path),
                "packages": [d.label for d in members],
            }
            for manifest, members in dependencies.grouped().items()
        ],
    }
    return json.dumps(doc, indent=2) + "\n"
