"""DependencySet — run-wide aggregate with deduplicated and per-manifest views."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from license_fetcher.engines.license_resolver.models import ManifestFile, ResolvedDependency


class DependencySet:
    """All resolved dependencies of one run, in encounter order.

    Batches are appended whole, one per manifest. The views are computed on
    demand and never mutate the underlying records.
    """

    def __init__(self, records: Iterable[ResolvedDependency] = ()) -> None:
        self._records: list[ResolvedDependency] = list(records)

    def add_batch(self, batch: Iterable[ResolvedDependency]) -> None:
        self._records.extend(list(batch))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ResolvedDependency]:
        return iter(self._records)

    def deduplicated(self) -> list[ResolvedDependency]:
        """Unique ``(name, version)`` records sorted by name.

        The first encountered record wins; sorting is stable, so equal names
        keep their encounter order.
        """
        seen: dict[tuple[str, str], ResolvedDependency] = {}
        for dep in self._records:
            seen.setdefault(dep.key, dep)
        return sorted(seen.values(), key=lambda d: d.name)

    def grouped(self) -> dict[ManifestFile, list[ResolvedDependency]]:
        """Records partitioned by manifest, largest group first, ties by path."""
        groups: dict[ManifestFile, list[ResolvedDependency]] = {}
        for dep in self._records:
            groups.setdefault(dep.manifest, []).append(dep)
        ordered = sorted(groups.items(), key=lambda item: (-len(item[1]), str(item[0].path)))
        return dict(ordered)

    def manifests(self) -> list[ManifestFile]:
        return list(self.grouped())

    def unresolved(self) -> list[ResolvedDependency]:
        """Deduplicated records whose lookup degraded to ``unknown``."""
        return [d for d in self.deduplicated() if not d.resolved]
