"""Shared pytest fixtures for license-fetcher tests.

No network access: registry traffic goes through ``httpx.MockTransport``.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from license_fetcher.core.settings import RegistryUrls

API_URL = "https://api.nuget.test"
FRONTEND_URL = "https://www.nuget.test"
CATALOG_BASE = f"{API_URL}/v3/catalog0/data"


class FakeRegistry:
    """In-memory registration + catalog documents keyed by (id_lower, semver2)."""

    def __init__(self) -> None:
        self.packages: dict[tuple[str, str], dict] = {}
        self.requests: list[str] = []

    def add(self, name: str, version: str, license_url: str, description: str = "") -> None:
        self.packages[(name.lower(), version)] = {
            "licenseUrl": license_url,
            "description": description,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        path = request.url.path
        if path.startswith("/v3/registration3/"):
            _, _, name, leaf = path.strip("/").split("/")
            version = leaf.removesuffix(".json")
            if (name, version) not in self.packages:
                return httpx.Response(404, text="not found")
            return httpx.Response(
                200, json={"catalogEntry": f"{CATALOG_BASE}/{name}.{version}.json"}
            )
        if path.startswith("/v3/catalog0/data/"):
            for (name, version), doc in self.packages.items():
                if path.endswith(f"/{name}.{version}.json"):
                    return httpx.Response(200, json=doc)
            return httpx.Response(404, text="not found")
        return httpx.Response(404, text="not found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def urls() -> RegistryUrls:
    return RegistryUrls(api_url=API_URL, frontend_url=FRONTEND_URL)


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def write_manifest(tmp_path) -> Callable[..., Path]:
    """Write a packages.config under *tmp_path*/<subdir> with the given packages."""

    def _write(subdir: str, *packages: tuple[str, str]) -> Path:
        directory = tmp_path / subdir if subdir else tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        entries = "\n".join(
            f'  <package id="{name}" version="{version}" targetFramework="net472" />'
            for name, version in packages
        )
        path = directory / "packages.config"
        path.write_text(
            f'<?xml version="1.0" encoding="utf-8"?>\n<packages>\n{entries}\n</packages>\n',
            encoding="utf-8",
        )
        return path

    return _write
