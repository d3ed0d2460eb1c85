"""Runtime settings — registry endpoints and fetch limits from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_API_URL = "https://api.nuget.org"
DEFAULT_TIMEOUT = 5.0
DEFAULT_CONCURRENCY = 8


def default_frontend_url(api_url: str) -> str:
    """Browsing site for *api_url*: the first ``api`` becomes ``www``."""
    return api_url.replace("api", "www", 1)


@dataclass(frozen=True)
class RegistryUrls:
    """Base URLs for the metadata API and the human-facing package pages."""

    api_url: str
    frontend_url: str

    @classmethod
    def for_api(cls, api_url: str, frontend_url: str | None = None) -> RegistryUrls:
        return cls(api_url=api_url, frontend_url=frontend_url or default_frontend_url(api_url))


@dataclass(frozen=True)
class Settings:
    """Settings for one fetch run.

    Reads from environment variables (see :meth:`from_env`):
        NUGET_API_URL                — registry API (default: https://api.nuget.org)
        NUGET_FRONTEND_URL           — package pages (default: API URL with api→www)
        LICENSE_FETCHER_TIMEOUT      — per-request timeout in seconds (default: 5)
        LICENSE_FETCHER_CONCURRENCY  — max in-flight lookups (default: 8)
    """

    urls: RegistryUrls
    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY

    @classmethod
    def from_env(cls, **overrides: object) -> Settings:
        api_url = os.environ.get("NUGET_API_URL") or DEFAULT_API_URL
        frontend_url = os.environ.get("NUGET_FRONTEND_URL") or None
        settings = cls(
            urls=RegistryUrls.for_api(api_url, frontend_url),
            timeout=_env_float("LICENSE_FETCHER_TIMEOUT", DEFAULT_TIMEOUT),
            concurrency=_env_int("LICENSE_FETCHER_CONCURRENCY", DEFAULT_CONCURRENCY),
        )
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(settings, **overrides) if overrides else settings


def _env_float(key: str, default: float) -> float:
    return float(os.environ.get(key, default))


def _env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))
