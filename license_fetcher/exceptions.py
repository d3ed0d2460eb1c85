"""Custom exceptions for license-fetcher."""

from __future__ import annotations

from pathlib import Path


class FetcherError(Exception):
    """Base exception for all license-fetcher errors."""


class DiscoveryError(FetcherError):
    """Raised when the project root is missing or cannot be read."""


class ParseError(FetcherError):
    """Raised when a manifest cannot be read or is not well-formed markup."""

    def __init__(self, path: Path | None, reason: str):
        self.path = path
        self.reason = reason
        where = str(path) if path is not None else "<manifest>"
        super().__init__(f"cannot parse {where}: {reason}")


class LookupFailure(FetcherError):
    """Raised inside the resolver when a registry document violates the protocol.

    Never escapes :func:`license_fetcher.engines.license_resolver.resolver.resolve`.
    """
