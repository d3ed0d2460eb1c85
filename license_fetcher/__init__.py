"""license-fetcher: third-party license audit for NuGet ``packages.config`` projects."""

__version__ = "0.1.0"
