"""Report renderers — consume :class:`DependencySet` views, emit documents."""

from license_fetcher.report.fnci import render_fnci_report
from license_fetcher.report.json_report import render_json_report

__all__ = ["render_fnci_report", "render_json_report"]
