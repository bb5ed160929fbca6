"""Console reporting of benchmark statistics with reproduction commands."""

from monkeyhunt.reporting.console import format_report, format_statistics
from monkeyhunt.reporting.reproduction import build_reproduction_block

__all__ = [
    "build_reproduction_block",
    "format_report",
    "format_statistics",
]
