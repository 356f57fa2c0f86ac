"""
Reporting Module
"""
from .runner import ReportResult, ReportRunner, build_catalogue

__all__ = [
    "ReportResult",
    "ReportRunner",
    "build_catalogue",
]
