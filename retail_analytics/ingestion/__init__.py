"""
Data Ingestion Module
"""
from .loader import FileFormat, LoadConfig, LoadResult, LoadStatus, SalesLoader, load_sales

__all__ = [
    "FileFormat",
    "LoadConfig",
    "LoadResult",
    "LoadStatus",
    "SalesLoader",
    "load_sales",
]
