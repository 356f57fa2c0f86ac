"""
Data Transformation Module
"""
from .cleaners import CleaningStats, SalesCleaner, clean_sales
from .enrichers import SalesEnricher, enrich_sales

__all__ = [
    "CleaningStats",
    "SalesCleaner",
    "clean_sales",
    "SalesEnricher",
    "enrich_sales",
]
