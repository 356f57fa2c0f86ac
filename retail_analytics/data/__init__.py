"""
Sales Data Module
"""
from .generators import SalesGenerator, write_dataset
from .models import SALES_SCHEMA, SalesRecord, records_to_frame

__all__ = [
    "SalesGenerator",
    "write_dataset",
    "SALES_SCHEMA",
    "SalesRecord",
    "records_to_frame",
]
