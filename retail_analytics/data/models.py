"""
Sales Transaction Model

The single denormalized sales table: a typed record for row-wise callers
and the matching polars schema for frame-wise processing.
"""

from datetime import date, time
from enum import Enum
from typing import Dict, List

import polars as pl
from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    """Recorded customer gender"""
    MALE = "Male"
    FEMALE = "Female"


class Category(str, Enum):
    """Product categories carried by the store"""
    CLOTHING = "Clothing"
    ELECTRONICS = "Electronics"
    BEAUTY = "Beauty"


class SalesRecord(BaseModel):
    """One cleaned sales transaction"""

    model_config = ConfigDict(frozen=True)

    transactions_id: int
    sale_date: date
    sale_time: time
    customer_id: int
    gender: str
    category: str
    quantity: int = Field(ge=0)
    price_per_unit: float = Field(ge=0)
    total_sale: float = Field(ge=0)


# Cleaned table layout, in column order
SALES_SCHEMA: Dict[str, pl.DataType] = {
    "transactions_id": pl.Int64,
    "sale_date": pl.Date,
    "sale_time": pl.Time,
    "customer_id": pl.Int64,
    "gender": pl.Utf8,
    "category": pl.Utf8,
    "quantity": pl.Int64,
    "price_per_unit": pl.Float64,
    "total_sale": pl.Float64,
}

# Columns present in the source table but not used by any report
DROPPED_COLUMNS: List[str] = ["age", "cogs"]

# A row missing any of these cannot contribute to sales figures
REQUIRED_MEASURES: List[str] = ["quantity", "price_per_unit", "total_sale"]


def records_to_frame(records: List[SalesRecord]) -> pl.DataFrame:
    """Build a frame with the cleaned sales schema from typed records."""
    return pl.DataFrame(
        [record.model_dump() for record in records],
        schema=SALES_SCHEMA,
    )
