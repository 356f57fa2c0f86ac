"""
Test Suite Configuration
"""
from datetime import date, time

import pytest
import polars as pl

from retail_analytics.data.models import SALES_SCHEMA


@pytest.fixture
def sample_sales_df() -> pl.DataFrame:
    """Cleaned sales table spanning two years"""
    return pl.DataFrame(
        {
            "transactions_id": [1, 2, 3, 4, 5, 6, 7, 8],
            "sale_date": [
                date(2022, 11, 5),
                date(2022, 11, 5),
                date(2022, 11, 20),
                date(2022, 12, 1),
                date(2022, 12, 15),
                date(2023, 1, 10),
                date(2023, 2, 14),
                date(2023, 2, 28),
            ],
            "sale_time": [
                time(9, 15),
                time(14, 30),
                time(20, 5),
                time(12, 0),
                time(14, 45),
                time(11, 59),
                time(18, 20),
                time(14, 10),
            ],
            "customer_id": [101, 102, 101, 103, 102, 104, 101, 105],
            "gender": ["Male", "Female", "Male", "Female", "Female", "Male", "Male", "Female"],
            "category": [
                "Clothing",
                "Electronics",
                "Clothing",
                "Beauty",
                "Electronics",
                "Beauty",
                "Clothing",
                "Clothing",
            ],
            "quantity": [3, 1, 4, 2, 2, 1, 2, 1],
            "price_per_unit": [50.0, 500.0, 300.0, 25.0, 300.0, 30.0, 500.0, 50.0],
            "total_sale": [150.0, 500.0, 1200.0, 50.0, 600.0, 30.0, 1000.0, 50.0],
        },
        schema=SALES_SCHEMA,
    )


@pytest.fixture
def raw_sales_df() -> pl.DataFrame:
    """Raw extract with text dates, unused columns, a misspelled header, gaps and a duplicate"""
    return pl.DataFrame({
        "transactions_id": [1, 2, 2, 3, 4],
        "sale_date": ["2022-11-05", "2022-11-06", "2022-11-06", "2022-12-01", "2023-01-02"],
        "sale_time": ["09:15:00", "19:10:00", "19:10:00", "12:00:00", "08:00:00"],
        "customer_id": [10, 11, 11, 12, 13],
        "gender": [" Male", "Female", "Female", "Male", "Female "],
        "age": [30, 40, 40, 22, 35],
        "category": ["Clothing", "Beauty", "Beauty", "Electronics ", "Clothing"],
        "quantiy": [1, 2, 2, None, 3],
        "price_per_unit": [50, 25, 25, 300, 30],
        "cogs": [15.0, 7.5, 7.5, 90.0, 9.0],
        "total_sale": [50, 50, 50, None, 90],
    })
