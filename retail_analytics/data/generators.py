"""
Synthetic Sales Generator

Generates a raw retail sales table in the source layout for demos and tests.
Includes:
- Transactions spread over two calendar years
- Hour-of-day weighting towards afternoon and evening trade
- Per-category price points
- The unused source columns (age, cogs)
- A small share of rows with missing measures, as found in the source extract
"""

from datetime import date
from pathlib import Path
from typing import Optional, Union

import numpy as np
import polars as pl
import structlog
from faker import Faker

from retail_analytics.data.models import Category, Gender

logger = structlog.get_logger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

PRICE_POINTS = {
    Category.CLOTHING.value: [25.0, 30.0, 50.0, 300.0, 500.0],
    Category.ELECTRONICS.value: [30.0, 50.0, 300.0, 500.0],
    Category.BEAUTY.value: [25.0, 30.0, 50.0, 300.0],
}

# Weight per hour 0..23, store trade is thin before 7 and peaks in the evening
HOUR_WEIGHTS = np.array(
    [1, 1, 1, 1, 1, 1, 2, 4, 6, 8, 9, 10, 11, 11, 10, 10, 11, 13, 15, 16, 15, 12, 8, 4],
    dtype=float,
)


# =============================================================================
# GENERATORS
# =============================================================================

class SalesGenerator:
    """
    Generate raw sales transactions.

    Example:
        generator = SalesGenerator(seed=7)
        raw_df = generator.generate(2000)
    """

    def __init__(
        self,
        seed: int = 42,
        start_date: date = date(2022, 1, 1),
        end_date: date = date(2023, 12, 31),
        customer_pool: int = 155,
        null_rate: float = 0.005,
    ):
        self.seed = seed
        self.start_date = start_date
        self.end_date = end_date
        self.customer_pool = customer_pool
        self.null_rate = null_rate

    def generate(self, n: int = 2000) -> pl.DataFrame:
        """Generate n raw transactions"""
        rng = np.random.default_rng(self.seed)
        fake = Faker()
        fake.seed_instance(self.seed)

        categories = rng.choice(list(PRICE_POINTS), size=n)
        prices = np.array([rng.choice(PRICE_POINTS[c]) for c in categories])
        quantities = rng.choice([1, 2, 3, 4], size=n, p=[0.40, 0.30, 0.15, 0.15])
        hours = rng.choice(24, size=n, p=HOUR_WEIGHTS / HOUR_WEIGHTS.sum())

        sale_dates = [
            fake.date_between(start_date=self.start_date, end_date=self.end_date).isoformat()
            for _ in range(n)
        ]
        sale_times = [
            f"{hour:02d}:{fake.random_int(0, 59):02d}:{fake.random_int(0, 59):02d}"
            for hour in hours
        ]

        df = pl.DataFrame({
            "transactions_id": np.arange(1, n + 1),
            "sale_date": sale_dates,
            "sale_time": sale_times,
            "customer_id": rng.integers(1, self.customer_pool + 1, size=n),
            "gender": rng.choice([g.value for g in Gender], size=n),
            "age": rng.integers(18, 65, size=n),
            "category": categories,
            "quantity": quantities,
            "price_per_unit": prices,
            "cogs": np.round(prices * rng.uniform(0.1, 0.5, size=n), 2),
            "total_sale": quantities * prices,
        })

        # Blank out measures on a few rows
        missing = rng.random(n) < self.null_rate
        if missing.any():
            df = df.with_columns(pl.Series("_missing", missing))
            df = df.with_columns([
                pl.when(pl.col("_missing")).then(None).otherwise(pl.col(col)).alias(col)
                for col in ["quantity", "price_per_unit", "cogs", "total_sale"]
            ]).drop("_missing")

        logger.info("Generated sales transactions", rows=n, rows_with_nulls=int(missing.sum()))
        return df


def write_dataset(
    path: Union[str, Path],
    n: int = 2000,
    seed: Optional[int] = None,
) -> Path:
    """
    Generate a raw sales table and write it to CSV.

    Args:
        path: Destination file
        n: Number of transactions
        seed: Random seed, defaults to the generator default

    Returns:
        Path of the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    generator = SalesGenerator() if seed is None else SalesGenerator(seed=seed)
    df = generator.generate(n)
    df.write_csv(path)

    logger.info("Wrote sales dataset", file=str(path), rows=len(df))
    return path
