"""
Data Cleaning Module

Prepares the raw sales extract for analysis.
Handles:
- Column name normalization
- Dropping columns no report uses
- Date and time parsing
- Type standardization
- Removal of rows without sales measures
- Deduplication on the transaction id
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import polars as pl
import structlog

from retail_analytics.data.models import DROPPED_COLUMNS, REQUIRED_MEASURES, SALES_SCHEMA

logger = structlog.get_logger(__name__)

# Known misspellings in source extracts
COLUMN_ALIASES: Dict[str, str] = {
    "quantiy": "quantity",
    "transaction_id": "transactions_id",
}


@dataclass
class CleaningStats:
    """Statistics from cleaning operations"""
    total_rows: int
    rows_after_cleaning: int
    incomplete_rows_removed: int
    duplicates_removed: int
    columns_dropped: List[str] = field(default_factory=list)


class SalesCleaner:
    """
    Sales table cleaner.

    Example:
        cleaner = SalesCleaner()
        df_clean, stats = cleaner.clean(raw_df)
    """

    def __init__(
        self,
        drop_columns: Optional[List[str]] = None,
        required_columns: Optional[List[str]] = None,
        date_format: str = "%Y-%m-%d",
        time_format: str = "%H:%M:%S",
    ):
        self.drop_columns = DROPPED_COLUMNS if drop_columns is None else drop_columns
        self.required_columns = REQUIRED_MEASURES if required_columns is None else required_columns
        self.date_format = date_format
        self.time_format = time_format

    def _normalize_columns(self, df: pl.DataFrame) -> pl.DataFrame:
        """Lower-case and trim column names, fix known misspellings"""
        renames = {}
        for col in df.columns:
            name = col.strip().lower().replace(" ", "_")
            name = COLUMN_ALIASES.get(name, name)
            if name != col and name not in df.columns:
                renames[col] = name
        return df.rename(renames) if renames else df

    def _drop_unused(self, df: pl.DataFrame) -> Tuple[pl.DataFrame, List[str]]:
        """Drop columns that no report reads"""
        present = [c for c in self.drop_columns if c in df.columns]
        return (df.drop(present) if present else df), present

    def _trim_strings(self, df: pl.DataFrame) -> pl.DataFrame:
        """Trim whitespace from string columns"""
        string_cols = [col for col, dtype in df.schema.items() if dtype == pl.Utf8]
        if not string_cols:
            return df
        return df.with_columns([pl.col(c).str.strip_chars() for c in string_cols])

    def _parse_temporal(self, df: pl.DataFrame) -> pl.DataFrame:
        """Parse sale_date and sale_time text; unparseable values become null"""
        if "sale_date" in df.columns:
            dtype = df.schema["sale_date"]
            if dtype == pl.Utf8:
                df = df.with_columns(pl.col("sale_date").str.to_date(self.date_format, strict=False))
            elif dtype == pl.Datetime:
                df = df.with_columns(pl.col("sale_date").dt.date())

        if "sale_time" in df.columns:
            dtype = df.schema["sale_time"]
            if dtype == pl.Utf8:
                df = df.with_columns(pl.col("sale_time").str.to_time(self.time_format, strict=False))
            elif dtype == pl.Datetime:
                df = df.with_columns(pl.col("sale_time").dt.time())

        return df

    def _standardize_types(self, df: pl.DataFrame) -> pl.DataFrame:
        """Cast identifier and measure columns to the sales schema"""
        casts = [
            pl.col(col).cast(dtype, strict=False)
            for col, dtype in SALES_SCHEMA.items()
            if col in df.columns
            and dtype not in (pl.Date, pl.Time)
            and df.schema[col] != dtype
        ]
        return df.with_columns(casts) if casts else df

    def _drop_incomplete(self, df: pl.DataFrame) -> pl.DataFrame:
        """Remove rows missing a sales measure"""
        present = [c for c in self.required_columns if c in df.columns]
        if not present:
            return df
        return df.filter(pl.all_horizontal([pl.col(c).is_not_null() for c in present]))

    def _remove_duplicates(self, df: pl.DataFrame, subset: List[str]) -> pl.DataFrame:
        """Keep the first row of each transaction id"""
        present = [c for c in subset if c in df.columns]
        if not present:
            return df
        return df.unique(subset=present, keep="first", maintain_order=True)

    def clean(self, df: pl.DataFrame) -> Tuple[pl.DataFrame, CleaningStats]:
        """Apply the full cleaning sequence"""
        total_rows = len(df)

        df = self._normalize_columns(df)
        df, dropped = self._drop_unused(df)
        df = self._trim_strings(df)
        df = self._parse_temporal(df)
        df = self._standardize_types(df)

        before = len(df)
        df = self._drop_incomplete(df)
        incomplete = before - len(df)

        before = len(df)
        df = self._remove_duplicates(df, ["transactions_id"])
        duplicates = before - len(df)

        # Schema column order first, anything else after
        ordered = [c for c in SALES_SCHEMA if c in df.columns]
        df = df.select(ordered + [c for c in df.columns if c not in SALES_SCHEMA])

        stats = CleaningStats(
            total_rows=total_rows,
            rows_after_cleaning=len(df),
            incomplete_rows_removed=incomplete,
            duplicates_removed=duplicates,
            columns_dropped=dropped,
        )

        logger.info(
            "Sales cleaned",
            input_rows=total_rows,
            output_rows=stats.rows_after_cleaning,
            incomplete_removed=incomplete,
            duplicates_removed=duplicates,
            dropped_columns=dropped,
        )
        return df, stats


def clean_sales(df: pl.DataFrame) -> pl.DataFrame:
    """
    Convenience function to clean a raw sales DataFrame.

    Args:
        df: Raw sales DataFrame

    Returns:
        Cleaned DataFrame
    """
    cleaned, _ = SalesCleaner().clean(df)
    return cleaned
