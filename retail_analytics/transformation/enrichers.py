"""
Sales Enrichment Module

Adds the derived columns the reports group on:
- Calendar year and month of the sale
- Hour of the sale
- Trading shift
"""

import polars as pl
import structlog

from retail_analytics.analytics.time_buckets import shift_expression

logger = structlog.get_logger(__name__)


class SalesEnricher:
    """
    Derive reporting keys from the sale date and time.

    Columns that already exist are left untouched, so enrichment can be
    applied more than once.

    Example:
        enricher = SalesEnricher()
        enriched_df = enricher.enrich(clean_df)
    """

    def __init__(
        self,
        date_column: str = "sale_date",
        time_column: str = "sale_time",
    ):
        self.date_column = date_column
        self.time_column = time_column

    def add_time_features(self, df: pl.DataFrame) -> pl.DataFrame:
        """
        Add calendar and clock features.

        Features added:
        - sale_year, sale_month (from the sale date)
        - sale_hour (from the sale time)
        """
        features = []

        if self.date_column in df.columns:
            if "sale_year" not in df.columns:
                features.append(pl.col(self.date_column).dt.year().alias("sale_year"))
            if "sale_month" not in df.columns:
                features.append(pl.col(self.date_column).dt.month().alias("sale_month"))

        if self.time_column in df.columns and "sale_hour" not in df.columns:
            features.append(pl.col(self.time_column).dt.hour().alias("sale_hour"))

        return df.with_columns(features) if features else df

    def add_shift(self, df: pl.DataFrame, hour_column: str = "sale_hour") -> pl.DataFrame:
        """Label each sale Morning, Afternoon or Evening"""
        if "shift" in df.columns:
            return df
        if hour_column not in df.columns:
            df = self.add_time_features(df)
        if hour_column not in df.columns:
            return df
        return df.with_columns(shift_expression(hour_column).alias("shift"))

    def enrich(self, df: pl.DataFrame) -> pl.DataFrame:
        """Add all reporting keys"""
        df = self.add_time_features(df)
        df = self.add_shift(df)
        logger.debug("Enriched sales", columns=df.columns)
        return df


def enrich_sales(df: pl.DataFrame) -> pl.DataFrame:
    """
    Convenience function to enrich sales data.

    Args:
        df: Cleaned sales DataFrame

    Returns:
        Sales DataFrame with sale_year, sale_month, sale_hour and shift
    """
    return SalesEnricher().enrich(df)
