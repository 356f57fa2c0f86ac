"""
Sales Report Queries

Each query takes a cleaned sales frame and returns a result frame. Queries
that group on calendar or clock parts derive those columns on the fly when
the frame has not been enriched yet.
"""

from datetime import date

import polars as pl

from retail_analytics.data.models import SALES_SCHEMA
from retail_analytics.transformation.enrichers import SalesEnricher
from .engine import aggregate, ranked_aggregate
from .errors import SchemaMismatch
from .extremum import first_last_sale
from .specs import Aggregation, Direction, MetricSpec, TopN, TopPerPartition


def _require(df: pl.DataFrame, *columns: str) -> None:
    for column in columns:
        if column not in df.columns:
            raise SchemaMismatch(column, df.columns)


# =============================================================================
# EXPLORATION
# =============================================================================

def row_count(df: pl.DataFrame) -> pl.DataFrame:
    return pl.DataFrame({"rows_num": [df.height]})


def unique_customer_count(df: pl.DataFrame) -> pl.DataFrame:
    _require(df, "customer_id")
    return df.select(pl.col("customer_id").drop_nulls().n_unique().alias("customer_num"))


def distinct_categories(df: pl.DataFrame) -> pl.DataFrame:
    _require(df, "category")
    return df.select(pl.col("category").unique(maintain_order=True).alias("unique_category"))


def sales_count_by_category(df: pl.DataFrame) -> pl.DataFrame:
    return aggregate(df, ["category"], MetricSpec("total_sale", Aggregation.COUNT, alias="sales_count"))


def sales_count_by_gender(df: pl.DataFrame) -> pl.DataFrame:
    return aggregate(df, ["gender"], MetricSpec("total_sale", Aggregation.COUNT, alias="sales_count"))


def null_audit(df: pl.DataFrame) -> pl.DataFrame:
    """Rows with a null in any sales schema column"""
    columns = [c for c in SALES_SCHEMA if c in df.columns]
    if not columns:
        return df.clear()
    return df.filter(pl.any_horizontal([pl.col(c).is_null() for c in columns]))


# =============================================================================
# FILTERS
# =============================================================================

def sales_on_day(df: pl.DataFrame, day: date) -> pl.DataFrame:
    """All transactions made on one calendar day"""
    _require(df, "sale_date")
    return df.filter(pl.col("sale_date") == day)


def category_bulk_sales(
    df: pl.DataFrame,
    category: str,
    year: int,
    month: int,
    min_quantity: int,
) -> pl.DataFrame:
    """Transactions of a category in one month whose quantity exceeds ``min_quantity``"""
    _require(df, "sale_date", "category", "quantity")
    return df.filter(
        (pl.col("sale_date").dt.year() == year)
        & (pl.col("sale_date").dt.month() == month)
        & (pl.col("category") == category)
        & (pl.col("quantity") > min_quantity)
    )


def high_value_sales(df: pl.DataFrame, threshold: float) -> pl.DataFrame:
    """Transactions whose total exceeds ``threshold``"""
    _require(df, "total_sale")
    return df.filter(pl.col("total_sale") > threshold)


# =============================================================================
# AGGREGATES AND RANKINGS
# =============================================================================

def total_sales_by_category(df: pl.DataFrame) -> pl.DataFrame:
    return aggregate(df, ["category"], MetricSpec("total_sale", Aggregation.SUM, alias="total_sales"))


def transactions_by_category_gender(df: pl.DataFrame) -> pl.DataFrame:
    """Transaction count for each category and gender, ordered by category"""
    result = aggregate(
        df,
        ["category", "gender"],
        MetricSpec("transactions_id", Aggregation.COUNT, alias="transactions_made"),
    )
    return result.sort("category", maintain_order=True)


def top_hours(df: pl.DataFrame, n: int = 3) -> pl.DataFrame:
    """The n hours with the most transactions, exactly n rows"""
    df = SalesEnricher().add_time_features(df)
    return ranked_aggregate(
        df,
        group_keys=["sale_hour"],
        partition_keys=[],
        metric=MetricSpec("transactions_id", Aggregation.COUNT, alias="transaction_count"),
        direction=Direction.DESCENDING,
        selection=TopN(n),
    )


def best_month_per_year(df: pl.DataFrame, k: int = 1, precision: int = 2) -> pl.DataFrame:
    """Month(s) with the highest average sale in each year, ties included"""
    df = SalesEnricher().add_time_features(df)
    return ranked_aggregate(
        df,
        group_keys=["sale_year", "sale_month"],
        partition_keys=["sale_year"],
        metric=MetricSpec("total_sale", Aggregation.AVERAGE, alias="avg_sale", precision=precision),
        direction=Direction.DESCENDING,
        selection=TopPerPartition(k),
    )


def top_customers(df: pl.DataFrame, n: int = 5) -> pl.DataFrame:
    """The n customers with the highest total spend, exactly n rows"""
    return ranked_aggregate(
        df,
        group_keys=["customer_id"],
        partition_keys=[],
        metric=MetricSpec("total_sale", Aggregation.SUM, alias="total_sales"),
        direction=Direction.DESCENDING,
        selection=TopN(n),
    )


def unique_customers_by_category(df: pl.DataFrame) -> pl.DataFrame:
    return aggregate(
        df,
        ["category"],
        MetricSpec("customer_id", Aggregation.COUNT_DISTINCT, alias="customer_count"),
    )


def orders_by_shift(df: pl.DataFrame) -> pl.DataFrame:
    df = SalesEnricher().add_shift(df)
    return aggregate(df, ["shift"], MetricSpec("transactions_id", Aggregation.COUNT, alias="total_orders"))


def sale_date_range(df: pl.DataFrame) -> pl.DataFrame:
    return first_last_sale(df, date_column="sale_date")
