"""
First and last sale lookup.
"""

import polars as pl

from .engine import RowsLike, to_frame
from .errors import SchemaMismatch

FIRST_LABEL = "First Sale"
LAST_LABEL = "Last Sale"


def first_last_sale(
    rows: RowsLike,
    date_column: str = "sale_date",
    label_column: str = "sales_order",
) -> pl.DataFrame:
    """
    Label the earliest and the latest sale.

    Rows are numbered by date ascending and descending independently, ties
    numbered in input order. The row numbered first ascending is the
    "First Sale"; the row numbered first descending is the "Last Sale"
    unless it is already the first. A one-row input yields one "First Sale".
    """
    df = to_frame(rows)
    if df.width == 0:
        return pl.DataFrame(schema={label_column: pl.Utf8, date_column: pl.Date})
    if date_column not in df.columns:
        raise SchemaMismatch(date_column, df.columns)

    numbered = df.select(date_column).filter(pl.col(date_column).is_not_null()).with_columns([
        pl.col(date_column).rank(method="ordinal").alias("row_num"),
        pl.col(date_column).rank(method="ordinal", descending=True).alias("rev_row_num"),
    ])

    return (
        numbered
        .filter((pl.col("row_num") == 1) | (pl.col("rev_row_num") == 1))
        .with_columns(
            pl.when(pl.col("row_num") == 1)
            .then(pl.lit(FIRST_LABEL))
            .otherwise(pl.lit(LAST_LABEL))
            .alias(label_column)
        )
        .sort("row_num")
        .select([label_column, date_column])
    )
