"""
Grouped-Ranking Engine

Groups a sales frame, reduces each group to one metric, then keeps either
the best groups of each partition (SQL ``RANK() OVER (PARTITION BY ...)``)
or the first n groups overall (SQL ``ORDER BY ... LIMIT n``).

All functions are pure: inputs are never modified and no state is kept
between calls, so one loaded frame can be shared by concurrent callers.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union

import polars as pl
import structlog
from pydantic import BaseModel

from retail_analytics.data.models import SalesRecord, records_to_frame
from .errors import InvalidSpec, SchemaMismatch
from .specs import Direction, MetricSpec, RankSpec, Selection, TopN, TopPerPartition

logger = structlog.get_logger(__name__)

RANK_COLUMN = "rank"

RowsLike = Union[pl.DataFrame, Sequence[Union[BaseModel, Mapping[str, Any]]]]


def to_frame(rows: RowsLike) -> pl.DataFrame:
    """
    Coerce rows into a DataFrame.

    Accepts a DataFrame as is, a sequence of ``SalesRecord`` (typed with the
    sales schema) or a sequence of mappings / pydantic models (schema
    inferred from all rows). An empty sequence gives a frame with no columns.
    """
    if isinstance(rows, pl.DataFrame):
        return rows
    if rows is None:
        raise InvalidSpec("rows must be a DataFrame or a sequence of rows, got None")

    records = list(rows)
    if not records:
        return pl.DataFrame()
    if all(isinstance(r, SalesRecord) for r in records):
        return records_to_frame(records)

    return pl.from_dicts(
        [r.model_dump() if isinstance(r, BaseModel) else dict(r) for r in records],
        infer_schema_length=None,
    )


def _check_columns(df: pl.DataFrame, group_keys: List[str], metric: MetricSpec) -> None:
    if not group_keys:
        raise InvalidSpec("group_keys must name at least one column")
    repeated = sorted({key for key in group_keys if group_keys.count(key) > 1})
    if repeated:
        raise InvalidSpec(f"group_keys repeat {repeated}")
    for reserved in (metric.name, RANK_COLUMN):
        if reserved in group_keys:
            raise InvalidSpec(f"Output column '{reserved}' collides with a group key")

    # A frame with no columns comes from an empty row sequence; nothing to check against
    if df.width == 0:
        return

    for column in [*group_keys, metric.column]:
        if column not in df.columns:
            raise SchemaMismatch(column, df.columns)

    if metric.aggregation.requires_numeric and not df.schema[metric.column].is_numeric():
        raise SchemaMismatch(
            metric.column,
            df.columns,
            reason=f"is {df.schema[metric.column]}, {metric.aggregation.value} needs a numeric column",
        )


def _empty_result(group_keys: List[str], metric: MetricSpec) -> pl.DataFrame:
    schema = {key: pl.Null for key in group_keys}
    schema[metric.name] = pl.Float64
    return pl.DataFrame(schema=schema)


def aggregate(rows: RowsLike, group_keys: Sequence[str], metric: MetricSpec) -> pl.DataFrame:
    """
    Reduce each group to one metric value.

    Groups come out in order of first appearance in ``rows``.

    Raises:
        InvalidSpec: no group keys
        SchemaMismatch: a group key or the metric column is missing
    """
    df = to_frame(rows)
    group_keys = list(group_keys)
    _check_columns(df, group_keys, metric)

    if df.width == 0:
        return _empty_result(group_keys, metric)

    return df.group_by(group_keys, maintain_order=True).agg(metric.expression())


def rank_groups(grouped: pl.DataFrame, metric_name: str, rank_spec: RankSpec) -> pl.DataFrame:
    """
    Attach a competition rank (1, 1, 3) of ``metric_name`` within each partition.

    Null metrics rank after every present value of their partition and tie
    with each other, so a partition whose metrics are all null ranks 1.
    """
    metric = pl.col(metric_name)
    value_rank = metric.rank(method="min", descending=rank_spec.direction.descending)
    null_rank = metric.is_not_null().sum() + 1
    if rank_spec.partition_keys:
        value_rank = value_rank.over(rank_spec.partition_keys)
        null_rank = null_rank.over(rank_spec.partition_keys)

    rank = pl.when(metric.is_null()).then(null_rank).otherwise(value_rank)
    return grouped.with_columns(rank.cast(pl.UInt32).alias(RANK_COLUMN))


def ranked_aggregate(
    rows: RowsLike,
    group_keys: Sequence[str],
    partition_keys: Optional[Sequence[str]],
    metric: MetricSpec,
    direction: Direction,
    selection: Selection,
) -> pl.DataFrame:
    """
    Aggregate, rank and select groups.

    Args:
        rows: Sales frame or row sequence, may be empty
        group_keys: Columns defining the groups, e.g. ["sale_year", "sale_month"]
        partition_keys: Subset of group_keys scoping the rank, e.g. ["sale_year"];
            empty or None means one global partition. Ignored by TopN.
        metric: Aggregated column and function
        direction: DESCENDING to favour large metrics
        selection: TopN(n) for a hard cutoff of n rows, TopPerPartition(k)
            for every group ranked k or better, ties included

    Returns:
        Group key columns and the metric, plus ``rank`` for TopPerPartition

    Raises:
        InvalidSpec: malformed request
        SchemaMismatch: referenced column absent from the rows
    """
    group_keys = list(group_keys)
    partition_keys = list(partition_keys or [])

    if not isinstance(selection, (TopN, TopPerPartition)):
        raise InvalidSpec(f"Unsupported selection: {selection!r}")

    per_partition = isinstance(selection, TopPerPartition)
    if per_partition:
        unknown = [key for key in partition_keys if key not in group_keys]
        if unknown:
            raise InvalidSpec(f"Partition keys {unknown} are not among group keys {group_keys}")

    grouped = aggregate(rows, group_keys, metric)

    if grouped.is_empty():
        if per_partition:
            grouped = grouped.with_columns(pl.lit(None, dtype=pl.UInt32).alias(RANK_COLUMN))
        return grouped

    if isinstance(selection, TopN):
        # Stable sort keeps first-appearance order among ties
        result = grouped.sort(
            metric.name,
            descending=direction.descending,
            nulls_last=True,
            maintain_order=True,
        ).head(selection.n)
    else:
        ranked = rank_groups(grouped, metric.name, RankSpec(partition_keys, direction))
        result = ranked.filter(pl.col(RANK_COLUMN) <= selection.k).sort(
            [*partition_keys, RANK_COLUMN],
            maintain_order=True,
        )

    logger.debug(
        "Ranked aggregate computed",
        group_keys=group_keys,
        partition_keys=partition_keys,
        metric=metric.name,
        groups=grouped.height,
        selected=result.height,
    )
    return result
