"""
Query Specifications

Value objects describing what to aggregate, how to rank it, and which
ranked groups to keep.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

import polars as pl

from .errors import InvalidSpec


class Aggregation(str, Enum):
    """Per-group aggregation functions"""
    SUM = "sum"
    COUNT = "count"
    COUNT_DISTINCT = "count_distinct"
    AVERAGE = "average"

    @property
    def requires_numeric(self) -> bool:
        return self in (Aggregation.SUM, Aggregation.AVERAGE)


class Direction(str, Enum):
    """Ranking direction, DESCENDING puts the largest metric first"""
    ASCENDING = "asc"
    DESCENDING = "desc"

    @property
    def descending(self) -> bool:
        return self is Direction.DESCENDING


@dataclass(frozen=True)
class MetricSpec:
    """
    A column reduced to one scalar per group.

    Averages are rounded to ``precision`` decimals and the rounded value is
    what gets reported and ranked.
    """
    column: str
    aggregation: Aggregation = Aggregation.SUM
    alias: Optional[str] = None
    precision: int = 2

    @property
    def name(self) -> str:
        """Output column name"""
        return self.alias or f"{self.aggregation.value}_{self.column}"

    def expression(self) -> pl.Expr:
        """Polars aggregation expression for this metric"""
        col = pl.col(self.column)

        if self.aggregation is Aggregation.SUM:
            expr = col.sum()
        elif self.aggregation is Aggregation.COUNT:
            expr = col.count()
        elif self.aggregation is Aggregation.COUNT_DISTINCT:
            # Nulls are not a distinct value
            expr = col.drop_nulls().n_unique()
        else:
            expr = col.mean().round(self.precision)

        return expr.alias(self.name)


@dataclass(frozen=True)
class RankSpec:
    """Scope and direction of a competition ranking"""
    partition_keys: List[str] = field(default_factory=list)
    direction: Direction = Direction.DESCENDING


@dataclass(frozen=True)
class TopN:
    """Hard cutoff at n groups overall; ties at the cutoff go to the earliest group"""
    n: int

    def __post_init__(self):
        if self.n < 1:
            raise InvalidSpec(f"TopN requires n >= 1, got {self.n}")


@dataclass(frozen=True)
class TopPerPartition:
    """Every group ranked k or better within its partition, ties included"""
    k: int = 1

    def __post_init__(self):
        if self.k < 1:
            raise InvalidSpec(f"TopPerPartition requires k >= 1, got {self.k}")


Selection = Union[TopN, TopPerPartition]
