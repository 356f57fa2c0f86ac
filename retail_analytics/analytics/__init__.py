"""
Sales Analytics Module

The report queries live in ``retail_analytics.analytics.queries``.
"""
from .engine import aggregate, rank_groups, ranked_aggregate, to_frame
from .errors import AnalyticsError, DataQualityError, InvalidSpec, SchemaMismatch
from .extremum import first_last_sale
from .specs import Aggregation, Direction, MetricSpec, RankSpec, TopN, TopPerPartition
from .time_buckets import Shift, classify_shift, shift_expression

__all__ = [
    "aggregate",
    "rank_groups",
    "ranked_aggregate",
    "to_frame",
    "AnalyticsError",
    "DataQualityError",
    "InvalidSpec",
    "SchemaMismatch",
    "first_last_sale",
    "Aggregation",
    "Direction",
    "MetricSpec",
    "RankSpec",
    "TopN",
    "TopPerPartition",
    "Shift",
    "classify_shift",
    "shift_expression",
]
