"""
Report Runner

Runs the catalogue of sales queries over one cleaned table and optionally
writes each result to the report directory.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional

import polars as pl
import structlog
from structlog.contextvars import bound_contextvars

from retail_analytics.analytics import queries
from retail_analytics.analytics.errors import AnalyticsError
from retail_analytics.config import get_settings
from retail_analytics.config.settings import AnalysisSettings

logger = structlog.get_logger(__name__)

Query = Callable[[pl.DataFrame], pl.DataFrame]


def build_catalogue(analysis: AnalysisSettings) -> Dict[str, Query]:
    """Report name to query, in report order"""
    return {
        # Exploration
        "row_count": queries.row_count,
        "unique_customer_count": queries.unique_customer_count,
        "distinct_categories": queries.distinct_categories,
        "sales_count_by_category": queries.sales_count_by_category,
        "sales_count_by_gender": queries.sales_count_by_gender,
        "null_audit": queries.null_audit,
        # Filters
        "sales_on_day": lambda df: queries.sales_on_day(df, analysis.sales_day),
        "category_bulk_sales": lambda df: queries.category_bulk_sales(
            df,
            category=analysis.focus_category,
            year=analysis.focus_year,
            month=analysis.focus_month,
            min_quantity=analysis.min_quantity,
        ),
        "high_value_sales": lambda df: queries.high_value_sales(df, analysis.high_value_threshold),
        # Aggregates and rankings
        "sale_date_range": queries.sale_date_range,
        "total_sales_by_category": queries.total_sales_by_category,
        "transactions_by_category_gender": queries.transactions_by_category_gender,
        "top_hours": lambda df: queries.top_hours(df, analysis.top_hours),
        "best_month_per_year": lambda df: queries.best_month_per_year(
            df, analysis.best_period_rank, analysis.average_precision
        ),
        "top_customers": lambda df: queries.top_customers(df, analysis.top_customers),
        "unique_customers_by_category": queries.unique_customers_by_category,
        "orders_by_shift": queries.orders_by_shift,
    }


@dataclass
class ReportResult:
    """Result of one report query"""
    query: str
    output_rows: int
    started_at: datetime
    completed_at: datetime
    duration_seconds: float
    data: Optional[pl.DataFrame] = field(default=None, repr=False)
    output_path: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors


class ReportRunner:
    """
    Runs the report catalogue.

    Each query is isolated: a failing query is logged and recorded in its
    ReportResult and the remaining queries still run.

    Example:
        runner = ReportRunner(output_dir="data/reports", output_format="json")
        results = runner.run(clean_df)
    """

    def __init__(
        self,
        output_dir: Optional[str] = None,
        output_format: Optional[str] = None,
        analysis: Optional[AnalysisSettings] = None,
        write_output: bool = True,
    ):
        settings = get_settings()
        self.output_dir = Path(output_dir or settings.data.output_dir)
        self.output_format = (output_format or settings.data.output_format).lower()
        self.write_output = write_output
        self.catalogue = build_catalogue(analysis or settings.analysis)

        if self.output_format not in ("csv", "json", "parquet"):
            raise ValueError(f"Unsupported output format: {self.output_format}")

    def _write_output(self, df: pl.DataFrame, name: str) -> str:
        """Write one report to the output directory"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        output_file = self.output_dir / f"{name}_{timestamp}.{self.output_format}"

        if self.output_format == "csv":
            df.write_csv(output_file)
        elif self.output_format == "json":
            df.write_json(output_file)
        else:
            df.write_parquet(output_file)

        logger.info("Report written", report=name, rows=len(df), file=str(output_file))
        return str(output_file)

    def run_query(self, name: str, df: pl.DataFrame) -> ReportResult:
        """Run one catalogue query by name"""
        if name not in self.catalogue:
            raise KeyError(f"Unknown report: {name}")

        started_at = datetime.now(timezone.utc)
        errors = []
        data = None
        output_file = None

        try:
            data = self.catalogue[name](df)
            if self.write_output:
                output_file = self._write_output(data, name)
        except (AnalyticsError, ValueError, OSError, pl.exceptions.PolarsError) as e:
            logger.error("Report failed", report=name, error=str(e))
            errors.append(str(e))

        completed_at = datetime.now(timezone.utc)

        return ReportResult(
            query=name,
            output_rows=len(data) if data is not None else 0,
            started_at=started_at,
            completed_at=completed_at,
            duration_seconds=(completed_at - started_at).total_seconds(),
            data=data,
            output_path=output_file,
            errors=errors,
        )

    def run(self, df: pl.DataFrame, names: Optional[List[str]] = None) -> Dict[str, ReportResult]:
        """
        Run the catalogue, or the named subset of it, over a cleaned table.

        Args:
            df: Cleaned sales DataFrame
            names: Reports to run, all of them when omitted

        Returns:
            Dictionary of report results by name
        """
        selected = names or list(self.catalogue)
        run_id = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")

        with bound_contextvars(report_run=run_id):
            logger.info("Starting report run", reports=len(selected), rows=len(df))

            # Queries derive calendar and shift columns themselves
            results = {name: self.run_query(name, df) for name in selected}

            failed = [name for name, r in results.items() if not r.succeeded]
            total_duration = sum(r.duration_seconds for r in results.values())
            logger.info(
                "Report run complete",
                succeeded=len(results) - len(failed),
                failed=failed,
                duration_seconds=round(total_duration, 3),
            )
        return results
