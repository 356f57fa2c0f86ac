"""
Command Line Entry Point

Usage:
    Generate a demo table:  retail-analytics generate --rows 2000 --output data/raw/retail_sales.csv
    Run the reports:        retail-analytics report --input data/raw/retail_sales.csv --format json
"""

import argparse
import sys
from typing import List, Optional

import polars as pl

from retail_analytics.analytics.errors import DataQualityError
from retail_analytics.config import get_settings
from retail_analytics.config.logging import configure_logging, get_logger
from retail_analytics.data.generators import write_dataset
from retail_analytics.ingestion.loader import LoadConfig, LoadStatus, SalesLoader
from retail_analytics.quality.validators import create_sales_validator
from retail_analytics.reporting.runner import ReportRunner
from retail_analytics.transformation.cleaners import SalesCleaner

logger = get_logger(__name__)


def run_generate(args: argparse.Namespace) -> int:
    path = write_dataset(args.output, n=args.rows, seed=args.seed)
    print(f"Wrote {args.rows:,} transactions to {path}")
    return 0


def run_report(args: argparse.Namespace) -> int:
    settings = get_settings()
    input_path = args.input or settings.data.input_path

    df, load_result = SalesLoader().load(LoadConfig(file_path=input_path))
    if load_result.status == LoadStatus.FAILED:
        print(f"Could not load {input_path}: {load_result.error_message}", file=sys.stderr)
        return 1

    df, stats = SalesCleaner().clean(df)
    print(
        f"Loaded {stats.total_rows:,} rows, {stats.rows_after_cleaning:,} after cleaning "
        f"({stats.incomplete_rows_removed} incomplete, {stats.duplicates_removed} duplicates removed)"
    )

    if args.validate:
        validation = create_sales_validator().validate(df)
        try:
            validation.raise_for_errors()
        except DataQualityError as e:
            logger.error("Validation blocked the report run", failed=e.failed_checks)
            print(str(e), file=sys.stderr)
            return 2

    runner = ReportRunner(
        output_dir=args.output_dir,
        output_format=args.format,
        write_output=not args.no_write,
    )
    unknown = [name for name in args.only or [] if name not in runner.catalogue]
    if unknown:
        print(f"Unknown reports: {unknown}; choose from {list(runner.catalogue)}", file=sys.stderr)
        return 1

    results = runner.run(df, names=args.only or None)

    with pl.Config(tbl_rows=args.max_rows, tbl_cols=-1):
        for name, result in results.items():
            print(f"\n== {name} ({result.output_rows} rows) ==")
            if result.succeeded:
                print(result.data)
            else:
                print(f"FAILED: {'; '.join(result.errors)}")

    return 0 if all(r.succeeded for r in results.values()) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retail-analytics", description="Retail sales reporting")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument("--log-format", choices=["json", "text"], default=None, help="Override LOG_FORMAT")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write a synthetic raw sales table")
    generate.add_argument("--rows", type=int, default=2000, help="Number of transactions (default: 2000)")
    generate.add_argument("--output", required=True, help="CSV file to write")
    generate.add_argument("--seed", type=int, default=None, help="Random seed")
    generate.set_defaults(handler=run_generate)

    report = subparsers.add_parser("report", help="Clean a sales table and run the reports")
    report.add_argument("--input", default=None, help="Sales file (default: DATA_INPUT_PATH)")
    report.add_argument("--output-dir", default=None, help="Report directory (default: DATA_OUTPUT_DIR)")
    report.add_argument("--format", choices=["csv", "json", "parquet"], default=None, help="Report file format")
    report.add_argument("--no-write", action="store_true", help="Print reports without writing files")
    report.add_argument("--validate", action="store_true", help="Stop if data quality checks fail")
    report.add_argument("--only", action="append", help="Run only this report (repeatable)")
    report.add_argument("--max-rows", type=int, default=20, help="Rows printed per report")
    report.set_defaults(handler=run_report)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_format)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
