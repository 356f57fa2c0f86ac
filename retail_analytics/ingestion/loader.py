"""
Sales Data Loader

Reads the raw sales table from CSV, JSON, NDJSON or Parquet.
Supports:
- Format detection from the file extension
- Configurable null tokens
- File fingerprinting for audit
- Load results with status, row counts and timings
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union
import hashlib

import polars as pl
import structlog
from pydantic import BaseModel

from retail_analytics.config import get_settings

logger = structlog.get_logger(__name__)


class FileFormat(str, Enum):
    """Supported file formats"""
    CSV = "csv"
    JSON = "json"
    JSONL = "jsonl"
    PARQUET = "parquet"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileFormat":
        """Infer the format from a file extension"""
        suffix = Path(path).suffix.lower().lstrip(".")
        if suffix == "ndjson":
            return cls.JSONL
        try:
            return cls(suffix)
        except ValueError:
            raise ValueError(f"Unsupported file format: .{suffix}") from None


class LoadStatus(str, Enum):
    """Load status"""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class LoadConfig:
    """Configuration for loading a sales file"""
    file_path: Union[str, Path]
    file_format: Optional[FileFormat] = None
    delimiter: str = ","
    encoding: str = "utf8"
    skip_rows: int = 0
    null_values: List[str] = field(default_factory=lambda: list(get_settings().data.null_values))
    infer_schema_length: int = 10000

    def resolved_format(self) -> FileFormat:
        return self.file_format or FileFormat.from_path(self.file_path)


class LoadResult(BaseModel):
    """Result of a load operation"""
    file_path: str
    status: LoadStatus
    rows_loaded: int = 0
    columns: List[str] = []
    error_message: Optional[str] = None
    load_duration_seconds: float = 0
    started_at: datetime
    completed_at: Optional[datetime] = None
    file_hash: Optional[str] = None


class SalesLoader:
    """
    Loader for the raw sales table.

    Example:
        loader = SalesLoader()
        df, result = loader.load(LoadConfig(file_path="data/raw/retail_sales.csv"))
    """

    def _compute_file_hash(self, file_path: Path) -> str:
        """Compute MD5 hash of file for audit"""
        hash_md5 = hashlib.md5()
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(4096), b""):
                hash_md5.update(chunk)
        return hash_md5.hexdigest()

    def _read_csv(self, config: LoadConfig) -> pl.DataFrame:
        return pl.read_csv(
            config.file_path,
            separator=config.delimiter,
            encoding=config.encoding,
            skip_rows=config.skip_rows,
            null_values=config.null_values,
            infer_schema_length=config.infer_schema_length,
        )

    def _read_json(self, config: LoadConfig) -> pl.DataFrame:
        return pl.read_json(config.file_path)

    def _read_jsonl(self, config: LoadConfig) -> pl.DataFrame:
        return pl.read_ndjson(config.file_path)

    def _read_parquet(self, config: LoadConfig) -> pl.DataFrame:
        return pl.read_parquet(config.file_path)

    def _read_file(self, config: LoadConfig) -> pl.DataFrame:
        """Read file based on format"""
        readers = {
            FileFormat.CSV: self._read_csv,
            FileFormat.JSON: self._read_json,
            FileFormat.JSONL: self._read_jsonl,
            FileFormat.PARQUET: self._read_parquet,
        }
        return readers[config.resolved_format()](config)

    def load(self, config: LoadConfig) -> Tuple[pl.DataFrame, LoadResult]:
        """
        Load a sales file.

        Failures do not raise: the result carries status FAILED and the
        error message, and the returned DataFrame is empty.

        Args:
            config: File configuration

        Returns:
            The loaded DataFrame and the LoadResult
        """
        file_path = Path(config.file_path)
        started_at = datetime.now(timezone.utc)

        result = LoadResult(
            file_path=str(file_path),
            status=LoadStatus.RUNNING,
            started_at=started_at,
        )

        logger.info("Starting sales load", file=str(file_path))

        df = pl.DataFrame()
        try:
            if not file_path.exists():
                raise FileNotFoundError(f"File not found: {file_path}")

            result.file_hash = self._compute_file_hash(file_path)
            df = self._read_file(config)

            result.status = LoadStatus.COMPLETED
            result.rows_loaded = len(df)
            result.columns = df.columns

            logger.info(
                "Sales load completed",
                file=str(file_path),
                rows=result.rows_loaded,
            )

        except (OSError, ValueError, pl.exceptions.PolarsError) as e:
            logger.error("Sales load failed", file=str(file_path), error=str(e))
            result.status = LoadStatus.FAILED
            result.error_message = str(e)
            df = pl.DataFrame()

        result.completed_at = datetime.now(timezone.utc)
        result.load_duration_seconds = (result.completed_at - started_at).total_seconds()

        return df, result


def load_sales(path: Union[str, Path], file_format: Optional[FileFormat] = None) -> pl.DataFrame:
    """
    Convenience function to load a sales file, raising on failure.

    Args:
        path: File to read
        file_format: Explicit format, inferred from the extension when omitted

    Returns:
        Raw sales DataFrame
    """
    df, result = SalesLoader().load(LoadConfig(file_path=path, file_format=file_format))
    if result.status == LoadStatus.FAILED:
        raise IOError(result.error_message)
    return df
