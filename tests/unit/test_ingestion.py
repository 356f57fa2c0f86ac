"""
Unit Tests - Data Generation and Loading
"""
import pytest
import polars as pl

from retail_analytics.data.generators import SalesGenerator, write_dataset
from retail_analytics.ingestion.loader import (
    FileFormat,
    LoadConfig,
    LoadStatus,
    SalesLoader,
    load_sales,
)
from retail_analytics.transformation.cleaners import SalesCleaner

RAW_COLUMNS = [
    "transactions_id", "sale_date", "sale_time", "customer_id", "gender",
    "age", "category", "quantity", "price_per_unit", "cogs", "total_sale",
]


class TestSalesGenerator:
    """Tests for SalesGenerator"""

    def test_raw_layout(self):
        """Test generated table has the source columns"""
        df = SalesGenerator(seed=1).generate(50)

        assert df.columns == RAW_COLUMNS
        assert len(df) == 50
        assert df["transactions_id"].n_unique() == 50

    def test_same_seed_same_data(self):
        """Test generation is reproducible"""
        first = SalesGenerator(seed=7).generate(100)
        second = SalesGenerator(seed=7).generate(100)

        assert first.equals(second)

    def test_totals_match_quantity_times_price(self):
        df = SalesGenerator(seed=3, null_rate=0.0).generate(100)

        assert (df["quantity"] * df["price_per_unit"]).equals(df["total_sale"], check_names=False)

    def test_missing_measures_removed_by_cleaning(self):
        """Test injected gaps are dropped by the cleaner"""
        raw = SalesGenerator(seed=5, null_rate=0.3).generate(200)

        clean, stats = SalesCleaner().clean(raw)

        assert raw["total_sale"].null_count() > 0
        assert stats.incomplete_rows_removed == raw["total_sale"].null_count()
        assert clean["total_sale"].null_count() == 0
        assert len(clean) == 200 - stats.incomplete_rows_removed


class TestFileFormat:
    """Tests for format detection"""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("sales.csv", FileFormat.CSV),
            ("sales.JSON", FileFormat.JSON),
            ("sales.ndjson", FileFormat.JSONL),
            ("dir/sales.parquet", FileFormat.PARQUET),
        ],
    )
    def test_from_path(self, path, expected):
        assert FileFormat.from_path(path) == expected

    def test_unsupported_extension(self):
        with pytest.raises(ValueError):
            FileFormat.from_path("sales.txt")


class TestSalesLoader:
    """Tests for SalesLoader"""

    def test_load_csv(self, tmp_path):
        """Test a generated CSV loads with every row"""
        path = write_dataset(tmp_path / "raw" / "sales.csv", n=40, seed=11)

        df, result = SalesLoader().load(LoadConfig(file_path=path))

        assert result.status == LoadStatus.COMPLETED
        assert result.rows_loaded == 40
        assert result.columns == RAW_COLUMNS
        assert result.file_hash is not None
        assert len(df) == 40

    def test_load_parquet(self, tmp_path, sample_sales_df):
        path = tmp_path / "sales.parquet"
        sample_sales_df.write_parquet(path)

        df = load_sales(path)

        assert df.equals(sample_sales_df)

    def test_missing_file_fails(self, tmp_path):
        """Test a missing file gives FAILED and an empty frame"""
        df, result = SalesLoader().load(LoadConfig(file_path=tmp_path / "absent.csv"))

        assert result.status == LoadStatus.FAILED
        assert "not found" in result.error_message
        assert df.height == 0

    def test_unsupported_file_fails(self, tmp_path):
        path = tmp_path / "sales.txt"
        path.write_text("transactions_id\n1\n")

        _, result = SalesLoader().load(LoadConfig(file_path=path))

        assert result.status == LoadStatus.FAILED

    def test_load_sales_raises(self, tmp_path):
        """Test the convenience loader raises on failure"""
        with pytest.raises(IOError):
            load_sales(tmp_path / "absent.csv")

    def test_null_tokens(self, tmp_path):
        """Test configured null tokens are read as null"""
        path = tmp_path / "sales.csv"
        path.write_text("transactions_id,total_sale\n1,10.5\n2,NULL\n")

        df, _ = SalesLoader().load(LoadConfig(file_path=path))

        assert df["total_sale"].to_list() == [10.5, None]
