"""
Unit Tests - Data Transformation
"""
from datetime import date, time

import pytest
import polars as pl

from retail_analytics.data.models import SALES_SCHEMA
from retail_analytics.transformation.cleaners import SalesCleaner, clean_sales
from retail_analytics.transformation.enrichers import SalesEnricher, enrich_sales


class TestSalesCleaner:
    """Tests for SalesCleaner"""

    def test_clean_produces_sales_schema(self, raw_sales_df):
        """Test cleaned columns and types match the sales schema"""
        result, _ = SalesCleaner().clean(raw_sales_df)

        assert result.columns == list(SALES_SCHEMA)
        assert result.schema["sale_date"] == pl.Date
        assert result.schema["sale_time"] == pl.Time
        assert result.schema["price_per_unit"] == pl.Float64
        assert result.schema["total_sale"] == pl.Float64
        assert result.schema["quantity"] == pl.Int64

    def test_clean_stats(self, raw_sales_df):
        """Test incomplete and duplicate rows are counted"""
        result, stats = SalesCleaner().clean(raw_sales_df)

        assert stats.total_rows == 5
        assert stats.incomplete_rows_removed == 1
        assert stats.duplicates_removed == 1
        assert stats.rows_after_cleaning == 3 == len(result)
        assert stats.columns_dropped == ["age", "cogs"]

    def test_incomplete_rows_removed(self, raw_sales_df):
        """Test rows without measures are deleted"""
        result = clean_sales(raw_sales_df)

        assert result["transactions_id"].to_list() == [1, 2, 4]

    def test_strings_trimmed(self, raw_sales_df):
        """Test surrounding whitespace is stripped"""
        result = clean_sales(raw_sales_df)

        assert result["gender"].to_list() == ["Male", "Female", "Female"]

    def test_dates_and_times_parsed(self, raw_sales_df):
        """Test text dates and times become temporal values"""
        result = clean_sales(raw_sales_df)

        assert result["sale_date"][0] == date(2022, 11, 5)
        assert result["sale_time"][1] == time(19, 10)

    def test_column_names_normalized(self):
        """Test headers are lower-cased and misspellings fixed"""
        df = pl.DataFrame({"Transactions_ID": [1], " Quantiy ": [2], "total_sale": [10.0], "price_per_unit": [5.0]})

        result = clean_sales(df)

        assert "transactions_id" in result.columns
        assert "quantity" in result.columns

    def test_keep_custom_columns(self, raw_sales_df):
        """Test drop list can be overridden"""
        result, stats = SalesCleaner(drop_columns=["cogs"]).clean(raw_sales_df)

        assert "age" in result.columns
        assert stats.columns_dropped == ["cogs"]


class TestSalesEnricher:
    """Tests for SalesEnricher"""

    def test_time_features(self, sample_sales_df):
        """Test year, month and hour are derived"""
        result = SalesEnricher().add_time_features(sample_sales_df)

        assert result["sale_year"].to_list()[:2] == [2022, 2022]
        assert result["sale_month"].to_list()[-1] == 2
        assert result["sale_hour"].to_list()[:3] == [9, 14, 20]

    def test_shift_labels(self, sample_sales_df):
        """Test shift is derived from the sale hour"""
        result = enrich_sales(sample_sales_df)

        assert result["shift"].to_list()[:4] == ["Morning", "Afternoon", "Evening", "Afternoon"]

    def test_enrich_is_idempotent(self, sample_sales_df):
        """Test enriching twice changes nothing"""
        once = enrich_sales(sample_sales_df)
        twice = enrich_sales(once)

        assert once.equals(twice)

    def test_missing_time_column_skipped(self, sample_sales_df):
        """Test frames without sale_time get no hour or shift"""
        result = enrich_sales(sample_sales_df.drop("sale_time"))

        assert "sale_year" in result.columns
        assert "sale_hour" not in result.columns
        assert "shift" not in result.columns
