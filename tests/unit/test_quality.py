"""
Unit Tests - Data Quality
"""
import pytest
import polars as pl

from retail_analytics.analytics.errors import DataQualityError
from retail_analytics.quality.validators import (
    DataValidator,
    ValidationSeverity,
    ValidationStatus,
    create_sales_validator,
)


class TestDataValidator:
    """Tests for DataValidator"""

    def test_not_null_check_fails(self):
        """Test not null check with null values"""
        df = pl.DataFrame({"id": [1, None, 3]})

        result = DataValidator().add_not_null_check("id").validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.checks[0].failed_rows == 1

    def test_unique_check(self):
        """Test unique check with duplicates"""
        df = pl.DataFrame({"id": [1, 2, 1]})

        result = DataValidator().add_unique_check("id").validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.checks[0].failed_rows == 1

    def test_range_check(self):
        """Test range check counts values on both sides"""
        df = pl.DataFrame({"price": [10.0, 50.0, -5.0, 200.0, None]})

        result = DataValidator().add_range_check("price", min_value=0, max_value=100).validate(df)

        assert result.checks[0].failed_rows == 2

    def test_warning_gives_partial(self):
        """Test warning-only failures give PARTIAL status"""
        df = pl.DataFrame({"gender": ["Male", "Unknown"]})

        result = (
            DataValidator()
            .add_enum_check("gender", ["Male", "Female"], severity=ValidationSeverity.WARNING)
            .validate(df)
        )

        assert result.status == ValidationStatus.PARTIAL
        assert result.warning_count == 1
        result.raise_for_errors()

    def test_strict_mode_fails_on_warning(self):
        """Test strict mode treats warnings as failures"""
        df = pl.DataFrame({"gender": ["Unknown"]})

        result = (
            DataValidator(strict_mode=True)
            .add_enum_check("gender", ["Male", "Female"], severity=ValidationSeverity.WARNING)
            .validate(df)
        )

        assert result.status == ValidationStatus.FAILED
        with pytest.raises(DataQualityError) as exc_info:
            result.raise_for_errors()
        assert exc_info.value.failed_checks == ["enum_gender"]

    def test_missing_column_fails(self):
        """Test checks on absent columns fail"""
        result = DataValidator().add_not_null_check("absent").validate(pl.DataFrame({"id": [1]}))

        assert result.status == ValidationStatus.FAILED
        assert "not found" in result.checks[0].message

    def test_success_rate(self):
        """Test success rate over mixed results"""
        df = pl.DataFrame({"id": [1, 1]})

        result = DataValidator().add_not_null_check("id").add_unique_check("id").validate(df)

        assert result.success_rate == 50.0


class TestSalesValidator:
    """Tests for the pre-built sales validator"""

    def test_clean_sales_pass(self, sample_sales_df):
        """Test a clean table passes"""
        result = create_sales_validator().validate(sample_sales_df)

        assert result.status == ValidationStatus.PASSED
        result.raise_for_errors()

    def test_negative_total_raises(self, sample_sales_df):
        """Test negative totals block reporting"""
        df = sample_sales_df.with_columns(pl.col("total_sale") * -1)

        result = create_sales_validator().validate(df)

        assert result.status == ValidationStatus.FAILED
        with pytest.raises(DataQualityError) as exc_info:
            result.raise_for_errors()
        assert "range_total_sale" in exc_info.value.failed_checks

    def test_missing_schema_column(self, sample_sales_df):
        """Test a missing schema column is reported"""
        result = create_sales_validator().validate(sample_sales_df.drop("category"))

        required = next(c for c in result.checks if c.name == "required_columns")
        assert not required.passed
        assert required.details["missing"] == ["category"]
