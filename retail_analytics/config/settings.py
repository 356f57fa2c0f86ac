"""
Retail Sales Analytics
Centralized Configuration Management

Pydantic settings for the analytics run: where the sales table comes from,
where reports go, the reporting parameters of each query, and logging.
"""

from datetime import date
from functools import lru_cache
from typing import Optional, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataSettings(BaseSettings):
    """Input and output locations"""

    model_config = SettingsConfigDict(env_prefix="DATA_")

    input_path: str = Field(default="./data/raw/retail_sales.csv", description="Raw sales table")
    output_dir: str = Field(default="./data/reports", description="Report output directory")
    output_format: str = Field(default="csv", description="Report format: csv, json or parquet")
    null_values: List[str] = Field(
        default=["", "NULL", "null", "None", "NA", "N/A"],
        description="Tokens read as null",
    )

    @field_validator("output_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate report format"""
        allowed = ["csv", "json", "parquet"]
        if v.lower() not in allowed:
            raise ValueError(f"Output format must be one of: {allowed}")
        return v.lower()


class AnalysisSettings(BaseSettings):
    """Parameters of the reporting queries"""

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    average_precision: int = Field(default=2, ge=0, description="Decimals kept on averages")
    top_hours: int = Field(default=3, ge=1, description="Busiest hours reported")
    top_customers: int = Field(default=5, ge=1, description="Top customers reported")
    best_period_rank: int = Field(default=1, ge=1, description="Rank cutoff for best month per year")
    high_value_threshold: float = Field(default=1000.0, description="Minimum total for high-value sales")

    # Point-in-time filters
    sales_day: date = Field(default=date(2022, 11, 5), description="Day listed by the daily query")
    focus_category: str = Field(default="Clothing", description="Category of the monthly bulk query")
    focus_year: int = Field(default=2022, description="Year of the monthly bulk query")
    focus_month: int = Field(default=11, ge=1, le=12, description="Month of the monthly bulk query")
    min_quantity: int = Field(default=2, ge=0, description="Quantity must exceed this value")


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="text", alias="LOG_FORMAT", description="Log format: json or text")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="retail-analytics", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Subsystem configurations
    data: DataSettings = Field(default_factory=DataSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
