"""
Analytics Exceptions
"""


class AnalyticsError(Exception):
    """Base class for analytics failures"""


class InvalidSpec(AnalyticsError):
    """Malformed grouping, ranking or selection request"""


class SchemaMismatch(InvalidSpec):
    """A referenced column is absent or has the wrong type"""

    def __init__(self, column: str, available: list, reason: str = "not found"):
        self.column = column
        self.available = list(available)
        super().__init__(f"Column '{column}' {reason}; available columns: {self.available}")


class DataQualityError(AnalyticsError):
    """Validation reported error-severity failures"""

    def __init__(self, failed_checks: list):
        self.failed_checks = list(failed_checks)
        super().__init__(f"Data quality checks failed: {', '.join(self.failed_checks)}")
