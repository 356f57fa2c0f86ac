"""
Retail Sales Analytics

Descriptive reporting over a single sales-transaction table.
"""

__version__ = "1.0.0"
