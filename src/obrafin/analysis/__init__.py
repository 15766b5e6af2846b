"""
Analysis Package

Tabular and graphical outputs of the ledger views.

Key Components:
- tables: pandas DataFrames of cashflow, transactions and other derived rows; CSV export
- chart: Monthly cashflow chart with closing-balance trend
"""

from .chart import closing_trend, generate_cashflow_chart
from .tables import cashflow_to_dataframe, export_csv, records_to_dataframe, transactions_to_dataframe

__all__ = [
    "cashflow_to_dataframe",
    "closing_trend",
    "export_csv",
    "generate_cashflow_chart",
    "records_to_dataframe",
    "transactions_to_dataframe",
]
