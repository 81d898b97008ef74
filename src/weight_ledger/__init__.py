"""
Weight Ledger - Personal body-weight tracking from the command line.

Records dated weight measurements in a local SQLite file and reports
a recent-average summary and a moving-average history.
"""

__version__ = "0.1.0"
