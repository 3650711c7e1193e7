"""SQL Server storage adapter for the tsbench time-series benchmark."""

__version__ = "0.1.0"
