"""CPI lookup service backed by the BLS public timeseries API."""

__version__ = "0.1.0"
