"""Data model for multi-pair trading backtests: assets, leveraged positions, orders, order books and market data."""

__version__ = "0.1.0"