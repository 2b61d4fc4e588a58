"""Upstream data providers (Finnhub, Reddit, Yahoo Finance, StockTwits)."""
