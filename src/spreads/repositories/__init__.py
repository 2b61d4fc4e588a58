"""Persistence layer: keyed store adapters and record repositories."""
