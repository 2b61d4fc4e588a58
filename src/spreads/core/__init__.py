"""Core utilities: exceptions, time helpers."""
