"""Shared helpers: validation, dates, admin checks and metrics."""
