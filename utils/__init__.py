"""Logging, cost calculation and response parsing helpers."""
