"""Roadmap source ingestion.

This package decodes GitHub exports and spreadsheets, maps them into
canonical roadmap items, and aggregates one load in source order.
"""
