"""Roadmap persistence and SDK layer.

This package stores the aggregated load and column mapping as JSON
documents and exposes the client used by the CLI.
"""
