"""Roadmap exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Per-field fallbacks during mapping are never raised; only structural
failures at a call boundary surface as exceptions.
"""

from __future__ import annotations


class RoadmapError(Exception):
    """Base exception for all roadmap failures."""


class RoadmapConfigError(RoadmapError):
    """Raised for invalid runtime configuration or column mappings."""


class RoadmapInputError(RoadmapError):
    """Raised when raw input is structurally invalid or unreadable."""


class RoadmapStoreError(RoadmapError):
    """Raised for roadmap persistence failures."""


class RoadmapDependencyError(RoadmapError):
    """Raised when an optional runtime dependency is missing."""
