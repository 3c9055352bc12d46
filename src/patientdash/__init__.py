"""package for the patient disease dashboard.

This package contains modules for fetching patient records, aggregating
them into disease counts and rendering charts and maps.  See subpackages
for specific functionality.
"""

__all__ = [
    "paths",
    "config",
    "models",
    "aggregate",
    "dashboard",
    "cli",
    "ingest",
    "viz",
]
