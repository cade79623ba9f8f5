"""Example data and walkthroughs for hexfront.

This package demonstrates library usage but is not part of the core API.
Run with: python -m examples.render_demo
"""

from .sample_data import RAW_MAP_ITEMS, ingest

__all__ = [
    "RAW_MAP_ITEMS",
    "ingest",
]
