"""Render pipeline wiring."""

from hexfront.pipeline.engine import TerritoryEngine
from hexfront.pipeline.models import RenderFrame, RetryPolicy

__all__ = [
    "TerritoryEngine",
    "RenderFrame",
    "RetryPolicy",
]
