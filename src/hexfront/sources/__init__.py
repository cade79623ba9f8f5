"""Collaborator protocols and in-memory implementations."""

from hexfront.sources.memory import (
    InMemoryPreferenceStore,
    InMemoryPushChannel,
    InMemorySnapshotSource,
)
from hexfront.sources.protocol import PreferenceStore, PushChannel, Renderer, SnapshotSource

__all__ = [
    # Protocols
    "SnapshotSource",
    "PushChannel",
    "Renderer",
    "PreferenceStore",
    # In-memory
    "InMemorySnapshotSource",
    "InMemoryPushChannel",
    "InMemoryPreferenceStore",
]
