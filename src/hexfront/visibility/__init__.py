"""Layer visibility: tag taxonomy, layer tree and tri-state visibility."""

from hexfront.visibility.state import DisplayState, VisibilityState
from hexfront.visibility.taxonomy import (
    DEFAULT_OFF_ROOTS,
    DEFAULT_TAXONOMY,
    RESOURCES,
    STRUCTURES,
    Category,
    label_to_key,
)
from hexfront.visibility.tree import LayerTree, VisibilityNode, build_node

__all__ = [
    # Taxonomy
    "Category",
    "STRUCTURES",
    "RESOURCES",
    "DEFAULT_TAXONOMY",
    "DEFAULT_OFF_ROOTS",
    "label_to_key",
    # Tree
    "VisibilityNode",
    "LayerTree",
    "build_node",
    # State
    "DisplayState",
    "VisibilityState",
]
