"""Visibility state: the single owner of per-node on/off flags.

Stored state is one boolean per node id. ``partial`` is derived for display
and never stored. The only mutation entry point is ``toggle``.

Usage:
    state = VisibilityState.with_defaults(LayerTree.from_taxonomy())
    state.toggle("structures.logistics")      # off, remembers children
    state.toggle("structures.logistics")      # on, restores children
    shown = state.filter_by_visibility(snapshot.entities)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum

from hexfront.core.enums import KindTag
from hexfront.core.models import Entity
from hexfront.visibility.taxonomy import DEFAULT_OFF_ROOTS
from hexfront.visibility.tree import LayerTree

logger = logging.getLogger(__name__)


class DisplayState(Enum):
    """Tri-state indicator for UI rendering."""

    ON = "on"
    OFF = "off"
    PARTIAL = "partial"


class VisibilityState:
    """Per-node visibility flags over a LayerTree.

    Toggling an internal node off records the flags of all its descendants and
    switches them off. Toggling it back on restores that record if any
    descendant was on in it; otherwise every descendant defaults to on.

    Args:
        tree: Layer tree the flags refer to.
        flags: Initial flags by node id. Missing ids default to off.

    Raises:
        KeyError: If ``flags`` names a node not in the tree.
    """

    def __init__(self, tree: LayerTree, flags: Mapping[str, bool] | None = None) -> None:
        self._tree = tree
        self._flags: dict[str, bool] = dict.fromkeys(tree.node_ids, False)
        self._saved: dict[str, dict[str, bool]] = {}
        for node_id, value in (flags or {}).items():
            self._tree.get(node_id)
            self._flags[node_id] = bool(value)

    @classmethod
    def with_defaults(
        cls, tree: LayerTree, off_roots: Iterable[str] = DEFAULT_OFF_ROOTS
    ) -> VisibilityState:
        """Everything on except the ``off_roots`` branches, which are fully off."""
        hidden = set(off_roots)
        flags = {node.id: tree.root_of(node.id) not in hidden for node in tree}
        return cls(tree, flags)

    @classmethod
    def from_preferences(
        cls,
        tree: LayerTree,
        preferences: Mapping[str, bool] | None,
        off_roots: Iterable[str] = DEFAULT_OFF_ROOTS,
    ) -> VisibilityState:
        """Defaults overlaid with persisted preferences.

        Ids no longer present in the tree are skipped with a warning.
        """
        state = cls.with_defaults(tree, off_roots)
        for node_id, value in (preferences or {}).items():
            if node_id not in tree:
                logger.warning("Ignoring visibility preference for unknown node %s", node_id)
                continue
            state._flags[node_id] = bool(value)
        return state

    @property
    def tree(self) -> LayerTree:
        return self._tree

    def is_visible(self, node_id: str) -> bool:
        """Stored flag of a node."""
        self._tree.get(node_id)
        return self._flags[node_id]

    def display_state(self, node_id: str) -> DisplayState:
        """ON/OFF for leaves; aggregate of children for internal nodes."""
        return self._display(node_id, {})

    def display_states(self) -> dict[str, DisplayState]:
        """Display state of every node, for indicator rendering."""
        memo: dict[str, DisplayState] = {}
        for node_id in self._tree.node_ids:
            self._display(node_id, memo)
        return memo

    def _display(self, node_id: str, memo: dict[str, DisplayState]) -> DisplayState:
        if node_id in memo:
            return memo[node_id]
        children = self._tree.children(node_id)
        if not children:
            state = DisplayState.ON if self._flags[node_id] else DisplayState.OFF
        else:
            child_states = {self._display(child, memo) for child in children}
            if child_states == {DisplayState.ON}:
                state = DisplayState.ON
            elif child_states == {DisplayState.OFF}:
                state = DisplayState.OFF
            else:
                state = DisplayState.PARTIAL
        memo[node_id] = state
        return state

    def toggle(self, node_id: str) -> bool:
        """Flip a node. Returns the node's new flag.

        Leaves flip directly. Internal nodes cascade to their descendants,
        saving descendant flags on the way off and restoring them on the way on.
        """
        node = self._tree.get(node_id)
        if node.is_leaf:
            self._flags[node_id] = not self._flags[node_id]
            return self._flags[node_id]

        descendants = self._tree.descendants(node_id)
        if self._flags[node_id]:
            self._saved[node_id] = {d: self._flags[d] for d in descendants}
            for d in descendants:
                self._flags[d] = False
            self._flags[node_id] = False
            return False

        self._flags[node_id] = True
        saved = self._saved.pop(node_id, None)
        if saved is not None and any(saved.values()):
            self._flags.update(saved)
        else:
            for d in descendants:
                self._flags[d] = True
        return True

    def is_tag_visible(self, tag: KindTag) -> bool:
        """True iff ``tag`` maps to a leaf whose flag is on. Unknown tags are hidden."""
        leaf = self._tree.leaf_for(tag)
        return leaf is not None and self._flags[leaf.id]

    def filter_by_visibility(self, entities: Iterable[Entity]) -> list[Entity]:
        """Entities whose kind is currently visible, in input order."""
        return [entity for entity in entities if self.is_tag_visible(entity.kind)]

    def visible_tags(self) -> frozenset[KindTag]:
        return frozenset(tag for tag in KindTag.known() if self.is_tag_visible(tag))

    def as_preferences(self) -> dict[str, bool]:
        """Copy of the stored flags, keyed by node id, for persistence."""
        return dict(self._flags)
