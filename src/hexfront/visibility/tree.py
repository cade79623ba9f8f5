"""Layer tree: tag-indexed hierarchy of visibility nodes.

Usage:
    tree = LayerTree.from_taxonomy()
    leaf = tree.leaf_for(KindTag.REFINERY)
    tree.descendants("structures.logistics")
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from hexfront.core.enums import KindTag
from hexfront.visibility.taxonomy import DEFAULT_TAXONOMY, Category


@dataclass(frozen=True, slots=True)
class VisibilityNode:
    """One node of the visibility hierarchy.

    Leaves govern exactly one tag and have no children. Internal nodes govern
    the union of their descendants' tags.
    """

    id: str
    label: str
    tags: frozenset[KindTag]
    children: tuple[VisibilityNode, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children


def build_node(category: Category, parent_id: str | None = None) -> VisibilityNode:
    """Build the subtree for one taxonomy category."""
    node_id = category.key if parent_id is None else f"{parent_id}.{category.key}"
    leaves = tuple(
        VisibilityNode(
            id=f"{node_id}.{tag.value}",
            label=tag.value.replace("_", " "),
            tags=frozenset({tag}),
        )
        for tag in category.tags
    )
    groups = tuple(build_node(group, node_id) for group in category.groups)
    children = leaves + groups
    tags: frozenset[KindTag] = frozenset().union(*(child.tags for child in children))
    return VisibilityNode(id=node_id, label=category.label, tags=tags, children=children)


class LayerTree:
    """Immutable index over a forest of visibility nodes.

    Args:
        roots: Top-level nodes.
        require_complete: When True, every known KindTag must map to a leaf.

    Raises:
        ValueError: On duplicate node ids, leaves without exactly one tag,
            a tag owned by more than one leaf, a leaf for KindTag.UNKNOWN,
            or (with require_complete) a known tag without a leaf.
    """

    def __init__(self, roots: Sequence[VisibilityNode], require_complete: bool = True) -> None:
        self._roots = tuple(roots)
        self._nodes: dict[str, VisibilityNode] = {}
        self._parents: dict[str, str | None] = {}
        self._leaf_by_tag: dict[KindTag, VisibilityNode] = {}

        for root in self._roots:
            self._index(root, None)

        if require_complete:
            missing = [tag.value for tag in KindTag.known() if tag not in self._leaf_by_tag]
            if missing:
                raise ValueError(f"Tags without a visibility leaf: {', '.join(missing)}")

    @classmethod
    def from_taxonomy(cls, categories: Sequence[Category] = DEFAULT_TAXONOMY) -> LayerTree:
        """Build the tree for a fixed taxonomy."""
        return cls([build_node(category) for category in categories])

    def _index(self, node: VisibilityNode, parent: str | None) -> None:
        if node.id in self._nodes:
            raise ValueError(f"Duplicate visibility node id: {node.id}")
        self._nodes[node.id] = node
        self._parents[node.id] = parent

        if node.is_leaf:
            if len(node.tags) != 1:
                raise ValueError(f"Leaf {node.id} must govern exactly one tag")
            (tag,) = node.tags
            if tag is KindTag.UNKNOWN:
                raise ValueError(f"Leaf {node.id} cannot govern the unknown tag")
            if tag in self._leaf_by_tag:
                raise ValueError(
                    f"Tag {tag.value} mapped by both {self._leaf_by_tag[tag].id} and {node.id}"
                )
            self._leaf_by_tag[tag] = node
            return

        for child in node.children:
            self._index(child, node.id)

    def get(self, node_id: str) -> VisibilityNode:
        """Node by id. Raises KeyError for unknown ids."""
        try:
            return self._nodes[node_id]
        except KeyError:
            raise KeyError(f"Unknown visibility node: {node_id}") from None

    def children(self, node_id: str) -> list[str]:
        return [child.id for child in self.get(node_id).children]

    def descendants(self, node_id: str) -> list[str]:
        """Every node below ``node_id``, pre-order."""
        out: list[str] = []
        stack = list(reversed(self.get(node_id).children))
        while stack:
            current = stack.pop()
            out.append(current.id)
            stack.extend(reversed(current.children))
        return out

    def descendant_leaves(self, node_id: str) -> list[str]:
        return [d for d in self.descendants(node_id) if self._nodes[d].is_leaf]

    def ancestors(self, node_id: str) -> list[str]:
        """Parents of ``node_id`` from nearest to root."""
        self.get(node_id)
        out: list[str] = []
        current = self._parents[node_id]
        while current is not None:
            out.append(current)
            current = self._parents[current]
        return out

    def root_of(self, node_id: str) -> str:
        ancestors = self.ancestors(node_id)
        return ancestors[-1] if ancestors else node_id

    def leaf_for(self, tag: KindTag) -> VisibilityNode | None:
        """Leaf governing ``tag``, or None (always None for KindTag.UNKNOWN)."""
        return self._leaf_by_tag.get(tag)

    @property
    def roots(self) -> tuple[VisibilityNode, ...]:
        return self._roots

    @property
    def node_ids(self) -> list[str]:
        """All node ids, pre-order."""
        return list(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[VisibilityNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)
