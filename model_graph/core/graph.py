"""Core Graph class: a small directed graph store for model graphs."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Generic, List, Optional, Set, Tuple, TypeVar, Union

logger = logging.getLogger(__name__)

N = TypeVar("N")
E = TypeVar("E")

# A node is referenced by its numeric id or by the string alias it was created with.
NodeRef = Union[int, str]


class Graph(Generic[N, E]):
    """A directed graph with labelled nodes and edges.

    Nodes get monotonically increasing numeric ids and may additionally be
    registered under a caller-chosen string alias. Every operation that takes
    a node accepts either. There is at most one edge per ordered pair of
    nodes; adding the same pair again replaces the label.

    Example::

        from model_graph.core.graph import Graph

        graph = Graph()
        a = graph.add_node("A", "node-a")
        b = graph.add_node("B")
        graph.add_edge("node-a", b, "A->B")
    """

    def __init__(self, definitely_acyclic: bool = False) -> None:
        """
        Args:
            definitely_acyclic: Hint for layout code that the graph has no
                cycles. Set by builders, never verified by the store.
        """
        self.definitely_acyclic = definitely_acyclic

        self._nodes: Dict[int, N] = {}
        self._aliases: Dict[str, int] = {}
        self._alias_of: Dict[int, str] = {}

        # (from, to) -> (edge id, label), in insertion order
        self._edges: Dict[Tuple[int, int], Tuple[int, E]] = {}
        # adjacency list: node id -> (from, to) pairs touching it (both directions)
        self._adj: Dict[int, Set[Tuple[int, int]]] = defaultdict(set)

        self._last_node_id = 0
        self._last_edge_id = 0

    def _resolve(self, ref: NodeRef) -> Optional[int]:
        if isinstance(ref, str):
            return self._aliases.get(ref)
        if ref in self._nodes:
            return ref
        return None

    # ── Node operations ──────────────────────────────────────────────

    def add_node(self, label: N, alias: Optional[str] = None) -> int:
        """Add a node and return its id.

        If ``alias`` already names a node, that node's label is replaced
        and its existing id is returned.
        """
        if alias is not None and alias in self._aliases:
            node_id = self._aliases[alias]
            self._nodes[node_id] = label
            return node_id

        self._last_node_id += 1
        node_id = self._last_node_id
        self._nodes[node_id] = label
        if alias is not None:
            self._aliases[alias] = node_id
            self._alias_of[node_id] = alias
        return node_id

    def add_or_update_node(
        self, ref: NodeRef, updater: Callable[[Optional[N]], N]
    ) -> int:
        """Create a node or update the label of an existing one.

        ``updater`` receives the current label (``None`` if the node does
        not exist yet) and returns the new one. An unknown alias creates a
        node registered under it; an unknown numeric id creates a node with
        a fresh id.
        """
        node_id = self._resolve(ref)
        if node_id is None:
            alias = ref if isinstance(ref, str) else None
            return self.add_node(updater(None), alias)

        self._nodes[node_id] = updater(self._nodes[node_id])
        return node_id

    def has_node(self, ref: NodeRef) -> bool:
        return self._resolve(ref) is not None

    def get_node(self, ref: NodeRef) -> Optional[int]:
        """Return the numeric id of a node, or None if not found."""
        return self._resolve(ref)

    def get_node_label(self, ref: NodeRef) -> Optional[N]:
        node_id = self._resolve(ref)
        if node_id is None:
            return None
        return self._nodes[node_id]

    def get_node_string(self, ref: NodeRef) -> Optional[str]:
        """Return the alias a node was registered under, if any."""
        node_id = self._resolve(ref)
        if node_id is None:
            return None
        return self._alias_of.get(node_id)

    def delete_node(self, ref: NodeRef) -> bool:
        """Remove a node and all its edges. Returns True if the node existed."""
        node_id = self._resolve(ref)
        if node_id is None:
            return False

        del self._nodes[node_id]
        alias = self._alias_of.pop(node_id, None)
        if alias is not None:
            del self._aliases[alias]

        for pair in self._adj.pop(node_id, set()):
            self._edges.pop(pair, None)
            # Remove the pair from the other endpoint's adjacency entry
            other = pair[1] if pair[0] == node_id else pair[0]
            if other in self._adj:
                self._adj[other].discard(pair)
                if not self._adj[other]:
                    del self._adj[other]
        return True

    # ── Edge operations ──────────────────────────────────────────────

    def add_edge(self, source: NodeRef, target: NodeRef, label: E) -> bool:
        """Add an edge between two existing nodes.

        Returns False (and logs a warning) if either endpoint is unknown.
        """
        source_id = self._resolve(source)
        if source_id is None:
            logger.warning("unknown from %r", source)
            return False
        target_id = self._resolve(target)
        if target_id is None:
            logger.warning("unknown to %r", target)
            return False

        pair = (source_id, target_id)
        existing = self._edges.get(pair)
        if existing is not None:
            self._edges[pair] = (existing[0], label)
            return True

        self._last_edge_id += 1
        self._edges[pair] = (self._last_edge_id, label)
        self._adj[source_id].add(pair)
        self._adj[target_id].add(pair)
        return True

    def has_edge(self, source: NodeRef, target: NodeRef) -> bool:
        return self._pair(source, target) in self._edges

    def get_edge_label(self, source: NodeRef, target: NodeRef) -> Optional[E]:
        entry = self._edges.get(self._pair(source, target))
        if entry is None:
            return None
        return entry[1]

    def delete_edge(self, source: NodeRef, target: NodeRef) -> bool:
        """Remove a specific edge. Returns True if the edge existed."""
        pair = self._pair(source, target)
        if self._edges.pop(pair, None) is None:
            return False
        for endpoint in pair:
            if endpoint in self._adj:
                self._adj[endpoint].discard(pair)
                if not self._adj[endpoint]:
                    del self._adj[endpoint]
        return True

    def _pair(self, source: NodeRef, target: NodeRef) -> Tuple[Optional[int], Optional[int]]:
        return (self._resolve(source), self._resolve(target))

    # ── Snapshots ────────────────────────────────────────────────────

    def get_nodes(self) -> List[Tuple[int, N]]:
        """Return ``(id, label)`` for every node, in insertion order."""
        return list(self._nodes.items())

    def get_edges(self) -> List[Tuple[int, int, int, E]]:
        """Return ``(id, from, to, label)`` for every edge, in insertion order."""
        return [
            (edge_id, source, target, label)
            for (source, target), (edge_id, label) in self._edges.items()
        ]

    def to_json(self) -> Dict[str, Any]:
        """Structural snapshot of the graph; labels are passed through as is."""
        return {
            "nodes": [[node_id, label] for node_id, label in self.get_nodes()],
            "edges": [
                [edge_id, source, target, label]
                for edge_id, source, target, label in self.get_edges()
            ],
        }
