"""Graph of the bundle/field hierarchy of a path tree.

Every selected bundle and field becomes one node, registered under its
path id. A bundle is connected to its selected child bundles and fields.
Levels are layered so that the fields of a bundle sit between it and its
child bundles:

    publication (0) -> title (1)
                    -> creation (2) -> date (3)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Union

from model_graph.builders.builder import GraphBuilder
from model_graph.pathbuilder.selection import NodeSelection
from model_graph.pathbuilder.tree import Bundle, Field, PathTree


@dataclass(frozen=True)
class BundleNode:
    bundle: Bundle
    level: int

    kind: ClassVar[str] = "bundle"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "bundle": self.bundle.path.id, "level": self.level}


@dataclass(frozen=True)
class FieldNode:
    field: Field
    level: int

    kind: ClassVar[str] = "field"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "field": self.field.path.id, "level": self.level}


@dataclass(frozen=True)
class ChildBundleEdge:
    """From a bundle to one of its child bundles."""

    kind: ClassVar[str] = "child_bundle"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class FieldEdge:
    """From a bundle to one of its fields."""

    kind: ClassVar[str] = "field"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind}


BundleGraphNode = Union[BundleNode, FieldNode]
BundleGraphEdge = Union[ChildBundleEdge, FieldEdge]


def level_of(node: Union[Bundle, Field]) -> int:
    """Layer of ``node``: bundles on even levels, their fields one below."""
    if isinstance(node, Bundle):
        return 2 * (node.depth - 1)
    return 2 * (node.depth - 1) - 1


class BundleGraphBuilder(GraphBuilder[BundleGraphNode, BundleGraphEdge]):
    """Draws the selected part of the bundle hierarchy.

    An edge is only drawn when both the bundle and its child are selected;
    unselected bundles are not bridged over.
    """

    def __init__(self, tree: PathTree, selection: NodeSelection) -> None:
        super().__init__()
        self.tree = tree
        self.selection = selection

    def _build(self) -> None:
        self.graph.definitely_acyclic = True

        for node in self.tree.walk():
            if not isinstance(node, (Bundle, Field)):
                continue
            if not self.selection.includes(node):
                continue

            if isinstance(node, Bundle):
                self.graph.add_node(BundleNode(node, level_of(node)), node.path.id)
            else:
                self.graph.add_node(FieldNode(node, level_of(node)), node.path.id)

            parent = node.parent
            if not isinstance(parent, Bundle) or not self.selection.includes(parent):
                continue

            edge = ChildBundleEdge() if isinstance(node, Bundle) else FieldEdge()
            self.graph.add_edge(parent.path.id, node.path.id, edge)
