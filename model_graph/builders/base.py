"""Abstract deduplicating builder that turns a path tree into a model graph.

The builder walks the tree once, in pre-order. For every concept element of
every bundle or field it asks a strategy (the concrete subclass) for a
*context*: an opaque equivalence key. Two positions in the tree that end up
with the same ``(context, kind, uri)`` collapse into a single graph node.

Contexts
========
  - ``False``   : do not draw the node
  - ``True``    : (spec only) draw in a fresh context, resolved to a new int
  - ``str``     : a stable, strategy-chosen key
  - ``int``     : a fresh context created by this builder
  - ``tuple``   : a composite key of strings and ints

Strategies MUST NOT invent int contexts; only ``True`` creates them.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple, Union
from urllib.parse import urlencode

from model_graph.core.graph import Graph
from model_graph.core.models import (
    ConceptModelNode,
    DataModelEdge,
    LiteralModelNode,
    ModelEdge,
    ModelNode,
    PropertyModelEdge,
)
from model_graph.pathbuilder.inversemap import InverseMap
from model_graph.pathbuilder.tree import (
    Bundle,
    ConceptPathElement,
    Field,
    PathElement,
    PathTree,
    PathTreeNode,
    PropertyPathElement,
)

logger = logging.getLogger(__name__)

NodeContext = Union[bool, int, str, Tuple[Union[int, str], ...]]
NodeContextSpec = Union[NodeContext, List[Union[int, str]]]

# Marks contexts built by _wrap_datatype_context; fresh contexts are always positive.
_DATATYPE_SENTINEL = -1

_NODE_KINDS = ("class", "data")


class BuildError(RuntimeError):
    """Raised when the builder's own invariants are violated."""


@dataclass
class DedupOptions:
    """Options shared by all deduplicating builders.

    Attributes:
        inverses: Inverse property pairs used to canonicalize edges.
        include: Predicate deciding which bundles and fields are drawn.
            Nodes it rejects still get contexts, so their descendants can
            share with them, but no graph nodes or edges of their own.
            Defaults to including everything.
    """

    inverses: InverseMap = field(default_factory=InverseMap)
    include: Optional[Callable[[PathTreeNode], bool]] = None


class DeduplicatingBuilder(ABC):
    """Builds a model graph, deduplicating nodes within contexts."""

    def __init__(
        self,
        tree: PathTree,
        options: DedupOptions,
        graph: Graph[ModelNode, ModelEdge],
    ) -> None:
        self.tree = tree
        self.graph = graph
        self._options = options

        # edges already drawn, keyed by (source, target[, uri])
        self._tracker: Set[Tuple[Union[int, str], ...]] = set()
        self._last_context = 0

    def prepare(self) -> None:
        """Hook run once before the tree is walked."""

    def build(self) -> None:
        self.prepare()

        node_contexts: Dict[PathTreeNode, List[NodeContext]] = {}
        for node in self.tree.walk():
            if not isinstance(node, (Bundle, Field)):
                continue
            node_contexts[node] = self.build_node(node_contexts, node)

    def _includes(self, node: PathTreeNode) -> bool:
        if self._options.include is None:
            return True
        return self._options.include(node)

    # ── Per-node construction ────────────────────────────────────────

    def build_node(
        self,
        node_contexts: Dict[PathTreeNode, List[NodeContext]],
        node: Union[Bundle, Field],
    ) -> List[NodeContext]:
        """Draw a single bundle or field and return its per-concept contexts.

        The returned list is indexed by concept index; fields with a
        datatype property have the datatype context appended at the end.
        """
        omitted = not self._includes(node)
        parent_contexts = node_contexts.get(node.parent, [])
        elements = list(node.elements())

        contexts: List[NodeContext] = []
        nodes: List[Optional[int]] = [None] * len(elements)

        self._draw_concepts(node, elements, omitted, parent_contexts, contexts, nodes)
        self._draw_properties(node, elements, nodes)

        if isinstance(node, Field) and node.path.datatype_property != "":
            self._draw_datatype(node, elements, omitted, contexts, nodes)
        elif isinstance(node, Field):
            self._annotate_last_concept(
                node, elements, omitted, nodes, lambda label: label.with_field(node)
            )
        else:
            self._annotate_last_concept(
                node, elements, omitted, nodes, lambda label: label.with_bundle(node)
            )

        return contexts

    def _draw_concepts(
        self,
        node: Union[Bundle, Field],
        elements: List[PathElement],
        omitted: bool,
        parent_contexts: List[NodeContext],
        contexts: List[NodeContext],
        nodes: List[Optional[int]],
    ) -> None:
        context: NodeContext = False
        for element in elements:
            if element.type != "concept":
                continue

            parent: NodeContext = False
            if element.concept_index < len(parent_contexts):
                parent = parent_contexts[element.concept_index]

            spec = self.get_concept_context(
                element, elements, omitted, context, node, parent
            )
            context = self._resolve_context_spec(spec)
            contexts.append(context)

            if context is False or omitted:
                continue

            if element.uri == "":
                logger.warning(
                    "Empty concept URI at position %d of %r, skipping it",
                    element.index,
                    node.path.id,
                )
                continue

            nodes[element.index] = self.graph.add_or_update_node(
                self._make_id(context, "class", element.uri),
                _concept_updater(element.uri),
            )

    def _draw_properties(
        self,
        node: Union[Bundle, Field],
        elements: List[PathElement],
        nodes: List[Optional[int]],
    ) -> None:
        # properties strictly between two concepts
        for index in range(1, len(elements) - 1, 2):
            element = elements[index]
            if element.type != "property" or element.role == "datatype":
                continue

            source, target = nodes[index - 1], nodes[index + 1]
            if source is None or target is None:
                continue

            if element.uri == "":
                logger.warning(
                    "Empty property URI at position %d of %r, skipping it",
                    index,
                    node.path.id,
                )
                continue

            uri, inverse, source, target = self._options.inverses.canonicalize_edge(
                element.uri, source, target
            )
            key = (source, target, uri)
            if key in self._tracker:
                continue
            self._tracker.add(key)

            self.graph.add_edge(source, target, PropertyModelEdge(uri, inverse))

    def _draw_datatype(
        self,
        node: Field,
        elements: List[PathElement],
        omitted: bool,
        contexts: List[NodeContext],
        nodes: List[Optional[int]],
    ) -> None:
        if not elements:
            return

        data_element = next((e for e in elements if e.role == "datatype"), None)
        if data_element is None:
            logger.warning("Missing datatype element in field %r", node.path.id)
            return

        last_concept = data_element.index - 1
        source_concept = elements[last_concept] if last_concept >= 0 else None
        if source_concept is None or source_concept.type != "concept":
            logger.warning(
                "No concept precedes the datatype property of field %r, "
                "skipping datatype annotation",
                node.path.id,
            )
            return

        parent: NodeContext = False
        if source_concept.concept_index < len(contexts):
            parent = contexts[source_concept.concept_index]

        spec = self.get_datatype_context(data_element, elements, omitted, node, parent)
        context = self._resolve_context_spec(
            self._wrap_datatype_context(data_element, elements, parent, spec)
        )
        contexts.append(context)

        if context is False or omitted:
            return

        target = self.graph.add_or_update_node(
            self._make_id(context, "data", data_element.uri),
            _literal_updater(node),
        )

        source = nodes[last_concept]
        if source is None:
            logger.warning(
                "Final concept of field %r was not drawn, skipping datatype edge",
                node.path.id,
            )
            return

        uri, inverse, source, target = self._options.inverses.canonicalize_edge(
            data_element.uri, source, target
        )
        # only one datatype edge per pair of nodes is meaningful
        key = (source, target)
        if key in self._tracker:
            return
        self._tracker.add(key)

        self.graph.add_edge(source, target, DataModelEdge(uri, inverse))

    def _annotate_last_concept(
        self,
        node: Union[Bundle, Field],
        elements: List[PathElement],
        omitted: bool,
        nodes: List[Optional[int]],
        update: Callable[[ConceptModelNode], ConceptModelNode],
    ) -> None:
        """Attach ``node`` to the graph node of its last concept."""
        concept = next((e for e in reversed(elements) if e.type == "concept"), None)
        if concept is None:
            logger.warning("Missing final concept element in %r (is it empty?)", node.path.id)
            return

        if omitted:
            return

        node_id = nodes[concept.index]
        if node_id is None:
            logger.warning("Last concept of %r was not drawn, skipping annotation", node.path.id)
            return

        def updater(label: Optional[ModelNode]) -> ModelNode:
            if label is None or label.kind != "concept":
                raise BuildError(
                    f"expected a concept node for {node.path.id!r}, got {label!r}"
                )
            return update(label)

        self.graph.add_or_update_node(node_id, updater)

    # ── Strategy ─────────────────────────────────────────────────────

    @abstractmethod
    def get_concept_context(
        self,
        element: ConceptPathElement,
        elements: Sequence[PathElement],
        omitted: bool,
        previous: NodeContext,
        node: Union[Bundle, Field],
        parent: NodeContext,
    ) -> NodeContextSpec:
        """Return the context to draw a concept element in.

        Args:
            element: Concept element to draw.
            elements: All elements of ``node``.
            omitted: If True, ``node`` is not drawn and only its contexts
                are recorded for its children.
            previous: Context of the previous concept of ``node``, False
                for the first one.
            node: The bundle or field the concept belongs to.
            parent: Context the parent node drew the concept with the same
                concept index in, False if there is none.
        """

    @abstractmethod
    def get_datatype_context(
        self,
        element: PropertyPathElement,
        elements: Sequence[PathElement],
        omitted: bool,
        node: Field,
        parent: NodeContext,
    ) -> NodeContextSpec:
        """Return the context to draw the literal of a datatype property in.

        ``parent`` is the context of the concept preceding ``element``.
        """

    # ── Contexts ─────────────────────────────────────────────────────

    def _wrap_datatype_context(
        self,
        element: PropertyPathElement,
        elements: Sequence[PathElement],
        parent: NodeContext,
        spec: NodeContextSpec,
    ) -> NodeContextSpec:
        """Fold the parent concept into a datatype context.

        The result can never be produced by a strategy, so a literal is only
        shared between fields whose preceding concepts share a context.
        """
        if isinstance(spec, bool):
            return spec

        parent_element = elements[element.index - 1]

        if isinstance(spec, (int, str)):
            own = (_DATATYPE_SENTINEL, "one", spec)
        else:
            own = (_DATATYPE_SENTINEL, "many", *spec)

        if parent is False:
            parent_slice: Tuple[Union[int, str], ...] = ("false",)
        elif isinstance(parent, tuple):
            parent_slice = ("multiple", *parent)
        else:
            parent_slice = ("single", parent)

        return (
            _DATATYPE_SENTINEL,
            parent_element.uri,
            _DATATYPE_SENTINEL,
            *parent_slice,
            _DATATYPE_SENTINEL,
            *own,
        )

    def _resolve_context_spec(self, spec: NodeContextSpec) -> NodeContext:
        # bool is a subclass of int, check it first
        if spec is True:
            self._last_context += 1
            return self._last_context
        if spec is False or isinstance(spec, (int, str)):
            return spec
        if isinstance(spec, (tuple, list)) and all(
            isinstance(part, (int, str)) and not isinstance(part, bool) for part in spec
        ):
            return tuple(spec)
        raise BuildError(f"invalid node context {spec!r}")

    @staticmethod
    def _make_id(context: NodeContext, kind: str, uri: str) -> str:
        """Content-derived alias of a node drawn in a context."""
        if kind not in _NODE_KINDS:
            raise BuildError(f"unknown node kind {kind!r}")
        return urlencode(
            (("context", json.dumps(context)), ("typ", kind), ("id", uri))
        )


def _concept_updater(uri: str) -> Callable[[Optional[ModelNode]], ModelNode]:
    def updater(label: Optional[ModelNode]) -> ModelNode:
        if label is None:
            return ConceptModelNode(uri)
        if label.kind != "concept":
            raise BuildError(f"expected a concept node for {uri!r}, got {label!r}")
        return label

    return updater


def _literal_updater(node: Field) -> Callable[[Optional[ModelNode]], ModelNode]:
    def updater(label: Optional[ModelNode]) -> ModelNode:
        if label is None:
            return LiteralModelNode((node,))
        if label.kind != "literal":
            raise BuildError(f"expected a literal node for {node.path.id!r}, got {label!r}")
        return label.with_field(node)

    return updater
