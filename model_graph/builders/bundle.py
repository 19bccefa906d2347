"""Builder that deduplicates nodes within their enclosing bundle."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

from model_graph.builders.base import DeduplicatingBuilder, NodeContext, NodeContextSpec
from model_graph.pathbuilder.tree import (
    Bundle,
    ConceptPathElement,
    Field,
    PathElement,
    PropertyPathElement,
)


class BundleBuilder(DeduplicatingBuilder):
    """Shares nodes between a bundle and its own fields.

    Concepts of the prefix shared with the parent reuse the parent's node.
    All other concepts are drawn in the scope of the enclosing bundle (the
    node itself for bundles, the parent bundle for fields), so the fields of
    one bundle that reach the same class meet in one node, while different
    bundles never share their own concepts.
    """

    def get_concept_context(
        self,
        element: ConceptPathElement,
        elements: Sequence[PathElement],
        omitted: bool,
        previous: NodeContext,
        node: Union[Bundle, Field],
        parent: NodeContext,
    ) -> NodeContextSpec:
        if element.common is not None and element.common < 0 and parent is not False:
            return parent
        return _scope(node)

    def get_datatype_context(
        self,
        element: PropertyPathElement,
        elements: Sequence[PathElement],
        omitted: bool,
        node: Field,
        parent: NodeContext,
    ) -> NodeContextSpec:
        return _scope(node)


def _scope(node: Union[Bundle, Field]) -> Tuple[str, str]:
    bundle = node if isinstance(node, Bundle) else node.parent
    return ("bundle", bundle.path.id)
