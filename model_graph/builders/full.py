"""Builder that deduplicates nodes globally."""

from __future__ import annotations

from typing import Sequence, Union

from model_graph.builders.base import DeduplicatingBuilder, NodeContext, NodeContextSpec
from model_graph.pathbuilder.tree import (
    Bundle,
    ConceptPathElement,
    Field,
    PathElement,
    PropertyPathElement,
)

_GLOBAL_CONTEXT = ""


class FullBuilder(DeduplicatingBuilder):
    """Draws every class URI exactly once.

    Literals are still kept apart per preceding concept, see
    ``DeduplicatingBuilder._wrap_datatype_context``.
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
        return _GLOBAL_CONTEXT

    def get_datatype_context(
        self,
        element: PropertyPathElement,
        elements: Sequence[PathElement],
        omitted: bool,
        node: Field,
        parent: NodeContext,
    ) -> NodeContextSpec:
        return _GLOBAL_CONTEXT
