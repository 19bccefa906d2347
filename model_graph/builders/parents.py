"""Builder that deduplicates only the path prefix shared with the parent."""

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


class ParentsBuilder(DeduplicatingBuilder):
    """Reuses the parent's node for every concept of the shared prefix.

    Sharing only flows from parent to child, so the graph stays acyclic.
    """

    def prepare(self) -> None:
        self.graph.definitely_acyclic = True

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
        return True

    def get_datatype_context(
        self,
        element: PropertyPathElement,
        elements: Sequence[PathElement],
        omitted: bool,
        node: Field,
        parent: NodeContext,
    ) -> NodeContextSpec:
        return element.uri
