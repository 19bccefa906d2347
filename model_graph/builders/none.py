"""Builder that does not deduplicate at all."""

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


class NoneBuilder(DeduplicatingBuilder):
    """Draws every concept and literal in a fresh context.

    The result is the literal unfolding of the tree, and therefore a tree
    itself.
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
        return True

    def get_datatype_context(
        self,
        element: PropertyPathElement,
        elements: Sequence[PathElement],
        omitted: bool,
        node: Field,
        parent: NodeContext,
    ) -> NodeContextSpec:
        return True
