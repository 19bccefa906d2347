"""Model graph builder: selects a deduplication strategy and runs it once."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Type, Union

from model_graph.builders.base import DedupOptions, DeduplicatingBuilder
from model_graph.builders.builder import GraphBuilder
from model_graph.builders.bundle import BundleBuilder
from model_graph.builders.full import FullBuilder
from model_graph.builders.none import NoneBuilder
from model_graph.builders.parents import ParentsBuilder
from model_graph.core.models import ModelEdge, ModelNode
from model_graph.pathbuilder.tree import PathTree


class Deduplication(str, Enum):
    """How aggressively equal class URIs are merged into one node."""

    NONE = "none"
    BUNDLE = "bundle"
    PARENTS = "parents"
    FULL = "full"


_BUILDERS: Dict[Deduplication, Type[DeduplicatingBuilder]] = {
    Deduplication.NONE: NoneBuilder,
    Deduplication.BUNDLE: BundleBuilder,
    Deduplication.PARENTS: ParentsBuilder,
    Deduplication.FULL: FullBuilder,
}


class ModelGraphBuilder(GraphBuilder[ModelNode, ModelEdge]):
    """Builds the model graph of a path tree.

    Example::

        tree = PathTree.from_paths(paths)
        options = DedupOptions(inverses=InverseMap([("ex:parentOf", "ex:childOf")]))
        graph = ModelGraphBuilder(tree, options, Deduplication.PARENTS).build()

    A builder builds at most once; ``build`` returns the same graph on every
    call. Construct a new builder for a fresh graph.
    """

    def __init__(
        self,
        tree: PathTree,
        options: DedupOptions,
        deduplication: Union[Deduplication, str],
    ) -> None:
        """
        Args:
            tree: The (read-only) tree to build the graph from.
            options: Inverse map and include predicate.
            deduplication: A ``Deduplication`` or its string value.

        Raises:
            ValueError: If ``deduplication`` is not a known mode.
        """
        try:
            mode = Deduplication(deduplication)
        except ValueError:
            raise ValueError(f"Unknown deduplication mode {deduplication!r}") from None

        super().__init__()
        self.deduplication = mode
        self._specific = _BUILDERS[mode](tree, options, self.graph)

    def _build(self) -> None:
        self._specific.build()
