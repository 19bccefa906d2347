from model_graph.builders.base import BuildError, DedupOptions, DeduplicatingBuilder
from model_graph.builders.builder import GraphBuilder
from model_graph.builders.bundle import BundleBuilder
from model_graph.builders.bundle_graph import (
    BundleGraphBuilder,
    BundleNode,
    ChildBundleEdge,
    FieldEdge,
    FieldNode,
)
from model_graph.builders.full import FullBuilder
from model_graph.builders.model import Deduplication, ModelGraphBuilder
from model_graph.builders.none import NoneBuilder
from model_graph.builders.parents import ParentsBuilder

__all__ = [
    "BuildError",
    "BundleBuilder",
    "BundleGraphBuilder",
    "BundleNode",
    "ChildBundleEdge",
    "DedupOptions",
    "DeduplicatingBuilder",
    "Deduplication",
    "FieldEdge",
    "FieldNode",
    "FullBuilder",
    "GraphBuilder",
    "ModelGraphBuilder",
    "NoneBuilder",
    "ParentsBuilder",
]
