"""Model Graph: deduplicated class/property graphs of WissKI pathbuilders."""

__version__ = "0.1.0"

from model_graph.builders.base import DedupOptions
from model_graph.builders.bundle_graph import BundleGraphBuilder
from model_graph.builders.model import Deduplication, ModelGraphBuilder
from model_graph.core.graph import Graph
from model_graph.pathbuilder.inversemap import InverseMap
from model_graph.pathbuilder.path import Path
from model_graph.pathbuilder.tree import PathTree

__all__ = [
    "BundleGraphBuilder",
    "DedupOptions",
    "Deduplication",
    "Graph",
    "InverseMap",
    "ModelGraphBuilder",
    "Path",
    "PathTree",
    "__version__",
]
