"""JSON export of built model graphs.

Usage::

    from model_graph.core.serialization import dump_graph

    graph = ModelGraphBuilder(tree, options, Deduplication.PARENTS).build()
    dump_graph(graph, "model.json")

Bundles and fields attached to labels are written as their path ids.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

from model_graph.core.graph import Graph
from model_graph.core.models import ModelEdge, ModelNode

_FORMAT_VERSION = "0.1.0"


def graph_to_dict(graph: Graph[ModelNode, ModelEdge]) -> Dict[str, Any]:
    """Return a JSON-safe dict in the shape of ``Graph.to_json``."""
    return {
        "version": _FORMAT_VERSION,
        "definitely_acyclic": graph.definitely_acyclic,
        "nodes": [[node_id, label.to_dict()] for node_id, label in graph.get_nodes()],
        "edges": [
            [edge_id, source, target, label.to_dict()]
            for edge_id, source, target, label in graph.get_edges()
        ],
    }


def dumps_graph(graph: Graph[ModelNode, ModelEdge], indent: int = 2) -> str:
    return json.dumps(graph_to_dict(graph), indent=indent)


def dump_graph(
    graph: Graph[ModelNode, ModelEdge],
    path: Union[str, Path],
    indent: int = 2,
) -> None:
    """Export all nodes and edges from a model graph to a JSON file.

    Args:
        graph: A built model graph.
        path: File path to write to.
        indent: JSON indentation level.
    """
    Path(path).write_text(dumps_graph(graph, indent=indent), encoding="utf-8")
