from model_graph.core.graph import Graph
from model_graph.core.models import (
    ConceptModelNode,
    DataModelEdge,
    LiteralModelNode,
    ModelEdge,
    ModelNode,
    PropertyModelEdge,
)

__all__ = [
    "ConceptModelNode",
    "DataModelEdge",
    "Graph",
    "LiteralModelNode",
    "ModelEdge",
    "ModelNode",
    "PropertyModelEdge",
]
