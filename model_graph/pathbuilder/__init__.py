from model_graph.pathbuilder.inversemap import InverseMap
from model_graph.pathbuilder.path import Path
from model_graph.pathbuilder.selection import NodeSelection
from model_graph.pathbuilder.tree import Bundle, Field, PathTree

__all__ = ["Bundle", "Field", "InverseMap", "NodeSelection", "Path", "PathTree"]
