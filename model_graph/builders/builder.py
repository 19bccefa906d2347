"""Shared base of the builders that populate a Graph from a PathTree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from model_graph.core.graph import Graph

N = TypeVar("N")
E = TypeVar("E")


class GraphBuilder(ABC, Generic[N, E]):
    """Owns a graph and fills it at most once.

    Subclasses implement ``_build``; ``build`` runs it on the first call
    and returns the same graph on every call.
    """

    def __init__(self) -> None:
        self.graph: Graph[N, E] = Graph()
        self._built = False

    def build(self) -> Graph[N, E]:
        if not self._built:
            self._build()
            self._built = True
        return self.graph

    @abstractmethod
    def _build(self) -> None:
        """Populate ``self.graph``."""
