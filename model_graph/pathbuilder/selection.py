"""Selection of tree nodes to include in a model graph."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple, Union

from model_graph.pathbuilder.path import Path
from model_graph.pathbuilder.tree import PathTreeNode

Selectable = Union[PathTreeNode, Path, None]


class NodeSelection:
    """An immutable set of selected path ids on top of a default.

    A node is included if its path id is listed and the default is False,
    or if it is not listed and the default is True. ``includes`` is usually
    passed as the ``include`` predicate of ``DedupOptions``.
    """

    def __init__(self, default_value: bool, values: Iterable[str] = ()) -> None:
        self.default_value = default_value
        # dict keys keep insertion order for to_json
        self._values: Dict[str, None] = dict.fromkeys(values)

    @classmethod
    def all(cls) -> "NodeSelection":
        return cls(True)

    @classmethod
    def none(cls) -> "NodeSelection":
        return cls(False)

    @classmethod
    def these(cls, ids: Iterable[str]) -> "NodeSelection":
        return cls(False, ids)

    def includes(self, node: Selectable) -> bool:
        key = _key(node)
        if key is None:
            return False
        return (key in self._values) != self.default_value

    def with_(self, updates: Iterable[Tuple[Selectable, bool]]) -> "NodeSelection":
        """Return a selection with each node set to the given value.

        Returns ``self`` if nothing changes.
        """
        values = dict(self._values)
        for node, selected in updates:
            key = _key(node)
            if key is None:
                continue
            if selected != self.default_value:
                values[key] = None
            else:
                values.pop(key, None)

        if list(values) == list(self._values):
            return self
        return NodeSelection(self.default_value, values)

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": "node-selection",
            "defaultValue": self.default_value,
            "values": list(self._values),
        }

    @classmethod
    def from_json(cls, data: Any) -> Optional["NodeSelection"]:
        if not cls.is_valid_node_selection(data):
            return None
        return cls(data["defaultValue"], data["values"])

    @staticmethod
    def is_valid_node_selection(data: Any) -> bool:
        if not isinstance(data, dict) or data.get("type") != "node-selection":
            return False
        if not isinstance(data.get("defaultValue"), bool):
            return False
        values = data.get("values")
        return isinstance(values, list) and all(isinstance(v, str) for v in values)


def _key(node: Selectable) -> Optional[str]:
    if node is None:
        return None
    if isinstance(node, Path):
        return node.id
    if node.path is None:
        return None
    return node.path.id
