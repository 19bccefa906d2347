"""Tree of bundles and fields built from pathbuilder paths.

Each bundle or field exposes the elements of its path: alternating concept
and property URIs, annotated with how they relate to the parent's path.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import ClassVar, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from model_graph.pathbuilder.path import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConceptPathElement:
    """A concept (class URI) at an even position of a path.

    Attributes:
        uri: The class URI.
        index: Position within the path elements.
        concept_index: 0-based index among the concepts of the path.
        common: Relation to the parent's path. Negative values count the
            elements (including this one) still shared with the parent,
            zero or positive values count the elements not shared with the
            parent (excluding this one), None means nothing is shared.
        disambiguation: Offset to the disambiguated concept, None if the
            path has no disambiguation.
    """

    uri: str
    index: int
    concept_index: int
    common: Optional[int]
    disambiguation: Optional[int]

    type: ClassVar[str] = "concept"
    role: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class PropertyPathElement:
    """A property URI at an odd position of a path.

    ``role`` is "datatype" for the datatype property appended to a field
    and "relation" for every other property.
    """

    uri: str
    index: int
    property_index: int
    role: str
    common: Optional[int]
    disambiguation: Optional[int]

    type: ClassVar[str] = "property"


PathElement = Union[ConceptPathElement, PropertyPathElement]


class PathTreeNode:
    """Base class of the tree, its bundles and its fields."""

    parent: Optional["PathTreeNode"] = None
    path: Optional[Path] = None

    def __init__(self, depth: int, index: int) -> None:
        self.depth = depth
        self.index = index

    def children(self) -> Iterator["PathTreeNode"]:
        return iter(())

    def walk(self) -> Iterator["PathTreeNode"]:
        """Pre-order walk over this node and all of its descendants."""
        yield self
        for child in self.children():
            yield from child.walk()

    def find(self, path_id: str) -> Optional["PathTreeNode"]:
        """Return the node in this subtree whose path has the given id."""
        for node in self.walk():
            if node.path is not None and node.path.id == path_id:
                return node
        return None

    def elements(self) -> Iterator[PathElement]:
        """Iterate over the elements of this node's path."""
        path = self.path
        if path is None or not path.path_array:
            return

        uris = list(path.path_array)
        if len(uris) % 2 == 0:
            logger.warning(
                "Path %r has an even number of elements, ignoring the last one",
                path.id,
            )
            uris.pop()

        own_index = self._own_path_index(uris)
        disambiguation_index = path.disambiguation_index

        datatype_index = len(uris)
        if isinstance(self, Field) and path.datatype_property != "":
            uris.append(path.datatype_property)

        concept_index = 0
        property_index = 0
        for index, uri in enumerate(uris):
            common = index - own_index if own_index is not None else None
            disambiguation = (
                index - disambiguation_index if disambiguation_index is not None else None
            )
            if index % 2 == 0:
                yield ConceptPathElement(uri, index, concept_index, common, disambiguation)
                concept_index += 1
            else:
                role = "datatype" if index == datatype_index else "relation"
                yield PropertyPathElement(
                    uri, index, property_index, role, common, disambiguation
                )
                property_index += 1

    def _own_path_index(self, uris: List[str]) -> Optional[int]:
        """First index of ``uris`` not shared with the parent's path.

        The parent's path must have odd length and be a prefix of ``uris``,
        otherwise there is no shared part and None is returned.
        """
        parent_path = self.parent.path if self.parent is not None else None
        if parent_path is None:
            return None

        shared = parent_path.path_array
        if len(shared) % 2 == 0:
            logger.debug("Parent path %r has even length", parent_path.id)
            return None
        if len(shared) > len(uris) or any(
            uri != uris[index] for index, uri in enumerate(shared)
        ):
            logger.debug("Parent path %r is not a prefix of its child", parent_path.id)
            return None
        return len(shared)


class PathTree(PathTreeNode):
    """Root of the tree. Its children are the top-level bundles."""

    def __init__(self) -> None:
        super().__init__(0, -1)
        self._bundles: List[Bundle] = []

    def children(self) -> Iterator["Bundle"]:
        return iter(self._bundles)

    @classmethod
    def from_paths(cls, paths: Iterable[Path]) -> "PathTree":
        """Group paths into bundles and fields.

        Disabled paths, fields outside any bundle, duplicate bundles and
        paths whose bundle does not exist are logged and left out.
        """
        groups: Dict[str, Path] = {}
        members: Dict[str, List[Tuple[int, Path]]] = defaultdict(list)
        roots: List[Tuple[int, Path]] = []

        for index, path in enumerate(paths):
            if not path.enabled:
                logger.warning("Skipping disabled path %r", path.id)
                continue

            if path.is_group:
                if path.id in groups:
                    logger.warning("Duplicate bundle %r, keeping the first one", path.id)
                    continue
                groups[path.id] = path
                if path.group_id == "":
                    roots.append((index, path))
                    continue
            elif path.group_id == "":
                logger.warning("Field %r does not belong to a bundle", path.id)
                continue

            members[path.group_id].append((index, path))

        for group_id, entries in members.items():
            if group_id not in groups:
                logger.warning(
                    "Bundle %r does not exist, dropping %d path(s)", group_id, len(entries)
                )

        tree = cls()
        tree._bundles = [
            Bundle(tree, index, path, members) for index, path in _sorted(roots)
        ]
        return tree


class Bundle(PathTreeNode):
    """A grouping node; its path ends in the bundle's defining concept."""

    def __init__(
        self,
        parent: PathTreeNode,
        index: int,
        path: Path,
        members: Dict[str, List[Tuple[int, Path]]],
    ) -> None:
        super().__init__(parent.depth + 1, index)
        self.parent = parent
        self.path = path
        self._children: List[Union[Bundle, Field]] = [
            Bundle(self, i, p, members) if p.is_group else Field(self, i, p)
            for i, p in _sorted(members.get(path.id, []))
        ]

    def children(self) -> Iterator[Union["Bundle", "Field"]]:
        return iter(self._children)

    @property
    def is_main(self) -> bool:
        return self.depth == 1

    def __repr__(self) -> str:
        return f"Bundle({self.path.id!r})"


class Field(PathTreeNode):
    """A leaf node describing one data-entry point."""

    def __init__(self, parent: Bundle, index: int, path: Path) -> None:
        super().__init__(parent.depth + 1, index)
        self.parent = parent
        self.path = path

    def __repr__(self) -> str:
        return f"Field({self.path.id!r})"


def _sorted(entries: List[Tuple[int, Path]]) -> List[Tuple[int, Path]]:
    """Order siblings by weight, then by position in the pathbuilder."""
    return sorted(entries, key=lambda entry: (entry[1].weight, entry[0]))
