"""Node and edge labels of the model graph."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from model_graph.pathbuilder.tree import Bundle, Field


def _ids(nodes: Tuple[Any, ...]) -> List[str]:
    return [node.path.id for node in nodes]


@dataclass(frozen=True)
class ConceptModelNode:
    """A class occurrence in the model graph.

    Attributes:
        clz: URI of the class represented at this node.
        bundles: Bundles whose defining concept is this node.
        fields: Fields without a datatype property that end at this node.
    """

    clz: str
    bundles: Tuple["Bundle", ...] = ()
    fields: Tuple["Field", ...] = ()

    kind: ClassVar[str] = "concept"

    def __post_init__(self) -> None:
        if not self.clz:
            raise ValueError("ConceptModelNode clz must not be empty")

    def with_bundle(self, bundle: "Bundle") -> "ConceptModelNode":
        if bundle in self.bundles:
            return self
        return replace(self, bundles=self.bundles + (bundle,))

    def with_field(self, field: "Field") -> "ConceptModelNode":
        if field in self.fields:
            return self
        return replace(self, fields=self.fields + (field,))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "clz": self.clz,
            "bundles": _ids(self.bundles),
            "fields": _ids(self.fields),
        }


@dataclass(frozen=True)
class LiteralModelNode:
    """A literal value reached through a datatype property.

    Attributes:
        fields: Fields whose datatype property ends at this literal.
    """

    fields: Tuple["Field", ...] = ()

    kind: ClassVar[str] = "literal"

    def with_field(self, field: "Field") -> "LiteralModelNode":
        if field in self.fields:
            return self
        return replace(self, fields=self.fields + (field,))

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "fields": _ids(self.fields)}


@dataclass(frozen=True)
class PropertyModelEdge:
    """An object property between two concept nodes.

    Attributes:
        property: The (canonical) property URI.
        inverse_property: The registered inverse of ``property``, if any.
    """

    property: str
    inverse_property: Optional[str] = None

    kind: ClassVar[str] = "property"

    def __post_init__(self) -> None:
        if not self.property:
            raise ValueError("PropertyModelEdge property must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "property": self.property,
            "inverse_property": self.inverse_property,
        }


@dataclass(frozen=True)
class DataModelEdge:
    """A datatype property from a concept node to a literal node."""

    property: str
    inverse_property: Optional[str] = None

    kind: ClassVar[str] = "data"

    def __post_init__(self) -> None:
        if not self.property:
            raise ValueError("DataModelEdge property must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "property": self.property,
            "inverse_property": self.inverse_property,
        }


ModelNode = Union[ConceptModelNode, LiteralModelNode]
ModelEdge = Union[PropertyModelEdge, DataModelEdge]
