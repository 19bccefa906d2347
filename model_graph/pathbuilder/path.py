"""Path records of a WissKI pathbuilder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

# camelCase keys used by pathbuilder JSON exports -> Path attribute
_PARAM_KEYS = {
    "id": "id",
    "weight": "weight",
    "enabled": "enabled",
    "groupId": "group_id",
    "bundle": "bundle",
    "field": "field_id",
    "fieldType": "field_type",
    "fieldTypeInformative": "field_type_informative",
    "displayWidget": "display_widget",
    "formatterWidget": "formatter_widget",
    "cardinality": "cardinality",
    "pathArray": "path_array",
    "datatypeProperty": "datatype_property",
    "shortName": "short_name",
    "disambiguation": "disambiguation",
    "description": "description",
    "uuid": "uuid",
    "isGroup": "is_group",
    "name": "name",
}


@dataclass
class Path:
    """A single pathbuilder entry, describing either a bundle or a field.

    Attributes:
        id: Unique identifier of the path within its pathbuilder.
        path_array: Alternating concept / property URIs, starting and
            ending with a concept.
        datatype_property: URI of the datatype property, "" if none.
        is_group: True for bundles, False for fields.
        group_id: Id of the enclosing bundle, "" for top-level bundles.
        weight: Sort key among siblings.
        disambiguation: 1-based concept index of the disambiguated concept,
            0 if none.
    """

    id: str
    path_array: List[str] = field(default_factory=list)
    datatype_property: str = ""
    is_group: bool = False
    group_id: str = ""
    weight: int = 0
    enabled: bool = True
    name: str = ""
    bundle: str = ""
    field_id: str = ""
    field_type: str = ""
    field_type_informative: str = ""
    display_widget: str = ""
    formatter_widget: str = ""
    cardinality: int = -1
    short_name: str = ""
    disambiguation: int = 0
    description: str = ""
    uuid: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Path id must not be empty")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Path":
        """Build a path from the camelCase parameters of a pathbuilder export."""
        kwargs = {attr: data[key] for key, attr in _PARAM_KEYS.items() if key in data}
        if "path_array" in kwargs:
            kwargs["path_array"] = list(kwargs["path_array"])
        return cls(**kwargs)

    @property
    def concept_count(self) -> int:
        return (len(self.path_array) + 1) // 2

    def uris(self) -> Iterator[str]:
        """All URIs referenced by this path, including the datatype property."""
        yield from self.path_array
        if self.datatype_property != "":
            yield self.datatype_property

    @property
    def informative_field_type(self) -> Optional[str]:
        if self.field_type_informative != "":
            return self.field_type_informative
        if self.field_type == "":
            return None
        return self.field_type

    @property
    def disambiguation_index(self) -> Optional[int]:
        """Index of the disambiguated concept within ``path_array``, or None."""
        index = 2 * self.disambiguation - 2
        if index < 0 or index >= len(self.path_array):
            return None
        return index

    @property
    def disambiguated_concept(self) -> Optional[str]:
        index = self.disambiguation_index
        if index is None:
            return None
        return self.path_array[index]
