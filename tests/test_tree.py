"""Tests for Path records and the PathTree."""

import logging

import pytest

from model_graph.pathbuilder.path import Path
from model_graph.pathbuilder.tree import Bundle, Field, PathTree


def _make_paths():
    return [
        Path(id="publication", path_array=["ex:Publication"], is_group=True),
        Path(
            id="creation",
            path_array=["ex:Publication", "ex:createdBy", "ex:Creation"],
            group_id="publication",
            is_group=True,
            weight=2,
        ),
        Path(
            id="title",
            path_array=["ex:Publication", "ex:hasTitle", "ex:Title"],
            group_id="publication",
            datatype_property="ex:value",
            weight=1,
        ),
        Path(
            id="author",
            path_array=["ex:Publication", "ex:createdBy", "ex:Creation", "ex:carriedOutBy", "ex:Person"],
            group_id="creation",
            disambiguation=3,
        ),
        Path(id="person", path_array=["ex:Person"], is_group=True),
    ]


class TestPath:
    def test_empty_id_raises(self):
        with pytest.raises(ValueError, match="id must not be empty"):
            Path(id="")

    def test_from_dict(self):
        path = Path.from_dict({
            "id": "title",
            "groupId": "publication",
            "isGroup": False,
            "pathArray": ["ex:A", "ex:p", "ex:B"],
            "datatypeProperty": "ex:value",
            "fieldTypeInformative": "string",
            "weight": 3,
            "unknownKey": "ignored",
        })
        assert path.id == "title"
        assert path.group_id == "publication"
        assert path.path_array == ["ex:A", "ex:p", "ex:B"]
        assert path.datatype_property == "ex:value"
        assert path.weight == 3
        assert path.enabled is True

    def test_concept_count(self):
        assert Path(id="p", path_array=["ex:A", "ex:p", "ex:B"]).concept_count == 2
        assert Path(id="p").concept_count == 0

    def test_uris_include_datatype(self):
        path = Path(id="p", path_array=["ex:A", "ex:p", "ex:B"], datatype_property="ex:value")
        assert list(path.uris()) == ["ex:A", "ex:p", "ex:B", "ex:value"]

    def test_informative_field_type(self):
        assert Path(id="p", field_type="text", field_type_informative="string").informative_field_type == "string"
        assert Path(id="p", field_type="text").informative_field_type == "text"
        assert Path(id="p").informative_field_type is None

    def test_disambiguation(self):
        path = Path(id="p", path_array=["ex:A", "ex:p", "ex:B"], disambiguation=2)
        assert path.disambiguation_index == 2
        assert path.disambiguated_concept == "ex:B"

    def test_disambiguation_out_of_range(self):
        assert Path(id="p", path_array=["ex:A"], disambiguation=0).disambiguation_index is None
        assert Path(id="p", path_array=["ex:A"], disambiguation=2).disambiguated_concept is None


class TestFromPaths:
    def test_structure(self):
        tree = PathTree.from_paths(_make_paths())
        assert [b.path.id for b in tree.children()] == ["publication", "person"]
        publication = tree.find("publication")
        assert isinstance(publication, Bundle)
        assert publication.is_main
        assert isinstance(tree.find("title"), Field)
        assert tree.find("author").parent is tree.find("creation")
        assert tree.find("missing") is None

    def test_walk_is_pre_order_sorted_by_weight(self):
        tree = PathTree.from_paths(_make_paths())
        ids = [node.path.id for node in tree.walk() if node.path is not None]
        assert ids == ["publication", "title", "creation", "author", "person"]

    def test_walk_starts_with_root(self):
        tree = PathTree.from_paths(_make_paths())
        assert next(tree.walk()) is tree

    def test_depth(self):
        tree = PathTree.from_paths(_make_paths())
        assert tree.depth == 0
        assert tree.find("publication").depth == 1
        assert tree.find("author").depth == 3

    def test_disabled_paths_are_skipped(self, caplog):
        paths = _make_paths()
        paths[2].enabled = False
        with caplog.at_level(logging.WARNING, logger="model_graph.pathbuilder.tree"):
            tree = PathTree.from_paths(paths)
        assert tree.find("title") is None
        assert "disabled" in caplog.text

    def test_orphaned_field_is_dropped(self, caplog):
        paths = _make_paths() + [Path(id="lonely", path_array=["ex:A"])]
        with caplog.at_level(logging.WARNING, logger="model_graph.pathbuilder.tree"):
            tree = PathTree.from_paths(paths)
        assert tree.find("lonely") is None
        assert "does not belong to a bundle" in caplog.text

    def test_missing_bundle_drops_members(self, caplog):
        paths = _make_paths() + [Path(id="ghost_field", path_array=["ex:A"], group_id="ghost")]
        with caplog.at_level(logging.WARNING, logger="model_graph.pathbuilder.tree"):
            tree = PathTree.from_paths(paths)
        assert tree.find("ghost_field") is None
        assert "'ghost' does not exist" in caplog.text

    def test_duplicate_bundle_keeps_first(self, caplog):
        paths = _make_paths() + [Path(id="person", path_array=["ex:Other"], is_group=True)]
        with caplog.at_level(logging.WARNING, logger="model_graph.pathbuilder.tree"):
            tree = PathTree.from_paths(paths)
        assert tree.find("person").path.path_array == ["ex:Person"]
        assert len(list(tree.children())) == 2
        assert "Duplicate bundle" in caplog.text


class TestElements:
    def test_root_bundle_has_no_common(self):
        tree = PathTree.from_paths(_make_paths())
        (element,) = tree.find("publication").elements()
        assert element.type == "concept"
        assert element.uri == "ex:Publication"
        assert element.concept_index == 0
        assert element.common is None

    def test_common_offsets_relative_to_parent(self):
        tree = PathTree.from_paths(_make_paths())
        elements = list(tree.find("author").elements())
        assert [e.common for e in elements] == [-3, -2, -1, 0, 1]
        assert [e.type for e in elements] == ["concept", "property", "concept", "property", "concept"]
        assert [e.concept_index for e in elements if e.type == "concept"] == [0, 1, 2]
        assert [e.property_index for e in elements if e.type == "property"] == [0, 1]

    def test_disambiguation_offsets(self):
        tree = PathTree.from_paths(_make_paths())
        elements = list(tree.find("author").elements())
        assert [e.disambiguation for e in elements] == [-4, -3, -2, -1, 0]

    def test_no_disambiguation(self):
        tree = PathTree.from_paths(_make_paths())
        assert all(e.disambiguation is None for e in tree.find("title").elements())

    def test_datatype_property_is_appended(self):
        tree = PathTree.from_paths(_make_paths())
        elements = list(tree.find("title").elements())
        assert len(elements) == 4
        last = elements[-1]
        assert last.type == "property"
        assert last.role == "datatype"
        assert last.uri == "ex:value"
        assert last.index == 3
        assert elements[1].role == "relation"

    def test_bundle_never_gets_datatype(self):
        paths = [Path(id="b", path_array=["ex:A"], is_group=True, datatype_property="ex:value")]
        tree = PathTree.from_paths(paths)
        assert [e.uri for e in tree.find("b").elements()] == ["ex:A"]

    def test_even_length_path_drops_last(self, caplog):
        paths = [
            Path(id="b", path_array=["ex:A"], is_group=True),
            Path(id="f", path_array=["ex:A", "ex:p", "ex:B", "ex:dangling"], group_id="b"),
        ]
        tree = PathTree.from_paths(paths)
        with caplog.at_level(logging.WARNING, logger="model_graph.pathbuilder.tree"):
            elements = list(tree.find("f").elements())
        assert [e.uri for e in elements] == ["ex:A", "ex:p", "ex:B"]
        assert "even number of elements" in caplog.text

    def test_parent_not_a_prefix(self):
        paths = [
            Path(id="b", path_array=["ex:A"], is_group=True),
            Path(id="f", path_array=["ex:Other", "ex:p", "ex:B"], group_id="b"),
        ]
        tree = PathTree.from_paths(paths)
        assert all(e.common is None for e in tree.find("f").elements())

    def test_empty_path_has_no_elements(self):
        paths = [
            Path(id="b", path_array=["ex:A"], is_group=True),
            Path(id="f", path_array=[], group_id="b", datatype_property="ex:value"),
        ]
        tree = PathTree.from_paths(paths)
        assert list(tree.find("f").elements()) == []
