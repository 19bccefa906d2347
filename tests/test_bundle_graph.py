"""Tests for the bundle hierarchy graph."""

from model_graph.builders.bundle_graph import (
    BundleGraphBuilder,
    BundleNode,
    ChildBundleEdge,
    FieldEdge,
    FieldNode,
)
from model_graph.core.serialization import graph_to_dict
from model_graph.pathbuilder.path import Path
from model_graph.pathbuilder.selection import NodeSelection
from model_graph.pathbuilder.tree import PathTree


def _make_tree():
    return PathTree.from_paths([
        Path(id="publication", path_array=["ex:Publication"], is_group=True),
        Path(id="title", path_array=["ex:Publication", "ex:hasTitle", "ex:Title"], group_id="publication"),
        Path(
            id="creation",
            path_array=["ex:Publication", "ex:createdBy", "ex:Creation"],
            group_id="publication",
            is_group=True,
        ),
        Path(
            id="date",
            path_array=["ex:Publication", "ex:createdBy", "ex:Creation", "ex:hasDate", "ex:Date"],
            group_id="creation",
        ),
        Path(
            id="author",
            path_array=["ex:Publication", "ex:createdBy", "ex:Creation", "ex:carriedOutBy", "ex:Person"],
            group_id="creation",
        ),
        Path(id="person", path_array=["ex:Person"], is_group=True),
        Path(id="name", path_array=["ex:Person", "ex:hasName", "ex:Name"], group_id="person"),
    ])


def _build(selection, tree=None):
    return BundleGraphBuilder(tree or _make_tree(), selection).build()


class TestBuild:
    def test_empty_selection(self):
        graph = _build(NodeSelection.none())
        assert graph.get_nodes() == []
        assert graph.get_edges() == []
        assert graph.definitely_acyclic is True

    def test_everything_selected(self):
        graph = _build(NodeSelection.all())
        assert len(graph.get_nodes()) == 7
        assert len(graph.get_edges()) == 5
        assert graph.definitely_acyclic is True

    def test_empty_tree(self):
        graph = _build(NodeSelection.all(), PathTree.from_paths([]))
        assert graph.get_nodes() == []
        assert graph.get_edges() == []

    def test_build_is_memoized(self):
        builder = BundleGraphBuilder(_make_tree(), NodeSelection.all())
        first = builder.build()
        snapshot = first.to_json()
        second = builder.build()
        assert second is first
        assert second.to_json() == snapshot


class TestNodes:
    def test_bundle_node(self):
        tree = _make_tree()
        graph = _build(NodeSelection.these(["publication"]), tree)
        label = graph.get_node_label("publication")
        assert isinstance(label, BundleNode)
        assert label.kind == "bundle"
        assert label.bundle is tree.find("publication")
        assert label.level == 0

    def test_field_node(self):
        tree = _make_tree()
        graph = _build(NodeSelection.these(["publication", "title"]), tree)
        label = graph.get_node_label("title")
        assert isinstance(label, FieldNode)
        assert label.kind == "field"
        assert label.field is tree.find("title")
        assert label.level == 1

    def test_levels(self):
        graph = _build(NodeSelection.all())
        levels = {
            label.to_dict().get("bundle") or label.to_dict().get("field"): label.level
            for _, label in graph.get_nodes()
        }
        assert levels == {
            "publication": 0,
            "title": 1,
            "creation": 2,
            "date": 3,
            "author": 3,
            "person": 0,
            "name": 1,
        }

    def test_unselected_nodes_are_skipped(self):
        graph = _build(NodeSelection.these(["title"]))
        assert graph.has_node("title")
        assert not graph.has_node("publication")
        assert len(graph.get_nodes()) == 1
        assert graph.get_edges() == []

    def test_default_true_with_exclusion(self):
        tree = _make_tree()
        selection = NodeSelection.all().with_([(tree.find("publication"), False)])
        graph = _build(selection, tree)
        assert not graph.has_node("publication")
        assert graph.has_node("title")
        assert graph.has_node("date")


class TestEdges:
    def test_child_bundle_edge(self):
        graph = _build(NodeSelection.these(["publication", "creation"]))
        assert graph.get_edge_label("publication", "creation") == ChildBundleEdge()
        assert graph.get_edge_label("publication", "creation").kind == "child_bundle"

    def test_field_edge(self):
        graph = _build(NodeSelection.these(["publication", "title"]))
        assert graph.get_edge_label("publication", "title") == FieldEdge()
        assert graph.get_edge_label("publication", "title").kind == "field"

    def test_no_edge_without_parent(self):
        graph = _build(NodeSelection.these(["title", "creation"]))
        assert graph.get_edges() == []

    def test_no_edge_without_child(self):
        graph = _build(NodeSelection.these(["publication"]))
        assert not graph.has_edge("publication", "creation")
        assert not graph.has_edge("publication", "title")

    def test_gaps_are_not_bridged(self):
        graph = _build(NodeSelection.these(["publication", "date"]))
        assert graph.has_node("publication")
        assert graph.has_node("date")
        assert not graph.has_edge("publication", "date")

    def test_top_level_bundles_are_unconnected(self):
        graph = _build(NodeSelection.these(["publication", "person"]))
        assert not graph.has_edge("publication", "person")
        assert not graph.has_edge("person", "publication")

    def test_counts(self):
        graph = _build(NodeSelection.these(["publication", "title", "creation"]))
        assert len(graph.get_edges()) == 2


class TestExport:
    def test_graph_to_dict(self):
        graph = _build(NodeSelection.these(["publication", "title"]))
        data = graph_to_dict(graph)
        assert data["definitely_acyclic"] is True
        assert data["nodes"] == [
            [1, {"kind": "bundle", "bundle": "publication", "level": 0}],
            [2, {"kind": "field", "field": "title", "level": 1}],
        ]
        assert data["edges"] == [[1, 1, 2, {"kind": "field"}]]
