"""
Tests for cluster tree parsing, validation and re-parenting.
"""

import json
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from notegraph_core.domain.models import ClusterGroup, ClusterLeaf
from notegraph_core.services.synchronizer import GraphSynchronizer
from notegraph_core.services.tree_edit import reparent_leaf
from notegraph_core.services.tree_loader import parse_cluster_tree, tree_to_dicts, validate_tree


CLUSTERS = [
    {
        "id": "c1",
        "name": "Artificial Intelligence",
        "type": "cluster",
        "description": "Notes about models",
        "children": [
            {"id": "c1-n1", "name": "BERT vs GPT", "type": "note", "noteId": "5"},
            {"id": "c1-n2", "name": "Attention", "type": "note", "noteId": 7},
        ],
    },
    {
        "id": "c2",
        "name": "Cooking",
        "type": "cluster",
        "children": [],
    },
]


def sample_tree():
    return [
        ClusterGroup(id="g1", name="AI", leaves=[
            ClusterLeaf(id="n1", name="Transformers", leaf_ref="n1_leafRef"),
            ClusterLeaf(id="n2", name="Attention", leaf_ref="n2_leafRef"),
        ]),
        ClusterGroup(id="g2", name="Cooking"),
    ]


class TestParse:
    """parse_cluster_tree()"""

    def test_parse_list(self):
        tree = parse_cluster_tree(CLUSTERS)

        assert [g.id for g in tree] == ["c1", "c2"]
        assert tree[0].description == "Notes about models"
        assert [(l.id, l.leaf_ref) for l in tree[0].leaves] == [("c1-n1", "5"), ("c1-n2", "7")]
        assert tree[1].leaves == []

    def test_parse_text_with_fences(self):
        text = "Here are the clusters:\n```json\n" + json.dumps(CLUSTERS) + "\n```\n"
        tree = parse_cluster_tree(text)
        assert [g.name for g in tree] == ["Artificial Intelligence", "Cooking"]

    def test_parse_bytes(self):
        tree = parse_cluster_tree(json.dumps(CLUSTERS).encode("utf-8"))
        assert len(tree) == 2

    @pytest.mark.parametrize("data", [None, "", "no json here", "[not valid", '{"id": "c1"}', 42])
    def test_malformed_input_gives_empty_tree(self, data):
        assert parse_cluster_tree(data) == []

    def test_malformed_entries_skipped(self):
        data = [
            "junk",
            {"name": "No id"},
            {"id": "c1", "name": "Ok", "children": [
                {"id": "x", "name": "No note id"},
                {"id": "y", "name": "Uses leafRef", "leafRef": "9"},
                None,
            ]},
            {"id": "c2", "children": "not a list"},
        ]
        tree = parse_cluster_tree(data)

        assert [g.id for g in tree] == ["c1", "c2"]
        assert [l.id for l in tree[0].leaves] == ["y"]
        assert tree[0].leaves[0].leaf_ref == "9"
        assert tree[1].name == "c2"
        assert tree[1].leaves == []

    def test_serialize_matches_producer_shape(self):
        dicts = tree_to_dicts(parse_cluster_tree(CLUSTERS))

        assert dicts[0]["type"] == "cluster"
        assert dicts[0]["children"][1] == {
            "id": "c1-n2", "name": "Attention", "type": "note", "noteId": "7",
        }
        assert dicts[1]["description"] == ""


class TestValidate:
    """validate_tree()"""

    def test_clean_tree(self):
        assert validate_tree(sample_tree()) == []

    def test_reports_problems(self):
        tree = [
            ClusterGroup(id="", name="Nameless"),
            ClusterGroup(id="root", name="Impostor"),
            ClusterGroup(id="g1", name="AI", leaves=[
                ClusterLeaf(id="n1", name="A", leaf_ref=""),
                ClusterLeaf(id="g1", name="Clash", leaf_ref="1"),
            ]),
            ClusterGroup(id="g1", name="Again"),
        ]
        issues = validate_tree(tree)

        assert len(issues) == 5
        assert any("reserved" in issue for issue in issues)
        assert sum("Duplicate" in issue for issue in issues) == 2


class TestReparent:
    """reparent_leaf()"""

    def test_moves_leaf(self):
        tree = sample_tree()

        new_tree = reparent_leaf(tree, "n1_leafRef", "g2")

        assert [l.id for l in new_tree[0].leaves] == ["n2"]
        assert [l.id for l in new_tree[1].leaves] == ["n1"]

    def test_input_untouched(self):
        tree = sample_tree()
        reparent_leaf(tree, "n1_leafRef", "g2")
        assert [l.id for l in tree[0].leaves] == ["n1", "n2"]
        assert tree[1].leaves == []

    @pytest.mark.parametrize("leaf_ref,group_id", [
        ("n1_leafRef", "missing"),
        ("unknown", "g2"),
        ("n1_leafRef", "g1"),
    ])
    def test_noop_cases(self, leaf_ref, group_id):
        tree = sample_tree()
        assert reparent_leaf(tree, leaf_ref, group_id) == tree

    def test_rebuild_keeps_leaf_position(self):
        """The moved leaf keeps its id, so its position carries over."""
        sync = GraphSynchronizer()
        tree = sample_tree()
        nodes, _ = sync.rebuild(tree)
        leaf = next(n for n in nodes if n.id == "n1")
        leaf.x, leaf.y, leaf.vx, leaf.vy = 11.0, 22.0, 0.0, 0.0

        generation = sync.rebuild(reparent_leaf(tree, "n1_leafRef", "g2"))

        moved = generation.get_node("n1")
        assert moved.position == (11.0, 22.0)
        assert moved.origin_group_id == "g2"
        assert ("g2", "n1") in [(e.source_id, e.target_id) for e in generation.edges]
