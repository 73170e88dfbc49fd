"""
Tests for GraphSynchronizer.

These tests verify that cluster trees flatten into a well-formed graph and
that node positions survive regeneration.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from notegraph_core.domain.enums import NodeKind
from notegraph_core.domain.models import ClusterGroup, ClusterLeaf, ROOT_ID
from notegraph_core.services.synchronizer import GraphSynchronizer


def ai_tree():
    return [
        ClusterGroup(id="g1", name="AI", leaves=[
            ClusterLeaf(id="n1", name="Transformers", leaf_ref="n1_leafRef"),
            ClusterLeaf(id="n2", name="Attention", leaf_ref="n2_leafRef"),
        ]),
    ]


def assert_well_formed(nodes, edges):
    ids = [n.id for n in nodes]
    assert len(ids) == len(set(ids))
    by_id = {n.id: n for n in nodes}
    assert sum(1 for n in nodes if n.kind is NodeKind.ROOT) == 1
    for edge in edges:
        assert edge.source_id in by_id
        assert edge.target_id in by_id
    for node in nodes:
        if node.kind is NodeKind.LEAF:
            assert node.leaf_ref
            assert by_id[node.origin_group_id].kind is NodeKind.GROUP
        else:
            assert node.leaf_ref is None


class TestRebuild:
    """Flattening a tree into nodes and edges."""

    def test_single_group(self):
        """One group with two leaves gives 4 nodes and 3 edges."""
        nodes, edges = GraphSynchronizer().rebuild(ai_tree())

        assert [n.id for n in nodes] == ["root", "g1", "n1", "n2"]
        assert [(e.source_id, e.target_id) for e in edges] == [
            ("root", "g1"), ("g1", "n1"), ("g1", "n2"),
        ]

    def test_node_kinds_and_radii(self):
        """Kinds and radii follow root=35, group=25, leaf=12."""
        generation = GraphSynchronizer().rebuild(ai_tree())

        root = generation.get_node("root")
        group = generation.get_node("g1")
        leaf = generation.get_node("n1")
        assert (root.kind, root.radius) == (NodeKind.ROOT, 35.0)
        assert (group.kind, group.radius) == (NodeKind.GROUP, 25.0)
        assert (leaf.kind, leaf.radius) == (NodeKind.LEAF, 12.0)
        assert leaf.leaf_ref == "n1_leafRef"
        assert leaf.origin_group_id == "g1"

    def test_edge_distances(self):
        """Root-group edges are 120 long, group-leaf edges 60."""
        tree = ai_tree() + [ClusterGroup(id="g2", name="Cooking", leaves=[
            ClusterLeaf(id="n3", name="Bread", leaf_ref="3"),
        ])]
        nodes, edges = GraphSynchronizer().rebuild(tree)
        kinds = {n.id: n.kind for n in nodes}

        for edge in edges:
            pair = (kinds[edge.source_id], kinds[edge.target_id])
            if pair == (NodeKind.ROOT, NodeKind.GROUP):
                assert edge.target_distance == 120
            else:
                assert pair == (NodeKind.GROUP, NodeKind.LEAF)
                assert edge.target_distance == 60

    @pytest.mark.parametrize("tree", [[], None])
    def test_empty_tree(self, tree):
        """An empty tree yields only the root."""
        nodes, edges = GraphSynchronizer().rebuild(tree)

        assert len(nodes) == 1
        assert nodes[0].id == ROOT_ID
        assert nodes[0].kind is NodeKind.ROOT
        assert edges == []

    def test_generation_counter(self):
        sync = GraphSynchronizer()
        assert sync.rebuild(ai_tree()).generation == 1
        assert sync.rebuild(ai_tree()).generation == 2
        assert sync.generation == 2


class TestContinuity:
    """Physical state carried across generations."""

    def test_unchanged_tree_keeps_physics(self):
        """Two rebuilds of the same tree keep x/y/vx/vy of every node."""
        sync = GraphSynchronizer()
        first, _ = sync.rebuild(ai_tree())
        for i, node in enumerate(first):
            node.x, node.y = 10.0 * i, 20.0 * i
            node.vx, node.vy = 0.5 * i, -0.25 * i

        second, _ = sync.rebuild(ai_tree())

        before = {n.id: (n.x, n.y, n.vx, n.vy) for n in first}
        after = {n.id: (n.x, n.y, n.vx, n.vy) for n in second}
        assert before == after

    def test_nodes_are_fresh_objects(self):
        """No node object is shared between generations."""
        sync = GraphSynchronizer()
        first, _ = sync.rebuild(ai_tree())
        second, _ = sync.rebuild(ai_tree())

        first_ids = {id(n) for n in first}
        assert all(id(n) not in first_ids for n in second)

    def test_new_nodes_start_unseeded(self):
        """A group added later has no position until the simulation seeds it."""
        sync = GraphSynchronizer()
        first, _ = sync.rebuild(ai_tree())
        for node in first:
            node.x, node.y, node.vx, node.vy = 1.0, 2.0, 0.0, 0.0

        tree = ai_tree() + [ClusterGroup(id="g2", name="Cooking")]
        generation = sync.rebuild(tree)

        assert generation.get_node("g1").position == (1.0, 2.0)
        assert generation.get_node("g2").position is None
        assert not generation.get_node("g2").is_seeded

    def test_pins_are_not_carried_over(self):
        sync = GraphSynchronizer()
        first, _ = sync.rebuild(ai_tree())
        first[2].fx, first[2].fy = 5.0, 5.0

        second, _ = sync.rebuild(ai_tree())

        assert not second[2].is_pinned

    def test_reset_forgets_previous(self):
        sync = GraphSynchronizer()
        first, _ = sync.rebuild(ai_tree())
        first[1].x, first[1].y = 3.0, 4.0

        sync.reset()
        second, _ = sync.rebuild(ai_tree())

        assert second[1].position is None


class TestMalformedInput:
    """Malformed trees are tolerated, never raised."""

    def test_duplicate_group_ids_last_write_wins(self):
        tree = [
            ClusterGroup(id="g1", name="First", leaves=[
                ClusterLeaf(id="n1", name="A", leaf_ref="a"),
            ]),
            ClusterGroup(id="g1", name="Second", leaves=[
                ClusterLeaf(id="n2", name="B", leaf_ref="b"),
            ]),
        ]
        generation = GraphSynchronizer().rebuild(tree)

        assert_well_formed(generation.nodes, generation.edges)
        assert generation.get_node("g1").name == "Second"
        assert [(e.source_id, e.target_id) for e in generation.edges].count(("root", "g1")) == 1
        assert generation.issues

    def test_leaf_listed_in_two_groups(self):
        """The later group wins; only its edge to the leaf remains."""
        tree = [
            ClusterGroup(id="g1", name="AI", leaves=[ClusterLeaf(id="n1", name="A", leaf_ref="a")]),
            ClusterGroup(id="g2", name="ML", leaves=[ClusterLeaf(id="n1", name="A", leaf_ref="a")]),
        ]
        nodes, edges = GraphSynchronizer().rebuild(tree)

        assert_well_formed(nodes, edges)
        leaf = next(n for n in nodes if n.id == "n1")
        assert leaf.origin_group_id == "g2"
        assert ("g1", "n1") not in [(e.source_id, e.target_id) for e in edges]

    def test_group_overwritten_by_leaf(self):
        """A leaf reusing a group id drops that group's other leaves."""
        tree = [
            ClusterGroup(id="g1", name="AI", leaves=[ClusterLeaf(id="n1", name="A", leaf_ref="a")]),
            ClusterGroup(id="g2", name="ML", leaves=[ClusterLeaf(id="g1", name="B", leaf_ref="b")]),
        ]
        nodes, edges = GraphSynchronizer().rebuild(tree)

        assert_well_formed(nodes, edges)
        assert "n1" not in {n.id for n in nodes}

    def test_leaf_overwritten_by_group(self):
        tree = [
            ClusterGroup(id="g1", name="AI", leaves=[ClusterLeaf(id="g2", name="A", leaf_ref="a")]),
            ClusterGroup(id="g2", name="ML"),
        ]
        nodes, edges = GraphSynchronizer().rebuild(tree)

        assert_well_formed(nodes, edges)
        assert next(n for n in nodes if n.id == "g2").kind is NodeKind.GROUP

    def test_dangling_leaves_skipped(self):
        """Leaves without id or leaf_ref are dropped."""
        tree = [ClusterGroup(id="g1", name="AI", leaves=[
            ClusterLeaf(id="", name="No id", leaf_ref="x"),
            ClusterLeaf(id="n2", name="No ref", leaf_ref=""),
            ClusterLeaf(id="n3", name="Fine", leaf_ref="3"),
        ])]
        generation = GraphSynchronizer().rebuild(tree)

        assert [n.id for n in generation.nodes] == ["root", "g1", "n3"]
        assert len(generation.issues) == 2

    def test_reserved_root_id_skipped(self):
        tree = [ClusterGroup(id="root", name="Impostor"), ClusterGroup(id="g1", name="AI")]
        nodes, edges = GraphSynchronizer().rebuild(tree)

        assert_well_formed(nodes, edges)
        assert next(n for n in nodes if n.id == "root").kind is NodeKind.ROOT
        assert len(nodes) == 2

    def test_root_invariant_for_many_trees(self):
        """Every non-empty tree yields exactly one root."""
        trees = [
            ai_tree(),
            [ClusterGroup(id=f"g{i}", name=str(i)) for i in range(5)],
            [ClusterGroup(id="x", name="X", leaves=[ClusterLeaf(id="x", name="X", leaf_ref="x")])],
        ]
        for tree in trees:
            nodes, edges = GraphSynchronizer().rebuild(tree)
            assert_well_formed(nodes, edges)
