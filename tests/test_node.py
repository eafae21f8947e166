"""Unit tests for QTreeNode structure, insertion and removal."""

import gc
import logging
import unittest

import pytest

from quadtreelib import (
    MAX_CHILDREN,
    CapacityError,
    ChildIndexError,
    QTreeError,
    QTreeNode,
    TreeCycleError,
)
from quadtreelib.testing import build_count_tree, build_sample_tree


class TestConstruction(unittest.TestCase):
    """The four ways of creating a node."""

    def test_content_only(self):
        node = QTreeNode(content="root")
        self.assertEqual(node.content, "root")
        self.assertIsNone(node.parent)
        self.assertTrue(node.is_root())

    def test_parent_only(self):
        root = QTreeNode(content="root")
        placeholder = QTreeNode(root)
        self.assertIs(placeholder.parent, root)
        self.assertIsNone(placeholder.content)
        # The back-reference alone does not attach the node
        self.assertFalse(root.has_children())

    def test_parent_and_content(self):
        root = QTreeNode(content="Root")
        child = QTreeNode(root, "Child")
        self.assertIs(child.parent, root)
        self.assertEqual(child.content, "Child")

    def test_neither(self):
        node = QTreeNode()
        self.assertIsNone(node.content)
        self.assertIsNone(node.parent)
        self.assertEqual(node.count(), 1)
        self.assertTrue(node.is_empty())

    def test_falsy_content_is_not_absent(self):
        node = QTreeNode(content=0)
        self.assertFalse(node.is_empty())
        self.assertEqual(node.content, 0)


class TestCount(unittest.TestCase):

    def test_count_children_with_children(self):
        root = build_count_tree()
        self.assertEqual(root.count(), 7)

    def test_count_empty_content(self):
        self.assertEqual(QTreeNode().count(), 1)

    def test_count_is_self_plus_descendants(self):
        root = build_sample_tree()
        for node in root.iter_nodes():
            self.assertEqual(node.count(), 1 + sum(child.count() for child in node.children))


class TestEmptiness:

    def test_empty_requires_no_content_and_no_children(self):
        assert QTreeNode().is_empty()
        assert not QTreeNode(content="x").is_empty()

        with_child = QTreeNode()
        with_child.insert(QTreeNode())
        assert not with_child.is_empty()

    def test_emptiness_restored_after_removing_last_child(self):
        node = QTreeNode()
        node.insert(QTreeNode(content=1))
        node.remove_at(0)
        assert node.is_empty()


class TestHasChildren:

    def test_has_children(self):
        root = QTreeNode(content="root")
        assert not root.has_children()
        root.insert(QTreeNode(content="child1"))
        assert root.has_children()
        assert not root.child(0).has_children()
        assert root.child(0).parent.has_children()


class TestInsert:

    def test_insert_sets_parent(self):
        root = QTreeNode(content="root")
        child = QTreeNode(content="child")
        root.insert(child)
        assert child.parent is root
        assert root.child(0) is child

    def test_insert_preserves_order(self):
        root = QTreeNode(content=0)
        for value in range(1, 5):
            root.insert(QTreeNode(content=value))
        assert [c.content for c in root.children] == [1, 2, 3, 4]

    def test_insert_more_than_four_child(self):
        root = QTreeNode(content="Root")
        child = QTreeNode(root, "Child")
        root.insert(child)

        for i in range(1, 5):
            child.insert(QTreeNode(content=f"child{i}"))

        with pytest.raises(CapacityError):
            child.insert(QTreeNode(content="child5"))

        assert root.child(0).child(3).content == "child4"

    def test_insert_more_than_four_root(self):
        root = QTreeNode(content="Root")
        with pytest.raises(CapacityError):
            for i in range(1, 6):
                root.insert(QTreeNode(content=f"child{i}"))

    def test_rejected_insert_has_no_effect(self):
        root = QTreeNode(content="Root")
        originals = [QTreeNode(content=i) for i in range(MAX_CHILDREN)]
        for node in originals:
            root.insert(node)

        other_parent = QTreeNode(content="elsewhere")
        extra = QTreeNode(other_parent, "extra")

        with pytest.raises(CapacityError):
            root.insert(extra)

        assert len(root.children) == MAX_CHILDREN
        assert list(root.children) == originals
        assert extra.parent is other_parent

    def test_capacity_error_is_a_qtree_error(self):
        assert issubclass(CapacityError, QTreeError)

    def test_insert_self_rejected(self):
        node = QTreeNode(content=1)
        with pytest.raises(TreeCycleError):
            node.insert(node)
        assert not node.has_children()

    def test_insert_ancestor_rejected(self):
        root = build_sample_tree()
        leaf = root.child(1).child(3).child(0)
        with pytest.raises(TreeCycleError):
            leaf.insert(root)
        assert leaf.is_leaf()
        assert root.parent is None

    def test_rejected_insert_is_logged(self, caplog):
        caplog.set_level(logging.WARNING, logger="quadtreelib")
        root = QTreeNode(content="full")
        for i in range(MAX_CHILDREN):
            root.insert(QTreeNode(content=i))
        with pytest.raises(CapacityError):
            root.insert(QTreeNode(content="one too many"))
        assert any("full node" in record.getMessage() for record in caplog.records)


class TestChildAccess:

    def test_child_out_of_range(self):
        root = QTreeNode(content=1)
        root.insert(QTreeNode(content=2))
        with pytest.raises(ChildIndexError):
            root.child(1)

    def test_negative_index_rejected(self):
        root = QTreeNode(content=1)
        root.insert(QTreeNode(content=2))
        with pytest.raises(ChildIndexError):
            root.child(-1)

    def test_child_index_error_is_index_error(self):
        with pytest.raises(IndexError):
            QTreeNode().child(0)

    def test_children_snapshot_cannot_bypass_capacity(self):
        root = QTreeNode(content=1)
        snapshot = root.children
        assert snapshot == ()
        assert isinstance(snapshot, tuple)


class TestRemoveAt:

    def test_remove_at(self):
        root = QTreeNode(content=0)
        for value in range(1, 5):
            root.insert(QTreeNode(content=value))

        assert root.remove_at(3).content == 4
        assert root.count() - 1 == 3
        assert root.remove_at(2).content == 3
        assert root.count() - 1 == 2
        assert root.remove_at(1).content == 2
        assert root.count() - 1 == 1
        assert root.remove_at(0).content == 1
        assert root.count() - 1 == 0

        with pytest.raises(ChildIndexError):
            root.remove_at(0)

    def test_remove_shifts_later_children(self):
        root = QTreeNode(content=0)
        for value in range(1, 5):
            root.insert(QTreeNode(content=value))

        removed = root.remove_at(1)

        assert removed.content == 2
        assert [c.content for c in root.children] == [1, 3, 4]

    def test_remove_out_of_range_leaves_children_unchanged(self):
        root = QTreeNode(content=0)
        root.insert(QTreeNode(content=1))
        root.insert(QTreeNode(content=2))
        before = list(root.children)

        for index in (2, 5, -1):
            with pytest.raises(ChildIndexError):
                root.remove_at(index)

        assert list(root.children) == before

    def test_removed_node_is_detached(self):
        root = build_sample_tree()
        subtree = root.remove_at(1)

        assert subtree.parent is None
        assert subtree.is_root()
        # The removed subtree keeps its own structure
        assert subtree.count() == 6
        assert subtree.child(3).child(0).parent is subtree.child(3)
        assert root.count() == 3

    def test_removed_node_can_be_reinserted(self):
        root = QTreeNode(content="a")
        other = QTreeNode(content="b")
        root.insert(QTreeNode(content="moving"))

        moving = root.remove_at(0)
        other.insert(moving)

        assert moving.parent is other
        assert not root.has_children()


class TestNavigation:

    def test_ancestors_root_and_depth(self):
        root = build_sample_tree()
        leaf = root.child(1).child(3).child(0)

        assert [n.content for n in leaf.ancestors()] == [8, 3, 1]
        assert leaf.root() is root
        assert leaf.depth() == 3
        assert root.depth() == 0
        assert root.root() is root

    def test_path(self):
        root = build_sample_tree()
        assert root.path() == ()
        assert root.child(1).child(3).child(0).path() == (1, 3, 0)
        assert root.child(0).child(0).path() == (0, 0)

    def test_path_of_placeholder_raises(self):
        root = QTreeNode(content="root")
        placeholder = QTreeNode(root)

        assert placeholder.depth() == 1
        with pytest.raises(QTreeError, match="not among the children"):
            placeholder.path()

    def test_parent_is_not_an_owning_reference(self):
        child = QTreeNode(content="child")

        def attach():
            parent = QTreeNode(content="parent")
            parent.insert(child)
            assert child.parent is parent

        attach()
        gc.collect()
        assert child.parent is None

    def test_repr(self):
        root = build_count_tree()
        assert repr(root) == "QTreeNode(content=1, children=3)"
