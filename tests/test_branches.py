"""
Unit Tests for branch extraction and broadcast weights

Tests for:
    - branch_extractor.py: extract_branch, extract_branches
    - weight_calculator.py: cosigner_keys, node_weight, branch_weight
"""

import pytest

from arktree.analysis import (
    branch_weight,
    cosigner_keys,
    extract_branch,
    extract_branches,
    node_weight,
    number_of_nodes,
    traverse,
)
from arktree.core import InvalidNodeError, NotFoundError, OutPoint, TreeTx, TxGraph, TxInput


# =============================================================================
# Branch Extraction Tests
# =============================================================================

class TestExtractBranch:
    """Tests for extract_branch."""

    def test_contains_leaf_and_root(self, five_leaf_tree):
        for leaf in five_leaf_tree.leaves():
            branch = extract_branch(five_leaf_tree, leaf.txid)
            seen = set()
            traverse(branch, lambda g, tx: seen.add(tx.txid) or True)
            assert leaf.txid in seen
            assert five_leaf_tree.root in seen

    def test_branch_is_a_chain(self, small_tree):
        branch = extract_branch(small_tree, "leaf_b")
        assert branch.root == "root"
        assert [tx.txid for tx in branch.leaves()] == ["leaf_b"]
        assert branch.children("root") == ["left"]
        assert branch.children("left") == ["leaf_b"]

    def test_cosigner_data_unchanged(self, small_tree):
        branch = extract_branch(small_tree, "leaf_a")
        for txid in branch.txids():
            assert branch.get(txid) == small_tree.get(txid)

    def test_root_only_tree(self, single_node_graph):
        branch = extract_branch(single_node_graph, "only")
        assert number_of_nodes(branch) == 1

    def test_not_found_leaves_graph_unmodified(self, small_tree):
        before = (small_tree.txids(), [small_tree.children(t) for t in small_tree.txids()])
        with pytest.raises(NotFoundError) as exc_info:
            extract_branch(small_tree, "missing")
        assert exc_info.value.txid == "missing"
        after = (small_tree.txids(), [small_tree.children(t) for t in small_tree.txids()])
        assert before == after

    def test_branches_are_independent(self, small_tree, tx_factory):
        first = extract_branch(small_tree, "leaf_a")
        second = extract_branch(small_tree, "leaf_b")
        first.add_tx(tx_factory("extra"), parent="leaf_a")
        assert "extra" not in second
        assert "extra" not in small_tree


class TestExtractBranches:
    """Whole-tree branch extraction."""

    @pytest.mark.parametrize("n", [1, 2, 5, 9, 16])
    def test_one_branch_per_leaf(self, tree_factory, n):
        graph = tree_factory(n)
        total = number_of_nodes(graph)
        branches = list(extract_branches(graph))
        assert len(branches) == n
        for _, branch in branches:
            assert 1 <= number_of_nodes(branch) <= total

    def test_leaf_order(self, small_tree):
        assert [txid for txid, _ in extract_branches(small_tree)] == ["leaf_a", "leaf_b", "leaf_c"]


# =============================================================================
# Weight Tests
# =============================================================================

class TestCosignerLookup:

    def test_reads_first_input(self, tx_factory):
        tx = tx_factory("t", ("a", "b"))
        assert cosigner_keys(tx) == ("a", "b")

    def test_no_inputs(self):
        with pytest.raises(InvalidNodeError) as exc_info:
            cosigner_keys(TreeTx(txid="bare"))
        assert exc_info.value.txid == "bare"

    def test_first_input_without_cosigners(self):
        tx = TreeTx(
            txid="t",
            inputs=(
                TxInput(OutPoint("00" * 32)),
                TxInput(OutPoint("00" * 32, 1), ("a", "b")),
            ),
        )
        with pytest.raises(InvalidNodeError):
            cosigner_keys(tx)

    def test_other_inputs_ignored(self):
        tx = TreeTx(
            txid="t",
            inputs=(
                TxInput(OutPoint("00" * 32), ("a", "b")),
                TxInput(OutPoint("00" * 32, 1), ("a", "b", "c", "d")),
            ),
        )
        assert node_weight(tx) == pytest.approx(0.5)


class TestBranchWeight:
    """Tests for branch_weight."""

    def test_three_nodes_two_cosigners(self, chain_graph):
        assert branch_weight(chain_graph) == pytest.approx(1.5)

    def test_single_cosigner_equals_node_count(self, tx_factory):
        graph = TxGraph()
        graph.add_tx(tx_factory("r"))
        graph.add_tx(tx_factory("a"), parent="r")
        graph.add_tx(tx_factory("b"), parent="a")
        graph.add_tx(tx_factory("c"), parent="b")
        assert branch_weight(graph) == pytest.approx(number_of_nodes(graph))

    @pytest.mark.parametrize("k", [1, 2, 3, 7])
    def test_k_cosigners(self, tx_factory, k):
        keys = tuple(f"key{i}" for i in range(k))
        graph = TxGraph()
        graph.add_tx(tx_factory("r", keys))
        graph.add_tx(tx_factory("a", keys), parent="r")
        graph.add_tx(tx_factory("b", keys), parent="a")
        graph.add_tx(tx_factory("c", keys), parent="b")
        assert branch_weight(graph) == pytest.approx(4 / k)

    def test_mixed_cosigners(self, small_tree):
        branch = extract_branch(small_tree, "leaf_a")
        assert branch_weight(branch) == pytest.approx(1 / 3 + 1 / 2 + 1)

    def test_builder_branches(self, five_leaf_tree):
        weights = [branch_weight(b) for _, b in extract_branches(five_leaf_tree)]
        assert weights == pytest.approx([1.95, 1.95, 1.95, 1.95, 1.2])

    def test_positive_for_valid_branch(self, tree_factory):
        for _, branch in extract_branches(tree_factory(11, cosigners_per_leaf=2)):
            assert branch_weight(branch) > 0

    def test_invalid_node_aborts(self, tx_factory):
        graph = TxGraph()
        graph.add_tx(tx_factory("r", ("a",)))
        graph.add_tx(TreeTx(txid="broken"), parent="r")
        with pytest.raises(InvalidNodeError) as exc_info:
            branch_weight(graph)
        assert exc_info.value.txid == "broken"
