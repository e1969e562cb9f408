"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the arktree test suite.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "weight"        # Run only weight tests
    pytest tests/ --quick            # Skip slow tests
"""

from typing import Callable, Dict, List, Optional, Sequence

import pytest
from coincurve import PrivateKey

from arktree.core import (
    Leaf,
    OutPoint,
    RelativeLocktime,
    TreeTx,
    TxGraph,
    TxInput,
    TxOutput,
    build_vtxo_tree,
)


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Helpers
# =============================================================================

ROOT_TXID = "ab" * 32
SWEEP_ROOT = bytes(range(32))


def make_tx(txid: str, cosigners: Sequence[str] = ("k1",), parent: Optional[str] = None) -> TreeTx:
    """Transaction with a single input carrying the given cosigners."""
    prevout = OutPoint(txid=parent or ROOT_TXID, vout=0)
    return TreeTx(
        txid=txid,
        inputs=(TxInput(previous_output=prevout, cosigner_keys=tuple(cosigners)),),
        outputs=(TxOutput(amount=1000, script="51"),),
    )


def make_key(index: int) -> str:
    """Deterministic compressed public key (hex)."""
    return PrivateKey(index.to_bytes(32, "big")).public_key.format(compressed=True).hex()


def make_leaves(count: int, cosigners_per_leaf: int = 1) -> List[Leaf]:
    leaves = []
    for i in range(count):
        keys = tuple(make_key(i * cosigners_per_leaf + j + 1) for j in range(cosigners_per_leaf))
        leaves.append(Leaf(amount=1000 + i, script=f"5120{i:064x}", cosigner_public_keys=keys))
    return leaves


def build_tree(count: int, cosigners_per_leaf: int = 1) -> TxGraph:
    return build_vtxo_tree(
        OutPoint(txid=ROOT_TXID, vout=0),
        make_leaves(count, cosigners_per_leaf),
        SWEEP_ROOT,
        RelativeLocktime(100),
    )


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def tx_factory() -> Callable[..., TreeTx]:
    return make_tx


@pytest.fixture
def chain_graph() -> TxGraph:
    """root -> mid -> leaf, two cosigners on every transaction."""
    graph = TxGraph()
    graph.add_tx(make_tx("root", ("a", "b")))
    graph.add_tx(make_tx("mid", ("a", "b"), parent="root"), parent="root")
    graph.add_tx(make_tx("leaf", ("a", "b"), parent="mid"), parent="mid")
    return graph


@pytest.fixture
def small_tree() -> TxGraph:
    """
    Hand-built tree:

              root (a,b,c)
             /           \\
        left (a,b)      leaf_c (c)
        /       \\
    leaf_a (a)  leaf_b (b)
    """
    graph = TxGraph()
    graph.add_tx(make_tx("root", ("a", "b", "c")))
    graph.add_tx(make_tx("left", ("a", "b"), parent="root"), parent="root")
    graph.add_tx(make_tx("leaf_c", ("c",), parent="root"), parent="root")
    graph.add_tx(make_tx("leaf_a", ("a",), parent="left"), parent="left")
    graph.add_tx(make_tx("leaf_b", ("b",), parent="left"), parent="left")
    return graph


@pytest.fixture
def single_node_graph() -> TxGraph:
    graph = TxGraph()
    graph.add_tx(make_tx("only", ("a",)))
    return graph


@pytest.fixture
def five_leaf_tree() -> TxGraph:
    """Builder-made tree with 5 single-cosigner leaves (9 transactions)."""
    return build_tree(5)


@pytest.fixture
def leaf_factory() -> Callable[..., List[Leaf]]:
    return make_leaves


@pytest.fixture
def tree_factory() -> Callable[..., TxGraph]:
    return build_tree


@pytest.fixture
def yaml_config(tmp_path) -> Callable[[Dict], str]:
    """Write a YAML generation config and return its path."""
    import yaml

    def _write(data: Dict) -> str:
        path = tmp_path / "tree.yaml"
        path.write_text(yaml.safe_dump(data))
        return str(path)

    return _write
