"""
Arktree Core Module

Vtxo tree model, tree builder and error kinds.

Graph Model:
    Vertices: TreeTx (one transaction of the tree)
    Edges: parent -> child (the child spends one output of the parent)

Usage:
    from arktree.core import build_vtxo_tree, Leaf, OutPoint, RelativeLocktime
    graph = build_vtxo_tree(OutPoint(txid), leaves, sweep_root, RelativeLocktime(100))
    print(len(graph), [leaf.txid for leaf in graph.leaves()])
"""

from .exceptions import (
    ArkTreeError,
    NotFoundError,
    InvalidNodeError,
    ConstructionError,
    VisitorFailure,
)

from .tree_model import (
    LocktimeType,
    OutPoint,
    TxInput,
    TxOutput,
    TreeTx,
    Leaf,
    RelativeLocktime,
    TxGraph,
)

from .tree_builder import (
    build_vtxo_tree,
    compute_txid,
)

__all__ = [
    # Errors
    "ArkTreeError",
    "NotFoundError",
    "InvalidNodeError",
    "ConstructionError",
    "VisitorFailure",
    # Model
    "LocktimeType",
    "OutPoint",
    "TxInput",
    "TxOutput",
    "TreeTx",
    "Leaf",
    "RelativeLocktime",
    "TxGraph",
    # Builder
    "build_vtxo_tree",
    "compute_txid",
]
