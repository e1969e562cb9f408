"""
Broadcast Weight Calculator

When a transaction is jointly owned by k cosigners, each of them is expected
to publish 1/k of it. Summed over a branch, this gives the share of the
branch a leaf owner has to broadcast on-chain:

    W(branch) = sum(1 / |cosigners(tx)| for tx in branch)

The cosigner set of a transaction is read from its first input only.
"""

from typing import Tuple

from arktree.core.exceptions import InvalidNodeError
from arktree.core.tree_model import TreeTx, TxGraph

from .traversal import traverse


def cosigner_keys(tx: TreeTx) -> Tuple[str, ...]:
    """
    Cosigner public keys of the first input of `tx`.

    Raises:
        InvalidNodeError: if the transaction has no inputs or the first input
            carries no cosigner keys
    """
    if not tx.inputs:
        raise InvalidNodeError(tx.txid, "transaction has no inputs")
    keys = tx.inputs[0].cosigner_keys
    if not keys:
        raise InvalidNodeError(tx.txid, "first input has no cosigner keys")
    return keys


def node_weight(tx: TreeTx) -> float:
    """Broadcast share of a single transaction: 1 / number of cosigners."""
    return 1.0 / len(cosigner_keys(tx))


def branch_weight(branch: TxGraph) -> float:
    """
    Broadcast weight of a branch.

    Raises:
        InvalidNodeError: if a transaction of the branch has no cosigners
    """
    total = 0.0

    def accumulate(_graph: TxGraph, tx: TreeTx) -> bool:
        nonlocal total
        total += node_weight(tx)
        return True

    traverse(branch, accumulate)
    return total
