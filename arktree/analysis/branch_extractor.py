"""
Branch Extractor

A branch is the chain of transactions a leaf owner must publish to reach
their leaf: the leaf, the root and every transaction in between.
"""

import logging
from typing import Iterator, Tuple

from arktree.core.exceptions import NotFoundError
from arktree.core.tree_model import TxGraph

logger = logging.getLogger(__name__)


def extract_branch(graph: TxGraph, leaf_txid: str) -> TxGraph:
    """
    Extract the branch of `leaf_txid`.

    Returns:
        Independent TxGraph holding the path from the root to the leaf

    Raises:
        NotFoundError: if `leaf_txid` is not in the graph
    """
    if leaf_txid not in graph:
        raise NotFoundError(leaf_txid)
    branch = graph.subgraph([leaf_txid])
    logger.debug(f"Extracted branch of {leaf_txid}: {len(branch)} transactions")
    return branch


def extract_branches(graph: TxGraph) -> Iterator[Tuple[str, TxGraph]]:
    """Yield (leaf txid, branch) for every leaf, in leaf order."""
    for leaf in graph.leaves():
        yield leaf.txid, extract_branch(graph, leaf.txid)
