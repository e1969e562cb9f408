"""
Graph Traversal

Depth-first visitor over a TxGraph with early stop.
"""

import logging
from typing import Callable, Optional

from arktree.core.exceptions import ArkTreeError, VisitorFailure
from arktree.core.tree_model import TreeTx, TxGraph

logger = logging.getLogger(__name__)

Visitor = Callable[[TxGraph, TreeTx], bool]


def traverse(graph: TxGraph, visit: Visitor, start: Optional[str] = None) -> int:
    """
    Apply `visit` to every transaction reachable from `start`.

    Nodes are visited in depth-first pre-order, children in output order, so a
    node is always visited after its parent. The entry node defaults to the
    graph root.

    Args:
        graph: Graph to walk
        visit: Called as visit(graph, tx); return False to halt the traversal
        start: Entry txid (default: root)

    Returns:
        Number of nodes on which `visit` was invoked

    Raises:
        NotFoundError: if `start` is not in the graph
        VisitorFailure: if `visit` raised a non-arktree exception
    """
    visited = 0
    for txid in graph.walk(start):
        visited += 1
        try:
            keep_going = visit(graph, graph.get(txid))
        except ArkTreeError:
            raise
        except Exception as e:
            raise VisitorFailure(txid, e) from e
        if not keep_going:
            logger.debug(f"Traversal stopped by visitor at {txid} after {visited} nodes")
            break

    return visited


def number_of_nodes(graph: TxGraph) -> int:
    """Count the transactions of a graph by visiting all of them."""
    count = 0

    def counter(_graph: TxGraph, _tx: TreeTx) -> bool:
        nonlocal count
        count += 1
        return True

    traverse(graph, counter)
    return count
