"""
Branch Analyzer

Single analysis pass over a vtxo tree. For every leaf, the branch is
extracted once and walked once; the walk accumulates both the branch size
(transaction count) and, when requested, its broadcast weight.

Usage:
    from arktree.analysis import BranchAnalyzer

    result = BranchAnalyzer(graph).analyze()
    print(result.size_summary.mean, result.weight_summary.median)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from arktree.core.tree_model import TreeTx, TxGraph

from .branch_extractor import extract_branches
from .statistics import SampleSummary, round_weight, summarize
from .traversal import number_of_nodes, traverse
from .weight_calculator import node_weight


@dataclass
class BranchMetrics:
    """Size and weight of one branch, filled by a single traversal."""
    leaf_txid: str
    size: int = 0
    weight: float = 0.0


@dataclass
class TreeAnalysisResult:
    """
    Branch statistics of a whole tree.

    Samples are ordered like the leaves of the tree. `branch_weights` and
    `weight_summary` are None when weights were not requested.
    """
    total_nodes: int
    leaf_txids: List[str]
    branch_sizes: List[int]
    size_summary: SampleSummary
    branch_weights: Optional[List[float]] = None
    weight_summary: Optional[SampleSummary] = None
    computation_time_ms: float = 0.0

    @property
    def leaf_count(self) -> int:
        return len(self.leaf_txids)

    @property
    def biggest_branch(self) -> int:
        return self.size_summary.maximum

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "total_nodes": self.total_nodes,
            "leaf_count": self.leaf_count,
            "branches": [
                {"leaf": txid, "size": size}
                for txid, size in zip(self.leaf_txids, self.branch_sizes)
            ],
            "branch_sizes": self.size_summary.to_dict(),
            "computation_time_ms": round(self.computation_time_ms, 2),
        }
        if self.branch_weights is not None:
            for entry, weight in zip(data["branches"], self.branch_weights):
                entry["weight"] = weight
            data["branch_weights"] = self.weight_summary.to_dict()
        return data


class BranchAnalyzer:
    """
    Computes per-branch sizes and broadcast weights of a TxGraph.

    The graph is only read. The first failure (unknown id, node without
    cosigners, failing visitor) aborts the pass and propagates.
    """

    def __init__(self, graph: TxGraph, include_weights: bool = True):
        self.graph = graph
        self.include_weights = include_weights
        self.logger = logging.getLogger(__name__)

    def analyze(self) -> TreeAnalysisResult:
        start_time = time.time()

        total_nodes = number_of_nodes(self.graph)
        branches = [self.measure(txid, branch) for txid, branch in extract_branches(self.graph)]

        sizes = [b.size for b in branches]
        weights = [b.weight for b in branches] if self.include_weights else None

        result = TreeAnalysisResult(
            total_nodes=total_nodes,
            leaf_txids=[b.leaf_txid for b in branches],
            branch_sizes=sizes,
            size_summary=summarize(sizes),
            branch_weights=weights,
            weight_summary=summarize(weights, key=round_weight) if weights is not None else None,
            computation_time_ms=(time.time() - start_time) * 1000,
        )
        self.logger.info(
            f"Analyzed {result.leaf_count} branches over {total_nodes} transactions "
            f"in {result.computation_time_ms:.2f} ms"
        )
        return result

    def measure(self, leaf_txid: str, branch: TxGraph) -> BranchMetrics:
        """Walk a branch once, counting transactions and summing weights."""
        metrics = BranchMetrics(leaf_txid=leaf_txid)

        def visit(_graph: TxGraph, tx: TreeTx) -> bool:
            metrics.size += 1
            if self.include_weights:
                metrics.weight += node_weight(tx)
            return True

        traverse(branch, visit)
        self.logger.debug(
            f"Branch {leaf_txid}: size={metrics.size} weight={metrics.weight:.4f}"
        )
        return metrics


# =============================================================================
# Convenience functions
# =============================================================================

def analyze_tree(graph: TxGraph, include_weights: bool = True) -> TreeAnalysisResult:
    return BranchAnalyzer(graph, include_weights=include_weights).analyze()


def size_of_branches(graph: TxGraph) -> List[int]:
    """Transaction count of every branch, in leaf order."""
    return analyze_tree(graph, include_weights=False).branch_sizes


def weight_of_branches(graph: TxGraph) -> List[float]:
    """Broadcast weight of every branch, in leaf order."""
    return analyze_tree(graph).branch_weights
