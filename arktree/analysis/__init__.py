"""
Arktree Analysis Module

Branch statistics for vtxo trees:
- Graph traversal with early stop
- Branch extraction (leaf to root subgraph)
- Broadcast weight of a branch (sum of 1/cosigners)
- Descriptive statistics (count, max, mean, median, frequency table)

Usage:
    from arktree.analysis import analyze_tree

    result = analyze_tree(graph)
    print(result.branch_sizes, result.branch_weights)
"""

from .traversal import (
    traverse,
    number_of_nodes,
)

from .branch_extractor import (
    extract_branch,
    extract_branches,
)

from .weight_calculator import (
    cosigner_keys,
    node_weight,
    branch_weight,
)

from .statistics import (
    WEIGHT_PRECISION,
    SampleSummary,
    count,
    maximum,
    mean,
    median,
    round_weight,
    frequency_table,
    summarize,
)

from .analyzer import (
    BranchMetrics,
    TreeAnalysisResult,
    BranchAnalyzer,
    analyze_tree,
    size_of_branches,
    weight_of_branches,
)

__all__ = [
    # Traversal
    "traverse",
    "number_of_nodes",
    # Branches
    "extract_branch",
    "extract_branches",
    # Weights
    "cosigner_keys",
    "node_weight",
    "branch_weight",
    # Statistics
    "WEIGHT_PRECISION",
    "SampleSummary",
    "count",
    "maximum",
    "mean",
    "median",
    "round_weight",
    "frequency_table",
    "summarize",
    # Analyzer
    "BranchMetrics",
    "TreeAnalysisResult",
    "BranchAnalyzer",
    "analyze_tree",
    "size_of_branches",
    "weight_of_branches",
]
