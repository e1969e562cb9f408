"""
Arktree - Vtxo Tree Branch Analysis

Generates vtxo trees and measures their branches: how many transactions a
leaf owner must publish to reach their leaf, and which share of them they are
responsible for broadcasting.

Usage:
    from arktree.generation import generate_tree
    from arktree.analysis import analyze_tree

    generated = generate_tree(num_leaves=5, seed=42)
    result = analyze_tree(generated.graph)
    print(result.branch_sizes, result.size_summary.median)
"""

__version__ = "1.0.0"
