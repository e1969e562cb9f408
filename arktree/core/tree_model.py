"""
Vtxo Tree Model

Data structures for representing a vtxo tree as a graph of transactions:

Values (immutable):
- OutPoint: {txid, vout}
- TxInput: {previous_output, cosigner_keys}
- TxOutput: {amount, script}
- TreeTx: {txid, inputs, outputs}
- Leaf: {amount, script, cosigner_public_keys}
- RelativeLocktime: {value, type (block|second)}

Graph:
- TxGraph: rooted tree of TreeTx backed by a networkx DiGraph.
  Edges point from a parent transaction to the child spending one of its outputs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

import networkx as nx

from .exceptions import ConstructionError, NotFoundError


# =============================================================================
# Enumerations
# =============================================================================

class LocktimeType(str, Enum):
    """Unit of a relative timelock"""
    BLOCK = "block"
    SECOND = "second"


# =============================================================================
# Transaction Values
# =============================================================================

@dataclass(frozen=True)
class OutPoint:
    """Reference to a transaction output"""
    txid: str
    vout: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"txid": self.txid, "vout": self.vout}


@dataclass(frozen=True)
class TxInput:
    """
    Transaction input.

    Attributes:
        previous_output: Output being spent
        cosigner_keys: Hex public keys of the parties that jointly authorize
            spending this input. Empty when the input carries no such metadata.
    """
    previous_output: OutPoint
    cosigner_keys: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "previous_output": self.previous_output.to_dict(),
            "cosigner_keys": list(self.cosigner_keys),
        }


@dataclass(frozen=True)
class TxOutput:
    """Transaction output"""
    amount: int
    script: str

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "script": self.script}


@dataclass(frozen=True)
class TreeTx:
    """A transaction of the vtxo tree"""
    txid: str
    inputs: Tuple[TxInput, ...] = ()
    outputs: Tuple[TxOutput, ...] = ()

    @property
    def total_output(self) -> int:
        return sum(out.amount for out in self.outputs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "txid": self.txid,
            "inputs": [i.to_dict() for i in self.inputs],
            "outputs": [o.to_dict() for o in self.outputs],
        }


@dataclass(frozen=True)
class Leaf:
    """Receiver of a vtxo tree leaf"""
    amount: int
    script: str
    cosigner_public_keys: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # accept any iterable of keys but store an immutable tuple
        object.__setattr__(self, "cosigner_public_keys", tuple(self.cosigner_public_keys))


@dataclass(frozen=True)
class RelativeLocktime:
    """Relative timelock (BIP68 style) expressed in blocks or seconds"""
    value: int
    type: LocktimeType = LocktimeType.BLOCK

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "type": self.type.value}


# =============================================================================
# Graph
# =============================================================================

class TxGraph:
    """
    Rooted tree of transactions.

    Invariants:
        - exactly one root (no parent) once the graph is non-empty
        - every other transaction has exactly one parent
        - children keep insertion order, which is the parent's output order

    The graph is built once (by the tree builder) and treated as read-only by
    the analysis pass.
    """

    def __init__(self) -> None:
        self._graph = nx.DiGraph()
        self._root: Optional[str] = None

    @classmethod
    def from_edges(
        cls,
        txs: Iterable[TreeTx],
        parents: Dict[str, Optional[str]],
    ) -> "TxGraph":
        """
        Build a graph from transactions and a txid -> parent txid mapping.

        Transactions may come in any order; parents are inserted first.
        """
        by_id: Dict[str, TreeTx] = {}
        for tx in txs:
            if tx.txid in by_id:
                raise ConstructionError(f"duplicate transaction {tx.txid}")
            by_id[tx.txid] = tx

        graph = cls()
        pending = list(by_id)
        while pending:
            deferred = []
            for txid in pending:
                parent = parents.get(txid)
                if parent is not None and parent not in graph:
                    if parent not in by_id:
                        raise ConstructionError(f"unknown parent {parent} for {txid}")
                    deferred.append(txid)
                    continue
                graph.add_tx(by_id[txid], parent=parent)
            if len(deferred) == len(pending):
                raise ConstructionError("parent links contain a cycle")
            pending = deferred
        return graph

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_tx(self, tx: TreeTx, parent: Optional[str] = None) -> None:
        """Insert a transaction below `parent` (or as the root when None)."""
        if tx.txid in self._graph:
            raise ConstructionError(f"duplicate transaction {tx.txid}")
        if parent is None:
            if self._root is not None:
                raise ConstructionError(
                    f"graph already has root {self._root}, cannot add {tx.txid} as root"
                )
            self._graph.add_node(tx.txid, tx=tx)
            self._root = tx.txid
            return
        if parent not in self._graph:
            raise ConstructionError(f"unknown parent {parent} for {tx.txid}")
        self._graph.add_node(tx.txid, tx=tx)
        self._graph.add_edge(parent, tx.txid)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Optional[str]:
        return self._root

    @property
    def root_tx(self) -> Optional[TreeTx]:
        return self.get(self._root) if self._root is not None else None

    def __contains__(self, txid: object) -> bool:
        return txid in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __repr__(self) -> str:
        return f"TxGraph(root={self._root!r}, nodes={len(self)})"

    def get(self, txid: str) -> TreeTx:
        self._require(txid)
        return self._graph.nodes[txid]["tx"]

    def txids(self) -> List[str]:
        return list(self._graph.nodes)

    def children(self, txid: str) -> List[str]:
        self._require(txid)
        return list(self._graph.successors(txid))

    def parent(self, txid: str) -> Optional[str]:
        self._require(txid)
        return next(iter(self._graph.predecessors(txid)), None)

    def is_leaf(self, txid: str) -> bool:
        self._require(txid)
        return self._graph.out_degree(txid) == 0

    def walk(self, start: Optional[str] = None) -> Iterator[str]:
        """Txids in depth-first pre-order from `start` (default: root), children in order."""
        entry = self._root if start is None else start
        if entry is None:
            return iter(())
        self._require(entry)
        return nx.dfs_preorder_nodes(self._graph, entry)

    def leaves(self) -> List[TreeTx]:
        """Leaf transactions, depth-first from the root with children in order."""
        if self._root is None:
            return []
        return [
            self._graph.nodes[txid]["tx"]
            for txid in self.walk()
            if self._graph.out_degree(txid) == 0
        ]

    def iter_txs(self) -> Iterator[TreeTx]:
        for txid in self._graph.nodes:
            yield self._graph.nodes[txid]["tx"]

    def subgraph(self, txids: Iterable[str]) -> "TxGraph":
        """
        Minimal subgraph connecting the given transactions to the root.

        The returned graph has its own structure; TreeTx values are shared
        since they are immutable.
        """
        keep = set()
        for txid in txids:
            self._require(txid)
            keep.add(txid)
            keep.update(nx.ancestors(self._graph, txid))

        sub = TxGraph()
        if not keep:
            return sub

        stack: List[Tuple[str, Optional[str]]] = [(self._root, None)]
        while stack:
            txid, parent = stack.pop()
            sub.add_tx(self._graph.nodes[txid]["tx"], parent=parent)
            kept = [c for c in self._graph.successors(txid) if c in keep]
            stack.extend((child, txid) for child in reversed(kept))
        return sub

    def apply(self, visit: Callable[["TxGraph", TreeTx], bool]) -> int:
        """Apply a visitor to every transaction, starting from the root."""
        # lazy import: analysis depends on the model, not the other way round
        from arktree.analysis.traversal import traverse
        return traverse(self, visit)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self._root,
            "transactions": [
                {**self._graph.nodes[txid]["tx"].to_dict(), "parent": self.parent(txid)}
                for txid in self._graph.nodes
            ],
        }

    def _require(self, txid: str) -> None:
        if txid not in self._graph:
            raise NotFoundError(txid)
