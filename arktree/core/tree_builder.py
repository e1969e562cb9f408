"""
Vtxo Tree Builder

Builds the transaction tree that splits one shared output into one output
per leaf receiver.

Shape (radix 2, built bottom-up):
    - the leaf level holds one transaction per receiver
    - adjacent nodes are paired left to right under a new parent
    - an odd trailing node is carried up to the next level unchanged
    - the last remaining node is the root and spends the root input

    5 receivers -> 9 transactions:

                root
               /    \\
             n1      L5
            /  \\
          n2    n3
         / \\   / \\
        L1 L2 L3 L4

Every transaction input records the cosigners of the subtree it funds: the
ordered, de-duplicated union of the cosigner keys of all leaves below it.

Usage:
    from arktree.core import build_vtxo_tree, OutPoint, RelativeLocktime

    graph = build_vtxo_tree(
        OutPoint(txid="ab" * 32, vout=0),
        leaves,
        sweep_tapscript_root=os.urandom(32),
        vtxo_tree_expiry=RelativeLocktime(100),
    )
"""

import hashlib
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from coincurve import PublicKey

from .exceptions import ConstructionError
from .tree_model import (
    Leaf,
    OutPoint,
    RelativeLocktime,
    TreeTx,
    TxGraph,
    TxInput,
    TxOutput,
)

logger = logging.getLogger(__name__)

TX_VERSION = 3
SWEEP_ROOT_SIZE = 32
COMPRESSED_KEY_SIZE = 33
P2TR_PREFIX = "5120"

_HEX = re.compile(r"(?:[0-9a-fA-F]{2})+")


@dataclass
class _PendingNode:
    """Tree node before its transaction is materialized"""
    amount: int
    cosigners: Tuple[str, ...]
    leaf: Optional[Leaf] = None
    children: List["_PendingNode"] = field(default_factory=list)


# =============================================================================
# Public API
# =============================================================================

def build_vtxo_tree(
    root_input: OutPoint,
    leaves: Sequence[Leaf],
    sweep_tapscript_root: bytes,
    vtxo_tree_expiry: RelativeLocktime,
) -> TxGraph:
    """
    Build a vtxo tree for the given receivers.

    Args:
        root_input: Shared output spent by the root transaction
        leaves: Ordered receivers, one leaf transaction each
        sweep_tapscript_root: 32-byte tapscript root of the sweep path
        vtxo_tree_expiry: Relative timelock after which the tree can be swept

    Returns:
        Fully linked TxGraph

    Raises:
        ConstructionError: if any input is malformed
    """
    start = time.time()
    cosigners = _validate(root_input, leaves, sweep_tapscript_root, vtxo_tree_expiry)

    root = _build_shape(leaves, cosigners)
    graph = _materialize(root, root_input, sweep_tapscript_root, vtxo_tree_expiry)

    logger.info(
        f"Built vtxo tree: {len(leaves)} leaves, {len(graph)} transactions "
        f"in {(time.time() - start) * 1000:.2f} ms"
    )
    return graph


def compute_txid(inputs: Sequence[TxInput], outputs: Sequence[TxOutput]) -> str:
    """Bitcoin-style txid: reversed double SHA-256 of the serialized transaction."""
    data = bytearray(TX_VERSION.to_bytes(4, "little"))
    data += _varint(len(inputs))
    for tx_in in inputs:
        data += bytes.fromhex(tx_in.previous_output.txid)[::-1]
        data += tx_in.previous_output.vout.to_bytes(4, "little")
    data += _varint(len(outputs))
    for out in outputs:
        script = bytes.fromhex(out.script)
        data += out.amount.to_bytes(8, "little")
        data += _varint(len(script)) + script
    digest = hashlib.sha256(hashlib.sha256(bytes(data)).digest()).digest()
    return digest[::-1].hex()


# =============================================================================
# Validation
# =============================================================================

def _validate(
    root_input: OutPoint,
    leaves: Sequence[Leaf],
    sweep_tapscript_root: bytes,
    vtxo_tree_expiry: RelativeLocktime,
) -> List[Tuple[str, ...]]:
    """Check the builder inputs and return each leaf's canonical cosigner keys."""
    if not leaves:
        raise ConstructionError("no leaves to build the tree from")
    if len(sweep_tapscript_root) != SWEEP_ROOT_SIZE:
        raise ConstructionError(
            f"sweep tapscript root must be {SWEEP_ROOT_SIZE} bytes, "
            f"got {len(sweep_tapscript_root)}"
        )
    if vtxo_tree_expiry.value <= 0:
        raise ConstructionError(f"invalid tree expiry {vtxo_tree_expiry.value}")
    if not _is_hex(root_input.txid, 32):
        raise ConstructionError(f"invalid root input txid {root_input.txid!r}")

    cosigners = []
    for index, leaf in enumerate(leaves):
        if leaf.amount <= 0:
            raise ConstructionError(f"leaf {index}: amount must be positive, got {leaf.amount}")
        if not leaf.script or not _is_hex(leaf.script):
            raise ConstructionError(f"leaf {index}: invalid script {leaf.script!r}")
        if not leaf.cosigner_public_keys:
            raise ConstructionError(f"leaf {index}: missing cosigner public keys")
        cosigners.append(tuple(_canonical_key(index, key) for key in leaf.cosigner_public_keys))
    return cosigners


def _canonical_key(index: int, key: str) -> str:
    """Compressed lowercase hex form, so one party always has one spelling."""
    if not _is_hex(key, COMPRESSED_KEY_SIZE):
        raise ConstructionError(f"leaf {index}: cosigner key {key!r} is not a compressed public key")
    try:
        public_key = PublicKey(bytes.fromhex(key))
    except ValueError as e:
        raise ConstructionError(f"leaf {index}: invalid cosigner key {key}: {e}") from e
    return public_key.format(compressed=True).hex()


def _is_hex(value: str, size: Optional[int] = None) -> bool:
    # bytes.fromhex alone would accept embedded whitespace
    if not isinstance(value, str) or not _HEX.fullmatch(value):
        return False
    return size is None or len(value) == 2 * size


# =============================================================================
# Construction
# =============================================================================

def _build_shape(leaves: Sequence[Leaf], cosigners: Sequence[Tuple[str, ...]]) -> _PendingNode:
    level = [
        _PendingNode(amount=leaf.amount, cosigners=tuple(dict.fromkeys(keys)), leaf=leaf)
        for leaf, keys in zip(leaves, cosigners)
    ]

    depth = 0
    while len(level) > 1:
        paired: List[_PendingNode] = []
        for i in range(0, len(level) - 1, 2):
            left, right = level[i], level[i + 1]
            paired.append(_PendingNode(
                amount=left.amount + right.amount,
                cosigners=tuple(dict.fromkeys(left.cosigners + right.cosigners)),
                children=[left, right],
            ))
        if len(level) % 2:
            paired.append(level[-1])
        logger.debug(f"Tree level {depth}: {len(level)} nodes -> {len(paired)}")
        level = paired
        depth += 1

    return level[0]


def _materialize(
    root: _PendingNode,
    root_input: OutPoint,
    sweep_root: bytes,
    expiry: RelativeLocktime,
) -> TxGraph:
    graph = TxGraph()
    stack: List[Tuple[_PendingNode, OutPoint, Optional[str]]] = [(root, root_input, None)]

    while stack:
        node, prevout, parent = stack.pop()
        if node.leaf is not None:
            outputs = (TxOutput(node.leaf.amount, node.leaf.script.lower()),)
        else:
            outputs = tuple(
                TxOutput(child.amount, _branch_script(child.cosigners, sweep_root, expiry))
                for child in node.children
            )
        inputs = (TxInput(previous_output=prevout, cosigner_keys=node.cosigners),)
        tx = TreeTx(txid=compute_txid(inputs, outputs), inputs=inputs, outputs=outputs)
        graph.add_tx(tx, parent=parent)

        for vout in reversed(range(len(node.children))):
            stack.append((node.children[vout], OutPoint(tx.txid, vout), tx.txid))

    return graph


def _branch_script(cosigners: Tuple[str, ...], sweep_root: bytes, expiry: RelativeLocktime) -> str:
    """Taproot-shaped output committing to the cosigners, sweep root and expiry."""
    commitment = hashlib.sha256()
    for key in cosigners:
        commitment.update(bytes.fromhex(key))
    commitment.update(sweep_root)
    commitment.update(expiry.value.to_bytes(4, "little"))
    commitment.update(expiry.type.value.encode())
    return P2TR_PREFIX + commitment.hexdigest()


def _varint(n: int) -> bytes:
    if n < 0xFD:
        return bytes([n])
    if n <= 0xFFFF:
        return b"\xfd" + n.to_bytes(2, "little")
    if n <= 0xFFFFFFFF:
        return b"\xfe" + n.to_bytes(4, "little")
    return b"\xff" + n.to_bytes(8, "little")
