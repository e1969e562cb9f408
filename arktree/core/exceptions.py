"""
Error kinds raised by the vtxo tree model, builder and analysis pass.

All of them derive from ArkTreeError so callers can catch the whole family
with a single except clause.
"""

from typing import Optional


class ArkTreeError(Exception):
    """Base class for every arktree failure."""


class NotFoundError(ArkTreeError, KeyError):
    """A transaction identifier is absent from the graph."""

    def __init__(self, txid: str, message: Optional[str] = None):
        self.txid = txid
        super().__init__(message or f"transaction {txid} not found in graph")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidNodeError(ArkTreeError, ValueError):
    """A node lacks the data needed to compute its broadcast weight."""

    def __init__(self, txid: str, reason: str):
        self.txid = txid
        self.reason = reason
        super().__init__(f"invalid node {txid}: {reason}")


class ConstructionError(ArkTreeError):
    """The tree builder could not produce a well-formed graph."""


class VisitorFailure(ArkTreeError):
    """A traversal visitor failed while visiting a node."""

    def __init__(self, txid: str, cause: Exception):
        self.txid = txid
        self.cause = cause
        super().__init__(f"visitor failed on {txid}: {cause}")
