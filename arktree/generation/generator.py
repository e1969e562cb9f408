"""
Random leaf generation.

Each leaf gets a random output script and fresh secp256k1 cosigner keys.
Passing a seed makes the whole output reproducible.
"""
import os
import random
from typing import List, Optional

from coincurve import PrivateKey

from arktree.core.tree_model import Leaf

from .models import GenerationConfig


class LeafGenerator:
    """Generates random tree leaves from a GenerationConfig."""

    def __init__(self, config: GenerationConfig):
        self.config = config
        self._rng: Optional[random.Random] = (
            random.Random(config.seed) if config.seed is not None else None
        )

    def random_bytes(self, size: int) -> bytes:
        if self._rng is None:
            return os.urandom(size)
        return self._rng.randbytes(size)

    def private_key(self) -> PrivateKey:
        if self._rng is None:
            return PrivateKey()
        while True:
            try:
                return PrivateKey(self.random_bytes(32))
            except ValueError:
                # secret out of the curve order range, draw again
                continue

    def public_key(self) -> str:
        """Hex encoded compressed public key of a fresh private key."""
        return self.private_key().public_key.format(compressed=True).hex()

    def generate_leaf(self) -> Leaf:
        return Leaf(
            amount=self.config.amount,
            script=self.random_bytes(self.config.script_size).hex(),
            cosigner_public_keys=tuple(
                self.public_key() for _ in range(self.config.cosigners_per_leaf)
            ),
        )

    def generate(self, count: Optional[int] = None) -> List[Leaf]:
        n = self.config.num_leaves if count is None else count
        return [self.generate_leaf() for _ in range(n)]
