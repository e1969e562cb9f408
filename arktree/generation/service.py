"""
Tree Generation Service
"""
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from arktree.core.tree_builder import SWEEP_ROOT_SIZE, build_vtxo_tree
from arktree.core.tree_model import Leaf, OutPoint, TxGraph

from .generator import LeafGenerator
from .models import GenerationConfig


@dataclass
class GeneratedTree:
    """A built tree together with the random inputs it was built from."""
    graph: TxGraph
    leaves: List[Leaf]
    root_input: OutPoint
    sweep_tapscript_root: bytes
    build_time_ms: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root_input": self.root_input.to_dict(),
            "sweep_tapscript_root": self.sweep_tapscript_root.hex(),
            "build_time_ms": round(self.build_time_ms, 2),
            "tree": self.graph.to_dict(),
        }


class GenerationService:
    """Service for generating random vtxo trees."""

    def __init__(self, config: Optional[GenerationConfig] = None) -> None:
        self.config = config or GenerationConfig()
        self.config.validate()
        self.generator = LeafGenerator(self.config)
        self.logger = logging.getLogger(__name__)

    def generate(self) -> GeneratedTree:
        """Generate leaves and build the tree."""
        self.logger.info(f"Generating vtxo tree with {self.config.num_leaves} leaves")

        sweep_root = self.generator.random_bytes(SWEEP_ROOT_SIZE)
        root_input = OutPoint(txid=self.generator.random_bytes(32).hex(), vout=0)
        leaves = self.generator.generate()

        start = time.time()
        graph = build_vtxo_tree(root_input, leaves, sweep_root, self.config.locktime)
        build_time_ms = (time.time() - start) * 1000

        return GeneratedTree(
            graph=graph,
            leaves=leaves,
            root_input=root_input,
            sweep_tapscript_root=sweep_root,
            build_time_ms=build_time_ms,
        )


def load_config(path: Path) -> GenerationConfig:
    """Load generation configuration from a YAML file."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    return GenerationConfig.from_yaml(data)


def generate_tree(num_leaves: int = 5, **kwargs: Any) -> GeneratedTree:
    """Convenience function to generate a tree."""
    config = kwargs.get("config") or GenerationConfig(
        num_leaves=num_leaves,
        seed=kwargs.get("seed"),
        cosigners_per_leaf=kwargs.get("cosigners_per_leaf", 1),
    )
    return GenerationService(config).generate()
