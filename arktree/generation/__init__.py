"""
Tree Generation Package

Random leaves (secp256k1 cosigner keys, random scripts) and tree building.
"""

from .models import GenerationConfig
from .generator import LeafGenerator
from .service import GeneratedTree, GenerationService, load_config, generate_tree

__all__ = [
    "GenerationConfig",
    "LeafGenerator",
    "GeneratedTree",
    "GenerationService",
    "load_config",
    "generate_tree",
]
