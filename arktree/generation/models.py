"""
Generation configuration models.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from arktree.config.settings import Settings
from arktree.core.tree_model import LocktimeType, RelativeLocktime


@dataclass
class GenerationConfig:
    """Parameters for generating a random vtxo tree."""
    num_leaves: int = 5
    amount: int = 1000
    script_size: int = 34
    cosigners_per_leaf: int = 1
    locktime: RelativeLocktime = field(default_factory=lambda: RelativeLocktime(100))
    seed: Optional[int] = None

    def validate(self) -> None:
        if self.num_leaves <= 0:
            raise ValueError("Number of leaves must be a positive integer")
        if self.amount <= 0:
            raise ValueError(f"Leaf amount must be positive, got {self.amount}")
        if self.script_size <= 0:
            raise ValueError(f"Script size must be positive, got {self.script_size}")
        if self.cosigners_per_leaf <= 0:
            raise ValueError(f"Cosigners per leaf must be positive, got {self.cosigners_per_leaf}")

    @classmethod
    def from_settings(
        cls, settings: Settings, num_leaves: int, seed: Optional[int] = None
    ) -> "GenerationConfig":
        return cls(
            num_leaves=num_leaves,
            amount=settings.leaf_amount,
            script_size=settings.script_size,
            locktime=RelativeLocktime(
                settings.locktime_value, LocktimeType(settings.locktime_type.lower())
            ),
            seed=seed,
        )

    @classmethod
    def from_yaml(cls, data: Dict[str, Any]) -> "GenerationConfig":
        """
        Create a config from parsed YAML.

        Expected layout (every key optional):

            leaves: 16
            amount: 1000
            script_size: 34
            cosigners_per_leaf: 1
            seed: 42
            locktime:
              value: 100
              type: block
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
        locktime_data = data.get("locktime") or {}
        if not isinstance(locktime_data, dict):
            raise ValueError(
                f"Config key 'locktime' must be a mapping with value and type, "
                f"got {locktime_data!r}"
            )
        try:
            return cls(
                num_leaves=int(data.get("leaves", 5)),
                amount=int(data.get("amount", 1000)),
                script_size=int(data.get("script_size", 34)),
                cosigners_per_leaf=int(data.get("cosigners_per_leaf", 1)),
                locktime=RelativeLocktime(
                    int(locktime_data.get("value", 100)),
                    LocktimeType(str(locktime_data.get("type", "block")).lower()),
                ),
                seed=data.get("seed"),
            )
        except TypeError as e:
            raise ValueError(f"Invalid config value: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leaves": self.num_leaves,
            "amount": self.amount,
            "script_size": self.script_size,
            "cosigners_per_leaf": self.cosigners_per_leaf,
            "locktime": self.locktime.to_dict(),
            "seed": self.seed,
        }
