"""
Statistics calculations for branch samples.

All functions take an already-collected sample and never reorder it.
Empty samples yield 0 by convention.
"""
import statistics
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Tuple, Union

Number = Union[int, float]

# Weights are grouped on 2 decimal digits in frequency tables only
WEIGHT_PRECISION = 2


def count(sample: Sequence[Number]) -> int:
    return len(sample)


def maximum(sample: Sequence[Number]) -> Number:
    return max(sample) if sample else 0


def mean(sample: Sequence[Number]) -> float:
    """Arithmetic mean, 0.0 for an empty sample."""
    if not sample:
        return 0.0
    return float(statistics.mean(sample))


def median(sample: Sequence[Number]) -> float:
    """
    Median of a sample, 0.0 for an empty sample.

    Even-length samples average the two central values. Works on a sorted
    copy, the caller's sequence is left untouched.
    """
    if not sample:
        return 0.0
    return float(statistics.median(sample))


def round_weight(value: float) -> float:
    return round(value, WEIGHT_PRECISION)


def frequency_table(
    sample: Sequence[Number],
    key: Optional[Callable[[Number], Hashable]] = None,
) -> List[Tuple[Any, int]]:
    """
    Group a sample by `key(value)` and count each group.

    Args:
        sample: Values to group
        key: Grouping key (identity when None, round_weight for weights)

    Returns:
        (key, count) pairs in ascending key order
    """
    counts = Counter(key(value) if key else value for value in sample)
    return sorted(counts.items())


@dataclass
class SampleSummary:
    """Descriptive statistics of one sample."""
    count: int = 0
    maximum: Number = 0
    mean: float = 0.0
    median: float = 0.0
    distribution: List[Tuple[Any, int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "max": self.maximum,
            "mean": self.mean,
            "median": self.median,
            "distribution": [
                {"value": value, "count": n} for value, n in self.distribution
            ],
        }


def summarize(
    sample: Sequence[Number],
    key: Optional[Callable[[Number], Hashable]] = None,
) -> SampleSummary:
    """Compute every statistic of a sample at once."""
    return SampleSummary(
        count=count(sample),
        maximum=maximum(sample),
        mean=mean(sample),
        median=median(sample),
        distribution=frequency_table(sample, key),
    )
