"""
Graph Configuration

Settings shared by a graph and the parameters built on top of it:
which power rule the backward pass applies, and how parameters are initialised.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

POW_RULES = ("standard", "legacy")


@dataclass(frozen=True)
class GraphConfig:
    """
    Attributes:
        pow_rule: "standard" applies d(a^b)/da = b*a^(b-1) and d(a^b)/db = a^b*ln(a).
                  "legacy" applies b*a^(1-b) to the base only and leaves the
                  exponent's gradient untouched, matching older engine output.
        init_low: Lower bound of the uniform parameter initialisation range
        init_high: Upper bound (exclusive) of the initialisation range
        seed: Seed for the generator returned by make_rng(); None draws fresh entropy
    """
    pow_rule: str = "standard"
    init_low: float = -1.0
    init_high: float = 1.0
    seed: Optional[int] = None

    def __post_init__(self):
        if self.pow_rule not in POW_RULES:
            raise ValueError(
                f"pow_rule must be one of {POW_RULES}, but got {self.pow_rule!r}"
            )
        if not self.init_low < self.init_high:
            raise ValueError(
                f"empty init range [{self.init_low}, {self.init_high})"
            )

    def make_rng(self) -> np.random.Generator:
        """Return a generator seeded with `seed`."""
        return np.random.default_rng(self.seed)
