from __future__ import annotations

"""Injectable random source for level generation.

Every generation stage receives a :class:`GameRNG` explicitly instead of
reaching for the ``random`` module, so a run is reproducible whenever the
caller supplies a seed.  Two flavours exist:

* ``RNGSource.SEEDED`` - the caller passed a seed.
* ``RNGSource.ENTROPY`` - the seed was drawn from system entropy.  The drawn
  value is still recorded in ``initial_seed`` so the run can be replayed.

The numeric core is ``numpy.random.default_rng``.
"""

import secrets
from enum import Enum
from typing import Any, Dict, Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RNGSource(Enum):
    SEEDED = "seeded"
    ENTROPY = "entropy"


def _entropy_seed() -> int:
    return secrets.randbits(32)


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.source = RNGSource.SEEDED if seed is not None else RNGSource.ENTROPY
        self.initial_seed = int(seed) if seed is not None else _entropy_seed()
        self.rng = np.random.default_rng(self.initial_seed)

    @property
    def is_seeded(self) -> bool:
        return self.source is RNGSource.SEEDED

    def __repr__(self) -> str:
        return f"GameRNG(source={self.source.value}, seed={self.initial_seed})"

    # ------------------------------------------------------------------
    # basic random helpers
    # ------------------------------------------------------------------
    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in the inclusive range ``[a, b]``."""
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def get_float(self, a: float = 0.0, b: float = 1.0) -> float:
        if a > b:
            raise ValueError("a <= b")
        return a + (b - a) * float(self.rng.random())

    def chance(self, probability: float) -> bool:
        """True with the given probability (one draw, even for 0 and 1)."""
        if not 0.0 <= probability <= 1.0:
            raise ValueError("probability out of range")
        return self.get_float() < probability

    def coin_flip(self, heads_probability: float = 0.5) -> str:
        return "heads" if self.chance(heads_probability) else "tails"

    # ------------------------------------------------------------------
    # sequence utilities
    # ------------------------------------------------------------------
    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[self.get_int(0, len(seq) - 1)]

    # ------------------------------------------------------------------
    # state management
    # ------------------------------------------------------------------
    def get_state(self) -> Dict[str, Any]:
        return {
            "random_state": self.rng.bit_generator.state,
            "initial_seed": self.initial_seed,
            "source": self.source.value,
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        if "random_state" in state:
            self.rng.bit_generator.state = state["random_state"]
        if "initial_seed" in state:
            self.initial_seed = state["initial_seed"]
        if "source" in state:
            self.source = RNGSource(state["source"])

    def reset(self, seed: Optional[int] = None) -> None:
        self.source = RNGSource.SEEDED if seed is not None else RNGSource.ENTROPY
        self.initial_seed = int(seed) if seed is not None else _entropy_seed()
        self.rng = np.random.default_rng(self.initial_seed)


__all__ = ["GameRNG", "RNGSource"]
