"""
Deterministic RNG utilities for wetland simulation.

Uses SHA256 hashing to derive stable seeds from hierarchical components
(world_seed, world_id, ...). All randomness flows through a single injected
RandomSource wrapping numpy.random.Generator(PCG64), so a run is fully
reproducible from its seed and the draw order is explicit.
"""

import hashlib
import numpy as np
from typing import Any, MutableSequence, Optional


def make_seed(*components: Any) -> int:
    """
    Generate deterministic 64-bit seed from hierarchical components.

    Uses SHA256 to hash components into stable seed value.

    Args:
        *components: Seed components (world_seed, world_id, etc.)

    Returns:
        64-bit integer seed for numpy RNG

    Example:
        run_seed = make_seed(world_seed, "wetland-main")
    """
    # Join all components with colon separator
    hash_input = ":".join(str(c) for c in components)

    # SHA256 hash and extract 64-bit integer
    hash_bytes = hashlib.sha256(hash_input.encode('utf-8')).digest()
    seed = int.from_bytes(hash_bytes[:8], byteorder='big')

    return seed


class RandomSource:
    """
    Seedable random source shared by every randomized decision.

    Exposes the three primitives the stepping engine needs: uniform
    integers, uniform doubles in [0, 1), and in-place shuffling. Any object
    with the same three methods can be injected in its place (tests use
    scripted doubles to force breeding or infection outcomes).
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: RNG seed (None = nondeterministic OS entropy)
        """
        self.seed = seed
        self._rng = np.random.Generator(np.random.PCG64(seed))

    def uniform_int(self, bound: int) -> int:
        """
        Draw an integer uniformly from [0, bound).

        Raises:
            ValueError: If bound is not positive
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return int(self._rng.integers(bound))

    def uniform_double(self) -> float:
        """Draw a float uniformly from [0, 1)"""
        return float(self._rng.random())

    def shuffle(self, sequence: MutableSequence) -> None:
        """Shuffle a mutable sequence (list) in place"""
        self._rng.shuffle(sequence)
