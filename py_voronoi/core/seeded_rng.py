"""
Seeded linear-congruential generator used for every random draw in a pattern.

The recurrence is tiny and uses exact integer arithmetic so a given seed
produces the same stream on every platform. Python's random and NumPy's
random must not be used for pattern generation.
"""

import math
import numbers

# state = (state * MULTIPLIER + INCREMENT) % MODULUS
MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class SeededRNG:
    """
    Deterministic scalar stream in [0, 1) from an integer seed.

    Each generation pass owns its own instance; nothing here is shared
    between passes.
    """

    def __init__(self, seed):
        """Initialize with an integer seed (any size, negative allowed)."""
        if isinstance(seed, bool) or not isinstance(seed, numbers.Real):
            raise TypeError(f"Seed must be an integer, got {type(seed).__name__}")
        if not math.isfinite(seed):
            raise ValueError(f"Seed must be finite, got {seed}")
        if seed != int(seed):
            raise ValueError(f"Seed must be a whole number, got {seed}")

        self.seed = int(seed)
        self.state = self.seed
        self.call_count = 0

    def next(self) -> float:
        """Advance the recurrence and return the next value in [0, 1)."""
        self.call_count += 1
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return self.state / MODULUS
