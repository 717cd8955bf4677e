"""Identifier Allocator — proposes candidate instance ids.

Invariants:
    - Candidates are uniform in the half-open range [low, high), rendered in decimal
    - The allocator never checks uniqueness; conditional create in the store does
    - Bounds validated at construction: 0 <= low < high

Design Decisions:
    - SystemRandom by default: ids double as a lookup handle, keep them unpredictable
    - rng injectable: tests pin candidates without monkeypatching the random module
"""

import random

from instance_api.core.domain_types import (
    InstanceId, DEFAULT_ID_MIN, DEFAULT_ID_MAX,
)


class IdAllocator:
    """Draws six-digit (by default) decimal ids."""

    def __init__(
        self,
        low: int = DEFAULT_ID_MIN,
        high: int = DEFAULT_ID_MAX,
        rng: random.Random | None = None,
    ):
        if low < 0 or low >= high:
            raise ValueError(f"invalid id range [{low}, {high})")
        self.low = low
        self.high = high
        self._rng = rng or random.SystemRandom()

    def next_id(self) -> InstanceId:
        return InstanceId(str(self._rng.randrange(self.low, self.high)))
