"""
Rejection sampling of ground positions.

Candidates are drawn uniformly over the square ground and rejected when
they fall strictly inside an axis-aligned exclusion square.
"""

from typing import Iterator, NamedTuple, Tuple

import numpy as np


class Candidate(NamedTuple):
    x: float
    z: float
    accepted: bool


class RandomPlacementSampler:
    """
    Unbounded sampler of ground positions outside an exclusion square.

    The sampler never gives up on its own; callers bound the number of
    draws (see ForestGenerator).
    """

    def __init__(
        self,
        ground_half_extent: float,
        exclusion_center: Tuple[float, float],
        exclusion_half_width: float,
        rng: np.random.RandomState
    ):
        self.ground_half_extent = ground_half_extent
        self.exclusion_center = (float(exclusion_center[0]), float(exclusion_center[1]))
        self.exclusion_half_width = exclusion_half_width
        self.rng = rng

    def is_excluded(self, x: float, z: float) -> bool:
        """True only when both axis distances are strictly below the half-width."""
        dx = abs(x - self.exclusion_center[0])
        dz = abs(z - self.exclusion_center[1])
        return dx < self.exclusion_half_width and dz < self.exclusion_half_width

    def draw(self) -> Candidate:
        half = self.ground_half_extent
        x = float(self.rng.uniform(-half, half))
        z = float(self.rng.uniform(-half, half))
        return Candidate(x, z, not self.is_excluded(x, z))

    def candidates(self) -> Iterator[Candidate]:
        """Every draw, accepted or not."""
        while True:
            yield self.draw()

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        """Accepted positions only."""
        for candidate in self.candidates():
            if candidate.accepted:
                yield candidate.x, candidate.z
