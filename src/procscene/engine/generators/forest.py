"""
Forest generator.

Scatters simple trees (cylinder trunk, sphere canopy) over the ground while
keeping the pyramid footprint clear.
"""

from itertools import islice
from typing import List, Optional, Tuple

import numpy as np

from ..backend import SceneBackend
from ..config import (
    ATTEMPTS_PER_TREE, CANOPY_COLOR, CANOPY_LIFT, CANOPY_SCALE_RANGE,
    GROUND_HALF_SIZE, PYRAMID_CENTER, PYRAMID_PADDING, TRUNK_COLOR,
    TRUNK_HEIGHT_RANGE, TRUNK_RADIUS_RANGE, BLOCK_SIZE, SceneConfig, Vector3
)
from .base import Layout, LayoutGenerator
from .placement import RandomPlacementSampler


class TreeInstance(Layout):
    """One placed tree. Position is on the ground plane (y = 0)."""

    position: Vector3
    trunk_height: float
    trunk_radius: float
    canopy_scale: float

    @property
    def trunk_scale(self) -> Vector3:
        # Unit cylinder is 2 units tall
        return (self.trunk_radius, self.trunk_height / 2.0, self.trunk_radius)

    @property
    def trunk_offset(self) -> Vector3:
        return (0.0, self.trunk_height / 2.0, 0.0)

    @property
    def canopy_offset(self) -> Vector3:
        return (0.0, self.trunk_height + self.canopy_scale * CANOPY_LIFT, 0.0)


class ForestLayout(Layout):
    """
    Result of one forest generation.

    `trees` may be shorter than `requested` when the attempt budget ran out;
    that is a valid, smaller forest rather than a failure.
    """

    trees: List[TreeInstance]
    requested: int
    attempts: int
    exclusion_center: Tuple[float, float]
    exclusion_half_width: float

    @property
    def is_complete(self) -> bool:
        return len(self.trees) == self.requested


class ForestGenerator(LayoutGenerator):
    """
    Places up to `forest_size` trees with a bounded number of draws.

    The budget is `forest_size * attempts_per_tree` candidate draws. When the
    exclusion square covers most of the ground the budget can run out first
    and fewer trees are returned.
    """

    def __init__(
        self,
        ground_half_extent: float = GROUND_HALF_SIZE,
        exclusion_center: Tuple[float, float] = (PYRAMID_CENTER[0], PYRAMID_CENTER[2]),
        padding: float = PYRAMID_PADDING,
        attempts_per_tree: int = ATTEMPTS_PER_TREE
    ):
        self.ground_half_extent = max(1.0, ground_half_extent)
        self.exclusion_center = exclusion_center
        self.padding = padding
        self.attempts_per_tree = attempts_per_tree

    def exclusion_half_width(self, pyramid_base_size: int) -> float:
        return (pyramid_base_size * BLOCK_SIZE) / 2.0 + self.padding

    def generate(self, config: SceneConfig, rng: np.random.RandomState) -> ForestLayout:
        return self.place(config.forest_size, config.pyramid_base_size, rng)

    def place(
        self,
        forest_size: int,
        pyramid_base_size: int,
        rng: np.random.RandomState,
        half_width: Optional[float] = None
    ) -> ForestLayout:
        """
        Run the bounded rejection loop.

        Args:
            forest_size: Number of trees wanted
            pyramid_base_size: Pyramid base, sizes the exclusion square
            rng: Uniform random source
            half_width: Explicit exclusion half-width (overrides the pyramid-derived one)

        Returns:
            ForestLayout with the placed trees and the number of draws used
        """

        count = max(1, forest_size)
        if half_width is None:
            half_width = self.exclusion_half_width(pyramid_base_size)

        sampler = RandomPlacementSampler(
            self.ground_half_extent, self.exclusion_center, half_width, rng
        )

        trees = []
        attempts = 0
        for candidate in islice(sampler.candidates(), count * self.attempts_per_tree):
            attempts += 1
            if not candidate.accepted:
                continue

            trees.append(self._make_tree(candidate.x, candidate.z, rng))
            if len(trees) >= count:
                break

        return ForestLayout(
            trees=trees,
            requested=count,
            attempts=attempts,
            exclusion_center=sampler.exclusion_center,
            exclusion_half_width=half_width
        )

    def _make_tree(self, x: float, z: float, rng: np.random.RandomState) -> TreeInstance:
        height = float(rng.uniform(*TRUNK_HEIGHT_RANGE))
        radius = float(rng.uniform(*TRUNK_RADIUS_RANGE))
        scale = float(rng.uniform(*CANOPY_SCALE_RANGE))

        return TreeInstance(
            position=(x, 0.0, z),
            trunk_height=height,
            trunk_radius=radius,
            canopy_scale=scale
        )

    def build(self, backend: SceneBackend, layout: ForestLayout):
        forest = backend.create_node("Forest")

        for i, tree in enumerate(layout.trees):
            node = backend.create_node(f"Tree_{i}", parent=forest)
            backend.set_position(node, tree.position)

            trunk = backend.create_primitive("cylinder", node, name="Trunk")
            backend.set_scale(trunk, tree.trunk_scale)
            backend.set_position(trunk, tree.trunk_offset, local=True)
            backend.set_color(trunk, TRUNK_COLOR)

            canopy = backend.create_primitive("sphere", node, name="Canopy")
            backend.set_scale(canopy, (tree.canopy_scale,) * 3)
            backend.set_position(canopy, tree.canopy_offset, local=True)
            backend.set_color(canopy, CANOPY_COLOR)

        return forest
