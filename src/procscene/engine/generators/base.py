"""
Base scene generator and common layout types.
"""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict

from ..backend import SceneBackend
from ..config import SceneConfig


class Layout(BaseModel):
    """Immutable, serializable description of generated scene content."""

    model_config = ConfigDict(frozen=True)


class LayoutGenerator(ABC):
    """
    Base class for all scene element generators.

    Generation is split in two: generate() decides where things go without
    touching any renderer, build() hands the result to a SceneBackend.
    """

    @abstractmethod
    def generate(self, config: SceneConfig, rng: np.random.RandomState) -> Layout:
        """Produce the layout for this element."""
        pass

    @abstractmethod
    def build(self, backend: SceneBackend, layout: Layout) -> Any:
        """Materialize a layout and return its container node."""
        pass
