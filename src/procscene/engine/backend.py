"""
Renderable scene backend.

The layout engine never talks to a renderer directly. Generators and the
orchestrator go through SceneBackend, which any renderer can implement.
RecordingBackend is a complete in-memory implementation used for export,
the API and tests.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import numpy as np


PRIMITIVE_SHAPES = ("plane", "cube", "cylinder", "sphere")
LIGHT_TYPES = ("directional", "point")


class LightHandle(ABC):
    """Mutable light owned by a backend."""

    @abstractmethod
    def set_intensity(self, value: float) -> None:
        pass

    @abstractmethod
    def set_color(self, color: Sequence[float]) -> None:
        pass


class SceneBackend(ABC):
    """
    Scene-graph operations required by the layout engine.

    Node handles are opaque to callers; they are only passed back into the
    backend that created them.
    """

    @abstractmethod
    def create_node(self, name: str, parent: Any = None) -> Any:
        """Create an empty container node."""
        pass

    @abstractmethod
    def create_primitive(self, shape: str, parent: Any, name: Optional[str] = None) -> Any:
        """Create a node carrying one of PRIMITIVE_SHAPES."""
        pass

    @abstractmethod
    def set_position(self, node: Any, position: Sequence[float], local: bool = False) -> None:
        pass

    @abstractmethod
    def set_scale(self, node: Any, scale: Sequence[float]) -> None:
        pass

    @abstractmethod
    def set_rotation(self, node: Any, euler_degrees: Sequence[float]) -> None:
        pass

    @abstractmethod
    def set_color(self, node: Any, color: Sequence[float]) -> None:
        """Assign a solid-color surface."""
        pass

    @abstractmethod
    def create_light(
        self,
        node: Any,
        light_type: str,
        intensity: float,
        color: Sequence[float],
        light_range: Optional[float] = None
    ) -> LightHandle:
        pass


class RecordedLight(LightHandle):
    """Light state kept by RecordingBackend."""

    def __init__(self, light_type: str, intensity: float, color: Sequence[float], light_range: Optional[float]):
        self.light_type = light_type
        self.intensity = float(intensity)
        self.color = tuple(float(c) for c in color)
        self.light_range = light_range
        self.updates = 0

    def set_intensity(self, value: float) -> None:
        self.intensity = float(value)
        self.updates += 1

    def set_color(self, color: Sequence[float]) -> None:
        self.color = tuple(float(c) for c in color)
        self.updates += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.light_type,
            "intensity": self.intensity,
            "color": list(self.color),
            "range": self.light_range
        }


class SceneNode:
    """One node of the recorded scene graph."""

    def __init__(self, name: str, shape: Optional[str] = None, parent: Optional["SceneNode"] = None):
        self.name = name
        self.shape = shape
        self.parent = parent
        self.children: List["SceneNode"] = []
        self.local_position = np.zeros(3)
        self.scale = np.ones(3)
        self.rotation = np.zeros(3)
        self.color: Optional[tuple] = None
        self.light: Optional[RecordedLight] = None

        if parent is not None:
            parent.children.append(self)

    @property
    def world_position(self) -> np.ndarray:
        """
        World-space position.

        Parents contribute their translation and yaw; container scale is
        not propagated since containers are never scaled.
        """
        if self.parent is None:
            return self.local_position.copy()

        yaw = math.radians(self.parent.rotation[1])
        cos_y, sin_y = math.cos(yaw), math.sin(yaw)
        x, y, z = self.local_position
        rotated = np.array([x * cos_y + z * sin_y, y, -x * sin_y + z * cos_y])
        return self.parent.world_position + rotated

    def iter_tree(self):
        yield self
        for child in self.children:
            yield from child.iter_tree()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "shape": self.shape,
            "position": self.world_position.tolist(),
            "scale": self.scale.tolist(),
            "rotation": self.rotation.tolist(),
        }
        if self.color is not None:
            data["color"] = list(self.color)
        if self.light is not None:
            data["light"] = self.light.to_dict()
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


class RecordingBackend(SceneBackend):
    """
    In-memory scene graph.

    Records every node, transform, color and light so the generated scene
    can be inspected, serialized or replayed by a renderer.
    """

    def __init__(self):
        self.roots: List[SceneNode] = []
        self.lights: List[RecordedLight] = []

    def create_node(self, name: str, parent: Any = None) -> SceneNode:
        return self._add(SceneNode(name, parent=self._check(parent)))

    def create_primitive(self, shape: str, parent: Any, name: Optional[str] = None) -> SceneNode:
        if shape not in PRIMITIVE_SHAPES:
            raise ValueError(f"Unknown primitive shape: {shape}")
        node = SceneNode(name or shape.capitalize(), shape=shape, parent=self._check(parent))
        return self._add(node)

    def set_position(self, node: Any, position: Sequence[float], local: bool = False) -> None:
        node = self._check(node)
        position = np.asarray(position, dtype=float)
        if local or node.parent is None:
            node.local_position = position
            return

        # Invert the parent's yaw so the node lands on the requested world position
        offset = position - node.parent.world_position
        yaw = math.radians(node.parent.rotation[1])
        cos_y, sin_y = math.cos(yaw), math.sin(yaw)
        x, y, z = offset
        node.local_position = np.array([x * cos_y - z * sin_y, y, x * sin_y + z * cos_y])

    def set_scale(self, node: Any, scale: Sequence[float]) -> None:
        self._check(node).scale = np.asarray(scale, dtype=float)

    def set_rotation(self, node: Any, euler_degrees: Sequence[float]) -> None:
        self._check(node).rotation = np.asarray(euler_degrees, dtype=float)

    def set_color(self, node: Any, color: Sequence[float]) -> None:
        self._check(node).color = tuple(float(c) for c in color)

    def create_light(
        self,
        node: Any,
        light_type: str,
        intensity: float,
        color: Sequence[float],
        light_range: Optional[float] = None
    ) -> RecordedLight:
        if light_type not in LIGHT_TYPES:
            raise ValueError(f"Unknown light type: {light_type}")
        light = RecordedLight(light_type, intensity, color, light_range)
        self._check(node).light = light
        self.lights.append(light)
        return light

    def find(self, name: str) -> Optional[SceneNode]:
        """Return the first node with the given name, depth first."""
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def iter_nodes(self):
        for root in self.roots:
            yield from root.iter_tree()

    def count_shapes(self) -> Dict[str, int]:
        counts = {shape: 0 for shape in PRIMITIVE_SHAPES}
        for node in self.iter_nodes():
            if node.shape is not None:
                counts[node.shape] += 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {"nodes": [root.to_dict() for root in self.roots]}

    def _add(self, node: SceneNode) -> SceneNode:
        if node.parent is None:
            self.roots.append(node)
        return node

    def _check(self, node: Any) -> Optional[SceneNode]:
        if node is not None and not isinstance(node, SceneNode):
            raise ValueError(f"Node handle not created by this backend: {node!r}")
        return node
