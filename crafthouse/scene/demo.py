"""
Demo scene: a small room of planes with four cubes and a point light.

The shooter and editor examples share this layout; the editor variant
makes the floor and one cube translucent.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple
import math

from ..core.math3d import Vec3, Quat, Mat4

Color = Tuple[float, float, float, float]

WALL_COLOR: Color = (0.8, 0.9, 0.8, 1.0)
CUBE_COLOR: Color = (0.8, 0.7, 0.6, 1.0)


@dataclass
class SceneObject:
    name: str
    mesh: str                       # "plane" | "cube"
    position: Vec3 = field(default_factory=Vec3.zero)
    rotation: Quat = field(default_factory=Quat.identity)
    size: float = 1.0
    color: Color = (1.0, 1.0, 1.0, 1.0)

    @property
    def translucent(self) -> bool:
        return self.color[3] < 1.0

    def model_matrix(self) -> Mat4:
        return Mat4.translate(self.position) @ self.rotation.to_mat4() @ Mat4.scale(self.size)


@dataclass
class PointLight:
    position: Vec3
    intensity: float = 1.0


@dataclass
class DemoScene:
    objects: List[SceneObject]
    light: PointLight

    def opaque(self) -> List[SceneObject]:
        return [o for o in self.objects if not o.translucent]

    def translucent(self) -> List[SceneObject]:
        return [o for o in self.objects if o.translucent]


def demo_scene(translucent: bool = False) -> DemoScene:
    """Build the demo room. `translucent` selects the editor variant."""
    floor_color: Color = (0.3, 0.5, 0.3, 0.5 if translucent else 1.0)
    half_pi = math.pi / 2.0

    objects = [
        SceneObject("floor", "plane", size=5.0, color=floor_color),
        SceneObject("ceiling", "plane", Vec3(0.0, 3.0, 0.0),
                    Quat.from_rotation_x(math.pi), 5.0, (0.8, 0.5, 0.8, 1.0)),
        SceneObject("wall_west", "plane", Vec3(-2.0, 0.5, 0.0),
                    Quat.from_rotation_z(-half_pi), 5.0, WALL_COLOR),
        SceneObject("wall_east", "plane", Vec3(2.0, 0.5, 0.0),
                    Quat.from_rotation_z(half_pi), 5.0, WALL_COLOR),
        SceneObject("wall_north", "plane", Vec3(0.0, 0.5, -2.0),
                    Quat.from_rotation_x(half_pi), 5.0, WALL_COLOR),
        SceneObject("wall_south", "plane", Vec3(0.0, 0.5, 2.0),
                    Quat.from_rotation_x(-half_pi), 5.0, WALL_COLOR),
    ]

    for i, (x, z) in enumerate([(1.5, 1.5), (1.5, -1.5), (-1.5, 1.5), (-1.5, -1.5)]):
        color = CUBE_COLOR
        if translucent and i == 0:
            color = (0.8, 0.7, 0.6, 0.1)
        objects.append(SceneObject(f"cube_{i}", "cube", Vec3(x, 0.5, z), size=1.0, color=color))

    return DemoScene(objects=objects, light=PointLight(Vec3(3.0, 8.0, 5.0)))
