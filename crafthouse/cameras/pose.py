"""Camera transform handed back to the host each tick."""

from __future__ import annotations
from dataclasses import dataclass, field

from ..core.math3d import Vec3, Quat, Mat4


@dataclass
class CameraPose:
    """World-space position and orientation of a camera."""
    position: Vec3 = field(default_factory=Vec3.zero)
    rotation: Quat = field(default_factory=Quat.identity)

    @staticmethod
    def looking_at(position: Vec3, target: Vec3, up: Vec3 = None) -> CameraPose:
        return CameraPose(position=position, rotation=Quat.looking_at(position, target, up))

    def forward(self) -> Vec3:
        return self.rotation.forward()

    def up(self) -> Vec3:
        return self.rotation.local_up()

    def view_matrix(self) -> Mat4:
        """World to view: inverse rotation after inverse translation."""
        return self.rotation.conjugate().to_mat4() @ Mat4.translate(-self.position)
