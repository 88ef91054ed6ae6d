"""
Scene preview renderer.

Draws a DemoScene from a CameraPose. Opaque objects first, then
translucent ones with blending and depth writes disabled.
"""

from __future__ import annotations
import math

import moderngl

from ..cameras.pose import CameraPose
from ..core.math3d import Mat4
from ..scene.demo import DemoScene, SceneObject
from .meshes import mat4_bytes
from .resources import ResourceRegistry


def projection_matrix(fov_y_deg: float, width: int, height: int,
                      near: float = 0.05, far: float = 200.0) -> Mat4:
    aspect = width / max(1, height)
    return Mat4.perspective(math.radians(fov_y_deg), aspect, near, far)


class SceneRenderer:

    def __init__(self, ctx: moderngl.Context, fov_y_deg: float = 60.0):
        self.ctx = ctx
        self.fov_y_deg = fov_y_deg
        self.registry = ResourceRegistry(ctx)
        self.clear_color = (0.08, 0.09, 0.11, 1.0)

    def render(self, scene: DemoScene, pose: CameraPose, width: int, height: int):
        ctx = self.ctx
        ctx.viewport = (0, 0, width, height)
        ctx.clear(*self.clear_color)

        view_proj = projection_matrix(self.fov_y_deg, width, height) @ pose.view_matrix()
        prog = self.registry.program
        prog["u_view_proj"].write(mat4_bytes(view_proj))
        prog["u_light_pos"].value = scene.light.position.to_tuple()
        prog["u_light_intensity"].value = scene.light.intensity

        ctx.enable(moderngl.DEPTH_TEST)
        ctx.disable(moderngl.BLEND)
        for obj in scene.opaque():
            self._draw(obj)

        ctx.enable(moderngl.BLEND)
        ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
        ctx.depth_mask = False
        for obj in scene.translucent():
            self._draw(obj)
        ctx.depth_mask = True

    def _draw(self, obj: SceneObject):
        prog = self.registry.program
        prog["u_model"].write(mat4_bytes(obj.model_matrix()))
        prog["u_color"].value = tuple(obj.color)
        mesh = self.registry.get_mesh(obj.mesh)
        mesh.vao.render(moderngl.TRIANGLES, vertices=mesh.index_count)

    def release(self):
        self.registry.cleanup()
