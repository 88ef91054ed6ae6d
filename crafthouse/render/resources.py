"""
Resource Registry

Owns the GPU objects for the demo scene preview: one lit shader
and a vertex array per mesh.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict
import logging

import moderngl

from .meshes import MESH_BUILDERS

logger = logging.getLogger(__name__)


LIT_VS = """
#version 330

in vec3 in_pos;
in vec3 in_nrm;

uniform mat4 u_model;
uniform mat4 u_view_proj;

out vec3 v_world;
out vec3 v_normal;

void main() {
    vec4 world = u_model * vec4(in_pos, 1.0);
    v_world = world.xyz;
    v_normal = mat3(u_model) * in_nrm;
    gl_Position = u_view_proj * world;
}
"""

LIT_FS = """
#version 330

in vec3 v_world;
in vec3 v_normal;

uniform vec4 u_color;
uniform vec3 u_light_pos;
uniform float u_light_intensity;

out vec4 fragColor;

void main() {
    vec3 light_dir = normalize(u_light_pos - v_world);
    float ndotl = abs(dot(normalize(v_normal), light_dir));
    float ambient = 0.3;
    float diffuse = 0.7 * ndotl * u_light_intensity;
    fragColor = vec4(u_color.rgb * (ambient + diffuse), u_color.a);
}
"""


@dataclass
class MeshGPU:
    """GPU-side mesh data."""
    vao: moderngl.VertexArray
    vbo: moderngl.Buffer
    ibo: moderngl.Buffer
    index_count: int

    def release(self):
        self.vao.release()
        self.vbo.release()
        self.ibo.release()


class ResourceRegistry:
    """Shader program and meshes, keyed by mesh name."""

    def __init__(self, ctx: moderngl.Context):
        self.ctx = ctx
        self.program = ctx.program(vertex_shader=LIT_VS, fragment_shader=LIT_FS)
        self.meshes: Dict[str, MeshGPU] = {}
        for name, build in MESH_BUILDERS.items():
            self.meshes[name] = self._upload(build())
        logger.debug("Uploaded meshes: %s", ", ".join(self.meshes))

    def _upload(self, data) -> MeshGPU:
        interleaved, indices = data
        vbo = self.ctx.buffer(interleaved.tobytes())
        ibo = self.ctx.buffer(indices.tobytes())
        vao = self.ctx.vertex_array(
            self.program,
            [(vbo, "3f 3f", "in_pos", "in_nrm")],
            index_buffer=ibo,
            index_element_size=4,
        )
        return MeshGPU(vao=vao, vbo=vbo, ibo=ibo, index_count=len(indices))

    def get_mesh(self, mesh_id: str) -> MeshGPU:
        """Get a mesh by ID. Raises KeyError if not found."""
        return self.meshes[mesh_id]

    def cleanup(self):
        """Release all GPU resources."""
        for mesh in self.meshes.values():
            mesh.release()
        self.meshes.clear()
        self.program.release()
