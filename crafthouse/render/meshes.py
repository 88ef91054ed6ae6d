"""
CPU-side mesh data for the demo scene.

Each builder returns (interleaved float32 [pos.xyz, nrm.xyz] per vertex,
uint32 triangle indices). Shapes are unit sized and centered on the
origin; SceneObject.size scales them.
"""

from __future__ import annotations
from typing import Tuple
import numpy as np

MeshData = Tuple[np.ndarray, np.ndarray]


def _build(faces) -> MeshData:
    positions = []
    normals = []
    indices = []

    for p0, p1, p2, p3, n in faces:
        base = len(positions)
        positions.extend([p0, p1, p2, p3])
        normals.extend([n, n, n, n])
        indices.extend([base + 0, base + 1, base + 2, base + 0, base + 2, base + 3])

    v = np.array(positions, dtype=np.float32)
    n = np.array(normals, dtype=np.float32)
    interleaved = np.hstack([v, n]).astype(np.float32)
    return interleaved, np.array(indices, dtype=np.uint32)


def cube_mesh() -> MeshData:
    """Unit cube, one quad per face with flat normals."""
    s = 0.5
    return _build([
        ((-s, -s, s), (s, -s, s), (s, s, s), (-s, s, s), (0, 0, 1)),        # +Z
        ((s, -s, -s), (-s, -s, -s), (-s, s, -s), (s, s, -s), (0, 0, -1)),   # -Z
        ((s, -s, s), (s, -s, -s), (s, s, -s), (s, s, s), (1, 0, 0)),        # +X
        ((-s, -s, -s), (-s, -s, s), (-s, s, s), (-s, s, -s), (-1, 0, 0)),   # -X
        ((-s, s, s), (s, s, s), (s, s, -s), (-s, s, -s), (0, 1, 0)),        # +Y
        ((-s, -s, -s), (s, -s, -s), (s, -s, s), (-s, -s, s), (0, -1, 0)),   # -Y
    ])


def plane_mesh() -> MeshData:
    """Unit plane in XZ facing +Y."""
    s = 0.5
    return _build([
        ((-s, 0, s), (s, 0, s), (s, 0, -s), (-s, 0, -s), (0, 1, 0)),
    ])


MESH_BUILDERS = {
    "cube": cube_mesh,
    "plane": plane_mesh,
}


def mat4_bytes(m) -> bytes:
    """Column-major float32 bytes of a Mat4 for a mat4 uniform."""
    return np.array(m.to_list_column_major(), dtype=np.float32).tobytes()
