# crafthouse/core/math3d.py
"""
Core math types for camera control.

Pure Python, no GPU types. Vec3/Quat/Mat4 values are converted to
float32 buffers only at upload time (see crafthouse.render).

Conventions:
- Right-handed, Y up.
- A camera looks down its local -Z axis.
- Matrices are stored row-major; `to_list_column_major()` for OpenGL.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple, Union

# Half-angle distance kept from the poles when clamping pitch.
PITCH_EPSILON = 0.01


# =============================================================================
# Vector Types
# =============================================================================

@dataclass
class Vec2:
    """2D vector for mouse motion and viewport sizes."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return self.__mul__(scalar)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @staticmethod
    def from_tuple(t: Tuple[float, float]) -> Vec2:
        return Vec2(float(t[0]), float(t[1]))


@dataclass
class Vec3:
    """3D vector for positions and directions in world space."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vec3:
        return self.__mul__(scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalized(self) -> Vec3:
        ln = self.length()
        if ln < 1e-10:
            return Vec3(0.0, 0.0, 0.0)
        return Vec3(self.x / ln, self.y / ln, self.z / ln)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_tuple(t: Tuple[float, float, float]) -> Vec3:
        return Vec3(float(t[0]), float(t[1]), float(t[2]))

    @staticmethod
    def zero() -> Vec3:
        return Vec3(0.0, 0.0, 0.0)

    @staticmethod
    def unit_x() -> Vec3:
        return Vec3(1.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> Vec3:
        return Vec3(0.0, 1.0, 0.0)

    @staticmethod
    def unit_z() -> Vec3:
        return Vec3(0.0, 0.0, 1.0)


# =============================================================================
# Matrix Type
# =============================================================================

class Mat4:
    """4x4 matrix for model/view/projection transforms."""

    __slots__ = ('m',)

    def __init__(self, values: Tuple[float, ...] = None):
        """Initialize with row-major values or identity."""
        if values is None:
            self.m = (
                1.0, 0.0, 0.0, 0.0,
                0.0, 1.0, 0.0, 0.0,
                0.0, 0.0, 1.0, 0.0,
                0.0, 0.0, 0.0, 1.0
            )
        else:
            assert len(values) == 16
            self.m = tuple(values)

    def __getitem__(self, idx: Tuple[int, int]) -> float:
        row, col = idx
        return self.m[row * 4 + col]

    def __matmul__(self, other: Union[Mat4, Vec3]) -> Union[Mat4, Vec3]:
        if isinstance(other, Mat4):
            result = []
            for row in range(4):
                for col in range(4):
                    result.append(sum(self[row, k] * other[k, col] for k in range(4)))
            return Mat4(tuple(result))
        elif isinstance(other, Vec3):
            # Treat as point (w=1), no perspective divide
            return Vec3(
                self[0, 0]*other.x + self[0, 1]*other.y + self[0, 2]*other.z + self[0, 3],
                self[1, 0]*other.x + self[1, 1]*other.y + self[1, 2]*other.z + self[1, 3],
                self[2, 0]*other.x + self[2, 1]*other.y + self[2, 2]*other.z + self[2, 3]
            )
        raise TypeError(f"Cannot multiply Mat4 by {type(other)}")

    def to_tuple(self) -> Tuple[float, ...]:
        return self.m

    def to_list_column_major(self) -> list:
        """For GPU upload (OpenGL expects column-major)."""
        return [self[row, col] for col in range(4) for row in range(4)]

    @staticmethod
    def identity() -> Mat4:
        return Mat4()

    @staticmethod
    def translate(v: Vec3) -> Mat4:
        return Mat4((
            1.0, 0.0, 0.0, v.x,
            0.0, 1.0, 0.0, v.y,
            0.0, 0.0, 1.0, v.z,
            0.0, 0.0, 0.0, 1.0
        ))

    @staticmethod
    def scale(sx: float, sy: float = None, sz: float = None) -> Mat4:
        if sy is None:
            sy = sx
        if sz is None:
            sz = sx
        return Mat4((
            sx,  0.0, 0.0, 0.0,
            0.0, sy,  0.0, 0.0,
            0.0, 0.0, sz,  0.0,
            0.0, 0.0, 0.0, 1.0
        ))

    @staticmethod
    def perspective(fov_y: float, aspect: float, near: float, far: float) -> Mat4:
        f = 1.0 / math.tan(fov_y / 2.0)
        dz = near - far

        return Mat4((
            f/aspect, 0.0, 0.0,           0.0,
            0.0,      f,   0.0,           0.0,
            0.0,      0.0, (far+near)/dz, 2.0*far*near/dz,
            0.0,      0.0, -1.0,          0.0
        ))


# =============================================================================
# Quaternion
# =============================================================================

@dataclass
class Quat:
    """Unit quaternion for camera orientation."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __mul__(self, other: Quat) -> Quat:
        return Quat(
            self.w*other.x + self.x*other.w + self.y*other.z - self.z*other.y,
            self.w*other.y - self.x*other.z + self.y*other.w + self.z*other.x,
            self.w*other.z + self.x*other.y - self.y*other.x + self.z*other.w,
            self.w*other.w - self.x*other.x - self.y*other.y - self.z*other.z
        )

    def dot(self, other: Quat) -> float:
        return self.x*other.x + self.y*other.y + self.z*other.z + self.w*other.w

    def conjugate(self) -> Quat:
        return Quat(-self.x, -self.y, -self.z, self.w)

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Quat:
        ln = self.length()
        if ln < 1e-10:
            return Quat.identity()
        return Quat(self.x/ln, self.y/ln, self.z/ln, self.w/ln)

    def rotate_vec(self, v: Vec3) -> Vec3:
        qv = Quat(v.x, v.y, v.z, 0.0)
        result = self * qv * self.conjugate()
        return Vec3(result.x, result.y, result.z)

    def local_up(self) -> Vec3:
        return self.rotate_vec(Vec3.unit_y())

    def forward(self) -> Vec3:
        return self.rotate_vec(Vec3(0.0, 0.0, -1.0))

    def to_mat4(self) -> Mat4:
        x, y, z, w = self.x, self.y, self.z, self.w

        xx = x*x; yy = y*y; zz = z*z
        xy = x*y; xz = x*z; yz = y*z
        wx = w*x; wy = w*y; wz = w*z

        return Mat4((
            1-2*(yy+zz),  2*(xy-wz),    2*(xz+wy),    0.0,
            2*(xy+wz),    1-2*(xx+zz),  2*(yz-wx),    0.0,
            2*(xz-wy),    2*(yz+wx),    1-2*(xx+yy),  0.0,
            0.0,          0.0,          0.0,          1.0
        ))

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    @staticmethod
    def identity() -> Quat:
        return Quat(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_axis_angle(axis: Vec3, angle: float) -> Quat:
        axis = axis.normalized()
        half = angle / 2.0
        s = math.sin(half)
        return Quat(axis.x * s, axis.y * s, axis.z * s, math.cos(half))

    @staticmethod
    def from_rotation_x(angle: float) -> Quat:
        half = angle / 2.0
        return Quat(math.sin(half), 0.0, 0.0, math.cos(half))

    @staticmethod
    def from_rotation_y(angle: float) -> Quat:
        half = angle / 2.0
        return Quat(0.0, math.sin(half), 0.0, math.cos(half))

    @staticmethod
    def from_rotation_z(angle: float) -> Quat:
        half = angle / 2.0
        return Quat(0.0, 0.0, math.sin(half), math.cos(half))

    @staticmethod
    def from_basis(right: Vec3, up: Vec3, back: Vec3) -> Quat:
        """Rotation whose local X/Y/Z axes map to right/up/back (orthonormal)."""
        m00, m01, m02 = right.x, up.x, back.x
        m10, m11, m12 = right.y, up.y, back.y
        m20, m21, m22 = right.z, up.z, back.z

        trace = m00 + m11 + m22
        if trace > 0.0:
            s = math.sqrt(trace + 1.0) * 2.0
            q = Quat((m21 - m12) / s, (m02 - m20) / s, (m10 - m01) / s, 0.25 * s)
        elif m00 > m11 and m00 > m22:
            s = math.sqrt(1.0 + m00 - m11 - m22) * 2.0
            q = Quat(0.25 * s, (m01 + m10) / s, (m02 + m20) / s, (m21 - m12) / s)
        elif m11 > m22:
            s = math.sqrt(1.0 + m11 - m00 - m22) * 2.0
            q = Quat((m01 + m10) / s, 0.25 * s, (m12 + m21) / s, (m02 - m20) / s)
        else:
            s = math.sqrt(1.0 + m22 - m00 - m11) * 2.0
            q = Quat((m02 + m20) / s, (m12 + m21) / s, 0.25 * s, (m10 - m01) / s)
        return q.normalized()

    @staticmethod
    def looking_to(direction: Vec3, up: Vec3 = None) -> Quat:
        """
        Rotation that points local -Z along `direction`, local +Y toward `up`.

        When `direction` is parallel to `up` there is no unique answer; a
        perpendicular reference axis is substituted so the result stays finite.
        """
        if up is None:
            up = Vec3.unit_y()
        back = (-direction).normalized()
        right = up.cross(back)
        if right.length_squared() < 1e-12:
            reference = Vec3.unit_x() if abs(back.x) < 0.9 else Vec3.unit_z()
            right = reference.cross(back)
        right = right.normalized()
        return Quat.from_basis(right, back.cross(right), back)

    @staticmethod
    def looking_at(eye: Vec3, target: Vec3, up: Vec3 = None) -> Quat:
        return Quat.looking_to(target - eye, up)


# =============================================================================
# Utility Functions
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(value, max_val))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp_pitch(pitch: float, epsilon: float = PITCH_EPSILON) -> float:
    """Clamp pitch to [-pi/2 + epsilon, pi/2 - epsilon]."""
    limit = math.pi / 2.0 - epsilon
    return clamp(pitch, -limit, limit)


def normalize_direction(yaw: float, pitch: float) -> Vec3:
    """
    Unit forward vector for a yaw/pitch pair.

    yaw is measured in the XZ plane from +X toward +Z, pitch is the
    elevation above that plane. Pitch must already be clamped away from
    +-pi/2: at the poles tan() diverges and the result is not finite.
    """
    t = math.tan(pitch)
    scale = math.sqrt(1.0 + t * t)
    return Vec3(math.cos(yaw) / scale, t / scale, math.sin(yaw) / scale)
