"""Geodesic sky sphere: a subdivided icosahedron projected onto an inward-facing sphere."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

__all__ = [
    "DEFAULT_RADIUS",
    "MAX_SUBDIVISIONS",
    "Mesh",
    "Vertex",
    "build_sky_sphere",
    "icosahedron",
    "subdivide",
]

Vec3 = tuple[float, float, float]
Vec2 = tuple[float, float]

DEFAULT_RADIUS = 20000.0
MAX_SUBDIVISIONS = 5

_X = 0.525731
_Z = 0.850651

_ICOSAHEDRON_POSITIONS: tuple[Vec3, ...] = (
    (-_X, 0.0, _Z), (_X, 0.0, _Z),
    (-_X, 0.0, -_Z), (_X, 0.0, -_Z),
    (0.0, _Z, _X), (0.0, _Z, -_X),
    (0.0, -_Z, _X), (0.0, -_Z, -_X),
    (_Z, _X, 0.0), (-_Z, _X, 0.0),
    (_Z, -_X, 0.0), (-_Z, -_X, 0.0),
)

_ICOSAHEDRON_INDICES: tuple[int, ...] = (
    1, 4, 0, 4, 9, 0, 4, 5, 9, 8, 5, 4, 1, 8, 4,
    1, 10, 8, 10, 3, 8, 8, 3, 5, 3, 2, 5, 3, 7, 2,
    3, 10, 7, 10, 6, 7, 6, 11, 7, 6, 0, 11, 6, 1, 0,
    10, 1, 6, 11, 0, 9, 2, 11, 9, 5, 2, 9, 11, 2, 7,
)


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex: position, normal, texture-space tangent and texture coordinates."""

    position: Vec3 = (0.0, 0.0, 0.0)
    normal: Vec3 = (0.0, 0.0, 0.0)
    tangent_u: Vec3 = (0.0, 0.0, 0.0)
    tex_c: Vec2 = (0.0, 0.0)


@dataclass
class Mesh:
    """Triangle list: vertices and three indices per triangle."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def triangles(self):
        """Yield each triangle as a tuple of three vertices."""
        it = iter(self.indices)
        for a, b, c in zip(it, it, it):
            yield self.vertices[a], self.vertices[b], self.vertices[c]


def _midpoint(a: Vec3, b: Vec3) -> Vec3:
    return (0.5 * (a[0] + b[0]), 0.5 * (a[1] + b[1]), 0.5 * (a[2] + b[2]))


def _normalize(v: Vec3) -> Vec3:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def _angle_from_xy(x: float, y: float) -> float:
    """Polar angle of the point (x, y), in [0, 2*pi)."""
    return math.atan2(y, x) % math.tau


def icosahedron() -> Mesh:
    """The unit icosahedron with 12 vertices and 20 triangles."""
    return Mesh(
        vertices=[Vertex(position=p) for p in _ICOSAHEDRON_POSITIONS],
        indices=list(_ICOSAHEDRON_INDICES),
    )


def subdivide(vertices: Sequence[Vertex], indices: Sequence[int]) -> Mesh:
    """Split every triangle into four through its edge midpoints.

    Each input triangle contributes six new vertices (its corners and the
    three midpoints) and four triangles; no vertices are shared.
    """
    if len(indices) % 3:
        raise ValueError("index count must be a multiple of 3")
    new_vertices: list[Vertex] = []
    new_indices: list[int] = []
    it = iter(indices)
    for tri, (a, b, c) in enumerate(zip(it, it, it)):
        v0, v1, v2 = vertices[a], vertices[b], vertices[c]
        m0 = Vertex(position=_midpoint(v0.position, v1.position))
        m1 = Vertex(position=_midpoint(v1.position, v2.position))
        m2 = Vertex(position=_midpoint(v0.position, v2.position))
        new_vertices.extend((v0, v1, v2, m0, m1, m2))
        base = tri * 6
        new_indices.extend(
            base + k
            for k in (0, 3, 5, 3, 4, 5, 5, 4, 2, 3, 1, 4)
        )
    return Mesh(vertices=new_vertices, indices=new_indices)


def _project(position: Vec3, radius: float) -> Vertex:
    n = _normalize(position)
    p = (-radius * n[0], -radius * n[1], -radius * n[2])
    theta = _angle_from_xy(p[0], p[2])
    phi = math.acos(max(-1.0, min(1.0, p[1] / radius)))
    tangent = _normalize(
        (
            -radius * math.sin(phi) * math.sin(theta),
            0.0,
            radius * math.sin(phi) * math.cos(theta),
        )
    )
    return Vertex(
        position=p,
        normal=n,
        tangent_u=tangent,
        tex_c=(theta / math.tau, phi / math.pi),
    )


def build_sky_sphere(radius: float = DEFAULT_RADIUS, subdivisions: int = MAX_SUBDIVISIONS) -> Mesh:
    """Build the sky volume mesh.

    The icosahedron is subdivided ``subdivisions`` times (at most
    ``MAX_SUBDIVISIONS``), then every vertex is projected onto a sphere of
    the given radius on the side opposite its direction, so the triangles
    face inward. Normals keep the outward direction; texture coordinates
    come from the spherical angles of the projected position.
    """
    if radius <= 0.0:
        raise ValueError("radius must be positive")
    if subdivisions < 0:
        raise ValueError("subdivisions must not be negative")
    mesh = icosahedron()
    for _ in range(min(subdivisions, MAX_SUBDIVISIONS)):
        mesh = subdivide(mesh.vertices, mesh.indices)
    return Mesh(
        vertices=[_project(v.position, radius) for v in mesh.vertices],
        indices=mesh.indices,
    )