"""Minimal 3D vector type for bearing and range checks."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def scale(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Return the unit vector in the same direction.

        Raises :class:`ValueError` for the zero vector.
        """
        length = self.length()
        if length <= 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return self.scale(1.0 / length)

    def distance_to(self, other: Vec3) -> float:
        return (other - self).length()

    @classmethod
    def from_heading(cls, degrees: float) -> Vec3:
        """Unit forward vector for a compass heading (0 = north/+y, 90 = east/+x)."""
        radians = math.radians(degrees)
        return cls(math.sin(radians), math.cos(radians), 0.0)
