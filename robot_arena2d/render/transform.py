"""
transform.py — Utilitas transformasi 2D antara arena logical dan display.

Arena logical berbentuk persegi (map_size × map_size). Display bisa
berbentuk persegi panjang, jadi arena di-scale dengan ratio seragam
berdasarkan sisi display terpendek dan dipusatkan di sumbu yang lebih
panjang (letterbox).

Rotasi memakai derajat di API publik, konversi ke radian hanya internal.
"""

import math
from typing import NamedTuple

import numpy as np

from robot_arena2d.errors import DegenerateDisplaySizeError


# Orientasi authored ikon robot (menghadap ke atas)
NEUTRAL_ROTATION_DEG = 90.0


class Size(NamedTuple):
    width: float
    height: float

    def max(self, other: "Size") -> "Size":
        """Maksimum per komponen."""
        return Size(max(self.width, other.width), max(self.height, other.height))


ZERO_SIZE = Size(0.0, 0.0)


# ======================================================================
# Pure functions
# ======================================================================

def rotate_point(x: float, y: float, delta_deg: float) -> tuple[float, float]:
    """Rotasi titik (x, y) terhadap origin sebesar ``delta_deg`` derajat."""
    rad = math.radians(delta_deg)
    cos_d = math.cos(rad)
    sin_d = math.sin(rad)
    return x * cos_d - y * sin_d, x * sin_d + y * cos_d


def rotate_points(points: np.ndarray, delta_deg: float) -> np.ndarray:
    """Versi vectorized dari :func:`rotate_point` untuk array ``(..., 2)``."""
    rad = math.radians(delta_deg)
    cos_d = math.cos(rad)
    sin_d = math.sin(rad)
    rot = np.array([[cos_d, -sin_d],
                    [sin_d,  cos_d]])
    return points @ rot.T


def validate_display_size(width: float, height: float):
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
        raise DegenerateDisplaySizeError(width, height)


def compute_scale_ratio(display_width: float, display_height: float,
                        map_size: float) -> float:
    """Ratio display unit per logical unit.

    Arena persegi selalu muat penuh di sisi display terpendek.
    """
    validate_display_size(display_width, display_height)
    return min(display_width, display_height) / map_size


def compute_center_offset(display_size: Size,
                          map_center: tuple[float, float],
                          ratio: float) -> tuple[float, float]:
    """Offset display untuk origin logical (pusat arena).

    Base offset = map_center * ratio. Sumbu display yang lebih panjang
    mendapat tambahan (panjang - pendek) / 2 supaya arena terpusat.
    """
    width, height = display_size
    dx = map_center[0] * ratio
    dy = map_center[1] * ratio
    if height > width:
        dy += (height - width) / 2
    elif width > height:
        dx += (width - height) / 2
    return dx, dy


# ======================================================================
# TransformState — state incremental (ratio + rotasi) yang sudah
# di-bake ke geometri
# ======================================================================

class TransformState:
    """Menyimpan scale ratio dan rotasi yang sudah diterapkan ke geometri.

    Geometri tidak pernah dihitung ulang dari bentuk aslinya; setiap
    perubahan adalah delta terhadap state ini.
    """

    def __init__(self, scale_ratio: float = 1.0,
                 rotation_deg: float = NEUTRAL_ROTATION_DEG):
        self.scale_ratio = scale_ratio
        self.rotation_deg = rotation_deg

    def rotation_delta(self, theta_deg: float) -> float:
        """Delta rotasi screen untuk mencapai ``theta_deg``.

        Dinegasi karena sumbu Y screen mengarah ke bawah (CCW logical
        tampil CW di layar).
        """
        return -(theta_deg - self.rotation_deg)

    def scale_adjustment(self, new_ratio: float) -> float:
        return new_ratio / self.scale_ratio

    def commit_rotation(self, theta_deg: float):
        self.rotation_deg = theta_deg

    def commit_scale(self, new_ratio: float):
        self.scale_ratio = new_ratio

    def __repr__(self) -> str:
        return (f"TransformState(scale_ratio={self.scale_ratio!r}, "
                f"rotation_deg={self.rotation_deg!r})")
