"""
robot_visual.py — Geometri ikon satu robot beroda (display units).

Ikon terdiri dari 3 garis relatif terhadap origin ikon:
    0. body                : garis vertikal tebal
    1. direction indicator : stub vertikal pendek ke arah depan
    2. wheel axle          : garis horizontal (roda kiri-kanan)

Geometri disimpan dalam bentuk yang sudah di-scale dan di-rotate.
Tidak ada salinan geometri asli; rotate() dan rescale() selalu
menerapkan delta terhadap geometri saat ini.
"""

import math
from typing import Callable, NamedTuple

import numpy as np

from robot_arena2d.render.transform import (
    Size, ZERO_SIZE, TransformState, rotate_points,
)


COLOR_BLUE  = (0, 0, 255)
COLOR_RED   = (255, 0, 0)
COLOR_GREEN = (0, 255, 0)

LABEL_TEXT_SIZE = 8

# Authored geometry pada ratio 1.0, rotasi 90°
BODY_POINTS      = ((0.0, -10.0), (0.0, 10.0))
INDICATOR_POINTS = ((0.0, 0.0), (0.0, -9.0))
WHEELS_POINTS    = ((-10.0, 0.0), (10.0, 0.0))
BODY_WIDTH       = 13.0
INDICATOR_WIDTH  = 3.0
WHEELS_WIDTH     = 6.5

SEGMENT_COLORS = (COLOR_BLUE, COLOR_RED, COLOR_BLUE)


class LineSegment(NamedTuple):
    p1: tuple[float, float]
    p2: tuple[float, float]
    stroke_width: float
    color: tuple[int, int, int]


class PoseLabel:
    """Teks "(x, y, theta)" dengan offset tetap dari origin ikon."""

    def __init__(self, text: str = "(0, 0, 0)",
                 offset: tuple[float, float] = (0.0, -20.0),
                 color: tuple = COLOR_RED, text_size: int = LABEL_TEXT_SIZE):
        self.text = text
        self.offset = offset
        self.color = color
        self.text_size = text_size


class RobotVisual:
    """Ikon satu robot dengan state rotasi dan scale incremental."""

    def __init__(self, on_refresh: Callable[[], None] | None = None):
        self._points = np.array(
            [BODY_POINTS, INDICATOR_POINTS, WHEELS_POINTS], dtype=float)
        self._widths = np.array(
            [BODY_WIDTH, INDICATOR_WIDTH, WHEELS_WIDTH], dtype=float)
        self.transform = TransformState()
        self.pose_label = PoseLabel()
        self.on_refresh = on_refresh

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def points(self) -> np.ndarray:
        """Endpoint semua segment, shape (3, 2, 2). Read-only view."""
        view = self._points.view()
        view.flags.writeable = False
        return view

    @property
    def stroke_widths(self) -> np.ndarray:
        view = self._widths.view()
        view.flags.writeable = False
        return view

    @property
    def segments(self) -> list[LineSegment]:
        return [
            LineSegment(tuple(p1), tuple(p2), float(width), color)
            for (p1, p2), width, color in zip(self._points.tolist(),
                                               self._widths, SEGMENT_COLORS)
        ]

    @property
    def scale_ratio(self) -> float:
        return self.transform.scale_ratio

    @property
    def rotation_deg(self) -> float:
        return self.transform.rotation_deg

    # ------------------------------------------------------------------
    # Incremental transforms
    # ------------------------------------------------------------------

    def rotate(self, theta_deg: float):
        """Putar ikon ke orientasi ``theta_deg`` (derajat, logical).

        Tidak melakukan apa-apa jika sudah berada di orientasi tersebut.

        Raises
        ------
        ValueError
            ``theta_deg`` tidak finite (nan / inf). Geometri tidak berubah.
        """
        if not math.isfinite(theta_deg):
            raise ValueError(f"theta must be finite, got {theta_deg}")
        if theta_deg == self.transform.rotation_deg:
            return
        delta = self.transform.rotation_delta(theta_deg)
        self._points = rotate_points(self._points, delta)
        self.transform.commit_rotation(theta_deg)

    def rescale(self, new_ratio: float):
        """Scale geometri dari ratio saat ini ke ``new_ratio``."""
        if not (math.isfinite(new_ratio) and new_ratio > 0):
            raise ValueError(f"scale ratio must be positive and finite, got {new_ratio}")
        adjustment = self.transform.scale_adjustment(new_ratio)
        self._points = self._points * adjustment
        self._widths = self._widths * adjustment
        self.transform.commit_scale(new_ratio)

    # ------------------------------------------------------------------
    # Label
    # ------------------------------------------------------------------

    def set_pose_label(self, x: int, y: int, theta: int):
        self.pose_label.text = "(%d, %d, %d)" % (x, y, theta)
        if self.on_refresh is not None:
            self.on_refresh()

    def min_size(self) -> Size:
        """Ukuran bounding box terbesar di antara semua segment."""
        size = ZERO_SIZE
        for p1, p2 in self._points:
            extent = np.abs(p2 - p1)
            size = size.max(Size(float(extent[0]), float(extent[1])))
        return size
