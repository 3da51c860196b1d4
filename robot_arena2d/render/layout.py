"""
layout.py — MultiRobotLayoutEngine: koleksi ikon robot + ukuran display.

Engine adalah satu-satunya pemilik ukuran display. Resize menghitung
satu ratio lalu me-rescale semua robot sekaligus, sehingga semua robot
selalu memakai ratio yang sama.

Koleksi robot append-only: index = urutan penambahan (0-based) dan
tidak pernah dipakai ulang.
"""

import logging
from typing import Callable

from robot_arena2d.errors import OutOfRangeError
from robot_arena2d.objects.arena import ArenaConfig
from robot_arena2d.render.robot_visual import RobotVisual
from robot_arena2d.render.transform import (
    Size, ZERO_SIZE,
    compute_center_offset, compute_scale_ratio, validate_display_size,
)

logger = logging.getLogger(__name__)


class MultiRobotLayoutEngine:
    """Layout semua ikon robot di dalam arena yang di-scale ke display."""

    def __init__(self, arena: ArenaConfig | None = None):
        self.arena = arena if arena is not None else ArenaConfig()
        self.robots: list[RobotVisual] = []
        self.display_size = Size(self.arena.map_size, self.arena.map_size)

    # ------------------------------------------------------------------
    # Display mapping
    # ------------------------------------------------------------------

    def scale_ratio(self) -> float:
        width, height = self.display_size
        return compute_scale_ratio(width, height, self.arena.map_size)

    def center_offset(self) -> tuple[float, float]:
        return compute_center_offset(
            self.display_size, self.arena.map_center, self.scale_ratio())

    def to_display(self, x: float, y: float) -> tuple[float, float]:
        """Konversi posisi logical (arena) ke posisi display."""
        ratio = self.scale_ratio()
        dx, dy = compute_center_offset(
            self.display_size, self.arena.map_center, ratio)
        return x * ratio + dx, y * ratio + dy

    def resize(self, new_size: Size):
        """Rescale semua robot ke ukuran display baru secara lockstep.

        Raises
        ------
        DegenerateDisplaySizeError
            Lebar atau tinggi tidak positif. State tidak berubah.
        """
        new_size = Size(*new_size)
        validate_display_size(new_size.width, new_size.height)
        ratio = compute_scale_ratio(
            new_size.width, new_size.height, self.arena.map_size)
        for robot in self.robots:
            robot.rescale(ratio)
        self.display_size = new_size
        logger.debug("Resized to %sx%s (ratio=%.4f, robots=%d)",
                     new_size.width, new_size.height, ratio, len(self.robots))

    def min_size(self) -> Size:
        size = ZERO_SIZE
        for robot in self.robots:
            size = size.max(robot.min_size())
        return size

    # ------------------------------------------------------------------
    # Robot collection
    # ------------------------------------------------------------------

    def add_robot(self, on_refresh: Callable[[], None] | None = None) -> int:
        """Tambah ikon robot baru, return index-nya.

        Ikon langsung di-scale ke ratio display saat ini.
        """
        robot = RobotVisual(on_refresh=on_refresh)
        ratio = self.scale_ratio()
        if ratio != robot.scale_ratio:
            robot.rescale(ratio)
        self.robots.append(robot)
        index = len(self.robots) - 1
        logger.debug("Robot visual added at index %d", index)
        return index

    def check_index(self, index: int):
        if not 0 <= index < len(self.robots):
            raise OutOfRangeError(index, len(self.robots))

    def robot(self, index: int) -> RobotVisual:
        self.check_index(index)
        return self.robots[index]

    def __len__(self) -> int:
        return len(self.robots)
