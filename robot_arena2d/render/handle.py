"""
handle.py — MultiRobotHandle: facade publik untuk layout engine + container.

Container menyimpan satu RobotGroup per robot (ikon + label id + posisi
display), index-aligned dengan ``engine.robots``. Renderer hanya membaca
container; semua mutasi lewat handle.

Contoh pemakaian dari event loop::

    handle = MultiRobotHandle(ArenaConfig(map_size=200))
    index = handle.add_robot(robot_id=7)
    handle.resize(800, 600)
    handle.update_pose(index, x=12.3, y=-40.0, theta=135.0)
"""

import logging
import math

from robot_arena2d.objects.arena import ArenaConfig
from robot_arena2d.render.layout import MultiRobotLayoutEngine
from robot_arena2d.render.robot_visual import (
    COLOR_GREEN, LABEL_TEXT_SIZE, RobotVisual,
)
from robot_arena2d.render.transform import Size

logger = logging.getLogger(__name__)


def check_finite(**values: float):
    for name, value in values.items():
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")


# ======================================================================
# Rendering-surface container
# ======================================================================

class RobotGroup:
    """Child group satu robot: ikon, label id, dan posisi di display."""

    def __init__(self, visual: RobotVisual, robot_id: int):
        self.visual = visual
        self.robot_id = robot_id
        self.id_label = str(robot_id)
        self.id_label_color = COLOR_GREEN
        self.id_label_size = LABEL_TEXT_SIZE
        self.position: tuple[float, float] = (0.0, 0.0)
        # Posisi logical terakhir, None sebelum move pertama
        self.logical_position: tuple[float, float] | None = None

    def move(self, position: tuple[float, float]):
        self.position = (float(position[0]), float(position[1]))


class RobotContainer:
    """Container berisi RobotGroup, urutannya sama dengan index robot."""

    def __init__(self):
        self.objects: list[RobotGroup] = []
        self.needs_redraw = True

    def add(self, group: RobotGroup):
        self.objects.append(group)
        self.refresh()

    def refresh(self):
        self.needs_redraw = True

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)


# ======================================================================
# MultiRobotHandle
# ======================================================================

class MultiRobotHandle:
    """Operasi berbasis index untuk event/update loop eksternal."""

    def __init__(self, arena: ArenaConfig | None = None):
        self.engine = MultiRobotLayoutEngine(arena)
        self.container = RobotContainer()
        self._index_by_id: dict[int, int] = {}

    @property
    def arena(self) -> ArenaConfig:
        return self.engine.arena

    def num_robots(self) -> int:
        return len(self.engine.robots)

    def add_robot(self, robot_id: int) -> int:
        """Tambah robot baru di akhir koleksi dan return index-nya.

        ``robot_id`` hanya dipakai untuk label; id yang sama boleh
        didaftarkan lebih dari sekali (lookup ``index_of`` memakai yang
        pertama).
        """
        index = self.engine.add_robot(on_refresh=self.container.refresh)
        self.container.add(RobotGroup(self.engine.robots[index], robot_id))
        self._index_by_id.setdefault(robot_id, index)
        logger.info("Robot %d registered at index %d", robot_id, index)
        return index

    def index_of(self, robot_id: int) -> int | None:
        return self._index_by_id.get(robot_id)

    # ------------------------------------------------------------------
    # Per-robot operations
    # ------------------------------------------------------------------

    def move(self, index: int, position: tuple[float, float]):
        """Pindahkan robot ke posisi logical (x, y) dalam arena."""
        self.engine.check_index(index)
        check_finite(x=position[0], y=position[1])
        group = self.container.objects[index]
        group.logical_position = (position[0], position[1])
        group.move(self.engine.to_display(position[0], position[1]))
        self.container.refresh()

    def rotate(self, index: int, theta_deg: float):
        self.engine.robot(index).rotate(theta_deg)
        self.container.refresh()

    def set_pose_label(self, index: int, x: int, y: int, theta: int):
        self.engine.robot(index).set_pose_label(x, y, theta)

    def update_pose(self, index: int, x: float, y: float, theta: float):
        """Satu tick pose: move, rotate, lalu update label (dibulatkan)."""
        self.engine.check_index(index)
        check_finite(x=x, y=y, theta=theta)
        self.move(index, (x, y))
        self.rotate(index, theta)
        self.set_pose_label(index, round(x), round(y), round(theta))

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def resize(self, width: float, height: float):
        """Resize display lalu petakan ulang posisi semua robot."""
        self.engine.resize(Size(width, height))
        for group in self.container:
            if group.logical_position is not None:
                group.move(self.engine.to_display(*group.logical_position))
        self.container.refresh()

    def min_size(self) -> Size:
        return self.engine.min_size()
