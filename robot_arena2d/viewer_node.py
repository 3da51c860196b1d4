"""
viewer_node.py — Node utama viewer: event loop Pygame + pose feed.

Pose masuk sebagai baris teks "id x y theta" (mis. dari stdin). Reader
berjalan di thread background dan hanya mengisi queue; semua pemanggilan
ke MultiRobotHandle terjadi di thread UI (loop Pygame).
"""

import argparse
import logging
import math
import queue
import sys
import threading
from dataclasses import dataclass, replace

import pygame

from robot_arena2d.errors import ArenaError
from robot_arena2d.log.pose_logger import MicrosecondFormatter, PoseLogger
from robot_arena2d.objects.arena import ArenaConfig, ViewerConfig, load_config
from robot_arena2d.render.handle import MultiRobotHandle, check_finite
from robot_arena2d.render.renderer import Renderer

logger = logging.getLogger(__name__)


# ======================================================================
# Pose feed
# ======================================================================

@dataclass(frozen=True)
class PoseUpdate:
    robot_id: int
    x: float
    y: float
    theta: float


def parse_pose_line(line: str) -> PoseUpdate | None:
    """Parse "id x y theta". Return None untuk baris kosong / komentar.

    Raises
    ------
    ValueError
        Jumlah field bukan 4, nilainya bukan angka, atau tidak finite
        (nan / inf).
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    parts = line.split()
    if len(parts) != 4:
        raise ValueError(f"expected 'id x y theta', got {line!r}")
    x, y, theta = (float(part) for part in parts[1:])
    if not all(math.isfinite(value) for value in (x, y, theta)):
        raise ValueError(f"pose values must be finite, got {line!r}")
    return PoseUpdate(int(parts[0]), x, y, theta)


class PoseFeed:
    """Baca pose dari stream teks di thread background ke dalam queue."""

    def __init__(self, stream):
        self.stream = stream
        self.updates: queue.Queue[PoseUpdate] = queue.Queue()
        self.finished = threading.Event()
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._read_loop, name="pose-feed", daemon=True)

    def start(self):
        self._thread.start()

    def stop(self, timeout: float = 1.0):
        """Hentikan reader setelah baris berikutnya.

        Thread yang sedang blok membaca stdin tidak bisa diinterupsi; thread
        itu daemon dan berakhir bersama proses.
        """
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _read_loop(self):
        try:
            for line in self.stream:
                if self._stop.is_set():
                    break
                try:
                    update = parse_pose_line(line)
                except ValueError as exc:
                    logger.warning("Dropping malformed pose line: %s", exc)
                    continue
                if update is not None:
                    self.updates.put(update)
        finally:
            self.finished.set()

    def drain(self) -> list[PoseUpdate]:
        """Ambil semua update yang menunggu (dipanggil dari thread UI)."""
        pending = []
        while True:
            try:
                pending.append(self.updates.get_nowait())
            except queue.Empty:
                return pending


# ======================================================================
# ViewerNode
# ======================================================================

class ViewerNode:
    """Menghubungkan pose feed, handle, renderer, dan positions log."""

    def __init__(self, arena: ArenaConfig, viewer: ViewerConfig,
                 pose_logger: PoseLogger | None = None,
                 feed: PoseFeed | None = None):
        self.arena = arena
        self.viewer = viewer
        self.pose_logger = pose_logger
        self.feed = feed
        self.handle = MultiRobotHandle(arena)
        self.renderer: Renderer | None = None

        logger.info("ViewerNode initialized — map_size=%s center=%s",
                    arena.map_size, arena.map_center)

    def apply_update(self, update: PoseUpdate) -> int:
        """Terapkan satu pose update. Robot baru otomatis didaftarkan."""
        check_finite(x=update.x, y=update.y, theta=update.theta)
        index = self.handle.index_of(update.robot_id)
        if index is None:
            index = self.handle.add_robot(update.robot_id)
        self.handle.update_pose(index, update.x, update.y, update.theta)
        if self.pose_logger is not None:
            self.pose_logger.log_pose(
                update.robot_id, update.x, update.y, update.theta)
        return index

    def handle_resize(self, width: int, height: int):
        try:
            self.handle.resize(width, height)
        except ArenaError as exc:
            logger.warning("Ignoring resize: %s", exc)

    def _process_feed(self):
        if self.feed is None:
            return
        for update in self.feed.drain():
            try:
                self.apply_update(update)
            except (ArenaError, ValueError) as exc:
                logger.warning("Pose update for robot %d rejected: %s",
                               update.robot_id, exc)

    def run(self):
        self.renderer = Renderer(self.handle)
        self.renderer.open_window(self.viewer.width, self.viewer.height)
        if self.feed is not None:
            self.feed.start()

        running = True
        try:
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.type == pygame.VIDEORESIZE:
                        self.handle_resize(event.w, event.h)

                self._process_feed()
                self.renderer.draw()
                self.renderer.flip(fps=self.viewer.fps)
        finally:
            if self.feed is not None:
                self.feed.stop()
            pygame.quit()


# ======================================================================
# Entry point
# ======================================================================

def setup_logging(viewer: ViewerConfig, verbose: bool = False):
    level = logging.DEBUG if verbose else getattr(logging, viewer.log_level.upper(), logging.INFO)
    formatter = MicrosecondFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    handlers = [logging.StreamHandler(sys.stderr),
                logging.FileHandler(viewer.general_log, mode="w", encoding="utf-8")]
    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tampilkan pose banyak robot di arena 2D. "
                    "Pose dibaca dari stdin: 'id x y theta' per baris.")
    parser.add_argument("--config", help="file konfigurasi JSON")
    parser.add_argument("--width", type=int, help="lebar window awal (pixel)")
    parser.add_argument("--height", type=int, help="tinggi window awal (pixel)")
    parser.add_argument("--fps", type=int, help="frame rate loop UI")
    parser.add_argument("--positions-log", help="path file positions log")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="aktifkan log DEBUG")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.config:
        arena, viewer = load_config(args.config)
    else:
        arena, viewer = ArenaConfig(), ViewerConfig()

    overrides = {
        "width": args.width,
        "height": args.height,
        "fps": args.fps,
        "positions_log": args.positions_log,
    }
    viewer = replace(viewer, **{k: v for k, v in overrides.items() if v is not None})

    setup_logging(viewer, verbose=args.verbose)

    pose_logger = PoseLogger(viewer.positions_log)
    pose_logger.open()
    try:
        node = ViewerNode(arena, viewer, pose_logger=pose_logger,
                          feed=PoseFeed(sys.stdin))
        logger.info("Starting viewer...")
        node.run()
    finally:
        pose_logger.close()
        logger.info("Viewer shutdown complete")


if __name__ == '__main__':
    main()
