"""
renderer.py — Visualisasi Pygame untuk container robot.

Layout window:
  ┌───────┬─────────────────┬───────┐
  │       │                 │       │
  │ (bar) │  ARENA (square) │ (bar) │
  │       │                 │       │
  └───────┴─────────────────┴───────┘
Arena selalu persegi dan terpusat; sisa ruang di sumbu yang lebih
panjang menjadi letterbox.
"""

import pygame
import pygame.freetype

from robot_arena2d.render.handle import MultiRobotHandle, RobotGroup


COLOR_BACKGROUND = (18, 20, 26)
COLOR_ARENA      = (240, 240, 240)
COLOR_BORDER     = (44, 48, 62)

FONT_NAME = "liberation mono, consolas, courier new"


class Renderer:
    """Gambar arena dan semua RobotGroup dari sebuah MultiRobotHandle."""

    def __init__(self, handle: MultiRobotHandle,
                 screen: pygame.Surface | None = None):
        self.handle = handle
        self.screen = screen
        self.clock = None

        pygame.freetype.init()
        self._fonts: dict[int, pygame.freetype.Font] = {}

    # ==================================================================
    # Window
    # ==================================================================

    def open_window(self, width: int, height: int,
                    caption: str = "Robot Arena 2D") -> pygame.Surface:
        """Buat window resizable dan sinkronkan ukuran ke handle."""
        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(caption)
        self.clock = pygame.time.Clock()
        self.handle.resize(width, height)
        return self.screen

    def flip(self, fps: int = 60):
        pygame.display.flip()
        if self.clock is not None:
            self.clock.tick(fps)

    def _font(self, size: int) -> pygame.freetype.Font:
        font = self._fonts.get(size)
        if font is None:
            font = pygame.freetype.SysFont(FONT_NAME, size)
            self._fonts[size] = font
        return font

    # ==================================================================
    # Public draw API
    # ==================================================================

    def draw(self) -> bool:
        """Gambar ulang jika container ditandai dirty. Return True jika digambar."""
        container = self.handle.container
        if not container.needs_redraw:
            return False

        self.screen.fill(COLOR_BACKGROUND)
        self.draw_arena()
        for group in container:
            self.draw_robot(group)
        container.needs_redraw = False
        return True

    def draw_arena(self):
        """Gambar persegi arena sesuai ratio dan offset saat ini."""
        engine = self.handle.engine
        arena = engine.arena
        ratio = engine.scale_ratio()
        left, top = engine.to_display(-arena.map_center_x, -arena.map_center_y)
        side = arena.map_size * ratio
        rect = pygame.Rect(int(round(left)), int(round(top)),
                           int(round(side)), int(round(side)))
        pygame.draw.rect(self.screen, COLOR_ARENA, rect)
        pygame.draw.rect(self.screen, COLOR_BORDER, rect, 1)

    def draw_robot(self, group: RobotGroup):
        """Gambar satu robot: 3 garis, label pose, dan label id."""
        ox, oy = group.position
        visual = group.visual

        for segment in visual.segments:
            start = (ox + segment.p1[0], oy + segment.p1[1])
            end = (ox + segment.p2[0], oy + segment.p2[1])
            width = max(1, int(round(segment.stroke_width)))
            pygame.draw.line(self.screen, segment.color, start, end, width)

        label = visual.pose_label
        label_surf, _ = self._font(label.text_size).render(label.text, label.color)
        self.screen.blit(label_surf, (ox + label.offset[0], oy + label.offset[1]))

        # Label id di tengah ikon
        id_surf, id_rect = self._font(group.id_label_size).render(
            group.id_label, group.id_label_color)
        self.screen.blit(id_surf, (ox - id_rect.width / 2, oy - id_rect.height / 2))
