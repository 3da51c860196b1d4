"""
errors.py — Exception yang dilempar oleh layout engine dan config loader.
"""


class ArenaError(Exception):
    """Base class untuk semua error robot_arena2d."""


class OutOfRangeError(ArenaError, IndexError):
    """Index robot tidak valid untuk koleksi saat ini."""

    def __init__(self, index: int, num_robots: int):
        super().__init__(
            f"robot index {index} out of range (num_robots={num_robots})")
        self.index = index
        self.num_robots = num_robots


class DegenerateDisplaySizeError(ArenaError, ValueError):
    """Ukuran display nol atau negatif, ratio tidak terdefinisi."""

    def __init__(self, width: float, height: float):
        super().__init__(
            f"display size must be positive, got ({width}, {height})")
        self.width = width
        self.height = height


class ConfigError(ArenaError, ValueError):
    """File konfigurasi tidak valid."""
