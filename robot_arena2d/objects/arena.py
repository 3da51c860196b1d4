"""
arena.py — Definisi arena logical dan konfigurasi viewer.

Arena adalah persegi dengan sisi ``map_size`` (satuan logical, cm).
Pose robot (x, y) relatif terhadap titik tengah arena
``(map_center_x, map_center_y)``:
    X → kanan, Y → bawah (sama dengan screen)
    θ dalam derajat, 90 = ikon menghadap ke atas (orientasi authored)
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

from robot_arena2d.errors import ConfigError


@dataclass(frozen=True)
class ArenaConfig:
    """Konfigurasi arena logical (immutable selama proses berjalan)."""

    map_size: float = 200.0
    map_center_x: float = 100.0
    map_center_y: float = 100.0

    @property
    def map_center(self) -> tuple[float, float]:
        return self.map_center_x, self.map_center_y


@dataclass
class ViewerConfig:
    """Konfigurasi window dan file log untuk viewer node."""

    width: int = 900
    height: int = 900
    fps: int = 60
    positions_log: str = "positions.csv"
    general_log: str = "general.log"
    log_level: str = "INFO"


# ======================================================================
# Loader
# ======================================================================

def _build(cls, section: str, raw):
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ConfigError(f"section '{section}' must be an object")

    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"unknown key(s) in '{section}': {', '.join(unknown)}")
    return replace(cls(), **raw)


def load_config(path) -> tuple[ArenaConfig, ViewerConfig]:
    """Baca file JSON berisi section opsional ``arena`` dan ``viewer``.

    Key yang tidak ada memakai nilai default dataclass.

    Raises
    ------
    ConfigError
        File bukan JSON valid, ada key yang tidak dikenal, atau
        ``map_size`` tidak positif.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top-level value must be an object")

    arena = _build(ArenaConfig, "arena", data.get("arena"))
    viewer = _build(ViewerConfig, "viewer", data.get("viewer"))

    if arena.map_size <= 0:
        raise ConfigError(f"map_size must be positive, got {arena.map_size}")

    logging.getLogger(__name__).debug(
        "Loaded config from %s: map_size=%s center=%s",
        path, arena.map_size, arena.map_center)
    return arena, viewer
