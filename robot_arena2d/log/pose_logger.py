"""
pose_logger.py — Positions log: satu baris per pose robot.

Format file (delimiter spasi)::

    time,id,x[cm],y[cm],theta[degrees] (the delimiter is a space)
    14:03:27.512204 7 12.5 -40.0 135.0

PoseLogger di-inject ke komponen yang membutuhkannya dan punya
lifecycle eksplisit: open() saat startup, close() saat shutdown.
"""

import logging
from datetime import datetime

HEADER = "time,id,x[cm],y[cm],theta[degrees] (the delimiter is a space)"
TIME_FORMAT = "%H:%M:%S.%f"


class MicrosecondFormatter(logging.Formatter):
    """Formatter dengan prefix waktu HH:MM:SS.microseconds."""

    def formatTime(self, record, datefmt=None):
        return datetime.fromtimestamp(record.created).strftime(datefmt or TIME_FORMAT)


class PoseLogger:
    """Menulis pose (time, id, x, y, theta) ke file teks."""

    def __init__(self, path: str = "positions.csv"):
        self.path = path
        # Logger privat per instance, tidak terdaftar di logging manager
        self._logger = logging.Logger(__name__, logging.INFO)
        self._logger.propagate = False
        self._handler: logging.FileHandler | None = None

    @property
    def is_open(self) -> bool:
        return self._handler is not None

    def open(self):
        """Buat / truncate file dan tulis header."""
        if self._handler is not None:
            return
        handler = logging.FileHandler(self.path, mode="w", encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(handler)
        self._handler = handler

        self._logger.info(HEADER)
        handler.setFormatter(MicrosecondFormatter("%(asctime)s %(message)s"))

    def log_pose(self, robot_id: int, x: float, y: float, theta: float,
                 timestamp: float | None = None):
        """Tambah satu baris pose.

        ``timestamp`` (epoch detik) menggantikan waktu record jika diberikan.
        """
        if self._handler is None:
            raise RuntimeError("PoseLogger is not open")
        message = "%d %s %s %s" % (robot_id, x, y, theta)
        if timestamp is None:
            self._logger.info(message)
            return
        record = self._logger.makeRecord(
            self._logger.name, logging.INFO, __file__, 0, message, None, None)
        record.created = timestamp
        self._logger.handle(record)

    def close(self):
        if self._handler is None:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    def __enter__(self) -> "PoseLogger":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
